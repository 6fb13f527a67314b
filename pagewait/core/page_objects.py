# pagewait/core/page_objects.py
from __future__ import annotations

"""Page-object base classes
--------------------------
DriverUser is the base for classes that automate one page or window through
a session; WebsiteWrapper is the root object of a whole automated site and
owns the session's lifetime.
"""

from typing import Optional, Union

from pagewait.core.engine import WaitUntil
from pagewait.drivers.interface import Session
from pagewait.utils.config import WaitPolicy
from pagewait.utils.logger import get_logger

log = get_logger(__name__)


class DriverUser:
    """
    Holds a session and the WaitUntil engine bound to it.

    Built from a session it creates its own engine (optionally with an explicit
    policy). Built from another DriverUser it shares that one's session and
    engine, so a page object tree keeps a single policy owner.
    """

    def __init__(self, source: Union[Session, "DriverUser"], *, policy: Optional[WaitPolicy] = None) -> None:
        if isinstance(source, DriverUser):
            self._driver = source._driver
            self._wait_until = source._wait_until
        else:
            self._driver = source
            self._wait_until = WaitUntil(source, policy=policy)

    @property
    def driver(self) -> Optional[Session]:
        return self._driver

    @property
    def wait_until(self) -> WaitUntil:
        return self._wait_until


class WebsiteWrapper(DriverUser):
    """
    Root page object of an automated website. Quits the session on close() or
    when leaving a `with` block; `driver` is None afterwards.
    """

    def __init__(self, session: Optional[Session], *, policy: Optional[WaitPolicy] = None) -> None:
        super().__init__(session, policy=policy)

    def close(self) -> None:
        """Quit the session if there is one; later calls do nothing."""
        driver, self._driver = self._driver, None
        if driver is not None:
            log.debug(f"Closing session of {type(self).__name__}")
            driver.quit()

    def __enter__(self) -> "WebsiteWrapper":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
