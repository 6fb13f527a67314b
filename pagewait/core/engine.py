# pagewait/core/engine.py
from __future__ import annotations

"""Wait engine
-------------
Fixed-interval polling waits over three kinds of subject: an element handle
the caller already holds, a locator re-queried against a search surface on
every poll, and the session's current URL. Also samples element position and
size to detect when they start or stop changing.

Every wait blocks the calling thread. The deadline is checked after each
evaluation, measured from call entry, so a slow predicate can overshoot the
timeout by one evaluation.
"""

from typing import Any, Callable, List, Optional, TypeVar

from pagewait.core import conditions
from pagewait.core.errors import StaleHandleError, WaitTimeoutError
from pagewait.drivers.interface import ElementHandle, Locator, SearchSurface, Session
from pagewait.utils.config import WaitPolicy, get_settings
from pagewait.utils.logger import get_logger
from pagewait.utils.timing import Clock, Stopwatch

S = TypeVar("S")
T = TypeVar("T")
P = TypeVar("P")


def _satisfied(result: Any) -> bool:
    return result is not None and result is not False


class WaitUntil:
    """
    Polling waits bound to one session and one WaitPolicy.

    Omitted `timeout_ms` / `interval_ms` arguments are read from `self.policy`
    when the call starts, never cached, so changing the policy affects every
    later wait. All waits raise WaitTimeoutError when their deadline passes.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        *,
        policy: Optional[WaitPolicy] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.session = session
        self.policy = policy if policy is not None else WaitPolicy.from_settings(get_settings())
        self.clock = clock if clock is not None else Clock()
        self.log = get_logger(__name__)

    # ---------- Resolution helpers ----------

    def _timeout(self, timeout_ms: Optional[int]) -> int:
        return self.policy.default_timeout_ms if timeout_ms is None else timeout_ms

    def _interval(self, interval_ms: Optional[int]) -> int:
        return self.policy.polling_interval_ms if interval_ms is None else interval_ms

    def _surface(self, search_context: Optional[SearchSurface]) -> SearchSurface:
        surface = search_context if search_context is not None else self.session
        if surface is None:
            raise RuntimeError("No search context given and this WaitUntil has no session")
        return surface

    def _require_session(self) -> Session:
        if self.session is None:
            raise RuntimeError("URL waits need a WaitUntil bound to a session")
        return self.session

    # ---------- Polling loop ----------

    def _poll(
        self,
        probe: Callable[[], Optional[T]],
        *,
        timeout_ms: Optional[int],
        interval_ms: Optional[int],
        description: str,
        context: Optional[Any] = None,
    ) -> T:
        timeout = self._timeout(timeout_ms)
        interval = self._interval(interval_ms)
        sw = Stopwatch(self.clock).start()

        while True:
            result = probe()
            if _satisfied(result):
                self.log.debug(f"Wait satisfied after {sw.elapsed_ms()} ms")
                return result
            if sw.elapsed_ms() >= timeout:
                self.log.debug(f"Wait gave up after {sw.elapsed_ms()} ms: {description}")
                raise WaitTimeoutError(description, timeout, context)
            self.clock.sleep_ms(interval)

    def poll_until(
        self,
        subject: S,
        predicate: Callable[[S], Optional[T]],
        *,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
        description: str = "Condition was not satisfied",
    ) -> T:
        """
        Evaluate `predicate(subject)` right away and then every `interval_ms`
        until it returns something other than None or False; return that value.
        """
        return self._poll(
            lambda: predicate(subject),
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            description=description,
        )

    # ---------- Locator based (re-queried on every poll) ----------

    def element_exists(
        self,
        locator: Locator,
        *,
        search_context: Optional[SearchSurface] = None,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> ElementHandle:
        """Wait until `locator` matches something; return the first match."""
        surface = self._surface(search_context)

        def _probe() -> Optional[ElementHandle]:
            found = surface.find_elements(locator)
            return found[0] if found else None

        return self._poll(
            _probe,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            description="No element was found",
            context=str(locator),
        )

    def elements_exist(
        self,
        locator: Locator,
        *,
        search_context: Optional[SearchSurface] = None,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> List[ElementHandle]:
        """Wait until `locator` matches something; return every match of that poll."""
        surface = self._surface(search_context)

        def _probe() -> Optional[List[ElementHandle]]:
            return surface.find_elements(locator) or None

        return self._poll(
            _probe,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            description="No elements were found",
            context=str(locator),
        )

    def no_elements_exist(
        self,
        locator: Locator,
        *,
        search_context: Optional[SearchSurface] = None,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> None:
        """Wait until `locator` matches nothing."""
        surface = self._surface(search_context)
        self._poll(
            lambda: len(surface.find_elements(locator)) == 0,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            description="Elements still existed",
            context=str(locator),
        )

    element_does_not_exist = no_elements_exist

    def element_is_visible(
        self,
        locator: Locator,
        *,
        search_context: Optional[SearchSurface] = None,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> ElementHandle:
        """Wait until the first match of `locator` is displayed; return it."""
        surface = self._surface(search_context)

        def _probe() -> Optional[ElementHandle]:
            found = surface.find_elements(locator)
            if not found:
                return None
            try:
                return found[0] if found[0].is_displayed() else None
            except StaleHandleError:
                # replaced between the search and the read; the next poll searches again
                return None

        return self._poll(
            _probe,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            description="No visible element was found",
            context=str(locator),
        )

    # ---------- Single element ----------

    def element_satisfies(
        self,
        element: ElementHandle,
        predicate: Callable[[ElementHandle], bool],
        description: str,
        *,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> ElementHandle:
        return self._poll(
            lambda: element if predicate(element) else None,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            description=description,
        )

    def element_is_displayed(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.is_displayed,
            "Element was not displayed",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_is_not_displayed(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.is_not_displayed,
            "Element was still displayed",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_is_enabled(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.is_enabled,
            "Element was not enabled",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_is_disabled(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.is_disabled,
            "Element was still enabled",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_has_class(
        self,
        element: ElementHandle,
        class_name: str,
        *,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.has_class(class_name),
            f"Element did not have the class '{class_name}'",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_lacks_class(
        self,
        element: ElementHandle,
        class_name: str,
        *,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.lacks_class(class_name),
            f"Element still had the class '{class_name}'",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_css_value_equals(
        self,
        element: ElementHandle,
        property_name: str,
        expected: str,
        *,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.css_value_equals(property_name, expected),
            f"Element's '{property_name}' was not '{expected}'",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_is_stale(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.is_stale,
            "Element did not become stale",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    def element_has_size(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.element_satisfies(
            element,
            conditions.has_size,
            "Element still had no size",
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    # ---------- Change detection ----------

    def property_changes(
        self,
        subject: S,
        get_property: Callable[[S], P],
        change_predicate: Callable[[P, P], bool],
        *,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
        description: str = "Property did not change as expected",
    ) -> S:
        """
        Sample `get_property(subject)` every `interval_ms` (policy.change_interval_ms
        by default) and return the subject as soon as two consecutive samples
        satisfy `change_predicate(previous, current)`.

        Only one pair of samples is compared: with `unchanged` a single equal
        pair counts as "stopped", even if the property moves again later.
        """
        timeout = self._timeout(timeout_ms)
        interval = self.policy.change_interval_ms if interval_ms is None else interval_ms
        sw = Stopwatch(self.clock).start()

        previous = get_property(subject)
        while True:
            self.clock.sleep_ms(interval)
            current = get_property(subject)
            if change_predicate(previous, current):
                return subject
            if sw.elapsed_ms() >= timeout:
                self.log.debug(f"Change wait gave up after {sw.elapsed_ms()} ms: {previous!r} -> {current!r}")
                raise WaitTimeoutError(description, timeout, (previous, current))
            previous = current

    def element_starts_moving(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.property_changes(
            element, conditions.location_of, conditions.changed,
            timeout_ms=timeout_ms, interval_ms=interval_ms, description="Element did not start moving",
        )

    def element_stops_moving(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.property_changes(
            element, conditions.location_of, conditions.unchanged,
            timeout_ms=timeout_ms, interval_ms=interval_ms, description="Element did not stop moving",
        )

    def element_starts_resizing(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.property_changes(
            element, conditions.size_of, conditions.changed,
            timeout_ms=timeout_ms, interval_ms=interval_ms, description="Element did not start resizing",
        )

    def element_stops_resizing(
        self, element: ElementHandle, *, timeout_ms: Optional[int] = None, interval_ms: Optional[int] = None
    ) -> ElementHandle:
        return self.property_changes(
            element, conditions.size_of, conditions.unchanged,
            timeout_ms=timeout_ms, interval_ms=interval_ms, description="Element did not stop resizing",
        )

    # ---------- URL ----------

    def url_satisfies(
        self,
        predicate: Callable[[str], bool],
        *,
        timeout_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
        description: str = "URL did not satisfy the condition",
    ) -> str:
        """Wait until the current URL satisfies `predicate`; return that URL."""
        session = self._require_session()

        def _probe() -> Optional[str]:
            url = session.current_url
            return url if predicate(url) else None

        return self._poll(_probe, timeout_ms=timeout_ms, interval_ms=interval_ms, description=description)

    def url_is_not_empty(self, *, timeout_ms: Optional[int] = None) -> str:
        return self.url_satisfies(bool, timeout_ms=timeout_ms, description="URL was still empty")

    def url_equals(self, expected: str, *, timeout_ms: Optional[int] = None) -> str:
        return self.url_satisfies(
            lambda url: url == expected,
            timeout_ms=timeout_ms,
            description=f"URL was not '{expected}'",
        )

    def url_starts_with(self, prefix: str, *, timeout_ms: Optional[int] = None) -> str:
        return self.url_satisfies(
            lambda url: url.startswith(prefix),
            timeout_ms=timeout_ms,
            description=f"URL did not start with '{prefix}'",
        )
