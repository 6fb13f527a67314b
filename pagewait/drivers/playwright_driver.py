# pagewait/drivers/playwright_driver.py
from __future__ import annotations

"""Playwright adapter
--------------------
Wraps a sync-API Page and its ElementHandles in the capability interface.
Playwright keeps handles alive after their node leaves the document, so
staleness is read from `isConnected`; driver errors that mean the node (or
its execution context) is gone are translated to StaleHandleError.
"""

from typing import Any, Callable, List, Optional, TypeVar

from playwright.sync_api import ElementHandle as PWElementHandle, Error as PlaywrightError, Page

from pagewait.core.errors import StaleHandleError
from pagewait.drivers.interface import (
    AttributeRead,
    Locator,
    LocatorStrategy,
    Ok,
    Point,
    Size,
    StaleHandle,
)
from pagewait.utils.logger import get_logger

log = get_logger(__name__)

T = TypeVar("T")

_STALE_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "execution context was destroyed",
    "cannot find context with specified id",
)


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def to_selector(locator: Locator) -> str:
    """
    Convert a Locator into a Playwright selector string.
    """
    strategy = locator.strategy
    value = locator.value

    if strategy == LocatorStrategy.css:
        return value
    if strategy == LocatorStrategy.xpath:
        return f"xpath={value}"
    if strategy == LocatorStrategy.id:
        return f'[id="{_quote(value)}"]'
    if strategy == LocatorStrategy.name:
        return f'[name="{_quote(value)}"]'
    if strategy == LocatorStrategy.tag_name:
        return value
    if strategy == LocatorStrategy.class_name:
        return f'[class~="{_quote(value)}"]'
    if strategy == LocatorStrategy.link_text:
        return f'a:text-is("{_quote(value)}")'

    log.debug(f"Unknown locator strategy '{strategy}', falling back to css for value={value!r}")
    return value


def _is_stale_error(exc: PlaywrightError) -> bool:
    msg = str(exc).lower()
    return any(marker in msg for marker in _STALE_MARKERS)


class PlaywrightElement:
    """ElementHandle capability backed by a Playwright ElementHandle."""

    def __init__(self, handle: PWElementHandle) -> None:
        self.handle = handle

    def __repr__(self) -> str:
        return f"PlaywrightElement({self.handle!r})"

    def _call(self, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except PlaywrightError as e:
            if _is_stale_error(e):
                raise StaleHandleError(str(e)) from e
            raise

    def _ensure_attached(self) -> None:
        if not self._call(lambda: self.handle.evaluate("e => e.isConnected")):
            raise StaleHandleError("Element is no longer attached to the DOM")

    def find_elements(self, locator: Locator) -> List[PlaywrightElement]:
        handles = self._call(lambda: self.handle.query_selector_all(to_selector(locator)))
        return [PlaywrightElement(h) for h in handles]

    @property
    def text(self) -> str:
        return self._call(self.handle.inner_text)

    def is_displayed(self) -> bool:
        # detached handles report invisible rather than failing
        visible = self._call(self.handle.is_visible)
        if not visible:
            self._ensure_attached()
        return visible

    def is_enabled(self) -> bool:
        enabled = self._call(self.handle.is_enabled)
        if not enabled:
            self._ensure_attached()
        return enabled

    def get_attribute(self, name: str) -> Optional[str]:
        self._ensure_attached()
        return self._call(lambda: self.handle.get_attribute(name))

    def read_attribute(self, name: str) -> AttributeRead:
        try:
            return Ok(self.get_attribute(name))
        except StaleHandleError:
            return StaleHandle()

    def value_of_css_property(self, name: str) -> str:
        self._ensure_attached()
        return self._call(
            lambda: self.handle.evaluate("(e, p) => getComputedStyle(e).getPropertyValue(p)", name)
        )

    def _box(self) -> dict:
        box = self._call(self.handle.bounding_box)
        if box is None:
            # None for both detached and hidden nodes; only hidden ones read as an empty box
            self._ensure_attached()
            return {"x": 0, "y": 0, "width": 0, "height": 0}
        return box

    @property
    def location(self) -> Point:
        box = self._box()
        return Point(int(box["x"]), int(box["y"]))

    @property
    def size(self) -> Size:
        box = self._box()
        return Size(int(box["width"]), int(box["height"]))


class PlaywrightSession:
    """
    Session capability backed by a Playwright Page.

    `on_quit` runs after the page's browser is closed; open_session uses it to
    stop the Playwright driver process.
    """

    def __init__(self, page: Page, *, on_quit: Optional[Callable[[], Any]] = None) -> None:
        self.page = page
        self._on_quit = on_quit

    def find_elements(self, locator: Locator) -> List[PlaywrightElement]:
        return [PlaywrightElement(h) for h in self.page.query_selector_all(to_selector(locator))]

    @property
    def current_url(self) -> str:
        return self.page.url

    def get(self, url: str) -> None:
        self.page.goto(url)

    def quit(self) -> None:
        browser = self.page.context.browser
        try:
            if browser is not None:
                browser.close()
            else:
                self.page.context.close()
        finally:
            if self._on_quit is not None:
                self._on_quit()
