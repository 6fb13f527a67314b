# pagewait/drivers/selenium_driver.py
from __future__ import annotations

"""Selenium adapter
------------------
Wraps a WebDriver and its WebElements in the capability interface and turns
StaleElementReferenceException into StaleHandleError (or a StaleHandle value
for read_attribute).
"""

from typing import Callable, List, Optional, Tuple, TypeVar

from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

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

T = TypeVar("T")

_BY = {
    LocatorStrategy.css: By.CSS_SELECTOR,
    LocatorStrategy.xpath: By.XPATH,
    LocatorStrategy.id: By.ID,
    LocatorStrategy.name: By.NAME,
    LocatorStrategy.tag_name: By.TAG_NAME,
    LocatorStrategy.class_name: By.CLASS_NAME,
    LocatorStrategy.link_text: By.LINK_TEXT,
}


def to_by(locator: Locator) -> Tuple[str, str]:
    """Convert a Locator into a Selenium (by, value) pair."""
    return _BY[locator.strategy], locator.value


def _call(fn: Callable[[], T]) -> T:
    try:
        return fn()
    except StaleElementReferenceException as e:
        raise StaleHandleError(e.msg or "stale element reference") from e


class SeleniumElement:
    """ElementHandle capability backed by a Selenium WebElement."""

    def __init__(self, element: WebElement) -> None:
        self.element = element

    def __repr__(self) -> str:
        return f"SeleniumElement({self.element!r})"

    def find_elements(self, locator: Locator) -> List[SeleniumElement]:
        found = _call(lambda: self.element.find_elements(*to_by(locator)))
        return [SeleniumElement(e) for e in found]

    @property
    def text(self) -> str:
        return _call(lambda: self.element.text)

    def is_displayed(self) -> bool:
        return _call(self.element.is_displayed)

    def is_enabled(self) -> bool:
        return _call(self.element.is_enabled)

    def get_attribute(self, name: str) -> Optional[str]:
        return _call(lambda: self.element.get_attribute(name))

    def read_attribute(self, name: str) -> AttributeRead:
        try:
            return Ok(self.element.get_attribute(name))
        except StaleElementReferenceException:
            return StaleHandle()

    def value_of_css_property(self, name: str) -> str:
        return _call(lambda: self.element.value_of_css_property(name))

    @property
    def location(self) -> Point:
        loc = _call(lambda: self.element.location)
        return Point(int(loc["x"]), int(loc["y"]))

    @property
    def size(self) -> Size:
        size = _call(lambda: self.element.size)
        return Size(int(size["width"]), int(size["height"]))


class SeleniumSession:
    """Session capability backed by a Selenium WebDriver."""

    def __init__(self, driver: WebDriver) -> None:
        self.driver = driver

    def find_elements(self, locator: Locator) -> List[SeleniumElement]:
        return [SeleniumElement(e) for e in self.driver.find_elements(*to_by(locator))]

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def get(self, url: str) -> None:
        self.driver.get(url)

    def get_frame_element(self) -> Optional[SeleniumElement]:
        """The <iframe> element the driver is switched into, or None at the top level."""
        frame = self.driver.execute_script("return window.frameElement")
        return SeleniumElement(frame) if frame is not None else None

    def quit(self) -> None:
        self.driver.quit()
