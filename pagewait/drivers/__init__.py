"""
Drivers package
---------------
The capability interface the wait engine is written against, plus adapters
for Playwright and Selenium. Adapters are imported from their own modules
(pagewait.drivers.playwright_driver, pagewait.drivers.selenium_driver) so
only the driver you use gets loaded.
"""

from .interface import (
    AttributeRead,
    ElementHandle,
    Locator,
    LocatorStrategy,
    Ok,
    Point,
    SearchSurface,
    Session,
    Size,
    StaleHandle,
)

__all__ = [
    "AttributeRead",
    "ElementHandle",
    "Locator",
    "LocatorStrategy",
    "Ok",
    "Point",
    "SearchSurface",
    "Session",
    "Size",
    "StaleHandle",
]
