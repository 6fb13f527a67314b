"""
pagewait
--------
Polling waits, search helpers and page-object base classes for browser
automation on top of Playwright or Selenium.
"""

__version__ = "1.0.0"

from .core.engine import WaitUntil
from .core.errors import MultipleElementsError, NoSuchElementError, StaleHandleError, WaitTimeoutError
from .core.page_objects import DriverUser, WebsiteWrapper
from .core.search import SearchInformation
from .drivers.factory import open_session
from .drivers.interface import Locator
from .utils.config import WaitPolicy

__all__ = [
    "WaitUntil",
    "WaitPolicy",
    "Locator",
    "SearchInformation",
    "DriverUser",
    "WebsiteWrapper",
    "open_session",
    "WaitTimeoutError",
    "StaleHandleError",
    "NoSuchElementError",
    "MultipleElementsError",
]
