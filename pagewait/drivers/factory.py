# pagewait/drivers/factory.py
from __future__ import annotations

"""Session factory
-----------------
Launches a browser for the configured engine and returns it wrapped as a
Session. The caller owns the session and must quit() it.
"""

from typing import Optional

from pagewait.drivers.interface import Session
from pagewait.utils.config import BrowserEngine, BrowserType, Settings, get_settings
from pagewait.utils.logger import get_logger
from pagewait.utils.timing import measure

log = get_logger(__name__)


def _open_playwright(s: Settings) -> Session:
    from playwright.sync_api import sync_playwright

    from pagewait.drivers.playwright_driver import PlaywrightSession

    pw = sync_playwright().start()
    try:
        launcher = getattr(pw, s.BROWSER_TYPE.value)
        browser = launcher.launch(**s.playwright_launch_kwargs())
        page = browser.new_page()
        page.set_default_navigation_timeout(s.PAGE_LOAD_TIMEOUT)
    except Exception:
        pw.stop()
        raise
    return PlaywrightSession(page, on_quit=pw.stop)


def _open_selenium(s: Settings) -> Session:
    from selenium import webdriver

    from pagewait.drivers.selenium_driver import SeleniumSession

    if s.BROWSER_TYPE == BrowserType.chromium:
        options = webdriver.ChromeOptions()
        if s.HEADLESS:
            options.add_argument("--headless=new")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        driver = webdriver.Chrome(options=options)
    elif s.BROWSER_TYPE == BrowserType.firefox:
        options = webdriver.FirefoxOptions()
        if s.HEADLESS:
            options.add_argument("-headless")
        driver = webdriver.Firefox(options=options)
    else:
        raise ValueError(f"Selenium engine does not support browser type '{s.BROWSER_TYPE.value}'")

    driver.set_page_load_timeout(s.PAGE_LOAD_TIMEOUT / 1000)
    return SeleniumSession(driver)


@measure("open_session", level="DEBUG")
def open_session(settings: Optional[Settings] = None, engine: Optional[BrowserEngine | str] = None) -> Session:
    """
    Start a browser and return its Session.

    Args:
        settings: defaults to the process settings
        engine: overrides BROWSER_ENGINE ('playwright' or 'selenium')
    """
    s = settings or get_settings()
    chosen = BrowserEngine(engine) if engine is not None else s.BROWSER_ENGINE
    log.debug(f"Opening {chosen.value} session ({s.BROWSER_TYPE.value}, headless={s.HEADLESS})")
    if chosen == BrowserEngine.selenium:
        return _open_selenium(s)
    return _open_playwright(s)
