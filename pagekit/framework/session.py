"""
================================================================================
Browser Session
================================================================================

One browser session per test process.

Session owns the Playwright lifecycle (playwright, browser, context, page)
and exposes it to page objects as a Driver. Tests either manage a session
explicitly:

    with Session() as session:
        page = SearchPage(session, visit=True)

or share the process-wide one, created on first access and closed once:

    page = SearchPage(Session.shared())
    ...
    Session.teardown()

Browsing context (the frame a lookup runs in) is session state, so a
session must not be driven from two threads at once.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from pagekit.common import ConfigLoader

from .driver import Driver
from .playwright_driver import PlaywrightDriver


class Session:
    """
    Playwright backed browser session.

    Settings come from configuration unless passed in:
        browser.type      chromium | firefox | webkit
        browser.headless  bool
        timeouts.page_load  default Playwright timeout in milliseconds
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "args": ["--ignore-certificate-errors"],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    _shared: Optional["Session"] = None

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Args:
            browser_type: Browser to use (config `browser.type`)
            headless: Run without a window (config `browser.headless`)
            config: Configuration to read defaults from
        """
        config = config or ConfigLoader()
        self.browser_type = browser_type or config.get("browser.type", "chromium")
        self.headless = headless if headless is not None else config.get("browser.headless", True)
        self.page_load_timeout = config.get("timeouts.page_load", 30000)

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self._driver: Optional[PlaywrightDriver] = None

    def __enter__(self) -> "Session":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def started(self) -> bool:
        return self._driver is not None

    def start(self) -> "Session":
        """Start Playwright, launch the browser and open one page."""
        if self.started:
            return self

        self._playwright = sync_playwright().start()

        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            if self.browser_type != "chromium":
                logger.warning(f"Unknown browser type '{self.browser_type}', using chromium")
            browser_launcher = self._playwright.chromium

        launch_options = {**self.DEFAULT_LAUNCH_OPTIONS, "headless": self.headless}
        self._browser = browser_launcher.launch(**launch_options)
        self._context = self._browser.new_context(**self.DEFAULT_CONTEXT_OPTIONS)
        self.page = self._context.new_page()
        self.page.set_default_timeout(self.page_load_timeout)
        self._driver = PlaywrightDriver(self.page)

        logger.info(f"Browser session started: {self.browser_type} (headless={self.headless})")
        return self

    @property
    def driver(self) -> Driver:
        """Driver over the session page; starts the session if needed."""
        if not self.started:
            self.start()
        return self._driver

    def close(self) -> None:
        """
        Close the context, the browser and Playwright.

        Every resource is released even when closing an earlier one fails;
        that failure is raised afterwards.
        """
        if self._context is not None:
            try:
                self._context.close()
            except Exception as e:
                logger.warning(f"Failed to close browser context: {e}")
            self._context = None

        try:
            if self._browser is not None:
                browser, self._browser = self._browser, None
                browser.close()
        finally:
            try:
                if self._playwright is not None:
                    playwright, self._playwright = self._playwright, None
                    playwright.stop()
            finally:
                self.page = None
                self._driver = None
                logger.info("Browser session closed")

    @classmethod
    def shared(cls) -> "Session":
        """The process-wide session, created and started on first access."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared.start()

    @classmethod
    def teardown(cls) -> None:
        """Close the process-wide session, if one was created."""
        if cls._shared is not None:
            session, cls._shared = cls._shared, None
            session.close()


__all__ = ["Session"]
