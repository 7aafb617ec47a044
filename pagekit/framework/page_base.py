"""
================================================================================
Base Page Object
================================================================================

Foundation class for page objects.

Provides:
    - Element declarations (see accessors.py) collected per page class
    - Navigation with literal or templated page URLs
    - Title and expected element checks
    - Runtime element lookups, including through frames
    - Wait utilities

Usage:
    class SearchPage(BasePage):
        EXPECTED_TITLE = "Search"
        EXPECTED_ELEMENT = "query"

        def search_url(self):
            return "/search?q={term}"

        PAGE_URL = search_url

        query = text_field(name="q")
        go = button(text="Search")
        results = divs(class_="result")

    page = SearchPage(Session.shared(), visit=True, params={"term": "python"})
    page.query.set("pagekit")
    page.go.click()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import urlparse

import allure
from loguru import logger

from pagekit.common import get_config

from . import scope_chain
from .accessors import ElementDeclaration, collect_declarations
from .driver import Driver
from .elements import Element, handle_class_for
from .errors import PageKitError, TitleMismatchError, WaitTimeoutError
from .identifiers import FRAME_KEY, kind_of, normalize_identifier
from .locator_resolver import LocatorResolver
from .scope_chain import ScopeChain
from .session import Session
from .wait_helpers import wait_until


class BasePage:
    """
    Base class for all page objects.

    Class attributes to override:
        PAGE_URL: Literal URL, or a method of the page returning a template
            that is filled from the page's params
        EXPECTED_TITLE: Title string or compiled pattern
        EXPECTED_ELEMENT: Name of the declared element that proves the page
            has loaded
    """

    PAGE_URL: Union[str, Callable[..., str], None] = None
    EXPECTED_TITLE: Union[str, re.Pattern, None] = None
    EXPECTED_ELEMENT: Optional[str] = None

    declarations: Dict[str, ElementDeclaration] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.declarations = collect_declarations(cls)

    def __init__(
        self,
        driver: Union[Driver, Session],
        visit: bool = False,
        params: Optional[Dict[str, Any]] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize page object.

        Args:
            driver: Driver, or a Session whose driver is used
            visit: Navigate to the page URL right away
            params: Values for a templated page URL
            base_url: Prefix for relative URLs (config `app.base_url`)
        """
        if isinstance(driver, Session):
            driver = driver.driver
        self.driver = driver
        self.params: Dict[str, Any] = dict(params or {})
        if base_url is None:
            base_url = get_config("app.base_url", "")
        self.base_url = (base_url or "").rstrip("/")
        self.resolver = LocatorResolver()

        if visit:
            self.goto()

    # =========================================================================
    # Navigation
    # =========================================================================

    def _absolute(self, url: str) -> str:
        if urlparse(url).scheme or not self.base_url:
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    @property
    def page_url(self) -> Optional[str]:
        """
        Absolute URL of this page, None when the page has no PAGE_URL.

        A PAGE_URL method's result is a template: `{name}` fields are filled
        from params. A literal PAGE_URL is used as written.
        """
        url = self.PAGE_URL
        if url is None:
            return None
        if callable(url):
            template = str(url())
            try:
                url = template.format_map(self.params)
            except KeyError as e:
                raise PageKitError(
                    f"Page URL '{template}' needs parameter {e} which was not given"
                ) from e
        return self._absolute(url)

    def goto(self) -> None:
        """Navigate to this page's URL."""
        url = self.page_url
        if url is None:
            raise PageKitError(f"{type(self).__name__} has no PAGE_URL to navigate to")
        self.navigate_to(url)

    def navigate_to(self, url: str) -> None:
        """
        Navigate to a URL.

        Args:
            url: Absolute URL or path relative to base_url
        """
        full_url = self._absolute(url)
        with allure.step(f"Navigate to {full_url}"):
            self.driver.navigate(full_url)
            logger.info(f"Navigated to: {full_url}")

    @property
    def title(self) -> str:
        return self.driver.title

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def text(self) -> str:
        """Visible text of the whole page."""
        return self.driver.text()

    def html(self) -> str:
        return self.driver.html()

    def refresh(self) -> None:
        self.driver.refresh()

    def back(self) -> None:
        self.driver.back()

    def forward(self) -> None:
        self.driver.forward()

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.driver.execute_script(script, *args)

    # =========================================================================
    # Page checks
    # =========================================================================

    def _title_matches(self, title: str) -> bool:
        expected = self.EXPECTED_TITLE
        if isinstance(expected, re.Pattern):
            return expected.search(title) is not None
        return title == expected

    def _expected_title_text(self) -> str:
        expected = self.EXPECTED_TITLE
        return expected.pattern if isinstance(expected, re.Pattern) else str(expected)

    def has_expected_title(self) -> bool:
        """
        Check the current title against EXPECTED_TITLE.

        Raises:
            TitleMismatchError: If the titles differ
        """
        if self.EXPECTED_TITLE is None:
            raise PageKitError(f"{type(self).__name__} has no EXPECTED_TITLE")
        actual = self.title
        if not self._title_matches(actual):
            raise TitleMismatchError(self._expected_title_text(), actual)
        return True

    def wait_for_expected_title(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the title matches EXPECTED_TITLE.

        Raises:
            WaitTimeoutError: Naming expected and last seen title
        """
        if self.EXPECTED_TITLE is None:
            raise PageKitError(f"{type(self).__name__} has no EXPECTED_TITLE")
        try:
            return wait_until(lambda: self._title_matches(self.title), timeout)
        except WaitTimeoutError as e:
            raise WaitTimeoutError(
                f"Expected title '{self._expected_title_text()}' instead of '{self.title}'",
                timeout=e.timeout,
            ) from e

    def has_expected_element(self, timeout: Optional[float] = None) -> bool:
        """
        True when the EXPECTED_ELEMENT shows up within the timeout.

        For a collection or radio group, one existing member is enough.
        """
        if self.EXPECTED_ELEMENT is None:
            raise PageKitError(f"{type(self).__name__} has no EXPECTED_ELEMENT")
        if self.EXPECTED_ELEMENT not in self.declarations:
            raise PageKitError(
                f"EXPECTED_ELEMENT '{self.EXPECTED_ELEMENT}' is not declared on {type(self).__name__}"
            )
        # Each poll runs the declaration's lookup again
        accessor = getattr(self, self.EXPECTED_ELEMENT)
        try:
            wait_until(accessor.exists, timeout, f"Expected element '{self.EXPECTED_ELEMENT}' not present")
        except WaitTimeoutError:
            return False
        return True

    def wait_until(
        self,
        predicate: Callable[[], Any],
        timeout: Optional[float] = None,
        message: Optional[str] = None,
    ) -> Any:
        return wait_until(predicate, timeout, message)

    # =========================================================================
    # Runtime lookups
    # =========================================================================

    def _enter(self, chain: ScopeChain) -> None:
        # Outermost frame first; the lookup follows immediately
        self.driver.switch_to_default()
        for descriptor in chain:
            self.driver.switch_to_frame(descriptor)

    def find(self, kind: Any, identifier: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Element:
        """
        Look up one element of `kind`.

        The identifier may carry a `frame` scope chain built with in_frame()
        or in_iframe(); the frames are entered before the lookup.

        Example:
            page.find("text_field", name="senderElement", frame=chain).set("hi")
        """
        kind = kind_of(kind)
        identifier = normalize_identifier(identifier, **kwargs)
        chain = identifier.pop(FRAME_KEY, None) or []
        locator = self.resolver.locator_for(kind, identifier)

        def lookup() -> Any:
            self._enter(chain)
            return self.driver.find_one(locator)

        return handle_class_for(kind)(lookup(), locator, lookup)

    def find_all(self, kind: Any, identifier: Optional[Dict[str, Any]] = None, **kwargs: Any) -> List[Element]:
        """All elements of `kind` matching the identifier, in document order."""
        kind = kind_of(kind)
        identifier = normalize_identifier(identifier, **kwargs)
        chain = identifier.pop(FRAME_KEY, None) or []
        locator = self.resolver.locator_for(kind, identifier)
        self._enter(chain)
        cls = handle_class_for(kind)
        return [cls(native, locator) for native in self.driver.find_all(locator)]

    def in_frame(
        self,
        identifier: Dict[str, Any],
        block: Callable[[ScopeChain], Any],
        frame: Optional[ScopeChain] = None,
    ) -> Any:
        """Run `block` with the scope chain of a frame (nested under `frame`)."""
        return scope_chain.in_frame(identifier, block, frame)

    def in_iframe(
        self,
        identifier: Dict[str, Any],
        block: Callable[[ScopeChain], Any],
        frame: Optional[ScopeChain] = None,
    ) -> Any:
        return scope_chain.in_iframe(identifier, block, frame)


__all__ = ["BasePage"]
