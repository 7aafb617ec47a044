"""
================================================================================
pagekit Framework
================================================================================

Declarative page objects over a browser driver.

Components:
    - identifiers: identifier vocabulary, element kinds, key translation
    - locator_resolver: native locators and structural XPath synthesis
    - scope_chain: frame / iframe scope chains
    - elements: element handles
    - accessors: class body declarations and their accessor bundles
    - page_base: base page object
    - session: Playwright browser session
    - playwright_driver: Playwright implementation of the driver boundary

Author: Automation Team
License: MIT
================================================================================
"""

from .accessors import *  # noqa: F401,F403
from .accessors import __all__ as _accessor_names
from .driver import Driver, NativeElement
from .elements import Element, element_class_for, handle_class_for
from .errors import (
    ElementNotFoundError,
    IdentifierError,
    NoSuchCapabilityError,
    PageKitError,
    TitleMismatchError,
    WaitTimeoutError,
)
from .identifiers import ElementKind, normalize_identifier, translate_key
from .locator_resolver import LocatorResolver
from .page_base import BasePage
from .playwright_driver import PlaywrightDriver
from .scope_chain import FrameKind, ScopeDescriptor, push_scope
from .session import Session
from .wait_helpers import wait_until, wait_while

__all__ = list(_accessor_names) + [
    "BasePage",
    "Session",
    "Driver",
    "NativeElement",
    "PlaywrightDriver",
    "Element",
    "element_class_for",
    "handle_class_for",
    "ElementKind",
    "normalize_identifier",
    "translate_key",
    "LocatorResolver",
    "FrameKind",
    "ScopeDescriptor",
    "push_scope",
    "wait_until",
    "wait_while",
    "PageKitError",
    "IdentifierError",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "TitleMismatchError",
    "NoSuchCapabilityError",
]
