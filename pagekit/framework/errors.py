"""
================================================================================
Error Taxonomy
================================================================================

Exceptions raised by the page object layer. None of them are retried here;
they propagate to the calling test step.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class PageKitError(Exception):
    """Base class for all pagekit failures."""
    pass


class IdentifierError(PageKitError, ValueError):
    """Raised at declaration time for an unusable identifier."""
    pass


class ElementNotFoundError(PageKitError):
    """Raised when an operation needs an element the driver could not find."""

    def __init__(self, message: str, locator: Optional[Any] = None):
        super().__init__(message)
        self.locator = locator


class WaitTimeoutError(PageKitError):
    """Raised when a wait operation times out."""

    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout


class TitleMismatchError(PageKitError, AssertionError):
    """Raised when the page title differs from the expected title."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected title '{expected}' instead of '{actual}'")
        self.expected = expected
        self.actual = actual


class NoSuchCapabilityError(PageKitError, AttributeError):
    """Raised when a forwarded call names a method the native element lacks."""

    def __init__(self, name: str, native: Any, call_site: str = ""):
        message = f"undefined method `{name}` for {native!r}:{type(native).__name__}"
        if call_site:
            message = f"{message} (called at {call_site})"
        super().__init__(message)
        self.name = name
        self.call_site = call_site


__all__ = [
    "PageKitError",
    "IdentifierError",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "TitleMismatchError",
    "NoSuchCapabilityError",
]
