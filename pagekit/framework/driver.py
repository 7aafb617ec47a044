"""
================================================================================
Driver Boundary
================================================================================

What pagekit needs from a browser automation backend.

Driver is the page level capability (lookup, frame switching, navigation);
NativeElement is one element the driver found. Element handles only ever
talk to these two interfaces, so any backend can be plugged in. The bundled
backend is playwright_driver.PlaywrightDriver.

Browsing context is session state: switch_to_frame() changes where the next
lookup happens, so a switch is always immediately followed by the lookup
that needs it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .locator_resolver import NativeLocator
from .scope_chain import ScopeDescriptor


class NativeElement(ABC):
    """One element located by a driver."""

    @abstractmethod
    def exists(self) -> bool: ...

    @abstractmethod
    def text(self) -> str: ...

    @abstractmethod
    def value(self) -> Optional[str]: ...

    @abstractmethod
    def enabled(self) -> bool: ...

    @abstractmethod
    def visible(self) -> bool: ...

    @abstractmethod
    def tag_name(self) -> str: ...

    @abstractmethod
    def attribute(self, name: str) -> Optional[str]: ...

    @abstractmethod
    def property(self, name: str) -> Any:
        """Read a DOM property (selected, naturalWidth, ...)."""

    @abstractmethod
    def style(self, name: str) -> str: ...

    @abstractmethod
    def click(self) -> None: ...

    @abstractmethod
    def double_click(self) -> None: ...

    @abstractmethod
    def right_click(self) -> None: ...

    @abstractmethod
    def focus(self) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def fill(self, value: str) -> None:
        """Replace the element's value."""

    @abstractmethod
    def send_keys(self, *keys: Any) -> None: ...

    @abstractmethod
    def fire_event(self, name: str) -> None: ...

    @abstractmethod
    def check(self) -> None: ...

    @abstractmethod
    def uncheck(self) -> None: ...

    @abstractmethod
    def is_checked(self) -> bool: ...

    @abstractmethod
    def select_option(self, value: str) -> None:
        """Select the option of a select element whose value is `value`."""

    @abstractmethod
    def set_input_files(self, path: str) -> None: ...

    @abstractmethod
    def submit(self) -> None: ...

    @abstractmethod
    def parent(self) -> "NativeElement": ...

    @abstractmethod
    def find_one(self, locator: NativeLocator) -> Optional["NativeElement"]:
        """Look up a descendant of this element."""

    @abstractmethod
    def find_all(self, locator: NativeLocator) -> List["NativeElement"]: ...


class Driver(ABC):
    """Page level backend used by page objects and element lookups."""

    @abstractmethod
    def find_one(self, locator: NativeLocator) -> Optional[NativeElement]:
        """
        Look up one element in the current browsing context.

        Returns None, or an element whose exists() is False, when nothing
        matches.
        """

    @abstractmethod
    def find_all(self, locator: NativeLocator) -> List[NativeElement]:
        """All matches in document order."""

    @abstractmethod
    def switch_to_frame(self, descriptor: ScopeDescriptor) -> None:
        """Enter a frame found inside the current browsing context."""

    @abstractmethod
    def switch_to_default(self) -> None:
        """Return to the top level document."""

    @abstractmethod
    def navigate(self, url: str) -> None: ...

    @property
    @abstractmethod
    def title(self) -> str: ...

    @property
    @abstractmethod
    def current_url(self) -> str: ...

    @abstractmethod
    def text(self) -> str:
        """Visible text of the whole document."""

    @abstractmethod
    def html(self) -> str: ...

    @abstractmethod
    def refresh(self) -> None: ...

    @abstractmethod
    def back(self) -> None: ...

    @abstractmethod
    def forward(self) -> None: ...

    @abstractmethod
    def execute_script(self, script: str, *args: Any) -> Any: ...

    def quit(self) -> None:
        """Release backend resources; the session owns the browser itself."""


__all__ = [
    "Driver",
    "NativeElement",
]
