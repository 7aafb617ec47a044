"""
In-memory stand-ins for the driver boundary used by the unit suites.

FakeDriver answers lookups from locators registered up front and records
every call (frame switches, lookups, navigation) in `calls`, so tests can
assert both what was looked up and in which browsing context.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pagekit.framework.driver import Driver, NativeElement


class FakeElement(NativeElement):
    """A native element with settable state and registered children."""

    def __init__(
        self,
        tag: str = "div",
        text: str = "",
        value: Optional[str] = None,
        attributes: Optional[Dict[str, str]] = None,
        visible: bool = True,
        enabled: bool = True,
        checked: bool = False,
        selected: bool = False,
    ):
        self.tag = tag
        self._text = text
        self._value = value
        self.attributes = dict(attributes or {})
        self.is_visible = visible
        self.is_enabled = enabled
        self.checked = checked
        self.selected = selected
        self.parent_element: Optional["FakeElement"] = None
        self.children: List[Tuple[Dict[str, Any], "FakeElement"]] = []
        self.actions: List[Tuple[Any, ...]] = []

    def __repr__(self) -> str:
        return f"<FakeElement {self.tag}>"

    def add_children(self, locator: Dict[str, Any], *elements: "FakeElement") -> "FakeElement":
        for element in elements:
            element.parent_element = self
            self.children.append((dict(locator), element))
        return self

    def hover(self) -> str:
        """Not part of the handle surface; reached through invoke()."""
        self.actions.append(("hover",))
        return "hovered"

    def exists(self) -> bool:
        return True

    def text(self) -> str:
        return self._text

    def value(self) -> Optional[str]:
        return self._value

    def enabled(self) -> bool:
        return self.is_enabled

    def visible(self) -> bool:
        return self.is_visible

    def tag_name(self) -> str:
        return self.tag

    def attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def property(self, name: str) -> Any:
        if name == "selected":
            return self.selected
        return self.attributes.get(name)

    def style(self, name: str) -> str:
        return self.attributes.get(f"style:{name}", "")

    def click(self) -> None:
        self.actions.append(("click",))

    def double_click(self) -> None:
        self.actions.append(("double_click",))

    def right_click(self) -> None:
        self.actions.append(("right_click",))

    def focus(self) -> None:
        self.actions.append(("focus",))

    def clear(self) -> None:
        self._value = ""

    def fill(self, value: str) -> None:
        self._value = value

    def send_keys(self, *keys: Any) -> None:
        self.actions.append(("send_keys",) + keys)
        self._value = (self._value or "") + "".join(k for k in keys if isinstance(k, str))

    def fire_event(self, name: str) -> None:
        self.actions.append(("fire_event", name))

    def check(self) -> None:
        self.checked = True

    def uncheck(self) -> None:
        self.checked = False

    def is_checked(self) -> bool:
        return self.checked

    def select_option(self, value: str) -> None:
        self.actions.append(("select_option", value))
        for _, option in self.children:
            if option.tag == "option":
                option.selected = option.value() == value

    def set_input_files(self, path: str) -> None:
        self._value = path

    def submit(self) -> None:
        self.actions.append(("submit",))

    def parent(self) -> "FakeElement":
        return self.parent_element

    def find_one(self, locator: Dict[str, Any]) -> Optional["FakeElement"]:
        found = self.find_all(locator)
        return found[0] if found else None

    def find_all(self, locator: Dict[str, Any]) -> List["FakeElement"]:
        return [element for registered, element in self.children if registered == locator]


class FakeDriver(Driver):
    """Driver answering lookups from registered locators."""

    def __init__(self, title: str = "", url: str = "about:blank"):
        self.page_title = title
        self.url = url
        self.registry: List[Tuple[Dict[str, Any], FakeElement]] = []
        self.calls: List[Tuple[Any, ...]] = []

    def register(self, locator: Dict[str, Any], *elements: FakeElement) -> "FakeDriver":
        for element in elements:
            self.registry.append((dict(locator), element))
        return self

    def lookups(self) -> List[Dict[str, Any]]:
        return [call[1] for call in self.calls if call[0] in ("find_one", "find_all")]

    def find_one(self, locator: Dict[str, Any]) -> Optional[FakeElement]:
        self.calls.append(("find_one", dict(locator)))
        for registered, element in self.registry:
            if registered == locator:
                return element
        return None

    def find_all(self, locator: Dict[str, Any]) -> List[FakeElement]:
        self.calls.append(("find_all", dict(locator)))
        return [element for registered, element in self.registry if registered == locator]

    def switch_to_frame(self, descriptor: Any) -> None:
        self.calls.append(("switch_to_frame", descriptor))

    def switch_to_default(self) -> None:
        self.calls.append(("switch_to_default",))

    def navigate(self, url: str) -> None:
        self.calls.append(("navigate", url))
        self.url = url

    @property
    def title(self) -> str:
        return self.page_title

    @property
    def current_url(self) -> str:
        return self.url

    def text(self) -> str:
        return "page text"

    def html(self) -> str:
        return "<html></html>"

    def refresh(self) -> None:
        self.calls.append(("refresh",))

    def back(self) -> None:
        self.calls.append(("back",))

    def forward(self) -> None:
        self.calls.append(("forward",))

    def execute_script(self, script: str, *args: Any) -> Any:
        self.calls.append(("execute_script", script) + args)
        return args[0] if args else None
