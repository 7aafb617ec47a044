"""
================================================================================
Playwright Driver
================================================================================

Driver backend built on Playwright's synchronous API.

Native locators are turned into Playwright selectors:
    - {"xpath": ...} is used alone, every other key is ignored
    - {"css": ...} is used with an optional index
    - anything else becomes an XPath over the implied tag with one predicate
      per key, `index` selecting the n-th match

Frames are entered with frame_locator(), so the "current browsing context"
is the Page or the innermost FrameLocator.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple, Union

from loguru import logger
from playwright.sync_api import FrameLocator, Locator, Page

from .driver import Driver, NativeElement
from .errors import ElementNotFoundError
from .locator_resolver import NativeLocator, describe, equal_pair, xpath_string
from .scope_chain import ScopeDescriptor


# Tags that match more than one kind of markup
_TAG_EXPRESSIONS = {
    "button": (
        "*[self::button or self::input[@type='submit' or @type='button' "
        "or @type='image' or @type='reset']]"
    ),
    "svg": "*[local-name()='svg']",
}

# Key names sent with press() rather than typed character by character
NAMED_KEYS = frozenset({
    "Enter", "Tab", "Escape", "Backspace", "Delete", "Insert", "Home", "End",
    "PageUp", "PageDown", "ArrowLeft", "ArrowRight", "ArrowUp", "ArrowDown",
    "Shift", "Control", "Alt", "Meta", "F1", "F2", "F3", "F4", "F5", "F6",
    "F7", "F8", "F9", "F10", "F11", "F12",
})

_PLAIN_TAG = re.compile(r"^[A-Za-z][\w-]*$")

Context = Union[Page, FrameLocator, Locator]


def _any_of(values: Any, render) -> str:
    if isinstance(values, (list, tuple)):
        return "(" + " or ".join(render(v) for v in values) + ")"
    return render(values)


def _class_predicate(value: str) -> str:
    return f"contains(concat(' ', normalize-space(@class), ' '), {xpath_string(' ' + value + ' ')})"


def _type_predicate(values: Any) -> str:
    values = list(values) if isinstance(values, (list, tuple)) else [values]
    parts = [f"@type={xpath_string(v)}" for v in values]
    if "text" in values:
        parts.append("not(@type)")
    return "(" + " or ".join(parts) + ")"


def to_selector(locator: NativeLocator) -> Tuple[str, Optional[int]]:
    """
    Translate a native locator into a Playwright selector and an index.

    Examples:
        >>> to_selector({"xpath": "//a"})
        ('xpath=//a', None)
        >>> to_selector({"tag_name": "a", "id": "home", "index": 1})
        ("xpath=.//a[@id='home']", 1)
    """
    if "xpath" in locator:
        return f"xpath={locator['xpath']}", None

    index = locator.get("index")
    if "css" in locator:
        return f"css={locator['css']}", index

    tag = locator.get("tag_name") or "*"
    if not _PLAIN_TAG.match(tag) and tag != "*":
        return f"css={tag}", index

    predicates: List[str] = []
    for key, value in locator.items():
        if key in ("tag_name", "index"):
            continue
        if key == "class":
            predicates.append(_any_of(value, _class_predicate))
        elif key == "type":
            predicates.append(_type_predicate(value))
        elif key == "text" and tag == "button":
            predicates.append(_any_of(
                value,
                lambda v: f"(normalize-space()={xpath_string(v)} or @value={xpath_string(v)})",
            ))
        else:
            predicates.append(_any_of(value, lambda v, k=key: equal_pair(k, v)))

    xpath = ".//" + _TAG_EXPRESSIONS.get(tag.lower(), tag)
    xpath += "".join(f"[{p}]" for p in predicates)
    return f"xpath={xpath}", index


def _locate(context: Context, locator: NativeLocator) -> Locator:
    selector, index = to_selector(locator)
    found = context.locator(selector)
    return found.nth(index) if index is not None else found.first


def _locate_all(context: Context, locator: NativeLocator) -> List[Locator]:
    selector, _ = to_selector(locator)
    found = context.locator(selector)
    return [found.nth(i) for i in range(found.count())]


class PlaywrightElement(NativeElement):
    """
    NativeElement over a Playwright Locator.

    Locators are lazy, so an element can be created before it exists;
    operations that need the element raise ElementNotFoundError when it
    is still missing.
    """

    def __init__(self, locator: Locator, description: str = ""):
        self.locator = locator
        self._description = description or repr(locator)

    def __repr__(self) -> str:
        return f"<PlaywrightElement {self._description}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlaywrightElement):
            return NotImplemented
        if other is self:
            return True
        if not (self.exists() and other.exists()):
            return False
        return bool(self.locator.evaluate("(a, b) => a === b", other.locator.element_handle()))

    __hash__ = None

    def __getattr__(self, name: str) -> Any:
        # Locator methods outside the NativeElement surface (hover, drag_to, ...)
        if name == "locator":
            raise AttributeError(name)
        return getattr(self.locator, name)

    def _require(self) -> Locator:
        if self.locator.count() == 0:
            raise ElementNotFoundError(
                f"Unable to locate element: {self._description}"
            )
        return self.locator

    def exists(self) -> bool:
        return self.locator.count() > 0

    def text(self) -> str:
        return self._require().inner_text()

    def value(self) -> Optional[str]:
        value = self._require().evaluate(
            "el => ('value' in el) ? el.value : el.getAttribute('value')"
        )
        return None if value is None else str(value)

    def enabled(self) -> bool:
        return self._require().is_enabled()

    def visible(self) -> bool:
        return self.locator.is_visible()

    def tag_name(self) -> str:
        return self._require().evaluate("el => el.tagName.toLowerCase()")

    def attribute(self, name: str) -> Optional[str]:
        return self._require().get_attribute(name)

    def property(self, name: str) -> Any:
        return self._require().evaluate("(el, name) => el[name]", name)

    def style(self, name: str) -> str:
        return self._require().evaluate(
            "(el, name) => window.getComputedStyle(el).getPropertyValue(name)", name
        )

    def click(self) -> None:
        self._require().click()

    def double_click(self) -> None:
        self._require().dblclick()

    def right_click(self) -> None:
        self._require().click(button="right")

    def focus(self) -> None:
        self._require().focus()

    def clear(self) -> None:
        self._require().clear()

    def fill(self, value: str) -> None:
        self._require().fill(value)

    def send_keys(self, *keys: Any) -> None:
        locator = self._require()
        for key in keys:
            if isinstance(key, (list, tuple)):
                locator.press("+".join(key))
            elif key in NAMED_KEYS:
                locator.press(key)
            else:
                locator.press_sequentially(str(key))

    def fire_event(self, name: str) -> None:
        self._require().dispatch_event(name)

    def check(self) -> None:
        self._require().check()

    def uncheck(self) -> None:
        locator = self._require()
        if locator.get_attribute("type") == "radio":
            # radios cannot be unchecked by a click
            locator.evaluate(
                "el => { el.checked = false; "
                "el.dispatchEvent(new Event('change', {bubbles: true})); }"
            )
            return
        locator.uncheck()

    def is_checked(self) -> bool:
        return self._require().is_checked()

    def select_option(self, value: str) -> None:
        self._require().select_option(value=value)

    def set_input_files(self, path: str) -> None:
        self._require().set_input_files(path)

    def submit(self) -> None:
        self._require().evaluate("el => el.requestSubmit ? el.requestSubmit() : el.submit()")

    def parent(self) -> "PlaywrightElement":
        return PlaywrightElement(self._require().locator("xpath=.."), f"parent of {self._description}")

    def find_one(self, locator: NativeLocator) -> "PlaywrightElement":
        return PlaywrightElement(_locate(self.locator, locator), describe(locator))

    def find_all(self, locator: NativeLocator) -> List[NativeElement]:
        return [
            PlaywrightElement(found, f"{describe(locator)} #{i}")
            for i, found in enumerate(_locate_all(self.locator, locator))
        ]


class PlaywrightDriver(Driver):
    """
    Driver over a Playwright sync Page.

    Usage:
        driver = PlaywrightDriver(page)
        driver.navigate("https://example.com")
        element = driver.find_one({"tag_name": "a", "text": "More information..."})
    """

    def __init__(self, page: Page):
        self.page = page
        self._context: Context = page

    def find_one(self, locator: NativeLocator) -> PlaywrightElement:
        return PlaywrightElement(_locate(self._context, locator), describe(locator))

    def find_all(self, locator: NativeLocator) -> List[NativeElement]:
        return [
            PlaywrightElement(found, f"{describe(locator)} #{i}")
            for i, found in enumerate(_locate_all(self._context, locator))
        ]

    def switch_to_frame(self, descriptor: ScopeDescriptor) -> None:
        criteria = dict(descriptor.identifier)
        index = criteria.pop("index", None)
        criteria.setdefault("tag_name", descriptor.kind.value)
        selector, _ = to_selector(criteria)
        frame = self._context.frame_locator(selector)
        self._context = frame.nth(index) if index is not None else frame.first
        logger.debug(f"Switched into {descriptor.kind.value}: {selector} (index={index})")

    def switch_to_default(self) -> None:
        self._context = self.page

    def navigate(self, url: str) -> None:
        self.switch_to_default()
        self.page.goto(url)

    @property
    def title(self) -> str:
        return self.page.title()

    @property
    def current_url(self) -> str:
        return self.page.url

    def text(self) -> str:
        return self.page.inner_text("body")

    def html(self) -> str:
        return self.page.content()

    def refresh(self) -> None:
        self.page.reload()

    def back(self) -> None:
        self.page.go_back()

    def forward(self) -> None:
        self.page.go_forward()

    def execute_script(self, script: str, *args: Any) -> Any:
        if not args:
            return self.page.evaluate(script)
        return self.page.evaluate(script, args[0] if len(args) == 1 else list(args))


__all__ = [
    "PlaywrightDriver",
    "PlaywrightElement",
    "to_selector",
]
