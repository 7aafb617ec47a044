"""
================================================================================
Element Handles
================================================================================

Typed wrappers around one located native element.

Every handle exposes the same capability surface (text, value, click,
attribute, visibility, waits, parent lookup, keystrokes); the kind specific
classes add what only makes sense for them (set() on text fields, check() on
checkboxes, rows of a table...).

A handle built for an element that was not found yet keeps the lookup that
produced it. exist(), the waits and every other operation run that lookup
again until the element shows up; once found, the native element is kept.
An operation on an element that is still missing raises
ElementNotFoundError, exist() answers False.

Usage:
    handle = page.find("link", text="Home")
    handle.when_visible(timeout=3).click()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, Iterator, List, Optional, Type

import allure
from loguru import logger

from .driver import NativeElement
from .errors import ElementNotFoundError, NoSuchCapabilityError
from .identifiers import ElementKind, kind_of, normalize_identifier
from .locator_resolver import LocatorResolver, NativeLocator, describe
from .wait_helpers import WaitConfig, wait_until, wait_while


# Child queries used by container handles
ROW_QUERY = {"xpath": "./tr | ./thead/tr | ./tbody/tr | ./tfoot/tr"}
CELL_QUERY = {"xpath": "./td | ./th"}
ITEM_QUERY = {"xpath": "./li"}
OPTION_QUERY = {"tag_name": "option"}


def _timeout(timeout: Optional[float]) -> float:
    return WaitConfig.from_config(timeout).timeout


class Element:
    """
    Handle over one native element.

    Attributes:
        native: The element the driver returned (None when nothing matched)
        locator: Native locator the element was looked up with, for messages
        relocate: Repeats the lookup while native is None
    """

    KIND: Optional[ElementKind] = ElementKind.ELEMENT

    def __init__(
        self,
        native: Optional[NativeElement],
        locator: Optional[NativeLocator] = None,
        relocate: Optional[Callable[[], Optional[NativeElement]]] = None,
    ):
        self.native = native
        self.locator = locator
        self.relocate = relocate

    def __repr__(self) -> str:
        where = describe(self.locator) if self.locator else repr(self.native)
        return f"<{type(self).__name__} {where}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.native is not None and self.native == other.native

    __hash__ = None

    def _locate(self) -> Optional[NativeElement]:
        if self.native is None and self.relocate is not None:
            self.native = self.relocate()
            if self.native is not None:
                logger.debug(f"Located {self} on a later lookup")
        return self.native

    def _require(self) -> NativeElement:
        if self._locate() is None:
            kind = self.KIND.value if self.KIND else type(self).__name__
            where = describe(self.locator) if self.locator else "no locator"
            raise ElementNotFoundError(
                f"Unable to locate {kind} using {where}", locator=self.locator
            )
        return self.native

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def exist(self) -> bool:
        native = self._locate()
        return native is not None and native.exists()

    def text(self) -> str:
        return self._require().text()

    def value(self) -> Optional[str]:
        return self._require().value()

    def enabled(self) -> bool:
        return self._require().enabled()

    def disabled(self) -> bool:
        return not self.enabled()

    def visible(self) -> bool:
        return self._require().visible()

    def tag_name(self) -> str:
        return self._require().tag_name()

    def attribute(self, name: str) -> Optional[str]:
        return self._require().attribute(name)

    def style(self, name: str) -> str:
        return self._require().style(name)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @allure.step("Click {0}")
    def click(self) -> None:
        logger.debug(f"Clicking {self}")
        self._require().click()

    @allure.step("Double click {0}")
    def double_click(self) -> None:
        self._require().double_click()

    @allure.step("Right click {0}")
    def right_click(self) -> None:
        self._require().right_click()

    def send_keys(self, *keys: Any) -> None:
        """
        Send keystrokes to this element.

        Examples:
            handle.send_keys("foo")                    # types foo
            handle.send_keys("tet", "ArrowLeft", "s")  # value: test
            handle.send_keys(("Control", "a"), " ")    # chord, then a space
        """
        self._require().send_keys(*keys)

    def clear(self) -> None:
        self._require().clear()

    def fire_event(self, name: str) -> None:
        self._require().fire_event(name)

    def focus(self) -> None:
        self._require().focus()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def parent(self) -> "Element":
        """
        The immediate parent, wrapped in the handle class its tag calls for.

        An `input` parent is classified by its `type` attribute.
        """
        native = self._require().parent()
        tag = native.tag_name()
        input_type = native.attribute("type") if tag == "input" else None
        return element_class_for(tag, input_type)(native)

    def find(self, kind: Any, identifier: Optional[Dict[str, Any]] = None, **kwargs: Any) -> "Element":
        """Look up one descendant of this element."""
        kind = kind_of(kind)
        locator = LocatorResolver().locator_for(kind, normalize_identifier(identifier, **kwargs))
        parent = self._require()
        return handle_class_for(kind)(
            parent.find_one(locator), locator, lambda: parent.find_one(locator)
        )

    def find_all(self, kind: Any, identifier: Optional[Dict[str, Any]] = None, **kwargs: Any) -> List["Element"]:
        """All descendants of this element matching the identifier."""
        kind = kind_of(kind)
        locator = LocatorResolver().locator_for(kind, normalize_identifier(identifier, **kwargs))
        cls = handle_class_for(kind)
        return [cls(native, locator) for native in self._require().find_all(locator)]

    def _children(self, query: NativeLocator, cls: Type["Element"]) -> List["Element"]:
        return [cls(native, query) for native in self._require().find_all(query)]

    # ------------------------------------------------------------------
    # Waits
    # ------------------------------------------------------------------

    def when_present(self, timeout: Optional[float] = None) -> "Element":
        """Block until the element exists; returns self."""
        timeout = _timeout(timeout)
        wait_until(self.exist, timeout, f"Element {self} not present in {timeout} seconds")
        return self

    def when_visible(self, timeout: Optional[float] = None) -> "Element":
        timeout = _timeout(timeout)
        wait_until(self.visible, timeout, f"Element {self} was not visible in {timeout} seconds")
        return self

    def when_not_visible(self, timeout: Optional[float] = None) -> "Element":
        timeout = _timeout(timeout)
        wait_while(
            lambda: self.exist() and self.visible(),
            timeout,
            f"Element {self} still visible after {timeout} seconds",
        )
        return self

    def wait_until(
        self,
        predicate: Callable[[], Any],
        timeout: Optional[float] = None,
        message: Optional[str] = None,
    ) -> Any:
        return wait_until(predicate, _timeout(timeout), message)

    # ------------------------------------------------------------------
    # Escape hatch
    # ------------------------------------------------------------------

    def raw(self) -> NativeElement:
        """The native element itself, for operations pagekit does not cover."""
        native = self._require()
        logger.warning(f"Raw native element requested for {self}")
        return native

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Forward a call to the native element.

        Logged as deprecated: a forwarded call usually means a missing
        capability or the wrong handle kind.

        Raises:
            NoSuchCapabilityError: If the native element has no such method
        """
        caller = inspect.getframeinfo(inspect.currentframe().f_back)
        call_site = f"{caller.filename}:{caller.lineno}"
        native = self._require()
        logger.warning(
            f"DEPRECATED: '{name}' called at {call_site} is not a pagekit capability "
            f"and is passed to the native element. Use a pagekit method instead."
        )
        method = getattr(native, name, None)
        if not callable(method):
            raise NoSuchCapabilityError(name, native, call_site)
        return method(*args, **kwargs)


# ----------------------------------------------------------------------
# Input kinds
# ----------------------------------------------------------------------

class TextField(Element):
    KIND = ElementKind.TEXT_FIELD

    @allure.step("Set {0} to {value}")
    def set(self, value: str) -> None:
        """Replace the current content with `value`."""
        logger.debug(f"Setting {self} to '{value}'")
        self._require().fill(str(value))

    def append(self, text: str) -> None:
        self._require().send_keys(str(text))


class TextArea(TextField):
    KIND = ElementKind.TEXT_AREA


class HiddenField(Element):
    KIND = ElementKind.HIDDEN_FIELD


class FileField(Element):
    KIND = ElementKind.FILE_FIELD

    @allure.step("Upload {path} with {0}")
    def set(self, path: str) -> None:
        self._require().set_input_files(str(path))


class CheckBox(Element):
    KIND = ElementKind.CHECKBOX

    @allure.step("Check {0}")
    def check(self) -> None:
        self._require().check()

    @allure.step("Uncheck {0}")
    def uncheck(self) -> None:
        self._require().uncheck()

    def is_checked(self) -> bool:
        return self._require().is_checked()


class RadioButton(Element):
    KIND = ElementKind.RADIO_BUTTON

    @allure.step("Select {0}")
    def select(self) -> None:
        self._require().check()

    def clear(self) -> None:
        self._require().uncheck()

    def is_selected(self) -> bool:
        return self._require().is_checked()


class Option(Element):
    KIND = None

    def is_selected(self) -> bool:
        return bool(self._require().property("selected"))


class SelectList(Element):
    """
    Handle over a <select>.

    value() is the text of the first selected option, which is what a user
    sees in the drop down.
    """

    KIND = ElementKind.SELECT_LIST

    def options(self) -> List[Option]:
        return self._children(OPTION_QUERY, Option)

    def selected_options(self) -> List[Option]:
        return [option for option in self.options() if option.is_selected()]

    def value(self) -> Optional[str]:
        selected = self.selected_options()
        return selected[0].text() if selected else None

    def includes(self, text: str) -> bool:
        return any(option.text() == text for option in self.options())

    @allure.step("Select {text_or_value} in {0}")
    def select(self, text_or_value: str) -> None:
        """Select the option whose text, or failing that value, matches."""
        options = self.options()
        for match in (lambda o: o.text() == text_or_value, lambda o: o.value() == text_or_value):
            for option in options:
                if match(option):
                    self._require().select_option(option.value())
                    return
        raise ElementNotFoundError(
            f"No option '{text_or_value}' in {self}", locator=self.locator
        )

    def set(self, text_or_value: str) -> None:
        self.select(text_or_value)

    def __getitem__(self, idx: int) -> Option:
        return self.options()[idx]

    def __len__(self) -> int:
        return len(self.options())

    def __iter__(self) -> Iterator[Option]:
        return iter(self.options())


# ----------------------------------------------------------------------
# Action kinds
# ----------------------------------------------------------------------

class Link(Element):
    KIND = ElementKind.LINK


class Button(Element):
    KIND = ElementKind.BUTTON


class Area(Element):
    KIND = ElementKind.AREA


# ----------------------------------------------------------------------
# Text containers
# ----------------------------------------------------------------------

class Div(Element):
    KIND = ElementKind.DIV


class Span(Element):
    KIND = ElementKind.SPAN


class TableCell(Element):
    KIND = ElementKind.CELL


class ListItem(Element):
    KIND = ElementKind.LIST_ITEM


class Paragraph(Element):
    KIND = ElementKind.PARAGRAPH


class Label(Element):
    KIND = ElementKind.LABEL


class Heading(Element):
    KIND = ElementKind.H1


class H1(Heading):
    KIND = ElementKind.H1


class H2(Heading):
    KIND = ElementKind.H2


class H3(Heading):
    KIND = ElementKind.H3


class H4(Heading):
    KIND = ElementKind.H4


class H5(Heading):
    KIND = ElementKind.H5


class H6(Heading):
    KIND = ElementKind.H6


# ----------------------------------------------------------------------
# Structural kinds
# ----------------------------------------------------------------------

class TableRow(Element):
    KIND = None

    def cells(self) -> List[TableCell]:
        return self._children(CELL_QUERY, TableCell)

    def columns(self) -> int:
        """Number of cells in the row."""
        return len(self.cells())

    def __getitem__(self, idx: int) -> TableCell:
        return self.cells()[idx]

    def __iter__(self) -> Iterator[TableCell]:
        for index in range(self.columns()):
            yield self[index]


class Table(Element):
    """Handle over a <table>; rows come from thead, tbody and tfoot in order."""

    KIND = ElementKind.TABLE

    def rows(self) -> List[TableRow]:
        return self._children(ROW_QUERY, TableRow)

    def __getitem__(self, idx: int) -> TableRow:
        return self.rows()[idx]

    def __iter__(self) -> Iterator[TableRow]:
        return iter(self.rows())

    def __len__(self) -> int:
        return len(self.rows())


class _ItemList(Element):
    def items(self) -> List[ListItem]:
        return self._children(ITEM_QUERY, ListItem)

    def __getitem__(self, idx: int) -> ListItem:
        return self.items()[idx]

    def __iter__(self) -> Iterator[ListItem]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self.items())


class OrderedList(_ItemList):
    KIND = ElementKind.ORDERED_LIST


class UnorderedList(_ItemList):
    KIND = ElementKind.UNORDERED_LIST


class Image(Element):
    KIND = ElementKind.IMAGE

    def is_loaded(self) -> bool:
        native = self._require()
        return bool(native.property("complete")) and (native.property("naturalWidth") or 0) > 0

    def width(self) -> int:
        return int(self._require().property("width"))

    def height(self) -> int:
        return int(self._require().property("height"))


class Form(Element):
    KIND = ElementKind.FORM

    @allure.step("Submit {0}")
    def submit(self) -> None:
        self._require().submit()


class Canvas(Element):
    KIND = ElementKind.CANVAS


class Audio(Element):
    KIND = ElementKind.AUDIO


class Video(Element):
    KIND = ElementKind.VIDEO


class Svg(Element):
    KIND = ElementKind.SVG


GenericElement = Element


HANDLE_CLASSES: Dict[ElementKind, Type[Element]] = {
    ElementKind.TEXT_FIELD: TextField,
    ElementKind.TEXT_AREA: TextArea,
    ElementKind.HIDDEN_FIELD: HiddenField,
    ElementKind.FILE_FIELD: FileField,
    ElementKind.SELECT_LIST: SelectList,
    ElementKind.CHECKBOX: CheckBox,
    ElementKind.RADIO_BUTTON: RadioButton,
    ElementKind.RADIO_BUTTON_GROUP: RadioButton,
    ElementKind.LINK: Link,
    ElementKind.BUTTON: Button,
    ElementKind.AREA: Area,
    ElementKind.DIV: Div,
    ElementKind.SPAN: Span,
    ElementKind.CELL: TableCell,
    ElementKind.TABLE: Table,
    ElementKind.IMAGE: Image,
    ElementKind.FORM: Form,
    ElementKind.LIST_ITEM: ListItem,
    ElementKind.ORDERED_LIST: OrderedList,
    ElementKind.UNORDERED_LIST: UnorderedList,
    ElementKind.H1: H1,
    ElementKind.H2: H2,
    ElementKind.H3: H3,
    ElementKind.H4: H4,
    ElementKind.H5: H5,
    ElementKind.H6: H6,
    ElementKind.PARAGRAPH: Paragraph,
    ElementKind.LABEL: Label,
    ElementKind.CANVAS: Canvas,
    ElementKind.AUDIO: Audio,
    ElementKind.VIDEO: Video,
    ElementKind.SVG: Svg,
    ElementKind.ELEMENT: GenericElement,
}

# Handle classes by tag, for elements reached without a declared kind
_TAG_CLASSES: Dict[str, Type[Element]] = {
    "textarea": TextArea,
    "select": SelectList,
    "option": Option,
    "a": Link,
    "button": Button,
    "area": Area,
    "div": Div,
    "span": Span,
    "td": TableCell,
    "th": TableCell,
    "tr": TableRow,
    "table": Table,
    "img": Image,
    "form": Form,
    "li": ListItem,
    "ol": OrderedList,
    "ul": UnorderedList,
    "h1": H1,
    "h2": H2,
    "h3": H3,
    "h4": H4,
    "h5": H5,
    "h6": H6,
    "p": Paragraph,
    "label": Label,
    "canvas": Canvas,
    "audio": Audio,
    "video": Video,
    "svg": Svg,
}

_INPUT_CLASSES: Dict[str, Type[Element]] = {
    "checkbox": CheckBox,
    "radio": RadioButton,
    "hidden": HiddenField,
    "file": FileField,
    "submit": Button,
    "button": Button,
    "image": Button,
    "reset": Button,
}


def handle_class_for(kind: Any) -> Type[Element]:
    return HANDLE_CLASSES[kind_of(kind)]


def element_class_for(tag_name: str, input_type: Optional[str] = None) -> Type[Element]:
    """
    Handle class for a tag, and for inputs their type.

    Examples:
        >>> element_class_for("input", "checkbox").__name__
        'CheckBox'
        >>> element_class_for("input").__name__
        'TextField'
        >>> element_class_for("section").__name__
        'Element'
    """
    tag = (tag_name or "").lower()
    if tag == "input":
        return _INPUT_CLASSES.get((input_type or "text").lower(), TextField)
    return _TAG_CLASSES.get(tag, GenericElement)


__all__ = [
    "Element",
    "GenericElement",
    "TextField",
    "TextArea",
    "HiddenField",
    "FileField",
    "SelectList",
    "Option",
    "CheckBox",
    "RadioButton",
    "Link",
    "Button",
    "Area",
    "Div",
    "Span",
    "TableCell",
    "ListItem",
    "Paragraph",
    "Label",
    "Heading",
    "H1",
    "H2",
    "H3",
    "H4",
    "H5",
    "H6",
    "Table",
    "TableRow",
    "OrderedList",
    "UnorderedList",
    "Image",
    "Form",
    "Canvas",
    "Audio",
    "Video",
    "Svg",
    "HANDLE_CLASSES",
    "handle_class_for",
    "element_class_for",
]
