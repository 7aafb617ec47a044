"""
================================================================================
Element Declarations and Accessors
================================================================================

Page classes declare their elements in the class body:

    class LoginPage(BasePage):
        username = text_field(id="username")
        remember_me = checkbox(name="remember")
        sign_in = button(text="Sign in")
        results = divs(class_="result")
        editor_body = in_iframe({"id": "editor"}, lambda frame: div(name="body", frame=frame))

Reading a declared attribute on a page instance returns a bound accessor
whose methods are the fixed bundle for the element's kind:

    page.username.set("admin")        # value-bearing: value() / set()
    page.remember_me.check()          # checkbox: check / uncheck / is_checked
    page.sign_in.click()              # action: click
    page.results.all()                # collection: all / iteration / len
    page.username.element()           # every kind: element() / exists()
    page.username_text_field()        # kind suffixed alias of element()

Every call resolves the element again. A declaration built with a block
calls the block every time; a static identifier is copied before each
lookup so resolution can never edit the declared one.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Type

import allure
from loguru import logger

from .elements import Element
from .errors import ElementNotFoundError, IdentifierError
from .identifiers import ElementKind, kind_of, normalize_identifier
from .scope_chain import in_frame, in_iframe


Block = Callable[[Any], Any]


@dataclass(frozen=True)
class ElementDeclaration:
    """
    One declared element of a page class.

    Attributes:
        name: Attribute name the accessor is reachable under
        kind: Element kind, which selects the accessor bundle
        identifier: Static identifier (None when a block is used)
        block: Called with the page on every lookup; returns a handle (a list
            of handles for collections) or an identifier to look up
        collection: True for the plural declarations (links, divs, ...)
    """
    name: str
    kind: ElementKind
    identifier: Optional[Dict[str, Any]] = None
    block: Optional[Block] = None
    collection: bool = False

    @property
    def alias(self) -> str:
        """Name of the kind suffixed alias, e.g. `google_search_link`."""
        suffix = PLURALS[self.kind] if self.collection else self.kind.value
        return f"{self.name}_{suffix}"


# ----------------------------------------------------------------------
# Bound accessors (one per declaration and page instance)
# ----------------------------------------------------------------------

class BoundAccessor:
    """Operations every declared element has."""

    def __init__(self, page: Any, declaration: ElementDeclaration):
        self._page = page
        self._declaration = declaration

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self._declaration.name} "
            f"({self._declaration.kind.value}) of {type(self._page).__name__}>"
        )

    def _lookup(self, identifier: Mapping[str, Any]) -> Any:
        if self._declaration.collection:
            return self._page.find_all(self._declaration.kind, dict(identifier))
        return self._page.find(self._declaration.kind, dict(identifier))

    def _resolve(self) -> Any:
        declaration = self._declaration
        if declaration.block is not None:
            result = declaration.block(self._page)
            if isinstance(result, (Element, list)):
                return result
            return self._lookup(result)
        return self._lookup(declaration.identifier)

    def element(self) -> Element:
        """A fresh handle for the declared element."""
        return self._resolve()

    def exists(self) -> bool:
        return self.element().exist()


class ValueAccessor(BoundAccessor):
    """text_field, text_area, select_list"""

    def value(self) -> Optional[str]:
        return self.element().value()

    def set(self, value: str) -> None:
        self.element().set(value)


class ReadOnlyValueAccessor(BoundAccessor):
    """hidden_field"""

    def value(self) -> Optional[str]:
        return self.element().value()


class FileAccessor(BoundAccessor):
    """file_field"""

    def set(self, path: str) -> None:
        self.element().set(path)


class TextAccessor(BoundAccessor):
    """Text containers; their value is the element text."""

    def value(self) -> str:
        return self.element().text()


class CheckboxAccessor(BoundAccessor):
    def check(self) -> None:
        self.element().check()

    def uncheck(self) -> None:
        self.element().uncheck()

    def is_checked(self) -> bool:
        return self.element().is_checked()


class RadioButtonAccessor(BoundAccessor):
    def select(self) -> None:
        self.element().select()

    def clear(self) -> None:
        self.element().clear()

    def is_selected(self) -> bool:
        return self.element().is_selected()


class ActionAccessor(BoundAccessor):
    """link, button, area"""

    def click(self) -> None:
        self.element().click()


class HandleAccessor(BoundAccessor):
    """Structural kinds: only the handle and the existence check."""


class GenericAccessor(BoundAccessor):
    def text(self) -> str:
        return self.element().text()


class CollectionAccessor(BoundAccessor):
    """Plural declarations; the handles come back in document order."""

    def all(self) -> List[Element]:
        return self._resolve()

    element = all

    def exists(self) -> bool:
        return any(handle.exist() for handle in self.all())

    def __getitem__(self, idx: int) -> Element:
        return self.all()[idx]

    def __iter__(self) -> Iterator[Element]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self.all())


class RadioGroupAccessor(BoundAccessor):
    """
    Radio buttons sharing one identifier (usually the same `name`).

    Example:
        favourite_color = radio_button_group(name="color")
        page.favourite_color.select("blue")
        page.favourite_color.selected()   # 'blue'
    """

    def elements(self) -> List[Element]:
        declaration = self._declaration
        if declaration.block is not None:
            result = declaration.block(self._page)
            if isinstance(result, list):
                return result
            return self._page.find_all(ElementKind.RADIO_BUTTON, dict(result))
        return self._page.find_all(ElementKind.RADIO_BUTTON, dict(declaration.identifier))

    element = elements

    def exists(self) -> bool:
        return any(button.exist() for button in self.elements())

    def values(self) -> List[Optional[str]]:
        return [button.value() for button in self.elements()]

    @allure.step("Select radio button with value {value}")
    def select(self, value: str) -> None:
        for button in self.elements():
            if button.value() == value:
                if not button.is_selected():
                    button.select()
                return
        raise ElementNotFoundError(
            f"No radio button with value '{value}' in group '{self._declaration.name}'"
        )

    def selected(self) -> Optional[str]:
        """Value of the selected button, None when nothing is selected."""
        for button in self.elements():
            if button.is_selected():
                return button.value()
        return None

    def is_any_selected(self) -> bool:
        return any(button.is_selected() for button in self.elements())


BUNDLES: Dict[ElementKind, Type[BoundAccessor]] = {
    ElementKind.TEXT_FIELD: ValueAccessor,
    ElementKind.TEXT_AREA: ValueAccessor,
    ElementKind.SELECT_LIST: ValueAccessor,
    ElementKind.HIDDEN_FIELD: ReadOnlyValueAccessor,
    ElementKind.FILE_FIELD: FileAccessor,
    ElementKind.CHECKBOX: CheckboxAccessor,
    ElementKind.RADIO_BUTTON: RadioButtonAccessor,
    ElementKind.RADIO_BUTTON_GROUP: RadioGroupAccessor,
    ElementKind.LINK: ActionAccessor,
    ElementKind.BUTTON: ActionAccessor,
    ElementKind.AREA: ActionAccessor,
    ElementKind.DIV: TextAccessor,
    ElementKind.SPAN: TextAccessor,
    ElementKind.CELL: TextAccessor,
    ElementKind.LIST_ITEM: TextAccessor,
    ElementKind.H1: TextAccessor,
    ElementKind.H2: TextAccessor,
    ElementKind.H3: TextAccessor,
    ElementKind.H4: TextAccessor,
    ElementKind.H5: TextAccessor,
    ElementKind.H6: TextAccessor,
    ElementKind.PARAGRAPH: TextAccessor,
    ElementKind.LABEL: TextAccessor,
    ElementKind.TABLE: HandleAccessor,
    ElementKind.FORM: HandleAccessor,
    ElementKind.IMAGE: HandleAccessor,
    ElementKind.ORDERED_LIST: HandleAccessor,
    ElementKind.UNORDERED_LIST: HandleAccessor,
    ElementKind.CANVAS: HandleAccessor,
    ElementKind.AUDIO: HandleAccessor,
    ElementKind.VIDEO: HandleAccessor,
    ElementKind.SVG: HandleAccessor,
    ElementKind.ELEMENT: GenericAccessor,
}

PLURALS: Dict[ElementKind, str] = {
    ElementKind.TEXT_FIELD: "text_fields",
    ElementKind.TEXT_AREA: "text_areas",
    ElementKind.HIDDEN_FIELD: "hidden_fields",
    ElementKind.FILE_FIELD: "file_fields",
    ElementKind.SELECT_LIST: "select_lists",
    ElementKind.CHECKBOX: "checkboxes",
    ElementKind.RADIO_BUTTON: "radio_buttons",
    ElementKind.RADIO_BUTTON_GROUP: "radio_button_groups",
    ElementKind.LINK: "links",
    ElementKind.BUTTON: "buttons",
    ElementKind.AREA: "areas",
    ElementKind.DIV: "divs",
    ElementKind.SPAN: "spans",
    ElementKind.CELL: "cells",
    ElementKind.TABLE: "tables",
    ElementKind.IMAGE: "images",
    ElementKind.FORM: "forms",
    ElementKind.LIST_ITEM: "list_items",
    ElementKind.ORDERED_LIST: "ordered_lists",
    ElementKind.UNORDERED_LIST: "unordered_lists",
    ElementKind.H1: "h1s",
    ElementKind.H2: "h2s",
    ElementKind.H3: "h3s",
    ElementKind.H4: "h4s",
    ElementKind.H5: "h5s",
    ElementKind.H6: "h6s",
    ElementKind.PARAGRAPH: "paragraphs",
    ElementKind.LABEL: "labels",
    ElementKind.CANVAS: "canvases",
    ElementKind.AUDIO: "audios",
    ElementKind.VIDEO: "videos",
    ElementKind.SVG: "svgs",
    ElementKind.ELEMENT: "elements",
}


def bundle_for(declaration: ElementDeclaration) -> Type[BoundAccessor]:
    if declaration.collection:
        return CollectionAccessor
    return BUNDLES[declaration.kind]


# ----------------------------------------------------------------------
# Class body declarations
# ----------------------------------------------------------------------

def _alias(name: str) -> Callable[[Any], Any]:
    def alias(page: Any) -> Any:
        return getattr(page, name).element()
    alias.__name__ = name
    alias.__doc__ = f"Handle for the declared element '{name}'."
    return alias


class ElementAccessor:
    """
    Descriptor created by the declaration functions (text_field, link, ...).

    Binds a name to an ElementDeclaration when assigned in a class body and
    hands out a bound accessor when read from a page instance.
    """

    def __init__(
        self,
        kind: ElementKind,
        identifier: Optional[Mapping[str, Any]] = None,
        block: Optional[Block] = None,
        collection: bool = False,
    ):
        if identifier is None and block is None:
            raise IdentifierError(f"A {kind.value} needs an identifier or a block")
        if identifier is not None and block is not None:
            raise IdentifierError(f"A {kind.value} takes an identifier or a block, not both")
        self.kind = kind
        self.identifier = normalize_identifier(identifier) if identifier is not None else None
        self.block = block
        self.collection = collection
        self.declaration: Optional[ElementDeclaration] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.declaration = ElementDeclaration(
            name=name,
            kind=self.kind,
            identifier=self.identifier,
            block=self.block,
            collection=self.collection,
        )
        setattr(owner, self.declaration.alias, _alias(name))

    def __get__(self, page: Any, owner: Optional[type] = None) -> Any:
        if page is None:
            return self
        return bundle_for(self.declaration)(page, self.declaration)

    def __repr__(self) -> str:
        name = self.declaration.name if self.declaration else "?"
        return f"<ElementAccessor {name} ({self.kind.value})>"


def _declarer(kind: ElementKind, collection: bool = False) -> Callable[..., ElementAccessor]:
    def declare_element(
        identifier: Optional[Mapping[str, Any]] = None,
        block: Optional[Block] = None,
        **kwargs: Any,
    ) -> ElementAccessor:
        if kwargs:
            identifier = normalize_identifier(identifier, **kwargs)
        return ElementAccessor(kind, identifier, block, collection)

    declare_element.__name__ = PLURALS[kind] if collection else kind.value
    declare_element.__doc__ = (
        f"Declare {'all ' + PLURALS[kind] if collection else 'a ' + kind.value} "
        f"found by an identifier (mapping or keywords) or a block."
    )
    return declare_element


text_field = _declarer(ElementKind.TEXT_FIELD)
text_area = _declarer(ElementKind.TEXT_AREA)
hidden_field = _declarer(ElementKind.HIDDEN_FIELD)
file_field = _declarer(ElementKind.FILE_FIELD)
select_list = _declarer(ElementKind.SELECT_LIST)
checkbox = _declarer(ElementKind.CHECKBOX)
radio_button = _declarer(ElementKind.RADIO_BUTTON)
radio_button_group = _declarer(ElementKind.RADIO_BUTTON_GROUP)
link = _declarer(ElementKind.LINK)
button = _declarer(ElementKind.BUTTON)
area = _declarer(ElementKind.AREA)
div = _declarer(ElementKind.DIV)
span = _declarer(ElementKind.SPAN)
cell = _declarer(ElementKind.CELL)
table = _declarer(ElementKind.TABLE)
image = _declarer(ElementKind.IMAGE)
form = _declarer(ElementKind.FORM)
list_item = _declarer(ElementKind.LIST_ITEM)
ordered_list = _declarer(ElementKind.ORDERED_LIST)
unordered_list = _declarer(ElementKind.UNORDERED_LIST)
h1 = _declarer(ElementKind.H1)
h2 = _declarer(ElementKind.H2)
h3 = _declarer(ElementKind.H3)
h4 = _declarer(ElementKind.H4)
h5 = _declarer(ElementKind.H5)
h6 = _declarer(ElementKind.H6)
paragraph = _declarer(ElementKind.PARAGRAPH)
label = _declarer(ElementKind.LABEL)
canvas = _declarer(ElementKind.CANVAS)
audio = _declarer(ElementKind.AUDIO)
video = _declarer(ElementKind.VIDEO)
svg = _declarer(ElementKind.SVG)

text_fields = _declarer(ElementKind.TEXT_FIELD, collection=True)
text_areas = _declarer(ElementKind.TEXT_AREA, collection=True)
hidden_fields = _declarer(ElementKind.HIDDEN_FIELD, collection=True)
file_fields = _declarer(ElementKind.FILE_FIELD, collection=True)
select_lists = _declarer(ElementKind.SELECT_LIST, collection=True)
checkboxes = _declarer(ElementKind.CHECKBOX, collection=True)
radio_buttons = _declarer(ElementKind.RADIO_BUTTON, collection=True)
links = _declarer(ElementKind.LINK, collection=True)
buttons = _declarer(ElementKind.BUTTON, collection=True)
areas = _declarer(ElementKind.AREA, collection=True)
divs = _declarer(ElementKind.DIV, collection=True)
spans = _declarer(ElementKind.SPAN, collection=True)
cells = _declarer(ElementKind.CELL, collection=True)
tables = _declarer(ElementKind.TABLE, collection=True)
images = _declarer(ElementKind.IMAGE, collection=True)
forms = _declarer(ElementKind.FORM, collection=True)
list_items = _declarer(ElementKind.LIST_ITEM, collection=True)
ordered_lists = _declarer(ElementKind.ORDERED_LIST, collection=True)
unordered_lists = _declarer(ElementKind.UNORDERED_LIST, collection=True)
h1s = _declarer(ElementKind.H1, collection=True)
h2s = _declarer(ElementKind.H2, collection=True)
h3s = _declarer(ElementKind.H3, collection=True)
h4s = _declarer(ElementKind.H4, collection=True)
h5s = _declarer(ElementKind.H5, collection=True)
h6s = _declarer(ElementKind.H6, collection=True)
paragraphs = _declarer(ElementKind.PARAGRAPH, collection=True)
labels = _declarer(ElementKind.LABEL, collection=True)
canvases = _declarer(ElementKind.CANVAS, collection=True)
audios = _declarer(ElementKind.AUDIO, collection=True)
videos = _declarer(ElementKind.VIDEO, collection=True)
svgs = _declarer(ElementKind.SVG, collection=True)


def element(
    tag_name: str,
    identifier: Optional[Mapping[str, Any]] = None,
    block: Optional[Block] = None,
    **kwargs: Any,
) -> ElementAccessor:
    """
    Declare an element of any tag.

    Example:
        banner = element("section", id="banner")
    """
    if block is not None:
        return ElementAccessor(ElementKind.ELEMENT, block=block)
    merged = normalize_identifier(identifier, **kwargs)
    merged.setdefault("tag_name", tag_name)
    return ElementAccessor(ElementKind.ELEMENT, merged)


def elements(
    tag_name: str,
    identifier: Optional[Mapping[str, Any]] = None,
    block: Optional[Block] = None,
    **kwargs: Any,
) -> ElementAccessor:
    """Collection form of element()."""
    if block is not None:
        return ElementAccessor(ElementKind.ELEMENT, block=block, collection=True)
    merged = normalize_identifier(identifier, **kwargs)
    merged.setdefault("tag_name", tag_name)
    return ElementAccessor(ElementKind.ELEMENT, merged, collection=True)


def declare(
    page_cls: type,
    kind: Any,
    name: str,
    identifier: Optional[Mapping[str, Any]] = None,
    block: Optional[Block] = None,
    collection: bool = False,
) -> ElementDeclaration:
    """
    Declare an element on an existing page class.

    Same result as writing the declaration in the class body. Declaring a
    name again replaces the earlier declaration and its alias.

    Returns:
        The new ElementDeclaration
    """
    accessor = ElementAccessor(kind_of(kind), identifier, block, collection)
    registry = page_cls.__dict__.get("declarations")
    if registry is None:
        registry = dict(getattr(page_cls, "declarations", {}))
        page_cls.declarations = registry

    previous = registry.get(name)
    if previous is not None and previous.alias in page_cls.__dict__:
        delattr(page_cls, previous.alias)

    setattr(page_cls, name, accessor)
    accessor.__set_name__(page_cls, name)
    registry[name] = accessor.declaration
    logger.debug(f"Declared {accessor.kind.value} '{name}' on {page_cls.__name__}")
    return accessor.declaration


def collect_declarations(page_cls: type) -> Dict[str, ElementDeclaration]:
    """
    Declarations of a class and its bases, subclasses overriding bases.

    Used by page classes when they are created.
    """
    registry: Dict[str, ElementDeclaration] = {}
    for klass in reversed(page_cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, ElementAccessor) and value.declaration is not None:
                registry[name] = value.declaration
    return registry


__all__ = [
    "ElementDeclaration",
    "ElementAccessor",
    "BoundAccessor",
    "ValueAccessor",
    "ReadOnlyValueAccessor",
    "FileAccessor",
    "TextAccessor",
    "CheckboxAccessor",
    "RadioButtonAccessor",
    "ActionAccessor",
    "HandleAccessor",
    "GenericAccessor",
    "CollectionAccessor",
    "RadioGroupAccessor",
    "BUNDLES",
    "PLURALS",
    "bundle_for",
    "declare",
    "collect_declarations",
    "in_frame",
    "in_iframe",
    "element",
    "elements",
    "text_field", "text_area", "hidden_field", "file_field", "select_list",
    "checkbox", "radio_button", "radio_button_group", "link", "button", "area",
    "div", "span", "cell", "table", "image", "form", "list_item",
    "ordered_list", "unordered_list", "h1", "h2", "h3", "h4", "h5", "h6",
    "paragraph", "label", "canvas", "audio", "video", "svg",
    "text_fields", "text_areas", "hidden_fields", "file_fields", "select_lists",
    "checkboxes", "radio_buttons", "links", "buttons", "areas", "divs", "spans",
    "cells", "tables", "images", "forms", "list_items", "ordered_lists",
    "unordered_lists", "h1s", "h2s", "h3s", "h4s", "h5s", "h6s", "paragraphs",
    "labels", "canvases", "audios", "videos", "svgs",
]
