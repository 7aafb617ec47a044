"""
================================================================================
Identifiers
================================================================================

The declarative vocabulary used to describe how an element is found.

An identifier is an ordered mapping of attribute key to an expected value or
a list of acceptable values (any of them may match). Keys come from a closed
vocabulary; `frame` is reserved for the scope chain built by in_frame().

Components:
    - ElementKind: every kind of element a page can declare
    - KindSpec / KIND_SPECS: the tag and input types each kind implies
    - translate_key: maps declarative keys onto the driver's native keys
    - normalize_identifier: validates and copies a user supplied identifier

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import IdentifierError


VOCABULARY = frozenset({
    "class", "css", "id", "index", "name", "xpath", "text", "title", "value",
    "href", "link", "link_text", "label", "alt", "src", "action", "tag_name",
})

# Reserved key holding a scope chain (see scope_chain.py)
FRAME_KEY = "frame"

# Keys the declarative layer accepts that the driver knows under another name
KEY_TRANSLATIONS: Dict[str, str] = {
    "link": "text",
    "link_text": "text",
}

TEXT_INPUT_TYPES: Tuple[str, ...] = (
    "text", "password", "email", "number", "search", "tel", "url",
)


class ElementKind(str, Enum):
    """Kind of element a page object can declare."""

    TEXT_FIELD = "text_field"
    TEXT_AREA = "text_area"
    HIDDEN_FIELD = "hidden_field"
    FILE_FIELD = "file_field"
    SELECT_LIST = "select_list"
    CHECKBOX = "checkbox"
    RADIO_BUTTON = "radio_button"
    RADIO_BUTTON_GROUP = "radio_button_group"
    LINK = "link"
    BUTTON = "button"
    AREA = "area"
    DIV = "div"
    SPAN = "span"
    CELL = "cell"
    TABLE = "table"
    IMAGE = "image"
    FORM = "form"
    LIST_ITEM = "list_item"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    PARAGRAPH = "paragraph"
    LABEL = "label"
    CANVAS = "canvas"
    AUDIO = "audio"
    VIDEO = "video"
    SVG = "svg"
    ELEMENT = "element"


@dataclass(frozen=True)
class KindSpec:
    """
    What a kind implies about the markup it matches.

    Attributes:
        tag_name: Tag merged into every identifier of this kind (None for
            generic elements, whose tag comes from the declaration)
        input_types: Allowed `type` attribute values for input backed kinds
    """
    tag_name: Optional[str]
    input_types: Tuple[str, ...] = field(default_factory=tuple)


KIND_SPECS: Dict[ElementKind, KindSpec] = {
    ElementKind.TEXT_FIELD: KindSpec("input", TEXT_INPUT_TYPES),
    ElementKind.TEXT_AREA: KindSpec("textarea"),
    ElementKind.HIDDEN_FIELD: KindSpec("input", ("hidden",)),
    ElementKind.FILE_FIELD: KindSpec("input", ("file",)),
    ElementKind.SELECT_LIST: KindSpec("select"),
    ElementKind.CHECKBOX: KindSpec("input", ("checkbox",)),
    ElementKind.RADIO_BUTTON: KindSpec("input", ("radio",)),
    ElementKind.RADIO_BUTTON_GROUP: KindSpec("input", ("radio",)),
    ElementKind.LINK: KindSpec("a"),
    ElementKind.BUTTON: KindSpec("button"),
    ElementKind.AREA: KindSpec("area"),
    ElementKind.DIV: KindSpec("div"),
    ElementKind.SPAN: KindSpec("span"),
    ElementKind.CELL: KindSpec("td"),
    ElementKind.TABLE: KindSpec("table"),
    ElementKind.IMAGE: KindSpec("img"),
    ElementKind.FORM: KindSpec("form"),
    ElementKind.LIST_ITEM: KindSpec("li"),
    ElementKind.ORDERED_LIST: KindSpec("ol"),
    ElementKind.UNORDERED_LIST: KindSpec("ul"),
    ElementKind.H1: KindSpec("h1"),
    ElementKind.H2: KindSpec("h2"),
    ElementKind.H3: KindSpec("h3"),
    ElementKind.H4: KindSpec("h4"),
    ElementKind.H5: KindSpec("h5"),
    ElementKind.H6: KindSpec("h6"),
    ElementKind.PARAGRAPH: KindSpec("p"),
    ElementKind.LABEL: KindSpec("label"),
    ElementKind.CANVAS: KindSpec("canvas"),
    ElementKind.AUDIO: KindSpec("audio"),
    ElementKind.VIDEO: KindSpec("video"),
    ElementKind.SVG: KindSpec("svg"),
    ElementKind.ELEMENT: KindSpec(None),
}


def translate_key(key: str) -> str:
    """
    Map a declarative identifier key onto the driver's native key.

    Keys without an entry are already native and come back unchanged, so
    translating twice gives the same answer as translating once.

    Examples:
        >>> translate_key("link_text")
        'text'
        >>> translate_key("id")
        'id'
    """
    return KEY_TRANSLATIONS.get(key, key)


def _check_value(key: str, value: Any) -> Any:
    if key == "index":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise IdentifierError(f"index must be a non-negative integer, got {value!r}")
        return value
    if key == FRAME_KEY:
        return list(value)
    if isinstance(value, (list, tuple)):
        if not value:
            raise IdentifierError(f"'{key}' needs at least one acceptable value")
        return [str(v) for v in value]
    return str(value)


def normalize_identifier(
    identifier: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    """
    Build a validated, independent copy of an identifier.

    Keyword arguments may carry a trailing underscore so Python keywords can
    be spelled (`class_="nav"` means `class`). Keyword entries follow the
    mapping entries in insertion order.

    Raises:
        IdentifierError: For keys outside the vocabulary or a bad index
    """
    merged: Dict[str, Any] = {}
    items = list((identifier or {}).items()) + list(kwargs.items())
    for raw_key, value in items:
        key = str(raw_key)
        if key.endswith("_") and key.rstrip("_") in VOCABULARY:
            key = key.rstrip("_")
        if key not in VOCABULARY and key != FRAME_KEY:
            raise IdentifierError(
                f"Unknown identifier key '{raw_key}'. "
                f"Valid keys: {', '.join(sorted(VOCABULARY))}"
            )
        merged[key] = _check_value(key, value)
    return merged


def kind_of(kind: Any) -> ElementKind:
    """Coerce a kind name ("text_field") or ElementKind to ElementKind."""
    if isinstance(kind, ElementKind):
        return kind
    try:
        return ElementKind(str(kind))
    except ValueError:
        raise IdentifierError(f"Unknown element kind: {kind!r}") from None


__all__ = [
    "VOCABULARY",
    "FRAME_KEY",
    "KEY_TRANSLATIONS",
    "ElementKind",
    "KindSpec",
    "KIND_SPECS",
    "translate_key",
    "normalize_identifier",
    "kind_of",
]
