"""
================================================================================
Locator Resolver
================================================================================

Turns a declarative identifier into a native locator the driver can use.

Most identifiers are handed to the driver as they are, with declarative keys
translated (`link_text` becomes `text`). Container tags cannot be searched by
`name` natively, so for those an XPath query is synthesized instead:

    {"tag_name": "div", "name": "foo", "index": 2}  ->  {"xpath": ".//div[@name='foo'][3]"}

The query is anchored at `.//` so it works both from the document and from
inside another element.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from loguru import logger

from .identifiers import FRAME_KEY, KIND_SPECS, ElementKind, translate_key


# Native locator: mapping of driver-native key to expected value(s)
NativeLocator = Dict[str, Any]

# Tags whose native lookup cannot match on `name`
STRUCTURAL_TAGS: Tuple[str, ...] = (
    "table", "span", "div", "td", "li", "ol", "ul",
    "h1", "h2", "h3", "h4", "h5", "h6", "p", "label",
)

# Keys that are whole queries rather than attributes
_QUERY_KEYS = ("xpath", "css")


def xpath_string(value: str) -> str:
    """
    Quote a value as an XPath string literal.

    XPath 1.0 has no escape for quotes, so a value holding a single quote is
    split on it and rebuilt with concat().

    Examples:
        >>> xpath_string("foo")
        "'foo'"
        >>> print(xpath_string("O'Brien"))
        concat('O',"'",'Brien')
    """
    if "'" in value:
        parts = [f"'{part}'" for part in value.split("'")]
        return "concat(" + ",\"'\",".join(parts) + ")"
    return f"'{value}'"


def lhs_for(key: str) -> str:
    """Left-hand side of the equality predicate for an identifier key."""
    if key == "text":
        return "normalize-space()"
    if key == "href":
        return "normalize-space(@href)"
    return "@" + key.replace("_", "-")


def equal_pair(key: str, value: str) -> str:
    """One `lhs=literal` predicate; labels match through their `for` attribute."""
    if key == "label":
        return f"@id=//label[normalize-space()={xpath_string(value)}]/@for"
    return f"{lhs_for(key)}={xpath_string(value)}"


def attribute_expression(identifier: Dict[str, Any]) -> str:
    """
    AND together one predicate per key.

    A list value becomes a parenthesised OR group. Groups lead the
    conjunction, followed by single-valued keys, each in declaration order.
    """
    groups: List[str] = []
    singles: List[str] = []
    for key, value in identifier.items():
        if isinstance(value, (list, tuple)):
            groups.append("(" + " or ".join(equal_pair(key, v) for v in value) + ")")
        else:
            singles.append(equal_pair(key, value))
    return " and ".join(groups + singles)


def needs_structural_query(identifier: Dict[str, Any]) -> bool:
    """True when a container tag is combined with a `name` key."""
    return identifier.get("tag_name") in STRUCTURAL_TAGS and "name" in identifier


def build_xpath(identifier: Dict[str, Any]) -> str:
    """
    Synthesize a relative XPath from an identifier.

    The identifier is consumed: `tag_name` and `index` are removed from it
    before the attribute predicates are built.
    """
    tag = identifier.pop("tag_name", None) or "*"
    index = identifier.pop("index", None)
    for key in _QUERY_KEYS:
        if key in identifier:
            logger.warning(
                f"Ignoring '{key}' while building an XPath for <{tag}>: "
                f"{identifier.pop(key)!r}"
            )
    xpath = f".//{tag}"
    if identifier:
        xpath += f"[{attribute_expression(identifier)}]"
    if index is not None:
        xpath += f"[{index + 1}]"
    return xpath


class LocatorResolver:
    """
    Decides how an identifier is looked up.

    Usage:
        >>> resolver = LocatorResolver()
        >>> resolver.resolve({"tag_name": "a", "link": "Home"})
        {'tag_name': 'a', 'text': 'Home'}
        >>> resolver.resolve({"tag_name": "table", "name": "foo"})
        {'xpath': ".//table[@name='foo']"}

    resolve() edits the identifier it is given when it synthesizes a query;
    callers holding on to an identifier pass a copy.
    """

    def resolve(self, identifier: Dict[str, Any]) -> NativeLocator:
        if needs_structural_query(identifier):
            xpath = build_xpath(identifier)
            logger.debug(f"Synthesized structural query: {xpath}")
            return {"xpath": xpath}

        native: NativeLocator = {}
        for key, value in identifier.items():
            native[translate_key(key)] = value
        return native

    def locator_for(self, kind: ElementKind, identifier: Dict[str, Any]) -> NativeLocator:
        """
        Native locator for an element of `kind`.

        Works on a copy: the tag and input types the kind implies are added
        (an explicit `tag_name` wins), the scope chain is dropped, and the
        result goes through resolve().
        """
        working = dict(identifier)
        working.pop(FRAME_KEY, None)
        spec = KIND_SPECS[kind]
        if spec.tag_name:
            working.setdefault("tag_name", spec.tag_name)
        if spec.input_types:
            types = spec.input_types
            working.setdefault("type", list(types) if len(types) > 1 else types[0])
        return self.resolve(working)


def describe(locator: NativeLocator) -> str:
    """Short human readable form of a native locator for messages."""
    return ", ".join(f"{k}={v!r}" for k, v in locator.items())


__all__ = [
    "NativeLocator",
    "STRUCTURAL_TAGS",
    "LocatorResolver",
    "xpath_string",
    "lhs_for",
    "equal_pair",
    "attribute_expression",
    "needs_structural_query",
    "build_xpath",
    "describe",
]
