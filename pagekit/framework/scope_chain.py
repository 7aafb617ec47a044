"""
================================================================================
Frame / Scope Chain
================================================================================

Elements inside frames are looked up through a scope chain: the ordered list
of frame and iframe descriptors to enter, outermost first.

    class NestedFramePage(BasePage):
        nested_link = in_frame(
            {"id": "two"},
            lambda frame: in_iframe(
                {"id": "three"},
                lambda nested: link(id="four", frame=nested),
                frame,
            ),
        )

Whoever resolves the element switches into every descriptor in list order
and only then performs the lookup. Reversing the walk lands in the wrong
browsing context.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from .identifiers import normalize_identifier


T = TypeVar("T")


class FrameKind(str, Enum):
    """Browsing context element type."""

    FRAME = "frame"
    IFRAME = "iframe"


@dataclass(frozen=True)
class ScopeDescriptor:
    """One step of a scope chain: which frame to enter and how to find it."""

    kind: FrameKind
    identifier: Dict[str, Any] = field(default_factory=dict)


ScopeChain = List[ScopeDescriptor]


def push_scope(chain: Optional[ScopeChain], descriptor: ScopeDescriptor) -> ScopeChain:
    """
    Return a chain extended by one innermost descriptor.

    The given chain is left untouched so sibling scopes declared inside the
    same outer frame do not see each other.
    """
    return list(chain or []) + [descriptor]


def _enter(
    kind: FrameKind,
    identifier: Mapping[str, Any],
    block: Callable[[ScopeChain], T],
    frame: Optional[ScopeChain],
) -> T:
    descriptor = ScopeDescriptor(kind, normalize_identifier(identifier))
    return block(push_scope(frame, descriptor))


def in_frame(
    identifier: Mapping[str, Any],
    block: Callable[[ScopeChain], T],
    frame: Optional[ScopeChain] = None,
) -> T:
    """
    Declare that the elements built by `block` live inside a frame.

    Args:
        identifier: How to find the frame (id, name, index, ...)
        block: Receives the scope chain, returns whatever it declares
        frame: Chain of the enclosing frame when nesting

    Returns:
        The block's return value
    """
    return _enter(FrameKind.FRAME, identifier, block, frame)


def in_iframe(
    identifier: Mapping[str, Any],
    block: Callable[[ScopeChain], T],
    frame: Optional[ScopeChain] = None,
) -> T:
    """Same as in_frame() for an iframe."""
    return _enter(FrameKind.IFRAME, identifier, block, frame)


__all__ = [
    "FrameKind",
    "ScopeDescriptor",
    "ScopeChain",
    "push_scope",
    "in_frame",
    "in_iframe",
]
