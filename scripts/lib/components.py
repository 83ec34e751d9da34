#!/usr/bin/env python3
"""
components.py

The composition tree node shared by the parser, resolver and statistics.

A Component is either a leaf (operator == LEAF, a character, no children) or an
operator node (an Ideographic Description Character with exactly as many
children as the operator takes). Nodes are immutable, so a resolved subtree can
be spliced into any number of parents without copying.
"""

from dataclasses import dataclass, replace
from typing import Optional

# ---------------------------------------------------------------------------
# IDS (Ideographic Description Sequence) Constants
# ---------------------------------------------------------------------------

LEAF = "leaf"

# Ideographic Description Characters (U+2FF0-U+2FFB) and their operand counts
IDS_ARITY: dict[str, int] = {
    "⿰": 2,  # left to right
    "⿱": 2,  # above to below
    "⿲": 3,  # left to middle and right
    "⿳": 3,  # above to middle and below
    "⿴": 2,  # full surround
    "⿵": 2,  # surround from above
    "⿶": 2,  # surround from below
    "⿷": 2,  # surround from left
    "⿸": 2,  # surround from upper left
    "⿹": 2,  # surround from upper right
    "⿺": 2,  # surround from lower left
    "⿻": 2,  # overlaid
}

IDS_OPERATORS = frozenset(IDS_ARITY)


# ---------------------------------------------------------------------------
# Component
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Component:
    """A node of a composition tree."""
    operator: str                              # IDS operator, or LEAF
    char: Optional[str] = None                 # Leaf character, or root label on operator nodes
    children: tuple["Component", ...] = ()

    def __post_init__(self):
        if self.operator == LEAF:
            if not self.char:
                raise ValueError("leaf components require a character")
            if self.children:
                raise ValueError(f"leaf component {self.char!r} cannot have children")
            return

        arity = IDS_ARITY.get(self.operator)
        if arity is None:
            raise ValueError(f"unknown IDS operator: {self.operator!r}")
        if len(self.children) != arity:
            raise ValueError(
                f"operator {self.operator} takes {arity} components, got {len(self.children)}"
            )

    @classmethod
    def leaf(cls, char: str) -> "Component":
        return cls(LEAF, char)

    @property
    def is_leaf(self) -> bool:
        return self.operator == LEAF

    def labeled(self, char: str) -> "Component":
        """Return this node stamped with the character it composes."""
        if self.char == char:
            return self
        return replace(self, char=char)

    # -----------------------------------------------------------------------
    # Serialization
    # -----------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "type": self.operator,
            "char": self.char,
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Component":
        return cls(
            operator=data["type"],
            char=data.get("char"),
            children=tuple(cls.from_dict(child) for child in data.get("children", [])),
        )

    def __str__(self) -> str:
        """Render the node back as an IDS string."""
        if self.is_leaf:
            return self.char
        return self.operator + "".join(str(child) for child in self.children)
