#!/usr/bin/env python3
"""
errors.py

Exceptions raised while parsing IDS strings and resolving component trees.
"""


class ComponentTreeError(Exception):
    """Base class for all component tree errors."""


class IDSParseError(ComponentTreeError, ValueError):
    """An IDS string could not be tokenized or parsed."""

    def __init__(self, message: str, ids: str = ""):
        super().__init__(f"{message}: {ids!r}" if ids else message)
        self.reason = message
        self.ids = ids


class ResolutionError(ComponentTreeError):
    """A character could not be resolved to a finite, self-contained tree."""

    def __init__(self, message: str, chain: list[str]):
        super().__init__(f"{message}: {' -> '.join(chain)}")
        self.chain = list(chain)


class AliasCycleError(ResolutionError):
    """Alias links never reach a fixed point."""


class SelfContainmentError(ResolutionError):
    """A character's tree contains a reference back to the character itself."""
