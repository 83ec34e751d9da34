#!/usr/bin/env python3
"""
ids_parser.py

Tokenizer and recursive-descent parser for Ideographic Description Sequences.

IDS is prefix notation: an operator is followed by exactly as many operands as it
takes, and each operand is itself a sequence. The operator arity alone decides
the tree shape, so one left-to-right pass with no backtracking is enough.

    >>> str(parse_ids("⿰日月"))
    '⿰日月'
"""

from dataclasses import dataclass
from typing import Optional

from .components import Component, IDS_ARITY
from .errors import IDSParseError
from .normalizers import Normalizer, normalize_leaf

# Entity references embedded in CHISE data, e.g. &CDP-8B7C; or &M-06235;
ESCAPE_START = "&"
ESCAPE_END = ";"


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def tokenize(ids: str) -> list[str]:
    """
    Split an IDS string into tokens.

    Each code point is a token, except that an entity reference from "&" up to
    and including the next ";" is kept whole.

    Raises:
        IDSParseError: if an entity reference is never terminated
    """
    tokens: list[str] = []
    i = 0

    while i < len(ids):
        char = ids[i]
        if char == ESCAPE_START:
            end = ids.find(ESCAPE_END, i + 1)
            if end == -1:
                raise IDSParseError("unterminated entity reference", ids)
            tokens.append(ids[i:end + 1])
            i = end + 1
        else:
            tokens.append(char)
            i += 1

    return tokens


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class TokenStream:
    """Read cursor over a token list."""

    def __init__(self, tokens: list[str]):
        self._tokens = tokens
        self._pos = 0

    def pop(self) -> Optional[str]:
        """Return the next token, or None once the tokens are exhausted."""
        if self._pos >= len(self._tokens):
            return None
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    @property
    def remaining(self) -> list[str]:
        return self._tokens[self._pos:]


def _parse_sequence(stream: TokenStream, normalizer: Normalizer, ids: str) -> Component:
    token = stream.pop()
    if token is None:
        raise IDSParseError("unexpected end of sequence", ids)

    arity = IDS_ARITY.get(token)
    if arity is None:
        return Component.leaf(normalizer(token))

    children = tuple(_parse_sequence(stream, normalizer, ids) for _ in range(arity))
    return Component(token, None, children)


def parse_ids(ids: str, normalizer: Normalizer = normalize_leaf) -> Component:
    """
    Parse an IDS string into a composition tree.

    Args:
        ids: The IDS string, e.g. "⿰木⿱木木"
        normalizer: Applied to every leaf token

    Returns:
        The root Component

    Raises:
        IDSParseError: on unterminated escapes, missing operands or trailing tokens
    """
    stream = TokenStream(tokenize(ids.strip()))
    root = _parse_sequence(stream, normalizer, ids)

    if stream.remaining:
        raise IDSParseError(f"trailing tokens {''.join(stream.remaining)!r}", ids)

    return root


# ---------------------------------------------------------------------------
# Result-returning API (used by ingestion)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParseResult:
    """Either a parsed tree or the reason parsing failed."""
    ids: str
    tree: Optional[Component] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


def try_parse_ids(ids: str, normalizer: Normalizer = normalize_leaf) -> ParseResult:
    """Parse an IDS string without raising on malformed input."""
    try:
        return ParseResult(ids, tree=parse_ids(ids, normalizer))
    except IDSParseError as e:
        return ParseResult(ids, error=e.reason)
