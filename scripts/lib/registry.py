#!/usr/bin/env python3
"""
registry.py

Character registry and alias table, built once from corpus records.

RegistryBuilder accepts records in corpus order and applies last-write-wins
across both tables: a later record for a character replaces whatever an earlier
record registered for it, whether that was a tree or an alias. finalize() hands
back read-only views; the builder rejects further records afterwards.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

from .components import Component
from .errors import AliasCycleError
from .ids_parser import try_parse_ids
from .normalizers import Normalizer, normalize_leaf

MAX_ALIAS_HOPS = 64


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IngestIssue:
    """A corpus record that was skipped during ingestion."""
    source: str
    line_no: int
    char: str
    ids: str
    reason: str

    def __str__(self) -> str:
        return f"{self.source}:{self.line_no}  {self.char}  {self.ids}  ({self.reason})"


# ---------------------------------------------------------------------------
# Read-only Tables
# ---------------------------------------------------------------------------

class Registry(Mapping):
    """Read-only mapping of character -> parsed (unresolved) Component tree."""

    def __init__(self, trees: dict[str, Component]):
        self._trees = dict(trees)

    def __getitem__(self, char: str) -> Component:
        return self._trees[char]

    def __iter__(self) -> Iterator[str]:
        return iter(self._trees)

    def __len__(self) -> int:
        return len(self._trees)


class AliasTable(Mapping):
    """Read-only mapping of source character -> target character."""

    def __init__(self, links: dict[str, str]):
        self._links = dict(links)

    def __getitem__(self, char: str) -> str:
        return self._links[char]

    def __iter__(self) -> Iterator[str]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def resolve(self, char: str, max_hops: int = MAX_ALIAS_HOPS) -> str:
        """
        Follow alias links from char until reaching a character with no alias.

        Raises:
            AliasCycleError: if a link revisits a character, or the chain is
                longer than max_hops
        """
        chain = [char]
        seen = {char}
        current = char

        while current in self._links:
            current = self._links[current]
            chain.append(current)
            if current in seen:
                raise AliasCycleError("alias cycle", chain)
            if len(chain) - 1 > max_hops:
                raise AliasCycleError(f"alias chain longer than {max_hops} hops", chain)
            seen.add(current)

        return current


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class RegistryBuilder:
    """Collects corpus records into a registry and an alias table."""

    def __init__(self, normalizer: Normalizer = normalize_leaf):
        self.normalizer = normalizer
        self.issues: list[IngestIssue] = []
        self._trees: dict[str, Component] = {}
        self._aliases: dict[str, str] = {}
        self._finalized = False

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("registry builder is already finalized")

    def add_tree(self, char: str, tree: Component) -> None:
        """Register a decomposition for char, replacing any earlier record."""
        self._check_open()
        self._aliases.pop(char, None)
        self._trees[char] = tree.labeled(char)

    def add_alias(self, source: str, target: str) -> None:
        """Declare that source decomposes exactly like target."""
        self._check_open()
        self._trees.pop(source, None)
        self._aliases[source] = target

    def add_atomic(self, char: str) -> None:
        """Register char as its own single leaf."""
        self.add_tree(char, Component.leaf(char))

    def add_ids(
        self,
        char: str,
        ids: Optional[str],
        source: str = "",
        line_no: int = 0,
    ) -> bool:
        """
        Ingest one record.

        Args:
            char: The record's character
            ids: The IDS to parse; None or empty registers char as atomic
            source: Record origin, for diagnostics
            line_no: Record line number, for diagnostics

        Returns:
            False if the IDS was malformed and the record skipped, else True
        """
        if not ids:
            self.add_atomic(char)
            return True

        result = try_parse_ids(ids, self.normalizer)
        if not result.ok:
            self.issues.append(IngestIssue(source, line_no, char, ids, result.error))
            return False

        tree = result.tree
        if tree.is_leaf and tree.char != char:
            self.add_alias(char, tree.char)
        else:
            self.add_tree(char, tree)
        return True

    def finalize(self) -> tuple[Registry, AliasTable]:
        """Close the builder and return the frozen registry and alias table."""
        self._finalized = True
        return Registry(self._trees), AliasTable(self._aliases)
