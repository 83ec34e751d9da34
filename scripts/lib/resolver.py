#!/usr/bin/env python3
"""
resolver.py

Expands every registry tree until its leaves are atomic characters.

Each leaf is followed through the alias table; when the target character has a
registry entry, the leaf is replaced by the target's own resolved tree. Resolved
trees are memoized per character, so every substitution inserts a tree that is
already fully expanded. Trees are immutable and rebuilt bottom-up, which means a
shared subtree can never be changed through one of its parents.

Corrupt data is isolated per character: an alias cycle, or a character whose
tree leads back to itself, fails that character and every character built on
it, and resolution of the rest continues.
"""

from collections.abc import Iterator, Mapping
from dataclasses import replace
from typing import Optional

from .components import Component
from .errors import AliasCycleError, ResolutionError, SelfContainmentError
from .registry import MAX_ALIAS_HOPS, AliasTable, Registry


class ResolvedRegistry(Mapping):
    """
    Read-only mapping of character -> fully resolved Component tree.

    Characters whose resolution failed are absent from the mapping and listed in
    `failures` with the error that excluded them. Alias sources that reach a
    fixed point are listed in `aliases` (source -> fixed point).
    """

    def __init__(
        self,
        trees: dict[str, Component],
        failures: dict[str, ResolutionError],
        aliases: dict[str, str],
    ):
        self._trees = dict(trees)
        self.failures = dict(failures)
        self.aliases = dict(aliases)

    def __getitem__(self, char: str) -> Component:
        return self._trees[char]

    def __iter__(self) -> Iterator[str]:
        return iter(self._trees)

    def __len__(self) -> int:
        return len(self._trees)

    def lookup(self, char: str) -> Optional[Component]:
        """
        Return the resolved tree for char, following aliases.

        An alias whose fixed point has no registry entry yields a leaf for the
        fixed point. Returns None for unknown or failed characters.
        """
        if char in self._trees:
            return self._trees[char]
        target = self.aliases.get(char)
        if target is None:
            return None
        return self._trees.get(target, Component.leaf(target))

class Resolver:
    """Memoized resolution of a finalized registry."""

    def __init__(
        self,
        registry: Registry,
        aliases: AliasTable,
        max_alias_hops: int = MAX_ALIAS_HOPS,
    ):
        self.registry = registry
        self.aliases = aliases
        self.max_alias_hops = max_alias_hops
        self._resolved: dict[str, Component] = {}
        self._failed: dict[str, ResolutionError] = {}
        self._in_progress: list[str] = []

    def resolve(self, char: str) -> Component:
        """
        Return the fully expanded tree for a registered character.

        Raises:
            KeyError: if char has no registry entry
            AliasCycleError: if a leaf of the tree never reaches an alias fixed point
            SelfContainmentError: if the tree refers back to char
        """
        if char in self._resolved:
            return self._resolved[char]
        if char in self._failed:
            raise self._failed[char]
        if char in self._in_progress:
            start = self._in_progress.index(char)
            raise SelfContainmentError(
                "decomposition contains itself", self._in_progress[start:] + [char]
            )

        tree = self.registry[char]
        if tree.is_leaf:
            # Registered leaves are stamped with their own character: atomic
            self._resolved[char] = tree
            return tree

        self._in_progress.append(char)
        try:
            resolved = self._expand(tree).labeled(char)
        except ResolutionError as e:
            self._failed[char] = e
            raise
        finally:
            self._in_progress.pop()

        self._resolved[char] = resolved
        return resolved

    def resolve_reference(self, char: str) -> Component:
        """
        Resolve a leaf reference to char.

        Returns the target's resolved tree when the alias fixed point is
        registered, otherwise an atomic leaf for the fixed point.
        """
        target = self.aliases.resolve(char, self.max_alias_hops)
        if target in self.registry:
            return self.resolve(target)
        return Component.leaf(target)

    def _expand(self, node: Component) -> Component:
        if node.is_leaf:
            resolved = self.resolve_reference(node.char)
            return node if resolved == node else resolved

        children = tuple(self._expand(child) for child in node.children)
        if children == node.children:
            return node
        return replace(node, children=children)

    def resolve_all(self) -> ResolvedRegistry:
        """Resolve every registry entry, collecting failures instead of raising."""
        trees: dict[str, Component] = {}

        for char in self.registry:
            try:
                trees[char] = self.resolve(char)
            except ResolutionError as e:
                self._failed.setdefault(char, e)

        # Alias sources have no tree of their own, but still fail with their target
        targets: dict[str, str] = {}
        for source in self.aliases:
            try:
                target = self.aliases.resolve(source, self.max_alias_hops)
            except AliasCycleError as e:
                self._failed.setdefault(source, e)
                continue
            if target in self._failed:
                self._failed.setdefault(source, self._failed[target])
            else:
                targets[source] = target

        return ResolvedRegistry(trees, self._failed, targets)

    @property
    def failures(self) -> dict[str, ResolutionError]:
        return dict(self._failed)


def resolve_registry(
    registry: Registry,
    aliases: AliasTable,
    max_alias_hops: int = MAX_ALIAS_HOPS,
) -> ResolvedRegistry:
    """Convenience wrapper: resolve a finalized registry in one call."""
    return Resolver(registry, aliases, max_alias_hops).resolve_all()
