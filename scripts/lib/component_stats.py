#!/usr/bin/env python3
"""
component_stats.py

Walks resolved composition trees to derive leaf sets, tree depth, word
complexity and the corpus-wide component frequency ranking.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from .components import Component


# ---------------------------------------------------------------------------
# Tree Walks
# ---------------------------------------------------------------------------

def leaves(tree: Component) -> list[Component]:
    """All leaf nodes under tree, in depth-first order."""
    if tree.is_leaf:
        return [tree]

    result: list[Component] = []
    for child in tree.children:
        result.extend(leaves(child))
    return result


def component_chars(tree: Component) -> list[str]:
    """Every character in tree in pre-order, root labels included, with duplicates."""
    chars = [tree.char] if tree.char else []
    for child in tree.children:
        chars.extend(component_chars(child))
    return chars


def leaf_chars(tree: Component) -> list[str]:
    """Distinct leaf characters under tree, in first-seen order."""
    return list(dict.fromkeys(leaf.char for leaf in leaves(tree)))


def depth(tree: Component) -> int:
    """0 for a leaf, otherwise 1 + the deepest child."""
    if tree.is_leaf:
        return 0
    return 1 + max(depth(child) for child in tree.children)


def component_sets(registry: Mapping[str, Component]) -> dict[str, list[str]]:
    """Map each character to the distinct leaf characters it is built from."""
    return {char: leaf_chars(tree) for char, tree in registry.items()}


def _lookup(registry: Mapping[str, Component], char: str) -> Optional[Component]:
    lookup = getattr(registry, "lookup", None)
    if lookup is not None:
        return lookup(char)
    return registry.get(char)


def word_complexity(word: str, registry: Mapping[str, Component]) -> Optional[int]:
    """
    Total number of leaves across the characters of word.

    Returns None if any character of the word has no resolved tree.
    """
    total = 0
    for char in word:
        tree = _lookup(registry, char)
        if tree is None:
            return None
        total += len(leaves(tree))
    return total


# ---------------------------------------------------------------------------
# Frequency Ranking
# ---------------------------------------------------------------------------

@dataclass
class ComponentRanking:
    """Leaf component frequencies over a vocabulary."""
    counts: dict[str, int] = field(default_factory=dict)       # leaf char -> words using it
    ranking: list[tuple[str, int]] = field(default_factory=list)
    words: list[str] = field(default_factory=list)             # words that were counted
    missing: list[tuple[str, str]] = field(default_factory=list)  # (word, unknown char)
    failed: list[tuple[str, str]] = field(default_factory=list)   # (word, char that failed to resolve)

    def top(self, n: int) -> list[tuple[str, int]]:
        return self.ranking[:n]


def rank_components(
    vocabulary: Iterable[str],
    registry: Mapping[str, Component],
) -> ComponentRanking:
    """
    Count, for every leaf component, how many vocabulary words use it.

    A word contributes at most once per distinct leaf, however many of its
    characters contain that leaf. Words with a character that has no resolved
    tree are skipped: reported in `failed` when the character's resolution
    failed (alias cycle, self-containment), otherwise in `missing`.

    The ranking is sorted by descending count; equal counts keep the order in
    which the leaves were first seen.
    """
    result = ComponentRanking()

    for word in vocabulary:
        word_leaves: dict[str, None] = {}
        unresolved = None

        for char in word:
            tree = _lookup(registry, char)
            if tree is None:
                unresolved = char
                break
            word_leaves.update(dict.fromkeys(leaf_chars(tree)))

        if unresolved is not None:
            if unresolved in getattr(registry, "failures", {}):
                result.failed.append((word, unresolved))
            else:
                result.missing.append((word, unresolved))
            continue

        result.words.append(word)
        for leaf in word_leaves:
            result.counts[leaf] = result.counts.get(leaf, 0) + 1

    result.ranking = sorted(result.counts.items(), key=lambda item: item[1], reverse=True)
    return result
