#!/usr/bin/env python3
"""
vocabulary.py

Load word lists for the component frequency ranking.

File format: UTF-8 text, one word per line. Blank lines and lines starting
with "#" are ignored.
"""

from collections.abc import Iterable
from pathlib import Path


def load_words(path: Path) -> list[str]:
    """Load one word list, keeping file order."""
    words: list[str] = []

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if not word or word.startswith("#"):
                continue
            words.append(word)

    return words


def load_vocabulary(paths: Iterable[Path]) -> list[str]:
    """
    Load and merge several word lists.

    Duplicates are dropped, keeping the first occurrence.
    """
    merged: dict[str, None] = {}
    for path in paths:
        merged.update(dict.fromkeys(load_words(path)))
    return list(merged)
