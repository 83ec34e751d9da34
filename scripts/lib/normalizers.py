#!/usr/bin/env python3
"""
Normalization strategies for IDS leaf components.

Each normalizer is a function that takes a leaf token and returns its canonical form.
The parser applies one to every leaf it builds, so all trees agree on a single
spelling per component.
"""

import unicodedata
from typing import Callable

# Type alias for normalizer functions
Normalizer = Callable[[str], str]

# CJK Radicals Supplement mappings (U+2E80-2EFF)
# Only positional variants whose drawn form matches the base character
CJK_RAD_SUPP_MAP = {
    0x2E96: '忄',  # ⺖ HEART ONE
    0x2E97: '忄',  # ⺗ HEART TWO
    0x2EA8: '犭',  # ⺨ DOG
    0x2EB6: '羊',  # ⺶ SHEEP
    0x2EB7: '羊',  # ⺷ RAM
    0x2EB8: '羊',  # ⺸ EWE
    0x2ECC: '辶',  # ⻌ SIMPLIFIED WALK
    0x2ECD: '辶',  # ⻍ WALK ONE
    0x2ECE: '辶',  # ⻎ WALK TWO
    0x2ECF: '阝',  # ⻏ CITY
    0x2ED6: '阝',  # ⻖ MOUND TWO
    0x2EDE: '食',  # ⻞ EAT TWO
    0x2EDF: '食',  # ⻟ EAT THREE
    0x2EE0: '食',  # ⻠ C-SIMPLIFIED EAT
}

# Unified characters with more than one common glyph. The renderer needs a fixed
# glyph, so these leaves carry an ideographic variation selector.
VARIANT_SELECTOR_MAP = {
    '辶': '辶\U000E0100',
}


def nfkc(char: str) -> str:
    """
    Standard Unicode NFKC normalization, applied repeatedly until stable.

    Maps Kangxi Radicals (U+2F00-2FDF) and CJK Compatibility Ideographs to the
    base CJK characters. Multi-character tokens (escapes such as &CDP-8B7C;)
    are returned unchanged.
    """
    if len(char) != 1:
        return char

    seen = {char}
    result = char

    while True:
        normalized = unicodedata.normalize('NFKC', result)
        if normalized == result or normalized in seen:
            return result
        seen.add(normalized)
        result = normalized


def nfkc_plus(char: str) -> str:
    """NFKC plus the CJK Radicals Supplement mappings."""
    result = nfkc(char)

    if len(result) != 1:
        return result

    return CJK_RAD_SUPP_MAP.get(ord(result), result)


def identity(char: str) -> str:
    """Identity normalizer - returns the token unchanged."""
    return char


def make_leaf_normalizer(variant_map: dict[str, str]) -> Normalizer:
    """
    Create a normalizer that applies nfkc_plus, then pins variant glyphs.

    Args:
        variant_map: Dict mapping a base character -> the variation sequence to use

    Returns:
        A normalizer function for parser leaves
    """
    def normalize(char: str) -> str:
        result = nfkc_plus(char)
        return variant_map.get(result, result)

    return normalize


normalize_leaf = make_leaf_normalizer(VARIANT_SELECTOR_MAP)


# Registry of available normalizers
NORMALIZERS: dict[str, Normalizer] = {
    'leaf': normalize_leaf,
    'nfkc_plus': nfkc_plus,
    'none': identity,
}


def get_normalizer(name: str) -> Normalizer:
    """Get a normalizer function by name."""
    if name not in NORMALIZERS:
        raise ValueError(f"Unknown normalizer: {name}. Available: {list(NORMALIZERS.keys())}")
    return NORMALIZERS[name]
