#!/usr/bin/env python3
"""
test_ids_parser.py

Tokenizer and recursive-descent parser for IDS strings.
"""

import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

# Add parent directories to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from lib.components import IDS_ARITY, LEAF, Component
from lib.errors import IDSParseError
from lib.ids_parser import parse_ids, tokenize, try_parse_ids
from lib.normalizers import identity, nfkc_plus


OPERAND_CHARS = ["一", "丨", "丶"]


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def test_tokenize_splits_code_points() -> None:
    assert tokenize("⿰日月") == ["⿰", "日", "月"]


def test_tokenize_non_bmp_character_is_one_token() -> None:
    assert tokenize("⿱𠮷口") == ["⿱", "𠮷", "口"]


def test_tokenize_keeps_entity_reference_whole() -> None:
    assert tokenize("⿰&CDP-8B7C;月") == ["⿰", "&CDP-8B7C;", "月"]


def test_tokenize_unterminated_entity_fails() -> None:
    with pytest.raises(IDSParseError, match="unterminated entity reference"):
        tokenize("⿰&CDP-8B7C月")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("operator", sorted(IDS_ARITY))
def test_operator_children_in_order(operator: str) -> None:
    operands = OPERAND_CHARS[:IDS_ARITY[operator]]
    tree = parse_ids(operator + "".join(operands))

    assert tree.operator == operator
    assert tree.char is None
    assert tree.children == tuple(Component.leaf(c) for c in operands)


def test_nested_sequence() -> None:
    tree = parse_ids("⿱木⿰木木")

    assert tree.operator == "⿱"
    assert tree.children[0] == Component.leaf("木")
    assert tree.children[1].operator == "⿰"
    assert [c.char for c in tree.children[1].children] == ["木", "木"]
    assert str(tree) == "⿱木⿰木木"


def test_single_character_is_leaf() -> None:
    tree = parse_ids("木")
    assert tree.operator == LEAF
    assert tree.char == "木"
    assert tree.children == ()


def test_entity_reference_is_leaf() -> None:
    tree = parse_ids("⿰&M-06235;月")
    assert tree.children[0] == Component.leaf("&M-06235;")


def test_parsing_is_deterministic() -> None:
    ids = "⿰氵⿱⿰木木木"
    assert parse_ids(ids) == parse_ids(ids)


def test_missing_operand_fails() -> None:
    with pytest.raises(IDSParseError, match="unexpected end of sequence"):
        parse_ids("⿲木木")


def test_trailing_tokens_fail() -> None:
    with pytest.raises(IDSParseError, match="trailing tokens"):
        parse_ids("⿰木木木")


def test_empty_string_fails() -> None:
    with pytest.raises(IDSParseError):
        parse_ids("")


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_ids("⿰木")


def test_try_parse_reports_reason() -> None:
    result = try_parse_ids("⿰木")
    assert not result.ok
    assert result.tree is None
    assert result.error == "unexpected end of sequence"

    result = try_parse_ids("⿰木木")
    assert result.ok
    assert result.error is None


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def test_kangxi_radical_normalized_to_base_character() -> None:
    # U+2F1D KANGXI RADICAL MOUTH
    tree = parse_ids("⿰⼝月")
    assert tree.children[0].char == "口"


def test_radical_supplement_normalized() -> None:
    # U+2ECC CJK RADICAL SIMPLIFIED WALK -> 辶, pinned to its variation sequence
    tree = parse_ids("⿺⻌首")
    assert tree.children[0].char == "辶\U000E0100"


@pytest.mark.parametrize("radical,base", [
    ("⺶", "羊"),  # SHEEP
    ("⺷", "羊"),  # RAM
    ("⺸", "羊"),  # EWE
    ("⻠", "食"),  # C-SIMPLIFIED EAT
])
def test_sheep_and_eat_radicals_normalized(radical: str, base: str) -> None:
    assert nfkc_plus(radical) == base


def test_identity_normalizer_keeps_tokens() -> None:
    tree = parse_ids("⿺⻌首", normalizer=identity)
    assert tree.children[0].char == "⻌"


# ---------------------------------------------------------------------------
# Component
# ---------------------------------------------------------------------------

def test_component_rejects_wrong_arity() -> None:
    with pytest.raises(ValueError, match="takes 2 components"):
        Component("⿰", None, (Component.leaf("木"),))


def test_component_rejects_unknown_operator() -> None:
    with pytest.raises(ValueError, match="unknown IDS operator"):
        Component("+", None, (Component.leaf("木"), Component.leaf("木")))


def test_leaf_requires_character() -> None:
    with pytest.raises(ValueError, match="require a character"):
        Component(LEAF, None)


def test_component_is_immutable() -> None:
    tree = parse_ids("⿰木木")
    with pytest.raises(FrozenInstanceError):
        tree.char = "林"


def test_component_dict_shape() -> None:
    tree = parse_ids("⿰日月").labeled("明")
    assert tree.to_dict() == {
        "type": "⿰",
        "char": "明",
        "children": [
            {"type": "leaf", "char": "日", "children": []},
            {"type": "leaf", "char": "月", "children": []},
        ],
    }
    assert Component.from_dict(tree.to_dict()) == tree
