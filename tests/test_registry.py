#!/usr/bin/env python3
"""
test_registry.py

Registry building (tree vs. alias branching, last-write-wins) and alias
resolution.
"""

import sys
from pathlib import Path

import pytest

# Add parent directories to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from lib.components import Component
from lib.errors import AliasCycleError
from lib.ids_parser import parse_ids
from lib.registry import AliasTable, RegistryBuilder


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def test_record_without_ids_is_atomic() -> None:
    builder = RegistryBuilder()
    builder.add_ids("一", None)
    builder.add_ids("丨", "")
    registry, aliases = builder.finalize()

    assert registry["一"] == Component.leaf("一")
    assert registry["丨"] == Component.leaf("丨")
    assert len(aliases) == 0


def test_self_decomposition_is_atomic() -> None:
    builder = RegistryBuilder()
    builder.add_ids("木", "木")
    registry, aliases = builder.finalize()

    assert registry["木"] == Component.leaf("木")
    assert "木" not in aliases


def test_single_different_leaf_is_alias() -> None:
    builder = RegistryBuilder()
    builder.add_ids("丙", "甲")
    registry, aliases = builder.finalize()

    assert "丙" not in registry
    assert aliases["丙"] == "甲"


def test_tree_root_is_stamped_with_character() -> None:
    builder = RegistryBuilder()
    builder.add_ids("明", "⿰日月")
    registry, _ = builder.finalize()

    assert registry["明"].char == "明"
    assert registry["明"].children == parse_ids("⿰日月").children


def test_later_tree_replaces_earlier_tree() -> None:
    builder = RegistryBuilder()
    builder.add_ids("明", "⿰日月")
    builder.add_ids("明", "⿱日⿰月月")
    registry, _ = builder.finalize()

    assert registry["明"] == parse_ids("⿱日⿰月月").labeled("明")


def test_later_tree_replaces_alias() -> None:
    builder = RegistryBuilder()
    builder.add_ids("丙", "甲")
    builder.add_ids("丙", "⿱一内")
    registry, aliases = builder.finalize()

    assert "丙" not in aliases
    assert registry["丙"].operator == "⿱"


def test_later_alias_replaces_tree() -> None:
    builder = RegistryBuilder()
    builder.add_ids("丙", "⿱一内")
    builder.add_ids("丙", "甲")
    registry, aliases = builder.finalize()

    assert "丙" not in registry
    assert aliases["丙"] == "甲"


def test_malformed_record_is_reported_and_skipped() -> None:
    builder = RegistryBuilder()
    assert builder.add_ids("明", "⿰日&CDP-8B7C", source="IDS-UCS-Basic.txt", line_no=7) is False
    registry, _ = builder.finalize()

    assert "明" not in registry
    assert len(builder.issues) == 1
    issue = builder.issues[0]
    assert (issue.source, issue.line_no, issue.char) == ("IDS-UCS-Basic.txt", 7, "明")
    assert issue.reason == "unterminated entity reference"


def test_malformed_record_keeps_earlier_entry() -> None:
    builder = RegistryBuilder()
    builder.add_ids("明", "⿰日月")
    builder.add_ids("明", "⿰日")
    registry, _ = builder.finalize()

    assert registry["明"] == parse_ids("⿰日月").labeled("明")


def test_finalized_builder_rejects_records() -> None:
    builder = RegistryBuilder()
    builder.finalize()
    with pytest.raises(RuntimeError, match="already finalized"):
        builder.add_ids("木", None)


def test_finalized_registry_is_read_only() -> None:
    builder = RegistryBuilder()
    builder.add_ids("木", None)
    registry, _ = builder.finalize()

    with pytest.raises(TypeError):
        registry["林"] = Component.leaf("林")

    assert list(registry) == ["木"]


# ---------------------------------------------------------------------------
# Alias Table
# ---------------------------------------------------------------------------

def test_alias_chain_reaches_fixed_point() -> None:
    aliases = AliasTable({"A": "B", "B": "C"})
    assert aliases.resolve("A") == "C"
    assert aliases.resolve("B") == "C"
    assert aliases.resolve("C") == "C"
    assert aliases.resolve("Z") == "Z"


def test_alias_cycle_fails_for_every_member() -> None:
    aliases = AliasTable({"A": "B", "B": "A"})

    with pytest.raises(AliasCycleError, match="A -> B -> A"):
        aliases.resolve("A")
    with pytest.raises(AliasCycleError, match="B -> A -> B"):
        aliases.resolve("B")


def test_self_alias_is_a_cycle() -> None:
    with pytest.raises(AliasCycleError):
        AliasTable({"A": "A"}).resolve("A")


def test_alias_chain_hop_limit() -> None:
    links = {f"c{i}": f"c{i + 1}" for i in range(10)}
    aliases = AliasTable(links)

    assert aliases.resolve("c0", max_hops=10) == "c10"
    with pytest.raises(AliasCycleError, match="longer than 5 hops") as excinfo:
        aliases.resolve("c0", max_hops=5)
    assert excinfo.value.chain[0] == "c0"
