#!/usr/bin/env python3
"""
component_io.py

Load and save the component data document consumed by the game layer.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .component_stats import ComponentRanking, component_sets
from .components import Component
from .paths import COMPONENT_DATA_JSON
from .resolver import ResolvedRegistry


# ---------------------------------------------------------------------------
# Document Building
# ---------------------------------------------------------------------------

def build_component_document(
    resolved: ResolvedRegistry,
    ranking: ComponentRanking,
    metadata: dict | None = None,
) -> dict:
    """
    Build the component data document.

    Args:
        resolved: Fully resolved registry
        ranking: Component frequency ranking over the vocabulary
        metadata: Extra metadata merged into the "metadata" block

    Returns:
        Document dict with components, componentSets, aliases, words, frequency
        and metadata
    """
    return {
        "components": {char: tree.to_dict() for char, tree in resolved.items()},
        "componentSets": component_sets(resolved),
        "aliases": dict(resolved.aliases),
        "words": list(ranking.words),
        "frequency": [[char, count] for char, count in ranking.ranking],
        "metadata": {
            "generated": datetime.now(timezone.utc).isoformat(),
            "components": len(resolved),
            "failures": len(resolved.failures),
            "words": len(ranking.words),
            "skippedWords": len(ranking.missing),
            "failedWords": len(ranking.failed),
            **(metadata or {}),
        },
    }


# ---------------------------------------------------------------------------
# Document Loading
# ---------------------------------------------------------------------------

@dataclass
class ComponentData:
    """A loaded component data document."""
    components: dict[str, Component] = field(default_factory=dict)
    component_sets: dict[str, list[str]] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)
    words: list[str] = field(default_factory=list)
    frequency: list[tuple[str, int]] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)


def load_component_data(path: Path = COMPONENT_DATA_JSON) -> ComponentData:
    """
    Load a component data document.

    Args:
        path: Path to the JSON document

    Returns:
        ComponentData with trees rebuilt as Component objects
    """
    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)

    return ComponentData(
        components={char: Component.from_dict(tree) for char, tree in doc.get("components", {}).items()},
        component_sets=doc.get("componentSets", {}),
        aliases=doc.get("aliases", {}),
        words=doc.get("words", []),
        frequency=[(char, count) for char, count in doc.get("frequency", [])],
        metadata=doc.get("metadata", {}),
    )


# ---------------------------------------------------------------------------
# JSON Document Writing
# ---------------------------------------------------------------------------

def _without_timestamp(doc: dict) -> dict:
    metadata = {k: v for k, v in doc.get("metadata", {}).items() if k != "generated"}
    return {**doc, "metadata": metadata}


def write_json_document(doc: dict, filepath: Path) -> bool:
    """
    Write a JSON document with standard formatting.

    Uses ensure_ascii=False, indent=2, and adds trailing newline. The
    metadata.generated timestamp is ignored when checking for changes.

    Args:
        doc: The document to write
        filepath: Path to write to

    Returns:
        True if file was created or content changed, False if unchanged
    """
    if filepath.exists():
        with open(filepath, "r", encoding="utf-8") as f:
            try:
                existing = json.load(f)
                if isinstance(existing, dict) and _without_timestamp(existing) == _without_timestamp(doc):
                    return False
            except json.JSONDecodeError:
                pass  # Corrupted file, overwrite it

    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(doc, f, ensure_ascii=False, indent=2)
        f.write("\n")

    return True
