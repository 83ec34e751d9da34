#!/usr/bin/env python3
"""
chise_ids.py

Reads CHISE IDS corpus files and the local override file into a component
registry.

Corpus format (IDS-UCS-*.txt):
    U+XXXX<TAB>char[<TAB>IDS[<TAB>@apparent=IDS]]
Override format:
    char<TAB>IDS

Lines starting with ";" are comments. Corpus files are ingested in the order
given, then the override file, so later records win.
"""

import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Add parent directory to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lib.normalizers import Normalizer, normalize_leaf
from lib.paths import CHISE_IDS_DIR
from lib.registry import AliasTable, IngestIssue, Registry, RegistryBuilder

COMMENT_PREFIX = ";"
APPARENT_MARKER = "@apparent="


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IDSRecord:
    """One character entry read from a corpus or override file."""
    source: str
    line_no: int
    char: str
    ids: Optional[str]      # None when the record has no decomposition


def choose_ids(primary: str, additional: str = "") -> str:
    """
    Pick the IDS to parse for a record.

    The additional-info field ("key=value", usually "@apparent=...") wins over
    the primary IDS when it carries a value.
    """
    if not additional and APPARENT_MARKER in primary:
        primary, _, rest = primary.partition(APPARENT_MARKER)
        additional = APPARENT_MARKER + rest

    _, sep, value = additional.partition("=")
    if sep and value.strip():
        return value.strip()
    return primary.strip()


def _is_skipped(line: str) -> bool:
    return not line.strip() or line.startswith(COMMENT_PREFIX)


def iter_corpus_records(path: Path) -> Iterator[IDSRecord]:
    """Yield records from a CHISE IDS-UCS file, skipping comments and blank lines."""
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if _is_skipped(line):
                continue

            parts = line.split("\t")
            if len(parts) < 2 or not parts[1].strip():
                continue

            char = parts[1].strip()
            primary = parts[2] if len(parts) >= 3 else ""
            additional = parts[3] if len(parts) >= 4 else ""
            ids = choose_ids(primary, additional)

            yield IDSRecord(path.name, line_no, char, ids or None)


def iter_override_records(path: Path) -> Iterator[IDSRecord]:
    """Yield records from the override file (char<TAB>IDS per line)."""
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if _is_skipped(line):
                continue

            char, _, ids = line.partition("\t")
            char = char.strip()
            if not char:
                continue

            yield IDSRecord(path.name, line_no, char, ids.strip() or None)


def discover_corpus_files(directory: Path = CHISE_IDS_DIR) -> list[Path]:
    """Return the IDS-UCS-*.txt files in directory, sorted by name."""
    if not directory.exists():
        return []
    return sorted(p for p in directory.glob("IDS-UCS-*.txt") if p.is_file())


# ---------------------------------------------------------------------------
# Registry Loading
# ---------------------------------------------------------------------------

@dataclass
class IngestResult:
    """Frozen tables plus the diagnostics collected while building them."""
    registry: Registry
    aliases: AliasTable
    issues: list[IngestIssue] = field(default_factory=list)
    records: int = 0


def ingest_records(
    records: Iterable[IDSRecord],
    builder: RegistryBuilder,
) -> int:
    """Feed records into builder in order. Returns the number of records read."""
    count = 0
    for record in records:
        builder.add_ids(record.char, record.ids, record.source, record.line_no)
        count += 1
    return count


def load_registry(
    corpus_paths: Iterable[Path],
    override_path: Optional[Path] = None,
    normalizer: Normalizer = normalize_leaf,
) -> IngestResult:
    """
    Build the registry and alias table from corpus files and overrides.

    Args:
        corpus_paths: CHISE IDS files, ingested in the given order
        override_path: Optional override file, ingested last
        normalizer: Leaf normalizer passed to the IDS parser

    Returns:
        IngestResult with the finalized registry, alias table and skipped records
    """
    builder = RegistryBuilder(normalizer)
    records = 0

    for path in corpus_paths:
        records += ingest_records(iter_corpus_records(path), builder)

    if override_path is not None:
        records += ingest_records(iter_override_records(override_path), builder)

    registry, aliases = builder.finalize()
    return IngestResult(registry, aliases, builder.issues, records)
