#!/usr/bin/env python3
"""
find_component_popularity.py

Reports how popular each leaf component is, from a generated component data
document (see generators/component_data_generator.py).

For every ranked component the report shows:
- words: vocabulary words whose characters use it (the ranking itself)
- share: words / counted words
- chars: registry characters built from it at least once

Outputs:
- Text report sorted by word count, then by character count

Usage:
    python analyzers/find_component_popularity.py [--input PATH] [--top N] [--dry-run]
"""

import argparse
import sys
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Add parent directory to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lib.component_io import ComponentData, load_component_data
from lib.paths import COMPONENT_DATA_JSON, REPORTS_DIR

OUTPUT_TXT = REPORTS_DIR / "component-popularity.txt"


@dataclass
class PopularityEntry:
    """One leaf component with its usage counts."""
    char: str
    words: int          # Vocabulary words using the component
    chars: int          # Registry characters containing the component
    share: float        # words / counted vocabulary words


def collect_popularity(data: ComponentData) -> list[PopularityEntry]:
    """Combine the word ranking with per-character component sets."""
    char_counts: Counter = Counter()
    for leaf_chars in data.component_sets.values():
        char_counts.update(leaf_chars)

    total_words = len(data.words) or 1
    entries = [
        PopularityEntry(char, words, char_counts.get(char, 0), words / total_words)
        for char, words in data.frequency
    ]
    # Stable: ties on both counts keep the ranking order
    entries.sort(key=lambda e: (e.words, e.chars), reverse=True)
    return entries


def write_text_report(
    entries: list[PopularityEntry],
    data: ComponentData,
    output_path: Path,
    top: Optional[int] = None,
) -> None:
    """Write the popularity report."""
    shown = entries[:top] if top else entries
    ranked = {e.char for e in entries}
    unused = {c for chars in data.component_sets.values() for c in chars} - ranked

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write("Kanji Component Popularity\n")
        f.write("=" * 40 + "\n")
        f.write(f"Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}\n")
        f.write(f"Resolved characters: {len(data.components)}\n")
        f.write(f"Counted words: {len(data.words)}\n")
        f.write(f"Ranked components: {len(entries)}\n")
        f.write(f"Components no counted word uses: {len(unused)}\n")
        f.write("\n")

        for rank, entry in enumerate(shown, start=1):
            f.write(
                f"{rank:>5}. {entry.char}  words: {entry.words:>5}  "
                f"share: {100 * entry.share:5.1f}%  chars: {entry.chars:>5}\n"
            )

    print(f"  Written to: {output_path}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Report leaf component popularity")
    parser.add_argument("--input", type=Path, default=COMPONENT_DATA_JSON, help="Component data JSON")
    parser.add_argument("--output", type=Path, default=OUTPUT_TXT, help="Report path")
    parser.add_argument("--top", type=int, default=None, help="Only report the top N components")
    parser.add_argument("--dry-run", action="store_true", help="Print the summary but don't write the report")
    args = parser.parse_args(argv)

    print("Kanji Component Popularity")
    print("=" * 40)

    print("\n1. Loading component data...")
    if not args.input.exists():
        print(f"Error: {args.input} not found. Run generators/component_data_generator.py first.")
        return 1
    data = load_component_data(args.input)
    print(f"  Found {len(data.components)} resolved characters")
    print(f"  Found {len(data.frequency)} ranked components")

    print("\n2. Collecting popularity...")
    entries = collect_popularity(data)

    print("\n3. Writing output...")
    if args.dry_run:
        print("  Dry run - skipping file writes")
    else:
        write_text_report(entries, data, args.output, args.top)

    print("\nTop 10 components:")
    for entry in entries[:10]:
        print(f"  {entry.char}  words: {entry.words:>5}  chars: {entry.chars:>5}")

    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
