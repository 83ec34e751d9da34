#!/usr/bin/env python3
"""
component_data_generator.py

Builds the component data document used by the game layer.

Pipeline:
1. Parse every CHISE IDS-UCS file, then the override file, into a registry of
   composition trees and an alias table (malformed records are skipped and listed)
2. Resolve every tree until its leaves are atomic components
3. Rank leaf components by how many vocabulary words use them
4. Write components, per-character component sets, words and the ranking to JSON

Paths default to lib/paths.py. A .env file at the project root may override
them with KANJI_TREE_CHISE_DIR, KANJI_TREE_OVERRIDES, KANJI_TREE_WORDS and
KANJI_TREE_OUTPUT; command-line flags win over both.

Usage:
    python generators/component_data_generator.py [--dry-run] [--words PATH ...]
"""

import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Add parent directory to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.chise_ids import discover_corpus_files, load_registry
from adapters.vocabulary import load_vocabulary
from lib.component_io import build_component_document, write_json_document
from lib.component_stats import rank_components
from lib.normalizers import NORMALIZERS, get_normalizer
from lib.paths import CHISE_IDS_DIR, COMPONENT_DATA_JSON, ENV_FILE, OVERRIDES_PATH, WORDS_PATH
from lib.resolver import resolve_registry

SAMPLE_SIZE = 5


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class GeneratorConfig:
    """Resolved input/output locations for one run."""
    chise_dir: Path
    overrides: Optional[Path]
    overrides_required: bool
    words: list[Path]
    output: Path


def load_config(args: argparse.Namespace, env_file: Path = ENV_FILE) -> GeneratorConfig:
    """Combine command-line flags, .env overrides and lib.paths defaults."""
    load_dotenv(env_file)

    def from_env(name: str, default: Path) -> Path:
        value = os.environ.get(name)
        return Path(value) if value else default

    chise_dir = args.chise_dir or from_env("KANJI_TREE_CHISE_DIR", CHISE_IDS_DIR)
    output = args.output or from_env("KANJI_TREE_OUTPUT", COMPONENT_DATA_JSON)
    words = args.words or [from_env("KANJI_TREE_WORDS", WORDS_PATH)]

    if args.no_overrides:
        overrides, required = None, False
    elif args.overrides:
        overrides, required = args.overrides, True
    else:
        overrides = from_env("KANJI_TREE_OVERRIDES", OVERRIDES_PATH)
        required = "KANJI_TREE_OVERRIDES" in os.environ

    return GeneratorConfig(chise_dir, overrides, required, words, output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate resolved kanji component data")
    parser.add_argument("--chise-dir", type=Path, help="Directory containing IDS-UCS-*.txt files")
    parser.add_argument("--overrides", type=Path, help="Override file (char<TAB>IDS per line)")
    parser.add_argument("--no-overrides", action="store_true", help="Ignore the override file")
    parser.add_argument("--words", type=Path, action="append", help="Word list file (repeatable)")
    parser.add_argument("--output", type=Path, help="Output JSON path")
    parser.add_argument("--normalizer", choices=sorted(NORMALIZERS), default="leaf",
                        help="Leaf normalizer applied while parsing (default: leaf)")
    parser.add_argument("--top", type=int, default=10, help="Number of top components to print")
    parser.add_argument("--dry-run", action="store_true", help="Build everything but don't write output")
    return parser


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args)

    print("Kanji Component Data Generator")
    print("=" * 40)

    # Step 1: Locate input files
    print("\n1. Locating input files...")
    corpus_paths = discover_corpus_files(config.chise_dir)
    if not corpus_paths:
        print(f"Error: no IDS-UCS-*.txt files found in {config.chise_dir}")
        return 1
    for path in corpus_paths:
        print(f"  Corpus: {path.name}")

    overrides = config.overrides
    if overrides is not None and not overrides.exists():
        if config.overrides_required:
            print(f"Error: override file not found: {overrides}")
            return 1
        print(f"  No override file at {overrides} (skipped)")
        overrides = None
    elif overrides is not None:
        print(f"  Overrides: {overrides.name}")

    missing_words = [path for path in config.words if not path.exists()]
    if missing_words:
        print(f"Error: word list not found: {missing_words[0]}")
        return 1

    # Step 2: Ingest corpus and overrides
    print("\n2. Parsing IDS records...")
    ingest = load_registry(corpus_paths, overrides, get_normalizer(args.normalizer))
    print(f"  Read {ingest.records} records")
    print(f"  Registry: {len(ingest.registry)} characters")
    print(f"  Aliases: {len(ingest.aliases)}")
    print(f"  Skipped (malformed IDS): {len(ingest.issues)}")
    for issue in ingest.issues[:SAMPLE_SIZE]:
        print(f"    {issue}")

    # Step 3: Resolve trees
    print("\n3. Resolving component trees...")
    resolved = resolve_registry(ingest.registry, ingest.aliases)
    print(f"  Resolved: {len(resolved)} characters")
    print(f"  Failed: {len(resolved.failures)}")
    for char, error in list(resolved.failures.items())[:SAMPLE_SIZE]:
        print(f"    {char}: {error}")

    # Step 4: Rank components over the vocabulary
    print("\n4. Ranking components...")
    vocabulary = load_vocabulary(config.words)
    ranking = rank_components(vocabulary, resolved)
    print(f"  Vocabulary: {len(vocabulary)} words")
    print(f"  Counted: {len(ranking.words)} words")
    print(f"  Skipped (unknown character): {len(ranking.missing)}")
    for word, char in ranking.missing[:SAMPLE_SIZE]:
        print(f"    {word}: no tree for {char}")
    print(f"  Skipped (failed character): {len(ranking.failed)}")
    for word, char in ranking.failed[:SAMPLE_SIZE]:
        print(f"    {word}: {resolved.failures[char]}")

    # Step 5: Output
    print("\n5. Writing output...")
    document = build_component_document(
        resolved,
        ranking,
        metadata={
            "sources": [path.name for path in corpus_paths],
            "overrides": overrides.name if overrides else None,
            "skippedRecords": len(ingest.issues),
        },
    )
    if args.dry_run:
        print("  Dry run - skipping file writes")
    elif write_json_document(document, config.output):
        print(f"  Written to: {config.output}")
    else:
        print(f"  Unchanged: {config.output}")

    print("\n" + "=" * 40)
    print("Summary:")
    print(f"  Components: {len(resolved)}  Words: {len(ranking.words)}  Ranked leaves: {len(ranking.ranking)}")
    print(f"\nTop {args.top} components:")
    for char, count in ranking.top(args.top):
        print(f"  {char}  words: {count:>5}")

    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
