#!/usr/bin/env python3
"""
Dump resolved component trees to a text file for review.
Characters are written in document order, or only those given with --chars.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

# Add parent directory to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lib.component_io import load_component_data
from lib.component_stats import depth, leaves
from lib.components import Component
from lib.paths import COMPONENT_DATA_JSON, REPORTS_DIR


def format_tree(tree: Component, indent: int = 0) -> list[str]:
    """Render a tree one node per line, children indented under their operator."""
    pad = "  " * indent
    if tree.is_leaf:
        return [f"{pad}{tree.char}"]

    label = f" ({tree.char})" if tree.char else ""
    lines = [f"{pad}{tree.operator}{label}"]
    for child in tree.children:
        lines.extend(format_tree(child, indent + 1))
    return lines


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dump resolved component trees")
    parser.add_argument("--input", type=Path, default=COMPONENT_DATA_JSON, help="Component data JSON")
    parser.add_argument("--output", type=Path, default=REPORTS_DIR / "components_all.txt", help="Dump path")
    parser.add_argument("--chars", default="", help="Only dump these characters")
    args = parser.parse_args(argv)

    if not args.input.exists():
        print(f"Error: {args.input} not found")
        return 1

    data = load_component_data(args.input)
    chars = list(args.chars) if args.chars else list(data.components)

    args.output.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    with open(args.output, 'w', encoding='utf-8') as f:
        f.write(f"Kanji Component Trees: {len(chars)} entries\n")
        f.write("=" * 60 + "\n\n")

        for char in chars:
            tree = data.components.get(char)
            if tree is None:
                f.write(f"{char}  (not in component data)\n\n")
                continue

            f.write(f"U+{ord(char[0]):04X}  {char}  {tree}\n")
            f.write(f"  depth: {depth(tree)}  leaves: {len(leaves(tree))}\n")
            f.write(f"  components: {' '.join(data.component_sets.get(char, []))}\n")
            for line in format_tree(tree, 1):
                f.write(line + "\n")
            f.write("\n")
            written += 1

    print(f"Written {written} trees to {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
