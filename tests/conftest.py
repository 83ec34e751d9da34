#!/usr/bin/env python3
"""
Shared fixtures: a small CHISE corpus, override file and word list on disk.
"""

from pathlib import Path

import pytest

CORPUS_LINES = [
    ";; -*- coding: utf-8-mcs-er -*-",
    "U+4E00\t一\t一",
    "U+4E28\t丨\t丨",
    "U+65E5\t日\t日",
    "U+6708\t月\t月",
    "U+6728\t木\t木",
    "U+53E3\t口\t口",
    "U+660E\t明\t⿰日月",
    "U+6797\t林\t⿰木木",
    "U+68EE\t森\t⿱木林",
    "U+4E2D\t中\t⿻口丨",
    "U+672C\t本\t⿻木一",
    "U+6771\t東\t⿻木日",
    "U+8449\t葉\t⿱艹&CDP-8B7C",
]

OVERRIDE_LINES = [
    "東\t⿻木日",
    "",
    "本\t⿱木一",
]

WORD_LINES = [
    "# sample vocabulary",
    "日本",
    "明日",
    "森林",
    "中国",
    "東",
]


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Directory holding chise-ids/, overrides.txt and words.txt."""
    chise_dir = tmp_path / "chise-ids"
    chise_dir.mkdir()
    (chise_dir / "IDS-UCS-Basic.txt").write_text("\n".join(CORPUS_LINES) + "\n", encoding="utf-8")
    (tmp_path / "overrides.txt").write_text("\n".join(OVERRIDE_LINES) + "\n", encoding="utf-8")
    (tmp_path / "words.txt").write_text("\n".join(WORD_LINES) + "\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def generator_args(source_dir: Path) -> list[str]:
    """Command-line arguments pointing the generator at source_dir."""
    return [
        "--chise-dir", str(source_dir / "chise-ids"),
        "--overrides", str(source_dir / "overrides.txt"),
        "--words", str(source_dir / "words.txt"),
        "--output", str(source_dir / "out" / "component-data.json"),
    ]
