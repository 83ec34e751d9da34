#!/usr/bin/env python3
"""
paths.py

Centralized path configuration for the component tree scripts.
All scripts should import paths from this module rather than defining them locally.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Base Directories
# ---------------------------------------------------------------------------

LIB_DIR = Path(__file__).resolve().parent
SCRIPT_DIR = LIB_DIR.parent
PROJECT_ROOT = SCRIPT_DIR.parent

# ---------------------------------------------------------------------------
# Source Data (External Datasets)
# ---------------------------------------------------------------------------

SOURCE_DIR = SCRIPT_DIR / "source"

# CHISE IDS (IDS-UCS-*.txt files)
CHISE_IDS_DIR = SOURCE_DIR / "chise-ids"

# Hand-maintained corrections, applied after the CHISE files
OVERRIDES_PATH = SOURCE_DIR / "overrides.txt"

# Vocabulary used for the component frequency ranking
WORDS_PATH = SOURCE_DIR / "words.txt"

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

DATA_DIR = PROJECT_ROOT / "data"
COMPONENT_DATA_JSON = DATA_DIR / "component-data.json"

SCHEMA_DIR = PROJECT_ROOT / "schemas"
COMPONENT_DATA_SCHEMA = SCHEMA_DIR / "component-data.schema.json"

DOCS_DIR = PROJECT_ROOT / "docs"
REPORTS_DIR = DOCS_DIR / "reports"

# ---------------------------------------------------------------------------
# Local Configuration
# ---------------------------------------------------------------------------

# Optional KANJI_TREE_* overrides for the paths above
ENV_FILE = PROJECT_ROOT / ".env"
