#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Attic project.

The project structure:
    ROOT/
    ├── attic/         # Package code
    ├── data/          # The SQLite store (private)
    └── logs/          # Application logs

Paths are resolved at import time relative to the project root. The
command line lets ATTIC_DB_PATH / ATTIC_LOG_DIR override the defaults.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/attic/core/paths.py.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> attic/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# --- Database ---
DB_PATH = DATA_DIR / "attic.db"

# --- Logs ---
LOG_DIR = ROOT / "logs"
