#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Diarist project.

All paths are Path objects relative to the project root. They are the
defaults used when neither the config file nor the CLI overrides them.

The project structure:
    ROOT/
    ├── diarist/       # Package code (including Alembic migrations)
    ├── data/          # Journal database
    └── logs/          # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/diarist/core/paths.py.

    Returns:
        Path object for project root
    """
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "diarist"
DATA_DIR = ROOT / "data"

# --- Database ---
ALEMBIC_INI = ROOT / "alembic.ini"
ALEMBIC_DIR = PACKAGE_DIR / "migrations"
DB_PATH = DATA_DIR / "diarist.db"

# --- Logs ---
LOG_DIR = ROOT / "logs"

# --- Config ---
CONFIG_PATH = ROOT / "config.yaml"
