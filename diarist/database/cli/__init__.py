#!/usr/bin/env python3
"""
Diarist Command-Line Interface
-------------------------------

Command-line interface for writing and browsing the journal.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Setup (init)
    - Entries (entry write/show/list/search/delete/calendar/favorite)
    - Tags (tag list/create/delete)
    - Streaks (streak, missed)
    - Analytics (stats moods/tags/words/monthly/summary)
    - Settings (settings show/theme/set-pin/remove-pin)

Usage:
    # Get general help
    diarist --help

    # Write today's entry
    diarist entry write --title "Monday" --content "..." --mood happy

    # Get help for a specific command
    diarist stats monthly --help
"""
import logging
from pathlib import Path

import click

from diarist.core.config import DiaristConfig
from diarist.core.logging_manager import DiaristLogger
from diarist.core.paths import ALEMBIC_DIR, CONFIG_PATH
from diarist.database.manager import DiaristDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=None,
    help="Path to database file (default: paths.db_path from config)",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=None,
    help="Path to log directory (default: paths.log_dir from config)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(),
    default=str(CONFIG_PATH),
    help="Path to YAML config file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, config_file, verbose):
    """Diarist: a one-entry-per-day journal"""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    config = DiaristConfig(config_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["db_path"] = Path(db_path) if db_path else config.get_path("paths.db_path")
    ctx.obj["log_dir"] = Path(log_dir) if log_dir else config.get_path("paths.log_dir")
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = DiaristLogger(ctx.obj["log_dir"], component_name="diarist")


def get_db(ctx) -> DiaristDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = DiaristDB(
            db_path=ctx.obj["db_path"],
            alembic_dir=ALEMBIC_DIR,
            logger=ctx.obj["logger"],
            missed_window_days=ctx.obj["config"].get_int("streak.missed_window_days", 30),
        )
    return ctx.obj["db"]


def get_config(ctx) -> DiaristConfig:
    """Config loaded by the root group."""
    return ctx.obj["config"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .entries import entry  # noqa: E402
from .tags import tag  # noqa: E402
from .streaks import streak, missed  # noqa: E402
from .stats import stats  # noqa: E402
from .settings import settings  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(streak)
cli.add_command(missed)

# Register command groups
cli.add_command(entry)
cli.add_command(tag)
cli.add_command(stats)
cli.add_command(settings)


if __name__ == "__main__":
    cli(obj={})
