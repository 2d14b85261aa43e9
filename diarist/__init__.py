"""
Diarist
=======

A personal journal with one entry per calendar day, tags, moods and
derived engagement metrics.

Main Components:
    - database: SQLAlchemy ORM, entity managers, analytics, async facade
      and the command-line interface
    - core: Logging, validation, configuration and paths

Primary Interfaces:
    - diarist.database.manager.DiaristDB: Main database interface
    - diarist.database.async_api.AsyncJournal: Coroutine interface
    - diarist.database.cli: `diarist` command-line tool

Example Usage:
    >>> from diarist.database import DiaristDB
    >>> from diarist.core.paths import DB_PATH, LOG_DIR
    >>> db = DiaristDB(db_path=DB_PATH, log_dir=LOG_DIR)
    >>> with db.session_scope():
    ...     entry = db.entries.save({"entry_date": "2024-03-01", "content": "Hello"})
"""

__version__ = "1.0.0"
