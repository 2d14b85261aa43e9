#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Diarist journal.

Provides the DiaristDB class for interacting with the SQLite database.
Handles:
    - Initialization of the database engine and sessionmaker
    - Transactional session scopes exposing the entity managers
    - First-run seeding (pre-built tags, streak and settings rows)
    - Migration management via Alembic

Key Features:
    - One transaction per session_scope: commit on success, rollback on
      any exception, session always closed
    - Entry saves and deletes recompute the streak inside the same scope
    - Managers are bound per thread, so concurrent worker threads (see
      async_api) never share a session

Usage:
    db = DiaristDB("~/journal/diarist.db", log_dir="~/journal/logs")
    with db.session_scope() as session:
        entry = db.entries.save({"entry_date": date.today(), "content": "..."})
        stats = db.query_analytics.get_mood_distribution(session)

Notes
==============
- Fresh databases are created from the ORM metadata and stamped at the
  Alembic head; existing databases are upgraded with Alembic
- All datetime fields are UTC-aware
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

# --- Third party ---
from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from diarist.core.exceptions import DatabaseError
from diarist.core.logging_manager import DiaristLogger, safe_logger
from diarist.core.paths import ALEMBIC_DIR, ALEMBIC_INI
from .decorators import handle_db_errors, log_database_operation
from .managers import EntryManager, SettingsManager, StreakManager, TagManager
from .managers.streak_manager import DEFAULT_MISSED_WINDOW_DAYS
from .models import Base
from .query_analytics import QueryAnalytics


class DiaristDB:
    """
    Main database manager for the Diarist journal.

    Attributes:
        - db_path (Path): Filesystem path to the SQLite database file.
        - alembic_dir (Path): Filesystem path to the Alembic directory.
        - engine (Engine): SQLAlchemy engine instance.
        - SessionLocal (sessionmaker): SQLAlchemy session factory.
        - query_analytics (QueryAnalytics): Read-only statistics.

    Usage:
        db = DiaristDB("~/path/to/diarist.db")
        with db.session_scope() as session:
            entries = db.entries.get_all()
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        alembic_dir: Union[str, Path] = ALEMBIC_DIR,
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[DiaristLogger] = None,
        missed_window_days: int = DEFAULT_MISSED_WINDOW_DAYS,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to the SQLite file (created on first use).
            alembic_dir: Path to the Alembic migrations directory.
            log_dir: Directory for log files (optional)
            logger: Existing logger to use instead of creating one
            missed_window_days: Trailing window for the missed-days count
        """
        self.db_path = Path(db_path).expanduser().resolve()
        self.alembic_dir = Path(alembic_dir).expanduser().resolve()
        self.missed_window_days = missed_window_days

        # --- Logging ---
        if logger is not None:
            self.logger: Optional[DiaristLogger] = logger
        elif log_dir:
            self.logger = DiaristLogger(
                Path(log_dir).expanduser().resolve(), component_name="database"
            )
        else:
            self.logger = None

        self.query_analytics = QueryAnalytics(self.logger)

        # Managers live per thread for the duration of a session_scope
        self._local = threading.local()

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            safe_logger(self.logger).log_operation(
                "database_init_start",
                {"db_path": str(self.db_path), "alembic_dir": str(self.alembic_dir)},
            )

            is_new = not self.db_path.exists()
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                pool_pre_ping=True,
                connect_args={"check_same_thread": False, "timeout": 15},
            )
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
            event.listen(self.engine, "connect", _register_casefold)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            self.alembic_cfg: Config = self._setup_alembic()

            if is_new:
                self.initialize_schema()

            safe_logger(self.logger).log_operation("database_init_complete", {"success": True})

        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Initializes the entity managers for this session; they are
        available through db.entries, db.tags, db.streaks and db.settings
        on the current thread until the scope exits.

        Usage:
            with db.session_scope() as session:
                entry = db.entries.save({"entry_date": "2024-03-01"})
                top = db.query_analytics.get_tag_usage(session)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        streaks = StreakManager(session, self.logger, self.missed_window_days)
        outer_managers = getattr(self._local, "managers", None)
        self._local.managers = {
            "entries": EntryManager(session, self.logger, streak_manager=streaks),
            "tags": TagManager(session, self.logger),
            "streaks": streaks,
            "settings": SettingsManager(session, self.logger),
        }

        safe_logger(self.logger).log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            safe_logger(self.logger).log_debug("session_commit", {"session_id": session_id})
        except Exception as e:
            session.rollback()
            safe_logger(self.logger).log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise
        finally:
            self._local.managers = outer_managers
            session.close()
            safe_logger(self.logger).log_debug("session_close", {"session_id": session_id})

    def _manager(self, name: str):
        managers = getattr(self._local, "managers", None)
        if not managers:
            raise DatabaseError(
                f"{name} manager requires active session. "
                "Use within session_scope: "
                f"with db.session_scope() as session: db.{name}..."
            )
        return managers[name]

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._manager("entries")

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._manager("tags")

    @property
    def streaks(self) -> StreakManager:
        """
        Access StreakManager for streak queries.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._manager("streaks")

    @property
    def settings(self) -> SettingsManager:
        """
        Access SettingsManager for theme, PIN and preferences.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._manager("settings")

    # ---- Alembic setup ----
    def _setup_alembic(self) -> Config:
        """Setup Alembic configuration."""
        try:
            alembic_cfg = Config(str(ALEMBIC_INI)) if ALEMBIC_INI.exists() else Config()
            alembic_cfg.set_main_option("script_location", str(self.alembic_dir))
            alembic_cfg.set_main_option("sqlalchemy.url", f"sqlite:///{self.db_path}")
            return alembic_cfg
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "setup_alembic"})
            raise DatabaseError(f"Alembic configuration failed: {e}") from e

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Create or migrate the schema, then seed first-run data.

        Actions:
            If the database has no tables,
                creates all tables from the ORM models
                stamps the Alembic revision to head
            If not,
                runs pending migrations to update schema
            Seeds pre-built tags and the single-row tables
        """
        table_names = inspect(self.engine).get_table_names()

        if not table_names:
            Base.metadata.create_all(bind=self.engine)
            try:
                command.stamp(self.alembic_cfg, "head")
            except Exception as e:
                safe_logger(self.logger).log_error(e, {"operation": "stamp_database"})
            safe_logger(self.logger).log_operation(
                "fresh_database_created", {"tables_created": len(Base.metadata.tables)}
            )
        else:
            self.upgrade_database()
            safe_logger(self.logger).log_operation(
                "existing_database_migrated", {"table_count": len(table_names)}
            )

        self.seed_defaults()

    @handle_db_errors
    @log_database_operation("seed_defaults")
    def seed_defaults(self) -> int:
        """
        Insert missing pre-built tags and the streak/settings rows.

        Returns:
            Number of pre-built tags inserted
        """
        with self.session_scope():
            created = self.tags.seed_prebuilt()
            self.streaks.get_info()
            self.settings.get()
        return created

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the database schema to the specified Alembic revision.

        Args:
            revision: The target revision (default 'head').
        """
        try:
            command.upgrade(self.alembic_cfg, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}") from e

    def get_migration_history(self) -> Dict[str, Optional[str]]:
        """
        Get the current migration status of the database.

        Returns:
            Dictionary with keys:
                - 'current_revision' (str | None)
                - 'status' (str): 'up_to_date' or 'needs_migration'
                - 'error' (str, optional): Present if an exception occurred.
        """
        try:
            with self.engine.connect() as conn:
                current_rev = MigrationContext.configure(conn).get_current_revision()
            return {
                "current_revision": current_rev,
                "status": "up_to_date" if current_rev else "needs_migration",
            }
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "get_migration_history"})
            return {"error": str(e)}

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()

    # ----- Context Manager Support -----
    def __enter__(self) -> "DiaristDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        del exc_type, exc_val, exc_tb
        self.dispose()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement (and ON DELETE CASCADE) for every connection."""
    del connection_record
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _casefold(value):
    return value.casefold() if value is not None else None


def _register_casefold(dbapi_connection, connection_record) -> None:
    """
    Expose Python's Unicode ``str.casefold`` as the SQL function CASEFOLD.

    SQLite's own lower() only folds ASCII letters.
    """
    del connection_record
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)
