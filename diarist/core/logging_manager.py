#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for the journal engine and its command line.

Every DiaristLogger owns two rotating files inside its log directory:

    <component>.log   every journal operation, DEBUG and up
    errors.log        failures only, with context and traceback

Warnings are echoed to the console as well. Managers receive the logger
as an optional collaborator and go through ``safe_logger`` so that a
missing logger never changes behaviour.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """One-line error summary for the terminal, optionally with traceback."""
    summary = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        return f"{summary}\n\n{traceback.format_exc()}"
    return summary


def _with_details(label: str, message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return f"{label} - {message}"
    return f"{label} - {message}: {json.dumps(details, default=str)}"


class DiaristLogger:
    """
    File logger shared by the database layer and the CLI.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Prefix of the logger names and of the main log file
        main_logger: Receives every operation and message
        error_logger: Receives errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "diarist",
        max_bytes: int = MAX_LOG_BYTES,
        backup_count: int = LOG_BACKUPS,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.main_logger = self._build_logger(
            "operations", f"{component_name}.log", logging.DEBUG
        )
        self.error_logger = self._build_logger("errors", "errors.log", logging.ERROR)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _build_logger(self, suffix: str, filename: str, level: int) -> logging.Logger:
        """Named logger with a single rotating file handler at ``level``."""
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        # A second DiaristLogger for the same component replaces the handlers
        for old in list(logger.handlers):
            old.close()
            logger.removeHandler(old)

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Close and detach every handler, releasing the log files."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    # ---- Messages ----

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a journal operation; details are serialized as JSON."""
        self.main_logger.info(
            f"OPERATION - {operation}: {json.dumps(details or {}, default=str)}"
        )

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details("DEBUG", message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details("INFO", message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.warning(_with_details("WARNING", message, details))

    # ---- Errors ----

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Write an error to errors.log.

        The exception line comes first, then a ``key=value`` context line
        when context is given, then the active traceback.
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            self.error_logger.error(f"Context: {pairs}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log a command failure and return the text to show the user.

        Examples:
            >>> logger.log_cli_error(ValidationError("Unknown tag id: 7"))
            '❌ ValidationError: Unknown tag id: 7'
        """
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)


class NullLogger:
    """Stand-in with the DiaristLogger interface that records nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)


_NULL = NullLogger()


def safe_logger(logger: Optional[DiaristLogger]) -> DiaristLogger:
    """
    Return ``logger``, or a NullLogger when it is None.

    Lets callers write ``safe_logger(self.logger).log_debug(...)`` without
    checking for a logger first.
    """
    return logger if logger is not None else _NULL  # type: ignore[return-value]


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    The error is logged through the logger stored on ``ctx.obj`` (if any)
    with the command name and any extra context. The user sees a one-line
    message on stderr, plus the traceback when ``--verbose`` was given.
    Never returns.
    """
    context: Dict[str, Any] = {"operation": operation, **(additional_context or {})}
    message = safe_logger(ctx.obj.get("logger")).log_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)
