#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators for journal database operations.

- log_database_operation: timing and outcome of every manager call
- validate_metadata: required keys of a metadata dictionary
- handle_db_errors: SQLAlchemy failures surfaced as DatabaseError

Managers stack them as::

    @handle_db_errors
    @log_database_operation("save_entry")
    def save(self, metadata): ...

so that a failure is logged with its raw SQLAlchemy type before it is
wrapped.
"""
import time
from functools import wraps
from typing import Callable, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from diarist.core.exceptions import DatabaseError
from diarist.core.logging_manager import safe_logger
from diarist.core.validators import DataValidator


def log_database_operation(operation_name: str):
    """
    Report a manager method to the manager's logger.

    A debug line is written when the call starts; the call then ends as
    ``<operation_name>_completed`` or as a logged error that is re-raised
    unchanged. Both carry the elapsed time in seconds. Managers without a
    logger are served by a NullLogger.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            started = time.perf_counter()
            logger.log_debug(
                f"Starting {operation_name}",
                {"positional_args": len(args), "keywords": sorted(kwargs)},
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "elapsed_seconds": round(time.perf_counter() - started, 6),
                    },
                )
                raise

            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "elapsed_seconds": round(time.perf_counter() - started, 6),
                    "success": True,
                },
            )
            return result

        return wrapper

    return decorator


def validate_metadata(required_fields: List[str]):
    """
    Reject a metadata dictionary missing any of ``required_fields``.

    The dictionary is the first positional argument after self, or the
    ``metadata`` keyword. Raises ValidationError before the method runs.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            metadata = args[0] if args else kwargs.get("metadata", {})
            DataValidator.validate_required_fields(metadata, required_fields)
            return function(self, *args, **kwargs)

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """Re-raise SQLAlchemy failures as DatabaseError; other errors pass through."""

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"Data integrity violation: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database operation failed: {e}") from e

    return wrapper
