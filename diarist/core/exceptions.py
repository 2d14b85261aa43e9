#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Diarist project.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Storage failures (I/O, constraint violations, locks)
    └── ValidationError - Invalid input rejected before anything is written

Lookups that find nothing are not errors: getters return None and deletes
of missing rows are no-ops.

Usage:
    from diarist.core.exceptions import DatabaseError, ValidationError

    try:
        db.tags.delete(tag_id)
    except ValidationError as e:
        logger.error(f"Rejected: {e}")
    except DatabaseError as e:
        logger.error(f"Database operation failed: {e}")
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when the underlying store fails: connection issues, query
    errors, integrity violations, migrations. The transaction that raised
    it has been rolled back, so the previously committed state remains
    authoritative.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Data integrity violation: UNIQUE constraint failed")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input is rejected by the domain rules:
    - Deleting or editing a pre-built tag
    - Titles or tag names over their maximum length
    - Malformed hex colors, unknown moods, unparseable dates
    - References to tags that do not exist
    - Out-of-range pagination arguments

    Examples:
        >>> raise ValidationError("Pre-built tags cannot be deleted")
        >>> raise ValidationError("Invalid color '#12': expected #RRGGBB")
    """

    pass
