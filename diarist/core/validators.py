#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for all Diarist operations.

Provides type-safe conversion, validation, and normalization functions
used by the entity managers, the analytics layer and the CLI.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from enum import Enum

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or not data[field]:
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_date(date_value: Any) -> Optional[date]:
        """
        Normalize various date inputs to a date object.

        Time-of-day is discarded: datetimes collapse to their calendar date.

        Args:
            date_value: ISO date string, date object, or datetime

        Returns:
            Normalized date object or None

        Raises:
            ValidationError: If a string cannot be parsed as a date
        """
        # datetime is a subclass of date, so it must be checked first
        if isinstance(date_value, datetime):
            return date_value.date()
        elif isinstance(date_value, date):
            return date_value
        elif isinstance(date_value, str):
            value = date_value.strip()
            if not value:
                return None
            try:
                return date.fromisoformat(value[:10])
            except ValueError:
                raise ValidationError(f"Invalid date: '{date_value}'")
        return None

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value (strip surrounding whitespace).

        Args:
            value: Value to normalize

        Returns:
            Normalized string or None when empty
        """
        if value is None:
            return None
        normalized = str(value).strip()
        return normalized or None

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """
        Convert various inputs to boolean.

        Args:
            value: Value to convert

        Returns:
            Boolean value or None

        Raises:
            ValidationError: If conversion fails
        """
        if isinstance(value, bool):
            return value
        elif isinstance(value, (int, float)):
            if value == 0:
                return False
            elif value == 1:
                return True
            else:
                raise ValidationError(f"Cannot convert numeric '{value}' to boolean")
        elif isinstance(value, str):
            if value.lower() in ("true", "1", "yes", "on"):
                return True
            elif value.lower() in ("false", "0", "no", "off"):
                return False
            else:
                raise ValidationError(f"Cannot convert '{value}' to boolean")
        elif value is not None:
            return bool(value)
        return None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer.

        Args:
            value: Value to convert

        Returns:
            Integer value or None

        Raises:
            ValidationError: If the value is not an integer
        """
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Cannot convert '{value}' to integer")

    @staticmethod
    def normalize_enum(value: Any, enum_class: Type[E]) -> Optional[E]:
        """
        Resolve an enum member from a member, its value or its name.

        Matching on strings is case-insensitive.

        Raises:
            ValidationError: If no member matches
        """
        if value is None or value == "":
            return None
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            needle = value.strip().lower()
            for member in enum_class:
                if member.value == needle or member.name.lower() == needle:
                    return member
        choices = ", ".join(str(m.value) for m in enum_class)
        raise ValidationError(
            f"Invalid {enum_class.__name__}: '{value}' (choices: {choices})"
        )

    @staticmethod
    def validate_max_length(value: Optional[str], max_length: int, field: str) -> None:
        """
        Reject strings longer than a column allows.

        Raises:
            ValidationError: If value exceeds max_length
        """
        if value is not None and len(value) > max_length:
            raise ValidationError(
                f"Field '{field}' exceeds {max_length} characters ({len(value)})"
            )

    @staticmethod
    def validate_hex_color(value: str) -> str:
        """
        Validate a ``#RRGGBB`` color and return it upper-cased.

        Raises:
            ValidationError: If the color is malformed
        """
        if not isinstance(value, str) or not HEX_COLOR_RE.match(value.strip()):
            raise ValidationError(f"Invalid color '{value}': expected #RRGGBB")
        return value.strip().upper()

    @staticmethod
    def count_words(content: Optional[str]) -> int:
        """Number of whitespace-delimited tokens in content."""
        if not content or not content.strip():
            return 0
        return len(content.split())
