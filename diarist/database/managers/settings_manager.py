#!/usr/bin/env python3
"""
settings_manager.py
--------------------
Manages the single UserSettings row: theme, PIN lock and preferences.

The PIN is stored as base64(SHA-256(salt + pin)) next to a base64 random
32-byte salt. With no PIN configured every PIN validates.

Usage:
    settings_mgr = SettingsManager(session, logger)
    settings_mgr.set_theme("light")
    settings_mgr.set_pin("1234")
    settings_mgr.validate_pin("1234")  # True
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import base64
import hashlib
import hmac
import re
import secrets
from typing import Any, Dict

# --- Local imports ---
from diarist.core.exceptions import ValidationError
from diarist.core.logging_manager import safe_logger
from diarist.core.validators import DataValidator
from diarist.database.decorators import handle_db_errors, log_database_operation
from diarist.database.models import SINGLETON_ID, Mood, UserSettings
from .base_manager import BaseManager

PIN_PATTERN = re.compile(r"^\d{4,12}$")
SALT_BYTES = 32
THEME_MAX_LENGTH = 50


def _hash_pin(pin: str, salt: str) -> str:
    digest = hashlib.sha256(base64.b64decode(salt) + pin.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


class SettingsManager(BaseManager):
    """Manages UserSettings table operations."""

    @handle_db_errors
    @log_database_operation("get_settings")
    def get(self) -> UserSettings:
        """The settings row, created with defaults on first access."""
        return self._get_or_create(UserSettings, {"id": SINGLETON_ID})

    @handle_db_errors
    @log_database_operation("update_settings")
    def update(self, metadata: Dict[str, Any]) -> UserSettings:
        """
        Update preference fields.

        Args:
            metadata: Any of theme, show_streak_notifications,
                default_mood, entries_per_page, auto_save,
                auto_save_interval. PIN fields are only changed
                through set_pin/remove_pin.

        Raises:
            ValidationError: If a value is invalid
        """
        settings = self.get()

        if "theme" in metadata:
            settings.theme = self._validate_theme(metadata["theme"])
        for field in ("entries_per_page", "auto_save_interval"):
            if field in metadata:
                value = DataValidator.normalize_int(metadata[field])
                if value is None or value < 1:
                    raise ValidationError(f"Field '{field}' must be a positive integer")
                setattr(settings, field, value)

        self._update_scalar_fields(
            settings,
            metadata,
            [
                ("show_streak_notifications", DataValidator.normalize_bool),
                ("auto_save", DataValidator.normalize_bool),
                ("default_mood", lambda v: DataValidator.normalize_enum(v, Mood)),
            ],
        )

        self.session.flush()
        return settings

    # ---- Theme ----

    @staticmethod
    def _validate_theme(theme: Any) -> str:
        name = DataValidator.normalize_string(theme)
        if not name:
            raise ValidationError("Theme cannot be empty")
        DataValidator.validate_max_length(name, THEME_MAX_LENGTH, "theme")
        return name

    @handle_db_errors
    @log_database_operation("get_theme")
    def get_theme(self) -> str:
        """Current theme name."""
        return self.get().theme

    @handle_db_errors
    @log_database_operation("set_theme")
    def set_theme(self, theme: str) -> str:
        """Persist a new theme name and return it."""
        settings = self.get()
        settings.theme = self._validate_theme(theme)
        self.session.flush()
        return settings.theme

    # ---- PIN ----

    @handle_db_errors
    @log_database_operation("is_pin_enabled")
    def is_pin_enabled(self) -> bool:
        """Whether a PIN lock is configured."""
        return bool(self.get().is_pin_enabled)

    @handle_db_errors
    @log_database_operation("set_pin")
    def set_pin(self, pin: str) -> None:
        """
        Enable the PIN lock with a new PIN.

        Raises:
            ValidationError: If the PIN is not 4 to 12 digits
        """
        if not isinstance(pin, str) or not PIN_PATTERN.match(pin):
            raise ValidationError("PIN must be 4 to 12 digits")

        settings = self.get()
        salt = base64.b64encode(secrets.token_bytes(SALT_BYTES)).decode("ascii")
        settings.pin_salt = salt
        settings.pin_hash = _hash_pin(pin, salt)
        settings.is_pin_enabled = True
        self.session.flush()
        safe_logger(self.logger).log_info("PIN lock enabled")

    @handle_db_errors
    @log_database_operation("validate_pin")
    def validate_pin(self, pin: str) -> bool:
        """Check a PIN; always True when no PIN is configured."""
        settings = self.get()
        if not settings.is_pin_enabled or not settings.pin_hash or not settings.pin_salt:
            return True
        return hmac.compare_digest(_hash_pin(pin or "", settings.pin_salt), settings.pin_hash)

    @handle_db_errors
    @log_database_operation("remove_pin")
    def remove_pin(self) -> None:
        """Disable the PIN lock and forget the stored hash."""
        settings = self.get()
        settings.is_pin_enabled = False
        settings.pin_hash = None
        settings.pin_salt = None
        self.session.flush()
        safe_logger(self.logger).log_info("PIN lock removed")
