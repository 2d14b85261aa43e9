#!/usr/bin/env python3
"""
config.py
--------------------
Layered configuration for Diarist.

Values are resolved with this precedence (highest wins):
    1. Environment variables (DIARIST_SECTION__KEY)
    2. Config file (YAML)
    3. Built-in defaults

Usage:
    config = DiaristConfig(config_file="config.yaml")
    config.get("paths.db_path")
    config.get_int("analytics.trend_days")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from .exceptions import ValidationError
from .paths import DB_PATH, LOG_DIR

ENV_PREFIX = "DIARIST_"

DEFAULTS: Dict[str, Any] = {
    "paths": {
        "db_path": str(DB_PATH),
        "log_dir": str(LOG_DIR),
    },
    "journal": {
        "page_size": 10,
    },
    "streak": {
        "missed_window_days": 30,
    },
    "analytics": {
        "trend_days": 30,
        "monthly_months": 6,
        "top_tags": 10,
    },
}


class DiaristConfig:
    """
    Merged configuration from defaults, a YAML file and the environment.

    Env vars use a double underscore for nesting:
    ``DIARIST_ANALYTICS__TREND_DAYS=14`` sets ``analytics.trend_days``.
    Environment values arrive as strings; use ``get_int`` for numbers.
    """

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        env_prefix: str = ENV_PREFIX,
    ) -> None:
        self.config_file = Path(config_file).expanduser() if config_file else None
        self.env_prefix = env_prefix or ""
        self.config_data: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        self.config_data = copy.deepcopy(DEFAULTS)

        if self.config_file and self.config_file.exists():
            with open(self.config_file, encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValidationError(
                    f"Config file must contain a mapping: {self.config_file}"
                )
            self._update_dict(self.config_data, file_config)

        self._load_from_env()

    def _update_dict(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """Recursively merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _load_from_env(self) -> None:
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            key_parts = env_key[len(self.env_prefix):].lower().split("__")

            current = self.config_data
            for part in key_parts[:-1]:
                current = current.setdefault(part, {})
            current[key_parts[-1]] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "paths.db_path", "streak.missed_window_days"
            default: Returned when key is not found.
        """
        current: Any = self.config_data
        for part in key_path.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_int(self, key_path: str, default: Optional[int] = None) -> Optional[int]:
        """Get a config value coerced to int."""
        value = self.get(key_path, default)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Config value '{key_path}' is not an integer: {value!r}")

    def get_path(self, key_path: str) -> Optional[Path]:
        """Get a config value as an expanded Path."""
        value = self.get(key_path)
        return Path(value).expanduser() if value else None
