#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the Diarist database.

Each manager works inside a caller-provided session and inherits from
BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    TagManager: Pre-built and custom tags
    StreakManager: Streak snapshot recomputation and missed days
    EntryManager: Entry lifecycle (one entry per day, tags, search)
    SettingsManager: Theme, PIN lock and preferences

Usage:
    from diarist.database.managers import EntryManager, TagManager

    entry_mgr = EntryManager(session, logger)
    tag_mgr = TagManager(session, logger)
"""
from .base_manager import BaseManager
from .tag_manager import TagManager
from .streak_manager import StreakManager
from .entry_manager import EntryManager
from .settings_manager import SettingsManager

__all__ = [
    "BaseManager",
    "TagManager",
    "StreakManager",
    "EntryManager",
    "SettingsManager",
]
