"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Diarist journal database.

- base: Base class and timestamp helper
- enums: Mood enumeration
- associations: entry_tags many-to-many table
- core: Entry model
- entities: Tag model and the pre-built tag seed list
- state: StreakInfo and UserSettings single-row tables

Usage:
    from diarist.database.models import Entry, Tag, Mood
"""
from .base import Base, utc_now
from .enums import Mood
from .associations import entry_tags
from .core import TITLE_MAX_LENGTH, Entry
from .entities import DEFAULT_TAG_COLOR, PREBUILT_TAGS, TAG_NAME_MAX_LENGTH, Tag
from .state import SINGLETON_ID, StreakInfo, UserSettings

__all__ = [
    "Base",
    "utc_now",
    "Mood",
    "entry_tags",
    "Entry",
    "TITLE_MAX_LENGTH",
    "Tag",
    "TAG_NAME_MAX_LENGTH",
    "DEFAULT_TAG_COLOR",
    "PREBUILT_TAGS",
    "StreakInfo",
    "UserSettings",
    "SINGLETON_ID",
]
