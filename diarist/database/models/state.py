"""
State Models
------------

Single-row tables holding derived state and user preferences.

Models:
    - StreakInfo: Cached streak snapshot, fully recomputed after every
      entry mutation
    - UserSettings: Theme, PIN and journaling preferences

Both tables always hold exactly one row with id=1, created on first
access by their managers.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime
from typing import Any, Dict, Optional

# --- Third party imports ---
from sqlalchemy import Boolean, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

# --- Local imports ---
from .base import Base, utc_now
from .core import mood_column_type
from .enums import Mood

SINGLETON_ID = 1


class StreakInfo(Base):
    """
    Journaling streak snapshot.

    Attributes:
        current_streak: Consecutive days with entries ending today or yesterday
        longest_streak: Highest current_streak ever recorded (never decreases)
        total_entries: Number of entries
        total_days_with_entries: Number of distinct dates with entries
        missed_days: Dates without entries in the trailing window
        last_entry_date: Most recent entry date
        streak_start_date: First date of the current streak
        updated_at: When the snapshot was last recomputed
    """

    __tablename__ = "streak_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_entries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_days_with_entries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    missed_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_entry_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    streak_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, default=utc_now
    )

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot as a plain dictionary (dates as ISO strings)."""
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "total_entries": self.total_entries,
            "total_days_with_entries": self.total_days_with_entries,
            "missed_days": self.missed_days,
            "last_entry_date": self.last_entry_date.isoformat() if self.last_entry_date else None,
            "streak_start_date": (
                self.streak_start_date.isoformat() if self.streak_start_date else None
            ),
        }

    def __repr__(self) -> str:
        return (
            f"<StreakInfo(current={self.current_streak}, longest={self.longest_streak}, "
            f"missed={self.missed_days})>"
        )


class UserSettings(Base):
    """
    User preferences.

    Attributes:
        theme: UI theme name ("dark", "light" or a custom name)
        is_pin_enabled: Whether the journal is PIN protected
        pin_hash: Base64 SHA-256 of salt + PIN
        pin_salt: Base64 random salt
        show_streak_notifications: Whether streak reminders are shown
        default_mood: Mood preselected for new entries
        entries_per_page: Page size for the entry list
        auto_save: Whether drafts auto-save
        auto_save_interval: Auto-save interval in seconds
    """

    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    theme: Mapped[str] = mapped_column(String(50), nullable=False, default="dark")
    is_pin_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pin_hash: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    pin_salt: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    show_streak_notifications: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    default_mood: Mapped[Mood] = mapped_column(
        mood_column_type(), nullable=False, default=Mood.NEUTRAL
    )
    entries_per_page: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    auto_save: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    auto_save_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=30)

    def __repr__(self) -> str:
        return f"<UserSettings(theme='{self.theme}', pin={self.is_pin_enabled})>"
