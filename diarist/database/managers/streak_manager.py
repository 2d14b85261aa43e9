#!/usr/bin/env python3
"""
streak_manager.py
--------------------
Derives journaling streaks from the set of entry dates.

The StreakInfo row is a cache over the entries table: it is recomputed
from scratch after every entry mutation and never patched incrementally.
Only distinct dates matter, so several saves on one day count once.

Rules:
    - The walk starts today when today has an entry, otherwise yesterday
      (today is still in progress and does not break a streak yet)
    - longest_streak is a running maximum and never decreases
    - missed_days counts empty dates in
      [max(earliest entry, today - window), today]

Usage:
    streak_mgr = StreakManager(session, logger)
    info = streak_mgr.recompute()
    gaps = streak_mgr.get_missed_days(14)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, timedelta
from typing import List, Optional, Set

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Session

# --- Local imports ---
from diarist.core.logging_manager import DiaristLogger, safe_logger
from diarist.database.decorators import handle_db_errors, log_database_operation
from diarist.database.models import SINGLETON_ID, Entry, StreakInfo, utc_now
from .base_manager import BaseManager

DEFAULT_MISSED_WINDOW_DAYS = 30


class StreakManager(BaseManager):
    """
    Manages the single StreakInfo row.

    Attributes:
        missed_window_days: Trailing window used for missed_days
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[DiaristLogger] = None,
        missed_window_days: int = DEFAULT_MISSED_WINDOW_DAYS,
    ):
        super().__init__(session, logger)
        self.missed_window_days = missed_window_days

    def _entry_dates(self) -> Set[date]:
        return set(self.session.scalars(select(Entry.entry_date).distinct()))

    @handle_db_errors
    @log_database_operation("get_streak_info")
    def get_info(self) -> StreakInfo:
        """The streak snapshot, created with zeroed values on first access."""
        return self._get_or_create(StreakInfo, {"id": SINGLETON_ID})

    @handle_db_errors
    @log_database_operation("recompute_streak")
    def recompute(self, today: Optional[date] = None) -> StreakInfo:
        """
        Rebuild the streak snapshot from the current entries.

        Args:
            today: Reference date (defaults to the local current date)

        Returns:
            The overwritten StreakInfo row
        """
        today = today or date.today()
        info = self.get_info()
        dates = self._entry_dates()

        if not dates:
            info.current_streak = 0
            info.total_entries = 0
            info.total_days_with_entries = 0
            info.last_entry_date = None
            info.streak_start_date = None
            info.updated_at = utc_now()
            self.session.flush()
            return info

        info.total_entries = self._count(Entry)
        info.total_days_with_entries = len(dates)
        info.last_entry_date = max(dates)

        wrote_today = today in dates
        cursor = today if wrote_today else today - timedelta(days=1)
        current = 0
        while cursor in dates:
            current += 1
            cursor -= timedelta(days=1)

        info.current_streak = current
        if current == 0:
            info.streak_start_date = None
        elif wrote_today:
            info.streak_start_date = today - timedelta(days=current - 1)
        else:
            info.streak_start_date = today - timedelta(days=current)

        if current > (info.longest_streak or 0):
            info.longest_streak = current

        window_start = max(min(dates), today - timedelta(days=self.missed_window_days))
        missed = 0
        day = window_start
        while day <= today:
            if day not in dates:
                missed += 1
            day += timedelta(days=1)
        info.missed_days = missed

        info.updated_at = utc_now()
        self.session.flush()

        safe_logger(self.logger).log_debug("Recomputed streak", info.to_dict())
        return info

    @handle_db_errors
    @log_database_operation("get_missed_days")
    def get_missed_days(
        self, last_n_days: int = DEFAULT_MISSED_WINDOW_DAYS, today: Optional[date] = None
    ) -> List[date]:
        """
        Dates in [today - N + 1, today] without an entry, most recent first.

        Computed directly from the entries, independent of the snapshot.
        """
        today = today or date.today()
        dates = self._entry_dates()
        return [
            today - timedelta(days=offset)
            for offset in range(max(last_n_days, 0))
            if today - timedelta(days=offset) not in dates
        ]
