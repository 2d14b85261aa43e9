#!/usr/bin/env python3
"""
async_api.py
--------------------
Coroutine interface over DiaristDB for event-loop based callers.

Every call runs in a worker thread (asyncio.to_thread) inside its own
session_scope. A save or delete therefore commits or rolls back as a
whole even if the awaiting task is cancelled: cancellation only stops
the caller from waiting, the thread finishes its transaction.

Returned ORM objects are detached from their session. Their column
attributes and Entry.tags are loaded; lazy relationships such as
Tag.entries are not available.

Usage:
    journal = AsyncJournal(DiaristDB(db_path))
    entry = await journal.save_entry({"entry_date": date.today(), "content": "..."})
    streak = await journal.get_streak_info()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import asyncio
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from .manager import DiaristDB
from .models import Entry, Mood, StreakInfo, Tag
from .query_analytics import MonthlyStats, MoodDistribution, TagUsage, WordCountTrend

R = TypeVar("R")


class AsyncJournal:
    """
    Async facade exposing the journal, tag, streak, analytics and
    settings operations of a DiaristDB.
    """

    def __init__(self, db: DiaristDB) -> None:
        self.db = db

    def _run(self, operation: Callable[[Session], R]) -> R:
        with self.db.session_scope() as session:
            return operation(session)

    async def _call(self, operation: Callable[[Session], R]) -> R:
        return await asyncio.to_thread(self._run, operation)

    # ---- Entries ----

    async def get_entry(self, entry_id: int) -> Optional[Entry]:
        return await self._call(lambda s: self.db.entries.get(entry_id=entry_id))

    async def get_entry_by_date(self, entry_date: Any) -> Optional[Entry]:
        return await self._call(lambda s: self.db.entries.get(entry_date=entry_date))

    async def get_all_entries(self) -> List[Entry]:
        return await self._call(lambda s: self.db.entries.get_all())

    async def get_entries_by_date_range(self, start_date: Any, end_date: Any) -> List[Entry]:
        return await self._call(lambda s: self.db.entries.get_by_date_range(start_date, end_date))

    async def search_entries(self, term: Optional[str]) -> List[Entry]:
        return await self._call(lambda s: self.db.entries.search(term))

    async def filter_entries(
        self,
        mood: Any = None,
        tag_id: Optional[int] = None,
        start_date: Any = None,
        end_date: Any = None,
    ) -> List[Entry]:
        return await self._call(
            lambda s: self.db.entries.filter(
                mood=mood, tag_id=tag_id, start_date=start_date, end_date=end_date
            )
        )

    async def get_paginated_entries(
        self, page: int, page_size: int, search_term: Optional[str] = None
    ) -> Tuple[List[Entry], int]:
        return await self._call(
            lambda s: self.db.entries.get_paginated(page, page_size, search_term)
        )

    async def save_entry(self, metadata: Dict[str, Any], today: Optional[date] = None) -> Entry:
        """Insert or update the entry for a date and recompute the streak."""
        return await self._call(lambda s: self.db.entries.save(metadata, today=today))

    async def delete_entry(self, entry_id: int, today: Optional[date] = None) -> bool:
        """Delete an entry (no-op when missing) and recompute the streak."""
        return await self._call(lambda s: self.db.entries.delete(entry_id, today=today))

    async def get_dates_with_entries(self, year: int, month: int) -> List[date]:
        return await self._call(lambda s: self.db.entries.get_dates_with_entries(year, month))

    async def count_entries(self) -> int:
        return await self._call(lambda s: self.db.entries.count())

    async def toggle_favorite(self, entry_id: int) -> Optional[Entry]:
        return await self._call(lambda s: self.db.entries.toggle_favorite(entry_id))

    async def get_favorites(self) -> List[Entry]:
        return await self._call(lambda s: self.db.entries.get_favorites())

    # ---- Tags ----

    async def get_all_tags(self) -> List[Tag]:
        return await self._call(lambda s: self.db.tags.get_all())

    async def get_prebuilt_tags(self) -> List[Tag]:
        return await self._call(lambda s: self.db.tags.get_prebuilt())

    async def get_custom_tags(self) -> List[Tag]:
        return await self._call(lambda s: self.db.tags.get_custom())

    async def get_tag(self, tag_id: int) -> Optional[Tag]:
        return await self._call(lambda s: self.db.tags.get(tag_id=tag_id))

    async def get_tags_for_entry(self, entry_id: int) -> List[Tag]:
        return await self._call(lambda s: self.db.tags.get_for_entry(entry_id))

    async def create_tag(self, name: str, color: Optional[str] = None) -> Tag:
        return await self._call(lambda s: self.db.tags.create({"name": name, "color": color}))

    async def update_tag(self, tag_id: int, metadata: Dict[str, Any]) -> Tag:
        return await self._call(lambda s: self.db.tags.update(tag_id, metadata))

    async def delete_tag(self, tag_id: int) -> bool:
        return await self._call(lambda s: self.db.tags.delete(tag_id))

    # ---- Streaks ----

    async def get_streak_info(self) -> StreakInfo:
        return await self._call(lambda s: self.db.streaks.get_info())

    async def recompute_streak(self, today: Optional[date] = None) -> StreakInfo:
        return await self._call(lambda s: self.db.streaks.recompute(today=today))

    async def get_missed_days(
        self, last_n_days: int = 30, today: Optional[date] = None
    ) -> List[date]:
        return await self._call(lambda s: self.db.streaks.get_missed_days(last_n_days, today))

    # ---- Analytics ----

    async def get_mood_distribution(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> List[MoodDistribution]:
        return await self._call(
            lambda s: self.db.query_analytics.get_mood_distribution(s, start_date, end_date)
        )

    async def get_tag_usage(self, top_n: int = 10) -> List[TagUsage]:
        return await self._call(lambda s: self.db.query_analytics.get_tag_usage(s, top_n))

    async def get_word_count_trend(
        self, last_n_days: int = 30, today: Optional[date] = None
    ) -> List[WordCountTrend]:
        return await self._call(
            lambda s: self.db.query_analytics.get_word_count_trend(s, last_n_days, today)
        )

    async def get_monthly_stats(
        self, last_n_months: int = 6, today: Optional[date] = None
    ) -> List[MonthlyStats]:
        return await self._call(
            lambda s: self.db.query_analytics.get_monthly_stats(s, last_n_months, today)
        )

    async def get_most_frequent_mood(self) -> Optional[Mood]:
        return await self._call(lambda s: self.db.query_analytics.get_most_frequent_mood(s))

    async def get_total_word_count(self) -> int:
        return await self._call(lambda s: self.db.query_analytics.get_total_word_count(s))

    async def get_average_word_count(self) -> float:
        return await self._call(lambda s: self.db.query_analytics.get_average_word_count(s))

    async def get_dashboard_summary(self, today: Optional[date] = None) -> Dict[str, Any]:
        return await self._call(
            lambda s: self.db.query_analytics.get_dashboard_summary(s, today)
        )

    # ---- Settings ----

    async def get_theme(self) -> str:
        return await self._call(lambda s: self.db.settings.get_theme())

    async def set_theme(self, theme: str) -> str:
        return await self._call(lambda s: self.db.settings.set_theme(theme))

    async def is_pin_enabled(self) -> bool:
        return await self._call(lambda s: self.db.settings.is_pin_enabled())

    async def set_pin(self, pin: str) -> None:
        await self._call(lambda s: self.db.settings.set_pin(pin))

    async def validate_pin(self, pin: str) -> bool:
        return await self._call(lambda s: self.db.settings.validate_pin(pin))

    async def remove_pin(self) -> None:
        await self._call(lambda s: self.db.settings.remove_pin())
