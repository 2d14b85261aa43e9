#!/usr/bin/env python3
"""
query_analytics.py
------------------
Read-only analytics over the journal.

Every method receives the session explicitly and never writes. Results
are plain dataclasses so callers can use them after the session closes.

Percentage bases:
    - Mood distribution: share of all filled mood slots (an entry with
      three moods contributes three occurrences)
    - Tag usage: share of all entry_tags rows
"""
from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from diarist.core.logging_manager import DiaristLogger
from diarist.database.models import SINGLETON_ID, Entry, Mood, StreakInfo, Tag, entry_tags
from .decorators import handle_db_errors, log_database_operation


@dataclass
class MoodDistribution:
    mood: Mood
    count: int
    percentage: float


@dataclass
class TagUsage:
    tag: Tag
    count: int
    percentage: float


@dataclass
class WordCountTrend:
    date: date
    word_count: int


@dataclass
class MonthlyStats:
    year: int
    month: int
    entry_count: int
    total_words: int
    average_words: float

    @property
    def label(self) -> str:
        """Short month label, e.g. 'Mar 2024'."""
        return f"{calendar.month_abbr[self.month]} {self.year}"


# Declaration order breaks ties between equally frequent moods
_MOOD_ORDER = {mood: position for position, mood in enumerate(Mood)}


def months_before(reference: date, months: int) -> date:
    """Same day ``months`` calendar months earlier, clamped to month length."""
    month_index = reference.year * 12 + (reference.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(reference.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _percentage(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


class QueryAnalytics:
    """
    Aggregated statistics over entries and tags.

    Provides mood distribution, tag usage ranking, word-count trend and
    monthly rollups, plus the dashboard summary.
    """

    def __init__(self, logger: Optional[DiaristLogger] = None) -> None:
        """
        Initialize query analytics.

        Args:
            logger: Optional logger for query operations
        """
        self.logger = logger

    @handle_db_errors
    @log_database_operation("get_mood_distribution")
    def get_mood_distribution(
        self,
        session: Session,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MoodDistribution]:
        """
        Count every mood slot occurrence, optionally within a date window.

        Args:
            session: SQLAlchemy session
            start_date: Inclusive lower bound
            end_date: Inclusive upper bound

        Returns:
            MoodDistribution list, most frequent first (ties keep the
            Mood declaration order); empty when no entries match
        """
        query = select(Entry.primary_mood, Entry.secondary_mood_1, Entry.secondary_mood_2)
        if start_date is not None:
            query = query.where(Entry.entry_date >= start_date)
        if end_date is not None:
            query = query.where(Entry.entry_date <= end_date)

        counts: Counter = Counter()
        for row in session.execute(query):
            counts.update(mood for mood in row if mood is not None)

        total = sum(counts.values())
        ordered = sorted(counts, key=lambda m: (-counts[m], _MOOD_ORDER[m]))
        return [MoodDistribution(m, counts[m], _percentage(counts[m], total)) for m in ordered]

    @handle_db_errors
    @log_database_operation("get_tag_usage")
    def get_tag_usage(self, session: Session, top_n: int = 10) -> List[TagUsage]:
        """
        Rank tags by the number of entries carrying them.

        Args:
            session: SQLAlchemy session
            top_n: Maximum number of tags returned

        Returns:
            TagUsage list, most used first (ties by name); unused tags
            are omitted
        """
        usage = func.count(entry_tags.c.entry_id).label("usage")
        rows = session.execute(
            select(Tag, usage)
            .join(entry_tags, entry_tags.c.tag_id == Tag.id)
            .group_by(Tag.id)
            .order_by(usage.desc(), Tag.name)
        ).all()

        total = sum(count for _, count in rows)
        return [
            TagUsage(tag, count, _percentage(count, total))
            for tag, count in rows[: max(top_n, 0)]
        ]

    @handle_db_errors
    @log_database_operation("get_word_count_trend")
    def get_word_count_trend(
        self, session: Session, last_n_days: int = 30, today: Optional[date] = None
    ) -> List[WordCountTrend]:
        """
        Words written per date since ``today - last_n_days``.

        Dates without entries are omitted, not zero-filled.
        """
        since = (today or date.today()) - timedelta(days=last_n_days)
        rows = session.execute(
            select(Entry.entry_date, func.sum(Entry.word_count))
            .where(Entry.entry_date >= since)
            .group_by(Entry.entry_date)
            .order_by(Entry.entry_date)
        ).all()
        return [WordCountTrend(day, int(words or 0)) for day, words in rows]

    @handle_db_errors
    @log_database_operation("get_monthly_stats")
    def get_monthly_stats(
        self, session: Session, last_n_months: int = 6, today: Optional[date] = None
    ) -> List[MonthlyStats]:
        """
        Entry count and word totals per calendar month, chronological.

        Covers entries dated on or after the same day ``last_n_months``
        months before today.
        """
        since = months_before(today or date.today(), last_n_months)
        rows = session.execute(
            select(Entry.entry_date, Entry.word_count).where(Entry.entry_date >= since)
        ).all()

        buckets: Dict[tuple, List[int]] = {}
        for entry_date, words in rows:
            buckets.setdefault((entry_date.year, entry_date.month), []).append(words or 0)

        return [
            MonthlyStats(
                year=year,
                month=month,
                entry_count=len(words),
                total_words=sum(words),
                average_words=round(sum(words) / len(words), 1),
            )
            for (year, month), words in sorted(buckets.items())
        ]

    @handle_db_errors
    @log_database_operation("get_most_frequent_mood")
    def get_most_frequent_mood(self, session: Session) -> Optional[Mood]:
        """Top mood of the overall distribution, None without entries."""
        distribution = self.get_mood_distribution(session)
        return distribution[0].mood if distribution else None

    @handle_db_errors
    @log_database_operation("get_total_word_count")
    def get_total_word_count(self, session: Session) -> int:
        """Sum of word counts over all entries."""
        return int(session.scalar(select(func.sum(Entry.word_count))) or 0)

    @handle_db_errors
    @log_database_operation("get_average_word_count")
    def get_average_word_count(self, session: Session) -> float:
        """Mean word count per entry, 0.0 without entries."""
        average = session.scalar(select(func.avg(Entry.word_count)))
        return round(float(average), 1) if average is not None else 0.0

    @handle_db_errors
    @log_database_operation("get_dashboard_summary")
    def get_dashboard_summary(
        self, session: Session, today: Optional[date] = None
    ) -> Dict[str, Any]:
        """
        Headline numbers for the journal overview.

        Args:
            session: SQLAlchemy session
            today: Reference date for the "written today" flag

        Returns:
            Dictionary with entry totals, streak snapshot values, word
            statistics and the most frequent mood
        """
        today = today or date.today()
        streak = session.get(StreakInfo, SINGLETON_ID)
        most_frequent = self.get_most_frequent_mood(session)

        return {
            "total_entries": int(
                session.scalar(select(func.count()).select_from(Entry)) or 0
            ),
            "current_streak": streak.current_streak if streak else 0,
            "longest_streak": streak.longest_streak if streak else 0,
            "missed_days": streak.missed_days if streak else 0,
            "total_words": self.get_total_word_count(session),
            "average_words": self.get_average_word_count(session),
            "most_frequent_mood": most_frequent.value if most_frequent else None,
            "has_entry_today": session.scalar(
                select(Entry.id).where(Entry.entry_date == today)
            )
            is not None,
        }
