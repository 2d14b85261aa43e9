#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manages journal Entry entities: the entry lifecycle of the journal.

Enforces the one-entry-per-day rule, owns the entry/tag associations,
and triggers a streak recomputation after every successful mutation.
The entry row, its tag set and the streak snapshot are written in the
caller's session, so a single commit (or rollback) covers all three.

Key Features:
    - Save with same-day redirection (never two entries for one date)
    - Word count derived from content on every save
    - Full replacement of tag associations on every save
    - Date range, substring search, composable filters and pagination
    - Calendar helper listing the dates of a month that have entries
    - Favorite toggling

Usage:
    entry_mgr = EntryManager(session, logger)

    entry = entry_mgr.save({
        "entry_date": "2024-03-01",
        "title": "First day",
        "content": "Hello journal",
        "primary_mood": "happy",
        "tags": [1, 4],
    })

    entries, total = entry_mgr.get_paginated(page=2, page_size=10)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import calendar
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

# --- Third party imports ---
from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

# --- Local imports ---
from diarist.core.exceptions import ValidationError
from diarist.core.logging_manager import DiaristLogger, safe_logger
from diarist.core.validators import DataValidator
from diarist.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from diarist.database.models import TITLE_MAX_LENGTH, Entry, Mood, Tag, utc_now
from .base_manager import BaseManager
from .streak_manager import StreakManager


class EntryManager(BaseManager):
    """
    Manages Entry table operations and the entry_tags relation.

    All list queries return entries ordered by entry_date, most recent
    first, with their tags loaded.

    Attributes:
        streaks: StreakManager recomputed after every save and delete
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[DiaristLogger] = None,
        streak_manager: Optional[StreakManager] = None,
    ):
        super().__init__(session, logger)
        self.streaks = streak_manager or StreakManager(session, logger)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @staticmethod
    def _ordered(query: Select) -> Select:
        return query.order_by(Entry.entry_date.desc())

    def _find_by_date(self, entry_date: date) -> Optional[Entry]:
        return self.session.scalars(
            select(Entry).where(Entry.entry_date == entry_date)
        ).first()

    @handle_db_errors
    @log_database_operation("entry_exists")
    def exists(self, entry_date: Any = None, entry_id: Optional[int] = None) -> bool:
        """
        Check if an entry exists for a date or id.

        Args:
            entry_date: Date, datetime or ISO string
            entry_id: Entry id

        Returns:
            True if entry exists, False otherwise
        """
        if entry_id is not None:
            return self.session.get(Entry, entry_id) is not None
        normalized = DataValidator.normalize_date(entry_date)
        if normalized is None:
            return False
        return self._find_by_date(normalized) is not None

    @handle_db_errors
    @log_database_operation("get_entry")
    def get(self, entry_id: Optional[int] = None, entry_date: Any = None) -> Optional[Entry]:
        """
        Retrieve a single entry by id or by date.

        Args:
            entry_id: Entry id (takes precedence)
            entry_date: Date, datetime or ISO string; time-of-day is ignored

        Returns:
            Entry with its tags, or None if not found
        """
        if entry_id is not None:
            return self._get_by_id(Entry, entry_id)
        normalized = DataValidator.normalize_date(entry_date)
        if normalized is None:
            return None
        return self._find_by_date(normalized)

    @handle_db_errors
    @log_database_operation("get_all_entries")
    def get_all(self) -> List[Entry]:
        """All entries, most recent first."""
        return list(self.session.scalars(self._ordered(select(Entry))))

    @handle_db_errors
    @log_database_operation("get_entries_by_date_range")
    def get_by_date_range(self, start_date: Any, end_date: Any) -> List[Entry]:
        """
        Entries with start_date <= entry_date <= end_date, most recent first.

        Raises:
            ValidationError: If either bound is missing or unparseable
        """
        start = DataValidator.normalize_date(start_date)
        end = DataValidator.normalize_date(end_date)
        if start is None or end is None:
            raise ValidationError("Both start_date and end_date are required")

        query = select(Entry).where(Entry.entry_date >= start, Entry.entry_date <= end)
        return list(self.session.scalars(self._ordered(query)))

    def _search_query(self, term: Optional[str]) -> Select:
        query = select(Entry)
        needle = DataValidator.normalize_string(term)
        if needle:
            needle = needle.casefold()
            query = query.where(
                or_(
                    func.casefold(Entry.title).contains(needle, autoescape=True),
                    func.casefold(Entry.content).contains(needle, autoescape=True),
                )
            )
        return self._ordered(query)

    @handle_db_errors
    @log_database_operation("search_entries")
    def search(self, term: Optional[str]) -> List[Entry]:
        """
        Case-insensitive substring search over title and content.

        A blank or missing term returns every entry.
        """
        return list(self.session.scalars(self._search_query(term)))

    @handle_db_errors
    @log_database_operation("filter_entries")
    def filter(
        self,
        mood: Any = None,
        tag_id: Optional[int] = None,
        start_date: Any = None,
        end_date: Any = None,
    ) -> List[Entry]:
        """
        Entries matching every given criterion, most recent first.

        Args:
            mood: Mood matched against any of the three mood slots
            tag_id: Only entries carrying this tag
            start_date: Inclusive lower date bound
            end_date: Inclusive upper date bound
        """
        query = select(Entry)

        mood_value = DataValidator.normalize_enum(mood, Mood)
        if mood_value is not None:
            query = query.where(
                or_(
                    Entry.primary_mood == mood_value,
                    Entry.secondary_mood_1 == mood_value,
                    Entry.secondary_mood_2 == mood_value,
                )
            )

        if tag_id is not None:
            query = query.where(Entry.tags.any(Tag.id == tag_id))

        start = DataValidator.normalize_date(start_date)
        if start is not None:
            query = query.where(Entry.entry_date >= start)

        end = DataValidator.normalize_date(end_date)
        if end is not None:
            query = query.where(Entry.entry_date <= end)

        return list(self.session.scalars(self._ordered(query)))

    @handle_db_errors
    @log_database_operation("get_paginated_entries")
    def get_paginated(
        self, page: int, page_size: int, search_term: Optional[str] = None
    ) -> Tuple[List[Entry], int]:
        """
        One page of entries plus the total number of matches.

        The search (if any) is applied first, then the most-recent-first
        result is sliced. Pages are 1-indexed.

        Raises:
            ValidationError: If page or page_size is below 1
        """
        if page < 1:
            raise ValidationError(f"Page must be >= 1, got {page}")
        if page_size < 1:
            raise ValidationError(f"Page size must be >= 1, got {page_size}")

        query = self._search_query(search_term)
        total = self.session.scalar(
            select(func.count()).select_from(query.order_by(None).subquery())
        ) or 0
        entries = list(
            self.session.scalars(query.offset((page - 1) * page_size).limit(page_size))
        )
        return entries, total

    @handle_db_errors
    @log_database_operation("get_dates_with_entries")
    def get_dates_with_entries(self, year: int, month: int) -> List[date]:
        """
        Distinct dates in a calendar month that have an entry, ascending.

        Raises:
            ValidationError: If month is not in 1..12
        """
        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")

        first = date(year, month, 1)
        last = date(year, month, calendar.monthrange(year, month)[1])
        return list(
            self.session.scalars(
                select(Entry.entry_date)
                .where(Entry.entry_date >= first, Entry.entry_date <= last)
                .distinct()
                .order_by(Entry.entry_date)
            )
        )

    @handle_db_errors
    @log_database_operation("count_entries")
    def count(self) -> int:
        """Total number of entries."""
        return self._count(Entry)

    @handle_db_errors
    @log_database_operation("get_favorite_entries")
    def get_favorites(self) -> List[Entry]:
        """Favorite entries, most recent first."""
        query = select(Entry).where(Entry.is_favorite.is_(True))
        return list(self.session.scalars(self._ordered(query)))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _resolve_target(self, entry_date: date, incoming_id: int) -> Optional[Entry]:
        """
        Pick the row a save writes to; None means insert.

        An entry already holding the date always wins, so a day never gets
        a second entry.
        """
        same_day = self._find_by_date(entry_date)
        if same_day is not None and same_day.id != incoming_id:
            if incoming_id:
                safe_logger(self.logger).log_info(
                    "Save redirected to existing entry for date",
                    {"incoming_id": incoming_id, "entry_id": same_day.id, "date": entry_date},
                )
            return same_day

        if incoming_id:
            entry = self.session.get(Entry, incoming_id)
            if entry is None:
                safe_logger(self.logger).log_warning(
                    "Entry id not found, inserting as new entry",
                    {"incoming_id": incoming_id, "date": entry_date},
                )
            return entry

        return None

    @handle_db_errors
    @log_database_operation("save_entry")
    @validate_metadata(["entry_date"])
    def save(self, metadata: Dict[str, Any], today: Optional[date] = None) -> Entry:
        """
        Insert or update the entry for a date.

        Args:
            metadata: Dictionary with keys:
                Required:
                    - entry_date: date, datetime or ISO string
                Optional:
                    - id: Id of the entry being edited (0/None for new)
                    - title: Up to 200 characters
                    - content: Markdown text
                    - primary_mood: Mood (default neutral on insert)
                    - secondary_mood_1, secondary_mood_2: Mood or None
                    - is_favorite: bool
                    - tags: Tag objects or ids; the entry ends up with
                      exactly this set
            today: Reference date for the streak recomputation

        Returns:
            The persisted Entry

        Raises:
            ValidationError: If the date, title, moods or tags are invalid.
                Nothing is written in that case.

        Behavior:
            - If another entry already exists for entry_date, that entry is
              updated instead (its id and created_at are kept)
            - Keys absent from metadata keep the entry's current value
            - word_count is recomputed from the content
            - The streak snapshot is recomputed before returning
        """
        entry_date = DataValidator.normalize_date(metadata["entry_date"])
        if entry_date is None:
            raise ValidationError("Required field 'entry_date' missing or empty")
        incoming_id = DataValidator.normalize_int(metadata.get("id")) or 0

        # Validate everything before the first write
        fields: Dict[str, Any] = {}
        if "title" in metadata:
            title = metadata["title"] or ""
            DataValidator.validate_max_length(title, TITLE_MAX_LENGTH, "title")
            fields["title"] = title
        if "content" in metadata:
            fields["content"] = metadata["content"] or ""
        if "primary_mood" in metadata:
            fields["primary_mood"] = (
                DataValidator.normalize_enum(metadata["primary_mood"], Mood) or Mood.NEUTRAL
            )
        for slot in ("secondary_mood_1", "secondary_mood_2"):
            if slot in metadata:
                fields[slot] = DataValidator.normalize_enum(metadata[slot], Mood)
        if "is_favorite" in metadata:
            fields["is_favorite"] = bool(DataValidator.normalize_bool(metadata["is_favorite"]))

        tags: Optional[List[Tag]] = None
        if "tags" in metadata:
            tags = [self._resolve_object(item, Tag) for item in metadata["tags"] or []]

        entry = self._resolve_target(entry_date, incoming_id)
        now = utc_now()
        if entry is None:
            entry = Entry(
                entry_date=entry_date,
                title="",
                content="",
                primary_mood=Mood.NEUTRAL,
                is_favorite=False,
                created_at=now,
            )
            self.session.add(entry)
        else:
            entry.entry_date = entry_date

        for field_name, value in fields.items():
            setattr(entry, field_name, value)
        entry.word_count = DataValidator.count_words(entry.content)
        entry.modified_at = now
        self.session.flush()

        self._replace_collection(
            entry, "tags", tags if tags is not None else list(entry.tags), Tag
        )

        self.streaks.recompute(today=today)

        safe_logger(self.logger).log_debug(
            f"Saved entry {entry.date_formatted}",
            {"entry_id": entry.id, "word_count": entry.word_count, "tags": entry.tag_ids},
        )
        return entry

    @handle_db_errors
    @log_database_operation("delete_entry")
    def delete(self, entry_id: int, today: Optional[date] = None) -> bool:
        """
        Delete an entry and its tag associations.

        A missing id is a no-op. The streak snapshot is recomputed in
        both cases.

        Returns:
            True if an entry was deleted, False if none existed
        """
        entry = self._get_by_id(Entry, entry_id)
        if entry is not None:
            safe_logger(self.logger).log_debug(
                f"Deleting entry {entry.date_formatted}", {"entry_id": entry.id}
            )
            self.session.delete(entry)
            self.session.flush()

        self.streaks.recompute(today=today)
        return entry is not None

    @handle_db_errors
    @log_database_operation("toggle_favorite")
    def toggle_favorite(self, entry_id: int) -> Optional[Entry]:
        """
        Flip the favorite flag of an entry.

        Returns:
            The updated Entry, or None if it does not exist
        """
        entry = self._get_by_id(Entry, entry_id)
        if entry is None:
            return None
        entry.is_favorite = not entry.is_favorite
        entry.modified_at = utc_now()
        self.session.flush()
        return entry
