"""
Core Models
------------

Central model for the Diarist database.

Models:
    - Entry: One journal record for a single calendar date

The entries table enforces the one-entry-per-day rule with a UNIQUE
constraint on entry_date. EntryManager.save redirects same-day saves
onto the existing row before that constraint would ever fire.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_tags
from .base import Base, utc_now
from .enums import Mood

if TYPE_CHECKING:
    from .entities import Tag

TITLE_MAX_LENGTH = 200

# Characters stripped from Markdown content when building previews
_MARKDOWN_PUNCTUATION = str.maketrans("", "", "#*_`[]()")


def mood_column_type() -> SQLEnum:
    """Column type storing a Mood by its value."""
    return SQLEnum(Mood, name="mood", values_callable=lambda x: [e.value for e in x])


class Entry(Base):
    """
    A journal entry for a single calendar date.

    Attributes:
        id: Primary key (None until first flush)
        title: Entry title (max 200 characters)
        content: Markdown body
        entry_date: Calendar date of the entry (unique)
        created_at: When the entry was first saved
        modified_at: When the entry was last saved
        primary_mood: Required mood
        secondary_mood_1: Optional second mood
        secondary_mood_2: Optional third mood
        word_count: Token count of content, recomputed on every save
        is_favorite: Whether the user starred the entry

    Relationships:
        tags: Many-to-many with Tag through entry_tags
    """

    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint("word_count >= 0", name="positive_entry_word_count"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    entry_date: Mapped[date] = mapped_column(Date, unique=True, nullable=False, index=True)

    # ---- Moods ----
    primary_mood: Mapped[Mood] = mapped_column(
        mood_column_type(), nullable=False, default=Mood.NEUTRAL, index=True
    )
    secondary_mood_1: Mapped[Optional[Mood]] = mapped_column(mood_column_type(), nullable=True)
    secondary_mood_2: Mapped[Optional[Mood]] = mapped_column(mood_column_type(), nullable=True)

    # ---- Derived / flags ----
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ---- Timestamps ----
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    modified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    # ---- Relationships ----
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=entry_tags, back_populates="entries", lazy="selectin"
    )

    # ---- Computed properties ----
    @property
    def moods(self) -> List[Mood]:
        """Filled mood slots, primary first."""
        return [
            mood
            for mood in (self.primary_mood, self.secondary_mood_1, self.secondary_mood_2)
            if mood is not None
        ]

    @property
    def tag_ids(self) -> List[int]:
        """Ids of the associated tags."""
        return sorted(tag.id for tag in self.tags)

    @property
    def date_formatted(self) -> str:
        """Get date in YYYY-MM-DD format"""
        return self.entry_date.isoformat()

    def has_mood(self, mood: Mood) -> bool:
        """Check whether any mood slot holds the given mood."""
        return mood in self.moods

    def has_tag(self, tag_name: str) -> bool:
        """
        Check if entry has a specific tag.

        Args:
            tag_name: Tag to search for (case-insensitive)
        """
        search_tag = tag_name.casefold()
        return any(tag.name.casefold() == search_tag for tag in self.tags)

    def preview(self, max_length: int = 150) -> str:
        """
        Plain-text preview of the content.

        Markdown punctuation is removed and the text is cut at max_length
        characters, followed by an ellipsis when truncated.
        """
        if not self.content or not self.content.strip():
            return ""
        plain = self.content.translate(_MARKDOWN_PUNCTUATION).strip()
        if len(plain) <= max_length:
            return plain
        return plain[:max_length] + "..."

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, entry_date={self.entry_date}, title={self.title!r})>"

    def __str__(self) -> str:
        return f"Entry {self.date_formatted} ({self.word_count} words)"
