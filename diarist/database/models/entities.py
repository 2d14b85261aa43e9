"""
Entity Models
--------------

Models for tags in the journal.

Models:
    - Tag: Colored keyword labels attached to entries

Pre-built tags ship with the application (see PREBUILT_TAGS); they are
seeded once and can be neither edited nor deleted.
"""

# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional, Tuple

# --- Third party imports ---
from sqlalchemy import Boolean, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .associations import entry_tags
from .base import Base, utc_now

if TYPE_CHECKING:
    from .core import Entry

TAG_NAME_MAX_LENGTH = 50
DEFAULT_TAG_COLOR = "#6366F1"

# (name, color) of the tags seeded on first run
PREBUILT_TAGS: Tuple[Tuple[str, str], ...] = (
    ("Personal", "#EC4899"),
    ("Work", "#3B82F6"),
    ("Health", "#10B981"),
    ("Travel", "#F59E0B"),
    ("Family", "#8B5CF6"),
    ("Goals", "#EF4444"),
    ("Reflection", "#06B6D4"),
    ("Gratitude", "#84CC16"),
    ("Dreams", "#A855F7"),
    ("Ideas", "#F97316"),
)


class Tag(Base):
    """
    Keyword tag for entries.

    Attributes:
        id: Primary key
        name: Tag text (unique, max 50 characters)
        color: Hex color (#RRGGBB)
        is_prebuilt: True for the seeded tags
        created_at: Creation timestamp

    Relationships:
        entries: Many-to-many with Entry
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("name != ''", name="ck_non_empty_tag_name"),)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(TAG_NAME_MAX_LENGTH), unique=True, nullable=False, index=True
    )
    color: Mapped[str] = mapped_column(String(7), nullable=False, default=DEFAULT_TAG_COLOR)
    is_prebuilt: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    # ---- Relationships ----
    entries: Mapped[List["Entry"]] = relationship(
        "Entry", secondary=entry_tags, back_populates="tags"
    )

    # ---- Computed properties ----
    @property
    def usage_count(self) -> int:
        """Number of entries using this tag."""
        return len(self.entries)

    @property
    def last_used(self) -> Optional[date]:
        """Date of the most recent entry with this tag."""
        if not self.entries:
            return None
        return max(entry.entry_date for entry in self.entries)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}', prebuilt={self.is_prebuilt})>"

    def __str__(self) -> str:
        return f"#{self.name}"
