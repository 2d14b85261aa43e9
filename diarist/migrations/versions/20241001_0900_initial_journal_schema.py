"""initial journal schema

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2024-10-01 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MOODS = (
    "happy",
    "excited",
    "grateful",
    "calm",
    "neutral",
    "anxious",
    "sad",
    "angry",
    "tired",
    "stressed",
    "motivated",
    "peaceful",
    "loving",
    "hopeful",
    "confused",
)


def _mood() -> sa.Enum:
    return sa.Enum(*MOODS, name="mood")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("primary_mood", _mood(), nullable=False),
        sa.Column("secondary_mood_1", _mood(), nullable=True),
        sa.Column("secondary_mood_2", _mood(), nullable=True),
        sa.Column("word_count", sa.Integer(), nullable=False),
        sa.Column("is_favorite", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("word_count >= 0", name="positive_entry_word_count"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_entries_entry_date", "entries", ["entry_date"], unique=True)
    op.create_index("ix_entries_primary_mood", "entries", ["primary_mood"])

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("color", sa.String(length=7), nullable=False),
        sa.Column("is_prebuilt", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("name != ''", name="ck_non_empty_tag_name"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tags_name", "tags", ["name"], unique=True)

    op.create_table(
        "entry_tags",
        sa.Column("entry_id", sa.Integer(), nullable=False),
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["entry_id"], ["entries.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("entry_id", "tag_id"),
    )

    op.create_table(
        "streak_info",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False),
        sa.Column("longest_streak", sa.Integer(), nullable=False),
        sa.Column("total_entries", sa.Integer(), nullable=False),
        sa.Column("total_days_with_entries", sa.Integer(), nullable=False),
        sa.Column("missed_days", sa.Integer(), nullable=False),
        sa.Column("last_entry_date", sa.Date(), nullable=True),
        sa.Column("streak_start_date", sa.Date(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("theme", sa.String(length=50), nullable=False),
        sa.Column("is_pin_enabled", sa.Boolean(), nullable=False),
        sa.Column("pin_hash", sa.String(length=256), nullable=True),
        sa.Column("pin_salt", sa.String(length=256), nullable=True),
        sa.Column("show_streak_notifications", sa.Boolean(), nullable=False),
        sa.Column("default_mood", _mood(), nullable=False),
        sa.Column("entries_per_page", sa.Integer(), nullable=False),
        sa.Column("auto_save", sa.Boolean(), nullable=False),
        sa.Column("auto_save_interval", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("user_settings")
    op.drop_table("streak_info")
    op.drop_table("entry_tags")
    op.drop_index("ix_tags_name", table_name="tags")
    op.drop_table("tags")
    op.drop_index("ix_entries_primary_mood", table_name="entries")
    op.drop_index("ix_entries_entry_date", table_name="entries")
    op.drop_table("entries")
