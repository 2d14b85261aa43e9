"""Tests for model helpers that do not need a database."""
from datetime import date

import pytest

from diarist.database.models import Entry, Mood, StreakInfo, Tag


class TestEntryHelpers:

    def test_preview_strips_markdown(self):
        entry = Entry(content="# Title\n**bold** and [link](url)")
        assert entry.preview() == "Title\nbold and linkurl"

    def test_preview_truncates(self):
        entry = Entry(content="word " * 50)
        preview = entry.preview(20)
        assert preview.endswith("...")
        assert len(preview) == 23

    @pytest.mark.parametrize("content", [None, "", "   "])
    def test_preview_empty(self, content):
        assert Entry(content=content).preview() == ""

    def test_moods_skip_empty_slots(self):
        entry = Entry(primary_mood=Mood.SAD, secondary_mood_2=Mood.TIRED)
        assert entry.moods == [Mood.SAD, Mood.TIRED]
        assert entry.has_mood(Mood.TIRED)
        assert not entry.has_mood(Mood.HAPPY)

    def test_has_tag_is_case_insensitive(self):
        entry = Entry(tags=[Tag(name="Work")])
        assert entry.has_tag("work")
        assert not entry.has_tag("travel")


class TestMood:

    def test_choices_follow_declaration_order(self):
        assert Mood.choices()[:3] == ["happy", "excited", "grateful"]
        assert len(Mood.choices()) == 15

    def test_display_helpers(self):
        assert Mood.HAPPY.display_name == "Happy"
        assert Mood.HAPPY.emoji == "😊"
        assert Mood.HAPPY.color == "#FFD700"


class TestStreakInfo:

    def test_to_dict_serializes_dates(self):
        info = StreakInfo(
            current_streak=2,
            longest_streak=5,
            total_entries=9,
            total_days_with_entries=9,
            missed_days=1,
            last_entry_date=date(2024, 3, 14),
            streak_start_date=None,
        )
        data = info.to_dict()
        assert data["last_entry_date"] == "2024-03-14"
        assert data["streak_start_date"] is None
        assert data["longest_streak"] == 5
