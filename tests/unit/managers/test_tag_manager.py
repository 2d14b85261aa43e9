"""
test_tag_manager.py
-------------------
Unit tests for TagManager operations.

Covers the custom tag lifecycle, idempotent seeding of the pre-built
tags, and the protection rules that keep pre-built tags immutable.
"""
import pytest

from diarist.core.exceptions import ValidationError
from diarist.database.models import DEFAULT_TAG_COLOR, PREBUILT_TAGS, Tag


class TestTagManagerSeeding:
    """Test TagManager.seed_prebuilt() method."""

    def test_seed_creates_all_prebuilt_tags(self, tag_manager):
        """Test seeding inserts every pre-built tag."""
        created = tag_manager.seed_prebuilt()

        assert created == len(PREBUILT_TAGS)
        names = {t.name for t in tag_manager.get_prebuilt()}
        assert names == {name for name, _ in PREBUILT_TAGS}

    def test_seed_is_idempotent(self, tag_manager):
        """Test seeding twice does not duplicate tags."""
        tag_manager.seed_prebuilt()
        assert tag_manager.seed_prebuilt() == 0
        assert len(tag_manager.get_all()) == len(PREBUILT_TAGS)

    def test_seeded_tags_are_flagged_prebuilt(self, seeded_tags):
        """Test seeded tags carry is_prebuilt and their palette color."""
        colors = dict(PREBUILT_TAGS)
        for name, tag in seeded_tags.items():
            assert tag.is_prebuilt is True
            assert tag.color == colors[name]

    def test_seed_skips_existing_name_case_insensitively(self, tag_manager, db_session):
        """Test a custom tag sharing a pre-built name blocks only that one."""
        db_session.add(Tag(name="work", color="#000000", is_prebuilt=False))
        db_session.flush()

        assert tag_manager.seed_prebuilt() == len(PREBUILT_TAGS) - 1


class TestTagManagerLookup:
    """Test exists/get/get_all methods."""

    def test_exists_returns_false_when_not_found(self, tag_manager):
        """Test exists returns False for non-existent tag."""
        assert tag_manager.exists(name="nonexistent") is False

    def test_exists_by_name_and_id(self, tag_manager):
        """Test exists finds a tag by name (any case) or id."""
        tag = tag_manager.create({"name": "Books"})

        assert tag_manager.exists(name="books") is True
        assert tag_manager.exists(tag_id=tag.id) is True

    def test_exists_empty_string_returns_false(self, tag_manager):
        """Test exists returns False for empty or missing names."""
        assert tag_manager.exists(name="") is False
        assert tag_manager.exists() is False

    def test_get_returns_none_when_not_found(self, tag_manager):
        """Test get returns None for unknown id or name."""
        assert tag_manager.get(tag_id=999) is None
        assert tag_manager.get(name="missing") is None

    def test_get_by_name_strips_whitespace(self, tag_manager):
        """Test get normalizes whitespace around names."""
        tag_manager.create({"name": "Books"})

        result = tag_manager.get(name="  books  ")
        assert result is not None
        assert result.name == "Books"

    def test_get_all_ordered_by_name(self, tag_manager):
        """Test get_all returns tags ordered alphabetically."""
        for name in ("zebra", "apple", "banana"):
            tag_manager.create({"name": name})

        assert [t.name for t in tag_manager.get_all()] == ["apple", "banana", "zebra"]

    def test_get_all_ordered_by_usage(self, tag_manager, entry_manager):
        """Test get_all can rank tags by usage count."""
        rare = tag_manager.create({"name": "rare"})
        common = tag_manager.create({"name": "common"})
        entry_manager.save({"entry_date": "2024-03-01", "tags": [rare, common]})
        entry_manager.save({"entry_date": "2024-03-02", "tags": [common]})

        result = tag_manager.get_all(order_by="usage_count")
        assert [t.name for t in result] == ["common", "rare"]

    def test_prebuilt_and_custom_are_disjoint(self, tag_manager, seeded_tags):
        """Test get_prebuilt and get_custom split the registry."""
        tag_manager.create({"name": "Books"})

        assert len(tag_manager.get_prebuilt()) == len(seeded_tags)
        assert [t.name for t in tag_manager.get_custom()] == ["Books"]

    def test_get_for_entry(self, tag_manager, entry_manager, seeded_tags):
        """Test get_for_entry lists an entry's tags by name."""
        entry = entry_manager.save(
            {"entry_date": "2024-03-01", "tags": [seeded_tags["Work"], seeded_tags["Health"]]}
        )

        assert [t.name for t in tag_manager.get_for_entry(entry.id)] == ["Health", "Work"]
        assert tag_manager.get_for_entry(999) == []


class TestTagManagerCreate:
    """Test TagManager.create() method."""

    def test_create_with_defaults(self, tag_manager):
        """Test create assigns the default color and custom flag."""
        tag = tag_manager.create({"name": "Books"})

        assert tag.id is not None
        assert tag.color == DEFAULT_TAG_COLOR
        assert tag.is_prebuilt is False

    def test_create_upper_cases_color(self, tag_manager):
        """Test colors are stored upper-cased."""
        tag = tag_manager.create({"name": "Books", "color": "#12ab9f"})
        assert tag.color == "#12AB9F"

    @pytest.mark.parametrize("color", ["123456", "#12345", "#GGGGGG", "red"])
    def test_create_rejects_malformed_color(self, tag_manager, color):
        """Test malformed colors raise ValidationError."""
        with pytest.raises(ValidationError):
            tag_manager.create({"name": "Books", "color": color})

    def test_create_requires_name(self, tag_manager):
        """Test missing or blank names raise ValidationError."""
        with pytest.raises(ValidationError):
            tag_manager.create({"color": "#123456"})
        with pytest.raises(ValidationError):
            tag_manager.create({"name": "   "})

    def test_create_rejects_long_name(self, tag_manager):
        """Test names over 50 characters are rejected."""
        with pytest.raises(ValidationError):
            tag_manager.create({"name": "x" * 51})

    def test_create_rejects_duplicate_name_any_case(self, tag_manager):
        """Test tag names are unique regardless of case."""
        tag_manager.create({"name": "Books"})
        with pytest.raises(ValidationError, match="already exists"):
            tag_manager.create({"name": "BOOKS"})

    def test_create_rejects_duplicate_accented_name(self, tag_manager):
        """Test uniqueness folds the case of non-ASCII letters too."""
        tag_manager.create({"name": "Été"})
        with pytest.raises(ValidationError, match="already exists"):
            tag_manager.create({"name": "été"})
        assert tag_manager.get(name="ÉTÉ").name == "Été"


class TestTagManagerUpdate:
    """Test TagManager.update() method."""

    def test_update_renames_and_recolors(self, tag_manager):
        """Test update changes name and color of a custom tag."""
        tag = tag_manager.create({"name": "Books"})

        updated = tag_manager.update(tag.id, {"name": "Reading", "color": "#000000"})
        assert updated.name == "Reading"
        assert updated.color == "#000000"

    def test_update_allows_same_name(self, tag_manager):
        """Test renaming a tag to its own name (new case) is allowed."""
        tag = tag_manager.create({"name": "Books"})
        assert tag_manager.update(tag, {"name": "books"}).name == "books"

    def test_update_prebuilt_rejected(self, tag_manager, seeded_tags):
        """Test pre-built tags cannot be edited."""
        work = seeded_tags["Work"]
        with pytest.raises(ValidationError, match="cannot be edited"):
            tag_manager.update(work, {"color": "#000000"})
        assert work.color == dict(PREBUILT_TAGS)["Work"]

    def test_update_unknown_id_rejected(self, tag_manager):
        """Test updating a missing tag raises ValidationError."""
        with pytest.raises(ValidationError):
            tag_manager.update(999, {"name": "x"})


class TestTagManagerDelete:
    """Test TagManager.delete() method."""

    def test_delete_custom_tag(self, tag_manager):
        """Test delete removes a custom tag."""
        tag = tag_manager.create({"name": "Books"})

        assert tag_manager.delete(tag.id) is True
        assert tag_manager.get(tag_id=tag.id) is None

    def test_delete_missing_is_noop(self, tag_manager):
        """Test deleting an unknown id returns False."""
        assert tag_manager.delete(999) is False

    def test_delete_removes_associations(self, tag_manager, entry_manager, db_session):
        """Test deleting a tag drops it from every entry."""
        tag = tag_manager.create({"name": "Books"})
        entry = entry_manager.save({"entry_date": "2024-03-01", "tags": [tag]})

        tag_manager.delete(tag)
        db_session.expire(entry)

        assert entry.tags == []

    def test_entry_saves_after_tag_deleted(self, tag_manager, entry_manager):
        """Test an entry loaded before its tag was deleted can be saved again."""
        tag = tag_manager.create({"name": "Books"})
        entry = entry_manager.save({"entry_date": "2024-03-01", "tags": [tag.id]})

        tag_manager.delete(tag.id)
        assert entry.tags == []

        updated = entry_manager.save({"entry_date": "2024-03-01", "content": "y z"})
        assert updated.id == entry.id
        assert updated.word_count == 2
        assert updated.tags == []

    def test_delete_prebuilt_rejected_and_associations_kept(
        self, tag_manager, entry_manager, seeded_tags, db_session
    ):
        """Test deleting a pre-built tag fails and leaves its entries tagged."""
        work = seeded_tags["Work"]
        entry = entry_manager.save({"entry_date": "2024-03-01", "tags": [work]})

        with pytest.raises(ValidationError, match="cannot be deleted"):
            tag_manager.delete(work.id)

        db_session.expire_all()
        assert tag_manager.get(tag_id=work.id) is not None
        assert [t.id for t in entry_manager.get(entry_id=entry.id).tags] == [work.id]


class TestTagManagerUsage:
    """Test TagManager.get_by_usage() method."""

    def test_get_by_usage_filters_range(self, tag_manager, entry_manager):
        """Test usage filtering honors min and max bounds."""
        a = tag_manager.create({"name": "a"})
        b = tag_manager.create({"name": "b"})
        tag_manager.create({"name": "unused"})
        entry_manager.save({"entry_date": "2024-03-01", "tags": [a, b]})
        entry_manager.save({"entry_date": "2024-03-02", "tags": [a]})

        assert [t.name for t in tag_manager.get_by_usage()] == ["a", "b"]
        assert [t.name for t in tag_manager.get_by_usage(min_count=2)] == ["a"]
        assert [t.name for t in tag_manager.get_by_usage(max_count=1)] == ["b"]
