#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag entities: the registry of labels entries can reference.

Tags come in two kinds. Pre-built tags are seeded once on first run and
are immutable: they can be neither renamed, recolored nor deleted.
Custom tags are created by the user and have a normal lifecycle.
Entries only reference tags by id; associations are owned by
EntryManager.

Key Features:
    - CRUD operations for custom tags
    - Idempotent seeding of the pre-built tag set
    - Case-insensitive name uniqueness
    - Usage statistics computed from the entry_tags relation

Usage:
    tag_mgr = TagManager(session, logger)

    tag_mgr.seed_prebuilt()
    tag = tag_mgr.create({"name": "Books", "color": "#123ABC"})
    tag_mgr.delete(tag)
"""
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import func, select

from diarist.core.exceptions import ValidationError
from diarist.core.logging_manager import safe_logger
from diarist.core.validators import DataValidator
from diarist.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from diarist.database.models import (
    DEFAULT_TAG_COLOR,
    PREBUILT_TAGS,
    TAG_NAME_MAX_LENGTH,
    Entry,
    Tag,
)
from .base_manager import BaseManager


class TagManager(BaseManager):
    """
    Manages Tag table operations.

    Tag names are unique (case-insensitive) and at most 50 characters.
    Colors are ``#RRGGBB`` strings, stored upper-cased.
    """

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def _find_by_name(self, name: str) -> Optional[Tag]:
        return self.session.scalars(
            select(Tag).where(func.casefold(Tag.name) == name.casefold())
        ).first()

    @handle_db_errors
    @log_database_operation("tag_exists")
    def exists(self, name: Optional[str] = None, tag_id: Optional[int] = None) -> bool:
        """
        Check if a tag exists without raising exceptions.

        Args:
            name: Tag name to check (case-insensitive)
            tag_id: Tag id to check

        Returns:
            True if tag exists, False otherwise
        """
        if tag_id is not None:
            return self.session.get(Tag, tag_id) is not None
        normalized = DataValidator.normalize_string(name)
        if not normalized:
            return False
        return self._find_by_name(normalized) is not None

    @handle_db_errors
    @log_database_operation("get_tag")
    def get(self, tag_id: Optional[int] = None, name: Optional[str] = None) -> Optional[Tag]:
        """
        Retrieve a tag by id or by name.

        Args:
            tag_id: The tag id (takes precedence)
            name: The tag name (case-insensitive)

        Returns:
            Tag object if found, None otherwise
        """
        if tag_id is not None:
            return self._get_by_id(Tag, tag_id)
        normalized = DataValidator.normalize_string(name)
        if not normalized:
            return None
        return self._find_by_name(normalized)

    @handle_db_errors
    @log_database_operation("get_all_tags")
    def get_all(self, order_by: str = "name") -> List[Tag]:
        """
        Retrieve all tags.

        Args:
            order_by: "name" (alphabetical) or "usage_count" (most used
                first; sorted in Python since usage_count is computed)

        Returns:
            List of all Tag objects
        """
        tags = list(self.session.scalars(select(Tag).order_by(Tag.name)))
        if order_by == "usage_count":
            tags = sorted(tags, key=lambda t: t.usage_count, reverse=True)
        return tags

    @handle_db_errors
    @log_database_operation("get_prebuilt_tags")
    def get_prebuilt(self) -> List[Tag]:
        """Pre-built tags, alphabetical."""
        return list(
            self.session.scalars(
                select(Tag).where(Tag.is_prebuilt.is_(True)).order_by(Tag.name)
            )
        )

    @handle_db_errors
    @log_database_operation("get_custom_tags")
    def get_custom(self) -> List[Tag]:
        """User-created tags, alphabetical."""
        return list(
            self.session.scalars(
                select(Tag).where(Tag.is_prebuilt.is_(False)).order_by(Tag.name)
            )
        )

    @handle_db_errors
    @log_database_operation("get_tags_for_entry")
    def get_for_entry(self, entry_id: int) -> List[Tag]:
        """Tags associated with an entry (empty when the entry does not exist)."""
        entry = self.session.get(Entry, entry_id)
        if entry is None:
            return []
        return sorted(entry.tags, key=lambda t: t.name)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _validate_name(self, raw_name: Any, exclude_id: Optional[int] = None) -> str:
        name = DataValidator.normalize_string(raw_name)
        if not name:
            raise ValidationError("Tag name cannot be empty")
        DataValidator.validate_max_length(name, TAG_NAME_MAX_LENGTH, "name")

        existing = self._find_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ValidationError(f"Tag already exists: {existing.name}")
        return name

    @handle_db_errors
    @log_database_operation("create_tag")
    @validate_metadata(["name"])
    def create(self, metadata: Dict[str, Any]) -> Tag:
        """
        Create a new custom tag.

        Args:
            metadata: Dictionary with keys:
                - name: Tag text (required)
                - color: Hex color (optional, default #6366F1)

        Returns:
            Created Tag object

        Raises:
            ValidationError: If the name is empty, too long or taken,
                or the color is malformed
        """
        name = self._validate_name(metadata["name"])
        color = DataValidator.validate_hex_color(metadata.get("color") or DEFAULT_TAG_COLOR)

        tag = Tag(name=name, color=color, is_prebuilt=False)
        self.session.add(tag)
        self.session.flush()

        safe_logger(self.logger).log_debug(f"Created tag: {name}", {"tag_id": tag.id})
        return tag

    @handle_db_errors
    @log_database_operation("update_tag")
    def update(self, tag: Union[Tag, int], metadata: Dict[str, Any]) -> Tag:
        """
        Rename or recolor a custom tag.

        Args:
            tag: Tag object or id
            metadata: Optional keys "name" and "color"

        Raises:
            ValidationError: If the tag is missing or pre-built, or the new
                values are invalid
        """
        tag = self._resolve_object(tag, Tag)
        if tag.is_prebuilt:
            raise ValidationError(f"Pre-built tag '{tag.name}' cannot be edited")

        if "name" in metadata:
            tag.name = self._validate_name(metadata["name"], exclude_id=tag.id)
        if "color" in metadata:
            tag.color = DataValidator.validate_hex_color(metadata["color"])

        self.session.flush()
        return tag

    @handle_db_errors
    @log_database_operation("delete_tag")
    def delete(self, tag: Union[Tag, int]) -> bool:
        """
        Delete a custom tag and its entry associations.

        Args:
            tag: Tag object or id

        Returns:
            True if deleted, False if no such tag exists

        Raises:
            ValidationError: If the tag is pre-built (nothing is changed)
        """
        if isinstance(tag, int):
            found = self._get_by_id(Tag, tag)
            if found is None:
                return False
            tag = found

        if tag.is_prebuilt:
            raise ValidationError(f"Pre-built tag '{tag.name}' cannot be deleted")

        safe_logger(self.logger).log_debug(
            f"Deleting tag: {tag.name}",
            {"tag_id": tag.id, "usage_count": tag.usage_count},
        )

        # Entries already loaded in this session must not keep the deleted tag
        for entry in list(tag.entries):
            entry.tags.remove(tag)

        self.session.delete(tag)
        self.session.flush()
        return True

    @handle_db_errors
    @log_database_operation("seed_prebuilt_tags")
    def seed_prebuilt(self) -> int:
        """
        Insert any missing pre-built tags.

        Safe to call on every start: tags are matched by name, so
        re-seeding never creates duplicates.

        Returns:
            Number of tags inserted
        """
        existing = {name.casefold() for name in self.session.scalars(select(Tag.name))}
        created = 0
        for name, color in PREBUILT_TAGS:
            if name.casefold() in existing:
                continue
            self.session.add(Tag(name=name, color=color, is_prebuilt=True))
            created += 1

        if created:
            self.session.flush()
            safe_logger(self.logger).log_info(
                "Seeded pre-built tags", {"created": created}
            )
        return created

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_tags_by_usage")
    def get_by_usage(self, min_count: int = 1, max_count: Optional[int] = None) -> List[Tag]:
        """
        Get tags filtered by usage count.

        Args:
            min_count: Minimum number of entries using the tag
            max_count: Maximum number of entries using the tag (optional)

        Returns:
            List of Tag objects sorted by usage count (descending)
        """
        filtered = [
            tag
            for tag in self.get_all()
            if tag.usage_count >= min_count
            and (max_count is None or tag.usage_count <= max_count)
        ]
        return sorted(filtered, key=lambda t: t.usage_count, reverse=True)
