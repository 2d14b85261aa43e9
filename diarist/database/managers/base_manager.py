#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common ORM helpers for the journal managers.
All entity managers inherit from this class.

Key Features:
    - Get-or-create for the single-row state tables
    - Object resolution from ORM instances or integer ids
    - Collection replacement for many-to-many relationships
    - Scalar field updates driven by normalizers

Usage:
    class StreakManager(BaseManager):
        def get_info(self) -> StreakInfo:
            return self._get_or_create(StreakInfo, {"id": SINGLETON_ID})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Dict, Iterable, List, Optional, Protocol, Type, TypeVar, Union

# --- Third party imports ---
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from diarist.core.exceptions import DatabaseError, ValidationError
from diarist.core.logging_manager import DiaristLogger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager providing common operations and utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[DiaristLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Get an existing row or create it with defaults.

        The new object is added to the session and flushed immediately.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Dictionary of field_name: value to filter/create
            extra_fields: Additional fields for new object creation only

        Returns:
            ORM instance of the model class

        Raises:
            DatabaseError: If the insert violates a constraint
        """
        obj = self.session.scalars(select(model_class).filter_by(**lookup_fields)).first()
        if obj:
            return obj

        fields = lookup_fields.copy()
        if extra_fields:
            fields.update(extra_fields)

        obj = model_class(**fields)
        self.session.add(obj)
        try:
            self.session.flush()
        except IntegrityError as e:
            raise DatabaseError(f"Failed to create {model_class.__name__}: {e}") from e
        return obj

    def _resolve_object(self, item: Union[T, int], model_class: Type[T]) -> T:
        """
        Resolve an item to a persisted ORM object.

        Args:
            item: Object instance or ID
            model_class: Target model class

        Returns:
            Resolved ORM object

        Raises:
            ValidationError: If the object does not exist or is not persisted
        """
        if isinstance(item, model_class):
            if item.id is None:
                raise ValidationError(f"{model_class.__name__} instance must be persisted")
            return item
        if isinstance(item, int) and not isinstance(item, bool):
            obj = self.session.get(model_class, item)
            if obj is None:
                raise ValidationError(f"No {model_class.__name__} found with id: {item}")
            return obj
        raise ValidationError(
            f"Expected {model_class.__name__} instance or int, got {type(item).__name__}"
        )

    def _get_by_id(self, model_class: Type[T], entity_id: Optional[int]) -> Optional[T]:
        """Get entity by ID, None when missing."""
        if entity_id is None:
            return None
        return self.session.get(model_class, entity_id)

    def _count(self, model_class: Type[T]) -> int:
        """Count rows of a model."""
        return self.session.scalar(select(func.count()).select_from(model_class)) or 0

    # -------------------------------------------------------------------------
    # Relationship / Field Helpers
    # -------------------------------------------------------------------------

    def _replace_collection(
        self,
        entity: Any,
        attr_name: str,
        items: Iterable[Any],
        model_class: Type[T],
    ) -> None:
        """
        Replace a many-to-many collection so it holds exactly ``items``.

        Every item is resolved before the collection is touched, so an
        unresolvable item leaves the collection unchanged.

        Raises:
            ValidationError: If any item cannot be resolved
        """
        resolved: List[T] = []
        for item in items:
            obj = self._resolve_object(item, model_class)
            if obj not in resolved:
                resolved.append(obj)

        collection = getattr(entity, attr_name)
        collection.clear()
        self.session.flush()
        collection.extend(resolved)
        self.session.flush()

    def _update_scalar_fields(
        self,
        entity: Any,
        metadata: Dict[str, Any],
        field_configs: List[tuple],
    ) -> None:
        """
        Update multiple scalar fields from metadata using normalizers.

        Args:
            entity: Entity to update
            metadata: Dictionary containing field values
            field_configs: List of tuples:
                - (field_name, normalizer) for required fields
                - (field_name, normalizer, allow_none) for optional fields

        Example:
            self._update_scalar_fields(settings, metadata, [
                ("theme", DataValidator.normalize_string),
                ("auto_save", DataValidator.normalize_bool),
            ])
        """
        for config in field_configs:
            field_name = config[0]
            normalizer = config[1]
            allow_none = config[2] if len(config) > 2 else False

            if field_name not in metadata:
                continue

            value = normalizer(metadata[field_name])
            if value is not None or allow_none:
                setattr(entity, field_name, value)
