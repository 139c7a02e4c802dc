#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common CRUD operations and utilities.
All entity managers inherit from this class.

Key Features:
    - Input coercion into typed pydantic schemas
    - Existence checks that raise declared NotFoundError kinds
    - Partial-update builder that only assigns supplied fields
    - Tag set replacement with reference checks before any write
    - Case-insensitive search filters and deterministic pagination

Usage:
    Subclass BaseManager for each content kind:

    class NoteManager(BaseManager):
        @handle_db_errors
        @log_database_operation("create_note")
        def create(self, data) -> Note:
            data = self._coerce(CreateNoteInput, data)
            ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import math
from abc import ABC
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Protocol,
    Sequence,
    Type,
    TypeVar,
    Union,
)

# --- Third party imports ---
import pydantic
from sqlalchemy import or_
from sqlalchemy.orm import Mapped, Query, Session

# --- Local imports ---
from attic.core.exceptions import MissingReferenceError, NotFoundError, ValidationError
from attic.core.logging_manager import AtticLogger, safe_logger
from attic.database.content_resolver import ContentRef, ContentResolver
from attic.database.models import ContentType, Tag
from attic.schemas.common import describe_errors


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)
S = TypeVar("S", bound=pydantic.BaseModel)


@dataclass
class Page(Generic[T]):
    """
    One page of a list query.

    Attributes:
        items: Rows on this page
        total: Number of rows matching the filter across all pages
        page: 1-based page number
        limit: Page size
    """

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class BaseManager(ABC):
    """
    Base manager providing common CRUD operations and utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    #: Content kind handled by the manager, used to detach collection items
    content_type: Optional[ContentType] = None

    def __init__(self, session: Session, logger: Optional[AtticLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Input Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _coerce(schema: Type[S], data: Union[S, Dict[str, Any]]) -> S:
        """
        Turn a mapping into ``schema``, passing instances through.

        Raises:
            ValidationError: If the mapping does not satisfy the schema
        """
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(message=describe_errors(e)) from e

    # -------------------------------------------------------------------------
    # Lookup Helpers
    # -------------------------------------------------------------------------

    def _get_by_id(self, model_class: Type[T], entity_id: int) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            model_class: ORM model class
            entity_id: The entity ID

        Returns:
            Entity if found, None otherwise
        """
        if entity_id is None:
            return None
        return self.session.get(model_class, entity_id)

    def _require(
        self,
        model_class: Type[T],
        entity_id: int,
        kind: str = "NOT_FOUND",
        message: Optional[str] = None,
    ) -> T:
        """
        Get entity by ID or raise the declared not-found error.

        Raises:
            NotFoundError: If no row has this id
        """
        entity = self._get_by_id(model_class, entity_id)
        if entity is None:
            raise NotFoundError(kind, message or f"{model_class.__name__} not found")
        return entity

    def _exists(self, model_class: Type[T], field_name: str, value: Any) -> bool:
        """
        Generic existence check for any entity.

        Args:
            model_class: ORM model class to query
            field_name: Field name to filter by
            value: Value to check for

        Returns:
            True if entity exists, False otherwise
        """
        if value is None:
            return False
        query = self.session.query(model_class).filter_by(**{field_name: value})
        return query.first() is not None

    def _tag_by_slug(self, tag_slug: str) -> Optional[Tag]:
        return self.session.query(Tag).filter_by(slug=tag_slug).first()

    # -------------------------------------------------------------------------
    # Query Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _search(model_class: Type[T], field_names: Sequence[str], term: Optional[str]):
        """
        Case-insensitive substring filter across several text columns.

        Returns None when there is nothing to search for.
        """
        if not term:
            return None
        return or_(
            *(
                getattr(model_class, name).icontains(term, autoescape=True)
                for name in field_names
            )
        )

    @staticmethod
    def _tagged_with(model_class: Type[T], tag_id: Optional[int]):
        """Filter rows carrying ``tag_id``, or None when no tag is requested."""
        if tag_id is None:
            return None
        return model_class.tags.any(Tag.id == tag_id)

    @staticmethod
    def _filter(query: Query, *criteria: Any) -> Query:
        """Apply every criterion that is not None."""
        active = [criterion for criterion in criteria if criterion is not None]
        return query.filter(*active) if active else query

    @staticmethod
    def _order(query: Query, model_class: Type[T], column: Any, sort_order: str) -> Query:
        """
        Order by ``column`` with the primary key as a tie-breaker.

        The tie-breaker keeps page boundaries stable when many rows share
        the same sort value.
        """
        if sort_order == "asc":
            return query.order_by(column.asc(), model_class.id.asc())
        return query.order_by(column.desc(), model_class.id.desc())

    @staticmethod
    def _paginate(query: Query, page: int, limit: int) -> Page:
        """
        Run ``query`` for one page and count the full result.

        Args:
            query: Filtered and ordered query
            page: 1-based page number
            limit: Page size

        Returns:
            Page with items and the unpaginated total
        """
        total = query.order_by(None).count()
        items = query.offset((page - 1) * limit).limit(limit).all()
        return Page(items=items, total=total, page=page, limit=limit)

    # -------------------------------------------------------------------------
    # Update Helpers
    # -------------------------------------------------------------------------

    def _assign_fields(
        self,
        entity: Any,
        updates: Dict[str, Any],
        required: Iterable[str] = (),
    ) -> List[str]:
        """
        Assign supplied fields onto an entity.

        Args:
            entity: ORM instance to modify
            updates: Field values keyed by attribute name; typically
                ``schema.model_dump(exclude_unset=True)`` so absent fields
                are left untouched
            required: Fields that may be changed but never cleared

        Returns:
            Names of the fields that were assigned

        Raises:
            ValidationError: If a required field is set to None
        """
        required = set(required)
        assigned = []
        for name, value in updates.items():
            if value is None and name in required:
                raise ValidationError(message=f"{name} cannot be null")
            setattr(entity, name, value)
            assigned.append(name)
        return assigned

    def _resolve_tags(self, tag_ids: Iterable[int]) -> List[Tag]:
        """
        Load tags by id, preserving order and dropping duplicates.

        Raises:
            MissingReferenceError: TAG_NOT_FOUND if any id is unknown
        """
        unique_ids = list(dict.fromkeys(tag_ids))
        if not unique_ids:
            return []

        found = {
            tag.id: tag
            for tag in self.session.query(Tag).filter(Tag.id.in_(unique_ids)).all()
        }
        missing = [tag_id for tag_id in unique_ids if tag_id not in found]
        if missing:
            raise MissingReferenceError(
                "TAG_NOT_FOUND", f"Tag not found: {', '.join(map(str, missing))}"
            )
        return [found[tag_id] for tag_id in unique_ids]

    def _set_tags(self, entity: Any, tag_ids: Optional[Iterable[int]]) -> None:
        """Replace the whole tag set of ``entity`` when ``tag_ids`` is given."""
        if tag_ids is None:
            return
        entity.tags = self._resolve_tags(tag_ids)

    # -------------------------------------------------------------------------
    # Delete Helpers
    # -------------------------------------------------------------------------

    def _delete_content(self, entity: Any) -> None:
        """
        Delete a content row and every collection item pointing at it.

        Join-table rows go through the ORM relationship; collection items
        have no foreign key to cascade along, so they are removed here in
        the same transaction.
        """
        if self.content_type is not None:
            detached = ContentResolver(self.session, self.logger).detach(
                ContentRef(self.content_type, entity.id)
            )
            if detached:
                safe_logger(self.logger).log_debug(
                    f"Detached {detached} collection item(s)",
                    {"content_type": self.content_type.value, "content_id": entity.id},
                )
        self.session.delete(entity)
        self.session.flush()
