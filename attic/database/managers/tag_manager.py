#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages the Tag registry shared by every content kind.

Key Features:
    - CRUD operations for tags with name/slug uniqueness
    - Lookup by id or slug
    - Listing with search, usage sorting and unused filtering
    - Merge: repoint every join row from one tag to another, then delete it

Usage:
    tags = TagManager(session, logger)

    tag = tags.create({"name": "Stoicism", "color": "#22c55e"})
    tags.get("stoicism")
    result = tags.merge(source_tag_id=3, target_tag_id=1)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional, Union

# --- Third party imports ---
from sqlalchemy import and_, delete, exists, or_, select, update

# --- Local imports ---
from attic.core.exceptions import ConflictError, PreconditionError
from attic.core.logging_manager import safe_logger
from attic.database.decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
)
from attic.database.models import DEFAULT_TAG_COLOR, TAG_JOIN_TABLES, Tag
from attic.database.query_analytics import QueryAnalytics, empty_usage
from attic.schemas.tags import CreateTagInput, TagListInput, UpdateTagInput
from attic.utils.slugify import slugify
from .base_manager import BaseManager, Page


class TagManager(BaseManager):
    """
    Manages Tag table operations.

    Names are unique case-sensitively, and so are the slugs derived from
    them; a new or renamed tag must not collide on either.
    """

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    def _check_unique(self, name: str, slug: str, exclude_id: Optional[int] = None) -> None:
        query = self.session.query(Tag).filter(or_(Tag.name == name, Tag.slug == slug))
        if exclude_id is not None:
            query = query.filter(Tag.id != exclude_id)
        if query.first() is not None:
            raise ConflictError("NAME_EXISTS", "A tag with this name already exists")

    @handle_db_errors
    @log_database_operation("create_tag")
    def create(self, data: Union[CreateTagInput, Dict[str, Any]]) -> Tag:
        """
        Create a new tag.

        Args:
            data: CreateTagInput or mapping with ``name`` and optional ``color``

        Returns:
            Created Tag object

        Raises:
            ValidationError: If the input is malformed
            ConflictError: NAME_EXISTS if the name or its slug is taken
        """
        data = self._coerce(CreateTagInput, data)
        slug = slugify(data.name)
        self._check_unique(data.name, slug)

        tag = Tag(name=data.name, slug=slug, color=data.color or DEFAULT_TAG_COLOR)
        self.session.add(tag)
        self.session.flush()

        safe_logger(self.logger).log_debug(
            f"Created tag: {tag.name}", {"tag_id": tag.id, "slug": tag.slug}
        )
        return tag

    @handle_db_errors
    @log_database_operation("get_tag")
    def get(self, identifier: Union[int, str]) -> Optional[Tag]:
        """
        Retrieve a tag by slug or id.

        Strings are tried as a slug first, then as a numeric id.

        Args:
            identifier: Tag id or slug

        Returns:
            Tag object if found, None otherwise
        """
        if isinstance(identifier, int):
            return self._get_by_id(Tag, identifier)

        tag = self._tag_by_slug(identifier)
        if tag is None and identifier.isdigit():
            tag = self._get_by_id(Tag, int(identifier))
        return tag

    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        return self._get_by_id(Tag, tag_id)

    @handle_db_errors
    @log_database_operation("list_tags")
    def list(self, params: Union[TagListInput, Dict[str, Any], None] = None) -> Page[Tag]:
        """
        List tags with search, sorting and pagination.

        Sorting by ``usage`` ranks every matching tag by its total number of
        join rows before slicing the page.

        Args:
            params: TagListInput or mapping (page, limit, search, sortBy,
                sortOrder, includeUnused)

        Returns:
            Page of Tag objects
        """
        params = self._coerce(TagListInput, params or {})

        query = self._filter(
            self.session.query(Tag), self._search(Tag, ["name"], params.search)
        )
        if not params.include_unused:
            in_use = [
                exists().where(table.c.tag_id == Tag.id)
                for table in TAG_JOIN_TABLES.values()
            ]
            query = query.filter(or_(*in_use))

        if params.sort_by != "usage":
            column = Tag.name if params.sort_by == "name" else Tag.created_at
            query = self._order(query, Tag, column, params.sort_order)
            return self._paginate(query, params.page, params.limit)

        tags = query.all()
        usage = QueryAnalytics(self.session, self.logger).get_usage_counts(
            [tag.id for tag in tags]
        )

        def total(tag: Tag) -> int:
            return sum(usage.get(tag.id, empty_usage()).values())

        descending = params.sort_order == "desc"
        tags.sort(key=lambda tag: (-total(tag) if descending else total(tag), tag.id))
        start = (params.page - 1) * params.limit
        return Page(
            items=tags[start:start + params.limit],
            total=len(tags),
            page=params.page,
            limit=params.limit,
        )

    @handle_db_errors
    @log_database_operation("update_tag")
    def update(self, data: Union[UpdateTagInput, Dict[str, Any]]) -> Tag:
        """
        Rename or recolor a tag.

        The slug is regenerated only when the name actually changes.

        Raises:
            NotFoundError: NOT_FOUND if the tag does not exist
            ConflictError: NAME_EXISTS if another tag has the name or slug
        """
        data = self._coerce(UpdateTagInput, data)
        tag = self._require(Tag, data.id, message="Tag not found")
        updates = data.model_dump(exclude_unset=True, exclude={"id"})

        new_name = updates.get("name")
        if new_name and new_name != tag.name:
            slug = slugify(new_name)
            self._check_unique(new_name, slug, exclude_id=tag.id)
            tag.slug = slug

        self._assign_fields(tag, updates, required=("name",))
        self.session.flush()
        return tag

    @handle_db_errors
    @log_database_operation("delete_tag")
    def delete(self, tag_id: int) -> None:
        """
        Delete a tag.

        Join rows referencing it are removed by the ON DELETE CASCADE of
        every join table.

        Raises:
            NotFoundError: NOT_FOUND if the tag does not exist
        """
        tag = self._require(Tag, tag_id, message="Tag not found")
        safe_logger(self.logger).log_debug(
            f"Deleting tag: {tag.name}", {"tag_id": tag.id}
        )
        self.session.delete(tag)
        self.session.flush()

    def resolve_many(self, tag_ids: List[int]) -> List[Tag]:
        """
        Load tags by id.

        Raises:
            MissingReferenceError: TAG_NOT_FOUND if any id is unknown
        """
        return self._resolve_tags(tag_ids)

    # -------------------------------------------------------------------------
    # Merge
    # -------------------------------------------------------------------------

    def merge(self, source_tag_id: int, target_tag_id: int) -> Dict[str, Any]:
        """
        Move every use of the source tag onto the target tag and delete the source.

        Content already carrying both tags keeps a single target row: its
        source row is dropped rather than repointed, and is not counted.
        All statements run in the caller's transaction, so a failure rolls
        back every join table and the source tag together.

        Args:
            source_tag_id: Tag to absorb and delete
            target_tag_id: Tag that remains

        Returns:
            ``{"source": name, "target": name, "merged_count": {kind: rows repointed}}``

        Raises:
            PreconditionError: SAME_TAG if both ids are equal
            NotFoundError: SOURCE_NOT_FOUND / TARGET_NOT_FOUND
        """
        if source_tag_id == target_tag_id:
            raise PreconditionError("SAME_TAG", "Cannot merge a tag with itself")

        source = self._require(
            Tag, source_tag_id, kind="SOURCE_NOT_FOUND", message="Source tag not found"
        )
        target = self._require(
            Tag, target_tag_id, kind="TARGET_NOT_FOUND", message="Target tag not found"
        )

        source_name, target_name = source.name, target.name
        merged = empty_usage()
        with DatabaseOperation(self.logger, "merge_tags", log_start=True):
            self.session.flush()
            for kind, table in TAG_JOIN_TABLES.items():
                already_tagged = select(table.c.content_id).where(
                    table.c.tag_id == target.id
                )
                self.session.execute(
                    delete(table).where(
                        and_(
                            table.c.tag_id == source.id,
                            table.c.content_id.in_(already_tagged),
                        )
                    )
                )
                result = self.session.execute(
                    update(table)
                    .where(table.c.tag_id == source.id)
                    .values(tag_id=target.id)
                )
                merged[kind] = result.rowcount

            # Tag collections loaded before the bulk statements are stale
            self.session.expire_all()
            self.session.delete(source)
            self.session.flush()

        safe_logger(self.logger).log_operation(
            "tags_merged",
            {"source": source_name, "target": target_name, "merged_count": merged},
        )
        return {"source": source_name, "target": target_name, "merged_count": merged}
