#!/usr/bin/env python3
"""
essay_manager.py
--------------------
Manages Essay entities.

Essays are addressed by a slug derived from the title. Renaming an essay
regenerates the slug and the previous slug stops resolving.

Usage:
    essays = EssayManager(session, logger)

    essay = essays.create({"title": "On Walking", "content": "..."})
    essays.get("on-walking")
    essays.update({"id": essay.id, "title": "On Walking, Again"})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, Optional, Union

# --- Local imports ---
from attic.core.exceptions import ConflictError
from attic.core.logging_manager import safe_logger
from attic.database.decorators import handle_db_errors, log_database_operation
from attic.database.models import ContentType, Essay, PublishStatus
from attic.schemas.common import TagSlugInput
from attic.schemas.essays import CreateEssayInput, EssayListInput, UpdateEssayInput
from attic.utils.slugify import slugify
from .base_manager import BaseManager, Page

SEARCH_FIELDS = ("title", "subtitle", "excerpt")


class EssayManager(BaseManager):
    """Manages Essay table operations."""

    content_type = ContentType.ESSAY

    def _check_slug(self, slug: str, exclude_id: Optional[int] = None) -> None:
        existing = self.session.query(Essay).filter_by(slug=slug).first()
        if existing is not None and existing.id != exclude_id:
            raise ConflictError("SLUG_EXISTS", "An essay with this title already exists")

    @handle_db_errors
    @log_database_operation("create_essay")
    def create(self, data: Union[CreateEssayInput, Dict[str, Any]]) -> Essay:
        """
        Create a new essay.

        Args:
            data: CreateEssayInput or mapping

        Returns:
            Created Essay with its tags

        Raises:
            ConflictError: SLUG_EXISTS if another essay has the same slug
            MissingReferenceError: TAG_NOT_FOUND for unknown tag ids
        """
        data = self._coerce(CreateEssayInput, data)
        slug = slugify(data.title)
        self._check_slug(slug)

        essay = Essay(slug=slug, **data.model_dump(exclude={"tag_ids"}))
        self._set_tags(essay, data.tag_ids)
        self.session.add(essay)
        self.session.flush()

        safe_logger(self.logger).log_debug(
            f"Created essay: {essay.slug}", {"essay_id": essay.id}
        )
        return essay

    @handle_db_errors
    @log_database_operation("get_essay")
    def get(self, identifier: Union[int, str]) -> Optional[Essay]:
        """
        Retrieve an essay by slug or id.

        Strings are matched against slugs first, then tried as a numeric id.
        """
        if isinstance(identifier, int):
            return self._get_by_id(Essay, identifier)

        essay = self.session.query(Essay).filter_by(slug=identifier).first()
        if essay is None and identifier.isdigit():
            essay = self._get_by_id(Essay, int(identifier))
        return essay

    @handle_db_errors
    @log_database_operation("list_essays")
    def list(self, params: Union[EssayListInput, Dict[str, Any], None] = None) -> Page[Essay]:
        """
        List essays, newest publication first.

        Args:
            params: EssayListInput or mapping (page, limit, status, tagId, search)
        """
        params = self._coerce(EssayListInput, params or {})
        query = self._filter(
            self.session.query(Essay),
            Essay.status == params.status if params.status else None,
            self._tagged_with(Essay, params.tag_id),
            self._search(Essay, SEARCH_FIELDS, params.search),
        )
        query = self._order(query, Essay, Essay.published_at, "desc")
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("list_essays_by_tag")
    def list_by_tag(self, params: Union[TagSlugInput, Dict[str, Any]]) -> Page[Essay]:
        """
        Published essays carrying the tag with this slug.

        An unknown slug yields an empty page.
        """
        params = self._coerce(TagSlugInput, params)
        tag = self._tag_by_slug(params.tag_slug)
        if tag is None:
            return Page(page=params.page, limit=params.limit)

        query = self._filter(
            self.session.query(Essay),
            self._tagged_with(Essay, tag.id),
            Essay.status == PublishStatus.PUBLISHED,
        )
        query = self._order(query, Essay, Essay.published_at, "desc")
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("update_essay")
    def update(self, data: Union[UpdateEssayInput, Dict[str, Any]]) -> Essay:
        """
        Update an essay.

        The slug is regenerated only when the title changes; the old slug
        is not kept as an alias.

        Raises:
            NotFoundError: NOT_FOUND if the essay does not exist
            ConflictError: SLUG_EXISTS if the new slug belongs to another essay
        """
        data = self._coerce(UpdateEssayInput, data)
        essay = self._require(Essay, data.id, message="Essay not found")
        updates = data.model_dump(exclude_unset=True, exclude={"id", "tag_ids"})

        new_title = updates.get("title")
        if new_title and new_title != essay.title:
            slug = slugify(new_title)
            self._check_slug(slug, exclude_id=essay.id)
            if slug != essay.slug:
                safe_logger(self.logger).log_info(
                    "Essay slug changed", {"essay_id": essay.id, "old": essay.slug, "new": slug}
                )
            essay.slug = slug

        self._assign_fields(essay, updates, required=("title", "content", "status"))
        self._set_tags(essay, data.tag_ids)
        self.session.flush()
        return essay

    @handle_db_errors
    @log_database_operation("delete_essay")
    def delete(self, essay_id: int) -> None:
        """
        Delete an essay, its tag links and any collection items pointing at it.

        Raises:
            NotFoundError: NOT_FOUND if the essay does not exist
        """
        essay = self._require(Essay, essay_id, message="Essay not found")
        self._delete_content(essay)
