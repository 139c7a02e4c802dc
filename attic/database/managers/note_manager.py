#!/usr/bin/env python3
"""
note_manager.py
--------------------
Manages Note entities, including status toggling and bulk edits.

Usage:
    notes = NoteManager(session, logger)

    note = notes.create({"content": "Idea for an essay on walking"})
    notes.toggle_status({"id": note.id, "status": "PUBLISHED"})
    notes.bulk_update({"noteIds": [1, 2, 3], "tagIds": [4]})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, Optional, Union

# --- Local imports ---
from attic.core.logging_manager import safe_logger
from attic.database.decorators import handle_db_errors, log_database_operation
from attic.database.models import ContentType, Note
from attic.schemas.common import TagSlugInput
from attic.schemas.notes import (
    BulkUpdateNotesInput,
    CreateNoteInput,
    NoteListInput,
    ToggleNoteStatusInput,
    UpdateNoteInput,
)
from .base_manager import BaseManager, Page

SEARCH_FIELDS = ("title", "content")

SORT_COLUMNS = {
    "createdAt": Note.created_at,
    "updatedAt": Note.updated_at,
    "title": Note.title,
}


class NoteManager(BaseManager):
    """Manages Note table operations."""

    content_type = ContentType.NOTE

    @staticmethod
    def _bulk_result(updated: int) -> Dict[str, Any]:
        return {"updated": updated, "message": f"Successfully updated {updated} notes"}

    @handle_db_errors
    @log_database_operation("create_note")
    def create(self, data: Union[CreateNoteInput, Dict[str, Any]]) -> Note:
        data = self._coerce(CreateNoteInput, data)
        note = Note(**data.model_dump(exclude={"tag_ids"}))
        self._set_tags(note, data.tag_ids)
        self.session.add(note)
        self.session.flush()
        return note

    @handle_db_errors
    @log_database_operation("get_note")
    def get(self, note_id: int) -> Optional[Note]:
        return self._get_by_id(Note, note_id)

    @handle_db_errors
    @log_database_operation("list_notes")
    def list(self, params: Union[NoteListInput, Dict[str, Any], None] = None) -> Page[Note]:
        """
        List notes, most recently edited first by default.

        Args:
            params: NoteListInput or mapping (page, limit, status, tagId,
                search, sortBy, sortOrder)
        """
        params = self._coerce(NoteListInput, params or {})
        query = self._filter(
            self.session.query(Note),
            Note.status == params.status if params.status else None,
            self._tagged_with(Note, params.tag_id),
            self._search(Note, SEARCH_FIELDS, params.search),
        )
        query = self._order(query, Note, SORT_COLUMNS[params.sort_by], params.sort_order)
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("list_notes_by_tag")
    def list_by_tag(self, params: Union[TagSlugInput, Dict[str, Any]]) -> Page[Note]:
        params = self._coerce(TagSlugInput, params)
        tag = self._tag_by_slug(params.tag_slug)
        if tag is None:
            return Page(page=params.page, limit=params.limit)

        query = self.session.query(Note).filter(self._tagged_with(Note, tag.id))
        query = self._order(query, Note, Note.updated_at, "desc")
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("update_note")
    def update(self, data: Union[UpdateNoteInput, Dict[str, Any]]) -> Note:
        """
        Update note fields.

        Raises:
            NotFoundError: NOT_FOUND if the note does not exist
        """
        data = self._coerce(UpdateNoteInput, data)
        note = self._require(Note, data.id, message="Note not found")
        updates = data.model_dump(exclude_unset=True, exclude={"id", "tag_ids"})
        self._assign_fields(note, updates, required=("content", "status"))
        self._set_tags(note, data.tag_ids)
        self.session.flush()
        return note

    @handle_db_errors
    @log_database_operation("toggle_note_status")
    def toggle_status(self, data: Union[ToggleNoteStatusInput, Dict[str, Any]]) -> Note:
        """Set a note's status to the given value."""
        data = self._coerce(ToggleNoteStatusInput, data)
        note = self._require(Note, data.id, message="Note not found")
        note.status = data.status
        self.session.flush()
        return note

    @handle_db_errors
    @log_database_operation("bulk_update_notes")
    def bulk_update(self, data: Union[BulkUpdateNotesInput, Dict[str, Any]]) -> Dict[str, Any]:
        """
        Apply the same status and/or tag set to many notes.

        Ids that match no note are skipped. Tag ids are checked before any
        note is touched, so an unknown tag leaves every note unchanged.

        Args:
            data: BulkUpdateNotesInput or mapping (noteIds, status?, tagIds?)

        Returns:
            ``{"updated": n, "message": ...}`` where n counts the existing
            notes the change was applied to; 0 when neither status nor
            tagIds is given

        Raises:
            MissingReferenceError: TAG_NOT_FOUND for unknown tag ids
        """
        data = self._coerce(BulkUpdateNotesInput, data)
        if data.status is None and data.tag_ids is None:
            return self._bulk_result(0)

        tags = self._resolve_tags(data.tag_ids) if data.tag_ids is not None else None
        unique_ids = list(dict.fromkeys(data.note_ids))
        if not unique_ids:
            return self._bulk_result(0)

        notes = self.session.query(Note).filter(Note.id.in_(unique_ids)).all()
        for note in notes:
            if data.status is not None:
                note.status = data.status
            if tags is not None:
                note.tags = list(tags)
        self.session.flush()

        safe_logger(self.logger).log_debug(
            f"Bulk updated {len(notes)} notes",
            {"requested": len(unique_ids), "skipped": len(unique_ids) - len(notes)},
        )
        return self._bulk_result(len(notes))

    @handle_db_errors
    @log_database_operation("delete_note")
    def delete(self, note_id: int) -> None:
        note = self._require(Note, note_id, message="Note not found")
        self._delete_content(note)
