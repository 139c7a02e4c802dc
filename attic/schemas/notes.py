"""Note procedure schemas."""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Literal, Optional

# --- Third party imports ---
from pydantic import Field

# --- Local imports ---
from attic.database.models.enums import PublishStatus
from .common import AtticModel, ListOut, PaginationInput, SortOrder, TagRef, Timestamped


class CreateNoteInput(AtticModel):
    title: Optional[str] = Field(None, max_length=200)
    content: str = Field(..., min_length=1)
    status: PublishStatus = PublishStatus.DRAFT
    tag_ids: Optional[List[int]] = None


class UpdateNoteInput(AtticModel):
    id: int
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    status: Optional[PublishStatus] = None
    tag_ids: Optional[List[int]] = None


class NoteListInput(PaginationInput):
    status: Optional[PublishStatus] = None
    tag_id: Optional[int] = None
    search: Optional[str] = None
    sort_by: Literal["createdAt", "updatedAt", "title"] = "updatedAt"
    sort_order: SortOrder = "desc"


class ToggleNoteStatusInput(AtticModel):
    id: int
    status: PublishStatus


class BulkUpdateNotesInput(AtticModel):
    note_ids: List[int]
    status: Optional[PublishStatus] = None
    tag_ids: Optional[List[int]] = None


class NoteOut(Timestamped):
    id: int
    title: Optional[str] = None
    content: str
    status: PublishStatus
    tags: List[TagRef] = []


class NoteSummaryOut(Timestamped):
    id: int
    title: Optional[str] = None
    content_preview: str
    status: PublishStatus
    tags: List[TagRef] = []


class NoteListOut(ListOut):
    notes: List[NoteSummaryOut]


class BulkUpdateNotesOut(AtticModel):
    updated: int
    message: str
