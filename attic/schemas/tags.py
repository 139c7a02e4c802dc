"""Tag procedure schemas."""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import List, Literal, Optional, Union

# --- Third party imports ---
from pydantic import Field, model_validator

# --- Local imports ---
from .common import (
    HEX_COLOR_PATTERN,
    AtticModel,
    ListOut,
    PaginationInput,
    SortOrder,
    TagCounts,
)


class CreateTagInput(AtticModel):
    name: str = Field(..., min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class UpdateTagInput(AtticModel):
    id: int
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class TagIdentifierInput(AtticModel):
    """Tag addressed by id or slug."""

    identifier: Union[int, str]


class TagListInput(PaginationInput):
    limit: int = Field(20, ge=1, le=100)
    search: Optional[str] = None
    sort_by: Literal["name", "createdAt", "usage"] = "name"
    sort_order: SortOrder = "asc"
    include_unused: bool = True


class TagUsageInput(AtticModel):
    tag_id: int


class TagLimitInput(AtticModel):
    limit: int = Field(10, ge=1, le=50)


class MergeTagsInput(AtticModel):
    source_tag_id: int
    target_tag_id: int


class TagOut(AtticModel):
    id: int
    name: str
    slug: str
    color: Optional[str] = None
    created_at: datetime
    counts: Optional[TagCounts] = Field(None, alias="_count")


class TagListOut(ListOut):
    tags: List[TagOut]


class TagUsageOut(AtticModel):
    tag: TagOut
    total_usage: int
    usage_breakdown: TagCounts

    @model_validator(mode="after")
    def check_total(self) -> "TagUsageOut":
        if self.total_usage != self.usage_breakdown.total:
            raise ValueError("totalUsage must equal the sum of the usage breakdown")
        return self


class MergedCounts(TagCounts):
    """Join rows repointed per content kind by a merge."""


class MergeTagsOut(AtticModel):
    success: bool = True
    message: str
    merged_count: MergedCounts
