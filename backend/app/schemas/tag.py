"""
Catalog Backend - Tag Request/Response Schemas
================================================

What:  Pydantic models for the tag listing contract.
How:   TagListParams is the validated result of query parsing; TagItem and
       TagListResponse are serialized with `exclude_unset`, so `label` and
       `description` only appear when enrichment explicitly set them.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from app.models.tag import TagType


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Models
# ══════════════════════════════════════════════════════════════════════════


class TagListParams(BaseModel):
    """
    What:  Normalized parameters for GET /api/v1/tags.
    How:   Built by `parse_tag_query` in the tag service; raw query strings
           never reach this model unparsed.

    Parameters:
        search: Trimmed substring filter on name; None means no filter
        type: Uppercased exact-match filter on Tag.type; None means no filter
        limit: Page size, 0-100 (default 20)
        skip: Rows to skip, >= 0 (default 0)
        include_translations: Attach label/description from the language bundle
        lang: Raw language code, resolved to a bundle downstream
    """
    search: Optional[str] = Field(default=None)
    type: Optional[str] = Field(default=None)
    limit: int = Field(default=20, ge=0, le=100)
    skip: int = Field(default=0, ge=0)
    include_translations: bool = Field(default=False)
    lang: str = Field(default="")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TagItem(BaseModel):
    """
    What:  A tag as returned by the listing, optionally enriched.

    label/description are left unset (and therefore omitted from the JSON)
    unless translations were requested. When requested they are always
    present: label falls back to the canonical name, description to null.
    """
    id: uuid.UUID = Field(description="Unique tag identifier")
    name: str = Field(description="Canonical tag name")
    type: TagType = Field(description="Tag category")
    weight: int = Field(description="Sort priority, higher first")
    original_language_code: Optional[str] = Field(default=None)
    created_at: datetime
    updated_at: datetime
    label: Optional[str] = Field(default=None, description="Localized display label")
    description: Optional[str] = Field(default=None, description="Localized description")

    @classmethod
    def from_tag(cls, tag: Any, **extra: Any) -> "TagItem":
        """
        Build an item from a Tag row. Only the keys passed in `extra` count
        as explicitly set, so omitted label/description stay out of the JSON.
        """
        return cls(
            id=tag.id,
            name=tag.name,
            type=tag.type,
            weight=tag.weight,
            original_language_code=tag.original_language_code,
            created_at=tag.created_at,
            updated_at=tag.updated_at,
            **extra,
        )


class TagListResponse(BaseModel):
    """
    What:  Listing envelope for GET /api/v1/tags.

    count is the total number of tags matching the filter, ignoring skip/limit.
    """
    success: bool = Field(default=True)
    data: List[TagItem] = Field(description="Current page of tags")
    count: int = Field(description="Total matches ignoring pagination")
