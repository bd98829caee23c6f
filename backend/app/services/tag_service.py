"""
Catalog Backend - Tag Service
===============================

What:  Tag listing pipeline: parse query → query store → (optionally)
       enrich with translations → assemble the response.
Who:   Called by the GET /api/v1/tags route handler.

Pipeline:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Parse   │───▶│ Page + Count│───▶│  Translate   │───▶│ Response │
    │  Query   │    │  (same WHERE)│   │  (optional)  │    │ envelope │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

Parsing Policy:
    Query parameters are parsed permissively. Malformed values degrade to
    defaults instead of producing a 4xx, each through its own
    parse-with-fallback function below.
"""

import logging
import math
from typing import List, Optional

from sqlalchemy import ColumnElement, asc, desc, false, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.tag import Tag, TagType
from app.schemas.tag import TagItem, TagListParams, TagListResponse
from app.services.translation_service import translation_service

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
DEFAULT_SKIP = 0
# Largest OFFSET a BIGINT (and SQLite INTEGER) can bind
MAX_SKIP = 2**63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Query Parsing
# ══════════════════════════════════════════════════════════════════════════


def _parse_number(raw: Optional[str]) -> Optional[float]:
    """Number from a query string value, or None when absent/blank/invalid/NaN."""
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def _clamp(value: float, upper: int) -> int:
    """Truncate toward zero into [0, upper]. Infinities land on the bounds."""
    if value >= upper:
        return upper
    if value <= 0:
        return 0
    return int(value)


def parse_limit(raw: Optional[str]) -> int:
    """Page size clamped to [0, 100]; invalid input → 20."""
    value = _parse_number(raw)
    if value is None:
        return DEFAULT_LIMIT
    return _clamp(value, MAX_LIMIT)


def parse_skip(raw: Optional[str]) -> int:
    """Offset clamped to [0, MAX_SKIP]; invalid input → 0."""
    value = _parse_number(raw)
    if value is None:
        return DEFAULT_SKIP
    return _clamp(value, MAX_SKIP)


def parse_search(raw: Optional[str]) -> Optional[str]:
    """Trimmed search text; blank means no filter."""
    if raw is None:
        return None
    text = raw.strip()
    return text or None


def parse_type(raw: Optional[str]) -> Optional[str]:
    """Uppercased type filter. Not checked against TagType here."""
    if not raw:
        return None
    return raw.upper()


def parse_include_translations(raw: Optional[str]) -> bool:
    return (raw or "").lower() == "true"


def parse_tag_query(
    search: Optional[str] = None,
    type: Optional[str] = None,
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    include_translations: Optional[str] = None,
    lang: Optional[str] = None,
) -> TagListParams:
    """Turn raw query-string values into validated listing parameters. Never raises."""
    return TagListParams(
        search=parse_search(search),
        type=parse_type(type),
        limit=parse_limit(limit),
        skip=parse_skip(skip),
        include_translations=parse_include_translations(include_translations),
        lang=lang or "",
    )


# ══════════════════════════════════════════════════════════════════════════
# Repository Access
# ══════════════════════════════════════════════════════════════════════════


def build_tag_filter(params: TagListParams) -> List[ColumnElement[bool]]:
    """
    WHERE conditions shared by the page query and the count query.

    An unknown type becomes an always-false condition: the listing returns
    zero rows and a zero count instead of an error.
    """
    conditions: List[ColumnElement[bool]] = []
    if params.type is not None:
        try:
            conditions.append(Tag.type == TagType(params.type))
        except ValueError:
            conditions.append(false())
    if params.search:
        # autoescape: % and _ in user input match literally
        conditions.append(Tag.name.icontains(params.search, autoescape=True))
    return conditions


class TagService:
    """
    Business logic for the tag listing.

    Stateless; the session and parameters are passed per call.
    """

    async def list_tags(self, db: AsyncSession, params: TagListParams) -> TagListResponse:
        """
        Return one page of tags plus the unpaginated match count.

        Query plan:
            SELECT * FROM tags WHERE <filter>
            ORDER BY weight DESC, name ASC OFFSET :skip LIMIT :limit
            SELECT count(*) FROM tags WHERE <filter>

        Raises:
            DatabaseError: either query failed (→ 500)
        """
        conditions = build_tag_filter(params)

        page_query = select(Tag)
        count_query = select(func.count()).select_from(Tag)
        if conditions:
            page_query = page_query.where(*conditions)
            count_query = count_query.where(*conditions)
        page_query = (
            page_query.order_by(desc(Tag.weight), asc(Tag.name))
            .offset(params.skip)
            .limit(params.limit)
        )

        try:
            result = await db.execute(page_query)
            tags = list(result.scalars().all())

            count_result = await db.execute(count_query)
            total_count = count_result.scalar() or 0
        except Exception as e:
            logger.error("Database error listing tags: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to list tags",
                context={
                    "error_type": type(e).__name__,
                    "search": params.search,
                    "type": params.type,
                },
            )

        if params.include_translations:
            items = await translation_service.enrich_tags(tags, params.lang)
        else:
            items = [TagItem.from_tag(tag) for tag in tags]

        logger.info(
            "Listed %d of %d tags (skip=%d, limit=%d, translations=%s)",
            len(items),
            total_count,
            params.skip,
            params.limit,
            params.include_translations,
        )
        return TagListResponse(success=True, data=items, count=total_count)


# ── Singleton Instance ────────────────────────────────────────────────────
tag_service = TagService()
