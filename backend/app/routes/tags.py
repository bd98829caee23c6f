"""
Catalog Backend - Tag Route Handlers
======================================

What:  Handles GET /api/v1/tags.
How:   Takes every query parameter as a raw optional string, hands them to
       the permissive parser, then delegates the listing to TagService.
Who:   Called by the frontend tag pickers and filters.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.tag import TagListResponse
from app.services.tag_service import parse_tag_query, tag_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Tags"])


@router.get(
    "/tags",
    response_model=TagListResponse,
    # label/description are only serialized when enrichment set them
    response_model_exclude_unset=True,
    responses={
        200: {"description": "Page of tags with total count", "model": TagListResponse},
        500: {"description": "Tag store unavailable", "model": ErrorResponse},
    },
    summary="List tags",
    description=(
        "Lists tags filtered by name substring and type, ordered by weight (desc) "
        "then name. With includeTranslations=true each tag also carries a localized "
        "label and description from the bundle selected by `lang`."
    ),
)
async def list_tags(
    search: Optional[str] = Query(default=None, description="Case-insensitive name substring"),
    type: Optional[str] = Query(default=None, description="Tag type (case-insensitive)"),
    limit: Optional[str] = Query(default=None, description="Page size, 0-100 (default 20)"),
    skip: Optional[str] = Query(default=None, description="Rows to skip (default 0)"),
    include_translations: Optional[str] = Query(
        default=None,
        alias="includeTranslations",
        description="'true' to attach label/description",
    ),
    lang: Optional[str] = Query(default=None, description="Language code, e.g. pt-BR, fr"),
    db: AsyncSession = Depends(get_db_session),
) -> TagListResponse:
    """
    List tags.

    Numeric parameters are declared as strings on purpose: malformed values
    fall back to defaults in `parse_tag_query` instead of failing validation.

    Example:
        GET /api/v1/tags?search=fire&limit=1&includeTranslations=true&lang=fr
    """
    params = parse_tag_query(
        search=search,
        type=type,
        limit=limit,
        skip=skip,
        include_translations=include_translations,
        lang=lang,
    )
    return await tag_service.list_tags(db=db, params=params)
