"""
Catalog Backend - Plan Route Handlers
=======================================

What:  Handles GET /api/v1/plans (list) and GET /api/v1/plans/{tier} (detail).
Who:   Called by the public pricing page; no authentication.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.plan import PlanDetailResponse, PlanListResponse
from app.services.plan_service import plan_service

router = APIRouter(prefix="/api/v1", tags=["Plans"])


@router.get(
    "/plans",
    response_model=PlanListResponse,
    responses={
        200: {"description": "Active plans, cheapest first", "model": PlanListResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List active subscription plans",
)
async def list_plans(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PlanListResponse:
    result = await plan_service.list_active_plans(db=db)

    # Prices change rarely; shared caches may keep the list briefly
    response.headers["Cache-Control"] = "public, max-age=300"
    return result


@router.get(
    "/plans/{tier}",
    response_model=PlanDetailResponse,
    responses={
        200: {"description": "Plan details", "model": PlanDetailResponse},
        404: {"description": "No plan for this tier", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a plan by tier",
    description="Tier is matched case-insensitively (free, plus, premium).",
)
async def get_plan(
    tier: str,
    db: AsyncSession = Depends(get_db_session),
) -> PlanDetailResponse:
    return await plan_service.get_plan_by_tier(db=db, tier=tier)
