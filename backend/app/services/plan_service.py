"""
Catalog Backend - Plan Service
================================

What:  Read-only access to subscription plans.
Who:   Called by the /api/v1/plans route handlers.
"""

import logging

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.plan import Plan, PlanTier
from app.schemas.plan import PlanDetailResponse, PlanListResponse, PlanResponse

logger = logging.getLogger(__name__)


class PlanService:
    """Business logic for plan listing and tier lookup."""

    async def list_active_plans(self, db: AsyncSession) -> PlanListResponse:
        """Active plans ordered by monthly price, cheapest first."""
        try:
            result = await db.execute(
                select(Plan)
                .where(Plan.is_active.is_(True))
                .order_by(asc(Plan.price_monthly))
            )
            plans = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing plans: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to list plans",
                context={"error_type": type(e).__name__},
            )

        return PlanListResponse(
            success=True,
            data=[PlanResponse.model_validate(plan) for plan in plans],
        )

    async def get_plan_by_tier(self, db: AsyncSession, tier: str) -> PlanDetailResponse:
        """
        Fetch one plan by tier key (case-insensitive).

        Raises:
            NotFoundError: unknown tier or no plan row for it (→ 404)
            DatabaseError: query failed (→ 500)
        """
        tier_key = tier.upper()
        try:
            plan_tier = PlanTier(tier_key)
        except ValueError:
            raise NotFoundError(resource="plan", resource_id=tier_key)

        try:
            result = await db.execute(select(Plan).where(Plan.tier == plan_tier))
            plan = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching plan %s: %s", tier_key, str(e))
            raise DatabaseError(
                message="Failed to fetch plan",
                context={"tier": tier_key},
            )

        if plan is None:
            raise NotFoundError(resource="plan", resource_id=tier_key)

        return PlanDetailResponse(success=True, data=PlanResponse.model_validate(plan))


# ── Singleton Instance ────────────────────────────────────────────────────
plan_service = PlanService()
