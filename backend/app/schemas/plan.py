"""
Catalog Backend - Plan Response Schemas
=========================================
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from app.models.plan import PlanTier


class PlanResponse(BaseModel):
    """A subscription plan as shown on the pricing page."""
    id: uuid.UUID
    tier: PlanTier
    name: str
    price_monthly: float = Field(description="Monthly price in account currency")
    credits_per_month: int
    description: Optional[str] = None
    features: Optional[Any] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PlanListResponse(BaseModel):
    success: bool = Field(default=True)
    data: List[PlanResponse] = Field(description="Active plans, cheapest first")


class PlanDetailResponse(BaseModel):
    success: bool = Field(default=True)
    data: PlanResponse
