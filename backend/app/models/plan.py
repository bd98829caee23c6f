"""
Catalog Backend - Plan SQLAlchemy Model
=========================================

What:  ORM model representing the `plans` table (subscription tiers).
Who:   Read by PlanService for the public plan listing and tier lookup.

Lifecycle:
    Plans are seeded and priced by the billing tooling. Retired plans are
    flagged `is_active = false` instead of being deleted, so subscriptions
    referencing them keep resolving.
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class PlanTier(str, enum.Enum):
    FREE = "FREE"
    PLUS = "PLUS"
    PREMIUM = "PREMIUM"


class Plan(Base):
    """A subscription tier with its monthly price and credit allowance."""

    __tablename__ = "plans"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # One row per tier; the public lookup is by tier, not by id
    tier: Mapped[PlanTier] = mapped_column(
        Enum(PlanTier, name="plan_tier"),
        nullable=False,
        unique=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    price_monthly: Mapped[float] = mapped_column(Float, nullable=False)

    credits_per_month: Mapped[int] = mapped_column(Integer, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Free-form feature list rendered by the pricing page
    features: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Plan(tier={self.tier}, price_monthly={self.price_monthly})>"
