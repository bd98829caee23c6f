"""Create tags and plans tables

Revision ID: 001
Revises: None
Create Date: 2026-01-15 00:00:00.000000+00:00

What:  Creates the `tags` and `plans` tables with their enum types.
How:   PostgreSQL native enums (tag_type, plan_tier), UUID keys generated by
       gen_random_uuid(), TIMESTAMP WITH TIME ZONE audit columns.

Rollback: downgrade() drops both tables and the enum types.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TAG_TYPES = ("CHARACTER", "STORY", "ASSET", "GAME", "MEDIA", "GENERAL")
PLAN_TIERS = ("FREE", "PLUS", "PREMIUM")


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create tags and plans. Column docs live on the ORM models."""
    op.create_table(
        "tags",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column(
            "name",
            sa.String(100),
            nullable=False,
            comment="Canonical tag name, also the translation bundle key",
        ),
        sa.Column("type", sa.Enum(*TAG_TYPES, name="tag_type"), nullable=False),
        sa.Column(
            "weight",
            sa.Integer(),
            server_default=sa.text("1"),
            nullable=False,
            comment="Sort priority, higher first",
        ),
        sa.Column("original_language_code", sa.String(10), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    # Matches the listing ORDER BY weight DESC, name ASC
    op.create_index(
        "idx_tags_weight_name",
        "tags",
        [sa.text("weight DESC"), "name"],
    )
    op.create_index("idx_tags_type", "tags", ["type"])

    op.create_table(
        "plans",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("tier", sa.Enum(*PLAN_TIERS, name="plan_tier"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("price_monthly", sa.Float(), nullable=False),
        sa.Column("credits_per_month", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("features", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tier"),
    )


def downgrade() -> None:
    """Drop both tables and their enum types (destructive)."""
    op.drop_table("plans")
    op.drop_index("idx_tags_type", table_name="tags")
    op.drop_index("idx_tags_weight_name", table_name="tags")
    op.drop_table("tags")
    sa.Enum(name="plan_tier").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="tag_type").drop(op.get_bind(), checkfirst=True)
