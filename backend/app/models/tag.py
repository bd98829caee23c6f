"""
Catalog Backend - Tag SQLAlchemy Model
========================================

What:  ORM model representing the `tags` table.
Who:   Read by TagService for the tag listing; written by the external
       administrative seeding process (never by this API).

Table Design:
    - name: canonical key, unique; also the lookup key in translation bundles
    - type: TagType enum; listing filters on exact equality
    - weight: ranking priority, listed descending

    Composite index (weight DESC, name ASC) matches the listing ORDER BY.
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Enum, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class TagType(str, enum.Enum):
    """Categories a tag can belong to. Stored as a native enum in PostgreSQL."""

    CHARACTER = "CHARACTER"
    STORY = "STORY"
    ASSET = "ASSET"
    GAME = "GAME"
    MEDIA = "MEDIA"
    GENERAL = "GENERAL"


class Tag(Base):
    """
    A categorized label with a canonical name and a ranking weight.

    Query Patterns:
        - Listing: WHERE type = :type AND name ILIKE :pattern
                   ORDER BY weight DESC, name ASC OFFSET :skip LIMIT :limit
        - Count:   same WHERE clause, no ordering or pagination
    """

    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Canonical tag name, also the translation bundle key",
    )

    type: Mapped[TagType] = mapped_column(
        Enum(TagType, name="tag_type"),
        nullable=False,
    )

    weight: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default=text("1"),
        comment="Sort priority, higher first",
    )

    original_language_code: Mapped[Optional[str]] = mapped_column(
        String(10),
        nullable=True,
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

    __table_args__ = (
        Index("idx_tags_weight_name", weight.desc(), name),
        Index("idx_tags_type", type),
    )

    def __repr__(self) -> str:
        return f"<Tag(name='{self.name}', type={self.type}, weight={self.weight})>"
