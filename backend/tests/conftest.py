"""
Catalog Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── make_tag: Factory for Tag-like objects without a database
    ├── translations_root: Temporary bundle tree with _source, pt-br, fr-fr
    ├── db_engine: In-memory SQLite engine with the schema created
    ├── db_session: Session bound to db_engine
    ├── seeded_db: db_session with a fixed set of tags and plans
    └── test_client: HTTPX AsyncClient wired to the app and db_engine
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before anything imports app.config (settings is built at import)
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["TRANSLATIONS_ROOT"] = tempfile.mkdtemp(prefix="catalog_test_")
os.environ["QUEUES_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db_session
from app.models.plan import Plan, PlanTier
from app.models.tag import Tag, TagType


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_plan(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = plan
            result = await plan_service.get_plan_by_tier(mock_db_session, "free")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_tag():
    """Factory for objects shaped like Tag rows."""

    def _make(name, type=TagType.CHARACTER, weight=1, original_language_code=None):
        now = datetime.now(timezone.utc)
        return SimpleNamespace(
            id=uuid4(),
            name=name,
            type=type,
            weight=weight,
            original_language_code=original_language_code,
            created_at=now,
            updated_at=now,
        )

    return _make


@pytest.fixture
def translations_root(tmp_path):
    """
    Temporary translation tree:
        _source/  plain canonical labels
        pt-br/    mapping entries plus one string entry
        fr-fr/    the fire-arrow example
    """
    bundles = {
        "_source": {
            "resources": {
                "fire-arrow": {"name": "Fire Arrow", "description": "An arrow on fire"},
            }
        },
        "pt-br": {
            "resources": {
                "fire-arrow": {"name": "Flecha de Fogo", "description": "Uma flecha em chamas"},
                "brave": "Corajoso e destemido",
                "hero": {"name": "", "description": ""},
            }
        },
        "fr-fr": {
            "resources": {
                "fire-arrow": {"name": "Flèche de feu", "description": "Une flèche enflammée"},
            }
        },
    }
    for bundle, document in bundles.items():
        bundle_dir = tmp_path / bundle
        bundle_dir.mkdir()
        (bundle_dir / "tags-character.json").write_text(
            json.dumps(document, ensure_ascii=False), encoding="utf-8"
        )
    return tmp_path


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine with every table created.

    StaticPool keeps a single connection so all sessions see the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_db(db_session):
    """
    Seeds tags and plans:

        name          type       weight
        fire-arrow    CHARACTER  10
        brave         CHARACTER  5
        hero          CHARACTER  5
        castle        STORY      3
        100%_real     GENERAL    1

        FREE 0.0 / PLUS 9.99 / PREMIUM 19.99 (inactive)
    """
    db_session.add_all([
        Tag(name="fire-arrow", type=TagType.CHARACTER, weight=10),
        Tag(name="brave", type=TagType.CHARACTER, weight=5),
        Tag(name="hero", type=TagType.CHARACTER, weight=5, original_language_code="en"),
        Tag(name="castle", type=TagType.STORY, weight=3),
        Tag(name="100%_real", type=TagType.GENERAL, weight=1),
        Plan(
            tier=PlanTier.PLUS,
            name="Plus",
            price_monthly=9.99,
            credits_per_month=500,
            features=["priority queue"],
        ),
        Plan(tier=PlanTier.FREE, name="Free", price_monthly=0.0, credits_per_month=50),
        Plan(
            tier=PlanTier.PREMIUM,
            name="Premium",
            price_monthly=19.99,
            credits_per_month=2000,
            is_active=False,
        ),
    ])
    await db_session.commit()
    return db_session


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to our FastAPI app.
    How:     ASGITransport routes requests directly to the app; the session
             dependency is overridden to use the in-memory test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
