"""
Catalog Backend - Tag Listing Endpoint Tests
==============================================

What:  End-to-end tests for GET /api/v1/tags.
How:   Real SQL against in-memory SQLite (seeded_db), HTTP via test_client.

What we test:
    ✅ Ordering by weight desc then name, total count independent of paging
    ✅ Type and search filters, including unknown types and LIKE wildcards
    ✅ Permissive limit/skip parsing
    ✅ label/description only present when translations are requested
    ✅ Missing bundles never fail the listing
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.exceptions import DatabaseError
from app.models.tag import Tag, TagType
from app.services.translation_service import TranslationService


def _names(response):
    return [tag["name"] for tag in response.json()["data"]]


class TestTagListing:
    """Filtering, ordering and pagination."""

    @pytest.mark.asyncio
    async def test_default_listing(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 5
        assert _names(response) == ["fire-arrow", "brave", "hero", "castle", "100%_real"]

    @pytest.mark.asyncio
    async def test_item_shape_without_translations(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"limit": "1"})

        item = response.json()["data"][0]
        assert set(item) == {
            "id", "name", "type", "weight", "original_language_code", "created_at", "updated_at",
        }
        assert item["type"] == "CHARACTER"
        assert item["weight"] == 10

    @pytest.mark.asyncio
    async def test_pagination_keeps_total_count(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"limit": "2", "skip": "1"})

        assert _names(response) == ["brave", "hero"]
        assert response.json()["count"] == 5

    @pytest.mark.asyncio
    async def test_skip_past_end(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"skip": "50"})

        assert response.json()["data"] == []
        assert response.json()["count"] == 5

    @pytest.mark.parametrize("skip", ["99999999999999999999", "1e20", "Infinity"])
    @pytest.mark.asyncio
    async def test_huge_skip_returns_empty_page(self, test_client, seeded_db, skip):
        response = await test_client.get("/api/v1/tags", params={"skip": skip})

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["count"] == 5

    @pytest.mark.asyncio
    async def test_limit_zero_returns_only_count(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"limit": "0"})

        assert response.json()["data"] == []
        assert response.json()["count"] == 5

    @pytest.mark.parametrize("limit", ["abc", "", "NaN", "-1e999"])
    @pytest.mark.asyncio
    async def test_invalid_numbers_do_not_fail(self, test_client, seeded_db, limit):
        response = await test_client.get("/api/v1/tags", params={"limit": limit, "skip": "x"})

        assert response.status_code == 200
        assert response.json()["count"] == 5

    @pytest.mark.asyncio
    async def test_type_filter_is_case_insensitive(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"type": "character"})

        assert _names(response) == ["fire-arrow", "brave", "hero"]
        assert response.json()["count"] == 3

    @pytest.mark.asyncio
    async def test_unknown_type_matches_nothing(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"type": "dragon"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": [], "count": 0}

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_substring(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"search": "  ARR "})

        assert _names(response) == ["fire-arrow"]
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_search_wildcards_match_literally(self, test_client, seeded_db):
        percent = await test_client.get("/api/v1/tags", params={"search": "%"})
        underscore = await test_client.get("/api/v1/tags", params={"search": "_"})

        assert _names(percent) == ["100%_real"]
        assert _names(underscore) == ["100%_real"]

    @pytest.mark.asyncio
    async def test_search_and_type_combine(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"search": "a", "type": "STORY"})

        assert _names(response) == ["castle"]
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_database_error_is_500_envelope(self, test_client):
        with patch(
            "app.routes.tags.tag_service.list_tags",
            AsyncMock(side_effect=DatabaseError(message="Failed to list tags")),
        ):
            response = await test_client.get("/api/v1/tags", headers={"X-Request-ID": "req-42"})

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "INTERNAL_ERROR",
            "message": "Failed to list tags",
            "request_id": "req-42",
        }
        assert response.headers["X-Request-ID"] == "req-42"


class TestTagTranslations:
    """includeTranslations / lang behaviour."""

    @pytest.fixture(autouse=True)
    def _bundles(self, translations_root):
        service = TranslationService(translations_root=str(translations_root))
        with patch("app.services.tag_service.translation_service", service):
            yield

    @pytest.mark.asyncio
    async def test_french_label(self, test_client, seeded_db):
        seeded_db.add(Tag(name="fire-magic", type=TagType.CHARACTER, weight=5))
        await seeded_db.commit()

        response = await test_client.get(
            "/api/v1/tags",
            params={"search": "fire", "limit": "1", "includeTranslations": "true", "lang": "fr"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert len(body["data"]) == 1
        assert body["data"][0]["name"] == "fire-arrow"
        assert body["data"][0]["label"] == "Flèche de feu"
        assert body["data"][0]["description"] == "Une flèche enflammée"

    @pytest.mark.asyncio
    async def test_every_item_has_label_and_description(self, test_client, seeded_db):
        response = await test_client.get(
            "/api/v1/tags", params={"includeTranslations": "TRUE", "lang": "pt-BR"}
        )

        data = {tag["name"]: tag for tag in response.json()["data"]}
        assert all("label" in tag and "description" in tag for tag in data.values())
        assert data["brave"]["label"] == "brave"
        assert data["brave"]["description"] == "Corajoso e destemido"
        assert data["hero"]["label"] == "hero"
        assert data["hero"]["description"] is None
        assert data["castle"]["label"] == "castle"

    @pytest.mark.asyncio
    async def test_flag_must_be_true(self, test_client, seeded_db):
        response = await test_client.get(
            "/api/v1/tags", params={"includeTranslations": "1", "lang": "fr"}
        )

        assert "label" not in response.json()["data"][0]

    @pytest.mark.asyncio
    async def test_lang_without_flag_is_ignored(self, test_client, seeded_db):
        response = await test_client.get("/api/v1/tags", params={"lang": "fr"})

        assert "label" not in response.json()["data"][0]

    @pytest.mark.asyncio
    async def test_missing_bundle_still_lists(self, test_client, seeded_db):
        response = await test_client.get(
            "/api/v1/tags", params={"includeTranslations": "true", "lang": "de"}
        )

        assert response.status_code == 200
        first = response.json()["data"][0]
        assert first["label"] == "fire-arrow"
        assert first["description"] is None
