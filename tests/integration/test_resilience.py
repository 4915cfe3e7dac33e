"""
Integration tests for resilience and error handling.

These tests verify:
1. Text generation failures return 503 and persist nothing
2. Narratives that fail validation return 502 and persist nothing
3. Error bodies carry the request ID
"""

import pytest
from httpx import AsyncClient

from tests.integration.support import MockTextGenerationClient


async def history(ac: AsyncClient, user_id: str) -> list:
    response = await ac.get("/v1/reports", params={"user_id": user_id})
    return response.json()["reports"]


# =============================================================================
# Text Generation Failure Tests
# =============================================================================

class TestTextGenerationFailure:
    """Tests for handling text generation failures."""

    @pytest.mark.asyncio
    async def test_failure_returns_503(self, seeded_user: str, client_factory):
        """
        When the text generation service fails, the report fails.

        No fallback narrative is substituted and no report is stored.
        """
        text_client = MockTextGenerationClient("fail")

        async with await client_factory(text_client) as ac:
            response = await ac.post("/v1/reports", json={"user_id": seeded_user})
            reports = await history(ac, seeded_user)

        assert response.status_code == 503
        assert response.json()["error"] == "TEXT_GENERATION_ERROR"
        assert text_client.narrative_calls == 1
        assert reports == []

    @pytest.mark.asyncio
    async def test_timeout_returns_503(self, seeded_user: str, client_factory):
        async with await client_factory(MockTextGenerationClient("timeout")) as ac:
            response = await ac.post("/v1/reports", json={"user_id": seeded_user})
            reports = await history(ac, seeded_user)

        assert response.status_code == 503
        assert response.json()["error"] == "TEXT_GENERATION_TIMEOUT"
        assert reports == []


# =============================================================================
# Narrative Validation Tests
# =============================================================================

class TestNarrativeValidation:
    """Tests for rejecting narratives that do not match the schema or score."""

    @pytest.mark.asyncio
    async def test_invalid_payload_returns_502(self, seeded_user: str, client_factory):
        async with await client_factory(MockTextGenerationClient("invalid")) as ac:
            response = await ac.post("/v1/reports", json={"user_id": seeded_user})
            reports = await history(ac, seeded_user)

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "NARRATIVE_VALIDATION_ERROR"
        assert "schema" in data["message"]
        assert reports == []

    @pytest.mark.asyncio
    async def test_score_mismatch_returns_502(self, seeded_user: str, client_factory):
        async with await client_factory(MockTextGenerationClient("mismatch")) as ac:
            response = await ac.post("/v1/reports", json={"user_id": seeded_user})
            reports = await history(ac, seeded_user)

        assert response.status_code == 502
        assert "does not match" in response.json()["message"]
        assert reports == []

    @pytest.mark.asyncio
    async def test_recovers_after_failure(self, seeded_user: str, client_factory):
        async with await client_factory(MockTextGenerationClient("fail")) as ac:
            failed = await ac.post("/v1/reports", json={"user_id": seeded_user})

        async with await client_factory(MockTextGenerationClient()) as ac:
            succeeded = await ac.post("/v1/reports", json={"user_id": seeded_user})
            reports = await history(ac, seeded_user)

        assert failed.status_code == 503
        assert succeeded.status_code == 201
        assert [r["report_id"] for r in reports] == [succeeded.json()["report_id"]]


# =============================================================================
# Request Tracing Tests
# =============================================================================

class TestRequestId:
    """Tests for request ID propagation."""

    @pytest.mark.asyncio
    async def test_error_carries_request_id(self, client: AsyncClient):
        response = await client.post(
            "/v1/reports",
            json={"user_id": "user_new"},
            headers={"X-Request-ID": "req-123"},
        )

        assert response.status_code == 400
        assert response.headers["X-Request-ID"] == "req-123"
        assert response.json()["request_id"] == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.headers["X-Request-ID"]


class TestHealth:
    """Tests for GET /v1/health."""

    @pytest.mark.asyncio
    async def test_healthy_with_database(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "creditwise"
        assert data["database"] == "ok"
