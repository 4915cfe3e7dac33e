"""
Integration Tests for the Report API.

These tests verify:
1. Report generation returns the engine's score, grades and factors
2. Users without transactions are rejected
3. History is newest first and honors limits
4. Document download returns a PDF only to the report's owner
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from creditwise.application.services.conversion import to_scoring_transactions
from creditwise.service.scoring import aggregate, analyze_factors

from tests.integration.support import (
    NARRATIVE_BREAKDOWN,
    NARRATIVE_RECOMMENDATIONS,
    to_entities,
)


class TestGenerateReport:
    """Tests for POST /v1/reports."""

    @pytest.mark.asyncio
    async def test_generates_report(self, client: AsyncClient, seeded_user: str):
        response = await client.post("/v1/reports", json={"user_id": seeded_user})

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == seeded_user
        assert data["score_type"] == "Alternative Credit Score"
        assert data["transaction_count"] == 15
        assert 0 <= data["score"] <= 1000
        assert data["risk_grade"] in {"A", "B+", "B", "C", "D"}
        assert data["grade"] in {"A", "B", "C", "D"}
        assert data["url"] == f"/v1/reports/{data['report_id']}/document"
        assert set(data["factors"]) == {
            "bill_payment_history",
            "income_consistency",
            "expense_management",
            "financial_growth",
            "transaction_diversity",
        }

    @pytest.mark.asyncio
    async def test_score_matches_scoring_engine(
        self,
        client: AsyncClient,
        seeded_user: str,
        shopkeeper_transactions: list,
    ):
        factors = analyze_factors(
            to_scoring_transactions(to_entities(seeded_user, shopkeeper_transactions))
        )
        expected = aggregate(factors)

        data = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()

        assert data["score"] == expected.credit_score
        assert data["risk_grade"] == expected.risk_grade.value
        assert data["grade"] == expected.grade.value
        assert data["factors"] == factors.to_dict()
        assert data["factors"]["bill_payment_history"] == 100

    @pytest.mark.asyncio
    async def test_breakdown_is_literal_then_narrative(self, client: AsyncClient, seeded_user: str):
        data = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()

        breakdown = data["breakdown"]
        assert breakdown.startswith("Bill Payment History: 100/100 * 30% = 30 points")
        assert f"= {data['score']}/1000 points" in breakdown
        assert breakdown.endswith(NARRATIVE_BREAKDOWN)
        assert data["recommendations"].endswith(NARRATIVE_RECOMMENDATIONS)

    @pytest.mark.asyncio
    async def test_no_transactions(self, client: AsyncClient, mock_text_client):
        response = await client.post("/v1/reports", json={"user_id": "user_new"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "NO_TRANSACTIONS"
        assert "user_new" in data["message"]
        assert mock_text_client.narrative_calls == 0

    @pytest.mark.asyncio
    async def test_blank_user_rejected(self, client: AsyncClient):
        response = await client.post("/v1/reports", json={"user_id": "   "})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_each_generation_creates_new_report(self, client: AsyncClient, seeded_user: str):
        first = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()
        second = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()

        assert first["report_id"] != second["report_id"]
        assert first["score"] == second["score"]


class TestReportHistory:
    """Tests for GET /v1/reports."""

    @pytest.mark.asyncio
    async def test_history_newest_first(self, client: AsyncClient, seeded_user: str):
        ids = []
        for _ in range(3):
            data = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()
            ids.append(data["report_id"])

        response = await client.get("/v1/reports", params={"user_id": seeded_user})

        assert response.status_code == 200
        reports = response.json()["reports"]
        assert [r["report_id"] for r in reports] == list(reversed(ids))

    @pytest.mark.asyncio
    async def test_history_limit(self, client: AsyncClient, seeded_user: str):
        for _ in range(3):
            await client.post("/v1/reports", json={"user_id": seeded_user})

        response = await client.get("/v1/reports", params={"user_id": seeded_user, "limit": 2})

        assert len(response.json()["reports"]) == 2

    @pytest.mark.asyncio
    async def test_history_is_per_user(self, client: AsyncClient, seeded_user: str):
        await client.post("/v1/reports", json={"user_id": seeded_user})

        response = await client.get("/v1/reports", params={"user_id": "someone_else"})

        assert response.status_code == 200
        assert response.json()["reports"] == []


class TestReportDocument:
    """Tests for GET /v1/reports/{report_id}/document."""

    @pytest.mark.asyncio
    async def test_download_pdf(self, client: AsyncClient, seeded_user: str):
        report = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()

        response = await client.get(report["url"], params={"user_id": seeded_user})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
        assert f"credit-report-{report['report_id'][:8]}.pdf" in (
            response.headers["content-disposition"]
        )

    @pytest.mark.asyncio
    async def test_download_is_reproducible(self, client: AsyncClient, seeded_user: str):
        report = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()

        first = await client.get(report["url"], params={"user_id": seeded_user})
        second = await client.get(report["url"], params={"user_id": seeded_user})

        assert first.content == second.content

    @pytest.mark.asyncio
    async def test_unknown_report(self, client: AsyncClient):
        response = await client.get(
            f"/v1/reports/{uuid4()}/document",
            params={"user_id": "user_shop"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "REPORT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_other_users_report(self, client: AsyncClient, seeded_user: str):
        report = (await client.post("/v1/reports", json={"user_id": seeded_user})).json()

        response = await client.get(report["url"], params={"user_id": "intruder"})

        assert response.status_code == 403
        assert response.json()["error"] == "REPORT_ACCESS_DENIED"

    @pytest.mark.asyncio
    async def test_invalid_report_id(self, client: AsyncClient):
        response = await client.get(
            "/v1/reports/not-a-uuid/document",
            params={"user_id": "user_shop"},
        )

        assert response.status_code == 422
