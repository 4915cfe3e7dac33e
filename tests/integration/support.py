"""Shared test data and mock collaborators for integration tests."""

from dataclasses import replace
from datetime import date, timedelta
from typing import List, Sequence

from creditwise.domain.entities import Transaction, TransactionType
from creditwise.domain.exceptions import (
    TextGenerationException,
    TextGenerationTimeoutException,
)
from creditwise.domain.interfaces import TextGenerationClient
from creditwise.service.scoring.models import SCORE_TYPE, CreditFactors, ScoreResult


NARRATIVE_BREAKDOWN = "Your rent and utility bills were paid every month."
NARRATIVE_RECOMMENDATIONS = "Keep receipts for cash sales to grow your verified history."


# =============================================================================
# Test Data
# =============================================================================

def sample_transactions(start: date = date(2024, 1, 1), months: int = 3) -> List[dict]:
    """
    A shopkeeper's history: monthly sales income, rent and electricity
    bills, and stock purchases, spread over `months` calendar months.
    """
    items = []
    for m in range(months):
        month_start = (start.replace(day=1) + timedelta(days=32 * m)).replace(day=1)
        items.extend([
            {
                "id": f"sale-{m}-a",
                "date": (month_start + timedelta(days=2)).isoformat(),
                "merchant": "Daily Sales",
                "amount": 40000 + m * 2000,
                "type": "income",
                "category": "Sales",
            },
            {
                "id": f"sale-{m}-b",
                "date": (month_start + timedelta(days=16)).isoformat(),
                "merchant": "Wholesale Order",
                "amount": 15000,
                "type": "income",
                "category": "Sales",
                "source_document_id": "doc-invoices",
            },
            {
                "id": f"rent-{m}",
                "date": (month_start + timedelta(days=4)).isoformat(),
                "merchant": "Landlord",
                "amount": 12000,
                "type": "expense",
                "category": "Rent",
            },
            {
                "id": f"elec-{m}",
                "date": (month_start + timedelta(days=9)).isoformat(),
                "merchant": "K-Electric",
                "amount": 3500,
                "type": "expense",
                "category": "Utilities",
            },
            {
                "id": f"stock-{m}",
                "date": (month_start + timedelta(days=11)).isoformat(),
                "merchant": "Metro Cash & Carry",
                "amount": 20000,
                "type": "expense",
                "category": "Inventory",
            },
        ])
    return items


def to_entities(user_id: str, items: Sequence[dict]) -> List[Transaction]:
    """Build domain transactions from API-shaped dicts."""
    return [
        Transaction(
            id=item["id"],
            user_id=user_id,
            date=date.fromisoformat(item["date"]),
            merchant=item.get("merchant", ""),
            amount=float(item["amount"]),
            type=TransactionType(item["type"]),
            category=item.get("category", ""),
            source_document_id=item.get("source_document_id"),
        )
        for item in items
    ]


# =============================================================================
# Mock Clients
# =============================================================================

class MockTextGenerationClient(TextGenerationClient):
    """
    Mock text generation client.

    Modes:
        ok: echo the computed score and grade with fixed prose
        fail: raise TextGenerationException
        timeout: raise TextGenerationTimeoutException
        invalid: return a payload missing required fields
        mismatch: return a score that disagrees with the computed one
    """

    def __init__(self, mode: str = "ok", extracted: Sequence[Transaction] = ()):
        self.mode = mode
        self.extracted = list(extracted)
        self.narrative_calls = 0
        self.extraction_calls = 0

    def _maybe_fail(self) -> None:
        if self.mode == "fail":
            raise TextGenerationException(
                message="Text generation unavailable",
                status_code=500,
            )
        if self.mode == "timeout":
            raise TextGenerationTimeoutException()

    async def generate_narrative(
        self,
        factors: CreditFactors,
        result: ScoreResult,
        transactions: Sequence[Transaction],
    ) -> dict:
        self.narrative_calls += 1
        self._maybe_fail()

        if self.mode == "invalid":
            return {"creditScore": result.credit_score}

        score = result.credit_score
        if self.mode == "mismatch":
            score = score - 1 if score > 0 else 1

        return {
            "scoreType": SCORE_TYPE,
            "creditScore": score,
            "riskGrade": result.risk_grade.value,
            "scoreBreakdown": NARRATIVE_BREAKDOWN,
            "recommendations": NARRATIVE_RECOMMENDATIONS,
        }

    async def extract_transactions(
        self,
        user_id: str,
        document_id: str,
        document: str,
    ) -> List[Transaction]:
        self.extraction_calls += 1
        self._maybe_fail()

        return [
            replace(t, user_id=user_id, source_document_id=document_id)
            for t in self.extracted
        ]


