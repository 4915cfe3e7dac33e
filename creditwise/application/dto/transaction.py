"""Data transfer objects for transaction operations."""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from creditwise.domain.entities import Transaction


@dataclass(frozen=True)
class SaveTransactionsRequest:
    """Input data for saving a batch of transactions."""
    user_id: str
    transactions: Sequence[Transaction]
    source_document_id: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        for txn in self.transactions:
            if not txn.id or not txn.id.strip():
                errors.append("transaction id is required")
            if not math.isfinite(txn.amount):
                errors.append(f"transaction {txn.id} amount must be a finite number")
            elif txn.amount < 0:
                errors.append(f"transaction {txn.id} amount must not be negative")

        return errors


@dataclass(frozen=True)
class ExtractTransactionsRequest:
    """Input data for extracting transactions from a document."""
    user_id: str
    document_id: str
    document: str

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        if not self.document_id or not self.document_id.strip():
            errors.append("document_id is required")

        if not self.document or not self.document.strip():
            errors.append("document is required")

        return errors


@dataclass(frozen=True)
class TransactionListResponse:
    """Response containing a user's transactions."""

    user_id: str
    transactions: List[Transaction]


@dataclass(frozen=True)
class ScorePreviewDTO:
    """Live factors and score computed right after an extraction."""

    credit_score: int
    risk_grade: str
    grade: str
    factors: Dict[str, int]


@dataclass(frozen=True)
class ExtractionResponse:
    """Response for a document extraction."""

    user_id: str
    document_id: str
    transactions: List[Transaction]
    preview: ScorePreviewDTO
