"""Conversion between stored transactions and the scoring engine's input."""

from typing import List, Sequence

from creditwise.domain.entities import Transaction
from creditwise.service.scoring.models import Transaction as ScoringTransaction
from creditwise.service.scoring.models import TransactionType as ScoringTxnType


def to_scoring_transactions(transactions: Sequence[Transaction]) -> List[ScoringTransaction]:
    """Convert stored transactions to scoring module format."""
    return [
        ScoringTransaction(
            date=t.date,
            amount=t.amount,
            type=ScoringTxnType(t.type.value),
            category=t.category,
            merchant=t.merchant,
            source_document_id=t.source_document_id,
        )
        for t in transactions
    ]
