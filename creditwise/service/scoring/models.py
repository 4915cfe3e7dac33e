"""
Data models for alternative credit scoring.

These models represent the data structures used throughout the scoring pipeline,
from raw income/expense transactions to the final credit score output.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple


SCORE_TYPE = "Alternative Credit Score"

FACTOR_LABELS: Dict[str, str] = {
    "bill_payment_history": "Bill Payment History",
    "income_consistency": "Income Consistency",
    "expense_management": "Expense Management",
    "financial_growth": "Financial Growth",
    "transaction_diversity": "Transaction Diversity",
}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from the floor, the way money and scores are displayed."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class TransactionType(str, Enum):
    """Transaction direction indicator."""
    INCOME = "income"    # Money in (sales, wages, transfers received)
    EXPENSE = "expense"  # Money out (bills, stock, personal spending)


@dataclass(frozen=True)
class Transaction:
    """
    A single income or expense record from the user's history.

    Attributes:
        date: Date of the transaction
        amount: Non-negative magnitude; direction is carried by `type`
        type: Whether this is income (money in) or an expense (money out)
        category: Free-text category, e.g. "Utilities" or "Sales"
        merchant: Counterparty name
        source_document_id: Document the transaction was extracted from, if any
    """
    date: date
    amount: float
    type: TransactionType
    category: str = ""
    merchant: str = ""
    source_document_id: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def month_key(self) -> str:
        """Calendar month bucket in YYYY-MM form."""
        return self.date.strftime("%Y-%m")

    @property
    def has_source_document(self) -> bool:
        return bool(self.source_document_id)


@dataclass(frozen=True)
class CreditFactors:
    """
    The five normalized credit factors, each an integer from 0 to 100.

    Derived on demand from a transaction set; only persisted as a
    snapshot attached to a report.
    """
    bill_payment_history: int
    income_consistency: int
    expense_management: int
    financial_growth: int
    transaction_diversity: int

    def items(self) -> Iterator[Tuple[str, int]]:
        """Iterate (factor_name, score) pairs in display order."""
        for name in FACTOR_LABELS:
            yield name, getattr(self, name)

    def to_dict(self) -> Dict[str, int]:
        return dict(self.items())


class RiskGrade(str, Enum):
    """Five-tier grade shown with the live score."""
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C = "C"
    D = "D"


class ReportGrade(str, Enum):
    """Four-tier grade stored on report records (B+ collapses into B)."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class LendingRisk(str, Enum):
    """Three-tier risk level used only for lending-economics estimates."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(str, Enum):
    """Urgency of a recommendation."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class ScoreResult:
    """Numeric outcome of the score aggregation."""
    credit_score: int
    risk_grade: RiskGrade
    grade: ReportGrade


@dataclass(frozen=True)
class ScoreComponent:
    """
    One factor's contribution to the credit score.

    Attributes:
        factor: Factor name, e.g. "bill_payment_history"
        label: Display label, e.g. "Bill Payment History"
        score: Raw factor score (0-100)
        weight: Factor weight in percent
        points: Weighted points, score * weight / 100
    """
    factor: str
    label: str
    score: int
    weight: int
    points: float


@dataclass(frozen=True)
class Recommendation:
    """A targeted improvement suggestion for one weak factor."""
    factor: str
    title: str
    priority: Priority
    score: int
    actions: Tuple[str, ...]
    impact: str


@dataclass(frozen=True)
class Narrative:
    """Validated prose returned by the text generation collaborator."""
    score_breakdown: str
    recommendations: str


@dataclass(frozen=True)
class CreditScoreOutput:
    """
    The complete, immutable result of one score generation.

    Attributes:
        credit_score: Score from 0 to 1000
        risk_grade: Five-tier grade (A, B+, B, C, D)
        grade: Four-tier grade persisted on the report (A, B, C, D)
        score_breakdown: Literal per-factor arithmetic followed by narrative
        recommendations: Deterministic recommendations followed by narrative
        factors: The factor snapshot the score was computed from
        score_type: Always "Alternative Credit Score"
    """
    credit_score: int
    risk_grade: RiskGrade
    grade: ReportGrade
    score_breakdown: str
    recommendations: str
    factors: CreditFactors
    score_type: str = field(default=SCORE_TYPE)
