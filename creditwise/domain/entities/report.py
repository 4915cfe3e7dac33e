"""Credit report entity representing one generated alternative credit score."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple
from uuid import UUID, uuid4

from .transaction import Transaction


@dataclass(frozen=True)
class ReportFactors:
    """
    Snapshot of the five credit factors a report was computed from.

    Each value is an integer from 0 to 100.
    """

    bill_payment_history: int
    income_consistency: int
    expense_management: int
    financial_growth: int
    transaction_diversity: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "bill_payment_history": self.bill_payment_history,
            "income_consistency": self.income_consistency,
            "expense_management": self.expense_management,
            "financial_growth": self.financial_growth,
            "transaction_diversity": self.transaction_diversity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReportFactors":
        """Build a snapshot from its serialized form."""
        return cls(
            bill_payment_history=int(data["bill_payment_history"]),
            income_consistency=int(data["income_consistency"]),
            expense_management=int(data["expense_management"]),
            financial_growth=int(data["financial_growth"]),
            transaction_diversity=int(data["transaction_diversity"]),
        )


@dataclass
class CreditReport:
    """
    Represents a generated credit report.

    Reports are append-only: a new generation creates a new report and
    existing reports are never updated. `transactions` is the exact set
    the report was scored from, so a later change to the user's history
    never alters what the report shows.
    """

    user_id: str
    score: int
    grade: str
    risk_grade: str
    factors: ReportFactors
    transaction_count: int
    score_breakdown: str
    recommendations: str
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    transactions: Tuple[Transaction, ...] = ()
    score_type: str = "Alternative Credit Score"
    id: UUID = field(default_factory=uuid4)
    generation_date: datetime = field(default_factory=datetime.utcnow)

    @property
    def url(self) -> str:
        """Download path of the rendered report document."""
        return f"/v1/reports/{self.id}/document"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "report_id": str(self.id),
            "user_id": self.user_id,
            "generation_date": self.generation_date.isoformat() + "Z",
            "score": self.score,
            "grade": self.grade,
            "risk_grade": self.risk_grade,
            "factors": self.factors.to_dict(),
            "transaction_count": self.transaction_count,
            "period_start": self.period_start.isoformat() if self.period_start else None,
            "period_end": self.period_end.isoformat() if self.period_end else None,
            "url": self.url,
        }
