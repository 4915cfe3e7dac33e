"""
Report model produced by the report formatter and consumed by the renderer.

Every number the PDF shows lives here; the renderer only formats it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .models import (
    LendingRisk,
    Recommendation,
    ReportGrade,
    RiskGrade,
    ScoreComponent,
    TransactionType,
)


@dataclass(frozen=True)
class AssessmentPeriod:
    """First and last transaction date plus whole calendar months between them."""
    start: str
    end: str
    months: int

    @property
    def denominator(self) -> int:
        """Months to divide by for monthly averages, never 0."""
        return max(self.months, 1)


@dataclass(frozen=True)
class MonthlyBucket:
    month: str
    income: float
    expenses: float
    net_profit: float
    transaction_count: int
    balance: float


@dataclass(frozen=True)
class CategorySummary:
    name: str
    count: int
    amount: float
    type: TransactionType


@dataclass(frozen=True)
class PaymentMethodSummary:
    name: str
    count: int
    amount: float
    percentage: float


@dataclass(frozen=True)
class LoanEligibility:
    risk_level: LendingRisk
    max_amount: int
    interest_rate: str
    monthly_repayment_capacity: int
    recommended_tenure: str
    approval_probability: float


@dataclass(frozen=True)
class FinancialMetrics:
    total_income: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    avg_monthly_income: float
    avg_monthly_expenses: float
    avg_monthly_profit: float
    current_balance: float
    emergency_buffer_months: float


@dataclass(frozen=True)
class TransactionAnalysis:
    total_transactions: int
    income_transactions: int
    expense_transactions: int
    avg_daily_transactions: float
    verified_transactions: int
    documentation_rate: float


@dataclass(frozen=True)
class ScoreSummary:
    total: int
    max_score: int
    risk_grade: RiskGrade
    grade: ReportGrade
    description: str
    components: Tuple[ScoreComponent, ...]
    approval_probability: float
    score_breakdown: str
    narrative_recommendations: str


@dataclass(frozen=True)
class Insight:
    type: str  # positive, warning, suggestion
    title: str
    description: str


@dataclass(frozen=True)
class ReportSummary:
    report_id: str
    generated_at: datetime
    valid_until: datetime
    user_id: Optional[str]
    period: AssessmentPeriod
    transaction_count: int
    currency: str


@dataclass(frozen=True)
class ReportModel:
    """Complete display model for one credit report."""
    summary: ReportSummary
    score: ScoreSummary
    financial_metrics: FinancialMetrics
    loan_eligibility: LoanEligibility
    transaction_analysis: TransactionAnalysis
    monthly_breakdown: Tuple[MonthlyBucket, ...]
    categories: Tuple[CategorySummary, ...]
    payment_methods: Tuple[PaymentMethodSummary, ...]
    insights: Tuple[Insight, ...]
    recommendations: Tuple[Recommendation, ...]
