"""
Report Formatter for the CreditWise Alternative Credit Score.

Builds the full display model of a credit report from the raw
transactions and an already computed score output:
- Financial totals, margins and monthly averages
- Monthly breakdown with a running balance
- Category and payment-method distributions
- Loan eligibility estimates
- Rule-based insights and prioritized recommendations

The formatter never raises on empty or sparse input: every division
degrades to a defined sentinel (0, "N/A", or 99 buffer months).
"""

from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .aggregate import build_recommendations, score_components
from .grades import grade_description, lending_risk_for
from .models import (
    FACTOR_LABELS,
    CreditScoreOutput,
    LendingRisk,
    Transaction,
    round_half_up,
)
from .report_model import (
    AssessmentPeriod,
    CategorySummary,
    FinancialMetrics,
    Insight,
    LoanEligibility,
    MonthlyBucket,
    PaymentMethodSummary,
    ReportModel,
    ReportSummary,
    ScoreSummary,
    TransactionAnalysis,
)
from .settings import ScoringSettings, scoring_settings


UNCATEGORIZED = "Uncategorized"
DIGITAL = "Digital/Bank"
CASH = "Cash"
NO_EXPENSE_BUFFER_MONTHS = 99.0


def _money(value: float) -> float:
    return round_half_up(value, 2)


def _chronological(transactions: Sequence[Transaction]) -> List[Transaction]:
    # sorted() is stable, so same-day transactions keep their input order
    return sorted(transactions, key=lambda t: t.date)


def calculate_assessment_period(transactions: Sequence[Transaction]) -> AssessmentPeriod:
    """
    Compute the assessment window.

    months is the whole calendar-month difference between the first and
    last transaction, floored at 1. Empty input gives N/A with 0 months.
    """
    if not transactions:
        return AssessmentPeriod(start="N/A", end="N/A", months=0)

    start: date = min(t.date for t in transactions)
    end: date = max(t.date for t in transactions)
    months = (end.year - start.year) * 12 + (end.month - start.month)

    return AssessmentPeriod(
        start=start.isoformat(),
        end=end.isoformat(),
        months=max(months, 1),
    )


def build_monthly_breakdown(transactions: Sequence[Transaction]) -> List[MonthlyBucket]:
    """
    Group transactions by YYYY-MM in chronological order.

    The balance column is a running ledger over the whole history:
    income adds, expenses subtract, and it is never reset per month.
    """
    buckets: "OrderedDict[str, Dict[str, float]]" = OrderedDict()
    balance = 0.0

    for txn in _chronological(transactions):
        bucket = buckets.setdefault(
            txn.month_key,
            {"income": 0.0, "expenses": 0.0, "count": 0, "balance": 0.0},
        )
        if txn.is_income:
            bucket["income"] += txn.amount
            balance += txn.amount
        else:
            bucket["expenses"] += txn.amount
            balance -= txn.amount
        bucket["count"] += 1
        bucket["balance"] = balance

    return [
        MonthlyBucket(
            month=month,
            income=_money(b["income"]),
            expenses=_money(b["expenses"]),
            net_profit=_money(b["income"] - b["expenses"]),
            transaction_count=int(b["count"]),
            balance=_money(b["balance"]),
        )
        for month, b in buckets.items()
    ]


def build_category_distribution(transactions: Sequence[Transaction]) -> List[CategorySummary]:
    """Per-category count and amount, largest amount first."""
    totals: "OrderedDict[str, Dict]" = OrderedDict()

    for txn in _chronological(transactions):
        name = (txn.category or "").strip() or UNCATEGORIZED
        entry = totals.setdefault(name, {"count": 0, "amount": 0.0, "type": txn.type})
        entry["count"] += 1
        entry["amount"] += txn.amount

    categories = [
        CategorySummary(
            name=name,
            count=entry["count"],
            amount=_money(entry["amount"]),
            type=entry["type"],
        )
        for name, entry in totals.items()
    ]
    return sorted(categories, key=lambda c: (-c.amount, c.name))


def build_payment_methods(transactions: Sequence[Transaction]) -> List[PaymentMethodSummary]:
    """
    Split volume into Digital/Bank (linked to a source document) and Cash.

    This is a placeholder heuristic: a document link is the only
    evidence of a digital trail we have.
    """
    total = sum(t.amount for t in transactions)
    methods = []

    for name, linked in ((DIGITAL, True), (CASH, False)):
        matching = [t for t in transactions if t.has_source_document == linked]
        amount = sum(t.amount for t in matching)
        methods.append(
            PaymentMethodSummary(
                name=name,
                count=len(matching),
                amount=_money(amount),
                percentage=round_half_up(amount / total * 100, 1) if total > 0 else 0.0,
            )
        )
    return methods


def calculate_approval_probability(credit_score: int) -> float:
    """
    Estimate the likelihood of loan approval in percent.

    - score >= 750: min(85 + (score - 750) / 25, 95)
    - score >= 500: 60 + (score - 500) / 10
    - otherwise:    max(20, score / 25)

    The result is clamped to [0, 100].
    """
    if credit_score >= 750:
        probability = min(85 + (credit_score - 750) / 25, 95)
    elif credit_score >= 500:
        probability = 60 + (credit_score - 500) / 10
    else:
        probability = max(20, credit_score / 25)

    return round_half_up(min(100.0, max(0.0, probability)), 1)


def calculate_loan_eligibility(
    credit_score: int,
    avg_monthly_income: float,
    settings: ScoringSettings = scoring_settings,
) -> LoanEligibility:
    """
    Estimate loan size and terms from the score and average income.

    Business Rationale:
        Low-risk borrowers can carry six months of income, medium-risk
        three, high-risk one. At most 45% of monthly income should go
        to repayments.
    """
    risk = lending_risk_for(credit_score, settings)
    multiplier = {
        LendingRisk.LOW: settings.loan_multiplier_low,
        LendingRisk.MEDIUM: settings.loan_multiplier_medium,
        LendingRisk.HIGH: settings.loan_multiplier_high,
    }[risk]
    interest_rate = {
        LendingRisk.LOW: settings.interest_rate_low,
        LendingRisk.MEDIUM: settings.interest_rate_medium,
        LendingRisk.HIGH: settings.interest_rate_high,
    }[risk]

    return LoanEligibility(
        risk_level=risk,
        max_amount=int(round_half_up(avg_monthly_income * multiplier)),
        interest_rate=interest_rate,
        monthly_repayment_capacity=int(
            round_half_up(avg_monthly_income * settings.repayment_capacity_ratio)
        ),
        recommended_tenure=settings.recommended_tenure,
        approval_probability=calculate_approval_probability(credit_score),
    )


def calculate_financial_metrics(
    transactions: Sequence[Transaction],
    period: AssessmentPeriod,
) -> FinancialMetrics:
    """Totals, margin, monthly averages and emergency buffer."""
    total_income = sum(t.amount for t in transactions if t.is_income)
    total_expenses = sum(t.amount for t in transactions if t.is_expense)
    net_profit = total_income - total_expenses
    months = period.denominator

    avg_income = total_income / months
    avg_expenses = total_expenses / months

    if avg_expenses <= 0:
        buffer_months = NO_EXPENSE_BUFFER_MONTHS
    else:
        buffer_months = round_half_up(net_profit / avg_expenses, 1)

    return FinancialMetrics(
        total_income=_money(total_income),
        total_expenses=_money(total_expenses),
        net_profit=_money(net_profit),
        profit_margin=round_half_up(net_profit / total_income * 100, 1) if total_income > 0 else 0.0,
        avg_monthly_income=_money(avg_income),
        avg_monthly_expenses=_money(avg_expenses),
        avg_monthly_profit=_money(net_profit / months),
        current_balance=_money(net_profit),
        emergency_buffer_months=buffer_months,
    )


def analyze_transactions(
    transactions: Sequence[Transaction],
    period: AssessmentPeriod,
) -> TransactionAnalysis:
    """Volume and documentation statistics."""
    count = len(transactions)
    verified = sum(1 for t in transactions if t.has_source_document)

    return TransactionAnalysis(
        total_transactions=count,
        income_transactions=sum(1 for t in transactions if t.is_income),
        expense_transactions=sum(1 for t in transactions if t.is_expense),
        avg_daily_transactions=round_half_up(count / (period.denominator * 30), 1),
        verified_transactions=verified,
        documentation_rate=round_half_up(verified / count * 100, 1) if count else 0.0,
    )


def generate_insights(
    score_output: CreditScoreOutput,
    metrics: FinancialMetrics,
    analysis: TransactionAnalysis,
    settings: ScoringSettings = scoring_settings,
) -> List[Insight]:
    """
    Apply the fixed insight rules.

    - score >= 750: positive, excellent profile
    - profit margin > 15%: positive, strong profitability
    - each factor below the threshold: suggestion
    - documentation rate below 70%: warning
    """
    insights = []

    if score_output.credit_score >= settings.excellent_score_threshold:
        insights.append(Insight(
            type="positive",
            title="Excellent Credit Profile",
            description=(
                f"A score of {score_output.credit_score} places you among "
                f"low-risk borrowers."
            ),
        ))

    raw_margin = (
        metrics.net_profit / metrics.total_income * 100 if metrics.total_income > 0 else 0.0
    )
    if raw_margin > settings.profitability_margin_threshold:
        insights.append(Insight(
            type="positive",
            title="Strong Profitability",
            description=(
                f"You keep {metrics.profit_margin:g}% of your income as profit."
            ),
        ))

    for name, value in score_output.factors.items():
        if value < settings.recommendation_threshold:
            label = FACTOR_LABELS[name]
            insights.append(Insight(
                type="suggestion",
                title=f"Improve {label}",
                description=(
                    f"{label} scored {value}/100, below the "
                    f"{settings.recommendation_threshold} target."
                ),
            ))

    if analysis.documentation_rate < settings.documentation_rate_threshold:
        insights.append(Insight(
            type="warning",
            title="Low Documentation Rate",
            description=(
                f"Only {analysis.documentation_rate:g}% of transactions are backed "
                f"by a document. Upload receipts and statements to strengthen "
                f"your profile."
            ),
        ))

    return insights


def default_report_id(generated_at: datetime, credit_score: int) -> str:
    """Human-friendly report reference, e.g. CRW-20250314-742."""
    return f"CRW-{generated_at:%Y%m%d}-{credit_score}"


def format_report(
    transactions: Sequence[Transaction],
    score_output: CreditScoreOutput,
    generated_at: Optional[datetime] = None,
    report_id: Optional[str] = None,
    user_id: Optional[str] = None,
    settings: ScoringSettings = scoring_settings,
) -> ReportModel:
    """
    Build the complete report model.

    Scores are taken from score_output as stored; only display values
    such as per-factor points are derived from its factor snapshot.

    Args:
        transactions: Transactions covered by the report
        score_output: The computed score output
        generated_at: Report timestamp (defaults to now, UTC)
        report_id: Report reference (defaults to CRW-YYYYMMDD-score)
        user_id: Owner of the report
        settings: Scoring settings

    Returns:
        ReportModel ready for rendering
    """
    generated_at = generated_at or datetime.utcnow()
    period = calculate_assessment_period(transactions)
    metrics = calculate_financial_metrics(transactions, period)
    analysis = analyze_transactions(transactions, period)
    approval_probability = calculate_approval_probability(score_output.credit_score)

    summary = ReportSummary(
        report_id=report_id or default_report_id(generated_at, score_output.credit_score),
        generated_at=generated_at,
        valid_until=generated_at + timedelta(days=settings.report_validity_days),
        user_id=user_id,
        period=period,
        transaction_count=len(transactions),
        currency=settings.currency,
    )

    score = ScoreSummary(
        total=score_output.credit_score,
        max_score=1000,
        risk_grade=score_output.risk_grade,
        grade=score_output.grade,
        description=grade_description(score_output.risk_grade),
        components=tuple(score_components(score_output.factors, settings)),
        approval_probability=approval_probability,
        score_breakdown=score_output.score_breakdown,
        narrative_recommendations=score_output.recommendations,
    )

    return ReportModel(
        summary=summary,
        score=score,
        financial_metrics=metrics,
        loan_eligibility=calculate_loan_eligibility(
            score_output.credit_score, metrics.avg_monthly_income, settings
        ),
        transaction_analysis=analysis,
        monthly_breakdown=tuple(build_monthly_breakdown(transactions)),
        categories=tuple(build_category_distribution(transactions)),
        payment_methods=tuple(build_payment_methods(transactions)),
        insights=tuple(generate_insights(score_output, metrics, analysis, settings)),
        recommendations=tuple(build_recommendations(score_output.factors, settings)),
    )
