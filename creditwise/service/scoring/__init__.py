"""
Alternative Credit Scoring Module for CreditWise
"""

from .models import (
    SCORE_TYPE,
    FACTOR_LABELS,
    Transaction,
    TransactionType,
    CreditFactors,
    CreditScoreOutput,
    LendingRisk,
    Narrative,
    Priority,
    Recommendation,
    ReportGrade,
    RiskGrade,
    ScoreComponent,
    ScoreResult,
)
from .settings import ScoringSettings, scoring_settings
from .factors import (
    EMPTY_HISTORY_FACTORS,
    INSUFFICIENT_DATA_DEFAULTS,
    analyze_factors,
    score_bill_payment_history,
    score_income_consistency,
    score_expense_management,
    score_financial_growth,
    score_transaction_diversity,
)
from .aggregate import (
    ScoreBoundsError,
    aggregate,
    build_recommendations,
    build_score_output,
    calculate_credit_score,
    format_recommendations,
    format_score_breakdown,
    score_components,
)
from .grades import (
    GRADE_BANDS,
    grade_description,
    lending_risk_for,
    report_grade_for,
    risk_grade_for,
)
from .narrative import NarrativeError, NarrativePayload, verify_narrative
from .report_formatter import format_report
from .report_model import ReportModel
from .report_renderer import build_sections, build_story, render_report

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Models
    "SCORE_TYPE",
    "FACTOR_LABELS",
    "Transaction",
    "TransactionType",
    "CreditFactors",
    "CreditScoreOutput",
    "LendingRisk",
    "Narrative",
    "Priority",
    "Recommendation",
    "ReportGrade",
    "RiskGrade",
    "ScoreComponent",
    "ScoreResult",
    # Feature Extraction
    "EMPTY_HISTORY_FACTORS",
    "INSUFFICIENT_DATA_DEFAULTS",
    "analyze_factors",
    "score_bill_payment_history",
    "score_income_consistency",
    "score_expense_management",
    "score_financial_growth",
    "score_transaction_diversity",
    # Aggregation
    "ScoreBoundsError",
    "aggregate",
    "build_recommendations",
    "build_score_output",
    "calculate_credit_score",
    "format_recommendations",
    "format_score_breakdown",
    "score_components",
    # Grades
    "GRADE_BANDS",
    "grade_description",
    "lending_risk_for",
    "report_grade_for",
    "risk_grade_for",
    # Narrative
    "NarrativeError",
    "NarrativePayload",
    "verify_narrative",
    # Report
    "ReportModel",
    "format_report",
    "build_sections",
    "build_story",
    "render_report",
]
