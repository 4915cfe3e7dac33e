"""
Grade assignment for the CreditWise Alternative Credit Score.

Three different discrete views are derived from the same 0-1000 score:
- RiskGrade (A, B+, B, C, D): shown with the live score and used to
  target recommendations
- ReportGrade (A, B, C, D): stored on report records, B+ collapses into B
- LendingRisk (low, medium, high): used only for loan-size estimates
"""

from dataclasses import dataclass
from typing import Tuple

from .models import LendingRisk, ReportGrade, RiskGrade
from .settings import ScoringSettings, scoring_settings


@dataclass(frozen=True)
class GradeBand:
    """One row of the grade legend."""

    grade: RiskGrade
    min_score: int
    max_score: int
    label: str
    risk: str
    details: str

    @property
    def range_text(self) -> str:
        if self.min_score == 0:
            return f"Below {self.max_score + 1}"
        return f"{self.min_score}-{self.max_score}"

    @property
    def description(self) -> str:
        return f"{self.label} - {self.risk}"


# Highest band first; the first band whose minimum is met wins.
GRADE_BANDS: Tuple[GradeBand, ...] = (
    GradeBand(
        grade=RiskGrade.A,
        min_score=800,
        max_score=1000,
        label="Excellent",
        risk="Very Low Risk",
        details="Consistent income, regular bill payments and healthy savings. "
                "Eligible for the best available terms.",
    ),
    GradeBand(
        grade=RiskGrade.B_PLUS,
        min_score=700,
        max_score=799,
        label="Good",
        risk="Low Risk",
        details="Reliable financial behaviour with minor gaps. "
                "Eligible for standard microfinance products.",
    ),
    GradeBand(
        grade=RiskGrade.B,
        min_score=600,
        max_score=699,
        label="Fair",
        risk="Moderate Risk",
        details="Stable in most areas but with visible weaknesses. "
                "Smaller amounts or shorter tenures are advised.",
    ),
    GradeBand(
        grade=RiskGrade.C,
        min_score=500,
        max_score=599,
        label="Needs Improvement",
        risk="Higher Risk",
        details="Irregular income or high spending relative to earnings. "
                "Lenders may require a guarantor.",
    ),
    GradeBand(
        grade=RiskGrade.D,
        min_score=0,
        max_score=499,
        label="Poor",
        risk="High Risk",
        details="Limited or unstable financial history. "
                "Build a record of regular payments before applying.",
    ),
)


def grade_band(credit_score: int) -> GradeBand:
    """Return the legend row a score falls into."""
    for band in GRADE_BANDS:
        if credit_score >= band.min_score:
            return band
    return GRADE_BANDS[-1]


def risk_grade_for(credit_score: int) -> RiskGrade:
    """
    Map a credit score to the five-tier risk grade.

    Thresholds:
        >= 800: A
        >= 700: B+
        >= 600: B
        >= 500: C
        else:   D
    """
    return grade_band(credit_score).grade


def report_grade_for(risk_grade: RiskGrade) -> ReportGrade:
    """Collapse the five-tier grade into the four-tier stored grade."""
    if risk_grade == RiskGrade.B_PLUS:
        return ReportGrade.B
    return ReportGrade(risk_grade.value)


def grade_description(risk_grade: RiskGrade) -> str:
    """Human-readable description such as "Good - Low Risk"."""
    for band in GRADE_BANDS:
        if band.grade == risk_grade:
            return band.description
    raise ValueError(f"Unknown risk grade: {risk_grade}")


def lending_risk_for(
    credit_score: int,
    settings: ScoringSettings = scoring_settings,
) -> LendingRisk:
    """
    Map a credit score to the three-tier lending risk.

    This is distinct from the displayed grade: it only drives loan-size
    and interest-rate estimates.
    """
    if credit_score >= settings.low_risk_min_score:
        return LendingRisk.LOW
    elif credit_score >= settings.medium_risk_min_score:
        return LendingRisk.MEDIUM
    else:
        return LendingRisk.HIGH
