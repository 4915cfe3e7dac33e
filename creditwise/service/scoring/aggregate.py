"""
Score Aggregation for the CreditWise Alternative Credit Score.

This module combines the five credit factors into the final score:
1. Validate that every factor lies in [0, 100]
2. Weighted sum of the factors (weights in whole percent, summing to 100)
3. Scale to 0-1000 and assign the risk grade
4. Produce the literal score breakdown and the targeted recommendations

The weighted sum is computed in integer arithmetic so the same factors
always produce exactly the same score.
"""

from typing import List, Tuple

from .grades import report_grade_for, risk_grade_for
from .models import (
    FACTOR_LABELS,
    CreditFactors,
    CreditScoreOutput,
    Narrative,
    Priority,
    Recommendation,
    ScoreComponent,
    ScoreResult,
)
from .settings import ScoringSettings, scoring_settings


STRONG_PROFILE_MESSAGE = "Excellent! Your credit profile is strong across all factors."


class ScoreBoundsError(ValueError):
    """Raised when a factor or score falls outside its declared range."""


# Improvement playbook per factor: (title, actions, impact)
_PLAYBOOK = {
    "bill_payment_history": (
        "Bill Payment Improvement",
        (
            "Pay utilities, rent and phone bills every month",
            "Keep receipts or digital records of each bill payment",
            "Set reminders a few days before each due date",
        ),
        "Can add up to 30 points per month of regular bills",
    ),
    "income_consistency": (
        "Income Stabilization",
        (
            "Build a base of regular customers or contracts",
            "Record every payment you receive, including small cash sales",
            "Set aside part of good months to smooth out slow ones",
        ),
        "Steadier monthly income can add up to 25 points",
    ),
    "expense_management": (
        "Expense Control",
        (
            "Keep monthly expenses below 70% of your income",
            "Separate business and personal spending",
            "Review your largest expense categories each month",
        ),
        "Lower spending relative to income can add up to 20 points",
    ),
    "financial_growth": (
        "Income Growth",
        (
            "Track monthly income to spot growing and shrinking months",
            "Reinvest part of your profit into stock or tools",
            "Look for new customers during slow periods",
        ),
        "A growing income trend can add up to 15 points",
    ),
    "transaction_diversity": (
        "Income Diversification",
        (
            "Serve more than one customer or employer",
            "Add a second product or service line",
            "Label income transactions with clear categories",
        ),
        "More income sources can add up to 10 points",
    ),
}


def validate_factors(factors: CreditFactors) -> None:
    """
    Check that every factor is an integer in [0, 100].

    Raises:
        ScoreBoundsError: If any factor is out of range
    """
    for name, value in factors.items():
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 100:
            raise ScoreBoundsError(
                f"Factor {name} must be an integer in [0, 100], got {value!r}"
            )


def score_components(
    factors: CreditFactors,
    settings: ScoringSettings = scoring_settings,
) -> List[ScoreComponent]:
    """Per-factor contributions in display order."""
    weights = settings.factor_weights
    return [
        ScoreComponent(
            factor=name,
            label=FACTOR_LABELS[name],
            score=value,
            weight=weights[name],
            points=value * weights[name] / 100,
        )
        for name, value in factors.items()
    ]


def _weighted_hundredths(
    factors: CreditFactors,
    settings: ScoringSettings,
) -> int:
    """Weighted sum in hundredths of a point (0 to 10000)."""
    weights = settings.factor_weights
    return sum(value * weights[name] for name, value in factors.items())


def calculate_credit_score(
    factors: CreditFactors,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Calculate the 0-1000 credit score from the five factors.

    Algorithm:
        raw = BPH*0.30 + IC*0.25 + EM*0.20 + FG*0.15 + TD*0.10   (0-100)
        credit_score = round(raw * 10)                           (0-1000)

    With whole-percent weights raw * 10 equals hundredths / 10, so the
    score is rounded half-up in integers without float drift.

    Args:
        factors: The five factor scores
        settings: Scoring settings (weights)

    Returns:
        Credit score from 0 to 1000

    Raises:
        ScoreBoundsError: If a factor or the resulting score is out of range
    """
    validate_factors(factors)

    score = (_weighted_hundredths(factors, settings) + 5) // 10

    if not 0 <= score <= 1000:
        raise ScoreBoundsError(f"Credit score must be in [0, 1000], got {score}")

    return score


def aggregate(
    factors: CreditFactors,
    settings: ScoringSettings = scoring_settings,
) -> ScoreResult:
    """
    Combine the factors into a score and both grades.

    Args:
        factors: The five factor scores
        settings: Scoring settings

    Returns:
        ScoreResult with the credit score, five-tier risk grade and
        four-tier report grade
    """
    credit_score = calculate_credit_score(factors, settings)
    risk_grade = risk_grade_for(credit_score)

    return ScoreResult(
        credit_score=credit_score,
        risk_grade=risk_grade,
        grade=report_grade_for(risk_grade),
    )


def format_points(points: float) -> str:
    """Format weighted points without trailing zeros (25.5, 30, 12.45)."""
    return f"{points:.2f}".rstrip("0").rstrip(".")


def format_score_breakdown(
    factors: CreditFactors,
    settings: ScoringSettings = scoring_settings,
) -> str:
    """
    Spell out the score arithmetic, one line per factor plus a total.

    Example:
        Bill Payment History: 85/100 * 30% = 25.5 points
        ...
        Total Weighted Score: 78.5 * 10 = 785/1000 points
    """
    lines = [
        f"{c.label}: {c.score}/100 * {c.weight}% = {format_points(c.points)} points"
        for c in score_components(factors, settings)
    ]
    raw = _weighted_hundredths(factors, settings) / 100
    score = calculate_credit_score(factors, settings)
    lines.append(f"Total Weighted Score: {format_points(raw)} * 10 = {score}/1000 points")
    return "\n".join(lines)


def recommendation_priority(
    score: int,
    settings: ScoringSettings = scoring_settings,
) -> Priority:
    """Priority grows with the distance below the recommendation threshold."""
    gap = settings.recommendation_threshold - score
    if gap >= settings.high_priority_gap:
        return Priority.HIGH
    elif gap >= settings.medium_priority_gap:
        return Priority.MEDIUM
    else:
        return Priority.LOW


def build_recommendations(
    factors: CreditFactors,
    settings: ScoringSettings = scoring_settings,
) -> List[Recommendation]:
    """
    Build recommendations for every factor below the threshold.

    The weakest factor comes first; ties keep the display order.
    An empty list means the profile is strong.
    """
    order = {name: i for i, name in enumerate(FACTOR_LABELS)}
    weak: List[Tuple[str, int]] = sorted(
        ((name, value) for name, value in factors.items()
         if value < settings.recommendation_threshold),
        key=lambda item: (item[1], order[item[0]]),
    )

    recommendations = []
    for name, value in weak:
        title, actions, impact = _PLAYBOOK[name]
        recommendations.append(
            Recommendation(
                factor=name,
                title=title,
                priority=recommendation_priority(value, settings),
                score=value,
                actions=actions,
                impact=impact,
            )
        )
    return recommendations


def format_recommendations(recommendations: List[Recommendation]) -> str:
    """Render recommendations as plain text, or the strong-profile message."""
    if not recommendations:
        return STRONG_PROFILE_MESSAGE

    lines = []
    for rec in recommendations:
        lines.append(
            f"[{rec.priority.value}] {rec.title}: "
            f"{FACTOR_LABELS[rec.factor]} is {rec.score}/100"
        )
        lines.extend(f"- {action}" for action in rec.actions)
    return "\n".join(lines)


def build_score_output(
    factors: CreditFactors,
    result: ScoreResult,
    narrative: Narrative,
    settings: ScoringSettings = scoring_settings,
) -> CreditScoreOutput:
    """
    Assemble the immutable score output.

    The literal breakdown and deterministic recommendations always come
    first so the output stays auditable; the validated narrative follows.
    """
    breakdown = format_score_breakdown(factors, settings)
    recommendations = format_recommendations(build_recommendations(factors, settings))

    return CreditScoreOutput(
        credit_score=result.credit_score,
        risk_grade=result.risk_grade,
        grade=result.grade,
        score_breakdown=f"{breakdown}\n\n{narrative.score_breakdown.strip()}",
        recommendations=f"{recommendations}\n\n{narrative.recommendations.strip()}",
        factors=factors,
    )
