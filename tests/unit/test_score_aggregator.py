"""
Unit Tests for the CreditWise Score Aggregator.

These tests verify:
1. Weighted-sum scoring and its 0-1000 bounds
2. Five-tier risk grade, four-tier report grade and lending risk
3. Literal score breakdown text
4. Recommendation targeting and priorities
5. Narrative validation and final score output assembly
"""

import pytest

from creditwise.service.scoring.aggregate import (
    STRONG_PROFILE_MESSAGE,
    ScoreBoundsError,
    aggregate,
    build_recommendations,
    build_score_output,
    calculate_credit_score,
    format_points,
    format_recommendations,
    format_score_breakdown,
    score_components,
)
from creditwise.service.scoring.grades import (
    GRADE_BANDS,
    grade_description,
    lending_risk_for,
    report_grade_for,
    risk_grade_for,
)
from creditwise.service.scoring.models import (
    SCORE_TYPE,
    CreditFactors,
    LendingRisk,
    Narrative,
    Priority,
    ReportGrade,
    RiskGrade,
    ScoreResult,
)
from creditwise.service.scoring.narrative import NarrativeError, verify_narrative


def factors(bph=85, ic=70, em=65, fg=50, td=60) -> CreditFactors:
    return CreditFactors(
        bill_payment_history=bph,
        income_consistency=ic,
        expense_management=em,
        financial_growth=fg,
        transaction_diversity=td,
    )


def narrative_payload(score: int, grade: str, **overrides) -> dict:
    payload = {
        "creditScore": score,
        "riskGrade": grade,
        "scoreBreakdown": "Your bill payments are your strongest factor.",
        "recommendations": "Keep paying rent on time and record cash sales.",
        "scoreType": SCORE_TYPE,
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Credit Score Tests
# =============================================================================

class TestCalculateCreditScore:
    """Tests for the weighted sum."""

    def test_all_hundred_is_max(self):
        result = aggregate(factors(100, 100, 100, 100, 100))

        assert result.credit_score == 1000
        assert result.risk_grade == RiskGrade.A
        assert result.grade == ReportGrade.A

    def test_all_zero_is_min(self):
        result = aggregate(factors(0, 0, 0, 0, 0))

        assert result.credit_score == 0
        assert result.risk_grade == RiskGrade.D
        assert result.grade == ReportGrade.D

    def test_neutral_profile(self):
        assert calculate_credit_score(factors(50, 50, 50, 50, 50)) == 500

    def test_weighted_sum(self):
        # 25.5 + 17.5 + 13 + 7.5 + 6 = 69.5 -> 695
        assert calculate_credit_score(factors()) == 695

    def test_half_point_rounds_up(self):
        # 1 * 15% = 0.15 points -> 1.5 -> 2
        assert calculate_credit_score(factors(0, 0, 0, 1, 0)) == 2

    def test_out_of_range_factor_rejected(self):
        with pytest.raises(ScoreBoundsError):
            calculate_credit_score(factors(bph=101))

        with pytest.raises(ScoreBoundsError):
            calculate_credit_score(factors(td=-1))

    def test_non_integer_factor_rejected(self):
        with pytest.raises(ScoreBoundsError):
            calculate_credit_score(factors(ic=70.5))

    def test_deterministic(self):
        assert aggregate(factors()) == aggregate(factors())


# =============================================================================
# Grade Tests
# =============================================================================

class TestGrades:
    """Tests for grade assignment."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (1000, RiskGrade.A),
            (800, RiskGrade.A),
            (799, RiskGrade.B_PLUS),
            (700, RiskGrade.B_PLUS),
            (699, RiskGrade.B),
            (600, RiskGrade.B),
            (599, RiskGrade.C),
            (500, RiskGrade.C),
            (499, RiskGrade.D),
            (0, RiskGrade.D),
        ],
    )
    def test_risk_grade_boundaries(self, score, expected):
        assert risk_grade_for(score) == expected

    def test_report_grade_collapses_b_plus(self):
        assert report_grade_for(RiskGrade.B_PLUS) == ReportGrade.B
        assert report_grade_for(RiskGrade.B) == ReportGrade.B
        assert report_grade_for(RiskGrade.A) == ReportGrade.A
        assert report_grade_for(RiskGrade.D) == ReportGrade.D

    def test_b_plus_score_has_both_grades(self):
        result = aggregate(factors(80, 80, 70, 60, 60))

        assert result.credit_score == 730
        assert result.risk_grade == RiskGrade.B_PLUS
        assert result.grade == ReportGrade.B

    @pytest.mark.parametrize(
        "score,expected",
        [
            (700, LendingRisk.LOW),
            (699, LendingRisk.MEDIUM),
            (500, LendingRisk.MEDIUM),
            (499, LendingRisk.HIGH),
        ],
    )
    def test_lending_risk(self, score, expected):
        assert lending_risk_for(score) == expected

    def test_grade_legend_covers_full_range(self):
        assert [band.grade for band in GRADE_BANDS] == list(RiskGrade)
        assert GRADE_BANDS[0].max_score == 1000
        assert GRADE_BANDS[-1].min_score == 0
        assert GRADE_BANDS[-1].range_text == "Below 500"
        assert GRADE_BANDS[1].range_text == "700-799"

    def test_grade_description(self):
        assert grade_description(RiskGrade.B_PLUS) == "Good - Low Risk"


# =============================================================================
# Breakdown Tests
# =============================================================================

class TestScoreBreakdown:
    """Tests for the literal breakdown text."""

    def test_per_factor_lines(self):
        text = format_score_breakdown(factors())
        lines = text.splitlines()

        assert lines[0] == "Bill Payment History: 85/100 * 30% = 25.5 points"
        assert lines[1] == "Income Consistency: 70/100 * 25% = 17.5 points"
        assert lines[2] == "Expense Management: 65/100 * 20% = 13 points"
        assert lines[3] == "Financial Growth: 50/100 * 15% = 7.5 points"
        assert lines[4] == "Transaction Diversity: 60/100 * 10% = 6 points"

    def test_total_line(self):
        lines = format_score_breakdown(factors()).splitlines()

        assert lines[-1] == "Total Weighted Score: 69.5 * 10 = 695/1000 points"

    def test_components_sum_to_score(self):
        components = score_components(factors())

        assert round(sum(c.points for c in components) * 10) == 695
        assert [c.weight for c in components] == [30, 25, 20, 15, 10]

    def test_format_points(self):
        assert format_points(25.5) == "25.5"
        assert format_points(30.0) == "30"
        assert format_points(12.45) == "12.45"
        assert format_points(0.0) == "0"


# =============================================================================
# Recommendation Tests
# =============================================================================

class TestRecommendations:
    """Tests for recommendation targeting."""

    def test_weakest_factor_first(self):
        recs = build_recommendations(factors(bph=30, ic=90, em=55, fg=65, td=80))

        assert [r.factor for r in recs] == [
            "bill_payment_history",
            "expense_management",
            "financial_growth",
        ]

    def test_priorities_follow_gap(self):
        recs = build_recommendations(factors(bph=40, ic=55, em=69, fg=90, td=90))
        by_factor = {r.factor: r.priority for r in recs}

        assert by_factor["bill_payment_history"] == Priority.HIGH
        assert by_factor["income_consistency"] == Priority.MEDIUM
        assert by_factor["expense_management"] == Priority.LOW

    def test_seventy_is_not_weak(self):
        assert build_recommendations(factors(70, 70, 70, 70, 70)) == []

    def test_strong_profile_text(self):
        assert format_recommendations([]) == STRONG_PROFILE_MESSAGE

    def test_text_mentions_weak_factor(self):
        text = format_recommendations(build_recommendations(factors(em=45)))

        assert "Expense Management is 45/100" in text
        assert "[Medium] Expense Control" in text


# =============================================================================
# Narrative Tests
# =============================================================================

class TestNarrative:
    """Tests for narrative validation."""

    def test_valid_payload(self):
        result = aggregate(factors())
        narrative = verify_narrative(narrative_payload(695, "B"), result)

        assert narrative.score_breakdown.startswith("Your bill payments")

    def test_missing_field_rejected(self):
        payload = narrative_payload(695, "B")
        del payload["recommendations"]

        with pytest.raises(NarrativeError, match="recommendations"):
            verify_narrative(payload, aggregate(factors()))

    def test_score_out_of_range_rejected(self):
        with pytest.raises(NarrativeError):
            verify_narrative(narrative_payload(1200, "A"), aggregate(factors()))

    def test_unknown_grade_rejected(self):
        with pytest.raises(NarrativeError):
            verify_narrative(narrative_payload(695, "AAA"), aggregate(factors()))

    def test_blank_prose_rejected(self):
        payload = narrative_payload(695, "B", scoreBreakdown="   ")

        with pytest.raises(NarrativeError):
            verify_narrative(payload, aggregate(factors()))

    def test_score_mismatch_rejected(self):
        with pytest.raises(NarrativeError, match="does not match"):
            verify_narrative(narrative_payload(700, "B+"), aggregate(factors()))

    def test_grade_mismatch_rejected(self):
        with pytest.raises(NarrativeError, match="grade"):
            verify_narrative(narrative_payload(695, "C"), aggregate(factors()))

    def test_wrong_score_type_rejected(self):
        payload = narrative_payload(695, "B", scoreType="FICO")

        with pytest.raises(NarrativeError):
            verify_narrative(payload, aggregate(factors()))

    def test_non_mapping_rejected(self):
        with pytest.raises(NarrativeError):
            verify_narrative(["not", "a", "narrative"], aggregate(factors()))


# =============================================================================
# Score Output Tests
# =============================================================================

class TestBuildScoreOutput:
    """Tests for build_score_output."""

    def test_output_combines_literal_and_narrative(self):
        f = factors(em=45)
        result = aggregate(f)
        narrative = Narrative(
            score_breakdown="Bills are paid reliably.",
            recommendations="Cut stock purchases in slow months.",
        )

        output = build_score_output(f, result, narrative)

        assert output.credit_score == result.credit_score
        assert output.risk_grade == result.risk_grade
        assert output.grade == result.grade
        assert output.score_type == "Alternative Credit Score"
        assert output.factors == f
        assert output.score_breakdown.startswith("Bill Payment History: 85/100 * 30%")
        assert output.score_breakdown.endswith("Bills are paid reliably.")
        assert "Expense Management is 45/100" in output.recommendations
        assert output.recommendations.endswith("Cut stock purchases in slow months.")

    def test_output_is_immutable(self):
        f = factors()
        output = build_score_output(
            f,
            ScoreResult(695, RiskGrade.B, ReportGrade.B),
            Narrative("text", "text"),
        )

        with pytest.raises(AttributeError):
            output.credit_score = 1000
