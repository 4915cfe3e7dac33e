"""
Validation of narrative prose produced by the text generation collaborator.

The collaborator is a black box. Whatever it returns is checked against
a fixed schema and against the score computed locally; anything that
does not match is rejected. Synthetic prose is never substituted.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import SCORE_TYPE, Narrative, RiskGrade, ScoreResult


class NarrativeError(ValueError):
    """Raised when a narrative payload fails validation."""


class NarrativePayload(BaseModel):
    """Schema of the narrative returned for a computed score."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    credit_score: int = Field(..., alias="creditScore", ge=0, le=1000)
    risk_grade: RiskGrade = Field(..., alias="riskGrade")
    score_breakdown: str = Field(..., alias="scoreBreakdown", min_length=1)
    recommendations: str = Field(..., min_length=1)
    score_type: str = Field(default=SCORE_TYPE, alias="scoreType")

    @field_validator("score_breakdown", "recommendations")
    @classmethod
    def reject_blank_prose(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


def verify_narrative(payload: Any, result: ScoreResult) -> Narrative:
    """
    Validate a raw narrative payload against the computed score.

    Args:
        payload: Decoded JSON body from the collaborator
        result: The locally computed score and grade

    Returns:
        The validated Narrative

    Raises:
        NarrativeError: If the payload is malformed, out of range, uses an
            unknown grade, or disagrees with the computed score or grade
    """
    try:
        parsed = NarrativePayload.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "payload"
            for err in e.errors()
        )
        raise NarrativeError(f"Narrative failed schema validation: {fields}") from e

    if parsed.score_type != SCORE_TYPE:
        raise NarrativeError(f"Unexpected score type: {parsed.score_type!r}")

    if parsed.credit_score != result.credit_score:
        raise NarrativeError(
            f"Narrative score {parsed.credit_score} does not match "
            f"computed score {result.credit_score}"
        )

    if parsed.risk_grade != result.risk_grade:
        raise NarrativeError(
            f"Narrative grade {parsed.risk_grade.value} does not match "
            f"computed grade {result.risk_grade.value}"
        )

    return Narrative(
        score_breakdown=parsed.score_breakdown,
        recommendations=parsed.recommendations,
    )
