"""Report-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerateReportRequestSchema(BaseModel):
    """Schema for POST /v1/reports request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "user_123",
                }
            ]
        }
    )
    user_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique identifier for the user",
        examples=["user_123"],
    )

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Ensure user_id is not just whitespace."""
        if not v.strip():
            raise ValueError("user_id cannot be empty or whitespace")
        return v.strip()


class CreditFactorsSchema(BaseModel):
    """Schema for the five credit factors in the response."""

    bill_payment_history: int = Field(..., ge=0, le=100, examples=[85])
    income_consistency: int = Field(..., ge=0, le=100, examples=[70])
    expense_management: int = Field(..., ge=0, le=100, examples=[65])
    financial_growth: int = Field(..., ge=0, le=100, examples=[50])
    transaction_diversity: int = Field(..., ge=0, le=100, examples=[60])


class ReportResponseSchema(BaseModel):
    """Schema for POST /v1/reports response body."""

    report_id: str = Field(
        ...,
        description="UUID of the report",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )
    user_id: str = Field(
        ...,
        description="User who owns this report",
    )
    score: int = Field(
        ...,
        ge=0,
        le=1000,
        description="Alternative credit score (0-1000)",
        examples=[695],
    )
    grade: str = Field(
        ...,
        description="Four-tier report grade (A, B, C, D)",
        examples=["B"],
    )
    risk_grade: str = Field(
        ...,
        description="Five-tier grade (A, B+, B, C, D)",
        examples=["B"],
    )
    score_type: str = Field(
        ...,
        examples=["Alternative Credit Score"],
    )
    breakdown: str = Field(
        ...,
        description="Per-factor arithmetic followed by the narrative",
    )
    recommendations: str = Field(
        ...,
        description="Prioritized recommendations followed by the narrative",
    )
    transaction_count: int = Field(
        ...,
        ge=0,
        description="Number of transactions the score was computed from",
    )
    factors: CreditFactorsSchema
    generation_date: str = Field(
        ...,
        description="ISO 8601 timestamp of the report",
    )
    url: str = Field(
        ...,
        description="Download path of the PDF document",
        examples=["/v1/reports/550e8400-e29b-41d4-a716-446655440000/document"],
    )


class ReportSummarySchema(BaseModel):
    """Schema for a report summary in history."""

    report_id: str
    generation_date: str
    score: int = Field(..., ge=0, le=1000)
    grade: str
    risk_grade: str
    transaction_count: int = Field(..., ge=0)
    url: str


class ReportHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/reports response."""

    user_id: str = Field(
        ...,
        description="The user's identifier",
    )
    reports: list[ReportSummarySchema] = Field(
        ...,
        description="List of past reports, newest first",
    )
