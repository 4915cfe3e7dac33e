"""
Scoring Settings for the CreditWise Alternative Credit Score engine.

This module contains the configurable parameters of the scoring system.
They can be adjusted via environment variables for experiments with
different factor weights, bill keywords, or lending assumptions.

Environment variables use the SCORING_ prefix:
    SCORING_WEIGHT_BILL_PAYMENT_HISTORY=30
    SCORING_BILL_TARGET_MONTHS=3
    SCORING_RECOMMENDATION_THRESHOLD=70

Usage:
    from creditwise.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    weights = scoring_settings.factor_weights

    # Or create custom settings for testing
    custom = ScoringSettings(bill_target_months=6)
"""

from functools import lru_cache
from typing import Dict, List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the alternative credit score.

    All settings can be overridden via environment variables with SCORING_ prefix.
    Factor weights are whole percentages and must add up to 100.
    Factor scores are 0-100, the final credit score is 0-1000.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Factor Weights (percent) ===
    weight_bill_payment_history: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Weight of Bill Payment History in the composite score",
    )
    weight_income_consistency: int = Field(
        default=25,
        ge=0,
        le=100,
        description="Weight of Income Consistency in the composite score",
    )
    weight_expense_management: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Weight of Expense Management in the composite score",
    )
    weight_financial_growth: int = Field(
        default=15,
        ge=0,
        le=100,
        description="Weight of Financial Growth in the composite score",
    )
    weight_transaction_diversity: int = Field(
        default=10,
        ge=0,
        le=100,
        description="Weight of Transaction Diversity in the composite score",
    )

    # === Bill Payment History ===
    bill_keywords: List[str] = Field(
        default=["utilities", "rent", "phone", "internet", "subscription"],
        description="Category keywords that identify a recurring bill payment",
    )
    bill_target_months: int = Field(
        default=3,
        gt=0,
        description="Distinct months of bill payments needed for a full score",
    )

    # === Recommendations ===
    recommendation_threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Factors scoring below this receive a recommendation",
    )
    high_priority_gap: int = Field(
        default=30,
        ge=0,
        description="Gap below the threshold at which a recommendation is High priority",
    )
    medium_priority_gap: int = Field(
        default=15,
        ge=0,
        description="Gap below the threshold at which a recommendation is Medium priority",
    )

    # === Lending Estimates ===
    low_risk_min_score: int = Field(
        default=700,
        ge=0,
        le=1000,
        description="Minimum credit score for the low lending-risk tier",
    )
    medium_risk_min_score: int = Field(
        default=500,
        ge=0,
        le=1000,
        description="Minimum credit score for the medium lending-risk tier",
    )
    loan_multiplier_low: int = Field(
        default=6,
        ge=0,
        description="Months of average income offered to low-risk borrowers",
    )
    loan_multiplier_medium: int = Field(
        default=3,
        ge=0,
        description="Months of average income offered to medium-risk borrowers",
    )
    loan_multiplier_high: int = Field(
        default=1,
        ge=0,
        description="Months of average income offered to high-risk borrowers",
    )
    interest_rate_low: str = Field(default="14-16%")
    interest_rate_medium: str = Field(default="18-22%")
    interest_rate_high: str = Field(default="25-30%")
    repayment_capacity_ratio: float = Field(
        default=0.45,
        gt=0.0,
        le=1.0,
        description="Share of average monthly income available for loan repayment",
    )
    recommended_tenure: str = Field(default="12-18 months")

    # === Report ===
    report_validity_days: int = Field(
        default=90,
        gt=0,
        description="Number of days a generated report stays valid",
    )
    currency: str = Field(
        default="PKR",
        min_length=1,
        description="Currency label printed in front of monetary amounts",
    )
    documentation_rate_threshold: float = Field(
        default=70.0,
        ge=0.0,
        le=100.0,
        description="Documentation rate (%) below which a warning insight is raised",
    )
    profitability_margin_threshold: float = Field(
        default=15.0,
        description="Profit margin (%) above which a strong-profitability insight is raised",
    )
    excellent_score_threshold: int = Field(
        default=750,
        ge=0,
        le=1000,
        description="Credit score at or above which an excellent-profile insight is raised",
    )

    @field_validator("bill_keywords")
    @classmethod
    def normalize_bill_keywords(cls, v: List[str]) -> List[str]:
        """Lower-case keywords and drop blanks."""
        keywords = [k.strip().lower() for k in v if k and k.strip()]
        if not keywords:
            raise ValueError("At least one bill keyword is required")
        return keywords

    @model_validator(mode="after")
    def validate_weights(self) -> "ScoringSettings":
        """Factor weights must add up to exactly 100 percent."""
        total = sum(self.factor_weights.values())
        if total != 100:
            raise ValueError(f"Factor weights must sum to 100, got {total}")
        if self.medium_risk_min_score > self.low_risk_min_score:
            raise ValueError(
                "medium_risk_min_score cannot exceed low_risk_min_score"
            )
        return self

    @property
    def factor_weights(self) -> Dict[str, int]:
        """Factor weights in percent, keyed by factor name, in display order."""
        return {
            "bill_payment_history": self.weight_bill_payment_history,
            "income_consistency": self.weight_income_consistency,
            "expense_management": self.weight_expense_management,
            "financial_growth": self.weight_financial_growth,
            "transaction_diversity": self.weight_transaction_diversity,
        }


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
