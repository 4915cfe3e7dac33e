"""Data transfer objects for credit report operations."""

from dataclasses import dataclass
from typing import Dict, List

from creditwise.domain.entities import CreditReport


@dataclass(frozen=True)
class GenerateReportRequest:
    """Input data for generating a credit report."""
    user_id: str

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        return errors


@dataclass(frozen=True)
class ReportResponse:
    """Response data for a generated credit report."""

    report_id: str
    user_id: str
    score: int
    grade: str
    risk_grade: str
    score_type: str
    breakdown: str
    recommendations: str
    transaction_count: int
    factors: Dict[str, int]
    generation_date: str
    url: str

    @classmethod
    def from_entity(cls, report: CreditReport) -> "ReportResponse":
        return cls(
            report_id=str(report.id),
            user_id=report.user_id,
            score=report.score,
            grade=report.grade,
            risk_grade=report.risk_grade,
            score_type=report.score_type,
            breakdown=report.score_breakdown,
            recommendations=report.recommendations,
            transaction_count=report.transaction_count,
            factors=report.factors.to_dict(),
            generation_date=report.generation_date.isoformat() + "Z",
            url=report.url,
        )


@dataclass(frozen=True)
class ReportSummary:
    """Brief summary of a report for history listings."""

    report_id: str
    generation_date: str
    score: int
    grade: str
    risk_grade: str
    transaction_count: int
    url: str


@dataclass(frozen=True)
class ReportHistoryResponse:
    """Response containing a user's report history."""

    user_id: str
    reports: List[ReportSummary]

    @classmethod
    def from_entities(cls, user_id: str, reports: list) -> "ReportHistoryResponse":
        summaries = [
            ReportSummary(
                report_id=str(r.id),
                generation_date=r.generation_date.isoformat() + "Z",
                score=r.score,
                grade=r.grade,
                risk_grade=r.risk_grade,
                transaction_count=r.transaction_count,
                url=r.url,
            )
            for r in reports
        ]
        return cls(user_id=user_id, reports=summaries)


@dataclass(frozen=True)
class ReportDocument:
    """A rendered report document ready for download."""

    filename: str
    content: bytes
    media_type: str = "application/pdf"
