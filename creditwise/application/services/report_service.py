"""Report service - orchestrates credit report generation and download."""

from typing import List
from uuid import UUID

import structlog

from creditwise.core.metrics import (
    record_report,
    track_pdf_render_latency,
    track_report_generation_latency,
)
from creditwise.domain.entities import CreditReport, ReportFactors, Transaction
from creditwise.domain.exceptions import (
    InvalidReportRequestException,
    NarrativeValidationException,
    NoTransactionsException,
    ReportAccessDeniedException,
    ReportNotFoundException,
    ScoreValidationException,
)
from creditwise.domain.interfaces import (
    ReportRepository,
    TextGenerationClient,
    TransactionRepository,
)
from creditwise.application.dto import (
    GenerateReportRequest,
    ReportDocument,
    ReportHistoryResponse,
    ReportResponse,
)
from creditwise.service.scoring import (
    CreditFactors,
    CreditScoreOutput,
    NarrativeError,
    ReportGrade,
    RiskGrade,
    ScoreBoundsError,
    ScoringSettings,
    aggregate,
    analyze_factors,
    build_score_output,
    format_report,
    render_report,
    scoring_settings,
    verify_narrative,
)
from .conversion import to_scoring_transactions

logger = structlog.get_logger(__name__)


class ReportService:
    """
    Application service for credit report use cases.

    A generation reads the user's transactions, scores them, has the
    narrative written and checked, and persists exactly one report. Any
    failure before the save leaves nothing behind.
    """

    def __init__(
        self,
        report_repository: ReportRepository,
        transaction_repository: TransactionRepository,
        text_client: TextGenerationClient,
        settings: ScoringSettings = scoring_settings,
    ):
        self._report_repo = report_repository
        self._transaction_repo = transaction_repository
        self._text_client = text_client
        self._settings = settings

    async def generate_report(self, request: GenerateReportRequest) -> ReportResponse:
        """
        Generate and persist a credit report for a user.

        Args:
            request: The report request with user_id

        Returns:
            ReportResponse with the score, grades, breakdown and factors

        Raises:
            InvalidReportRequestException: If request validation fails
            NoTransactionsException: If the user has no transactions
            ScoreValidationException: If the computed score is out of range
            TextGenerationException: If the narrative could not be produced
            NarrativeValidationException: If the narrative fails validation
        """
        errors = request.validate()
        if errors:
            raise InvalidReportRequestException("; ".join(errors))

        log = logger.bind(user_id=request.user_id)
        log.info("report_requested")

        with track_report_generation_latency():
            transactions = await self._transaction_repo.get_by_user_id(request.user_id)
            if not transactions:
                raise NoTransactionsException(request.user_id)

            log.info("transactions_fetched", count=len(transactions))

            factors = analyze_factors(to_scoring_transactions(transactions), self._settings)

            try:
                result = aggregate(factors, self._settings)
            except ScoreBoundsError as e:
                log.error("score_out_of_bounds", error=str(e))
                raise ScoreValidationException(str(e)) from e

            log.info(
                "score_computed",
                credit_score=result.credit_score,
                risk_grade=result.risk_grade.value,
            )

            log.info("narrative_requested")
            payload = await self._text_client.generate_narrative(factors, result, transactions)

            try:
                narrative = verify_narrative(payload, result)
            except NarrativeError as e:
                log.warning("narrative_rejected", error=str(e))
                raise NarrativeValidationException(str(e)) from e

            output = build_score_output(factors, result, narrative, self._settings)
            report = self._build_report(request.user_id, transactions, output)

            await self._report_repo.save(report)

        record_report(report.risk_grade, report.score)

        log.info(
            "report_generated",
            report_id=str(report.id),
            credit_score=report.score,
            grade=report.grade,
            risk_grade=report.risk_grade,
        )

        return ReportResponse.from_entity(report)

    async def get_report_history(
        self,
        user_id: str,
        limit: int = 10,
        offset: int = 0,
    ) -> ReportHistoryResponse:
        """
        Get report history for a user, newest first.

        Args:
            user_id: The user's identifier
            limit: Maximum number of reports to return
            offset: Number of reports to skip

        Returns:
            ReportHistoryResponse with list of reports
        """
        reports = await self._report_repo.get_by_user_id(user_id, limit=limit, offset=offset)
        return ReportHistoryResponse.from_entities(user_id, reports)

    async def render_report_document(self, report_id: UUID, user_id: str) -> ReportDocument:
        """
        Render a stored report as a PDF document.

        The document shows the stored score, grades and narrative exactly
        as persisted. Display metrics are derived from the transaction
        snapshot taken at generation, never from the live history.

        Args:
            report_id: The report's unique identifier
            user_id: The requesting user

        Returns:
            ReportDocument with the PDF bytes

        Raises:
            ReportNotFoundException: If the report does not exist
            ReportAccessDeniedException: If the report belongs to another user
        """
        report = await self._report_repo.get_by_id(report_id)
        if report is None:
            raise ReportNotFoundException(str(report_id))

        if report.user_id != user_id:
            logger.warning(
                "report_access_denied",
                report_id=str(report_id),
                user_id=user_id,
            )
            raise ReportAccessDeniedException(str(report_id))

        model = format_report(
            to_scoring_transactions(report.transactions),
            self._stored_output(report),
            generated_at=report.generation_date,
            report_id=str(report.id),
            user_id=report.user_id,
            settings=self._settings,
        )

        with track_pdf_render_latency():
            content = render_report(model, self._settings)

        logger.info(
            "report_rendered",
            report_id=str(report.id),
            user_id=user_id,
            size_bytes=len(content),
        )

        return ReportDocument(
            filename=f"credit-report-{str(report.id)[:8]}.pdf",
            content=content,
        )

    def _build_report(
        self,
        user_id: str,
        transactions: List[Transaction],
        output: CreditScoreOutput,
    ) -> CreditReport:
        """Create the report entity from a score output."""
        dates = [t.date for t in transactions]

        return CreditReport(
            user_id=user_id,
            score=output.credit_score,
            grade=output.grade.value,
            risk_grade=output.risk_grade.value,
            score_type=output.score_type,
            factors=ReportFactors(**output.factors.to_dict()),
            transaction_count=len(transactions),
            score_breakdown=output.score_breakdown,
            recommendations=output.recommendations,
            period_start=min(dates),
            period_end=max(dates),
            transactions=tuple(transactions),
        )

    def _stored_output(self, report: CreditReport) -> CreditScoreOutput:
        """Rebuild the score output from a stored report without rescoring."""
        return CreditScoreOutput(
            credit_score=report.score,
            risk_grade=RiskGrade(report.risk_grade),
            grade=ReportGrade(report.grade),
            score_breakdown=report.score_breakdown,
            recommendations=report.recommendations,
            factors=CreditFactors(**report.factors.to_dict()),
            score_type=report.score_type,
        )
