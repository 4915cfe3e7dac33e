"""PostgreSQL implementation of ReportRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from creditwise.domain.entities import CreditReport, ReportFactors, Transaction
from creditwise.domain.interfaces import ReportRepository
from creditwise.infrastructure.database.models import CreditReportModel


class PostgresReportRepository(ReportRepository):
    """
    PostgreSQL implementation of the CreditReport repository.

    Reports are inserted once and never updated.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, report: CreditReport) -> CreditReport:
        """Persist a report to the database."""
        model = CreditReportModel(
            id=str(report.id),
            user_id=report.user_id,
            generation_date=report.generation_date,
            score=report.score,
            grade=report.grade,
            risk_grade=report.risk_grade,
            score_type=report.score_type,
            factors=report.factors.to_dict(),
            transaction_count=report.transaction_count,
            period_start=report.period_start,
            period_end=report.period_end,
            score_breakdown=report.score_breakdown,
            recommendations=report.recommendations,
            transactions=[t.to_dict() for t in report.transactions],
        )

        self._session.add(model)
        await self._session.flush()

        return report

    async def get_by_id(self, report_id: UUID) -> Optional[CreditReport]:
        """Retrieve a report by ID."""
        stmt = select(CreditReportModel).where(CreditReportModel.id == str(report_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_user_id(
        self,
        user_id: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[CreditReport]:
        """Retrieve reports for a user, ordered by generation_date descending."""
        stmt = (
            select(CreditReportModel)
            .where(CreditReportModel.user_id == user_id)
            .order_by(CreditReportModel.generation_date.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: CreditReportModel) -> CreditReport:
        """Convert database model to domain entity."""
        generation_date = model.generation_date
        if generation_date.tzinfo is not None:
            generation_date = generation_date.replace(tzinfo=None)

        return CreditReport(
            id=UUID(model.id),
            user_id=model.user_id,
            generation_date=generation_date,
            score=model.score,
            grade=model.grade,
            risk_grade=model.risk_grade,
            score_type=model.score_type,
            factors=ReportFactors.from_dict(model.factors),
            transaction_count=model.transaction_count,
            period_start=model.period_start,
            period_end=model.period_end,
            score_breakdown=model.score_breakdown,
            recommendations=model.recommendations,
            transactions=tuple(
                Transaction.from_dict(model.user_id, item) for item in model.transactions
            ),
        )
