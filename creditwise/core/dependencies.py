"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from creditwise.infrastructure.database import get_db_session
from creditwise.infrastructure.repositories import (
    PostgresReportRepository,
    PostgresTransactionRepository,
)
from creditwise.infrastructure.clients import HttpTextGenerationClient
from creditwise.application.services import ReportService, TransactionService
from creditwise.domain.interfaces import TextGenerationClient


# Repository dependencies
async def get_transaction_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresTransactionRepository:
    """Get a TransactionRepository instance."""
    return PostgresTransactionRepository(session)


async def get_report_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresReportRepository:
    """Get a ReportRepository instance."""
    return PostgresReportRepository(session)


# External client dependencies
def get_text_generation_client() -> TextGenerationClient:
    """Get a TextGenerationClient instance."""
    return HttpTextGenerationClient()


# Service dependencies
async def get_report_service(
    report_repo: Annotated[PostgresReportRepository, Depends(get_report_repository)],
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    text_client: Annotated[TextGenerationClient, Depends(get_text_generation_client)],
) -> ReportService:
    """Get a ReportService instance with all dependencies."""
    return ReportService(
        report_repository=report_repo,
        transaction_repository=transaction_repo,
        text_client=text_client,
    )


async def get_transaction_service(
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    text_client: Annotated[TextGenerationClient, Depends(get_text_generation_client)],
) -> TransactionService:
    """Get a TransactionService instance."""
    return TransactionService(
        transaction_repository=transaction_repo,
        text_client=text_client,
    )
