"""Repository implementations."""

from .report_repository import PostgresReportRepository
from .transaction_repository import PostgresTransactionRepository

__all__ = [
    "PostgresReportRepository",
    "PostgresTransactionRepository",
]
