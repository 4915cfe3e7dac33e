"""Application services (use cases)."""

from .report_service import ReportService
from .transaction_service import TransactionService

__all__ = [
    "ReportService",
    "TransactionService",
]
