"""Data Transfer Objects for application layer."""

from .report import (
    GenerateReportRequest,
    ReportDocument,
    ReportHistoryResponse,
    ReportResponse,
    ReportSummary,
)
from .transaction import (
    ExtractionResponse,
    ExtractTransactionsRequest,
    SaveTransactionsRequest,
    ScorePreviewDTO,
    TransactionListResponse,
)

__all__ = [
    "GenerateReportRequest",
    "ReportDocument",
    "ReportHistoryResponse",
    "ReportResponse",
    "ReportSummary",
    "ExtractionResponse",
    "ExtractTransactionsRequest",
    "SaveTransactionsRequest",
    "ScorePreviewDTO",
    "TransactionListResponse",
]
