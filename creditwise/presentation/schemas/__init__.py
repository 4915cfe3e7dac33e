"""Pydantic schemas for API request/response validation."""

from .report import (
    CreditFactorsSchema,
    GenerateReportRequestSchema,
    ReportHistoryResponseSchema,
    ReportResponseSchema,
    ReportSummarySchema,
)
from .transaction import (
    ExtractionResponseSchema,
    ExtractTransactionsRequestSchema,
    SaveTransactionsRequestSchema,
    ScorePreviewSchema,
    TransactionListResponseSchema,
    TransactionSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "CreditFactorsSchema",
    "GenerateReportRequestSchema",
    "ReportHistoryResponseSchema",
    "ReportResponseSchema",
    "ReportSummarySchema",
    "ExtractionResponseSchema",
    "ExtractTransactionsRequestSchema",
    "SaveTransactionsRequestSchema",
    "ScorePreviewSchema",
    "TransactionListResponseSchema",
    "TransactionSchema",
    "ErrorResponseSchema",
]
