"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .transaction import (
    InvalidTransactionException,
    NoTransactionsException,
    TransactionConflictException,
)
from .scoring import (
    ExtractionValidationException,
    NarrativeValidationException,
    ScoreValidationException,
    ScoringValidationException,
)
from .text_generation import (
    TextGenerationException,
    TextGenerationTimeoutException,
)
from .report import (
    InvalidReportRequestException,
    ReportAccessDeniedException,
    ReportNotFoundException,
)

__all__ = [
    "DomainException",
    "InvalidTransactionException",
    "NoTransactionsException",
    "TransactionConflictException",
    "ExtractionValidationException",
    "NarrativeValidationException",
    "ScoreValidationException",
    "ScoringValidationException",
    "TextGenerationException",
    "TextGenerationTimeoutException",
    "InvalidReportRequestException",
    "ReportAccessDeniedException",
    "ReportNotFoundException",
]
