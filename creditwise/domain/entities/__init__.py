"""Domain Entities - Core business objects."""

from .report import CreditReport, ReportFactors
from .transaction import Transaction, TransactionStatus, TransactionType

__all__ = [
    "CreditReport",
    "ReportFactors",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
]
