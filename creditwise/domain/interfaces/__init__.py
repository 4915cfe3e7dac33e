"""
Domain Interfaces (Ports)
"""

from .repositories import ReportRepository, TransactionRepository
from .clients import TextGenerationClient

__all__ = [
    "ReportRepository",
    "TransactionRepository",
    "TextGenerationClient",
]
