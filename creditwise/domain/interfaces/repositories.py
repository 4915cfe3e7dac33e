"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from creditwise.domain.entities import CreditReport, Transaction


class TransactionRepository(ABC):
    """
    Abstract repository for Transaction persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> List[Transaction]:
        """
        Retrieve all transactions for a user.

        Args:
            user_id: The user's identifier

        Returns:
            List of transactions, ordered by date ascending
        """
        ...

    @abstractmethod
    async def save_many(
        self,
        user_id: str,
        transactions: Sequence[Transaction],
    ) -> List[Transaction]:
        """
        Append or update a batch of transactions for a user.

        The batch is all-or-nothing: every record is checked before any
        is written, so a single conflict leaves the store untouched.

        Args:
            user_id: Owner of the batch
            transactions: Transactions to write

        Returns:
            The saved transactions

        Raises:
            TransactionConflictException: If an id belongs to another user
                or a cleared transaction would change
        """
        ...


class ReportRepository(ABC):
    """
    Abstract repository for CreditReport persistence.

    Reports are append-only; there is no update operation.
    """

    @abstractmethod
    async def save(self, report: CreditReport) -> CreditReport:
        """
        Persist a new report.

        Args:
            report: The report to save

        Returns:
            The saved report
        """
        ...

    @abstractmethod
    async def get_by_id(self, report_id: UUID) -> Optional[CreditReport]:
        """
        Retrieve a report by ID.

        Args:
            report_id: The report's unique identifier

        Returns:
            The report if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[CreditReport]:
        """
        Retrieve reports for a user.

        Args:
            user_id: The user's identifier
            limit: Maximum number of reports to return
            offset: Number of reports to skip

        Returns:
            List of reports, ordered by generation_date descending
        """
        ...
