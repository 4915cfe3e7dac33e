"""Transaction entity representing an income or expense record."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"  # Money in (sales, wages, transfers received)
    EXPENSE = "expense"  # Money out (bills, stock, personal spending)


class TransactionStatus(str, Enum):
    """Settlement status of a transaction."""

    CLEARED = "cleared"
    PENDING = "pending"


@dataclass(frozen=True)
class Transaction:
    """
    Immutable representation of a user's transaction.

    Attributes:
        id: Unique transaction identifier
        user_id: Owner of the transaction
        date: Date of the transaction
        merchant: Counterparty name
        amount: Non-negative magnitude; direction is carried by `type`
        type: Whether this is income or an expense
        category: Free-text category
        status: Cleared transactions can no longer be changed
        source_document_id: Document the transaction was extracted from
    """

    id: str
    user_id: str
    date: date
    merchant: str
    amount: float
    type: TransactionType
    category: str = ""
    status: TransactionStatus = TransactionStatus.CLEARED
    source_document_id: Optional[str] = None

    @property
    def is_income(self) -> bool:
        """Check if this is an income transaction."""
        return self.type == TransactionType.INCOME

    @property
    def is_cleared(self) -> bool:
        """Check if this transaction has cleared."""
        return self.status == TransactionStatus.CLEARED

    def same_content(self, other: "Transaction") -> bool:
        """Check whether two records describe the same transaction."""
        return (
            self.date == other.date
            and self.merchant == other.merchant
            and self.amount == other.amount
            and self.type == other.type
            and self.category == other.category
            and self.status == other.status
            and self.source_document_id == other.source_document_id
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "merchant": self.merchant,
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category,
            "status": self.status.value,
            "source_document_id": self.source_document_id,
        }

    @classmethod
    def from_dict(cls, user_id: str, data: dict) -> "Transaction":
        """Rebuild a transaction from its serialized form."""
        return cls(
            id=data["id"],
            user_id=user_id,
            date=date.fromisoformat(data["date"]),
            merchant=data.get("merchant", ""),
            amount=float(data["amount"]),
            type=TransactionType(data["type"]),
            category=data.get("category", ""),
            status=TransactionStatus(data.get("status", TransactionStatus.CLEARED.value)),
            source_document_id=data.get("source_document_id"),
        )
