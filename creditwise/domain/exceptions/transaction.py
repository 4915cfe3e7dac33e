"""Transaction-related domain exceptions."""

from .base import DomainException


class NoTransactionsException(DomainException):
    """Raised when a score is requested for a user with no transactions."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"No transactions found for user: {user_id}",
            code="NO_TRANSACTIONS",
        )
        self.user_id = user_id


class InvalidTransactionException(DomainException):
    """Raised when a transaction batch fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_TRANSACTION",
        )


class TransactionConflictException(DomainException):
    """Raised when a write would change a cleared or foreign transaction."""

    def __init__(self, transaction_id: str, reason: str):
        super().__init__(
            message=f"Transaction {transaction_id} cannot be written: {reason}",
            code="TRANSACTION_CONFLICT",
        )
        self.transaction_id = transaction_id
