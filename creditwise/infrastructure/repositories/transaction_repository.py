"""PostgreSQL implementation of TransactionRepository."""

from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from creditwise.domain.entities import Transaction, TransactionStatus, TransactionType
from creditwise.domain.exceptions import TransactionConflictException
from creditwise.domain.interfaces import TransactionRepository
from creditwise.infrastructure.database.models import TransactionModel


class PostgresTransactionRepository(TransactionRepository):
    """
    PostgreSQL implementation of the Transaction repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_user_id(self, user_id: str) -> List[Transaction]:
        """Retrieve all transactions for a user, oldest first."""
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.user_id == user_id)
            .order_by(TransactionModel.txn_date.asc(), TransactionModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def save_many(
        self,
        user_id: str,
        transactions: Sequence[Transaction],
    ) -> List[Transaction]:
        """
        Append or update a batch of transactions.

        Every id is checked before anything is written.
        """
        if not transactions:
            return []

        ids = [t.id for t in transactions]
        stmt = select(TransactionModel).where(TransactionModel.id.in_(ids))
        result = await self._session.execute(stmt)
        existing = {model.id: model for model in result.scalars().all()}

        for txn in transactions:
            model = existing.get(txn.id)
            if model is None:
                continue
            if model.user_id != user_id:
                raise TransactionConflictException(txn.id, "owned by another user")
            current = self._to_entity(model)
            if current.is_cleared and not current.same_content(txn):
                raise TransactionConflictException(txn.id, "cleared transactions are immutable")

        for txn in transactions:
            model = existing.get(txn.id)
            if model is None:
                model = TransactionModel(id=txn.id, user_id=user_id)
                self._session.add(model)
                existing[txn.id] = model
            model.txn_date = txn.date
            model.merchant = txn.merchant
            model.amount = txn.amount
            model.type = txn.type.value
            model.category = txn.category
            model.status = txn.status.value
            model.source_document_id = txn.source_document_id

        await self._session.flush()

        return [self._to_entity(existing[t.id]) for t in transactions]

    def _to_entity(self, model: TransactionModel) -> Transaction:
        """Convert database model to domain entity."""
        return Transaction(
            id=model.id,
            user_id=model.user_id,
            date=model.txn_date,
            merchant=model.merchant,
            amount=model.amount,
            type=TransactionType(model.type),
            category=model.category,
            status=TransactionStatus(model.status),
            source_document_id=model.source_document_id,
        )
