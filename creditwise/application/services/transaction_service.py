"""Transaction service - handles transaction ingestion and extraction."""

from dataclasses import replace

import structlog

from creditwise.core.metrics import record_transactions_ingested
from creditwise.domain.exceptions import InvalidTransactionException
from creditwise.domain.interfaces import TextGenerationClient, TransactionRepository
from creditwise.application.dto import (
    ExtractionResponse,
    ExtractTransactionsRequest,
    SaveTransactionsRequest,
    ScorePreviewDTO,
    TransactionListResponse,
)
from creditwise.service.scoring import (
    ScoringSettings,
    aggregate,
    analyze_factors,
    scoring_settings,
)
from .conversion import to_scoring_transactions

logger = structlog.get_logger(__name__)


class TransactionService:
    """
    Application service for transaction use cases.

    Batches are written all-or-nothing; conflicts raised by the
    repository leave the user's history untouched.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        text_client: TextGenerationClient,
        settings: ScoringSettings = scoring_settings,
    ):
        self._transaction_repo = transaction_repository
        self._text_client = text_client
        self._settings = settings

    async def save_transactions(self, request: SaveTransactionsRequest) -> TransactionListResponse:
        """
        Append or update a batch of transactions.

        Raises:
            InvalidTransactionException: If request validation fails
            TransactionConflictException: If a cleared or foreign id would change
        """
        errors = request.validate()
        if errors:
            raise InvalidTransactionException("; ".join(errors))

        transactions = [
            replace(
                t,
                user_id=request.user_id,
                source_document_id=request.source_document_id or t.source_document_id,
            )
            for t in request.transactions
        ]

        saved = await self._transaction_repo.save_many(request.user_id, transactions)

        source = "document" if request.source_document_id else "manual"
        record_transactions_ingested(source, len(saved))
        logger.info(
            "transactions_saved",
            user_id=request.user_id,
            count=len(saved),
            source=source,
        )

        return TransactionListResponse(user_id=request.user_id, transactions=saved)

    async def list_transactions(self, user_id: str) -> TransactionListResponse:
        """Get all transactions for a user, oldest first."""
        transactions = await self._transaction_repo.get_by_user_id(user_id)
        return TransactionListResponse(user_id=user_id, transactions=transactions)

    async def extract_transactions(self, request: ExtractTransactionsRequest) -> ExtractionResponse:
        """
        Extract transactions from a document, save them, and preview the score.

        The preview is computed from the user's full history after the save.

        Raises:
            InvalidTransactionException: If request validation fails
            TextGenerationException: If the extraction service fails
            ExtractionValidationException: If the extraction is malformed
            TransactionConflictException: If an extracted id conflicts
        """
        errors = request.validate()
        if errors:
            raise InvalidTransactionException("; ".join(errors))

        log = logger.bind(user_id=request.user_id, document_id=request.document_id)
        log.info("extraction_requested")

        extracted = await self._text_client.extract_transactions(
            request.user_id,
            request.document_id,
            request.document,
        )
        log.info("transactions_extracted", count=len(extracted))

        saved = await self._transaction_repo.save_many(request.user_id, extracted)
        record_transactions_ingested("document", len(saved))

        history = await self._transaction_repo.get_by_user_id(request.user_id)
        factors = analyze_factors(to_scoring_transactions(history), self._settings)
        result = aggregate(factors, self._settings)

        log.info(
            "score_preview_computed",
            credit_score=result.credit_score,
            risk_grade=result.risk_grade.value,
        )

        return ExtractionResponse(
            user_id=request.user_id,
            document_id=request.document_id,
            transactions=saved,
            preview=ScorePreviewDTO(
                credit_score=result.credit_score,
                risk_grade=result.risk_grade.value,
                grade=result.grade.value,
                factors=factors.to_dict(),
            ),
        )
