"""Transaction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from creditwise.application.dto import ExtractTransactionsRequest, SaveTransactionsRequest
from creditwise.application.services import TransactionService
from creditwise.core.dependencies import get_transaction_service
from creditwise.domain.entities import Transaction
from creditwise.presentation.schemas import (
    ErrorResponseSchema,
    ExtractionResponseSchema,
    ExtractTransactionsRequestSchema,
    SaveTransactionsRequestSchema,
    ScorePreviewSchema,
    TransactionListResponseSchema,
    TransactionSchema,
)

transaction_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        409: {"model": ErrorResponseSchema, "description": "Transaction conflict"},
    },
)


def _to_schema(txn: Transaction) -> TransactionSchema:
    return TransactionSchema.model_validate(txn)


@transaction_router.post(
    "",
    response_model=TransactionListResponseSchema,
    summary="Save Transactions",
    description="""
    Append or update a batch of transactions for a user.

    The batch is all-or-nothing. Changing a cleared transaction or one
    owned by another user fails with TRANSACTION_CONFLICT.
    """,
)
async def save_transactions(
    request: SaveTransactionsRequestSchema,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionListResponseSchema:
    dto = SaveTransactionsRequest(
        user_id=request.user_id,
        source_document_id=request.source_document_id,
        transactions=[
            Transaction(
                id=t.id,
                user_id=request.user_id,
                date=t.date,
                merchant=t.merchant,
                amount=t.amount,
                type=t.type,
                category=t.category,
                status=t.status,
                source_document_id=t.source_document_id,
            )
            for t in request.transactions
        ],
    )

    response = await transaction_service.save_transactions(dto)

    return TransactionListResponseSchema(
        user_id=response.user_id,
        transactions=[_to_schema(t) for t in response.transactions],
    )


@transaction_router.get(
    "",
    response_model=TransactionListResponseSchema,
    summary="List Transactions",
)
async def list_transactions(
    user_id: Annotated[
        str,
        Query(min_length=1, max_length=255, description="User ID to list transactions for"),
    ],
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionListResponseSchema:
    response = await transaction_service.list_transactions(user_id)

    return TransactionListResponseSchema(
        user_id=response.user_id,
        transactions=[_to_schema(t) for t in response.transactions],
    )


@transaction_router.post(
    "/extract",
    response_model=ExtractionResponseSchema,
    summary="Extract Transactions From Document",
    description="""
    Extract transactions from a document, save them with the document id,
    and return a live factor and score preview.
    """,
    responses={
        502: {"model": ErrorResponseSchema, "description": "Extraction failed validation"},
        503: {"model": ErrorResponseSchema, "description": "Text generation unavailable"},
    },
)
async def extract_transactions(
    request: ExtractTransactionsRequestSchema,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> ExtractionResponseSchema:
    response = await transaction_service.extract_transactions(
        ExtractTransactionsRequest(
            user_id=request.user_id,
            document_id=request.document_id,
            document=request.document,
        )
    )

    return ExtractionResponseSchema(
        user_id=response.user_id,
        document_id=response.document_id,
        transactions=[_to_schema(t) for t in response.transactions],
        preview=ScorePreviewSchema(
            credit_score=response.preview.credit_score,
            risk_grade=response.preview.risk_grade,
            grade=response.preview.grade,
            factors=response.preview.factors,
        ),
    )
