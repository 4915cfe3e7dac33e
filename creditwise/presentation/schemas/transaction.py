"""Transaction-related Pydantic schemas."""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from creditwise.domain.entities import TransactionStatus, TransactionType


class TransactionSchema(BaseModel):
    """Schema for a single transaction in requests and responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique transaction identifier",
        examples=["txn_001"],
    )
    date: datetime.date = Field(
        ...,
        description="Transaction date in ISO 8601 format (YYYY-MM-DD)",
        examples=["2025-01-15"],
    )
    merchant: str = Field(
        "",
        max_length=255,
        description="Counterparty name",
        examples=["K-Electric"],
    )
    amount: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Non-negative finite amount; direction is given by type",
        examples=[4500.0],
    )
    type: TransactionType = Field(
        ...,
        description="income or expense",
        examples=["expense"],
    )
    category: str = Field(
        "",
        max_length=255,
        description="Free-text category",
        examples=["Utilities"],
    )
    status: TransactionStatus = Field(
        TransactionStatus.CLEARED,
        description="cleared or pending; cleared transactions are immutable",
    )
    source_document_id: Optional[str] = Field(
        None,
        description="Document the transaction was extracted from",
    )


class SaveTransactionsRequestSchema(BaseModel):
    """Schema for POST /v1/transactions request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "user_123",
                    "transactions": [
                        {
                            "id": "txn_001",
                            "date": "2025-01-05",
                            "merchant": "Daily Sales",
                            "amount": 45000,
                            "type": "income",
                            "category": "Sales",
                        },
                        {
                            "id": "txn_002",
                            "date": "2025-01-10",
                            "merchant": "K-Electric",
                            "amount": 4500,
                            "type": "expense",
                            "category": "Utilities",
                        },
                    ],
                }
            ]
        }
    )

    user_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique identifier for the user",
        examples=["user_123"],
    )
    source_document_id: Optional[str] = Field(
        None,
        description="Stamped on every transaction in the batch when set",
    )
    transactions: list[TransactionSchema] = Field(
        ...,
        description="Transactions to append or update",
    )

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Ensure user_id is not just whitespace."""
        if not v.strip():
            raise ValueError("user_id cannot be empty or whitespace")
        return v.strip()


class TransactionListResponseSchema(BaseModel):
    """Schema for transaction list responses."""

    user_id: str = Field(
        ...,
        description="The user's identifier",
    )
    transactions: list[TransactionSchema] = Field(
        ...,
        description="Transactions ordered by date, oldest first",
    )


class ExtractTransactionsRequestSchema(BaseModel):
    """Schema for POST /v1/transactions/extract request body."""

    user_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique identifier for the user",
        examples=["user_123"],
    )
    document_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Identifier of the uploaded document",
        examples=["doc_2025_01_statement"],
    )
    document: str = Field(
        ...,
        min_length=1,
        description="Document content as text or base64",
    )

    @field_validator("user_id", "document_id")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Ensure identifiers are not just whitespace."""
        if not v.strip():
            raise ValueError("identifier cannot be empty or whitespace")
        return v.strip()


class ScorePreviewSchema(BaseModel):
    """Schema for the live score preview after an extraction."""

    credit_score: int = Field(
        ...,
        ge=0,
        le=1000,
        description="Alternative credit score (0-1000)",
        examples=[695],
    )
    risk_grade: str = Field(
        ...,
        description="Five-tier grade (A, B+, B, C, D)",
        examples=["B"],
    )
    grade: str = Field(
        ...,
        description="Four-tier report grade (A, B, C, D)",
        examples=["B"],
    )
    factors: dict[str, int] = Field(
        ...,
        description="The five factor scores (0-100)",
    )


class ExtractionResponseSchema(BaseModel):
    """Schema for POST /v1/transactions/extract response body."""

    user_id: str
    document_id: str
    transactions: list[TransactionSchema] = Field(
        ...,
        description="Transactions saved from the document",
    )
    preview: ScorePreviewSchema = Field(
        ...,
        description="Factors and score over the full history after the save",
    )
