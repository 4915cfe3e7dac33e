"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["NO_TRANSACTIONS"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["No transactions found for user: user_123"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )
