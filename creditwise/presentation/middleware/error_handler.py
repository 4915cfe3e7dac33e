"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from creditwise.domain.exceptions import (
    DomainException,
    InvalidReportRequestException,
    InvalidTransactionException,
    NoTransactionsException,
    ReportAccessDeniedException,
    ReportNotFoundException,
    ScoreValidationException,
    ScoringValidationException,
    TextGenerationException,
    TextGenerationTimeoutException,
    TransactionConflictException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(ReportNotFoundException)
    async def report_not_found_handler(
        request: Request,
        exc: ReportNotFoundException,
    ) -> JSONResponse:
        """Handle report not found errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(ReportAccessDeniedException)
    async def report_access_denied_handler(
        request: Request,
        exc: ReportAccessDeniedException,
    ) -> JSONResponse:
        """Handle access to another user's report."""
        return _error_response(403, exc.code, exc.message)

    @app.exception_handler(NoTransactionsException)
    async def no_transactions_handler(
        request: Request,
        exc: NoTransactionsException,
    ) -> JSONResponse:
        """Handle score requests for users without history."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(InvalidTransactionException)
    async def invalid_transaction_handler(
        request: Request,
        exc: InvalidTransactionException,
    ) -> JSONResponse:
        """Handle invalid transaction batches."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(InvalidReportRequestException)
    async def invalid_report_request_handler(
        request: Request,
        exc: InvalidReportRequestException,
    ) -> JSONResponse:
        """Handle invalid report requests."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(TransactionConflictException)
    async def transaction_conflict_handler(
        request: Request,
        exc: TransactionConflictException,
    ) -> JSONResponse:
        """Handle writes to cleared or foreign transactions."""
        logger.warning(
            "transaction_conflict",
            request_id=get_request_id(),
            transaction_id=exc.transaction_id,
        )
        return _error_response(409, exc.code, exc.message)

    @app.exception_handler(ScoreValidationException)
    async def score_validation_handler(
        request: Request,
        exc: ScoreValidationException,
    ) -> JSONResponse:
        """Handle scores that fell outside their range."""
        logger.error(
            "score_validation_failed",
            request_id=get_request_id(),
            message=exc.message,
        )
        return _error_response(500, exc.code, exc.message)

    @app.exception_handler(ScoringValidationException)
    async def upstream_validation_handler(
        request: Request,
        exc: ScoringValidationException,
    ) -> JSONResponse:
        """Handle narratives and extractions that failed validation."""
        logger.error(
            "upstream_validation_failed",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(502, exc.code, exc.message)

    @app.exception_handler(TextGenerationTimeoutException)
    async def text_generation_timeout_handler(
        request: Request,
        exc: TextGenerationTimeoutException,
    ) -> JSONResponse:
        """Handle text generation timeout errors."""
        logger.error(
            "text_generation_timeout",
            request_id=get_request_id(),
        )
        return _error_response(
            503,
            exc.code,
            "Service temporarily unavailable. Please try again.",
        )

    @app.exception_handler(TextGenerationException)
    async def text_generation_error_handler(
        request: Request,
        exc: TextGenerationException,
    ) -> JSONResponse:
        """Handle text generation errors."""
        logger.error(
            "text_generation_error",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503,
            exc.code,
            "Unable to process request. Please try again later.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
