"""HTTP implementation of TextGenerationClient."""

import asyncio
import math
from datetime import date, datetime
from typing import Any, Dict, List, Sequence
from uuid import uuid4

import httpx
import structlog

from creditwise.core.config import settings
from creditwise.core.metrics import (
    track_text_generation_latency,
    record_text_generation_success,
    record_text_generation_failure,
)
from creditwise.domain.entities import Transaction, TransactionStatus, TransactionType
from creditwise.domain.exceptions import (
    ExtractionValidationException,
    TextGenerationException,
    TextGenerationTimeoutException,
)
from creditwise.domain.interfaces import TextGenerationClient
from creditwise.service.scoring.models import SCORE_TYPE, CreditFactors, ScoreResult

logger = structlog.get_logger(__name__)


class HttpTextGenerationClient(TextGenerationClient):
    """
    HTTP client for the text generation service.

    Narrative requests are made once: a failed or timed-out narrative
    fails the report. Extraction requests are idempotent and are retried
    with exponential backoff on timeouts.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url or settings.text_generation_api_url
        self._api_key = api_key if api_key is not None else settings.text_generation_api_key
        self._timeout = timeout or settings.text_generation_timeout
        self._max_retries = max_retries or settings.text_generation_max_retries
        self._transport = transport

    async def generate_narrative(
        self,
        factors: CreditFactors,
        result: ScoreResult,
        transactions: Sequence[Transaction],
    ) -> dict:
        """Request narrative prose for a computed score."""
        payload = {
            "scoreType": SCORE_TYPE,
            "creditScore": result.credit_score,
            "riskGrade": result.risk_grade.value,
            "factors": factors.to_dict(),
            "transactionCount": len(transactions),
            "transactions": [t.to_dict() for t in transactions],
        }

        return await self._post("/narrative", payload, operation="narrative")

    async def extract_transactions(
        self,
        user_id: str,
        document_id: str,
        document: str,
    ) -> List[Transaction]:
        """
        Extract transactions from a document.

        Implements retry logic with exponential backoff.
        """
        payload = {"user_id": user_id, "document_id": document_id, "document": document}
        last_exception = None

        for attempt in range(self._max_retries):
            try:
                data = await self._post("/extract", payload, operation="extraction")
                return self._parse_transactions(user_id, document_id, data)
            except TextGenerationTimeoutException as e:
                last_exception = e
                logger.warning(
                    "text_generation_timeout",
                    operation="extraction",
                    document_id=document_id,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or TextGenerationException("Failed to extract transactions")

    async def _post(
        self,
        path: str,
        payload: Dict[str, Any],
        operation: str,
    ) -> Any:
        """Send one request and map transport failures to domain exceptions."""
        url = f"{self._base_url}{path}"
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        try:
            with track_text_generation_latency(operation):
                async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                    response = await client.post(url, json=payload, headers=headers)

                    if response.status_code >= 400:
                        record_text_generation_failure(operation, "error")
                        raise TextGenerationException(
                            message=f"Text generation error: {response.text[:200]}",
                            status_code=response.status_code,
                        )

                    data = response.json()
        except httpx.TimeoutException:
            record_text_generation_failure(operation, "timeout")
            raise TextGenerationTimeoutException()
        except ValueError as e:
            record_text_generation_failure(operation, "invalid")
            raise TextGenerationException(
                message=f"Text generation returned invalid JSON: {e}",
            )
        except httpx.HTTPError as e:
            record_text_generation_failure(operation, "error")
            logger.error("text_generation_error", operation=operation, error=str(e))
            raise TextGenerationException(message=f"Unexpected error: {e}")

        record_text_generation_success(operation)
        return data

    def _parse_transactions(
        self,
        user_id: str,
        document_id: str,
        data: Any,
    ) -> List[Transaction]:
        """Parse the raw response into Transaction entities."""
        items = data.get("transactions") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ExtractionValidationException(
                "Extraction response must contain a 'transactions' list"
            )

        transactions = []
        for index, item in enumerate(items):
            try:
                transactions.append(self._parse_item(user_id, document_id, item))
            except (KeyError, TypeError, ValueError) as e:
                raise ExtractionValidationException(
                    f"Extracted transaction {index} is malformed: {e}"
                ) from e

        return transactions

    def _parse_item(self, user_id: str, document_id: str, item: Dict[str, Any]) -> Transaction:
        """Normalize one extracted record; signed amounts become magnitude + type."""
        date_str = str(item["date"])
        if "T" in date_str:
            txn_date = datetime.fromisoformat(date_str.replace("Z", "+00:00")).date()
        else:
            txn_date = date.fromisoformat(date_str)

        amount = float(item["amount"])
        if not math.isfinite(amount):
            raise ValueError(f"amount {item['amount']!r} is not a finite number")

        txn_type_str = str(item.get("type") or "").lower()
        if txn_type_str in (TransactionType.INCOME.value, TransactionType.EXPENSE.value):
            txn_type = TransactionType(txn_type_str)
        else:
            # Infer from amount sign
            txn_type = TransactionType.INCOME if amount > 0 else TransactionType.EXPENSE

        return Transaction(
            id=str(item.get("id") or uuid4()),
            user_id=user_id,
            date=txn_date,
            merchant=str(item.get("merchant") or ""),
            amount=abs(amount),
            type=txn_type,
            category=str(item.get("category") or ""),
            status=TransactionStatus(item.get("status") or TransactionStatus.CLEARED.value),
            source_document_id=document_id,
        )
