"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from creditwise.domain.entities import Transaction
from creditwise.service.scoring.models import CreditFactors, ScoreResult


class TextGenerationClient(ABC):
    """
    Abstract client for the text generation service.

    The service is a black box: it writes the narrative that accompanies
    a computed score and reads transactions out of uploaded documents.
    Its responses are validated by the caller.
    """

    @abstractmethod
    async def generate_narrative(
        self,
        factors: CreditFactors,
        result: ScoreResult,
        transactions: Sequence[Transaction],
    ) -> dict:
        """
        Request narrative prose for a computed score.

        Args:
            factors: The factor snapshot the score was computed from
            result: The computed score and grades
            transactions: Transactions the score was computed from

        Returns:
            The raw decoded JSON payload, validated by the caller

        Raises:
            TextGenerationException: If the service returns an error
            TextGenerationTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def extract_transactions(
        self,
        user_id: str,
        document_id: str,
        document: str,
    ) -> List[Transaction]:
        """
        Extract transactions from a document.

        Amounts are returned as non-negative magnitudes, with signed
        amounts from the service normalized into `type`.

        Args:
            user_id: Owner of the document
            document_id: Identifier stamped on every extracted transaction
            document: Document content (text or base64)

        Returns:
            List of extracted transactions

        Raises:
            TextGenerationException: If the service returns an error
            TextGenerationTimeoutException: If the request times out
            ExtractionValidationException: If the response is malformed
        """
        ...
