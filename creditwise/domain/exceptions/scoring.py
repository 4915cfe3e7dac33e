"""Scoring and validation domain exceptions."""

from .base import DomainException


class ScoringValidationException(DomainException):
    """Base class for values that failed validation inside the scoring flow."""


class ScoreValidationException(ScoringValidationException):
    """Raised when a computed score or factor falls outside its range."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="SCORE_VALIDATION_ERROR",
        )


class NarrativeValidationException(ScoringValidationException):
    """Raised when the generated narrative does not match the schema or score."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="NARRATIVE_VALIDATION_ERROR",
        )


class ExtractionValidationException(ScoringValidationException):
    """Raised when extracted transactions do not match the expected shape."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="EXTRACTION_VALIDATION_ERROR",
        )
