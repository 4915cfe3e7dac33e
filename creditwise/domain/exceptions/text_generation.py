"""Text generation service domain exceptions."""

from .base import DomainException


class TextGenerationException(DomainException):
    """Raised when the text generation service returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="TEXT_GENERATION_ERROR",
        )
        self.status_code = status_code


class TextGenerationTimeoutException(TextGenerationException):
    """Raised when the text generation service times out."""

    def __init__(self):
        super().__init__(
            message="Text generation request timed out",
            status_code=None,
        )
        self.code = "TEXT_GENERATION_TIMEOUT"
