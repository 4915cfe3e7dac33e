"""External API client implementations."""

from .text_generation_client import HttpTextGenerationClient

__all__ = [
    "HttpTextGenerationClient",
]
