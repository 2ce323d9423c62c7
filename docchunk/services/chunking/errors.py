"""Typed chunking failures. Callers tell bad input apart from resource exhaustion by type."""

from typing import Any


class ChunkingError(Exception):
    """Base class for errors raised by the chunking engine."""

    error_code: str = "CHUNKING_ERROR"

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_response(self) -> dict[str, Any]:
        return {"error_code": self.error_code, "message": self.message}


class InvalidInputError(ChunkingError, ValueError):
    """Unsupported strategy or content over the size ceiling. Not retryable as-is."""

    error_code: str = "INVALID_INPUT"


class ResourceExhaustedError(ChunkingError):
    """
    The run could not finish within its iteration bound or ran out of memory.
    Callers may retry with a smaller max_chunk_size or reject the document.
    """

    error_code: str = "RESOURCE_EXHAUSTED"
