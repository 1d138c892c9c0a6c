from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from ..models import CompletionRequest, CompletionResponse


class ErrorKind(str, Enum):
    CONFIG = "CONFIG"
    TIMEOUT = "TIMEOUT"
    NETWORK = "NETWORK"
    RATE_LIMIT = "RATE_LIMIT"
    UPSTREAM = "UPSTREAM"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    UNKNOWN = "UNKNOWN"


def is_retriable(kind: ErrorKind, status: int | None = None) -> bool:
    """Whether retrying the identical request may succeed."""
    if kind in (ErrorKind.TIMEOUT, ErrorKind.NETWORK, ErrorKind.RATE_LIMIT):
        return True
    if kind is ErrorKind.UPSTREAM:
        return status is not None and 500 <= status <= 599
    return False


class LLMError(RuntimeError):
    """Raised when the LLM request fails or returns an invalid payload."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status: int | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.status = status
        self.details = details

    @property
    def retriable(self) -> bool:
        return is_retriable(self.kind, self.status)

    def __repr__(self) -> str:
        return f"LLMError(kind={self.kind.value}, status={self.status}, message={str(self)!r})"


def classify_status(status: int, details: Any = None) -> LLMError:
    """Map a non-success HTTP status to a classified error."""
    if status in (401, 403):
        return LLMError(
            ErrorKind.CONFIG,
            "Groq authentication failed (check GROQ_API_KEY)",
            status=status,
            details=details,
        )
    if status == 429:
        return LLMError(ErrorKind.RATE_LIMIT, "Groq rate limit reached", status=status, details=details)
    if 500 <= status <= 599:
        return LLMError(
            ErrorKind.UPSTREAM, f"Groq upstream error ({status})", status=status, details=details
        )
    return LLMError(
        ErrorKind.UPSTREAM, f"Groq request failed ({status})", status=status, details=details
    )


class LLMClient(Protocol):
    async def complete(
        self,
        request: CompletionRequest,
        *,
        timeout_ms: int | None = None,
        max_retries: int | None = None,
    ) -> CompletionResponse: ...
