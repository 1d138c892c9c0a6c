from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Callable, Sequence

import httpx

from .base import ErrorKind, LLMClient, LLMError, classify_status
from ..env import env_int, load_env
from ..models import CompletionRequest, CompletionResponse


GROQ_API_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_MODEL = "llama3-70b-8192"

DEFAULT_TIMEOUT_MS = 12_000
DEFAULT_MAX_RETRIES = 2
RETRY_BACKOFF_MS: tuple[int, ...] = (250, 500, 1000)

Credential = Callable[[], str | None]
Sleep = Callable[[float], Awaitable[Any]]


def env_credential(name: str = "GROQ_API_KEY") -> Credential:
    """Credential that re-reads the process environment on every call."""

    def read() -> str | None:
        return os.getenv(name)

    return read


def backoff_delay_ms(attempt: int, schedule: Sequence[int] = RETRY_BACKOFF_MS) -> int:
    """Backoff before the retry that follows `attempt` (0-based), clamped to the last entry."""
    return schedule[min(attempt, len(schedule) - 1)]


def check_max_retries(max_retries: int) -> int:
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
    return max_retries


class GroqClient(LLMClient):
    """
    Chat Completions client for Groq's OpenAI-compatible API.

    Each attempt is bounded by a deadline. Failures are classified into
    `LLMError` kinds and retriable ones are retried with a fixed backoff
    schedule.

    Env helpers (used by `from_env`):
      - GROQ_API_KEY (required, read on every call)
      - GROQ_BASE_URL (default: https://api.groq.com/openai/v1)
      - GROQ_MODEL, GROQ_TIMEOUT_MS, GROQ_MAX_RETRIES
    """

    def __init__(
        self,
        *,
        credential: Credential,
        base_url: str = GROQ_API_BASE_URL,
        default_model: str = GROQ_MODEL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_ms: Sequence[int] = RETRY_BACKOFF_MS,
        sleep: Sleep | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        if not backoff_ms:
            raise ValueError("backoff_ms must contain at least one delay")
        self.credential = credential
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.timeout_ms = timeout_ms
        self.max_retries = check_max_retries(max_retries)
        self.backoff_ms = tuple(backoff_ms)
        self._sleep = sleep or asyncio.sleep
        self._transport = transport
        self.logger = logger or logging.getLogger("crypto_dashboard.groq")

    @classmethod
    def from_env(cls, **kwargs: Any) -> "GroqClient":
        # Best-effort .env loading (no-op if missing).
        load_env()

        options: dict[str, Any] = {
            "credential": env_credential("GROQ_API_KEY"),
            "base_url": os.getenv("GROQ_BASE_URL") or GROQ_API_BASE_URL,
            "default_model": os.getenv("GROQ_MODEL") or GROQ_MODEL,
            "timeout_ms": env_int("GROQ_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            "max_retries": env_int("GROQ_MAX_RETRIES", DEFAULT_MAX_RETRIES),
        }
        options.update(kwargs)
        return cls(**options)

    def _api_key(self) -> str:
        api_key = (self.credential() or "").strip()
        if not api_key:
            raise LLMError(ErrorKind.CONFIG, "GROQ_API_KEY is not configured")
        return api_key

    async def complete(
        self,
        request: CompletionRequest,
        *,
        timeout_ms: int | None = None,
        max_retries: int | None = None,
    ) -> CompletionResponse:
        api_key = self._api_key()

        timeout_ms = self.timeout_ms if timeout_ms is None else timeout_ms
        max_retries = self.max_retries if max_retries is None else check_max_retries(max_retries)

        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        payload = request.with_model(request.model or self.default_model).to_dict()

        async with httpx.AsyncClient(transport=self._transport) as client:
            for attempt in range(max_retries + 1):
                try:
                    return await self._attempt(
                        client, url=url, headers=headers, payload=payload, timeout_ms=timeout_ms
                    )
                except LLMError as e:
                    error = e
                except Exception as e:
                    error = LLMError(
                        ErrorKind.UNKNOWN, str(e) or "Unknown Groq error", details=e
                    )

                if not error.retriable or attempt >= max_retries:
                    self.logger.error(
                        "Groq request failed: %s (kind=%s, status=%s)",
                        error,
                        error.kind.value,
                        error.status,
                    )
                    raise error

                delay_ms = backoff_delay_ms(attempt, self.backoff_ms)
                self.logger.warning(
                    "Groq attempt %d/%d failed (%s, status=%s); retrying in %dms",
                    attempt + 1,
                    max_retries + 1,
                    error.kind.value,
                    error.status,
                    delay_ms,
                )
                await self._sleep(delay_ms / 1000)

        raise LLMError(ErrorKind.UNKNOWN, "Groq request made no attempts")

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        *,
        url: str,
        headers: dict[str, str],
        payload: dict[str, Any],
        timeout_ms: int,
    ) -> CompletionResponse:
        timeout_s = timeout_ms / 1000
        try:
            resp = await asyncio.wait_for(
                client.post(url, headers=headers, json=payload, timeout=timeout_s),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise LLMError(
                ErrorKind.TIMEOUT, f"Groq request timed out after {timeout_ms}ms"
            ) from e
        except httpx.RequestError as e:
            raise LLMError(ErrorKind.NETWORK, str(e) or "Network error calling Groq") from e

        if not resp.is_success:
            raise classify_status(resp.status_code, _json_or_none(resp))

        try:
            data = resp.json()
        except ValueError as e:
            raise LLMError(
                ErrorKind.INVALID_RESPONSE,
                "Groq returned a non-JSON body",
                status=resp.status_code,
                details=resp.text,
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("choices"), list):
            raise LLMError(
                ErrorKind.INVALID_RESPONSE, "Invalid response shape from Groq", details=data
            )

        return CompletionResponse.from_dict(data)


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None
