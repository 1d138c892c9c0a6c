"""Pytest configuration and fixtures."""

from typing import Any

import httpx
import pytest

from crypto_dashboard.llm.groq import GroqClient
from crypto_dashboard.models import ChatMessage, CompletionRequest


def completion_body(content: Any = "Hello from Groq", **overrides: Any) -> dict[str, Any]:
    """Build a successful chat-completion response body."""
    body = {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "llama3-70b-8192",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }
    body.update(overrides)
    return body


def ok(body: Any) -> httpx.Response:
    return httpx.Response(200, json=body)


def status(code: int, body: Any = None) -> httpx.Response:
    if body is None:
        return httpx.Response(code, text="")
    return httpx.Response(code, json=body)


class RecordingSleep:
    """Injected sleep that records requested delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(sleeper: RecordingSleep):
    """Factory for a GroqClient with a fixed test key and recording sleep."""

    def factory(api_key: str | None = "gsk-test-key", **kwargs: Any) -> GroqClient:
        kwargs.setdefault("sleep", sleeper)
        return GroqClient(credential=lambda: api_key, **kwargs)

    return factory


@pytest.fixture
def chat_request() -> CompletionRequest:
    return CompletionRequest(
        messages=(
            ChatMessage(role="system", content="You are helpful."),
            ChatMessage(role="user", content="Hi"),
        ),
        temperature=0.0,
        top_p=1.0,
        max_tokens=1024,
    )
