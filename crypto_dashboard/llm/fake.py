from __future__ import annotations

import itertools
import re
from collections import deque
from typing import Callable, Sequence

from ..models import ChatMessage, CompletionRequest, CompletionResponse


Responder = Callable[[Sequence[ChatMessage], str], str]


def _mentions(text: str, *words: str) -> bool:
    pattern = r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b"
    return re.search(pattern, text, flags=re.IGNORECASE) is not None


def demo_responder(messages: Sequence[ChatMessage], model: str) -> str:
    """
    Deterministic responder for local demos (no network).

    Answers keep some emphasis markup on purpose so the sanitizer has work to do.
    """
    user = messages[-1].content if messages else ""

    if _mentions(user, "bitcoin", "btc"):
        return (
            "Bitcoin is a decentralized **digital currency** secured by proof-of-work.\n\n"
            "* Fixed supply of 21 million coins\n"
            "* Halving roughly every four years\n"
            "* Often described as *digital gold*"
        )

    if _mentions(user, "ethereum", "eth", "ether"):
        return (
            "Ethereum is a programmable blockchain with its own currency, **ether**.\n\n"
            "* Smart contracts run on the EVM\n"
            "* Proof-of-stake since the Merge"
        )

    if _mentions(user, "risk", "stop-loss", "leverage"):
        return (
            "Manage risk before chasing returns:\n\n"
            "* Size positions so one loss stays small\n"
            "* Use a **stop-loss** on every leveraged trade\n"
            "* Never invest more than you can afford to lose"
        )

    return "I can help with crypto trading, market analysis and investment strategies. What would you like to know?"


class FakeLLMClient:
    """LLMClient-compatible fake for tests/demos."""

    def __init__(self, responder: Responder = demo_responder, *, max_recorded: int = 100):
        self._responder = responder
        self._ids = itertools.count(1)
        # Keeps only the most recent `max_recorded` requests.
        self.requests: deque[CompletionRequest] = deque(maxlen=max_recorded)

    async def complete(
        self,
        request: CompletionRequest,
        *,
        timeout_ms: int | None = None,
        max_retries: int | None = None,
    ) -> CompletionResponse:
        self.requests.append(request)
        model = request.model or "fake"
        content = self._responder(request.messages, model)
        return CompletionResponse.from_dict(
            {
                "id": f"fake-{next(self._ids)}",
                "object": "chat.completion",
                "model": model,
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": content},
                        "finish_reason": "stop",
                    }
                ],
            }
        )
