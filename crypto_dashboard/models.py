from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a chat-completion conversation."""

    role: Role
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class CompletionRequest:
    """
    Body of one chat-completion call.

    `model=None` lets the client fill in its default model.
    Streaming is never requested.
    """

    messages: tuple[ChatMessage, ...]
    temperature: float
    top_p: float
    max_tokens: int
    model: str | None = None
    stream: Literal[False] = False

    def with_model(self, model: str) -> "CompletionRequest":
        return CompletionRequest(
            messages=self.messages,
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
            model=model,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "stream": False,
        }


@dataclass(frozen=True)
class ChoiceMessage:
    role: Role = "assistant"
    content: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChoiceMessage":
        content = data.get("content")
        return cls(
            role=data.get("role", "assistant"),
            content=content if isinstance(content, str) else None,
        )


@dataclass(frozen=True)
class Choice:
    index: int
    message: ChoiceMessage
    finish_reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Choice":
        message = data.get("message")
        return cls(
            index=int(data.get("index") or 0),
            message=ChoiceMessage.from_dict(message if isinstance(message, dict) else {}),
            finish_reason=data.get("finish_reason"),
        )


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Usage":
        return cls(
            prompt_tokens=int(data.get("prompt_tokens") or 0),
            completion_tokens=int(data.get("completion_tokens") or 0),
            total_tokens=int(data.get("total_tokens") or 0),
        )


@dataclass(frozen=True)
class CompletionResponse:
    """Parsed chat-completion response. `raw` keeps the upstream body as received."""

    id: str
    model: str
    choices: tuple[Choice, ...]
    usage: Usage | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompletionResponse":
        choices = [c for c in (data.get("choices") or []) if isinstance(c, dict)]
        usage = data.get("usage")
        return cls(
            id=str(data.get("id", "")),
            model=str(data.get("model", "")),
            choices=tuple(Choice.from_dict(c) for c in choices),
            usage=Usage.from_dict(usage) if isinstance(usage, dict) else None,
            raw=data,
        )

    def first_content(self) -> str | None:
        if not self.choices:
            return None
        return self.choices[0].message.content
