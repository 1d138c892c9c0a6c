from __future__ import annotations

import logging

from ..llm.base import ErrorKind, LLMClient, LLMError
from ..models import ChatMessage, CompletionRequest, CompletionResponse
from ..prompting import PromptBundle, PromptLoader


class BaseAgent:
    """
    Minimal base agent:
    - loads prompts (system + user_template)
    - calls an injected LLM client with a fresh two-message request
    """

    def __init__(
        self,
        *,
        agent_name: str,
        llm: LLMClient,
        prompt_loader: PromptLoader | None = None,
        language: str = "en",
        model: str | None = None,
        temperature: float,
        top_p: float,
        max_tokens: int,
        logger: logging.Logger | None = None,
    ):
        self.agent_name = agent_name
        self.llm = llm
        self.prompt_loader = prompt_loader or PromptLoader()
        self.language = language
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens
        self.logger = logger or logging.getLogger(f"crypto_dashboard.{agent_name}")

    def prompts(self) -> PromptBundle:
        return self.prompt_loader.load(self.agent_name, self.language)

    def build_request(self, *, system_prompt: str, user_prompt: str) -> CompletionRequest:
        return CompletionRequest(
            model=self.model,
            messages=(
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=user_prompt),
            ),
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
        )

    async def call_llm(self, *, system_prompt: str, user_prompt: str) -> CompletionResponse:
        request = self.build_request(system_prompt=system_prompt, user_prompt=user_prompt)
        try:
            return await self.llm.complete(request)
        except LLMError:
            raise
        except Exception as e:
            raise LLMError(ErrorKind.UNKNOWN, str(e) or "Unknown LLM error", details=e) from e
