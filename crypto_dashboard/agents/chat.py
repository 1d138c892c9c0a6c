from __future__ import annotations

import logging
import re

from .base import BaseAgent
from ..llm.base import ErrorKind, LLMClient, LLMError
from ..prompting import PromptLoader


BULLET = "•"

# `*word*` on one line, not glued to surrounding word characters.
_EMPHASIS_SPAN = re.compile(r"(?<!\w)\*(?=\S)([^*\n]+?)(?<=\S)\*(?!\w)")


def sanitize(text: str) -> str:
    """
    Normalize model output to plain text.

    `**` markers are dropped, a `*span*` keeps only a leading bullet, and any
    remaining `*` (list markers) becomes a bullet.
    """
    text = text.replace("**", "")
    text = _EMPHASIS_SPAN.sub(BULLET + r"\1", text)
    return text.replace("*", BULLET).strip()


class CryptoChatAgent(BaseAgent):
    """Answers a single crypto-trading question. Stateless: no chat history is kept."""

    def __init__(
        self,
        *,
        llm: LLMClient,
        prompt_loader: PromptLoader | None = None,
        language: str = "en",
        model: str | None = None,
        logger: logging.Logger | None = None,
    ):
        super().__init__(
            agent_name="crypto_assistant",
            llm=llm,
            prompt_loader=prompt_loader,
            language=language,
            model=model,
            temperature=0.0,
            top_p=1.0,
            max_tokens=1024,
            logger=logger,
        )

    async def answer(self, prompt_text: str) -> str:
        prompts = self.prompts()
        completion = await self.call_llm(
            system_prompt=prompts.system,
            user_prompt=prompts.render_user(message=prompt_text),
        )

        text = (completion.first_content() or "").strip()
        if not text:
            self.logger.error("Empty answer from model=%s id=%s", completion.model, completion.id)
            raise LLMError(
                ErrorKind.INVALID_RESPONSE,
                "Groq returned an empty response",
                details=completion.raw,
            )

        return sanitize(text)
