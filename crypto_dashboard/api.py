from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .agents import CryptoChatAgent
from .env import env_flag, load_env
from .llm.base import ErrorKind, LLMError
from .llm.fake import FakeLLMClient
from .llm.groq import GroqClient


logger = logging.getLogger("crypto_dashboard.api")

UNAVAILABLE_KINDS = frozenset({ErrorKind.RATE_LIMIT, ErrorKind.TIMEOUT, ErrorKind.UPSTREAM})


class ChatRequest(BaseModel):
    message: str | None = None


def build_agent() -> CryptoChatAgent:
    # Best-effort .env loading for GROQ_* and CRYPTO_* vars.
    load_env()

    language = os.getenv("CRYPTO_LANGUAGE", "en")

    # A missing GROQ_API_KEY surfaces on the first chat call, not here.
    if env_flag("CRYPTO_FAKE_LLM"):
        llm = FakeLLMClient()
    else:
        llm = GroqClient.from_env()

    return CryptoChatAgent(llm=llm, language=language)


def error_status(error: Exception) -> int:
    """503 for transient upstream trouble, 500 for everything else."""
    if isinstance(error, LLMError) and error.kind in UNAVAILABLE_KINDS:
        return 503
    return 500


def create_app(agent: CryptoChatAgent | None = None) -> FastAPI:
    app = FastAPI(title="Crypto Dashboard API")
    app.state.agent = agent

    def get_agent() -> CryptoChatAgent:
        if app.state.agent is None:
            app.state.agent = build_agent()
        return app.state.agent

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": "crypto_dashboard"}

    @app.post("/api/chat")
    async def chat(req: ChatRequest | None = None):
        message = req.message if req is not None else None
        if not message:
            return JSONResponse({"error": "Message is required"}, status_code=400)

        try:
            response = await get_agent().answer(message)
        except Exception as e:
            logger.exception("Chat API error")
            error_message = str(e) or "Failed to generate response"
            return JSONResponse({"error": error_message}, status_code=error_status(e))

        return {"response": response}

    return app


app = create_app()
