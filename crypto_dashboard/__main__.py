from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .agents import CryptoChatAgent
from .env import load_env
from .llm.base import LLMError
from .llm.fake import FakeLLMClient
from .llm.groq import GroqClient


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="crypto_dashboard",
        description="Ask the crypto trading assistant a single question.",
    )
    parser.add_argument("message", help="Question to send to the assistant")
    parser.add_argument("--fake", action="store_true", help="Use the offline fake client (no API key)")
    parser.add_argument("--model", default=None, help="Override the Groq model")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log retries and failures")
    return parser.parse_args(argv)


async def ask(message: str, *, fake: bool = False, model: str | None = None) -> str:
    # Best-effort .env loading (handy when switching fake <-> real client).
    load_env()
    llm = FakeLLMClient() if fake else GroqClient.from_env()
    agent = CryptoChatAgent(llm=llm, model=model)
    return await agent.answer(message)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        answer = asyncio.run(ask(args.message, fake=args.fake, model=args.model))
    except LLMError as e:
        print(f"error [{e.kind.value}]: {e}", file=sys.stderr)
        return 1

    print(answer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
