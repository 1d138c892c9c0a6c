"""
Crypto Dashboard assistant backend.

A single-turn chat endpoint that forwards prompts to Groq's chat-completion
API (deadline, classified errors, bounded retry) and returns plain text.
"""

from .agents import CryptoChatAgent, sanitize
from .llm import ErrorKind, GroqClient, LLMError

__all__ = ["CryptoChatAgent", "ErrorKind", "GroqClient", "LLMError", "sanitize"]
