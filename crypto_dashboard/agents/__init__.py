from .base import BaseAgent
from .chat import CryptoChatAgent, sanitize

__all__ = ["BaseAgent", "CryptoChatAgent", "sanitize"]
