from .base import ErrorKind, LLMClient, LLMError, classify_status, is_retriable
from .fake import FakeLLMClient
from .groq import GroqClient

__all__ = [
    "ErrorKind",
    "FakeLLMClient",
    "GroqClient",
    "LLMClient",
    "LLMError",
    "classify_status",
    "is_retriable",
]
