"""LLM clients for Peek."""

from .base import LLMClient, NullLLMClient
from .gemini_client import GeminiClient
from .types import ImagePart

__all__ = ["LLMClient", "NullLLMClient", "GeminiClient", "ImagePart"]
