"""Base interfaces for LLM clients."""

from __future__ import annotations

from typing import Protocol, Sequence

from .types import ImagePart


class LLMClient(Protocol):
    """Protocol for LLM clients."""

    def generate_reply(self, prompt: str, images: Sequence[ImagePart]) -> str:
        """Generate a reply for a prompt and its attached images."""


class NullLLMClient:
    """Fallback LLM client when no API key is configured."""

    def generate_reply(self, prompt: str, images: Sequence[ImagePart]) -> str:
        return (
            "LLM is not configured. Set GEMINI_API_KEY or apiKey in config.json to enable answers."
        )
