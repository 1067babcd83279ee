"""Types for LLM requests."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImagePart:
    """Inline image attached to a prompt."""

    data: str
    mime_type: str = "image/png"
