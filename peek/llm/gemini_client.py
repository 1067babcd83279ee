"""Gemini API client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Sequence
from urllib import request, error

from .types import ImagePart

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeminiClient:
    """Minimal client for the Gemini `generateContent` REST endpoint."""

    api_key: str
    model: str
    base_url: str = "https://generativelanguage.googleapis.com"
    timeout_seconds: int = 60

    def generate_reply(self, prompt: str, images: Sequence[ImagePart]) -> str:
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}]
                    + [self._image_to_dict(image) for image in images],
                }
            ]
        }
        endpoint = f"{self.base_url.rstrip('/')}/v1beta/models/{self.model}:generateContent"
        data = json.dumps(payload).encode("utf-8")
        req = request.Request(
            endpoint,
            data=data,
            method="POST",
            headers={
                "x-goog-api-key": self.api_key,
                "Content-Type": "application/json",
            },
        )

        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                body = response.read().decode("utf-8")
                return self._extract_text(body)
        except error.HTTPError as exc:
            detail = exc.read().decode("utf-8") if exc.fp else str(exc)
            logger.warning("Gemini API error (%s): %s", exc.code, detail)
            return f"The Gemini request failed with HTTP {exc.code}. Check the API key and model."
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected Gemini client error: %s", exc)
            return "The Gemini request failed due to a network error."

    @staticmethod
    def _image_to_dict(image: ImagePart) -> dict[str, Any]:
        return {"inline_data": {"mime_type": image.mime_type, "data": image.data}}

    @staticmethod
    def _extract_text(raw_body: str) -> str:
        response = json.loads(raw_body)
        candidates = response.get("candidates", [])
        if not candidates:
            reason = response.get("promptFeedback", {}).get("blockReason")
            if reason:
                return f"The request was blocked by Gemini ({reason})."
            return "No response was returned by the LLM."
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(part.get("text", "") for part in parts)
