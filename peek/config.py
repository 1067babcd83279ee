"""Configuration loading for Peek."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"


class ConfigError(ValueError):
    """Raised when the configuration file cannot be used."""


@dataclass(frozen=True)
class PeekConfig:
    """Runtime configuration for Peek."""

    gemini_api_key: str | None
    gemini_base_url: str
    model: str
    capture_settle_seconds: float = 0.2
    fallback_dir: Path | None = None

    @classmethod
    def from_env(cls) -> "PeekConfig":
        """Load configuration from the config file, overridden by environment variables."""

        file_values = _load_config_file(Path(os.getenv("PEEK_CONFIG_FILE", "config.json")))
        fallback_dir = os.getenv("PEEK_FALLBACK_DIR")

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or file_values.get("apiKey"),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
            model=os.getenv("PEEK_MODEL") or file_values.get("model") or DEFAULT_MODEL,
            capture_settle_seconds=float(os.getenv("PEEK_CAPTURE_SETTLE_SECONDS", "0.2")),
            fallback_dir=Path(fallback_dir) if fallback_dir else None,
        )


def _load_config_file(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Error reading config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    return {key: value for key, value in data.items() if isinstance(value, str) and value}
