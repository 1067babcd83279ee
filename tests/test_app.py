"""Tests for application wiring."""

from peek.app import PeekApp
from peek.config import PeekConfig
from peek.llm import GeminiClient, NullLLMClient


def test_app_without_key_uses_null_client() -> None:
    app = PeekApp(PeekConfig(gemini_api_key=None, gemini_base_url="https://x", model="m"))
    assert isinstance(app.assistant.llm_client, NullLLMClient)
    assert set(app.hotkeys.bindings) == {
        "ctrl+shift+s",
        "ctrl+shift+a",
        "ctrl+shift+r",
        "ctrl+shift+w",
        "ctrl+shift+q",
    }


def test_app_with_key_uses_gemini() -> None:
    app = PeekApp(PeekConfig(gemini_api_key="k", gemini_base_url="https://x", model="m"))
    assert isinstance(app.assistant.llm_client, GeminiClient)
    assert app.assistant.llm_client.model == "m"
