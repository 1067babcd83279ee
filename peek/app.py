"""Application wiring for Peek."""

from __future__ import annotations

import logging
import os

from .assistant import InterviewAssistant
from .config import PeekConfig
from .hotkeys import HotkeyDispatcher
from .llm import GeminiClient, LLMClient, NullLLMClient
from .screen import CaptureExecutor, ScreenCapturer, ThreadedCaptureChannel
from .ui import ConsoleOverlay

logger = logging.getLogger(__name__)


class PeekApp:
    """Top-level application that wires Peek components together."""

    def __init__(self, config: PeekConfig | None = None) -> None:
        config = config or PeekConfig.from_env()
        llm_client: LLMClient
        if config.gemini_api_key:
            llm_client = GeminiClient(
                api_key=config.gemini_api_key,
                model=config.model,
                base_url=config.gemini_base_url,
            )
        else:
            logger.warning("No Gemini API key configured; answers are disabled.")
            llm_client = NullLLMClient()

        self.channel = ThreadedCaptureChannel()
        executor = CaptureExecutor(channel=self.channel, fallback_dir=config.fallback_dir)
        self.view = ConsoleOverlay()
        self.assistant = InterviewAssistant(
            llm_client=llm_client,
            capturer=ScreenCapturer(executor=executor),
            view=self.view,
            settle_seconds=config.capture_settle_seconds,
        )
        self.hotkeys = HotkeyDispatcher(
            bindings={
                "ctrl+shift+s": self.assistant.capture_and_answer,
                "ctrl+shift+a": self.assistant.add_page,
                "ctrl+shift+r": self.assistant.reset,
                "ctrl+shift+w": self.assistant.toggle_visibility,
                "ctrl+shift+q": self.quit,
            }
        )

    def run(self) -> None:
        """Run the application until quit."""
        self.hotkeys.start()
        self.assistant.show_help()
        logger.info("Peek started; waiting for hotkeys.")
        try:
            self.hotkeys.wait()
        except KeyboardInterrupt:
            self.quit()
        logger.info("Peek stopped.")

    def quit(self) -> None:
        logger.info("Quitting application...")
        self.hotkeys.stop()
        self.channel.stop()


def main() -> None:
    """Entry point for running Peek."""
    log_level = os.getenv("PEEK_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=log_level, format="%(levelname)s %(message)s")
    PeekApp().run()
