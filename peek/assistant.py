"""Session logic for Peek."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Callable, Protocol

from .llm import ImagePart, LLMClient
from .screen import CaptureResult, ScreenshotError
from .ui.overlay import OverlayView

logger = logging.getLogger(__name__)


ANALYSIS_PROMPT = "Please analyze this coding challenge and provide a solution with explanation:"

DEFAULT_INSTRUCTION = (
    "Ctrl+Shift+S: Screenshot | Ctrl+Shift+A: Multi-mode | "
    "Ctrl+Shift+W: Hide Window | Ctrl+Shift+Q: Close"
)
MULTI_MODE_INSTRUCTION = "Multi-mode: Ctrl+Shift+A to add, Ctrl+Shift+S to finalize"

HELP_MESSAGE = """## Welcome to Peek

Capture a coding problem from the active window and get an answer from Gemini.

### Commands

- `Ctrl+Shift+S` - Capture the active window and get a solution
- `Ctrl+Shift+A` - Add a page in multi-page mode (finish with `Ctrl+Shift+S`)
- `Ctrl+Shift+W` - Toggle between hidden and visible
- `Ctrl+Shift+R` - Reset the conversation and start fresh
- `Ctrl+Shift+Q` - Quit

### Quick start

1. Open the coding challenge in your browser
2. Press `Ctrl+Shift+S`
3. Read the generated solution and explanation"""


class Capturer(Protocol):
    def capture(self) -> CaptureResult:
        """Capture the active window."""


class Stage(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    ANSWERED = "answered"


@dataclass
class SessionState:
    """Screenshots and flags for the current conversation."""

    stage: Stage = Stage.IDLE
    screenshots: list[str] = field(default_factory=list)
    multi_page: bool = False
    visible: bool = True


@dataclass
class InterviewAssistant:
    """Reacts to hotkeys by capturing screens and asking the LLM about them."""

    llm_client: LLMClient
    capturer: Capturer
    view: OverlayView
    settle_seconds: float = 0.2
    sleep: Callable[[float], None] = time.sleep
    state: SessionState = field(default_factory=SessionState)

    def capture_and_answer(self) -> str | None:
        """Capture one more screenshot and answer using every screenshot so far."""

        if self.state.stage is Stage.IDLE:
            self.view.clear_result()

        try:
            image = self._take_screenshot()
        except ScreenshotError as exc:
            logger.error("Screenshot for answer failed: %s", exc)
            return None

        self.state.screenshots.append(image)
        return self._process_screenshots()

    def add_page(self) -> None:
        """Capture a page and keep it for a later multi-page answer."""

        if self.state.stage is Stage.IDLE:
            self.view.clear_result()

        if not self.state.multi_page:
            self.state.multi_page = True
            self.view.show_instruction(MULTI_MODE_INSTRUCTION)
        self.view.show()

        try:
            image = self._take_screenshot()
        except ScreenshotError as exc:
            logger.error("Screenshot for multi-page mode failed: %s", exc)
            return

        self.state.screenshots.append(image)
        self.view.show_instruction(MULTI_MODE_INSTRUCTION)
        self.state.stage = Stage.ACCUMULATING
        logger.info("Multi-page mode holds %d screenshots", len(self.state.screenshots))

    def reset(self) -> None:
        """Forget all screenshots and return to the idle stage."""

        self.state.screenshots.clear()
        self.state.multi_page = False
        self.view.clear_result()
        self.view.show_instruction(DEFAULT_INSTRUCTION)
        self.state.stage = Stage.IDLE

    def toggle_visibility(self) -> None:
        if self.state.visible:
            self.hide_window()
            logger.info("Window hidden completely")
        else:
            self.show_window()
            logger.info("Window visible")

    def show_window(self) -> None:
        self.view.show()
        if self.state.stage is Stage.ANSWERED:
            self.view.restore_answer()
        elif self.state.stage is Stage.ACCUMULATING:
            self.view.show_instruction(MULTI_MODE_INSTRUCTION)
        else:
            self.view.show_instruction(DEFAULT_INSTRUCTION)
        self.state.visible = True

    def hide_window(self) -> None:
        self.view.hide()
        self.state.visible = False

    def show_help(self) -> None:
        self.view.show_help(HELP_MESSAGE)

    def _take_screenshot(self) -> str:
        self.view.hide_instruction()
        self.view.hide()
        self.sleep(self.settle_seconds)
        try:
            result = self.capturer.capture()
        except ScreenshotError as exc:
            self.view.show()
            self.view.show_error(
                f"Screenshot failed: {exc}. Make sure you have an active window selected."
            )
            raise
        self.view.show()
        self.state.visible = True
        logger.info("Captured screenshot via %s capture", result.method)
        return result.as_base64()

    def _process_screenshots(self) -> str:
        images = [ImagePart(data=image) for image in self.state.screenshots]
        self.view.show_chat(ANALYSIS_PROMPT, self.state.screenshots[0])

        answer = self.llm_client.generate_reply(ANALYSIS_PROMPT, images)
        self.view.show_answer(answer)
        self.state.stage = Stage.ANSWERED
        return answer
