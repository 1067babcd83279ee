"""Console overlay for terminals and early development."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class ConsoleOverlay:
    """Prints overlay updates instead of drawing a window."""

    write: Callable[[str], None] = print
    visible: bool = True
    _last_answer: str | None = field(init=False, default=None)

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def show_instruction(self, text: str) -> None:
        self._emit(f"[{text}]")

    def hide_instruction(self) -> None:
        """The console prints instructions as lines, so there is no banner to remove."""

    def show_help(self, text: str) -> None:
        self._emit(text)

    def show_chat(self, prompt: str, image_base64: str) -> None:
        self._emit(f"You> {prompt} [screenshot, {len(image_base64)} base64 chars]")

    def show_answer(self, text: str) -> None:
        self._last_answer = text
        self._emit(f"Peek> {text}")

    def restore_answer(self) -> None:
        if self._last_answer:
            self._emit(f"Peek> {self._last_answer}")

    def show_error(self, message: str) -> None:
        self._emit(f"Error: {message}")

    def clear_result(self) -> None:
        self._last_answer = None

    def _emit(self, text: str) -> None:
        if self.visible:
            self.write(text)
