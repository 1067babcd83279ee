"""Interface between the session logic and whatever draws the overlay."""

from __future__ import annotations

from typing import Protocol


class OverlayView(Protocol):
    """Presentation surface for instructions, answers and errors."""

    def show(self) -> None:
        """Make the overlay visible."""

    def hide(self) -> None:
        """Hide the overlay completely."""

    def show_instruction(self, text: str) -> None:
        """Show a one-line instruction banner."""

    def hide_instruction(self) -> None:
        """Remove the instruction banner."""

    def show_help(self, text: str) -> None:
        """Show the help message."""

    def show_chat(self, prompt: str, image_base64: str) -> None:
        """Show the prompt and first screenshot that were sent."""

    def show_answer(self, text: str) -> None:
        """Show an answer and keep it for restore_answer."""

    def restore_answer(self) -> None:
        """Show the last answer again after the overlay was hidden."""

    def show_error(self, message: str) -> None:
        """Show an error message."""

    def clear_result(self) -> None:
        """Clear the displayed answer and help text."""
