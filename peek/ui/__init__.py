"""UI modules for Peek."""

from .console_overlay import ConsoleOverlay
from .overlay import OverlayView

__all__ = ["ConsoleOverlay", "OverlayView"]
