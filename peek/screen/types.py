"""Types shared by the screen capture pipeline."""

from __future__ import annotations

import base64
from dataclasses import dataclass

WINDOW_PREFIX = "window:"
SCREEN_PREFIX = "screen:"


@dataclass(frozen=True)
class Bounds:
    """Pixel rectangle in virtual-desktop coordinates."""

    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class CapturableSource:
    """A window or a whole screen that can be captured as an image."""

    identifier: str
    display_name: str
    bounds: Bounds | None = None

    @property
    def is_window(self) -> bool:
        return self.identifier.startswith(WINDOW_PREFIX)

    @property
    def is_screen(self) -> bool:
        return self.identifier.startswith(SCREEN_PREFIX)


@dataclass(frozen=True)
class ForegroundWindowInfo:
    """Best-effort description of the active application window."""

    title: str | None
    owner_name: str | None = None


@dataclass(frozen=True)
class CaptureResult:
    """PNG image produced by a single capture request."""

    image_bytes: bytes
    method: str
    source: CapturableSource | None = None

    def as_base64(self) -> str:
        return base64.b64encode(self.image_bytes).decode("ascii")
