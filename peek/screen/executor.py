"""Capture a selected source, degrading to a full-screen grab on failure."""

from __future__ import annotations

from concurrent.futures import CancelledError, TimeoutError as FutureTimeoutError
from dataclasses import dataclass
import logging
from pathlib import Path

from .channel import CaptureChannel
from .errors import (
    AllCaptureMethodsFailed,
    PrimaryCaptureError,
    PrimaryCaptureTimeout,
    ScreenshotError,
)
from .fallback import FullScreenCapture, ScreenshotCommand, fallback_command_for
from .types import CapturableSource, CaptureResult

logger = logging.getLogger(__name__)

PRIMARY_CAPTURE_TIMEOUT = 10.0


@dataclass
class CaptureExecutor:
    """Primary channel capture followed by at most one fallback attempt.

    Without an explicit `fallback_command` the command is looked up for
    `platform` (the running platform by default) once the fallback is needed.
    """

    channel: CaptureChannel
    timeout_seconds: float = PRIMARY_CAPTURE_TIMEOUT
    fallback_command: ScreenshotCommand | None = None
    fallback_dir: Path | None = None
    platform: str | None = None

    def capture(self, source: CapturableSource) -> CaptureResult:
        try:
            image = self._capture_primary(source)
            logger.info("Captured %s through the capture channel", source.identifier)
            return CaptureResult(image_bytes=image, method="primary", source=source)
        except ScreenshotError as exc:
            logger.warning("Primary capture failed: %s", exc)

        logger.info("Falling back to whole-screen capture")
        try:
            image = self._capture_fallback()
        except ScreenshotError as exc:
            logger.error("Fallback capture also failed: %s", exc)
            raise AllCaptureMethodsFailed(str(exc)) from exc
        return CaptureResult(image_bytes=image, method="fallback", source=None)

    def _capture_primary(self, source: CapturableSource) -> bytes:
        try:
            future = self.channel.request(source)
        except Exception as exc:  # noqa: BLE001
            raise PrimaryCaptureError(str(exc) or type(exc).__name__) from exc

        try:
            image = future.result(timeout=self.timeout_seconds)
        except FutureTimeoutError as exc:
            # A late response lands on a cancelled or abandoned future.
            future.cancel()
            raise PrimaryCaptureTimeout(self.timeout_seconds) from exc
        except CancelledError as exc:
            raise PrimaryCaptureError("Capture request was cancelled") from exc
        except Exception as exc:  # noqa: BLE001
            raise PrimaryCaptureError(str(exc) or type(exc).__name__) from exc

        if not image:
            raise PrimaryCaptureError("No capture result received")
        return image

    def _capture_fallback(self) -> bytes:
        command = self.fallback_command or fallback_command_for(self.platform)
        return FullScreenCapture(command=command, directory=self.fallback_dir).capture()
