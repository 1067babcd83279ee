"""Active-window screen capture."""

from .capture import ScreenCapturer
from .channel import ThreadedCaptureChannel
from .errors import ScreenshotError
from .executor import CaptureExecutor, PRIMARY_CAPTURE_TIMEOUT
from .resolver import resolve
from .types import CapturableSource, CaptureResult, ForegroundWindowInfo

__all__ = [
    "ScreenCapturer",
    "ThreadedCaptureChannel",
    "ScreenshotError",
    "CaptureExecutor",
    "PRIMARY_CAPTURE_TIMEOUT",
    "resolve",
    "CapturableSource",
    "CaptureResult",
    "ForegroundWindowInfo",
]
