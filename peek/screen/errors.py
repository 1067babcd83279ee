"""Screenshot failure types."""

from __future__ import annotations


class ScreenshotError(RuntimeError):
    """Base error for every way a screenshot request can fail."""


class CaptureInProgress(ScreenshotError):
    def __init__(self) -> None:
        super().__init__("A capture is already in progress")


class NoSuitableSource(ScreenshotError):
    def __init__(self) -> None:
        super().__init__("No suitable capture source found")


class SourceEnumerationFailed(ScreenshotError):
    pass


class PrimaryCaptureTimeout(ScreenshotError):
    def __init__(self, seconds: float) -> None:
        super().__init__(f"Capture timeout after {seconds:g}s")
        self.seconds = seconds


class PrimaryCaptureError(ScreenshotError):
    pass


class FallbackUnsupportedPlatform(ScreenshotError):
    def __init__(self, platform: str) -> None:
        super().__init__(f"Platform not supported: {platform}")
        self.platform = platform


class FallbackExecutionFailed(ScreenshotError):
    pass


class FallbackFileMissing(ScreenshotError):
    def __init__(self, path: object) -> None:
        super().__init__(f"Screenshot file was not created: {path}")
        self.path = path


class AllCaptureMethodsFailed(ScreenshotError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            f"All capture methods failed. Please check system permissions. ({detail})"
        )
        self.detail = detail
