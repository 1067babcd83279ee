"""Active-window screenshot pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
from typing import Callable, Sequence

from .errors import CaptureInProgress, NoSuitableSource, SourceEnumerationFailed
from .executor import CaptureExecutor
from .probes import enumerate_sources, probe_foreground_window
from .resolver import resolve
from .types import CapturableSource, CaptureResult, ForegroundWindowInfo

logger = logging.getLogger(__name__)


@dataclass
class ScreenCapturer:
    """Capture the window the user is looking at, one request at a time."""

    executor: CaptureExecutor
    probe: Callable[[], ForegroundWindowInfo | None] = field(
        default_factory=lambda: probe_foreground_window
    )
    list_sources: Callable[[], Sequence[CapturableSource]] = field(
        default_factory=lambda: enumerate_sources
    )

    _in_flight: threading.Lock = field(init=False, default_factory=threading.Lock)

    def capture(self) -> CaptureResult:
        """Capture the active window, raising ScreenshotError on failure."""

        if not self._in_flight.acquire(blocking=False):
            raise CaptureInProgress()
        try:
            foreground = self._probe()
            sources = self._list_sources()
            logger.info("Found %d capture sources", len(sources))

            selected = resolve(foreground, sources)
            if selected is None:
                raise NoSuitableSource()
            logger.info("Selected source %r (%s)", selected.display_name, selected.identifier)
            return self.executor.capture(selected)
        finally:
            self._in_flight.release()

    def _list_sources(self) -> list[CapturableSource]:
        try:
            return list(self.list_sources())
        except Exception as exc:  # noqa: BLE001
            raise SourceEnumerationFailed(f"Could not list capture sources: {exc}") from exc

    def _probe(self) -> ForegroundWindowInfo | None:
        try:
            return self.probe()
        except Exception as exc:  # noqa: BLE001
            logger.info("Active window lookup failed: %s", exc)
            return None
