"""Interactive capture channel.

A request is answered asynchronously by a worker thread that owns the
pixel grabber. Every request gets its own future; the caller decides how
long to wait and cancels the future when it gives up.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
import importlib.util
import logging
import queue
import threading
from typing import Protocol

from .types import CapturableSource

logger = logging.getLogger(__name__)


class CaptureChannel(Protocol):
    """Request/response channel that delivers PNG bytes for a source."""

    def request(self, source: CapturableSource) -> "Future[bytes | None]":
        """Submit a capture request and return a future for its PNG bytes."""


class FrameGrabber(Protocol):
    """Produces PNG bytes for one source."""

    def grab(self, source: CapturableSource) -> bytes | None:
        """Capture the source and return PNG bytes."""


class MssFrameGrabber:
    """mss-based grabber for window bounds and whole monitors."""

    def __init__(self) -> None:
        if importlib.util.find_spec("mss") is None:
            raise RuntimeError("mss is not installed. Install it to enable window capture.")

        import mss  # type: ignore
        import mss.tools  # type: ignore

        self._mss = mss

    def grab(self, source: CapturableSource) -> bytes | None:
        # mss handles are not shareable across threads on every platform.
        with self._mss.mss() as sct:
            region = self._region_for(source, sct.monitors)
            shot = sct.grab(region)
            return self._mss.tools.to_png(shot.rgb, shot.size)

    @staticmethod
    def _region_for(source: CapturableSource, monitors: list[dict]) -> dict:
        if source.bounds is not None:
            bounds = source.bounds
            if bounds.width <= 0 or bounds.height <= 0:
                raise RuntimeError(f"Source {source.identifier} has no visible area")
            return {
                "left": bounds.left,
                "top": bounds.top,
                "width": bounds.width,
                "height": bounds.height,
            }
        if source.is_screen:
            index = int(source.identifier.split(":", 1)[1])
            if not 0 <= index < len(monitors):
                raise RuntimeError(f"Unknown monitor {source.identifier}")
            return monitors[index]
        raise RuntimeError(f"Source {source.identifier} has no known bounds")


@dataclass
class ThreadedCaptureChannel:
    """Serves capture requests on a single background thread."""

    grabber: FrameGrabber | None = None
    poll_interval: float = 0.2

    _thread: threading.Thread | None = field(init=False, default=None)
    _requests: "queue.Queue[tuple[CapturableSource, Future]]" = field(
        init=False, default_factory=queue.Queue
    )
    _stop_event: threading.Event = field(init=False, default_factory=threading.Event)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)

    def request(self, source: CapturableSource) -> "Future[bytes | None]":
        future: Future = Future()
        self._ensure_started()
        self._requests.put((source, future))
        return future

    def stop(self) -> None:
        """Stop the worker thread and fail anything still queued."""

        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)
        while True:
            try:
                _, future = self._requests.get_nowait()
            except queue.Empty:
                break
            if future.set_running_or_notify_cancel():
                future.set_exception(RuntimeError("Capture channel stopped"))

    def _ensure_started(self) -> None:
        with self._lock:
            if self._thread and self._thread.is_alive():
                return
            if self.grabber is None:
                self.grabber = MssFrameGrabber()
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run_loop,
                name="PeekCaptureChannel",
                daemon=True,
            )
            self._thread.start()

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                source, future = self._requests.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            try:
                self._serve(source, future)
            finally:
                self._requests.task_done()

    def _serve(self, source: CapturableSource, future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            logger.debug("Dropping cancelled capture request for %s", source.identifier)
            return
        if self.grabber is None:
            future.set_exception(RuntimeError("No frame grabber configured"))
            return
        try:
            future.set_result(self.grabber.grab(source))
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
