"""Operating system queries used by the capture pipeline."""

from __future__ import annotations

import ctypes
import importlib.util
import logging
import sys
from pathlib import PurePath

from .types import (
    Bounds,
    CapturableSource,
    ForegroundWindowInfo,
    SCREEN_PREFIX,
    WINDOW_PREFIX,
)

logger = logging.getLogger(__name__)


def probe_foreground_window() -> ForegroundWindowInfo | None:
    """Describe the active window, or return None when it cannot be determined."""

    if importlib.util.find_spec("pygetwindow") is None:
        logger.info("pygetwindow is not installed; foreground window is unknown.")
        return None

    try:
        import pygetwindow as gw  # type: ignore

        window = gw.getActiveWindow()
        if window is None:
            return None
        title = window.title if hasattr(window, "title") else str(window)
        owner = _owner_name(getattr(window, "_hWnd", None))
    except Exception as exc:  # noqa: BLE001
        logger.info("Foreground window probe failed: %s", exc)
        return None

    logger.debug("Active window: title=%r owner=%r", title, owner)
    return ForegroundWindowInfo(title=title, owner_name=owner)


def enumerate_sources() -> list[CapturableSource]:
    """List capturable windows followed by screens."""

    return list_window_sources() + list_screen_sources()


def list_window_sources() -> list[CapturableSource]:
    if importlib.util.find_spec("pygetwindow") is None:
        return []

    sources: list[CapturableSource] = []
    try:
        import pygetwindow as gw  # type: ignore

        windows = gw.getAllWindows()
    except Exception as exc:  # noqa: BLE001
        logger.info("Window enumeration failed: %s", exc)
        return sources

    for index, window in enumerate(windows):
        handle = getattr(window, "_hWnd", index)
        minimized = bool(getattr(window, "isMinimized", False))
        sources.append(
            CapturableSource(
                identifier=f"{WINDOW_PREFIX}{handle}",
                # Minimized windows have nothing to capture.
                display_name="" if minimized else (window.title or ""),
                bounds=Bounds(
                    left=window.left,
                    top=window.top,
                    width=window.width,
                    height=window.height,
                ),
            )
        )
    return sources


def list_screen_sources() -> list[CapturableSource]:
    if importlib.util.find_spec("mss") is None:
        return []

    try:
        import mss  # type: ignore

        with mss.mss() as sct:
            monitors = sct.monitors[1:]
    except Exception as exc:  # noqa: BLE001
        logger.info("Screen enumeration failed: %s", exc)
        return []

    sources = []
    for number, monitor in enumerate(monitors, start=1):
        name = "Entire screen" if len(monitors) == 1 else f"Screen {number}"
        sources.append(
            CapturableSource(
                identifier=f"{SCREEN_PREFIX}{number}",
                display_name=name,
                bounds=Bounds(
                    left=monitor["left"],
                    top=monitor["top"],
                    width=monitor["width"],
                    height=monitor["height"],
                ),
            )
        )
    return sources


def _owner_name(handle: int | None) -> str | None:
    if handle is None or sys.platform != "win32":
        return None
    if importlib.util.find_spec("psutil") is None:
        return None

    import psutil  # type: ignore

    pid = ctypes.c_ulong()
    ctypes.windll.user32.GetWindowThreadProcessId(handle, ctypes.byref(pid))  # type: ignore[attr-defined]
    try:
        name = psutil.Process(pid.value).name()
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return None
    # "chrome.exe" -> "chrome" so it can match window titles.
    return PurePath(name).stem or None
