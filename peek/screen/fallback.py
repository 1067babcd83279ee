"""Whole-screen capture through the operating system's own tooling.

Used when the interactive capture channel cannot deliver an image. The
result always covers the entire primary screen.
"""

from __future__ import annotations

import itertools
import logging
import os
import subprocess
import sys
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import (
    FallbackExecutionFailed,
    FallbackFileMissing,
    FallbackUnsupportedPlatform,
)

logger = logging.getLogger(__name__)

_counter = itertools.count()


class ScreenshotCommand(Protocol):
    """Platform capability that writes a PNG of the whole screen to a path."""

    def build(self, output_path: Path) -> list[str]:
        """Return the argv that captures the screen into output_path."""


@dataclass(frozen=True)
class MacScreencapture:
    """macOS `screencapture`, silent."""

    executable: str = "screencapture"

    def build(self, output_path: Path) -> list[str]:
        return [self.executable, "-x", str(output_path)]


_POWERSHELL_SCRIPT = """
Add-Type -AssemblyName System.Windows.Forms
Add-Type -AssemblyName System.Drawing
$bounds = [System.Windows.Forms.Screen]::PrimaryScreen.Bounds
$bitmap = New-Object System.Drawing.Bitmap $bounds.Width, $bounds.Height
$graphics = [System.Drawing.Graphics]::FromImage($bitmap)
$graphics.CopyFromScreen($bounds.Location, [System.Drawing.Point]::Empty, $bounds.Size)
$bitmap.Save('{path}', [System.Drawing.Imaging.ImageFormat]::Png)
$graphics.Dispose()
$bitmap.Dispose()
"""


@dataclass(frozen=True)
class WindowsPowerShellCapture:
    """Windows GDI+ capture of the primary screen via PowerShell."""

    executable: str = "powershell"

    def build(self, output_path: Path) -> list[str]:
        script = _POWERSHELL_SCRIPT.format(path=str(output_path).replace("'", "''"))
        return [self.executable, "-NoProfile", "-NonInteractive", "-Command", script]


FALLBACK_COMMANDS: dict[str, type] = {
    "darwin": MacScreencapture,
    "win32": WindowsPowerShellCapture,
}


def fallback_command_for(platform: str | None = None) -> ScreenshotCommand:
    """Look up the fallback capture command for a platform."""

    name = platform or sys.platform
    command_cls = FALLBACK_COMMANDS.get(name)
    if command_cls is None:
        raise FallbackUnsupportedPlatform(name)
    return command_cls()


def temporary_screenshot_path(directory: Path | None = None) -> Path:
    """Return a fresh PNG path unique within this process and across runs."""

    base = directory or Path(tempfile.gettempdir())
    suffix = f"{time.time_ns()}_{os.getpid()}_{next(_counter)}"
    return base / f"screenshot_{suffix}.png"


@dataclass
class FullScreenCapture:
    """Run a fallback command and return the PNG it produced."""

    command: ScreenshotCommand
    directory: Path | None = None
    timeout_seconds: float = 30.0

    def capture(self) -> bytes:
        output_path = temporary_screenshot_path(self.directory)
        try:
            self._run(output_path)
            if not output_path.exists():
                raise FallbackFileMissing(output_path)
            try:
                return output_path.read_bytes()
            except OSError as exc:
                raise FallbackExecutionFailed(f"Could not read screenshot: {exc}") from exc
        finally:
            _remove_quietly(output_path)

    def _run(self, output_path: Path) -> None:
        argv = self.command.build(output_path)
        logger.info("Running fallback screenshot command: %s", argv[0])
        try:
            subprocess.run(
                argv,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as exc:
            raise FallbackExecutionFailed(f"{argv[0]} is not available") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise FallbackExecutionFailed(f"{argv[0]} failed: {detail}") from exc
        except subprocess.TimeoutExpired as exc:
            raise FallbackExecutionFailed(f"{argv[0]} timed out") from exc


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not clean up temporary screenshot file %s: %s", path, exc)
