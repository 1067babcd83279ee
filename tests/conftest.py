"""Shared fixtures for Peek tests."""

from __future__ import annotations

from pathlib import Path
import subprocess

import pytest

from peek.screen import fallback as fallback_module

from fakes import PNG_BYTES


@pytest.fixture
def fake_subprocess(monkeypatch):
    """Patch subprocess.run used by the fallback; behaviour set via attributes."""

    class Runner:
        def __init__(self) -> None:
            self.write = True
            self.returncode = 0
            self.calls: list[list[str]] = []

        def __call__(self, argv, **kwargs):
            self.calls.append(argv)
            if self.returncode:
                raise subprocess.CalledProcessError(
                    self.returncode, argv, output="", stderr="capture denied"
                )
            if self.write:
                Path(argv[-1]).write_bytes(PNG_BYTES + b"-screen")
            return subprocess.CompletedProcess(argv, 0, "", "")

    runner = Runner()
    monkeypatch.setattr(fallback_module.subprocess, "run", runner)
    return runner
