"""Tests for whole-screen fallback capture."""

import logging
from pathlib import Path

import pytest

from peek.screen.errors import (
    FallbackExecutionFailed,
    FallbackFileMissing,
    FallbackUnsupportedPlatform,
)
from peek.screen.fallback import (
    FullScreenCapture,
    MacScreencapture,
    WindowsPowerShellCapture,
    fallback_command_for,
    temporary_screenshot_path,
)

from fakes import PNG_BYTES, FakeCommand


def test_command_lookup_by_platform() -> None:
    assert isinstance(fallback_command_for("darwin"), MacScreencapture)
    assert isinstance(fallback_command_for("win32"), WindowsPowerShellCapture)


def test_command_lookup_rejects_unknown_platform() -> None:
    with pytest.raises(FallbackUnsupportedPlatform, match="linux"):
        fallback_command_for("linux")


def test_mac_command_is_silent_screencapture(tmp_path) -> None:
    target = tmp_path / "shot.png"
    assert MacScreencapture().build(target) == ["screencapture", "-x", str(target)]


def test_windows_command_saves_png_to_path(tmp_path) -> None:
    target = tmp_path / "it's.png"
    argv = WindowsPowerShellCapture().build(target)
    assert argv[0] == "powershell"
    assert "CopyFromScreen" in argv[-1]
    assert str(target).replace("'", "''") in argv[-1]


def test_temporary_paths_do_not_collide(tmp_path) -> None:
    paths = {temporary_screenshot_path(tmp_path) for _ in range(100)}
    assert len(paths) == 100
    assert all(path.parent == tmp_path and path.suffix == ".png" for path in paths)


def test_success_reads_and_removes_file(tmp_path, fake_subprocess) -> None:
    command = FakeCommand()
    image = FullScreenCapture(command=command, directory=tmp_path).capture()
    assert image == PNG_BYTES + b"-screen"
    assert not command.paths[0].exists()
    assert list(tmp_path.iterdir()) == []


def test_missing_output_file(tmp_path, fake_subprocess) -> None:
    fake_subprocess.write = False
    with pytest.raises(FallbackFileMissing):
        FullScreenCapture(command=FakeCommand(), directory=tmp_path).capture()


def test_command_failure_is_reported(tmp_path, fake_subprocess) -> None:
    fake_subprocess.returncode = 2
    with pytest.raises(FallbackExecutionFailed, match="capture denied"):
        FullScreenCapture(command=FakeCommand(), directory=tmp_path).capture()


def test_missing_executable_is_reported(tmp_path, monkeypatch) -> None:
    def missing(argv, **kwargs):
        raise FileNotFoundError(argv[0])

    monkeypatch.setattr("peek.screen.fallback.subprocess.run", missing)
    with pytest.raises(FallbackExecutionFailed, match="not available"):
        FullScreenCapture(command=FakeCommand(), directory=tmp_path).capture()


def test_read_failure_still_removes_file(tmp_path, fake_subprocess, monkeypatch) -> None:
    def broken_read(self):
        raise OSError("disk gone")

    monkeypatch.setattr(Path, "read_bytes", broken_read)
    command = FakeCommand()
    with pytest.raises(FallbackExecutionFailed, match="disk gone"):
        FullScreenCapture(command=command, directory=tmp_path).capture()
    assert not command.paths[0].exists()


def test_cleanup_failure_is_only_logged(tmp_path, fake_subprocess, monkeypatch, caplog) -> None:
    def broken_unlink(self, missing_ok=False):
        raise PermissionError("locked")

    monkeypatch.setattr(Path, "unlink", broken_unlink)
    with caplog.at_level(logging.WARNING, logger="peek.screen.fallback"):
        image = FullScreenCapture(command=FakeCommand(), directory=tmp_path).capture()
    assert image == PNG_BYTES + b"-screen"
    assert "Could not clean up" in caplog.text
