"""Tests for foreground window and source enumeration queries."""

from __future__ import annotations

from importlib.machinery import ModuleSpec
import sys
import types
from types import SimpleNamespace

import pytest

from peek.screen import probes
from peek.screen.types import Bounds, ForegroundWindowInfo


def install_module(monkeypatch, name: str, **attributes) -> types.ModuleType:
    module = types.ModuleType(name)
    module.__spec__ = ModuleSpec(name, None)
    for key, value in attributes.items():
        setattr(module, key, value)
    monkeypatch.setitem(sys.modules, name, module)
    return module


def make_window(handle: int, title: str, minimized: bool = False) -> SimpleNamespace:
    return SimpleNamespace(
        _hWnd=handle,
        title=title,
        left=10,
        top=20,
        width=800,
        height=600,
        isMinimized=minimized,
    )


class FakeMss:
    def __init__(self, monitors: list[dict]) -> None:
        self.monitors = monitors

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def install_mss(monkeypatch, monitors: list[dict]) -> None:
    install_module(monkeypatch, "mss", mss=lambda: FakeMss(monitors))


ALL = {"left": 0, "top": 0, "width": 3840, "height": 1080}
LEFT = {"left": 0, "top": 0, "width": 1920, "height": 1080}
RIGHT = {"left": 1920, "top": 0, "width": 1920, "height": 1080}


def test_probe_reports_active_window(monkeypatch) -> None:
    window = make_window(42, "LeetCode - Two Sum - Google Chrome")
    install_module(monkeypatch, "pygetwindow", getActiveWindow=lambda: window)
    monkeypatch.setattr(probes, "_owner_name", lambda handle: "chrome" if handle == 42 else None)

    assert probes.probe_foreground_window() == ForegroundWindowInfo(
        title="LeetCode - Two Sum - Google Chrome", owner_name="chrome"
    )


def test_probe_without_active_window_is_none(monkeypatch) -> None:
    install_module(monkeypatch, "pygetwindow", getActiveWindow=lambda: None)
    assert probes.probe_foreground_window() is None


def test_probe_failure_is_none(monkeypatch) -> None:
    def broken():
        raise OSError("access denied")

    install_module(monkeypatch, "pygetwindow", getActiveWindow=broken)
    assert probes.probe_foreground_window() is None


def test_probe_without_library_is_none(monkeypatch) -> None:
    monkeypatch.setattr(probes.importlib.util, "find_spec", lambda name: None)
    assert probes.probe_foreground_window() is None


def test_owner_name_is_unknown_off_windows(monkeypatch) -> None:
    monkeypatch.setattr(probes.sys, "platform", "linux")
    assert probes._owner_name(42) is None
    assert probes._owner_name(None) is None


def test_windows_are_listed_before_screens(monkeypatch) -> None:
    windows = [make_window(1, "Editor"), make_window(2, "Chat", minimized=True)]
    install_module(monkeypatch, "pygetwindow", getAllWindows=lambda: windows)
    install_mss(monkeypatch, [ALL, LEFT])

    sources = probes.enumerate_sources()

    assert [source.identifier for source in sources] == ["window:1", "window:2", "screen:1"]
    assert [source.display_name for source in sources] == ["Editor", "", "Entire screen"]
    assert sources[0].bounds == Bounds(left=10, top=20, width=800, height=600)
    assert sources[2].bounds == Bounds(left=0, top=0, width=1920, height=1080)


def test_multiple_screens_are_numbered(monkeypatch) -> None:
    install_mss(monkeypatch, [ALL, LEFT, RIGHT])

    sources = probes.list_screen_sources()

    assert [(s.identifier, s.display_name) for s in sources] == [
        ("screen:1", "Screen 1"),
        ("screen:2", "Screen 2"),
    ]
    assert sources[1].bounds.left == 1920


def test_window_enumeration_failure_gives_no_windows(monkeypatch) -> None:
    def broken():
        raise RuntimeError("no window server")

    install_module(monkeypatch, "pygetwindow", getAllWindows=broken)
    assert probes.list_window_sources() == []


def test_screen_enumeration_failure_gives_no_screens(monkeypatch) -> None:
    def no_display():
        raise OSError("Cannot connect to display")

    install_module(monkeypatch, "mss", mss=no_display)
    assert probes.list_screen_sources() == []


@pytest.mark.parametrize("name", ["pygetwindow", "mss"])
def test_missing_libraries_list_nothing(monkeypatch, name) -> None:
    real_find_spec = probes.importlib.util.find_spec
    monkeypatch.setattr(
        probes.importlib.util,
        "find_spec",
        lambda module: None if module == name else real_find_spec(module),
    )
    install_module(monkeypatch, "pygetwindow", getAllWindows=lambda: [make_window(1, "Editor")])
    install_mss(monkeypatch, [ALL, LEFT])

    sources = probes.enumerate_sources()

    kinds = {source.identifier.split(":")[0] for source in sources}
    assert kinds == ({"screen"} if name == "pygetwindow" else {"window"})
