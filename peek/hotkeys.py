"""Global hotkey registration.

Hotkey callbacks only enqueue work; a single dispatcher thread runs the
actions one after another so captures never overlap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import importlib.util
import logging
import queue
import threading
from typing import Callable, Mapping, Protocol

logger = logging.getLogger(__name__)

Action = Callable[[], object]


class HotkeyBackend(Protocol):
    """Protocol for a global hotkey library."""

    def add_hotkey(self, combo: str, callback: Callable[[], None]) -> None:
        """Call callback whenever combo is pressed anywhere on the desktop."""

    def clear(self) -> None:
        """Remove every registered hotkey."""


class KeyboardHotkeyBackend:
    """`keyboard`-based backend."""

    def __init__(self) -> None:
        if importlib.util.find_spec("keyboard") is None:
            raise RuntimeError(
                "keyboard is not installed. Install it to enable global hotkeys."
            )

        import keyboard  # type: ignore

        self._keyboard = keyboard

    def add_hotkey(self, combo: str, callback: Callable[[], None]) -> None:
        self._keyboard.add_hotkey(combo, callback)

    def clear(self) -> None:
        self._keyboard.unhook_all_hotkeys()


@dataclass
class HotkeyDispatcher:
    """Maps key combinations to actions and runs them serially."""

    bindings: Mapping[str, Action]
    backend: HotkeyBackend | None = None

    _thread: threading.Thread | None = field(init=False, default=None)
    _actions: "queue.Queue[tuple[str, Action]]" = field(init=False, default_factory=queue.Queue)
    _stop_event: threading.Event = field(init=False, default_factory=threading.Event)

    def start(self) -> None:
        if self.backend is None:
            self.backend = KeyboardHotkeyBackend()

        for combo, action in self.bindings.items():
            self.backend.add_hotkey(combo, self._enqueue(combo, action))
            logger.debug("Registered hotkey %s", combo)

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="PeekHotkeys",
            daemon=True,
        )
        self._thread.start()
        logger.info("Registered %d global hotkeys.", len(self.bindings))

    def stop(self) -> None:
        if self.backend is not None:
            self.backend.clear()
        self._stop_event.set()
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)

    def wait(self) -> None:
        """Block until stop() is called."""

        self._stop_event.wait()

    def _enqueue(self, combo: str, action: Action) -> Callable[[], None]:
        def callback() -> None:
            self._actions.put((combo, action))

        return callback

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                combo, action = self._actions.get(timeout=0.2)
            except queue.Empty:
                continue
            try:
                action()
            except Exception as exc:  # noqa: BLE001
                logger.exception("%s handler failed: %s", combo, exc)
            finally:
                self._actions.task_done()
