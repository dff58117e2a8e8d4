"""Global hotkey listener."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from pynput import keyboard

logger = logging.getLogger(__name__)

_KEY_SYMBOLS = {
    "<cmd>": "⌘",
    "<shift>": "⇧",
    "<alt>": "⌥",
    "<ctrl>": "⌃",
}


def is_valid_shortcut(chord: str) -> bool:
    try:
        keys = keyboard.HotKey.parse(chord)
    except ValueError:
        return False
    return len(keys) >= 2


def describe_shortcut(chord: str) -> str:
    """Render '<cmd>+<shift>+c' as '⌘⇧C'."""
    parts = []
    for part in chord.split("+"):
        parts.append(_KEY_SYMBOLS.get(part, part.strip("<>").upper()))
    return "".join(parts)


class HotkeyListener:
    """Binds named actions to global key chords."""

    def __init__(self, shortcuts: Dict[str, str], actions: Dict[str, Callable[[], None]]) -> None:
        self.shortcuts = dict(shortcuts)
        self.actions = actions
        self._listener: Optional[keyboard.GlobalHotKeys] = None

    def start(self) -> None:
        bindings = {}
        for name, chord in self.shortcuts.items():
            action = self.actions.get(name)
            if action is None:
                continue
            if chord in bindings:
                logger.warning(f"Shortcut {chord} is bound twice; keeping the first binding")
                continue
            bindings[chord] = self._make_handler(name, action)
        self._listener = keyboard.GlobalHotKeys(bindings)
        self._listener.start()
        logger.info(f"Hotkeys registered: {self.shortcuts}")

    def stop(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None

    def rebind(self, shortcuts: Dict[str, str]) -> None:
        self.stop()
        self.shortcuts = dict(shortcuts)
        self.start()

    def _make_handler(self, name: str, action: Callable[[], None]) -> Callable[[], None]:
        def handler():
            logger.debug(f"Hotkey: {name}")
            action()

        return handler
