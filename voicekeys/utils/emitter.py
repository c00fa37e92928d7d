#!/usr/bin/env python3
"""
Action emitter for the voice keyboard.
Replays dispatcher key actions against the OS keyboard through pynput.
"""

import logging
import threading
from typing import Any, Callable, Iterable, Optional

from voicekeys.core.actions import NAMED_KEYS, Chord, KeyAction, Tap

logger = logging.getLogger('emitter')


def pynput_key(key: str) -> Any:
    """
    Resolve a symbolic key to a pynput key.

    Args:
        key: Named key or single character

    Returns:
        pynput.keyboard.Key member or KeyCode
    """
    # Imported here so the dispatcher and tests never need a display
    from pynput.keyboard import Key, KeyCode

    if key in NAMED_KEYS:
        return Key[key]
    if len(key) == 1:
        return KeyCode.from_char(key)
    raise KeyError(f"No key for {key!r}")


class ActionEmitter:
    """Performs key actions synchronously and in order."""

    def __init__(self, controller=None, key_resolver: Optional[Callable[[str], Any]] = None):
        """
        Initialize the emitter.

        Args:
            controller: Object with press()/release(); a pynput Controller by default
            key_resolver: Maps symbolic keys to controller keys
        """
        if controller is None:
            from pynput.keyboard import Controller
            controller = Controller()
        self.controller = controller
        self.key_resolver = key_resolver or pynput_key
        self._lock = threading.Lock()

    def emit(self, actions: Iterable[KeyAction]) -> int:
        """
        Perform actions in order.

        A failing action is logged and skipped; the rest still run.

        Returns:
            int: Number of actions performed
        """
        performed = 0
        with self._lock:
            for action in actions:
                try:
                    self._perform(action)
                    performed += 1
                except Exception as e:
                    logger.error(f"Failed to emit {action}: {e}")
        return performed

    def _perform(self, action: KeyAction):
        if isinstance(action, Tap):
            self._tap(self.key_resolver(action.key))
        elif isinstance(action, Chord):
            modifier = self.key_resolver(action.modifier)
            key = self.key_resolver(action.key)
            self.controller.press(modifier)
            try:
                self._tap(key)
            finally:
                self.controller.release(modifier)
        else:
            raise TypeError(f"Unknown key action: {action!r}")
        logger.debug(f"Emitted {action}")

    def _tap(self, key):
        self.controller.press(key)
        self.controller.release(key)
