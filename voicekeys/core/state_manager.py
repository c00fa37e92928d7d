#!/usr/bin/env python3
"""
State manager for the voice keyboard.
Holds the mode, the listening flag and the trigger debouncer shared between
the pipeline thread and the presentation layer.
"""

import enum
import logging
import threading
from typing import Optional

from voicekeys.core.debouncer import TriggerDebouncer

logger = logging.getLogger("state-manager")


class Mode(enum.Enum):
    COMMAND = "command"
    DICTATION = "dictation"

    @classmethod
    def parse(cls, value) -> "Mode":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class Status(str, enum.Enum):
    LOADING = "LOADING"
    READY = "READY"
    LISTENING = "LISTENING"
    FAILED = "FAILED"


class StateManager:
    """
    Manages application state for the voice keyboard.

    Every read and write of the mode and the listening flag goes through one
    lock. A mode or listening change resets the debouncer inside the same
    critical section, so a fragment dispatched after the change never sees
    triggers fired before it.
    """

    def __init__(self, mode=Mode.COMMAND, enabled=False,
                 debouncer: Optional[TriggerDebouncer] = None):
        self._lock = threading.RLock()
        self._mode = Mode.parse(mode)
        self._enabled = bool(enabled)
        self.debouncer = debouncer if debouncer is not None else TriggerDebouncer()

        # Startup
        self.ready = threading.Event()
        self.init_error = None
        self._status = Status.LOADING

        # Callbacks
        self._on_mode_callbacks = []
        self._on_enabled_callbacks = []
        self._on_status_callbacks = []

    @property
    def mode(self) -> Mode:
        with self._lock:
            return self._mode

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def status(self) -> Status:
        with self._lock:
            return self._status

    def snapshot(self):
        """Return (mode, enabled) read atomically."""
        with self._lock:
            return self._mode, self._enabled

    def set_mode(self, mode) -> bool:
        """
        Switch the operating mode.

        Returns:
            bool: True if the mode actually changed
        """
        mode = Mode.parse(mode)
        with self._lock:
            changed = self._apply_mode(mode)
        if changed:
            self._announce_mode(mode)
        return changed

    def toggle_mode(self) -> Mode:
        with self._lock:
            new_mode = Mode.DICTATION if self._mode is Mode.COMMAND else Mode.COMMAND
            self._apply_mode(new_mode)
        self._announce_mode(new_mode)
        return new_mode

    def set_enabled(self, enabled: bool) -> bool:
        """
        Turn listening on or off.

        Returns:
            bool: True if the flag actually changed
        """
        enabled = bool(enabled)
        with self._lock:
            changed = self._apply_enabled(enabled)
            status = self._status
        if changed:
            self._announce_enabled(enabled, status)
        return changed

    def toggle_enabled(self) -> bool:
        with self._lock:
            new_value = not self._enabled
            self._apply_enabled(new_value)
            status = self._status
        self._announce_enabled(new_value, status)
        return new_value

    # Callers hold self._lock; callbacks run only after it is released.
    def _apply_mode(self, mode) -> bool:
        if mode is self._mode:
            return False
        self._mode = mode
        self.debouncer.reset()
        return True

    def _apply_enabled(self, enabled) -> bool:
        if enabled == self._enabled:
            return False
        self._enabled = enabled
        self.debouncer.reset()
        if self._status in (Status.READY, Status.LISTENING):
            self._status = Status.LISTENING if enabled else Status.READY
        return True

    def _announce_mode(self, mode):
        logger.info(f"Mode set to {mode.value}")
        self._notify(self._on_mode_callbacks, mode, "mode")

    def _announce_enabled(self, enabled, status):
        logger.info(f"Listening {'enabled' if enabled else 'disabled'}")
        self._notify(self._on_enabled_callbacks, enabled, "enabled")
        self._notify(self._on_status_callbacks, status, "status")

    def reset_triggers(self):
        """End the current debounce window."""
        self.debouncer.reset()

    def mark_ready(self):
        """Record that the model and audio device are up."""
        with self._lock:
            self._status = Status.LISTENING if self._enabled else Status.READY
            status = self._status
        self.ready.set()
        logger.info("Initialization complete")
        self._notify(self._on_status_callbacks, status, "status")

    def mark_failed(self, error: Exception):
        """Record a fatal initialization error and release waiters."""
        with self._lock:
            self.init_error = error
            self._status = Status.FAILED
            self._enabled = False
        self.ready.set()
        self._notify(self._on_status_callbacks, Status.FAILED, "status")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Block until initialization has finished.

        Returns:
            bool: True if initialization succeeded in time
        """
        if not self.ready.wait(timeout):
            return False
        return self.init_error is None

    def on_mode_change(self, callback):
        """Register callback for mode changes."""
        if callback not in self._on_mode_callbacks:
            self._on_mode_callbacks.append(callback)

    def on_enabled_change(self, callback):
        """Register callback for listening flag changes."""
        if callback not in self._on_enabled_callbacks:
            self._on_enabled_callbacks.append(callback)

    def on_status_change(self, callback):
        """Register callback for status changes."""
        if callback not in self._on_status_callbacks:
            self._on_status_callbacks.append(callback)

    def _notify(self, callbacks, value, name):
        for callback in list(callbacks):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Error in {name} callback: {e}")
