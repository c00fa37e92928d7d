#!/usr/bin/env python3
"""
Hotkey manager for the voice keyboard.
Global shortcuts that toggle listening and switch between command and dictation mode.
"""

import logging

from voicekeys.core.state_manager import StateManager
from voicekeys.ui.status import notify_status

logger = logging.getLogger('hotkeys')


class HotkeyManager:
    """Manages keyboard hotkeys for the voice keyboard."""

    def __init__(self, state: StateManager, listening_key: str = 'f8', mode_key: str = 'f9'):
        """
        Initialize the hotkey manager.

        Args:
            state: Shared state to toggle
            listening_key: Key name that toggles listening
            mode_key: Key name that switches mode
        """
        self.state = state
        self.listening_key = listening_key.lower()
        self.mode_key = mode_key.lower()
        self.listener = None

    def start(self):
        """Start listening for keyboard hotkeys."""
        from pynput import keyboard

        logger.info(
            f"Hotkeys: {self.listening_key.upper()} toggles listening, "
            f"{self.mode_key.upper()} switches mode"
        )
        self.listener = keyboard.Listener(on_press=self._on_press)
        self.listener.daemon = True
        self.listener.start()

    def stop(self):
        """Stop listening for keyboard hotkeys."""
        if self.listener and self.listener.running:
            logger.info("Stopping keyboard listener")
            self.listener.stop()

    @staticmethod
    def key_name(key):
        """Return a lower-case name for a pynput key, or None."""
        name = getattr(key, 'name', None)
        if name:
            return name.lower()
        char = getattr(key, 'char', None)
        if char:
            return char.lower()
        return None

    def _on_press(self, key):
        """Handle key press events.

        Args:
            key: The key that was pressed
        """
        try:
            name = self.key_name(key)
            if name == self.listening_key:
                self.toggle_listening()
            elif name == self.mode_key:
                self.switch_mode()
        except Exception as e:
            logger.error(f"Error in key press handler: {e}")

    def toggle_listening(self):
        """Toggle listening, but only once the model and microphone are ready."""
        if not self.state.ready.is_set() or self.state.init_error is not None:
            logger.info("Not ready yet, ignoring listening toggle")
            return
        self.state.toggle_enabled()

    def switch_mode(self):
        mode = self.state.toggle_mode()
        notify_status(self.state.status, f"Mode: {mode.value}")
