#!/usr/bin/env python3
"""
Unit tests for the state manager module.
Tests mode and listening transitions, readiness and callbacks.
"""

import threading
import unittest
from unittest.mock import patch, MagicMock

from voicekeys.core.state_manager import Mode, StateManager, Status


class TestStateManager(unittest.TestCase):
    """Test state management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.state_manager = StateManager()

    def test_initial_state(self):
        self.assertIs(self.state_manager.mode, Mode.COMMAND)
        self.assertFalse(self.state_manager.enabled)
        self.assertEqual(self.state_manager.status, Status.LOADING)
        self.assertFalse(self.state_manager.ready.is_set())
        self.assertEqual(self.state_manager.snapshot(), (Mode.COMMAND, False))

    def test_mode_parse(self):
        self.assertIs(Mode.parse("Dictation"), Mode.DICTATION)
        self.assertIs(Mode.parse(Mode.COMMAND), Mode.COMMAND)
        with self.assertRaises(ValueError):
            Mode.parse("gaming")

    def test_toggle_mode(self):
        self.assertIs(self.state_manager.toggle_mode(), Mode.DICTATION)
        self.assertIs(self.state_manager.mode, Mode.DICTATION)
        self.assertIs(self.state_manager.toggle_mode(), Mode.COMMAND)
        self.assertIs(self.state_manager.mode, Mode.COMMAND)

    def test_mode_switch_resets_triggers(self):
        self.state_manager.debouncer.fire("jump")
        self.assertTrue(self.state_manager.set_mode(Mode.DICTATION))
        self.assertEqual(len(self.state_manager.debouncer), 0)

    def test_setting_same_mode_is_noop(self):
        self.state_manager.debouncer.fire("jump")
        self.assertFalse(self.state_manager.set_mode("command"))
        self.assertIn("jump", self.state_manager.debouncer)

    def test_disable_resets_triggers(self):
        self.state_manager.set_enabled(True)
        self.state_manager.debouncer.fire("shift")
        self.assertTrue(self.state_manager.set_enabled(False))
        self.assertEqual(len(self.state_manager.debouncer), 0)

    def test_toggle_enabled(self):
        self.assertTrue(self.state_manager.toggle_enabled())
        self.assertTrue(self.state_manager.enabled)
        self.assertFalse(self.state_manager.toggle_enabled())
        self.assertFalse(self.state_manager.set_enabled(False))

    def test_ready_and_status(self):
        self.state_manager.mark_ready()
        self.assertTrue(self.state_manager.wait_until_ready(0))
        self.assertEqual(self.state_manager.status, Status.READY)

        self.state_manager.set_enabled(True)
        self.assertEqual(self.state_manager.status, Status.LISTENING)
        self.state_manager.set_enabled(False)
        self.assertEqual(self.state_manager.status, Status.READY)

    def test_enabled_before_ready_keeps_loading_status(self):
        self.state_manager.set_enabled(True)
        self.assertEqual(self.state_manager.status, Status.LOADING)
        self.state_manager.mark_ready()
        self.assertEqual(self.state_manager.status, Status.LISTENING)

    def test_mark_failed(self):
        error = RuntimeError("no model")
        self.state_manager.set_enabled(True)
        self.state_manager.mark_failed(error)
        self.assertFalse(self.state_manager.wait_until_ready(0))
        self.assertIs(self.state_manager.init_error, error)
        self.assertEqual(self.state_manager.status, Status.FAILED)
        self.assertFalse(self.state_manager.enabled)

    def test_wait_until_ready_timeout(self):
        self.assertFalse(self.state_manager.wait_until_ready(0.01))

    def test_wait_until_ready_across_threads(self):
        threading.Timer(0.01, self.state_manager.mark_ready).start()
        self.assertTrue(self.state_manager.wait_until_ready(2.0))

    def test_callbacks(self):
        mode_cb = MagicMock()
        enabled_cb = MagicMock()
        status_cb = MagicMock()
        self.state_manager.on_mode_change(mode_cb)
        self.state_manager.on_mode_change(mode_cb)  # duplicate ignored
        self.state_manager.on_enabled_change(enabled_cb)
        self.state_manager.on_status_change(status_cb)

        self.state_manager.toggle_mode()
        mode_cb.assert_called_once_with(Mode.DICTATION)

        self.state_manager.mark_ready()
        status_cb.assert_called_with(Status.READY)

        self.state_manager.set_enabled(True)
        enabled_cb.assert_called_once_with(True)
        status_cb.assert_called_with(Status.LISTENING)

    def test_callback_error_handling(self):
        bad_callback = MagicMock(side_effect=Exception("Test exception"))
        self.state_manager.on_mode_change(bad_callback)

        with patch('logging.Logger.error') as mock_error:
            self.state_manager.toggle_mode()
            mock_error.assert_called_with("Error in mode callback: Test exception")

        self.assertIs(self.state_manager.mode, Mode.DICTATION)

    def _snapshot_reader(self):
        """Return a callback that reads the state from another thread."""
        finished = []

        def callback(value):
            reader = threading.Thread(target=lambda: finished.append(self.state_manager.snapshot()))
            reader.start()
            reader.join(1.0)

        return callback, finished

    def test_toggle_mode_callbacks_run_outside_lock(self):
        callback, finished = self._snapshot_reader()
        self.state_manager.on_mode_change(callback)

        self.state_manager.toggle_mode()

        self.assertEqual(finished, [(Mode.DICTATION, False)])

    def test_toggle_enabled_callbacks_run_outside_lock(self):
        callback, finished = self._snapshot_reader()
        self.state_manager.on_enabled_change(callback)

        self.state_manager.toggle_enabled()

        self.assertEqual(finished, [(Mode.COMMAND, True)])

    def test_concurrent_toggles_are_consistent(self):
        def flip():
            for _ in range(100):
                self.state_manager.toggle_mode()

        threads = [threading.Thread(target=flip) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # 400 toggles: back where we started
        self.assertIs(self.state_manager.mode, Mode.COMMAND)


if __name__ == '__main__':
    unittest.main()
