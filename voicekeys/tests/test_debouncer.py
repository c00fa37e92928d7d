#!/usr/bin/env python3
"""
Unit tests for the trigger debouncer.
"""

import threading
import unittest

import pytest

from voicekeys.core.debouncer import TRIGGER_VOCABULARY, TriggerDebouncer
from voicekeys.core.error_handler import UnknownTriggerError


class TestTriggerDebouncer(unittest.TestCase):
    """Test once-per-utterance firing."""

    def setUp(self):
        self.debouncer = TriggerDebouncer()

    def test_fires_once_until_reset(self):
        for trigger in TRIGGER_VOCABULARY:
            with self.subTest(trigger=trigger):
                self.assertTrue(self.debouncer.fire(trigger))
                for _ in range(10):
                    self.assertFalse(self.debouncer.fire(trigger))

    def test_reset_allows_firing_again(self):
        self.assertTrue(self.debouncer.fire("jump"))
        self.debouncer.reset()
        self.assertTrue(self.debouncer.fire("jump"))

    def test_reset_on_empty_set(self):
        self.debouncer.reset()
        self.assertEqual(len(self.debouncer), 0)

    def test_triggers_are_independent(self):
        self.assertTrue(self.debouncer.fire("jump"))
        self.assertTrue(self.debouncer.fire("shift"))
        self.assertFalse(self.debouncer.fire("jump"))
        self.assertEqual(self.debouncer.fired, frozenset({"jump", "shift"}))
        self.assertIn("shift", self.debouncer)
        self.assertNotIn("sprint", self.debouncer)

    def test_never_exceeds_vocabulary(self):
        for _ in range(5):
            for trigger in TRIGGER_VOCABULARY:
                self.debouncer.fire(trigger)
        self.assertEqual(len(self.debouncer), len(TRIGGER_VOCABULARY))

    def test_unknown_trigger_rejected(self):
        with self.assertRaises(UnknownTriggerError):
            self.debouncer.fire("crouch")
        self.assertEqual(len(self.debouncer), 0)


def test_concurrent_fire_returns_true_once():
    debouncer = TriggerDebouncer()
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(debouncer.fire("sprint"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1


@pytest.mark.parametrize("vocabulary", [("a",), ("jump", "duck")])
def test_custom_vocabulary(vocabulary):
    debouncer = TriggerDebouncer(vocabulary)
    assert all(debouncer.fire(word) for word in vocabulary)
    with pytest.raises(UnknownTriggerError):
        debouncer.fire("sprint")


if __name__ == '__main__':
    unittest.main()
