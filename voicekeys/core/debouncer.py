#!/usr/bin/env python3
"""
Trigger debouncing for command mode.
Remembers which triggers already fired during the current utterance.
"""

import logging
import threading
from typing import FrozenSet, Iterable

from voicekeys.core.error_handler import UnknownTriggerError

logger = logging.getLogger("debouncer")

TRIGGER_VOCABULARY = ("jump", "shift", "sprint")


class TriggerDebouncer:
    """Lets each trigger fire at most once until the next reset."""

    def __init__(self, vocabulary: Iterable[str] = TRIGGER_VOCABULARY):
        self.vocabulary = frozenset(vocabulary)
        self._fired = set()
        self._lock = threading.Lock()

    def fire(self, identifier: str) -> bool:
        """
        Record a trigger.

        Args:
            identifier: Trigger name from the vocabulary

        Returns:
            bool: True only the first time since the last reset
        """
        if identifier not in self.vocabulary:
            raise UnknownTriggerError(identifier)

        with self._lock:
            if identifier in self._fired:
                return False
            self._fired.add(identifier)

        logger.debug(f"Trigger fired: {identifier}")
        return True

    def reset(self) -> None:
        """Forget every fired trigger."""
        with self._lock:
            self._fired.clear()

    @property
    def fired(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._fired)

    def __contains__(self, identifier):
        with self._lock:
            return identifier in self._fired

    def __len__(self):
        with self._lock:
            return len(self._fired)
