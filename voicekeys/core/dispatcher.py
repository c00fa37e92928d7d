#!/usr/bin/env python3
"""
Mode dispatcher for the voice keyboard.

Turns one recognition fragment into the ordered key actions for the active
mode. Command triggers and the dictation backspace override are checked on
every fragment, partial or final, so a key goes out as soon as the word shows
up in a partial hypothesis. Dictated text is only typed from final results.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from voicekeys.core.actions import (
    BACKSPACE,
    CTRL,
    SHIFT,
    SPACE,
    Chord,
    KeyAction,
    Tap,
    type_text_actions,
)
from voicekeys.core.error_handler import handle_error
from voicekeys.core.extractor import RecognitionFragment
from voicekeys.core.lexicon import AutocorrectLexicon
from voicekeys.core.state_manager import Mode, StateManager

logger = logging.getLogger("dispatcher")

BACKSPACE_TOKEN = "backspace"


@dataclass(frozen=True)
class Trigger:
    """A command word, its short alias and the key it taps."""

    name: str
    alias: str
    key: str

    def matches(self, condensed: str) -> bool:
        # Aliases are single letters, so any word containing one will match.
        return self.name in condensed or self.alias in condensed


TRIGGERS = (
    Trigger("jump", "j", SPACE),
    Trigger("shift", "s", SHIFT),
    Trigger("sprint", "c", CTRL),
)

DELETE_WORD = Chord(CTRL, BACKSPACE)


@dataclass(frozen=True)
class Dispatch:
    """Outcome of dispatching one fragment."""

    actions: Tuple[KeyAction, ...] = ()
    reset_recognizer: bool = False


NOTHING = Dispatch()


def condense(text: str) -> str:
    """Lower-case ``text`` and drop all whitespace."""
    return "".join(text.lower().split())


class ModeDispatcher:
    """Decides which key actions a fragment produces."""

    def __init__(self, state: StateManager, lexicon: Optional[AutocorrectLexicon] = None):
        self.state = state
        self.lexicon = lexicon if lexicon is not None else AutocorrectLexicon()

    def dispatch(self, fragment: RecognitionFragment, mode: Optional[Mode] = None) -> Dispatch:
        """
        Dispatch a fragment.

        Args:
            fragment: Decoded recognizer output
            mode: Mode to dispatch under; read from the shared state when omitted

        Returns:
            Dispatch with the actions to emit
        """
        if not fragment.text:
            return NOTHING

        if mode is None:
            mode = self.state.mode

        try:
            result = self._dispatch(fragment, mode)
        except Exception as e:
            handle_error(e, logger, context=f"Dispatching '{fragment.text}'")
            result = NOTHING

        if fragment.is_final and not result.reset_recognizer:
            self.state.reset_triggers()

        return result

    def _dispatch(self, fragment: RecognitionFragment, mode: Mode) -> Dispatch:
        condensed = condense(fragment.text)

        if mode is Mode.COMMAND:
            return Dispatch(actions=self._command_actions(condensed))

        if condensed.endswith(BACKSPACE_TOKEN):
            logger.debug("Backspace override")
            return Dispatch(actions=(DELETE_WORD,), reset_recognizer=True)

        if fragment.is_final:
            return Dispatch(actions=self._dictation_actions(fragment.text))

        return NOTHING

    def _command_actions(self, condensed: str) -> Tuple[KeyAction, ...]:
        actions = []
        for trigger in TRIGGERS:
            if trigger.matches(condensed) and self.state.debouncer.fire(trigger.name):
                logger.info(f"Command trigger: {trigger.name}")
                actions.append(Tap(trigger.key))
        return tuple(actions)

    def _dictation_actions(self, text: str) -> Tuple[KeyAction, ...]:
        typed = self.lexicon.correct_text(text.lower())
        logger.info(f"Dictating: '{typed.rstrip()}'")
        return tuple(type_text_actions(typed))
