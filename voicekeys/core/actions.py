#!/usr/bin/env python3
"""
Key actions produced by the dispatcher.

Keys are symbolic: either a named key (``space``, ``shift``, ``ctrl``,
``backspace``) or a single printable character. The emitter resolves them
against the keyboard backend.
"""

import string
from dataclasses import dataclass
from typing import List, Optional, Union

SPACE = "space"
SHIFT = "shift"
CTRL = "ctrl"
BACKSPACE = "backspace"

NAMED_KEYS = frozenset({SPACE, SHIFT, CTRL, BACKSPACE})

_TYPEABLE = frozenset(
    c for c in string.printable if c not in string.whitespace
)


@dataclass(frozen=True)
class Tap:
    """Press then release a single key."""

    key: str


@dataclass(frozen=True)
class Chord:
    """Hold ``modifier`` while tapping ``key``."""

    modifier: str
    key: str


KeyAction = Union[Tap, Chord]


def key_for_char(char: str) -> Optional[str]:
    """
    Map a character to the key that types it.

    Returns:
        The symbolic key, or None for characters with no key
    """
    if char == " ":
        return SPACE
    if char in _TYPEABLE:
        return char
    return None


def type_text_actions(text: str) -> List[Tap]:
    """Taps that type ``text``, skipping characters without a key."""
    taps = []
    for char in text:
        key = key_for_char(char)
        if key is not None:
            taps.append(Tap(key))
    return taps
