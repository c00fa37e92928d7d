#!/usr/bin/env python3
"""
Autocorrection lexicon for dictation.
Maps commonly misheard words to the intended word.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

DEFAULT_CORRECTIONS = {
    "sea": "see",
    "there": "their",
    "to": "too",
    "four": "for",
    "read": "red",
}


class AutocorrectLexicon:
    """Static word replacement table, fixed at construction."""

    def __init__(self, corrections: Optional[Mapping[str, str]] = None):
        entries = dict(DEFAULT_CORRECTIONS if corrections is None else corrections)
        self._entries = MappingProxyType(
            {str(key).lower(): str(value) for key, value in entries.items()}
        )

    @classmethod
    def with_extra(cls, extra: Optional[Mapping[str, str]] = None) -> "AutocorrectLexicon":
        """Build a lexicon from the defaults plus configured entries."""
        merged = dict(DEFAULT_CORRECTIONS)
        merged.update(extra or {})
        return cls(merged)

    def correct(self, word: str) -> str:
        """Return the replacement for ``word``, or ``word`` itself when unmapped."""
        return self._entries.get(word.lower(), word)

    def correct_words(self, text: str) -> List[str]:
        """Correct each whitespace-separated word, keeping order."""
        return [self.correct(word) for word in text.split()]

    def correct_text(self, text: str) -> str:
        """Correct ``text``; every resulting word is followed by a single space."""
        return "".join(f"{word} " for word in self.correct_words(text))

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def __contains__(self, word):
        return isinstance(word, str) and word.lower() in self._entries

    def __len__(self):
        return len(self._entries)
