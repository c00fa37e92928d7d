#!/usr/bin/env python3
"""
Speech recognition for the voice keyboard.
Wraps a Vosk model with one grammar-restricted recognizer for command mode and
one unrestricted recognizer for dictation.
"""

import json
import logging
from typing import Dict, List, Optional

from voicekeys.core.error_handler import RecognizerInitError
from voicekeys.core.extractor import RecognitionFragment, extract_text
from voicekeys.core.state_manager import Mode

logger = logging.getLogger('recognizer')

# Trigger words plus the catch-all, so Vosk only spends effort on these
COMMAND_GRAMMAR = ["jump", "shift", "sprint", "backspace", "j", "s", "c", "[unk]"]


class SpeechRecognizer:
    """Feeds audio chunks to the recognizer for the active mode."""

    def __init__(self, model_path: str, sample_rate: int = 16000,
                 grammar: Optional[List[str]] = None):
        self.model_path = model_path
        self.sample_rate = sample_rate
        self.grammar = list(COMMAND_GRAMMAR if grammar is None else grammar)
        self.model = None
        self._recognizers: Dict[Mode, object] = {}

    @property
    def loaded(self) -> bool:
        return bool(self._recognizers)

    def load(self) -> None:
        """
        Load the model and build both recognizers.

        Raises:
            RecognizerInitError: If Vosk or the model cannot be loaded
        """
        logger.info(f"Loading Vosk model from {self.model_path}")
        try:
            import vosk

            vosk.SetLogLevel(-1)
            self.model = vosk.Model(self.model_path)
            self._recognizers = {
                Mode.COMMAND: vosk.KaldiRecognizer(
                    self.model, self.sample_rate, json.dumps(self.grammar)
                ),
                Mode.DICTATION: vosk.KaldiRecognizer(self.model, self.sample_rate),
            }
        except Exception as e:
            self._recognizers = {}
            raise RecognizerInitError(
                f"Could not load speech model '{self.model_path}': {e}"
            ) from e
        logger.info("Vosk model loaded")

    def _recognizer(self, mode: Mode):
        try:
            return self._recognizers[mode]
        except KeyError:
            raise RecognizerInitError("Recognizer used before load()") from None

    def accept(self, chunk: bytes, mode: Mode) -> RecognitionFragment:
        """
        Feed one audio chunk.

        Args:
            chunk: Raw 16-bit mono PCM
            mode: Selects the recognizer

        Returns:
            RecognitionFragment with final or partial text
        """
        recognizer = self._recognizer(mode)
        if recognizer.AcceptWaveform(chunk):
            return extract_text(recognizer.Result(), is_final=True)
        return extract_text(recognizer.PartialResult(), is_final=False)

    def reset(self, mode: Mode) -> None:
        """Discard whatever the mode's recognizer has accumulated."""
        self._recognizer(mode).Reset()
        logger.debug(f"{mode.value} recognizer reset")
