#!/usr/bin/env python3
"""
Voice Keys - low-latency voice keyboard driven by Vosk speech recognition.

Two modes share one audio stream:
- command: trigger words ("jump", "shift", "sprint") tap keys as soon as they
  appear in a partial result, once per utterance
- dictation: finalized speech is autocorrected and typed; saying "backspace"
  deletes the previous word

Modules:
- core: Dispatcher, debouncer, lexicon, shared state, pipeline, error handling
- audio: Microphone capture and the Vosk recognizer
- utils: Key emission and hotkeys
- ui: Status reporting
- config: Configuration management
- tests: Test modules
"""

# Version information
__version__ = "1.0.0"
__author__ = "Voice Keys Team"
