#!/usr/bin/env python3
"""
Voice keyboard daemon.
Wires audio capture, Vosk recognition, the mode dispatcher and key emission
together and keeps them running until interrupted.
"""

import argparse
import logging
import signal
import sys
import time

from voicekeys.audio.audio_capture import AudioCapture
from voicekeys.audio.recognizer import SpeechRecognizer
from voicekeys.config.config import config
from voicekeys.core.dispatcher import ModeDispatcher
from voicekeys.core.error_handler import safe_execute
from voicekeys.core.lexicon import AutocorrectLexicon
from voicekeys.core.logging_config import configure_logging
from voicekeys.core.pipeline import SpeechPipeline
from voicekeys.core.state_manager import Mode, StateManager, Status
from voicekeys.ui.status import notify_status
from voicekeys.utils.emitter import ActionEmitter
from voicekeys.utils.hotkey_manager import HotkeyManager

logger = logging.getLogger('voicekeys')


class VoiceKeysDaemon:
    """Main daemon class for the voice keyboard."""

    def __init__(self, model_path=None, mode=None, enabled=None):
        self.state = StateManager(
            mode=mode or config.get('START_MODE', 'command'),
            enabled=config.get('START_ENABLED', False) if enabled is None else enabled,
        )
        self.state.on_status_change(self._on_status_change)

        self.recognizer = SpeechRecognizer(
            model_path or config.get('MODEL_PATH'),
            sample_rate=config.get('RATE', 16000),
        )
        self.capture = AudioCapture(
            rate=config.get('RATE', 16000),
            channels=config.get('CHANNELS', 1),
            chunk_bytes=config.get('CHUNK_BYTES', 2048),
        )
        self.emitter = ActionEmitter()
        self.dispatcher = ModeDispatcher(
            self.state, AutocorrectLexicon.with_extra(config.get('AUTOCORRECT'))
        )
        self.pipeline = SpeechPipeline(
            self.state, self.recognizer, self.capture, self.emitter, self.dispatcher
        )
        self.hotkeys = HotkeyManager(
            self.state,
            listening_key=config.get('TOGGLE_LISTENING_KEY', 'f8'),
            mode_key=config.get('TOGGLE_MODE_KEY', 'f9'),
        )
        self.running = False

    def start(self):
        """Start the daemon and block until it stops."""
        logger.info("Starting voice keyboard...")
        self.running = True

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        notify_status(Status.LOADING, "loading model...")
        self.hotkeys.start()
        self.pipeline.start(ready_timeout=config.get('READY_TIMEOUT'))

        banner_shown = False
        while self.running:
            if self.state.init_error is not None:
                logger.error("Initialization failed, exiting")
                self.stop()
                return 1
            if not banner_shown and self.state.ready.is_set():
                self._show_startup_banner()
                banner_shown = True
            time.sleep(0.5)
        return 0

    def stop(self):
        """Stop the daemon."""
        if not self.running:
            return
        logger.info("Shutting down voice keyboard...")
        self.running = False
        safe_execute(self.pipeline.stop, logger, context="Stopping pipeline")
        safe_execute(self.hotkeys.stop, logger, context="Stopping hotkeys")
        logger.info("Voice keyboard stopped.")

    def _signal_handler(self, sig, frame):
        logger.info(f"Received signal {sig}")
        self.stop()

    def _on_status_change(self, status):
        notify_status(status, f"mode: {self.state.mode.value}")

    def _show_startup_banner(self):
        logger.info("=== Voice Keyboard Ready ===")
        logger.info(f"Mode: {self.state.mode.value}")
        logger.info(f"{self.hotkeys.listening_key.upper()}: toggle listening")
        logger.info(f"{self.hotkeys.mode_key.upper()}: switch command/dictation mode")
        logger.info("COMMAND MODE: 'jump' taps space, 'shift' taps shift, 'sprint' taps ctrl")
        logger.info("DICTATION MODE: speech is typed; say 'backspace' to delete a word")
        logger.info("Press Ctrl+C to exit")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Voice keyboard daemon")
    parser.add_argument("--model", help="Path to the Vosk model directory")
    parser.add_argument(
        "--mode", choices=[m.value for m in Mode], help="Starting mode"
    )
    parser.add_argument(
        "--enabled", action="store_true", default=None,
        help="Start listening as soon as the model is loaded",
    )
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(log_level=args.log_level)
    daemon = VoiceKeysDaemon(model_path=args.model, mode=args.mode, enabled=args.enabled)
    return daemon.start()


if __name__ == "__main__":
    sys.exit(main())
