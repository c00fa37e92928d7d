#!/usr/bin/env python3
"""
Speech pipeline for the voice keyboard.

One worker thread reads audio chunks and pushes each one through recognizer,
dispatcher and emitter before reading the next, so fragments are handled in
order. A separate initializer thread loads the model and opens the microphone;
the worker waits for it and never starts if initialization failed.
"""

import logging
import threading
from typing import Optional

from voicekeys.core.dispatcher import Dispatch, ModeDispatcher, NOTHING
from voicekeys.core.error_handler import handle_error, safe_execute
from voicekeys.core.state_manager import StateManager

logger = logging.getLogger('pipeline')


class SpeechPipeline:
    """Drives audio capture -> recognition -> dispatch -> key emission."""

    def __init__(self, state: StateManager, recognizer, capture, emitter,
                 dispatcher: Optional[ModeDispatcher] = None):
        self.state = state
        self.recognizer = recognizer
        self.capture = capture
        self.emitter = emitter
        self.dispatcher = dispatcher if dispatcher is not None else ModeDispatcher(state)

        self.running = False
        self.init_thread = None
        self.thread = None

    def initialize(self) -> bool:
        """
        Load the recognizer and open the audio device.

        Returns:
            bool: True if both succeeded
        """
        try:
            self.recognizer.load()
            self.capture.open()
        except Exception as e:
            handle_error(e, logger, context="Initialization",
                         notification_text=f"Initialization failed: {e}")
            self.state.mark_failed(e)
            return False

        self.state.mark_ready()
        return True

    def start(self, ready_timeout: Optional[float] = None):
        """Start the initializer and worker threads."""
        if self.running:
            logger.debug("Pipeline already running")
            return

        logger.info("Starting speech pipeline...")
        self.running = True

        self.init_thread = threading.Thread(target=self.initialize, name="voicekeys-init")
        self.init_thread.daemon = True
        self.init_thread.start()

        self.thread = threading.Thread(
            target=self._worker, args=(ready_timeout,), name="voicekeys-pipeline"
        )
        self.thread.daemon = True
        self.thread.start()

    def stop(self, timeout: float = 2.0):
        """Stop reading audio; the chunk being processed finishes first."""
        if not self.running:
            return

        logger.info("Stopping speech pipeline...")
        self.running = False

        if self.thread and self.thread is not threading.current_thread():
            self.thread.join(timeout)

        safe_execute(self.capture.close, logger, context="Closing audio input")

    def _worker(self, ready_timeout: Optional[float]):
        logger.debug("Pipeline worker waiting for initialization...")
        if not self.state.wait_until_ready(ready_timeout):
            if self.state.init_error is None:
                logger.error("Timed out waiting for initialization")
            logger.error("Pipeline not started")
            self.running = False
            return

        logger.info("Pipeline ready and consuming audio")
        self.run()

    def run(self):
        """Read and process chunks until stopped."""
        while self.running:
            try:
                chunk = self.capture.read()
            except Exception as e:
                if not self.running:
                    break
                handle_error(e, logger, context="Audio read")
                continue
            self.process_chunk(chunk)

    def process_chunk(self, chunk: bytes) -> Dispatch:
        """
        Process one audio chunk to completion.

        Chunks read while listening is disabled are dropped. Errors are logged
        and never stop the next chunk from being processed.

        Returns:
            Dispatch describing what was emitted
        """
        mode, enabled = self.state.snapshot()
        if not enabled or not chunk:
            return NOTHING

        try:
            fragment = self.recognizer.accept(chunk, mode)
            result = self.dispatcher.dispatch(fragment, mode)
            if result.reset_recognizer:
                self.recognizer.reset(mode)
            if result.actions:
                self.emitter.emit(result.actions)
            return result
        except Exception as e:
            handle_error(e, logger, context="Processing audio chunk")
            return NOTHING
