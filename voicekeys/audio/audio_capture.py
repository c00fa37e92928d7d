#!/usr/bin/env python3
"""
Audio capture module for the voice keyboard.
Reads raw 16 kHz mono 16-bit PCM from the microphone in small chunks.
"""

import logging
from typing import Optional

from voicekeys.core.error_handler import AudioInitError

logger = logging.getLogger('audio-capture')

SAMPLE_WIDTH = 2  # 16-bit


class AudioCapture:
    """Blocking, pull-based microphone reader."""

    def __init__(self, rate: int = 16000, channels: int = 1, chunk_bytes: int = 2048,
                 device_index: Optional[int] = None):
        self.rate = rate
        self.channels = channels
        self.chunk_bytes = chunk_bytes
        self.device_index = device_index
        self.frames_per_chunk = max(1, chunk_bytes // (SAMPLE_WIDTH * channels))
        self.p = None
        self.stream = None

    @property
    def is_open(self) -> bool:
        return self.stream is not None

    def open(self) -> None:
        """
        Open the input stream.

        Raises:
            AudioInitError: If the device cannot be opened
        """
        if self.stream is not None:
            return
        try:
            import pyaudio

            self.p = pyaudio.PyAudio()
            self.stream = self.p.open(
                format=pyaudio.paInt16,
                channels=self.channels,
                rate=self.rate,
                input=True,
                input_device_index=self.device_index,
                frames_per_buffer=self.frames_per_chunk,
            )
        except Exception as e:
            self.close()
            raise AudioInitError(f"Could not open audio input: {e}") from e
        logger.info(
            f"Audio input open: {self.rate} Hz, {self.channels} channel(s), "
            f"{self.chunk_bytes} bytes per chunk"
        )

    def read(self) -> bytes:
        """Block until the next chunk is available and return it."""
        if self.stream is None:
            raise AudioInitError("Audio input is not open")
        return self.stream.read(self.frames_per_chunk, exception_on_overflow=False)

    def close(self) -> None:
        """Stop the stream and release the device."""
        if self.stream is not None:
            try:
                self.stream.stop_stream()
                self.stream.close()
            except Exception as e:
                logger.error(f"Error closing audio stream: {e}")
            self.stream = None
        if self.p is not None:
            try:
                self.p.terminate()
            except Exception as e:
                logger.error(f"Error terminating PyAudio: {e}")
            self.p = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
