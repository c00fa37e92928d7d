#!/usr/bin/env python3
"""
Result extraction for recognizer output.

Vosk hands back a small JSON document per audio chunk: ``{"text": ...}`` once an
utterance is final, ``{"partial": ...}`` while it is still being decoded. This
module turns either shape into a ``RecognitionFragment``. Nothing here raises:
a document that cannot be read simply means no speech this cycle.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Union

logger = logging.getLogger("extractor")

FINAL_FIELD = "text"
PARTIAL_FIELD = "partial"


@dataclass(frozen=True)
class RecognitionFragment:
    """One decoded text result from the recognizer."""

    text: str
    is_final: bool


@dataclass(frozen=True)
class FinalResult:
    text: str


@dataclass(frozen=True)
class PartialResult:
    text: str


@dataclass(frozen=True)
class EmptyResult:
    text: str = ""


RecognitionResult = Union[FinalResult, PartialResult, EmptyResult]


def _decode(document: Any) -> Any:
    if isinstance(document, (bytes, bytearray)):
        document = document.decode("utf-8", errors="replace")
    if isinstance(document, str):
        return json.loads(document)
    return document


def _field(payload: dict, name: str) -> str:
    value = payload.get(name)
    if isinstance(value, str):
        return value.strip()
    return ""


def parse_result(document: Any) -> RecognitionResult:
    """
    Parse a recognizer result document.

    A non-empty ``text`` field takes precedence over ``partial``.

    Args:
        document: JSON string, bytes or already decoded dict

    Returns:
        FinalResult, PartialResult or EmptyResult
    """
    try:
        payload = _decode(document)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Unreadable recognizer document: {e}")
        return EmptyResult()

    if not isinstance(payload, dict):
        return EmptyResult()

    text = _field(payload, FINAL_FIELD)
    if text:
        return FinalResult(text)

    partial = _field(payload, PARTIAL_FIELD)
    if partial:
        return PartialResult(partial)

    return EmptyResult()


def extract_text(document: Any, is_final: bool) -> RecognitionFragment:
    """
    Extract the decoded text from a recognizer document.

    Args:
        document: Result document returned by the recognizer
        is_final: Whether the recognizer reported the utterance as complete

    Returns:
        RecognitionFragment; its text is empty when nothing could be read
    """
    result = parse_result(document)
    return RecognitionFragment(text=result.text, is_final=is_final)
