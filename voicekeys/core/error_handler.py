#!/usr/bin/env python3
"""
Error handling utilities for the voice keyboard.
Provides the exception types and consistent error handling patterns across modules.
"""

import logging
import traceback
from typing import Any, Callable, Optional

logger = logging.getLogger("error-handler")


class VoiceKeysError(Exception):
    """Base class for voice keyboard errors."""


class RecognizerInitError(VoiceKeysError):
    """The speech recognition model could not be loaded."""


class AudioInitError(VoiceKeysError):
    """The audio input device could not be opened."""


class UnknownTriggerError(VoiceKeysError, KeyError):
    """A trigger outside the fixed vocabulary was fired."""


def handle_error(
    error: Exception,
    logger: logging.Logger,
    context: str = "",
    notification_text: Optional[str] = None,
) -> None:
    """
    Standardized error handling across the application.

    Args:
        error: The exception that was raised
        logger: The module-specific logger to use
        context: Optional context about where the error occurred
        notification_text: Text to surface through the status notifier (if None, nothing is shown)
    """
    error_prefix = f"[{context}] " if context else ""
    logger.error(f"{error_prefix}Error: {error}")
    logger.error(traceback.format_exc())

    if notification_text:
        try:
            from voicekeys.ui.status import notify_error

            notify_error(notification_text)
        except Exception as e:
            logger.error(f"Failed to show error notification: {e}")


def safe_execute(
    func: Callable[[], Any],
    logger: logging.Logger,
    context: str = "",
    notification_text: Optional[str] = None,
    default: Any = None,
) -> Any:
    """
    Call ``func`` and route any exception through handle_error.

    Args:
        func: Zero-argument callable to run
        logger: The module-specific logger to use
        context: Where the call happens, used as the log prefix
        notification_text: Surfaced through the status notifier on failure
        default: Value returned when ``func`` raises

    Returns:
        The result of ``func``, or ``default`` on error
    """
    try:
        return func()
    except Exception as e:
        handle_error(e, logger, context=context, notification_text=notification_text)
        return default
