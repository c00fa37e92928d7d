#!/usr/bin/env python3
"""
Status reporting for the voice keyboard.
Surfaces readiness, listening state and fatal errors to the user through the log.
"""

import logging
import threading
import time
from typing import Optional

logger = logging.getLogger('status')

_last_status = {}
_status_lock = threading.Lock()


def notify_status(status: str, message: Optional[str] = None) -> None:
    """
    Report a status change.

    Args:
        status: Short status label, e.g. READY or LISTENING
        message: Optional detail shown next to the label
    """
    status = getattr(status, 'value', status)
    text = f"Status: {status}" + (f" - {message}" if message else "")
    with _status_lock:
        _last_status.update({'status': status, 'message': message, 'timestamp': time.time()})
    logger.info(text)


def notify_error(message: str) -> None:
    """Report an error the user needs to see."""
    with _status_lock:
        _last_status.update({'status': 'ERROR', 'message': message, 'timestamp': time.time()})
    logger.error(f"Status: ERROR - {message}")


def last_status() -> dict:
    """Return the most recently reported status."""
    with _status_lock:
        return dict(_last_status)
