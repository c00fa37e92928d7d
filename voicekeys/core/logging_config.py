#!/usr/bin/env python3
"""
Centralized logging configuration for the voice keyboard.
Configures consistent logging across all modules.
"""

import os
import logging
import logging.handlers
from typing import Optional

from voicekeys.config.config import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(log_level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Args:
        log_level: Override log level from config
        log_file: Override log file from config
    """
    if log_level is None:
        log_level = config.get('LOG_LEVEL', 'INFO')

    if log_file is None:
        log_file = config.get('LOG_FILE', 'voicekeys.log')

    log_to_file = config.get('LOG_TO_FILE', False)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()]
    )

    if log_to_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logging.getLogger().addHandler(file_handler)
            logging.info(f"Logging to file: {os.path.abspath(log_file)}")
        except Exception as e:
            logging.error(f"Failed to set up file logging: {e}")

    # The pipeline loggers run once per audio chunk, so they get their own knobs
    configure_module_loggers({
        'dispatcher': config.get('DISPATCHER_LOG_LEVEL', log_level),
        'pipeline': config.get('PIPELINE_LOG_LEVEL', log_level),
        'emitter': config.get('EMITTER_LOG_LEVEL', log_level),
        'recognizer': config.get('RECOGNIZER_LOG_LEVEL', log_level),
        'audio-capture': config.get('AUDIO_CAPTURE_LOG_LEVEL', log_level),
        'hotkeys': config.get('HOTKEYS_LOG_LEVEL', log_level),
        'state-manager': config.get('STATE_MANAGER_LOG_LEVEL', log_level),
    })

    logging.info(f"Logging initialized at level: {log_level}")


def configure_module_loggers(module_levels):
    """Configure log levels for specific modules."""
    for module, level in module_levels.items():
        numeric_level = getattr(logging, str(level).upper(), None)
        if isinstance(numeric_level, int):
            logging.getLogger(module).setLevel(numeric_level)
