#!/usr/bin/env python3
"""
Configuration management for the voice keyboard.
Settings come from built-in defaults, then the environment (.env included),
then JSON settings files; later sources win.
"""

import os
import json
import logging
from typing import Any, Dict
from dotenv import load_dotenv

logger = logging.getLogger("config")

DEFAULTS = {
    # Recognition model
    "MODEL_PATH": "vosk-model-en-us-0.22",
    # Audio settings (16 kHz mono, 16-bit signed)
    "RATE": 16000,
    "CHANNELS": 1,
    "CHUNK_BYTES": 2048,
    # Startup state
    "START_MODE": "command",
    "START_ENABLED": False,
    "READY_TIMEOUT": None,
    # Extra autocorrections merged over the built-in lexicon
    "AUTOCORRECT": {},
    # Presentation hotkeys
    "TOGGLE_LISTENING_KEY": "f8",
    "TOGGLE_MODE_KEY": "f9",
    # Logging
    "LOG_LEVEL": "INFO",
    "LOG_TO_FILE": False,
    "LOG_FILE": "voicekeys.log",
}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_mapping(value: Any) -> Dict[str, str]:
    """Decode a word-to-word table; anything but a JSON object is rejected."""
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return {str(word): str(replacement) for word, replacement in value.items()}


# Environment variable -> config key, or (config key, converter)
ENV_MAPPING = {
    "VOSK_MODEL_PATH": "MODEL_PATH",
    "MODEL_PATH": "MODEL_PATH",
    "RATE": ("RATE", int),
    "CHANNELS": ("CHANNELS", int),
    "CHUNK_BYTES": ("CHUNK_BYTES", int),
    "START_MODE": "START_MODE",
    "START_ENABLED": ("START_ENABLED", _as_bool),
    "READY_TIMEOUT": ("READY_TIMEOUT", float),
    "AUTOCORRECT": ("AUTOCORRECT", _as_mapping),
    "TOGGLE_LISTENING_KEY": "TOGGLE_LISTENING_KEY",
    "TOGGLE_MODE_KEY": "TOGGLE_MODE_KEY",
    "LOG_LEVEL": "LOG_LEVEL",
    "LOG_TO_FILE": ("LOG_TO_FILE", _as_bool),
    "LOG_FILE": "LOG_FILE",
}

# Keys whose file values must pass the same check as the environment
FILE_CONVERTERS = {
    "AUTOCORRECT": _as_mapping,
}


class Config:
    """
    Process-wide settings for the voice keyboard.
    Singleton: every module reads the same instance.
    """

    _instance = None

    def __new__(cls, reset=False):
        # reset=True builds a fresh instance (tests)
        if cls._instance is None or reset:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, reset=False):
        if self._initialized and not reset:
            return

        load_dotenv()

        self._config = dict(DEFAULTS)
        self._load_from_env()
        self._load_from_files()

        self._initialized = True
        logger.debug("Configuration initialized")

    def _load_from_env(self):
        """Apply environment overrides; unconvertible values keep the previous setting."""
        for env_var, config_key in ENV_MAPPING.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            if isinstance(config_key, tuple):
                config_key, converter = config_key
                try:
                    env_value = converter(env_value)
                except Exception as e:
                    logger.warning(f"Failed to convert {env_var}='{env_value}': {e}")
                    continue
            self._config[config_key] = env_value

    def _load_from_files(self):
        """Apply JSON settings files, package-local first, then per-user."""
        config_files = [
            os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json"),
            os.path.expanduser("~/.config/voicekeys/config.json"),
        ]

        for config_file in config_files:
            if not os.path.exists(config_file):
                continue
            try:
                with open(config_file, "r") as f:
                    file_config = json.load(f)
            except Exception as e:
                logger.warning(f"Failed to load configuration from {config_file}: {e}")
                continue
            self._apply_file_values(file_config, config_file)
            logger.info(f"Loaded configuration from {config_file}")

    def _apply_file_values(self, file_config, source):
        if not isinstance(file_config, dict):
            logger.warning(f"Ignoring {source}: top level is not a JSON object")
            return
        for key, value in file_config.items():
            converter = FILE_CONVERTERS.get(key)
            if converter is not None:
                try:
                    value = converter(value)
                except Exception as e:
                    logger.warning(f"Failed to convert {key} from {source}: {e}")
                    continue
            self._config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` when it is not set."""
        return self._config.get(key, default)


# Create a singleton instance
config = Config()
