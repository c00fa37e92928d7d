"""
Common pytest configuration and fixtures.
This file is automatically loaded by pytest.
"""

import os
import pytest

from voicekeys.core.state_manager import Mode, StateManager


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["TESTING"] = "true"


@pytest.fixture
def command_state():
    """Listening state in command mode."""
    return StateManager(mode=Mode.COMMAND, enabled=True)


@pytest.fixture
def dictation_state():
    """Listening state in dictation mode."""
    return StateManager(mode=Mode.DICTATION, enabled=True)
