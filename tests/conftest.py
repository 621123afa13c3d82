"""Shared fixtures for the CHIP-8 emulator tests."""

import os

# pygame must never open a real window or audio device during tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random

import pytest

from chip8emu.core.interpreter import Interpreter
from chip8emu.core.quirks import QuirksConfig


@pytest.fixture
def interp():
    """Fresh interpreter with every quirk off and a seeded RNG."""
    return Interpreter(rng=random.Random(1234))


@pytest.fixture
def make_interp():
    """Factory for interpreters with specific quirks switched on."""

    def _make(**quirks):
        return Interpreter(quirks=QuirksConfig(**quirks), rng=random.Random(1234))

    return _make
