# CHIP-8 interpreter core
"""
Machine state and instruction execution.  Nothing in this package imports
pygame or numpy, so it can be driven headless (tests, tools, other hosts).

Use :class:`~chip8emu.core.interpreter.Interpreter` as the entry point.
"""

from chip8emu.core.display_buffer import DisplayBuffer
from chip8emu.core.errors import (
    Chip8Error,
    InvalidByteError,
    LoadError,
    NotAByteSequenceError,
    ProgramTooLargeError,
    StackUnderflowError,
)
from chip8emu.core.interpreter import Interpreter
from chip8emu.core.keypad_state import KeypadState
from chip8emu.core.memory import MemoryImage
from chip8emu.core.quirks import QuirksConfig
from chip8emu.core.registers import RegisterFile
from chip8emu.core.types import Instruction, Op

__all__ = [
    "Chip8Error",
    "DisplayBuffer",
    "Instruction",
    "Interpreter",
    "InvalidByteError",
    "KeypadState",
    "LoadError",
    "MemoryImage",
    "NotAByteSequenceError",
    "Op",
    "ProgramTooLargeError",
    "QuirksConfig",
    "RegisterFile",
    "StackUnderflowError",
]
