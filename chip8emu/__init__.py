"""CHIP-8 emulator: a pure-Python interpreter core with a pygame front end."""

__version__ = "1.0.0"
