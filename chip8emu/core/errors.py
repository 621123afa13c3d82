"""
Exception hierarchy for the CHIP-8 interpreter.

Everything the core raises on purpose derives from :class:`Chip8Error`.
Program-load failures are further split so callers can tell the three
rejection reasons apart.
"""


class Chip8Error(Exception):
    """Base class for all interpreter errors."""


class LoadError(Chip8Error):
    """A program image was rejected by :meth:`Interpreter.load`."""


class NotAByteSequenceError(LoadError, TypeError):
    """The program image is not a sequence of bytes."""


class ProgramTooLargeError(LoadError, ValueError):
    """The program image does not fit between the load offset and the end of memory."""

    def __init__(self, size: int, capacity: int) -> None:
        super().__init__(f"program is {size} bytes, only {capacity} bytes available")
        self.size = size
        self.capacity = capacity


class InvalidByteError(LoadError, ValueError):
    """The program image contains a value outside 0..255."""

    def __init__(self, offset: int, value: object) -> None:
        super().__init__(f"value {value!r} at offset {offset} is not a byte")
        self.offset = offset
        self.value = value


class StackUnderflowError(Chip8Error):
    """A return instruction executed with an empty call stack."""

    def __init__(self, address: int) -> None:
        super().__init__(f"return with empty stack at ${address:04X}")
        self.address = address
