"""
RegisterFile -- V0..VF, the index register, the program counter and the
return-address stack.

The 8-bit registers live in a ``bytearray`` so an out-of-range store fails
loudly instead of leaking into the machine state; the 16-bit registers are
masked by their property setters.
"""

from __future__ import annotations

from typing import List

from chip8emu.core.errors import StackUnderflowError
from chip8emu.core.memory import PROGRAM_OFFSET

NUM_REGISTERS: int = 16
VF: int = 0xF


class RegisterFile:
    """CPU register state.

    Attributes:
        v:     The sixteen general-purpose registers.  ``v[0xF]`` doubles as
               the carry / borrow / collision flag.
        stack: Return addresses pushed by ``CALL``; unbounded.
    """

    def __init__(self) -> None:
        self.v: bytearray = bytearray(NUM_REGISTERS)
        self.stack: List[int] = []
        self._pc: int = PROGRAM_OFFSET
        self._index: int = 0

    # ------------------------------------------------------------------
    # 16-bit registers
    # ------------------------------------------------------------------

    @property
    def pc(self) -> int:
        return self._pc

    @pc.setter
    def pc(self, value: int) -> None:
        self._pc = value & 0xFFFF

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, value: int) -> None:
        self._index = value & 0xFFFF

    # ------------------------------------------------------------------
    # Flag register
    # ------------------------------------------------------------------

    @property
    def vf(self) -> int:
        return self.v[VF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[VF] = value & 0xFF

    # ------------------------------------------------------------------
    # Stack operations
    # ------------------------------------------------------------------

    def push(self, address: int) -> None:
        """Push a return address."""
        self.stack.append(address & 0xFFFF)

    def pop(self) -> int:
        """Pop the most recent return address.

        Raises:
            StackUnderflowError: If the stack is empty.
        """
        if not self.stack:
            raise StackUnderflowError(self._pc)
        return self.stack.pop()

    def __repr__(self) -> str:
        regs = " ".join(f"V{i:X}={value:02X}" for i, value in enumerate(self.v))
        return f"RegisterFile(PC=${self._pc:04X} I=${self._index:04X} SP={len(self.stack)} {regs})"
