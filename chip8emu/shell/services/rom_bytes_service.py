"""
Program file service for the CHIP-8 emulator.

Responsibilities:
  - Read program images (``.ch8`` and friends) from disk.
  - Summarise a program for the ``--info`` command: size, whether it fits in
    memory, and a disassembly listing of its first instructions.
"""

from __future__ import annotations

import os
from typing import Any, List

from chip8emu.core.decoder import decode
from chip8emu.core.memory import MEMORY_SIZE, PROGRAM_OFFSET

# Bytes available for a program image.
PROGRAM_CAPACITY: int = MEMORY_SIZE - PROGRAM_OFFSET

# Number of instructions shown by :meth:`RomBytesService.describe`.
_LISTING_LENGTH: int = 16


class RomBytesService:
    """Static utility for loading program files and inspecting them."""

    @staticmethod
    def read(path: str) -> bytes:
        """Read a program image from *path*.

        Raises:
            FileNotFoundError: If *path* does not exist.
            OSError: On general I/O failure.
        """
        with open(path, "rb") as fh:
            return fh.read()

    @staticmethod
    def disassemble(data: bytes, base: int = PROGRAM_OFFSET, count: int = _LISTING_LENGTH) -> List[str]:
        """Return ``"$ADDR  WORD  MNEMONIC"`` lines for the first *count* words.

        A trailing odd byte is ignored.
        """
        lines: List[str] = []
        for offset in range(0, min(len(data) - 1, count * 2), 2):
            opcode = (data[offset] << 8) | data[offset + 1]
            lines.append(f"${base + offset:03X}  {opcode:04X}  {decode(opcode).mnemonic}")
        return lines

    @staticmethod
    def describe(path: str) -> dict[str, Any]:
        """Return a dictionary of human-readable metadata about a program file.

        Raises:
            FileNotFoundError: If *path* does not exist.
        """
        data = RomBytesService.read(path)
        return {
            "file": os.path.basename(path),
            "size": f"{len(data)} bytes",
            "capacity": f"{PROGRAM_CAPACITY} bytes",
            "fits": "yes" if len(data) <= PROGRAM_CAPACITY else "no",
            "listing": RomBytesService.disassemble(data),
        }
