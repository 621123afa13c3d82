"""
MemoryImage -- the 4 KiB flat address space of the CHIP-8 machine.

Layout
------

=============  =====================================
Address        Contents
=============  =====================================
$000 - $04F    unused (interpreter area on the VIP)
$050 - $09F    hexadecimal font, 16 glyphs x 5 bytes
$0A0 - $1FF    unused
$200 - $FFF    program image and working memory
=============  =====================================

Addresses are taken modulo :data:`MEMORY_SIZE` on every access, so a
16-bit index or program counter can never reach outside the image.
"""

from __future__ import annotations

from typing import Iterable

MEMORY_SIZE: int = 4096
FONT_OFFSET: int = 0x050
PROGRAM_OFFSET: int = 0x200
GLYPH_BYTES: int = 5

# fmt: off
FONT: bytes = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
# fmt: on


class MemoryImage:
    """Byte-addressable RAM with the font table preloaded."""

    def __init__(self) -> None:
        self.ram: bytearray = bytearray(MEMORY_SIZE)
        self.ram[FONT_OFFSET:FONT_OFFSET + len(FONT)] = FONT

    @property
    def program_capacity(self) -> int:
        """Number of bytes available from :data:`PROGRAM_OFFSET` to the end."""
        return MEMORY_SIZE - PROGRAM_OFFSET

    def __len__(self) -> int:
        return MEMORY_SIZE

    def __getitem__(self, addr: int) -> int:
        return self.ram[addr % MEMORY_SIZE]

    def __setitem__(self, addr: int, value: int) -> None:
        self.ram[addr % MEMORY_SIZE] = value & 0xFF

    def write_block(self, addr: int, data: Iterable[int]) -> None:
        """Copy *data* into memory starting at *addr*."""
        for offset, value in enumerate(data):
            self[addr + offset] = value

    def read_block(self, addr: int, length: int) -> bytes:
        """Return *length* bytes starting at *addr*."""
        return bytes(self[addr + offset] for offset in range(length))

    @staticmethod
    def glyph_address(digit: int) -> int:
        """Start address of the font glyph for hexadecimal *digit* (low nibble)."""
        return FONT_OFFSET + (digit & 0xF) * GLYPH_BYTES

    def __repr__(self) -> str:
        return f"MemoryImage(size={MEMORY_SIZE}, font=${FONT_OFFSET:03X}, program=${PROGRAM_OFFSET:03X})"
