"""
Core enumerations and type definitions for the CHIP-8 interpreter.

:class:`Op` names every instruction kind the interpreter understands, and
:class:`Instruction` is the decoded form of one 16-bit opcode: the kind tag
plus every operand field, so the dispatcher never has to look at the raw
bits again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Op(IntEnum):
    UNKNOWN = 0
    CLS = 1           # 00E0
    RET = 2           # 00EE
    JP = 3            # 1NNN
    CALL = 4          # 2NNN
    SE_IMM = 5        # 3XNN
    SNE_IMM = 6       # 4XNN
    SE_REG = 7        # 5XY0
    LD_IMM = 8        # 6XNN
    ADD_IMM = 9       # 7XNN
    LD_REG = 10       # 8XY0
    OR = 11           # 8XY1
    AND = 12          # 8XY2
    XOR = 13          # 8XY3
    ADD_REG = 14      # 8XY4
    SUB = 15          # 8XY5
    SHR = 16          # 8XY6
    SUBN = 17         # 8XY7
    SHL = 18          # 8XYE
    SNE_REG = 19      # 9XY0
    LD_I = 20         # ANNN
    JP_V0 = 21        # BNNN
    RND = 22          # CXNN
    DRW = 23          # DXYN
    SKP = 24          # EX9E
    SKNP = 25         # EXA1
    LD_VX_DT = 26     # FX07
    LD_VX_K = 27      # FX0A
    LD_DT_VX = 28     # FX15
    LD_ST_VX = 29     # FX18
    ADD_I_VX = 30     # FX1E
    LD_F_VX = 31      # FX29
    LD_B_VX = 32      # FX33
    LD_I_VX = 33      # FX55
    LD_VX_I = 34      # FX65


# Assembly-style templates used by :attr:`Instruction.mnemonic`.  Fields are
# filled from the instruction's operands with ``str.format``.
_MNEMONICS: dict[Op, str] = {
    Op.UNKNOWN:   "??? {opcode:04X}",
    Op.CLS:       "CLS",
    Op.RET:       "RET",
    Op.JP:        "JP {nnn:03X}",
    Op.CALL:      "CALL {nnn:03X}",
    Op.SE_IMM:    "SE V{x:X}, {nn:02X}",
    Op.SNE_IMM:   "SNE V{x:X}, {nn:02X}",
    Op.SE_REG:    "SE V{x:X}, V{y:X}",
    Op.LD_IMM:    "LD V{x:X}, {nn:02X}",
    Op.ADD_IMM:   "ADD V{x:X}, {nn:02X}",
    Op.LD_REG:    "LD V{x:X}, V{y:X}",
    Op.OR:        "OR V{x:X}, V{y:X}",
    Op.AND:       "AND V{x:X}, V{y:X}",
    Op.XOR:       "XOR V{x:X}, V{y:X}",
    Op.ADD_REG:   "ADD V{x:X}, V{y:X}",
    Op.SUB:       "SUB V{x:X}, V{y:X}",
    Op.SHR:       "SHR V{x:X}, V{y:X}",
    Op.SUBN:      "SUBN V{x:X}, V{y:X}",
    Op.SHL:       "SHL V{x:X}, V{y:X}",
    Op.SNE_REG:   "SNE V{x:X}, V{y:X}",
    Op.LD_I:      "LD I, {nnn:03X}",
    Op.JP_V0:     "JP V0, {nnn:03X}",
    Op.RND:       "RND V{x:X}, {nn:02X}",
    Op.DRW:       "DRW V{x:X}, V{y:X}, {n:X}",
    Op.SKP:       "SKP V{x:X}",
    Op.SKNP:      "SKNP V{x:X}",
    Op.LD_VX_DT:  "LD V{x:X}, DT",
    Op.LD_VX_K:   "LD V{x:X}, K",
    Op.LD_DT_VX:  "LD DT, V{x:X}",
    Op.LD_ST_VX:  "LD ST, V{x:X}",
    Op.ADD_I_VX:  "ADD I, V{x:X}",
    Op.LD_F_VX:   "LD F, V{x:X}",
    Op.LD_B_VX:   "LD B, V{x:X}",
    Op.LD_I_VX:   "LD [I], V{x:X}",
    Op.LD_VX_I:   "LD V{x:X}, [I]",
}


@dataclass(frozen=True)
class Instruction:
    """One decoded opcode.

    Attributes:
        op:     The instruction kind.
        opcode: The raw 16-bit word.
        x:      Second nibble (register index).
        y:      Third nibble (register index).
        n:      Fourth nibble (4-bit immediate).
        nn:     Low byte (8-bit immediate).
        nnn:    Low 12 bits (address immediate).
    """

    op: Op
    opcode: int
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0

    @property
    def mnemonic(self) -> str:
        """Human-readable assembly form, e.g. ``"DRW V0, V1, 5"``."""
        return _MNEMONICS[self.op].format(
            opcode=self.opcode, x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn
        )

    def __str__(self) -> str:
        return self.mnemonic
