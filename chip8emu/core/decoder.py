"""
Opcode decoder.

Turns a 16-bit opcode into an :class:`~chip8emu.core.types.Instruction`.
Decoding is a pure function of the opcode, so the results are cached.
Words that match no known pattern decode to ``Op.UNKNOWN`` rather than
raising; the interpreter decides what to do with them.
"""

from __future__ import annotations

from functools import lru_cache

from chip8emu.core.types import Instruction, Op

# Second-level tables keyed on the low nibble / low byte of the opcode.
_ALU_OPS: dict[int, Op] = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEY_OPS: dict[int, Op] = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_MISC_OPS: dict[int, Op] = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_I_VX,
    0x65: Op.LD_VX_I,
}

# Families fully identified by the top nibble.
_SIMPLE_OPS: dict[int, Op] = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_IMM,
    0x4: Op.SNE_IMM,
    0x6: Op.LD_IMM,
    0x7: Op.ADD_IMM,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}


def _classify(opcode: int) -> Op:
    family = opcode >> 12
    n = opcode & 0x000F
    nn = opcode & 0x00FF

    if family == 0x0:
        if opcode == 0x00E0:
            return Op.CLS
        if opcode == 0x00EE:
            return Op.RET
        return Op.UNKNOWN
    if family == 0x5:
        return Op.SE_REG if n == 0 else Op.UNKNOWN
    if family == 0x8:
        return _ALU_OPS.get(n, Op.UNKNOWN)
    if family == 0x9:
        return Op.SNE_REG if n == 0 else Op.UNKNOWN
    if family == 0xE:
        return _KEY_OPS.get(nn, Op.UNKNOWN)
    if family == 0xF:
        return _MISC_OPS.get(nn, Op.UNKNOWN)
    return _SIMPLE_OPS[family]


@lru_cache(maxsize=None)
def decode(opcode: int) -> Instruction:
    """Decode a 16-bit *opcode* into an :class:`Instruction`.

    Raises:
        ValueError: If *opcode* is not in ``0..0xFFFF``.
    """
    if not 0 <= opcode <= 0xFFFF:
        raise ValueError(f"opcode {opcode:#x} is not a 16-bit value")
    return Instruction(
        op=_classify(opcode),
        opcode=opcode,
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=opcode & 0xF,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF,
    )
