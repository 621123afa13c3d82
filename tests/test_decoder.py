"""
Decoder Tests
=============

Every opcode family decodes to the right instruction kind with the right
operand fields, and unrecognised words decode to ``Op.UNKNOWN``.
"""

import pytest

from chip8emu.core.decoder import decode
from chip8emu.core.types import Instruction, Op


@pytest.mark.parametrize(
    "opcode,op",
    [
        (0x00E0, Op.CLS),
        (0x00EE, Op.RET),
        (0x1234, Op.JP),
        (0x2345, Op.CALL),
        (0x3A12, Op.SE_IMM),
        (0x4A12, Op.SNE_IMM),
        (0x5AB0, Op.SE_REG),
        (0x6A12, Op.LD_IMM),
        (0x7A12, Op.ADD_IMM),
        (0x8AB0, Op.LD_REG),
        (0x8AB1, Op.OR),
        (0x8AB2, Op.AND),
        (0x8AB3, Op.XOR),
        (0x8AB4, Op.ADD_REG),
        (0x8AB5, Op.SUB),
        (0x8AB6, Op.SHR),
        (0x8AB7, Op.SUBN),
        (0x8ABE, Op.SHL),
        (0x9AB0, Op.SNE_REG),
        (0xA123, Op.LD_I),
        (0xB123, Op.JP_V0),
        (0xCA12, Op.RND),
        (0xDAB5, Op.DRW),
        (0xEA9E, Op.SKP),
        (0xEAA1, Op.SKNP),
        (0xFA07, Op.LD_VX_DT),
        (0xFA0A, Op.LD_VX_K),
        (0xFA15, Op.LD_DT_VX),
        (0xFA18, Op.LD_ST_VX),
        (0xFA1E, Op.ADD_I_VX),
        (0xFA29, Op.LD_F_VX),
        (0xFA33, Op.LD_B_VX),
        (0xFA55, Op.LD_I_VX),
        (0xFA65, Op.LD_VX_I),
    ],
)
def test_known_opcodes(opcode, op):
    assert decode(opcode).op is op


@pytest.mark.parametrize(
    "opcode",
    [0x0000, 0x0123, 0x00E1, 0x00FF, 0x5AB1, 0x9ABF, 0x8AB8, 0x8ABD, 0x8ABF, 0xEA00, 0xF000, 0xFAFF],
)
def test_unknown_opcodes(opcode):
    assert decode(opcode).op is Op.UNKNOWN


def test_every_op_is_reachable():
    seen = {decode(word).op for word in range(0x10000)}
    assert seen == set(Op)


def test_operand_fields():
    ins = decode(0xD4A7)
    assert ins == Instruction(op=Op.DRW, opcode=0xD4A7, x=0x4, y=0xA, n=0x7, nn=0xA7, nnn=0x4A7)


def test_decode_rejects_non_16_bit_values():
    with pytest.raises(ValueError):
        decode(0x10000)
    with pytest.raises(ValueError):
        decode(-1)


class TestMnemonic:
    @pytest.mark.parametrize(
        "opcode,text",
        [
            (0x00E0, "CLS"),
            (0x1ABC, "JP ABC"),
            (0x6A0F, "LD VA, 0F"),
            (0xD015, "DRW V0, V1, 5"),
            (0xF30A, "LD V3, K"),
            (0xF255, "LD [I], V2"),
            (0x0123, "??? 0123"),
        ],
    )
    def test_mnemonic(self, opcode, text):
        assert decode(opcode).mnemonic == text
        assert str(decode(opcode)) == text
