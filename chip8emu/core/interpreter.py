"""
CHIP-8 interpreter.

Owns the complete machine state -- memory, registers, framebuffer, keypad
and the two countdown timers -- and executes one instruction per call to
:meth:`Interpreter.cycle`.

Execution model:

* ``cycle()`` fetches the big-endian word at PC, advances PC by two, decodes
  the word into an :class:`~chip8emu.core.types.Instruction` and hands it to
  the handler registered for its :class:`~chip8emu.core.types.Op`.  At the
  end of the cycle the keypad snapshot is refreshed.
* Timers are *not* decremented by ``cycle()``; the frame driver calls
  :meth:`Interpreter.tick_timers` once per rendered frame.
* Unknown opcodes are logged and skipped.  They never stop execution.
* ``FX0A`` blocks by rewinding PC, so the driver has to keep cycling and
  feeding key events for the program to move on.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Callable, List, Optional

from chip8emu.core.decoder import decode
from chip8emu.core.display_buffer import DisplayBuffer
from chip8emu.core.errors import InvalidByteError, NotAByteSequenceError, ProgramTooLargeError
from chip8emu.core.keypad_state import KeypadState
from chip8emu.core.memory import PROGRAM_OFFSET, MemoryImage
from chip8emu.core.quirks import QuirksConfig
from chip8emu.core.registers import RegisterFile
from chip8emu.core.types import Instruction, Op

logger = logging.getLogger(__name__)

Handler = Callable[[Instruction], None]


class Interpreter:
    """CHIP-8 virtual machine.

    Parameters
    ----------
    quirks:
        Behavioural switches, fixed for the lifetime of the interpreter.
        Defaults to all quirks off.
    rng:
        Random source for ``CXNN``.  Pass a seeded :class:`random.Random`
        for reproducible runs.
    """

    def __init__(
        self,
        quirks: Optional[QuirksConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.quirks: QuirksConfig = quirks if quirks is not None else QuirksConfig()
        self.rng: random.Random = rng if rng is not None else random.Random()

        self.memory: MemoryImage = MemoryImage()
        self.registers: RegisterFile = RegisterFile()
        self.display: DisplayBuffer = DisplayBuffer()
        self.keypad: KeypadState = KeypadState()

        self.delay_timer: int = 0
        self.sound_timer: int = 0

        # Number of cycles executed since construction.
        self.cycles: int = 0

        self._dispatch: List[Handler] = self._build_dispatch_table()

    # ------------------------------------------------------------------
    # Program loading
    # ------------------------------------------------------------------

    def load(self, program: Sequence[int]) -> None:
        """Copy *program* into memory at ``$200``.

        Raises
        ------
        NotAByteSequenceError
            If *program* is not a sequence (``str`` does not count).
        ProgramTooLargeError
            If *program* is longer than the space left after ``$200``.
        InvalidByteError
            If an element is not an integer in ``0..255``.
        """
        if isinstance(program, str) or not isinstance(program, (Sequence, memoryview)):
            raise NotAByteSequenceError(
                f"program must be a sequence of bytes, got {type(program).__name__}"
            )

        capacity = self.memory.program_capacity
        if len(program) > capacity:
            raise ProgramTooLargeError(len(program), capacity)

        if isinstance(program, memoryview) and program.ndim != 1:
            raise NotAByteSequenceError(
                f"program memoryview must be one-dimensional, got ndim={program.ndim}"
            )

        # Only unsigned-byte buffers are written through unchecked.
        if not (
            isinstance(program, (bytes, bytearray))
            or (isinstance(program, memoryview) and program.format == "B")
        ):
            for offset, value in enumerate(program):
                if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
                    raise InvalidByteError(offset, value)

        self.memory.write_block(PROGRAM_OFFSET, program)
        logger.info("Loaded %d-byte program at $%03X", len(program), PROGRAM_OFFSET)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def fetch_opcode(self) -> int:
        """Read the word at PC (high byte first) and advance PC by two."""
        regs = self.registers
        pc = regs.pc
        opcode = (self.memory[pc] << 8) | self.memory[pc + 1]
        regs.pc = pc + 2
        return opcode

    def cycle(self) -> Instruction:
        """Fetch, decode and execute one instruction.

        Returns:
            The decoded instruction that was executed.
        """
        pc = self.registers.pc
        instruction = decode(self.fetch_opcode())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("$%04X  %04X  %s", pc, instruction.opcode, instruction.mnemonic)
        self.execute(instruction)
        self.keypad.snapshot()
        self.cycles += 1
        return instruction

    def execute(self, instruction: Instruction) -> None:
        """Run the handler for an already-decoded *instruction*."""
        self._dispatch[instruction.op](instruction)

    def tick_timers(self) -> None:
        """Decrement the delay and sound timers once, stopping at zero."""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    # ------------------------------------------------------------------
    # Dispatch table
    # ------------------------------------------------------------------

    def _build_dispatch_table(self) -> List[Handler]:
        handlers: dict[Op, Handler] = {
            Op.UNKNOWN: self._op_unknown,
            Op.CLS: self._op_cls,
            Op.RET: self._op_ret,
            Op.JP: self._op_jp,
            Op.CALL: self._op_call,
            Op.SE_IMM: self._op_se_imm,
            Op.SNE_IMM: self._op_sne_imm,
            Op.SE_REG: self._op_se_reg,
            Op.SNE_REG: self._op_sne_reg,
            Op.LD_IMM: self._op_ld_imm,
            Op.ADD_IMM: self._op_add_imm,
            Op.LD_REG: self._op_ld_reg,
            Op.OR: self._op_or,
            Op.AND: self._op_and,
            Op.XOR: self._op_xor,
            Op.ADD_REG: self._op_add_reg,
            Op.SUB: self._op_sub,
            Op.SUBN: self._op_subn,
            Op.SHR: self._op_shr,
            Op.SHL: self._op_shl,
            Op.LD_I: self._op_ld_i,
            Op.JP_V0: self._op_jp_v0,
            Op.RND: self._op_rnd,
            Op.DRW: self._op_drw,
            Op.SKP: self._op_skp,
            Op.SKNP: self._op_sknp,
            Op.LD_VX_DT: self._op_ld_vx_dt,
            Op.LD_VX_K: self._op_ld_vx_k,
            Op.LD_DT_VX: self._op_ld_dt_vx,
            Op.LD_ST_VX: self._op_ld_st_vx,
            Op.ADD_I_VX: self._op_add_i_vx,
            Op.LD_F_VX: self._op_ld_f_vx,
            Op.LD_B_VX: self._op_ld_b_vx,
            Op.LD_I_VX: self._op_ld_i_vx,
            Op.LD_VX_I: self._op_ld_vx_i,
        }
        missing = [op.name for op in Op if op not in handlers]
        if missing:
            raise RuntimeError(f"no handler for: {', '.join(missing)}")
        return [handlers[op] for op in sorted(Op)]

    # ------------------------------------------------------------------
    # Flow control
    # ------------------------------------------------------------------

    def _op_unknown(self, ins: Instruction) -> None:
        logger.warning(
            "Unknown opcode %04X at $%04X; skipped",
            ins.opcode,
            (self.registers.pc - 2) & 0xFFFF,
        )

    def _op_cls(self, ins: Instruction) -> None:
        self.display.clear()

    def _op_ret(self, ins: Instruction) -> None:
        self.registers.pc = self.registers.pop()

    def _op_jp(self, ins: Instruction) -> None:
        self.registers.pc = ins.nnn

    def _op_call(self, ins: Instruction) -> None:
        regs = self.registers
        regs.push(regs.pc)
        regs.pc = ins.nnn

    def _op_jp_v0(self, ins: Instruction) -> None:
        # jumping quirk: BXNN adds VX, where X is the top nibble of NNN.
        offset_reg = ins.x if self.quirks.jumping else 0
        self.registers.pc = ins.nnn + self.registers.v[offset_reg]

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.registers.pc += 2

    def _op_se_imm(self, ins: Instruction) -> None:
        self._skip_if(self.registers.v[ins.x] == ins.nn)

    def _op_sne_imm(self, ins: Instruction) -> None:
        self._skip_if(self.registers.v[ins.x] != ins.nn)

    def _op_se_reg(self, ins: Instruction) -> None:
        v = self.registers.v
        self._skip_if(v[ins.x] == v[ins.y])

    def _op_sne_reg(self, ins: Instruction) -> None:
        v = self.registers.v
        self._skip_if(v[ins.x] != v[ins.y])

    # ------------------------------------------------------------------
    # Register arithmetic
    # ------------------------------------------------------------------

    def _op_ld_imm(self, ins: Instruction) -> None:
        self.registers.v[ins.x] = ins.nn

    def _op_add_imm(self, ins: Instruction) -> None:
        v = self.registers.v
        v[ins.x] = (v[ins.x] + ins.nn) & 0xFF

    def _op_ld_reg(self, ins: Instruction) -> None:
        v = self.registers.v
        v[ins.x] = v[ins.y]

    def _op_or(self, ins: Instruction) -> None:
        v = self.registers.v
        if self.quirks.vf_reset:
            v[0xF] = 0
        v[ins.x] |= v[ins.y]

    def _op_and(self, ins: Instruction) -> None:
        v = self.registers.v
        if self.quirks.vf_reset:
            v[0xF] = 0
        v[ins.x] &= v[ins.y]

    def _op_xor(self, ins: Instruction) -> None:
        v = self.registers.v
        if self.quirks.vf_reset:
            v[0xF] = 0
        v[ins.x] ^= v[ins.y]

    # The flag is always written after the result so that VF as the
    # destination ends up holding the flag.

    def _op_add_reg(self, ins: Instruction) -> None:
        v = self.registers.v
        total = v[ins.x] + v[ins.y]
        v[ins.x] = total & 0xFF
        v[0xF] = 1 if total > 0xFF else 0

    def _op_sub(self, ins: Instruction) -> None:
        v = self.registers.v
        vx, vy = v[ins.x], v[ins.y]
        v[ins.x] = (vx - vy) & 0xFF
        v[0xF] = 1 if vx >= vy else 0

    def _op_subn(self, ins: Instruction) -> None:
        v = self.registers.v
        vx, vy = v[ins.x], v[ins.y]
        v[ins.x] = (vy - vx) & 0xFF
        v[0xF] = 1 if vy >= vx else 0

    def _shift_source(self, ins: Instruction) -> int:
        v = self.registers.v
        if not self.quirks.shifting:
            v[ins.x] = v[ins.y]
        return v[ins.x]

    def _op_shr(self, ins: Instruction) -> None:
        value = self._shift_source(ins)
        v = self.registers.v
        v[ins.x] = value >> 1
        v[0xF] = value & 0x01

    def _op_shl(self, ins: Instruction) -> None:
        value = self._shift_source(ins)
        v = self.registers.v
        v[ins.x] = (value << 1) & 0xFF
        v[0xF] = value >> 7

    def _op_rnd(self, ins: Instruction) -> None:
        self.registers.v[ins.x] = self.rng.randint(0, 0xFF) & ins.nn

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def _op_drw(self, ins: Instruction) -> None:
        regs = self.registers
        display = self.display
        width, height = display.WIDTH, display.HEIGHT
        clipping = self.quirks.clipping

        x0 = regs.v[ins.x] % width
        y0 = regs.v[ins.y] % height
        regs.vf = 0

        collision = False
        for row in range(ins.n):
            sprite = self.memory[regs.index + row]
            py = y0 + row
            if py >= height:
                if clipping:
                    continue
                py %= height
            for col in range(8):
                px = x0 + col
                if px >= width:
                    if clipping:
                        continue
                    px %= width
                bit = (sprite >> (7 - col)) & 1
                if bit and display.set_pixel(px, py, bit):
                    collision = True

        if collision:
            regs.vf = 1

    # ------------------------------------------------------------------
    # Keypad
    # ------------------------------------------------------------------

    def _op_skp(self, ins: Instruction) -> None:
        self._skip_if(self.keypad.is_pressed(self.registers.v[ins.x]))

    def _op_sknp(self, ins: Instruction) -> None:
        self._skip_if(not self.keypad.is_pressed(self.registers.v[ins.x]))

    def _op_ld_vx_k(self, ins: Instruction) -> None:
        key = self.keypad.released_key()
        if key is None:
            # Re-fetch this instruction on the next cycle.
            self.registers.pc -= 2
            return
        self.registers.v[ins.x] = key

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _op_ld_vx_dt(self, ins: Instruction) -> None:
        self.registers.v[ins.x] = self.delay_timer & 0xFF

    def _op_ld_dt_vx(self, ins: Instruction) -> None:
        self.delay_timer = self.registers.v[ins.x]

    def _op_ld_st_vx(self, ins: Instruction) -> None:
        self.sound_timer = self.registers.v[ins.x]

    # ------------------------------------------------------------------
    # Index register and memory
    # ------------------------------------------------------------------

    def _op_ld_i(self, ins: Instruction) -> None:
        self.registers.index = ins.nnn

    def _op_add_i_vx(self, ins: Instruction) -> None:
        regs = self.registers
        regs.index = regs.index + regs.v[ins.x]

    def _op_ld_f_vx(self, ins: Instruction) -> None:
        regs = self.registers
        regs.index = self.memory.glyph_address(regs.v[ins.x])

    def _op_ld_b_vx(self, ins: Instruction) -> None:
        regs = self.registers
        value = regs.v[ins.x]
        self.memory.write_block(regs.index, (value // 100, (value // 10) % 10, value % 10))

    def _op_ld_i_vx(self, ins: Instruction) -> None:
        regs = self.registers
        self.memory.write_block(regs.index, regs.v[:ins.x + 1])
        if self.quirks.memory:
            regs.index = regs.index + ins.x + 1

    def _op_ld_vx_i(self, ins: Instruction) -> None:
        regs = self.registers
        regs.v[:ins.x + 1] = self.memory.read_block(regs.index, ins.x + 1)
        if self.quirks.memory:
            regs.index = regs.index + ins.x + 1

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"Interpreter(pc=${self.registers.pc:04X}, "
            f"cycles={self.cycles}, "
            f"quirks=[{','.join(self.quirks.enabled())}])"
        )
