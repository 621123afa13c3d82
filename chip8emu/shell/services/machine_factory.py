"""
Interpreter creation factory for the CHIP-8 emulator.

Creates a loaded :class:`~chip8emu.core.interpreter.Interpreter` from a
program file path plus the quirk options given on the command line.

Typical usage::

    interp = MachineFactory.create("pong.ch8")
    interp = MachineFactory.create("pong.ch8", preset="cosmac", enable=["jumping"])
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from chip8emu.core.interpreter import Interpreter
from chip8emu.core.quirks import QuirksConfig
from chip8emu.shell.services.rom_bytes_service import RomBytesService

logger = logging.getLogger(__name__)


class MachineFactory:
    """Create an interpreter with a program already loaded."""

    @staticmethod
    def resolve_quirks(
        preset: Optional[str] = None,
        enable: Iterable[str] = (),
        disable: Iterable[str] = (),
    ) -> QuirksConfig:
        """Combine a preset with per-quirk overrides.

        *disable* wins over *enable* when a name appears in both.

        Raises
        ------
        ValueError
            On an unknown preset or quirk name.
        """
        quirks = QuirksConfig.preset(preset) if preset else QuirksConfig()
        overrides = {name: True for name in enable}
        overrides.update({name: False for name in disable})
        if overrides:
            quirks = quirks.with_overrides(**overrides)
        return quirks

    @staticmethod
    def create(
        rom_path: str,
        quirks: Optional[QuirksConfig] = None,
        seed: Optional[int] = None,
    ) -> Interpreter:
        """Build an interpreter and load the program at *rom_path*.

        Parameters
        ----------
        rom_path:
            Filesystem path to the program image.
        quirks:
            Behaviour switches; all off when ``None``.
        seed:
            Seed for the random-number instruction, for reproducible runs.

        Raises
        ------
        FileNotFoundError
            If *rom_path* does not exist.
        LoadError
            If the file does not fit in memory.
        """
        data = RomBytesService.read(rom_path)
        rng = random.Random(seed) if seed is not None else None
        interp = Interpreter(quirks=quirks, rng=rng)
        interp.load(data)
        logger.info(
            "Created interpreter for %s (quirks: %s)",
            rom_path,
            ", ".join(interp.quirks.enabled()) or "none",
        )
        return interp
