"""
Service Tests
=============

Program file reading, disassembly listings, and interpreter construction.
"""

import pytest

from chip8emu.core.errors import ProgramTooLargeError
from chip8emu.core.memory import PROGRAM_OFFSET
from chip8emu.shell.services.machine_factory import MachineFactory
from chip8emu.shell.services.rom_bytes_service import PROGRAM_CAPACITY, RomBytesService


@pytest.fixture
def rom(tmp_path):
    path = tmp_path / "test.ch8"
    path.write_bytes(bytes([0x00, 0xE0, 0xA2, 0x2A, 0xC0, 0xFF, 0x12, 0x06]))
    return path


class TestRomBytesService:
    def test_read(self, rom):
        assert RomBytesService.read(str(rom))[:2] == b"\x00\xE0"

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RomBytesService.read(str(tmp_path / "missing.ch8"))

    def test_disassemble(self):
        lines = RomBytesService.disassemble(bytes([0x00, 0xE0, 0x1A, 0xBC, 0xFF]))
        assert lines == ["$200  00E0  CLS", "$202  1ABC  JP ABC"]

    def test_disassemble_limits_count(self):
        assert len(RomBytesService.disassemble(bytes(100), count=4)) == 4

    def test_describe(self, rom):
        info = RomBytesService.describe(str(rom))
        assert info["file"] == "test.ch8"
        assert info["size"] == "8 bytes"
        assert info["capacity"] == f"{PROGRAM_CAPACITY} bytes"
        assert info["fits"] == "yes"
        assert info["listing"][1] == "$202  A22A  LD I, 22A"

    def test_describe_oversized(self, tmp_path):
        path = tmp_path / "big.ch8"
        path.write_bytes(bytes(PROGRAM_CAPACITY + 1))
        assert RomBytesService.describe(str(path))["fits"] == "no"


class TestMachineFactory:
    def test_create_loads_program(self, rom):
        interp = MachineFactory.create(str(rom))
        assert interp.memory.read_block(PROGRAM_OFFSET, 2) == b"\x00\xE0"
        assert interp.quirks.enabled() == ()

    def test_seed_makes_random_reproducible(self, rom):
        results = []
        for _ in range(2):
            interp = MachineFactory.create(str(rom), seed=7)
            for _ in range(3):
                interp.cycle()
            results.append(interp.registers.v[0])
        assert results[0] == results[1]

    def test_oversized_program(self, tmp_path):
        path = tmp_path / "big.ch8"
        path.write_bytes(bytes(PROGRAM_CAPACITY + 1))
        with pytest.raises(ProgramTooLargeError):
            MachineFactory.create(str(path))

    def test_resolve_quirks_default(self):
        assert MachineFactory.resolve_quirks().enabled() == ()

    def test_resolve_quirks_preset_with_overrides(self):
        quirks = MachineFactory.resolve_quirks("cosmac", enable=["jumping"], disable=["clipping"])
        assert quirks.enabled() == ("vf_reset", "memory", "jumping", "display_wait")

    def test_disable_wins_over_enable(self):
        quirks = MachineFactory.resolve_quirks(enable=["memory"], disable=["memory"])
        assert not quirks.memory

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            MachineFactory.resolve_quirks("nope")
