#!/usr/bin/env python3
"""
CHIP-8 Emulator

Main entry point.  Parses command-line arguments, creates the interpreter
from a program file, and launches the pygame display window.

Usage examples::

    # Run a program with every quirk off
    chip8emu roms/pong.ch8

    # Original COSMAC VIP behaviour, bigger window
    chip8emu roms/pong.ch8 --preset cosmac --scale 15

    # Start from a preset and adjust single quirks
    chip8emu roms/game.ch8 --preset schip --no-quirk jumping --quirk memory

    # Faster CPU, no sound
    chip8emu roms/game.ch8 --ipf 30 --no-audio

    # Show program metadata and a disassembly listing without launching
    chip8emu roms/pong.ch8 --info
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from chip8emu.core.errors import LoadError
from chip8emu.core.quirks import PRESETS, QuirksConfig
from chip8emu.shell.frame_driver import DEFAULT_INSTRUCTIONS_PER_FRAME
from chip8emu.shell.services.machine_factory import MachineFactory
from chip8emu.shell.services.rom_bytes_service import RomBytesService


# ---------------------------------------------------------------------------
# CLI definition
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="chip8emu",
        description="CHIP-8 emulator.  Load a program file and run it in a pygame window.",
    )

    parser.add_argument(
        "rom",
        help="Path to the program file (.ch8)",
    )

    # Quirks
    quirk_names = list(QuirksConfig.names())
    parser.add_argument(
        "--preset", "-p",
        choices=list(PRESETS),
        default=None,
        help="Start from a named quirk profile.  Default: all quirks off.",
    )
    parser.add_argument(
        "--quirk", "-q",
        action="append",
        choices=quirk_names,
        default=[],
        metavar="NAME",
        help="Enable a quirk (repeatable).  Valid values: " + ", ".join(quirk_names),
    )
    parser.add_argument(
        "--no-quirk",
        action="append",
        choices=quirk_names,
        default=[],
        metavar="NAME",
        help="Disable a quirk, overriding the preset (repeatable).",
    )

    # Timing
    parser.add_argument(
        "--ipf",
        type=int,
        default=DEFAULT_INSTRUCTIONS_PER_FRAME,
        help=f"Instructions executed per frame.  Default: {DEFAULT_INSTRUCTIONS_PER_FRAME}.",
    )
    parser.add_argument(
        "--hz",
        type=int,
        default=60,
        help="Frame rate and timer frequency in Hz.  Default: 60.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random-number instruction.",
    )

    # Display
    parser.add_argument(
        "--scale", "-s",
        type=int,
        default=10,
        help="Display scale factor (1-20).  Default: 10.",
    )

    # Audio
    parser.add_argument(
        "--no-audio",
        action="store_true",
        default=False,
        help="Disable audio output.",
    )

    # Debugging / info
    parser.add_argument(
        "--info",
        action="store_true",
        default=False,
        help="Print program metadata and exit without launching the emulator.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
    )

    return parser


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _configure_logging(verbosity: int) -> None:
    """Set up the root logger based on requested verbosity."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ---------------------------------------------------------------------------
# Info mode
# ---------------------------------------------------------------------------

def _print_rom_info(rom_path: str) -> int:
    """Print human-readable metadata for a program."""
    try:
        info = RomBytesService.describe(rom_path)
    except OSError as exc:
        print(f"Error reading program: {exc}", file=sys.stderr)
        return 1

    listing = info.pop("listing")
    print("CHIP-8 Program Information")
    print("=" * 40)
    for key, value in info.items():
        label = key.replace("_", " ").title()
        print(f"  {label:20s}: {value}")
    print("-" * 40)
    for line in listing:
        print(f"  {line}")
    print("=" * 40)
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` to use ``sys.argv``.

    Returns
    -------
    int
        Exit code (0 on success).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    logger = logging.getLogger("chip8emu.main")

    rom_path: str = os.path.expanduser(args.rom)
    if not os.path.isfile(rom_path):
        print(f"Error: program file not found: {rom_path}", file=sys.stderr)
        return 1

    if args.info:
        return _print_rom_info(rom_path)

    try:
        quirks = MachineFactory.resolve_quirks(args.preset, args.quirk, args.no_quirk)
        interp = MachineFactory.create(rom_path, quirks=quirks, seed=args.seed)
    except (OSError, LoadError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    # Imported here so --info works without a display.
    from chip8emu.platform.window import Window

    logger.info("Starting emulation ...")
    try:
        window = Window(
            interp,
            scale=args.scale,
            frame_hz=args.hz,
            instructions_per_frame=args.ipf,
            enable_audio=not args.no_audio,
            title=f"CHIP-8 - {os.path.basename(rom_path)}",
        )
        window.run()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        logger.exception("Fatal error during emulation")
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1

    logger.info("Exited cleanly")
    return 0


if __name__ == "__main__":
    sys.exit(main())
