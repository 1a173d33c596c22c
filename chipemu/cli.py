from __future__ import annotations

import argparse
import logging
import sys

from .emulator import Emulator
from .errors import Chip8Error
from .frontend import FrontendConfig, RunMode, run
from .memory import load_rom_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipemu", description="CHIP-8 emulator")
    parser.add_argument("rom", help="Path to CHIP-8 ROM")
    parser.add_argument("step", nargs="?", default=None,
                        help="Any value here runs stepwise (one instruction per keypress)")
    parser.add_argument("--scale", type=int, default=10,
                        help="Pixel scale factor (default 10)")
    parser.add_argument("--fps", type=int, default=60,
                        help="Frame rate cap in normal mode (default 60)")
    parser.add_argument("--clock", type=int, default=600,
                        help="CPU clock in Hz (default 600)")
    parser.add_argument("--debounce-ms", type=int, default=50,
                        help="Release a key after this long without input (default 50)")
    parser.add_argument("--legacy-store", action="store_true",
                        help="Use original FX55/FX65 quirk (I increments)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug messages")
    return parser


def config_from_args(args: argparse.Namespace) -> FrontendConfig:
    return FrontendConfig(
        scale=args.scale,
        fps=max(1, args.fps),
        clock=max(1, args.clock),
        debounce=args.debounce_ms / 1000.0,
        mode=RunMode.from_arg(args.step),
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s]: %(message)s")

    try:
        rom = load_rom_file(args.rom)
    except OSError as e:
        print(f"Cannot read ROM: {e}", file=sys.stderr)
        return 1

    emulator = Emulator(legacy_store=args.legacy_store)
    try:
        emulator.load(rom)
    except Chip8Error as e:
        logger.error("%s", e)
        return 1
    emulator.store_font()

    run(emulator, config_from_args(args))
    return 0
