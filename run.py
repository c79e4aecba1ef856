"""Command-line entry point for the CHIP-8 emulator.

Debug output is enabled per category through ``CHIP8_DEBUG`` (for example
``CHIP8_DEBUG=cpu,input`` or ``CHIP8_DEBUG=all``).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.cpu import Quirks
from pychip8.loader import list_roms
from pychip8.system import DEFAULT_CPU_FREQUENCY
from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import PALETTES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 emulator",
    )
    parser.add_argument(
        "--rom",
        type=Path,
        help="Path to a CHIP-8 program image",
    )
    parser.add_argument(
        "--list",
        type=Path,
        metavar="DIR",
        help="List the ROM images found in DIR and exit",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--cpu-frequency",
        type=int,
        default=DEFAULT_CPU_FREQUENCY,
        help=f"Instructions executed per second (default: {DEFAULT_CPU_FREQUENCY})",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the emulator in fullscreen mode",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable the buzzer",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the RND instruction",
    )
    parser.add_argument(
        "--legacy-shift",
        action="store_true",
        help="SHL copies the whole register into VF",
    )
    parser.add_argument(
        "--legacy-bcd",
        action="store_true",
        help="LD B, Vx stores every digit at I (only the units digit survives)",
    )
    return parser


def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        fullscreen=args.fullscreen,
        cpu_frequency=args.cpu_frequency,
        mute=args.mute,
        seed=args.seed,
        quirks=Quirks(
            shift_flag_full_byte=args.legacy_shift,
            bcd_single_address=args.legacy_bcd,
        ),
        palette=PALETTES[args.palette],
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list is not None:
        if not args.list.is_dir():
            parser.error(f"ROM directory not found: {args.list}")
        for path in list_roms(args.list):
            print(path.name)
        return 0

    if args.rom is None:
        parser.error("--rom is required")
    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.cpu_frequency <= 0:
        parser.error("--cpu-frequency must be positive")

    app = Chip8App(build_config(args))
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
