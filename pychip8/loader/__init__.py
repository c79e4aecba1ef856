"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import (
    MAX_PROGRAM_LENGTH,
    ROM_SUFFIXES,
    RomFormatError,
    list_roms,
    load_rom,
    load_rom_from_path,
)

__all__ = [
    "MAX_PROGRAM_LENGTH",
    "ROM_SUFFIXES",
    "RomFormatError",
    "list_roms",
    "load_rom",
    "load_rom_from_path",
]
