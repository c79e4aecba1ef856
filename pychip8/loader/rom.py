"""Raw ROM image loading."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterable

from pychip8.bus import MEMORY_SIZE, PROGRAM_OFFSET
from pychip8.utils import debug_enabled, debug_log

MAX_PROGRAM_LENGTH = MEMORY_SIZE - PROGRAM_OFFSET
ROM_SUFFIXES: tuple[str, ...] = (".ch8", ".c8", ".rom")


class RomFormatError(RuntimeError):
    """Raised when a ROM image cannot be loaded into program memory."""


def load_rom(stream: BinaryIO) -> bytes:
    """Read a ROM image from ``stream`` and validate its size."""

    data = stream.read(MAX_PROGRAM_LENGTH + 1)
    if not data:
        raise RomFormatError("ROM image is empty")
    if len(data) > MAX_PROGRAM_LENGTH:
        raise RomFormatError(
            f"ROM image exceeds {MAX_PROGRAM_LENGTH} bytes available at {PROGRAM_OFFSET:#05x}"
        )
    if debug_enabled("loader"):
        debug_log("loader", "rom_bytes=%d", len(data))
    return bytes(data)


def load_rom_from_path(path: Path) -> bytes:
    """Load a ROM image from the filesystem."""

    with path.open("rb") as handle:
        return load_rom(handle)


def list_roms(directory: Path, suffixes: Iterable[str] = ROM_SUFFIXES) -> list[Path]:
    """Return the ROM files in ``directory`` sorted by name."""

    wanted = {suffix.lower() for suffix in suffixes}
    if not directory.is_dir():
        raise RomFormatError(f"ROM directory not found: {directory}")
    return sorted(
        (entry for entry in directory.iterdir() if entry.is_file() and entry.suffix.lower() in wanted),
        key=lambda entry: entry.name.lower(),
    )
