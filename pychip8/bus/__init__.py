"""Memory bus for the CHIP-8 interpreter."""

from .memory import FONT_OFFSET, MEMORY_SIZE, PROGRAM_OFFSET, Memory, MemoryError

__all__ = [
    "Memory",
    "MemoryError",
    "MEMORY_SIZE",
    "PROGRAM_OFFSET",
    "FONT_OFFSET",
]
