"""Memory image for the CHIP-8 interpreter.

The interpreter addresses a flat 4 KiB store. The low region holds the
built-in hexadecimal glyph sprites and programs are copied in at ``0x200``.
"""

from __future__ import annotations

from typing import Final, Iterable

from pychip8.video.font import FONT_DATA

MEMORY_SIZE: Final[int] = 0x1000
PROGRAM_OFFSET: Final[int] = 0x200
FONT_OFFSET: Final[int] = 0x000


class MemoryError(Exception):
    """Raised when an access falls outside the memory image."""


class Memory:
    """Fixed-size byte-addressable store with the glyph table pre-loaded."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size < PROGRAM_OFFSET:
            raise MemoryError(f"memory size {size} smaller than program offset {PROGRAM_OFFSET:#05x}")
        self._size = size
        self._data = bytearray(size)
        self.reset()

    def __len__(self) -> int:
        return self._size

    @property
    def size(self) -> int:
        return self._size

    def reset(self) -> None:
        """Zero the store and re-install the glyph sprites."""

        self._data[:] = bytes(self._size)
        self._data[FONT_OFFSET : FONT_OFFSET + len(FONT_DATA)] = FONT_DATA

    def _check(self, address: int, length: int = 1) -> None:
        if address < 0 or length < 0 or address + length > self._size:
            raise MemoryError(
                f"access {address:#05x}+{length} outside memory 0x000-{self._size - 1:#05x}"
            )

    def read(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def read_range(self, address: int, length: int) -> bytes:
        self._check(address, length)
        return bytes(self._data[address : address + length])

    def read_word(self, address: int) -> int:
        """Return the big-endian 16-bit word stored at ``address``."""

        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def store(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def write(self, offset: int, data: Iterable[int]) -> None:
        """Copy ``data`` into the store starting at ``offset``.

        Nothing is written when the block would run past the end of memory.
        """

        payload = bytes(data)
        self._check(offset, len(payload))
        self._data[offset : offset + len(payload)] = payload

    def snapshot(self) -> bytes:
        return bytes(self._data)
