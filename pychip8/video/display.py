"""Monochrome 64x32 pixel grid driven by the draw instruction."""

from __future__ import annotations

from typing import Final

DISPLAY_WIDTH: Final[int] = 64
DISPLAY_HEIGHT: Final[int] = 32


class Display:
    """Pixel buffer with XOR flips and an advisory dirty flag."""

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("display dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)
        self.dirty = False

    def reset(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))
        self.dirty = True

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} display")
        return x + y * self.width

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[self._index(x, y)]

    def flip_pixel(self, x: int, y: int) -> None:
        self._pixels[self._index(x, y)] ^= 1
        self.dirty = True

    def consume_dirty(self) -> bool:
        """Return the dirty flag and clear it."""

        dirty = self.dirty
        self.dirty = False
        return dirty

    def rows(self) -> list[bytes]:
        width = self.width
        return [bytes(self._pixels[row * width : (row + 1) * width]) for row in range(self.height)]

    def snapshot(self) -> bytes:
        return bytes(self._pixels)

    def lit_count(self) -> int:
        return sum(self._pixels)
