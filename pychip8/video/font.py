"""Built-in hexadecimal glyph sprites."""

from __future__ import annotations

from typing import Final, Sequence

GLYPH_HEIGHT: Final[int] = 5
GLYPH_BYTES: Final[int] = GLYPH_HEIGHT

# One 5-byte sprite per hexadecimal digit; only the high nibble of each row is lit.
HEX_GLYPHS: Final[Sequence[tuple[int, ...]]] = (
    (0xF0, 0x90, 0x90, 0x90, 0xF0),  # 0
    (0x20, 0x60, 0x20, 0x20, 0x70),  # 1
    (0xF0, 0x10, 0xF0, 0x80, 0xF0),  # 2
    (0xF0, 0x10, 0xF0, 0x10, 0xF0),  # 3
    (0x90, 0x90, 0xF0, 0x10, 0x10),  # 4
    (0xF0, 0x80, 0xF0, 0x10, 0xF0),  # 5
    (0xF0, 0x80, 0xF0, 0x90, 0xF0),  # 6
    (0xF0, 0x10, 0x20, 0x40, 0x40),  # 7
    (0xF0, 0x90, 0xF0, 0x90, 0xF0),  # 8
    (0xF0, 0x90, 0xF0, 0x10, 0xF0),  # 9
    (0xF0, 0x90, 0xF0, 0x90, 0x90),  # A
    (0xE0, 0x90, 0xE0, 0x90, 0xE0),  # B
    (0xF0, 0x80, 0x80, 0x80, 0xF0),  # C
    (0xE0, 0x90, 0x90, 0x90, 0xE0),  # D
    (0xF0, 0x80, 0xF0, 0x80, 0xF0),  # E
    (0xF0, 0x80, 0xF0, 0x80, 0x80),  # F
)

FONT_DATA: Final[bytes] = bytes(row for glyph in HEX_GLYPHS for row in glyph)
