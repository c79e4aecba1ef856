"""Display model and rendering helpers for the CHIP-8 emulator."""

from __future__ import annotations

from .display import DISPLAY_HEIGHT, DISPLAY_WIDTH, Display
from .font import FONT_DATA, GLYPH_BYTES, HEX_GLYPHS
from .palette import MONOCHROME, PALETTES, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Display",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "FONT_DATA",
    "GLYPH_BYTES",
    "HEX_GLYPHS",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "PALETTES",
    "validate_palette",
]
