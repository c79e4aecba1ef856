"""Convert the CHIP-8 pixel grid into RGB frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .display import Display
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """A rendered frame stored as rows of RGB tuples at the requested scale."""

    width: int
    height: int
    scale: int
    pixels: list[list[RGBColor]]

    def get_pixel(self, x: int, y: int) -> RGBColor:
        return self.pixels[y][x]

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build a surface") from exc

        surface = pygame.Surface((self.width, self.height))
        surface.lock()
        try:
            for y, row in enumerate(self.pixels):
                for x, color in enumerate(row):
                    surface.set_at((x, y), color)
        finally:
            surface.unlock()
        return surface


class Renderer:
    """Scale the display grid and map lit/unlit pixels onto a palette."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    @property
    def palette(self) -> tuple[RGBColor, RGBColor]:
        return self._background, self._foreground

    def render(self, display: Display, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        background = self._background
        foreground = self._foreground
        pixels: list[list[RGBColor]] = []
        for row in display.rows():
            line: list[RGBColor] = []
            for value in row:
                color = foreground if value else background
                line.extend([color] * scale)
            for _ in range(scale):
                pixels.append(list(line))
        return RenderResult(
            width=display.width * scale,
            height=display.height * scale,
            scale=scale,
            pixels=pixels,
        )

    def blit(self, display: Display, surface, pygame_module, scale: int) -> None:
        """Draw ``display`` straight onto an existing pygame surface."""

        surface.fill(self._background)
        for y, row in enumerate(display.rows()):
            for x, value in enumerate(row):
                if value:
                    pygame_module.draw.rect(
                        surface,
                        self._foreground,
                        (x * scale, y * scale, scale, scale),
                    )
