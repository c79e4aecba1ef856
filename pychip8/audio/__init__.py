"""Sound timer and tone output for the CHIP-8 emulator."""

from .beeper import SquareWaveBeeper
from .speaker import Speaker

__all__ = [
    "Speaker",
    "SquareWaveBeeper",
]
