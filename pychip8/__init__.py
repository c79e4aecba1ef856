"""CHIP-8 interpreter with a pygame frontend.

The ``cpu`` package holds the interpreter core; ``bus``, ``video``, ``io`` and
``audio`` model the memory, display, keypad and sound timer it owns, and ``ui``
wires everything to a pygame window driven by ``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]

__version__ = "0.1.0"
