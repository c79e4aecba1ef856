"""Input devices for the CHIP-8 emulator."""

from .keyboard import KEY_COUNT, KEY_MAP, Keyboard, map_key_name

__all__ = [
    "Keyboard",
    "KEY_MAP",
    "KEY_COUNT",
    "map_key_name",
]
