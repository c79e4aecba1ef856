"""CHIP-8 hexadecimal keypad state."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Host key name -> keypad code, laid out as the usual 4x4 block:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <=   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_MAP: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


def map_key_name(name: str) -> int | None:
    """Translate a host key name into a keypad code, if it is mapped."""

    return KEY_MAP.get(name.lower())


@dataclass
class Keyboard:
    """Set of currently pressed keys, remembering press order.

    The most recently pressed key is the last one inserted; pressing a key that
    is already held keeps its original position.
    """

    _pressed: Dict[int, None] = field(default_factory=dict)
    _listeners: list[Callable[[int, bool], None]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def press(self, key: int) -> None:
        self._validate(key)
        with self._lock:
            changed = key not in self._pressed
            if changed:
                self._pressed[key] = None
        if debug_enabled("input"):
            debug_log("input", "press key=%X changed=%s", key, changed)
        if changed:
            self._notify_listeners(key, True)

    def release(self, key: int) -> None:
        self._validate(key)
        with self._lock:
            changed = key in self._pressed
            self._pressed.pop(key, None)
        if debug_enabled("input"):
            debug_log("input", "release key=%X changed=%s", key, changed)
        if changed:
            self._notify_listeners(key, False)

    def press_name(self, name: str) -> bool:
        key = map_key_name(name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", name)
            return False
        self.press(key)
        return True

    def release_name(self, name: str) -> bool:
        key = map_key_name(name)
        if key is None:
            return False
        self.release(key)
        return True

    def is_pressed(self, key: int) -> bool:
        with self._lock:
            return key in self._pressed

    def most_recently_pressed(self) -> int | None:
        with self._lock:
            if not self._pressed:
                return None
            return next(reversed(self._pressed))

    def reset(self) -> None:
        with self._lock:
            self._pressed.clear()

    def snapshot(self) -> tuple[int, ...]:
        """Return the pressed keys in press order."""

        with self._lock:
            return tuple(self._pressed)

    def add_listener(self, listener: Callable[[int, bool], None]) -> None:
        self._listeners.append(listener)

    @staticmethod
    def _validate(key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key {key!r} outside keypad range 0x0-0xF")

    def _notify_listeners(self, key: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(key, pressed)
