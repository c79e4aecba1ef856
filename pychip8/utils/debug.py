"""Category-gated diagnostic output for the CHIP-8 emulator.

Categories are switched on through ``CHIP8_DEBUG``, a comma-separated list
such as ``CHIP8_DEBUG=cpu,input``; ``all`` turns every category on. The
interpreter logs decoded instructions under ``cpu``, the keypad under
``input``, the mixer under ``audio``, the frame scheduler under ``perf`` and
post-mortem instruction history under ``trace``.
"""

from __future__ import annotations

import os

ENV_VARIABLE = "CHIP8_DEBUG"

_CATEGORIES: frozenset[str] | None = None


def _load_categories() -> frozenset[str]:
    global _CATEGORIES
    if _CATEGORIES is None:
        raw = os.environ.get(ENV_VARIABLE, "")
        _CATEGORIES = frozenset(part.strip().lower() for part in raw.split(",") if part.strip())
    return _CATEGORIES


def reload_categories() -> None:
    """Forget the cached category set so ``CHIP8_DEBUG`` is read again."""

    global _CATEGORIES
    _CATEGORIES = None


def debug_enabled(category: str | None = None) -> bool:
    """Return True when ``category`` (or, with None, any category) is on.

    Hot paths such as ``CHIP8.step`` check this before formatting a message.
    """

    categories = _load_categories()
    if not categories:
        return False
    if category is None or "all" in categories:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
