"""Sound timer that drives the buzzer."""

from __future__ import annotations


class Speaker:
    """Countdown decremented once per timer tick.

    ``is_sounding`` reports whether the countdown was still running during the
    most recent tick, not whether it is non-zero afterwards.
    """

    def __init__(self) -> None:
        self._sound_timer = 0
        self.is_sounding = False

    @property
    def sound_timer(self) -> int:
        return self._sound_timer

    @sound_timer.setter
    def sound_timer(self, value: int) -> None:
        self._sound_timer = value & 0xFF

    def reset(self) -> None:
        self._sound_timer = 0
        self.is_sounding = False

    def tick(self) -> None:
        if self._sound_timer > 0:
            self._sound_timer -= 1
            self.is_sounding = True
        else:
            self.is_sounding = False
