"""Convert wall-clock time into interpreter steps and timer ticks."""

from __future__ import annotations

from dataclasses import dataclass

from pychip8.utils import debug_enabled, debug_log

DEFAULT_CPU_FREQUENCY = 600  # instructions per second
TIMER_FREQUENCY = 60  # Hz
MAX_FRAME_SECONDS = 0.25

_EPSILON = 1e-9


@dataclass
class FrameResult:
    steps: int
    ticks: int


class FrameScheduler:
    """Accumulate elapsed time and hand out whole steps and ticks.

    Fractional remainders carry over between frames so the long-run rates match
    ``cpu_frequency`` and ``timer_frequency`` exactly.
    """

    def __init__(
        self,
        cpu_frequency: float = DEFAULT_CPU_FREQUENCY,
        timer_frequency: float = TIMER_FREQUENCY,
        *,
        max_frame_seconds: float = MAX_FRAME_SECONDS,
    ) -> None:
        if cpu_frequency <= 0 or timer_frequency <= 0:
            raise ValueError("frequencies must be positive")
        if max_frame_seconds <= 0:
            raise ValueError("max_frame_seconds must be positive")
        self.cpu_frequency = cpu_frequency
        self.timer_frequency = timer_frequency
        self._max_frame_seconds = max_frame_seconds
        self._step_credit = 0.0
        self._tick_credit = 0.0

    def reset(self) -> None:
        self._step_credit = 0.0
        self._tick_credit = 0.0

    def advance(self, elapsed: float) -> FrameResult:
        """Return how many steps and ticks ``elapsed`` seconds are worth."""

        if elapsed < 0:
            raise ValueError("elapsed time cannot be negative")
        elapsed = min(elapsed, self._max_frame_seconds)
        self._step_credit += elapsed * self.cpu_frequency
        self._tick_credit += elapsed * self.timer_frequency
        steps = int(self._step_credit + _EPSILON)
        ticks = int(self._tick_credit + _EPSILON)
        self._step_credit -= steps
        self._tick_credit -= ticks
        return FrameResult(steps=steps, ticks=ticks)

    def run_frame(self, cpu, elapsed: float) -> FrameResult:
        """Drive ``cpu`` for ``elapsed`` seconds of emulated time.

        Errors raised by ``cpu.step`` propagate to the caller; remaining work for
        the frame is dropped.
        """

        result = self.advance(elapsed)
        for _ in range(result.steps):
            cpu.step()
        for _ in range(result.ticks):
            cpu.tick()
        if debug_enabled("perf"):
            debug_log("perf", "frame steps=%d ticks=%d elapsed=%.4f", result.steps, result.ticks, elapsed)
        return result
