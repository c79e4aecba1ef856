"""CHIP-8 system assembly and scheduling helpers."""

from __future__ import annotations

from .machine import MachineConfig, create_machine, restart_machine
from .scheduler import DEFAULT_CPU_FREQUENCY, TIMER_FREQUENCY, FrameResult, FrameScheduler

__all__ = [
    "MachineConfig",
    "create_machine",
    "restart_machine",
    "FrameScheduler",
    "FrameResult",
    "DEFAULT_CPU_FREQUENCY",
    "TIMER_FREQUENCY",
]
