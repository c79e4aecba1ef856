"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pychip8.cpu import CHIP8, CPUConfig, Quirks
from pychip8.utils import TraceRecorder


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    rom_image: Optional[bytes] = None
    quirks: Quirks = field(default_factory=Quirks)
    seed: int | None = None
    trace_capacity: int = 0


def create_machine(config: MachineConfig) -> CHIP8:
    """Instantiate an interpreter and load ``config.rom_image`` if given."""

    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity > 0 else None
    cpu = CHIP8(config=CPUConfig(quirks=config.quirks, seed=config.seed), trace=trace)
    if config.rom_image:
        cpu.load_program(config.rom_image)
    return cpu


def restart_machine(cpu: CHIP8, rom_image: Optional[bytes]) -> None:
    """Reset ``cpu`` in place and reload ``rom_image``."""

    cpu.reset()
    if cpu.trace is not None:
        cpu.trace.clear()
    if rom_image:
        cpu.load_program(rom_image)
