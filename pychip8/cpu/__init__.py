"""CPU package for the CHIP-8 interpreter."""

from .core import CHIP8, CPUConfig, CPUSnapshot, CPUState, Quirks, StackUnderflowError
from .opcodes import CPUError, Instruction, InvalidOpcodeError, decode
from . import opcodes

__all__ = [
    "CHIP8",
    "CPUConfig",
    "CPUState",
    "CPUSnapshot",
    "Quirks",
    "CPUError",
    "InvalidOpcodeError",
    "StackUnderflowError",
    "Instruction",
    "decode",
    "opcodes",
]
