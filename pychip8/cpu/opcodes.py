"""Opcode decoding for the CHIP-8 instruction set.

Decoding is a pure function from a 16-bit word to an :class:`Instruction`
value naming the handler that executes it, so it can be tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping


class CPUError(Exception):
    """Base error for interpreter failures."""


class InvalidOpcodeError(CPUError):
    """Raised when a word does not encode any known instruction."""

    def __init__(self, opcode: int) -> None:
        self.opcode = opcode & 0xFFFF
        super().__init__(f"Invalid opcode: {self.opcode:#06x}")


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction and the operand fields it uses."""

    opcode: int
    mnemonic: str
    handler: str
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFFFF:
            raise ValueError(f"opcode out of range: {self.opcode}")


# 8xyN arithmetic/logic family, keyed by the low nibble.
_ALU_FAMILY: Final[Mapping[int, tuple[str, str]]] = {
    0x0: ("LD", "op_ld_vx_vy"),
    0x1: ("OR", "op_or"),
    0x2: ("AND", "op_and"),
    0x3: ("XOR", "op_xor"),
    0x4: ("ADD", "op_add_vx_vy"),
    0x5: ("SUB", "op_sub"),
    0x6: ("SHR", "op_shr"),
    0x7: ("SUBN", "op_subn"),
    0xE: ("SHL", "op_shl"),
}

# Shifts only take a single register; a non-zero y field is rejected.
_SINGLE_REGISTER_ALU: Final[frozenset[int]] = frozenset({0x6, 0xE})

_KEY_FAMILY: Final[Mapping[int, tuple[str, str]]] = {
    0x9E: ("SKP", "op_skp"),
    0xA1: ("SKNP", "op_sknp"),
}

_MISC_FAMILY: Final[Mapping[int, tuple[str, str]]] = {
    0x07: ("LD", "op_ld_vx_dt"),
    0x0A: ("LD", "op_ld_vx_k"),
    0x15: ("LD", "op_ld_dt_vx"),
    0x18: ("LD", "op_ld_st_vx"),
    0x1E: ("ADD", "op_add_i_vx"),
    0x29: ("LD", "op_ld_f_vx"),
    0x33: ("LD", "op_ld_b_vx"),
    0x55: ("LD", "op_ld_mem_vx"),
    0x65: ("LD", "op_ld_vx_mem"),
}


def decode(opcode: int) -> Instruction:
    """Decode ``opcode`` or raise :class:`InvalidOpcodeError`."""

    opcode &= 0xFFFF
    family = opcode >> 12
    x = (opcode >> 8) & 0xF
    y = (opcode >> 4) & 0xF
    n = opcode & 0xF
    nn = opcode & 0xFF
    nnn = opcode & 0xFFF

    if family == 0x0:
        if opcode == 0x00E0:
            return Instruction(opcode, "CLS", "op_cls")
        if opcode == 0x00EE:
            return Instruction(opcode, "RET", "op_ret")
        raise InvalidOpcodeError(opcode)
    if family == 0x1:
        return Instruction(opcode, "JP", "op_jp", nnn=nnn)
    if family == 0x2:
        return Instruction(opcode, "CALL", "op_call", nnn=nnn)
    if family == 0x3:
        return Instruction(opcode, "SE", "op_se_vx_nn", x=x, nn=nn)
    if family == 0x4:
        return Instruction(opcode, "SNE", "op_sne_vx_nn", x=x, nn=nn)
    if family == 0x5:
        if n != 0:
            raise InvalidOpcodeError(opcode)
        return Instruction(opcode, "SE", "op_se_vx_vy", x=x, y=y)
    if family == 0x6:
        return Instruction(opcode, "LD", "op_ld_vx_nn", x=x, nn=nn)
    if family == 0x7:
        return Instruction(opcode, "ADD", "op_add_vx_nn", x=x, nn=nn)
    if family == 0x8:
        entry = _ALU_FAMILY.get(n)
        if entry is None or (n in _SINGLE_REGISTER_ALU and y != 0):
            raise InvalidOpcodeError(opcode)
        mnemonic, handler = entry
        return Instruction(opcode, mnemonic, handler, x=x, y=y)
    if family == 0x9:
        if n != 0:
            raise InvalidOpcodeError(opcode)
        return Instruction(opcode, "SNE", "op_sne_vx_vy", x=x, y=y)
    if family == 0xA:
        return Instruction(opcode, "LD", "op_ld_i", nnn=nnn)
    if family == 0xB:
        return Instruction(opcode, "JP", "op_jp_v0", nnn=nnn)
    if family == 0xC:
        return Instruction(opcode, "RND", "op_rnd", x=x, nn=nn)
    if family == 0xD:
        return Instruction(opcode, "DRW", "op_drw", x=x, y=y, n=n)

    table = _KEY_FAMILY if family == 0xE else _MISC_FAMILY
    entry = table.get(nn)
    if entry is None:
        raise InvalidOpcodeError(opcode)
    mnemonic, handler = entry
    return Instruction(opcode, mnemonic, handler, x=x)


HANDLER_NAMES: Final[frozenset[str]] = frozenset(
    {
        "op_cls",
        "op_ret",
        "op_jp",
        "op_call",
        "op_se_vx_nn",
        "op_sne_vx_nn",
        "op_se_vx_vy",
        "op_ld_vx_nn",
        "op_add_vx_nn",
        "op_sne_vx_vy",
        "op_ld_i",
        "op_jp_v0",
        "op_rnd",
        "op_drw",
    }
    | {handler for _, handler in _ALU_FAMILY.values()}
    | {handler for _, handler in _KEY_FAMILY.values()}
    | {handler for _, handler in _MISC_FAMILY.values()}
)
