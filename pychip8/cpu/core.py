"""CHIP-8 interpreter: register file, timers and instruction execution."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable

from pychip8.audio import Speaker
from pychip8.bus import Memory, PROGRAM_OFFSET
from pychip8.io import Keyboard
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Display, GLYPH_BYTES

from .opcodes import CPUError, Instruction, InvalidOpcodeError, decode

OPCODE_SIZE = 2
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


class StackUnderflowError(CPUError):
    """Raised when RET executes with an empty call stack."""


@dataclass(frozen=True)
class Quirks:
    """Behaviour switches for instructions whose semantics vary between interpreters.

    ``shift_flag_full_byte``: SHL copies the whole register into VF instead of
    the bit shifted out.
    ``bcd_single_address``: LD B, Vx writes every digit to ``I`` so that only the
    units digit is kept.
    """

    shift_flag_full_byte: bool = False
    bcd_single_address: bool = False


@dataclass
class CPUConfig:
    """Construction-time options for :class:`CHIP8`."""

    quirks: Quirks = field(default_factory=Quirks)
    seed: int | None = None


@dataclass
class CPUState:
    """Mutable register file of the interpreter."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x0000
    pc: int = PROGRAM_OFFSET
    stack: list[int] = field(default_factory=list)
    delay_timer: int = 0


@dataclass(frozen=True)
class CPUSnapshot:
    """Read-only copy of the interpreter registers for tooling."""

    v: tuple[int, ...]
    i: int
    pc: int
    stack: tuple[int, ...]
    delay_timer: int
    sound_timer: int


@dataclass
class CHIP8:
    """The interpreter and the devices it exclusively owns."""

    config: CPUConfig = field(default_factory=CPUConfig)
    memory: Memory = field(default_factory=Memory)
    display: Display = field(default_factory=Display)
    keyboard: Keyboard = field(default_factory=Keyboard)
    speaker: Speaker = field(default_factory=Speaker)
    trace: TraceRecorder | None = None

    state: CPUState = field(default_factory=CPUState)
    step_count: int = 0

    def __post_init__(self) -> None:
        self._rng = random.Random(self.config.seed)
        self.reset()

    # ------------------------------------------------------------------
    # Public API

    def reset(self) -> None:
        """Restore power-on state in place. The keyboard is left untouched."""

        state = self.state
        state.v[:] = bytes(REGISTER_COUNT)
        state.i = 0
        state.pc = PROGRAM_OFFSET
        state.stack.clear()
        state.delay_timer = 0
        self.step_count = 0
        self.memory.reset()
        self.display.reset()
        self.speaker.reset()

    def load_program(self, data: Iterable[int]) -> None:
        """Copy a program image to the load offset without resetting anything."""

        payload = bytes(data)
        self.memory.write(PROGRAM_OFFSET, payload)
        if debug_enabled("loader"):
            debug_log("loader", "loaded %d bytes at %03x", len(payload), PROGRAM_OFFSET)

    def fetch(self) -> int:
        """Return the big-endian opcode at the program counter."""

        return self.memory.read_word(self.state.pc)

    def step(self) -> None:
        """Fetch, decode and execute exactly one instruction."""

        pc_before = self.state.pc
        opcode = self.fetch()
        try:
            instruction = decode(opcode)
        except InvalidOpcodeError:
            if self.trace is not None:
                self.trace.record_step(self.snapshot(), opcode, mnemonic="???", note="invalid")
            raise

        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%03x opcode=%04x %s", pc_before, opcode, instruction.mnemonic)
        if self.trace is not None:
            self.trace.record_step(self.snapshot(), opcode, mnemonic=instruction.mnemonic)

        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")
        handler(instruction)
        self.step_count += 1

    def tick(self) -> None:
        """Advance the delay and sound timers by one 60 Hz frame."""

        if self.state.delay_timer > 0:
            self.state.delay_timer -= 1
        self.speaker.tick()

    @property
    def registers(self) -> tuple[int, ...]:
        return tuple(self.state.v)

    def snapshot(self) -> CPUSnapshot:
        state = self.state
        return CPUSnapshot(
            v=tuple(state.v),
            i=state.i,
            pc=state.pc,
            stack=tuple(state.stack),
            delay_timer=state.delay_timer,
            sound_timer=self.speaker.sound_timer,
        )

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: Instruction) -> None:
        self.display.reset()
        self._advance()

    def op_ret(self, _: Instruction) -> None:
        if not self.state.stack:
            raise StackUnderflowError(f"RET with empty stack at pc={self.state.pc:#05x}")
        self.state.pc = (self.state.stack.pop() + OPCODE_SIZE) & 0xFFFF

    def op_jp(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn

    def op_call(self, instruction: Instruction) -> None:
        self.state.stack.append(self.state.pc)
        self.state.pc = instruction.nnn

    def op_jp_v0(self, instruction: Instruction) -> None:
        self.state.pc = (instruction.nnn + self.state.v[0]) & 0xFFFF

    # ------------------------------------------------------------------
    # Conditional skips

    def op_se_vx_nn(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] == instruction.nn)

    def op_sne_vx_nn(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] != instruction.nn)

    def op_se_vx_vy(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] == v[instruction.y])

    def op_sne_vx_vy(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] != v[instruction.y])

    def op_skp(self, instruction: Instruction) -> None:
        self._skip_if(self.keyboard.is_pressed(self.state.v[instruction.x]))

    def op_sknp(self, instruction: Instruction) -> None:
        self._skip_if(not self.keyboard.is_pressed(self.state.v[instruction.x]))

    # ------------------------------------------------------------------
    # Register loads and arithmetic

    def op_ld_vx_nn(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = instruction.nn
        self._advance()

    def op_add_vx_nn(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = (v[instruction.x] + instruction.nn) & 0xFF
        self._advance()

    def op_ld_vx_vy(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = v[instruction.y]
        self._advance()

    def op_or(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] |= v[instruction.y]
        self._advance()

    def op_and(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] &= v[instruction.y]
        self._advance()

    def op_xor(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] ^= v[instruction.y]
        self._advance()

    def op_add_vx_vy(self, instruction: Instruction) -> None:
        v = self.state.v
        result = v[instruction.x] + v[instruction.y]
        v[instruction.x] = result & 0xFF
        v[FLAG_REGISTER] = 1 if result > 0xFF else 0
        self._advance()

    def op_sub(self, instruction: Instruction) -> None:
        v = self.state.v
        result = v[instruction.x] - v[instruction.y]
        v[instruction.x] = result & 0xFF
        v[FLAG_REGISTER] = 1 if result >= 0 else 0
        self._advance()

    def op_subn(self, instruction: Instruction) -> None:
        v = self.state.v
        result = v[instruction.y] - v[instruction.x]
        v[instruction.x] = result & 0xFF
        v[FLAG_REGISTER] = 1 if result >= 0 else 0
        self._advance()

    def op_shr(self, instruction: Instruction) -> None:
        v = self.state.v
        v[FLAG_REGISTER] = v[instruction.x] & 0x01
        v[instruction.x] >>= 1
        self._advance()

    def op_shl(self, instruction: Instruction) -> None:
        v = self.state.v
        value = v[instruction.x]
        if self.config.quirks.shift_flag_full_byte:
            v[FLAG_REGISTER] = value & 0xFF
        else:
            v[FLAG_REGISTER] = (value >> 7) & 0x01
        v[instruction.x] = (value << 1) & 0xFF
        self._advance()

    def op_rnd(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self._rng.randrange(0x100) & instruction.nn
        self._advance()

    # ------------------------------------------------------------------
    # Address register and memory

    def op_ld_i(self, instruction: Instruction) -> None:
        self.state.i = instruction.nnn
        self._advance()

    def op_add_i_vx(self, instruction: Instruction) -> None:
        self.state.i = (self.state.i + self.state.v[instruction.x]) & 0xFFFF
        self._advance()

    def op_ld_f_vx(self, instruction: Instruction) -> None:
        self.state.i = self.state.v[instruction.x] * GLYPH_BYTES
        self._advance()

    def op_ld_b_vx(self, instruction: Instruction) -> None:
        value = self.state.v[instruction.x]
        digits = (value // 100, (value // 10) % 10, value % 10)
        address = self.state.i
        if self.config.quirks.bcd_single_address:
            for digit in digits:
                self.memory.store(address, digit)
        else:
            self.memory.write(address, digits)
        self._advance()

    def op_ld_mem_vx(self, instruction: Instruction) -> None:
        self.memory.write(self.state.i, self.state.v[: instruction.x + 1])
        self._advance()

    def op_ld_vx_mem(self, instruction: Instruction) -> None:
        count = instruction.x + 1
        self.state.v[:count] = self.memory.read_range(self.state.i, count)
        self._advance()

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, instruction: Instruction) -> None:
        v = self.state.v
        display = self.display
        origin_x = v[instruction.x]
        origin_y = v[instruction.y]
        sprite = self.memory.read_range(self.state.i, instruction.n)

        collision = 0
        for row, bits in enumerate(sprite):
            y = (origin_y + row) % display.height
            for col in range(8):
                if not bits & (0x80 >> col):
                    continue
                x = (origin_x + col) % display.width
                collision |= display.get_pixel(x, y)
                display.flip_pixel(x, y)

        v[FLAG_REGISTER] = collision
        self._advance()

    # ------------------------------------------------------------------
    # Timers and keypad

    def op_ld_vx_dt(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self.state.delay_timer
        self._advance()

    def op_ld_dt_vx(self, instruction: Instruction) -> None:
        self.state.delay_timer = self.state.v[instruction.x]
        self._advance()

    def op_ld_st_vx(self, instruction: Instruction) -> None:
        self.speaker.sound_timer = self.state.v[instruction.x]
        self._advance()

    def op_ld_vx_k(self, instruction: Instruction) -> None:
        key = self.keyboard.most_recently_pressed()
        if key is None:
            return
        self.state.v[instruction.x] = key
        self._advance()

    # ------------------------------------------------------------------
    # Internal helpers

    def _advance(self) -> None:
        self.state.pc = (self.state.pc + OPCODE_SIZE) & 0xFFFF

    def _skip_if(self, condition: bool) -> None:
        offset = 2 * OPCODE_SIZE if condition else OPCODE_SIZE
        self.state.pc = (self.state.pc + offset) & 0xFFFF
