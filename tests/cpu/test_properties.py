"""Behavioural properties that must hold for any register or input."""

from __future__ import annotations

import pytest

from pychip8.cpu import CHIP8


def load_words(cpu: CHIP8, *words: int) -> None:
    program = bytearray()
    for word in words:
        program += bytes(((word >> 8) & 0xFF, word & 0xFF))
    cpu.load_program(program)


@pytest.mark.parametrize("register", range(15))
def test_add_immediate_wraps_for_every_register(register: int) -> None:
    cpu = CHIP8()
    load_words(cpu, 0x7000 | (register << 8) | 10)
    cpu.state.v[register] = 250

    cpu.step()

    assert cpu.state.v[register] == 4
    assert cpu.state.v[0xF] == 0


@pytest.mark.parametrize(("x", "y"), [(0, 0), (12, 3), (56, 28), (63, 31)])
def test_drawing_twice_restores_display(x: int, y: int) -> None:
    cpu = CHIP8()
    load_words(cpu, 0xA300, 0xD014, 0xD014)
    cpu.memory.write(0x300, b"\xA5\x5A\xFF\x81")
    cpu.state.v[0] = x
    cpu.state.v[1] = y
    before = cpu.display.snapshot()

    cpu.step()
    cpu.step()
    assert cpu.display.snapshot() != before

    cpu.step()
    assert cpu.display.snapshot() == before
    assert cpu.state.v[0xF] == 1


@pytest.mark.parametrize("key", range(16))
def test_wait_for_key_loads_any_key(key: int) -> None:
    cpu = CHIP8()
    load_words(cpu, 0xF50A)
    cpu.step()
    assert cpu.state.pc == 0x200

    cpu.keyboard.press(key)
    cpu.step()

    assert cpu.state.v[5] == key
    assert cpu.state.pc == 0x202
