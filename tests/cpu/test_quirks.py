"""Tests pinning the behaviour switches for SHL and BCD."""

from __future__ import annotations

from pychip8.cpu import CHIP8, CPUConfig, Quirks


def make_cpu(quirks: Quirks, *words: int) -> CHIP8:
    cpu = CHIP8(CPUConfig(quirks=quirks))
    program = bytearray()
    for word in words:
        program += bytes(((word >> 8) & 0xFF, word & 0xFF))
    cpu.load_program(program)
    return cpu


def test_shl_defaults_to_high_bit_flag() -> None:
    cpu = make_cpu(Quirks(), 0x820E, 0x820E)
    cpu.state.v[2] = 0b1100_0001

    cpu.step()
    assert cpu.state.v[2] == 0b1000_0010
    assert cpu.state.v[0xF] == 1

    cpu.step()
    assert cpu.state.v[2] == 0b0000_0100
    assert cpu.state.v[0xF] == 1

    cpu.state.v[2] = 0x01
    cpu.state.pc = 0x200
    cpu.step()
    assert cpu.state.v[0xF] == 0


def test_shl_full_byte_flag_copies_register() -> None:
    cpu = make_cpu(Quirks(shift_flag_full_byte=True), 0x820E)
    cpu.state.v[2] = 0x41

    cpu.step()

    assert cpu.state.v[2] == 0x82
    assert cpu.state.v[0xF] == 0x41


def test_shl_on_vf_keeps_shifted_value() -> None:
    cpu = make_cpu(Quirks(), 0x8F0E)
    cpu.state.v[0xF] = 0x81

    cpu.step()

    assert cpu.state.v[0xF] == 0x02


def test_bcd_defaults_to_three_addresses() -> None:
    cpu = make_cpu(Quirks(), 0xA300, 0xF033)
    cpu.state.v[0] = 159

    cpu.step()
    cpu.step()

    assert cpu.memory.read_range(0x300, 3) == bytes((1, 5, 9))


def test_bcd_single_address_keeps_only_units() -> None:
    cpu = make_cpu(Quirks(bcd_single_address=True), 0xA300, 0xF033)
    cpu.state.v[0] = 159

    cpu.step()
    cpu.step()

    assert cpu.memory.read_range(0x300, 3) == bytes((9, 0, 0))
