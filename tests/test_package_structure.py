"""Baseline tests ensuring the package layout loads correctly."""

import pychip8


def test_package_exports() -> None:
    for name in ("cpu", "bus", "video", "audio", "io", "system", "loader", "ui", "utils"):
        assert hasattr(pychip8, name), f"missing submodule: {name}"


def test_cpu_exports() -> None:
    from pychip8 import cpu

    for name in ("CHIP8", "CPUConfig", "Quirks", "InvalidOpcodeError", "decode"):
        assert hasattr(cpu, name), f"cpu missing symbol: {name}"
