"""Command-line parsing for run.py."""

from __future__ import annotations

import pytest

import run
from pychip8.video import PALETTES


def test_build_config_from_arguments(tmp_path) -> None:
    rom_path = tmp_path / "game.ch8"
    parser = run.build_arg_parser()
    args = parser.parse_args(
        [
            "--rom",
            str(rom_path),
            "--scale",
            "4",
            "--cpu-frequency",
            "900",
            "--palette",
            "amber",
            "--seed",
            "7",
            "--legacy-shift",
            "--mute",
        ]
    )

    config = run.build_config(args)

    assert config.rom_path == rom_path
    assert config.scale == 4
    assert config.cpu_frequency == 900
    assert config.palette == PALETTES["amber"]
    assert config.seed == 7
    assert config.mute
    assert config.quirks.shift_flag_full_byte
    assert not config.quirks.bcd_single_address


def test_defaults() -> None:
    args = run.build_arg_parser().parse_args([])
    config = run.build_config(args)

    assert config.rom_path is None
    assert config.scale == 10
    assert config.cpu_frequency == 600
    assert not config.fullscreen


def test_missing_rom_exits(tmp_path) -> None:
    with pytest.raises(SystemExit):
        run.main(["--rom", str(tmp_path / "missing.ch8")])


def test_rom_required() -> None:
    with pytest.raises(SystemExit):
        run.main([])


def test_list_roms(tmp_path, capsys) -> None:
    (tmp_path / "b.ch8").write_bytes(b"\x00")
    (tmp_path / "a.ch8").write_bytes(b"\x00")

    assert run.main(["--list", str(tmp_path)]) == 0
    assert capsys.readouterr().out.splitlines() == ["a.ch8", "b.ch8"]
