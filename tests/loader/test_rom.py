"""Tests for raw ROM loading."""

from __future__ import annotations

import io

import pytest

from pychip8.loader import MAX_PROGRAM_LENGTH, RomFormatError, list_roms, load_rom, load_rom_from_path


def test_load_rom_returns_bytes() -> None:
    assert load_rom(io.BytesIO(b"\x00\xE0\x12\x00")) == b"\x00\xE0\x12\x00"


def test_load_rom_accepts_maximum_size() -> None:
    payload = bytes(MAX_PROGRAM_LENGTH)
    assert len(load_rom(io.BytesIO(payload))) == 3584


def test_load_rom_rejects_empty_image() -> None:
    with pytest.raises(RomFormatError):
        load_rom(io.BytesIO(b""))


def test_load_rom_rejects_oversized_image() -> None:
    with pytest.raises(RomFormatError):
        load_rom(io.BytesIO(bytes(MAX_PROGRAM_LENGTH + 1)))


def test_load_rom_from_path(tmp_path) -> None:
    rom_path = tmp_path / "pong.ch8"
    rom_path.write_bytes(b"\x6A\x02")
    assert load_rom_from_path(rom_path) == b"\x6A\x02"


def test_load_rom_from_missing_path(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rom_from_path(tmp_path / "missing.ch8")


def test_list_roms_filters_and_sorts(tmp_path) -> None:
    for name in ("Tetris.ch8", "brix.c8", "readme.txt", "UFO.ROM"):
        (tmp_path / name).write_bytes(b"\x00")
    (tmp_path / "nested.ch8").mkdir()

    assert [path.name for path in list_roms(tmp_path)] == ["brix.c8", "Tetris.ch8", "UFO.ROM"]


def test_list_roms_missing_directory(tmp_path) -> None:
    with pytest.raises(RomFormatError):
        list_roms(tmp_path / "nope")
