"""Tests for the pixel grid."""

from __future__ import annotations

import pytest

from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Display


def test_new_display_is_blank_and_clean() -> None:
    display = Display()

    assert (display.width, display.height) == (DISPLAY_WIDTH, DISPLAY_HEIGHT) == (64, 32)
    assert display.lit_count() == 0
    assert not display.dirty


def test_flip_toggles_and_marks_dirty() -> None:
    display = Display()

    display.flip_pixel(63, 31)
    assert display.get_pixel(63, 31) == 1
    assert display.consume_dirty()
    assert not display.dirty

    display.flip_pixel(63, 31)
    assert display.get_pixel(63, 31) == 0
    assert display.dirty


def test_reset_clears_pixels_and_marks_dirty() -> None:
    display = Display()
    display.flip_pixel(1, 1)
    display.consume_dirty()

    display.reset()

    assert display.lit_count() == 0
    assert display.dirty


def test_rows_follow_row_major_layout() -> None:
    display = Display(4, 2)
    display.flip_pixel(2, 1)

    assert display.rows() == [b"\x00\x00\x00\x00", b"\x00\x00\x01\x00"]


@pytest.mark.parametrize(("x", "y"), [(64, 0), (0, 32), (-1, 0)])
def test_out_of_range_pixel_raises(x: int, y: int) -> None:
    display = Display()
    with pytest.raises(IndexError):
        display.flip_pixel(x, y)
