"""Tests for the sound timer."""

from __future__ import annotations

import pytest

from pychip8.audio import Speaker
from pychip8.audio.beeper import build_square_wave


def test_sounding_reports_ticks_while_counting_down() -> None:
    speaker = Speaker()
    speaker.sound_timer = 3

    observed = []
    for _ in range(5):
        speaker.tick()
        observed.append(speaker.is_sounding)

    assert observed == [True, True, True, False, False]
    assert speaker.sound_timer == 0


def test_sound_timer_masks_to_byte() -> None:
    speaker = Speaker()
    speaker.sound_timer = 0x1FF
    assert speaker.sound_timer == 0xFF


def test_reset_silences() -> None:
    speaker = Speaker()
    speaker.sound_timer = 2
    speaker.tick()
    speaker.reset()

    assert speaker.sound_timer == 0
    assert not speaker.is_sounding


def test_square_wave_period() -> None:
    samples = build_square_wave(44_100, 441.0, amplitude=100)

    assert len(samples) == 100
    assert samples[0] == 100
    assert samples[49] == 100
    assert samples[50] == -100
    assert samples[-1] == -100


def test_square_wave_rejects_bad_frequency() -> None:
    with pytest.raises(ValueError):
        build_square_wave(44_100, 0.0)
