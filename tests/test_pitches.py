"""Tests for the pitch vocabulary and keyboard layout."""

import pytest

from notefall.pitches import (
    PITCHES,
    WHITE_KEYS,
    frequency,
    is_black,
    lane_position,
    midi_number,
    pitch_from_midi,
)


def test_vocabulary_spans_two_octaves_plus_top_c():
    assert len(PITCHES) == 25
    assert PITCHES[0] == "C3"
    assert PITCHES[-1] == "C5"
    assert len(WHITE_KEYS) == 15


def test_midi_round_trip_and_range():
    assert midi_number("C4") == 60
    assert pitch_from_midi(60) == "C4"
    assert pitch_from_midi(47) is None
    assert pitch_from_midi(73) is None


def test_frequency_of_a4():
    assert frequency("A4") == pytest.approx(440.0)
    assert frequency("C4") == pytest.approx(261.63, abs=0.01)


def test_white_keys_sit_in_slot_centres():
    width = 100 / 15
    assert lane_position("C3") == pytest.approx(width / 2)
    assert lane_position("C5") == pytest.approx(14 * width + width / 2)


def test_black_key_sits_between_neighbours():
    width = 100 / 15
    assert is_black("C#3")
    assert lane_position("C#3") == pytest.approx(width)
    assert lane_position("A#4") == pytest.approx(
        (lane_position("A4") + lane_position("B4")) / 2
    )


def test_all_lanes_within_bounds():
    for pitch in PITCHES:
        assert 0 <= lane_position(pitch) <= 100


def test_unknown_pitch_rejected():
    with pytest.raises(ValueError):
        lane_position("D5")
