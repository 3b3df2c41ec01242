"""Tests for the built-in catalog."""

import pytest

from notefall.models import Difficulty
from notefall.song_loader import validate_song
from notefall.songs import CHALLENGE_SONGS, SONGS, get_song


def test_catalog_is_valid():
    assert len(SONGS) == 30
    assert len({s.id for s in SONGS}) == 30
    for song in SONGS:
        validate_song(song)


def test_challenge_list_is_first_fifteen():
    assert CHALLENGE_SONGS == SONGS[:15]


def test_remix_is_faster():
    base = get_song("twinkle")
    remix = get_song("twinkle_remix")
    assert remix.difficulty is Difficulty.HARD
    assert remix.notes[1].onset_ms == pytest.approx(base.notes[1].onset_ms / 1.5)
    assert remix.notes[1].duration_ms == base.notes[1].duration_ms / 2


def test_magic_variant_alternates_top_c():
    magic = get_song("mary_lamb_magic")
    assert [n.pitch for n in magic.notes][:4] == ["E4", "C5", "C4", "C5"]


def test_unknown_song():
    with pytest.raises(KeyError):
        get_song("nope")
