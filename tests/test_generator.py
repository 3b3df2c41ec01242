"""Tests for song generation."""

import pytest

from notefall.generator import PatternSongGenerator, SongGenerationError, request_song
from notefall.models import Difficulty, NoteEvent, Song
from notefall.pitches import midi_number


def test_pattern_generator_is_deterministic_and_playable():
    generator = PatternSongGenerator()
    first = request_song(generator, "rainbow castle")
    second = request_song(generator, "  rainbow castle ")
    assert first == second
    assert 8 <= len(first.notes) <= 15
    assert all(48 <= midi_number(n.pitch) <= 71 for n in first.notes)


def test_empty_theme_fails():
    with pytest.raises(SongGenerationError):
        request_song(PatternSongGenerator(), "   ")


class FailingGenerator:
    def generate(self, theme):
        raise ConnectionError("offline")


class NothingGenerator:
    def generate(self, theme):
        return None


class BackwardsGenerator:
    def generate(self, theme):
        return Song("gen-x", "Backwards", Difficulty.EASY, (
            NoteEvent("C4", 400, 100),
            NoteEvent("D4", 0, 100),
        ))


@pytest.mark.parametrize("generator", [FailingGenerator(), NothingGenerator(), BackwardsGenerator()])
def test_generator_failures_are_retryable_errors(generator):
    with pytest.raises(SongGenerationError):
        request_song(generator, "fairies")
