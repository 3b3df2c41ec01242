"""Tests for core data models."""

import pytest

from notefall.models import ActiveNote, Difficulty, NoteEvent, SessionState, Song


def test_difficulty_accepts_legacy_labels():
    assert Difficulty.parse("Fácil") is Difficulty.EASY
    assert Difficulty.parse("Médio") is Difficulty.MEDIUM
    assert Difficulty.parse("hard") is Difficulty.HARD
    with pytest.raises(ValueError):
        Difficulty.parse("Impossible")


def test_song_duration():
    song = Song("s", "S", Difficulty.EASY, (
        NoteEvent("C4", 0, 500),
        NoteEvent("D4", 500, 250),
    ))
    assert song.duration_ms == 750


def test_mark_hit_only_once():
    note = ActiveNote(instance_id=1, pitch="C4", progress=0.0, spawned_at_ms=0.0)
    note.mark_hit()
    assert note.hit
    with pytest.raises(RuntimeError):
        note.mark_hit()


def test_health_is_clamped():
    state = SessionState()
    state.reset(health=99)
    state.apply_hit(100, health_gain=3)
    assert state.health == 100
    state.apply_misses(30, health_penalty=5)
    assert state.health == 0
    assert state.combo == 0


def test_health_unset_in_simple_mode():
    state = SessionState()
    state.reset(health=None)
    state.apply_hit(10, health_gain=3)
    state.apply_misses(1, health_penalty=5)
    assert state.health is None
    assert not state.fever


def test_multiplier_and_fever():
    state = SessionState()
    state.reset(health=90)
    assert state.fever
    for combo, expected in [(0, 1), (9, 1), (10, 2), (19, 2), (20, 3), (29, 3), (45, 5)]:
        state.combo = combo
        assert state.multiplier == expected


def test_cursor_never_passes_timeline_end():
    state = SessionState()
    state.advance_cursor(2, timeline_length=3)
    state.advance_cursor(5, timeline_length=3)
    assert state.schedule_cursor == 3
    with pytest.raises(ValueError):
        state.advance_cursor(-1, timeline_length=3)
