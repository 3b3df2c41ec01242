"""Tests for the motion model."""

import pytest

from notefall.models import ActiveNote
from notefall.motion import MotionModel


def _note(spawned_at: float = 0.0, progress: float = 0.0) -> ActiveNote:
    return ActiveNote(instance_id=1, pitch="C4", progress=progress, spawned_at_ms=spawned_at)


def test_progress_grows_with_elapsed_time():
    motion = MotionModel(speed=100.0, spawn_progress=0.0, despawn_progress=105.0)
    note = _note()
    live, gone = motion.advance([note], 500)
    assert note.progress == 50.0
    assert live == [note]
    assert gone == []


def test_rate_does_not_depend_on_tick_count():
    motion = MotionModel(speed=45.0, spawn_progress=-15.0, despawn_progress=105.0)
    a = _note(progress=-15.0)
    b = _note(progress=-15.0)
    for elapsed in range(0, 1001, 16):
        motion.advance([a], elapsed)
    motion.advance([a], 1000)
    motion.advance([b], 1000)
    assert a.progress == pytest.approx(b.progress)
    assert b.progress == pytest.approx(30.0)


def test_note_past_threshold_despawns():
    motion = MotionModel(speed=100.0, spawn_progress=0.0, despawn_progress=105.0)
    early = _note(spawned_at=0.0)
    late = _note(spawned_at=1000.0)
    live, gone = motion.advance([early, late], 1060)
    assert gone == [early]
    assert live == [late]


def test_progress_never_moves_backwards():
    motion = MotionModel(speed=100.0, spawn_progress=0.0, despawn_progress=105.0)
    note = _note()
    motion.advance([note], 800)
    motion.advance([note], 200)
    assert note.progress == 80.0


def test_thresholds_validated():
    with pytest.raises(ValueError):
        MotionModel(speed=1.0, spawn_progress=10.0, despawn_progress=5.0)
