"""Tests for the step-by-step lesson."""

import pytest

from notefall.lesson import Lesson


def test_lesson_advances_only_on_target():
    lesson = Lesson(["C4", "D4"])
    assert lesson.current_target == "C4"
    assert not lesson.on_note_played("E4")
    assert lesson.on_note_played("C4")
    assert lesson.current_target == "D4"
    assert lesson.on_note_played("D4")
    assert lesson.completed
    assert lesson.current_target is None
    assert not lesson.on_note_played("C4")


def test_restart():
    lesson = Lesson()
    for pitch in lesson.targets:
        lesson.on_note_played(pitch)
    lesson.restart()
    assert lesson.current_target == "C4"


def test_rejects_unknown_pitch():
    with pytest.raises(ValueError):
        Lesson(["H4"])
