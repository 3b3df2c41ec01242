"""Tests for hit detection and grading."""

import pytest

from notefall.evaluator import HitDetector, ScoreTier, multiplier_for
from notefall.models import ActiveNote, HitTier

TIERS = (
    ScoreTier(HitTier.PERFECT, 4.0, 300),
    ScoreTier(HitTier.GREAT, 8.0, 200),
    ScoreTier(HitTier.GOOD, 12.0, 100),
)


def _note(pitch: str, progress: float, instance_id: int = 1) -> ActiveNote:
    return ActiveNote(instance_id=instance_id, pitch=pitch, progress=progress, spawned_at_ms=0.0)


def test_tightest_tier_wins():
    detector = HitDetector(82.0, TIERS)
    assert detector.grade(0.0).tier is HitTier.PERFECT
    assert detector.grade(3.9).tier is HitTier.PERFECT
    assert detector.grade(4.0).tier is HitTier.GREAT
    assert detector.grade(7.5).tier is HitTier.GREAT
    assert detector.grade(11.9).tier is HitTier.GOOD


def test_window_edge_is_exclusive():
    detector = HitDetector(82.0, TIERS)
    assert detector.find_candidate([_note("C4", 94.0)], "C4") is None
    assert detector.find_candidate([_note("C4", 70.5)], "C4") is not None
    with pytest.raises(ValueError):
        detector.grade(12.0)


def test_wrong_pitch_or_already_hit_never_matches():
    detector = HitDetector(82.0, TIERS)
    hit = _note("C4", 82.0)
    hit.hit = True
    assert detector.find_candidate([_note("D4", 82.0), hit], "C4") is None


def test_nearest_candidate_is_picked():
    detector = HitDetector(82.0, TIERS)
    far = _note("C4", 73.0, instance_id=1)
    near = _note("C4", 84.0, instance_id=2)
    assert detector.find_candidate([far, near], "C4") is near


def test_equal_distance_picks_earliest():
    detector = HitDetector(82.0, TIERS)
    first = _note("C4", 80.0, instance_id=1)
    second = _note("C4", 84.0, instance_id=2)
    assert detector.find_candidate([first, second], "C4") is first


def test_multiplier_law():
    assert [multiplier_for(c) for c in (0, 9, 10, 19, 20, 29, 30)] == [1, 1, 2, 2, 3, 3, 4]


def test_tiers_must_be_ordered():
    with pytest.raises(ValueError):
        HitDetector(82.0, (TIERS[1], TIERS[0]))
    with pytest.raises(ValueError):
        HitDetector(82.0, ())
