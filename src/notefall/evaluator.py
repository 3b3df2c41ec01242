"""Hit evaluation: match played pitches to in-flight notes and grade them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from notefall.config import COMBO_PER_MULTIPLIER
from notefall.models import ActiveNote, HitTier


@dataclass(frozen=True)
class ScoreTier:
    tier: HitTier
    max_accuracy: float  # exclusive upper bound on distance to the hit line
    points: int


def multiplier_for(combo: int) -> int:
    return combo // COMBO_PER_MULTIPLIER + 1


class HitDetector:
    """Finds the note a played pitch refers to and grades its accuracy.

    Tiers are ordered tightest first; the loosest tier's bound is the hit
    window. A note is in the window when its distance to the hit line is
    strictly below that bound.
    """

    def __init__(self, hit_line: float, tiers: Sequence[ScoreTier]) -> None:
        if not tiers:
            raise ValueError("At least one score tier is required")
        bounds = [t.max_accuracy for t in tiers]
        if any(b <= 0 for b in bounds) or any(a >= b for a, b in zip(bounds, bounds[1:])):
            raise ValueError("Tier bounds must be positive and strictly increasing")
        self.hit_line = hit_line
        self.tiers = tuple(tiers)

    @property
    def window(self) -> float:
        return self.tiers[-1].max_accuracy

    def accuracy(self, note: ActiveNote) -> float:
        return abs(note.progress - self.hit_line)

    def find_candidate(self, notes: Iterable[ActiveNote], pitch: str) -> ActiveNote | None:
        """Nearest unhit note of this pitch inside the window; earliest wins ties."""
        best: ActiveNote | None = None
        best_accuracy = float("inf")
        for note in notes:
            if note.hit or note.pitch != pitch:
                continue
            acc = self.accuracy(note)
            if acc < self.window and acc < best_accuracy:
                best = note
                best_accuracy = acc
        return best

    def grade(self, accuracy: float) -> ScoreTier:
        for tier in self.tiers:
            if accuracy < tier.max_accuracy:
                return tier
        raise ValueError(f"Accuracy {accuracy} is outside the hit window")
