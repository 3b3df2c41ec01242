"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from notefall.config import COMBO_PER_MULTIPLIER, FEVER_THRESHOLD, HEALTH_MAX


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def parse(cls, value: str | Difficulty) -> Difficulty:
        """Accept enum members, English labels, or the original Portuguese labels."""
        if isinstance(value, Difficulty):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        if key in _LEGACY_LABELS:
            return _LEGACY_LABELS[key]
        raise ValueError(f"Unknown difficulty: {value!r}")


_LEGACY_LABELS = {
    "fácil": Difficulty.EASY,
    "médio": Difficulty.MEDIUM,
    "difícil": Difficulty.HARD,
}


@dataclass(frozen=True)
class NoteEvent:
    """A single note in a song timeline."""

    pitch: str  # one of notefall.pitches.PITCHES
    onset_ms: float  # time since song start
    duration_ms: float  # advisory, not used for hit timing


@dataclass(frozen=True)
class Song:
    id: str
    title: str
    difficulty: Difficulty
    notes: tuple[NoteEvent, ...] = ()
    description: str | None = None

    @property
    def duration_ms(self) -> float:
        if not self.notes:
            return 0.0
        last = self.notes[-1]
        return last.onset_ms + last.duration_ms


class VisualVariant(Enum):
    STAR = auto()
    DIAMOND = auto()


@dataclass
class ActiveNote:
    """A spawned note travelling down its lane."""

    instance_id: int
    pitch: str
    progress: float
    spawned_at_ms: float
    hit: bool = False
    variant: VisualVariant = VisualVariant.STAR

    def mark_hit(self) -> None:
        if self.hit:
            raise RuntimeError(f"Note {self.instance_id} was already hit")
        self.hit = True


class Phase(Enum):
    SELECT = auto()
    READY = auto()
    PLAYING = auto()
    WON = auto()


class HitTier(Enum):
    PERFECT = "Perfect!"
    GREAT = "Great!"
    GOOD = "Good!"

    @property
    def label(self) -> str:
        return self.value


MISS_FEEDBACK = "Oops!"


@dataclass
class HitResult:
    note: ActiveNote
    tier: HitTier
    accuracy: float  # distance from the hit line, progress units
    base_points: int
    multiplier: int
    points: int
    lane: float  # horizontal position, percent


@dataclass
class HitEffect:
    pitch: str
    lane: float
    created_at_ms: float


@dataclass
class HighScoreEntry:
    score: int
    achieved_at: int  # epoch milliseconds


@dataclass
class SessionState:
    """Mutable state of one playing session.

    All gameplay mutation goes through the methods below so that health stays
    clamped, score never decreases and the cursor only moves forward.
    """

    phase: Phase = Phase.SELECT
    score: int = 0
    combo: int = 0
    max_combo: int = 0
    health: int | None = None
    active_notes: list[ActiveNote] = field(default_factory=list)
    schedule_cursor: int = 0
    hits: int = 0
    misses: int = 0
    feedback: str | None = None
    effects: list[HitEffect] = field(default_factory=list)

    def reset(self, health: int | None) -> None:
        self.score = 0
        self.combo = 0
        self.max_combo = 0
        self.health = None if health is None else _clamp_health(health)
        self.active_notes = []
        self.schedule_cursor = 0
        self.hits = 0
        self.misses = 0
        self.feedback = None
        self.effects = []

    @property
    def multiplier(self) -> int:
        return self.combo // COMBO_PER_MULTIPLIER + 1

    @property
    def fever(self) -> bool:
        return self.health is not None and self.health >= FEVER_THRESHOLD

    def advance_cursor(self, count: int, timeline_length: int) -> None:
        if count < 0:
            raise ValueError("Cursor cannot move backwards")
        self.schedule_cursor = min(timeline_length, self.schedule_cursor + count)

    def apply_hit(self, points: int, health_gain: int = 0) -> None:
        if points <= 0:
            raise ValueError("A hit must award points")
        self.score += points
        self.combo += 1
        self.hits += 1
        self.max_combo = max(self.max_combo, self.combo)
        if self.health is not None:
            self.health = _clamp_health(self.health + health_gain)

    def apply_misses(self, count: int, health_penalty: int = 0) -> None:
        if count <= 0:
            return
        self.combo = 0
        self.misses += count
        if self.health is not None:
            self.health = _clamp_health(self.health - health_penalty * count)


def _clamp_health(value: int) -> int:
    return max(0, min(HEALTH_MAX, value))
