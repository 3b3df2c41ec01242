"""Rhythm session: phase machine tying scheduler, motion, hit detection and scoring together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

from notefall import config
from notefall.evaluator import HitDetector, ScoreTier, multiplier_for
from notefall.models import (
    MISS_FEEDBACK,
    HighScoreEntry,
    HitEffect,
    HitResult,
    HitTier,
    Phase,
    SessionState,
    Song,
    VisualVariant,
)
from notefall.motion import MotionModel
from notefall.pitches import lane_position
from notefall.scheduler import Scheduler
from notefall.song_loader import validate_song

if TYPE_CHECKING:
    from notefall.clock import FrameClock, TaskHandle
    from notefall.high_scores import HighScoreStore

logger = logging.getLogger(__name__)

FANFARE = ("C5", "E4", "G4")


class SessionPhaseError(Exception):
    """Raised when an operation is not allowed in the current phase."""


@runtime_checkable
class AudioSink(Protocol):
    def play_pitch(self, pitch: str) -> None: ...
    def play_accent(self) -> None: ...


@dataclass(frozen=True)
class SessionRules:
    """Everything that differs between the Magic Show and Challenge games."""

    name: str
    confirm_before_play: bool
    speed: float
    spawn_progress: float
    despawn_progress: float
    hit_line: float
    tiers: tuple[ScoreTier, ...]
    use_multiplier: bool
    starting_health: int | None
    health_per_hit: int = 0
    health_per_miss: int = 0
    record_high_scores: bool = False
    fanfare_on_win: bool = False


MAGIC_SHOW_RULES = SessionRules(
    name="magic_show",
    confirm_before_play=True,
    speed=config.MAGIC_NOTE_SPEED,
    spawn_progress=config.MAGIC_SPAWN_PROGRESS,
    despawn_progress=config.MAGIC_DESPAWN_PROGRESS,
    hit_line=config.MAGIC_HIT_LINE,
    tiers=(
        ScoreTier(HitTier.PERFECT, config.PERFECT_WINDOW, config.PERFECT_POINTS),
        ScoreTier(HitTier.GREAT, config.GREAT_WINDOW, config.GREAT_POINTS),
        ScoreTier(HitTier.GOOD, config.GOOD_WINDOW, config.GOOD_POINTS),
    ),
    use_multiplier=True,
    starting_health=config.HEALTH_START,
    health_per_hit=config.HEALTH_PER_HIT,
    health_per_miss=config.HEALTH_PER_MISS,
    record_high_scores=True,
    fanfare_on_win=True,
)

CHALLENGE_RULES = SessionRules(
    name="challenge",
    confirm_before_play=False,
    speed=config.CHALLENGE_NOTE_SPEED,
    spawn_progress=config.CHALLENGE_SPAWN_PROGRESS,
    despawn_progress=config.CHALLENGE_DESPAWN_PROGRESS,
    hit_line=config.CHALLENGE_HIT_LINE,
    tiers=(ScoreTier(HitTier.GOOD, config.CHALLENGE_WINDOW, config.CHALLENGE_POINTS),),
    use_multiplier=False,
    starting_health=None,
)


class RhythmSession:
    """One song at a time: SELECT -> (READY ->) PLAYING -> WON -> SELECT.

    Ticks and player input run on the same loop and may interleave freely;
    each call leaves the state consistent for the next. With a clock, the
    session drives its own ticks through a next-frame task that is re-armed
    while PLAYING and cancelled as soon as the phase changes.
    """

    def __init__(
        self,
        rules: SessionRules = MAGIC_SHOW_RULES,
        clock: FrameClock | None = None,
        audio: AudioSink | None = None,
        high_scores: HighScoreStore | None = None,
        variant_picker: Callable[[], VisualVariant] | None = None,
    ) -> None:
        self.rules = rules
        self.state = SessionState()
        self.song: Song | None = None
        self.last_high_scores: list[HighScoreEntry] = []
        self._clock = clock
        self._audio = audio
        self._high_scores = high_scores
        self._variant_picker = variant_picker
        self._detector = HitDetector(rules.hit_line, rules.tiers)
        self._motion = MotionModel(rules.speed, rules.spawn_progress, rules.despawn_progress)
        self._scheduler: Scheduler | None = None
        self._tick_handle: TaskHandle | None = None
        self._started_at_ms = 0.0
        self._elapsed_ms = 0.0
        self.wins = 0

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def detector(self) -> HitDetector:
        return self._detector

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    # -- transitions ---------------------------------------------------

    def select_song(self, song: Song) -> None:
        """Pick a song. Malformed songs are rejected and the phase stays SELECT."""
        self._require(Phase.SELECT)
        validate_song(song)
        self.song = song
        self.last_high_scores = []
        self._begin()
        if self.rules.confirm_before_play:
            self._set_phase(Phase.READY)
        else:
            self._start_playing()

    def confirm(self) -> None:
        self._require(Phase.READY)
        self._start_playing()

    def dismiss(self) -> None:
        self._require(Phase.WON)
        self._set_phase(Phase.SELECT)

    def abort(self) -> None:
        """Leave whatever is happening and return to song selection."""
        self._cancel_tick()
        self._scheduler = None
        self.state.reset(self.rules.starting_health)
        self._set_phase(Phase.SELECT)

    def close(self) -> None:
        self._cancel_tick()

    # -- simulation ----------------------------------------------------

    def tick(self, elapsed_ms: float) -> int:
        """Advance the simulation to elapsed_ms since play started.

        Runs spawning, then motion, then miss handling, then the win check.
        Returns the number of notes missed during this tick.
        """
        self._require(Phase.PLAYING)
        scheduler = self._scheduler
        state = self.state
        elapsed_ms = max(elapsed_ms, self._elapsed_ms)
        self._elapsed_ms = elapsed_ms

        spawned = scheduler.advance(elapsed_ms)
        if spawned:
            state.active_notes.extend(spawned)
            state.advance_cursor(len(spawned), len(scheduler))

        state.active_notes, despawned = self._motion.advance(state.active_notes, elapsed_ms)
        missed = sum(1 for note in despawned if not note.hit)
        if missed:
            state.apply_misses(missed, self.rules.health_per_miss)
            state.feedback = MISS_FEEDBACK
            logger.debug("%d note(s) missed at %.0fms", missed, elapsed_ms)

        state.effects = [
            e for e in state.effects
            if elapsed_ms - e.created_at_ms < config.HIT_EFFECT_LIFETIME_MS
        ]
        self._check_win()
        return missed

    def on_note_played(self, pitch: str) -> HitResult | None:
        """Handle one player input. Returns the hit, or None when nothing matched.

        The pitch sounds in every phase; only PLAYING scores it.
        """
        if self._audio is not None:
            self._audio.play_pitch(pitch)
        if self.phase is not Phase.PLAYING:
            return None

        state = self.state
        note = self._detector.find_candidate(state.active_notes, pitch)
        if note is None:
            return None

        accuracy = self._detector.accuracy(note)
        tier = self._detector.grade(accuracy)
        multiplier = multiplier_for(state.combo) if self.rules.use_multiplier else 1
        points = tier.points * multiplier

        note.mark_hit()
        state.active_notes.remove(note)
        state.apply_hit(points, self.rules.health_per_hit)
        state.feedback = tier.tier.label
        lane = lane_position(pitch)
        state.effects.append(HitEffect(pitch=pitch, lane=lane, created_at_ms=self._elapsed_ms))
        if self._audio is not None:
            self._audio.play_accent()

        result = HitResult(
            note=note,
            tier=tier.tier,
            accuracy=accuracy,
            base_points=tier.points,
            multiplier=multiplier,
            points=points,
            lane=lane,
        )
        self._check_win()
        return result

    # -- internals -----------------------------------------------------

    def _begin(self) -> None:
        self.state.reset(self.rules.starting_health)
        self._scheduler = Scheduler(
            self.song.notes, self.rules.spawn_progress, self._variant_picker
        )
        self._elapsed_ms = 0.0

    def _start_playing(self) -> None:
        self._set_phase(Phase.PLAYING)
        if self._clock is not None:
            self._started_at_ms = self._clock.now_ms
            self._arm_tick()

    def _arm_tick(self) -> None:
        self._tick_handle = self._clock.next_frame(self._on_frame)

    def _on_frame(self, now_ms: float) -> None:
        self._tick_handle = None
        if self.phase is not Phase.PLAYING:
            return
        self.tick(now_ms - self._started_at_ms)
        if self.phase is Phase.PLAYING:
            self._arm_tick()

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _check_win(self) -> None:
        if self.phase is not Phase.PLAYING:
            return
        if self._scheduler.finished and not self.state.active_notes:
            self._cancel_tick()
            self._set_phase(Phase.WON)
            self.wins += 1
            self._on_won()

    def _on_won(self) -> None:
        if self.rules.fanfare_on_win and self._audio is not None:
            for pitch in FANFARE:
                self._audio.play_pitch(pitch)
        if self.rules.record_high_scores and self._high_scores is not None:
            self.last_high_scores = self._high_scores.record(self.song.id, self.state.score)
        logger.info("Finished %s with %d points", self.song.id, self.state.score)

    def _require(self, phase: Phase) -> None:
        if self.state.phase is not phase:
            raise SessionPhaseError(f"Expected {phase.name}, session is {self.state.phase.name}")

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self.state.phase:
            logger.debug("Session %s: %s -> %s", self.rules.name, self.state.phase.name, phase.name)
        self.state.phase = phase
        if phase is not Phase.PLAYING:
            self._cancel_tick()
