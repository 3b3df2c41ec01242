"""Timeline scheduler: spawns notes once their onset has passed."""

from __future__ import annotations

import itertools
import random
from typing import Callable, Sequence

from notefall.models import ActiveNote, NoteEvent, VisualVariant

_instance_ids = itertools.count(1)


class Scheduler:
    """Walks a song timeline forward, one cursor per session.

    Onsets must be non-decreasing. Spawning is driven by elapsed time rather
    than a tick count, so a late tick spawns everything that came due since
    the previous one instead of skipping notes.
    """

    def __init__(
        self,
        notes: Sequence[NoteEvent],
        initial_progress: float,
        variant_picker: Callable[[], VisualVariant] | None = None,
    ) -> None:
        self._notes = tuple(notes)
        self._initial_progress = initial_progress
        self._cursor = 0
        self._rng = random.Random()
        self._pick_variant = variant_picker or self._random_variant

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def finished(self) -> bool:
        return self._cursor >= len(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def _random_variant(self) -> VisualVariant:
        return self._rng.choice((VisualVariant.STAR, VisualVariant.DIAMOND))

    def advance(self, elapsed_ms: float) -> list[ActiveNote]:
        """Spawn every note whose onset is at or before elapsed_ms, in timeline order."""
        spawned: list[ActiveNote] = []
        while self._cursor < len(self._notes):
            event = self._notes[self._cursor]
            if event.onset_ms > elapsed_ms:
                break
            spawned.append(
                ActiveNote(
                    instance_id=next(_instance_ids),
                    pitch=event.pitch,
                    progress=self._initial_progress,
                    spawned_at_ms=elapsed_ms,
                    variant=self._pick_variant(),
                )
            )
            self._cursor += 1
        return spawned
