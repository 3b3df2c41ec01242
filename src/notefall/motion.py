"""Motion model: moves spawned notes down their lanes."""

from __future__ import annotations

from notefall.models import ActiveNote


class MotionModel:
    def __init__(self, speed: float, spawn_progress: float, despawn_progress: float) -> None:
        if despawn_progress <= spawn_progress:
            raise ValueError("despawn_progress must lie beyond spawn_progress")
        self.speed = speed  # progress units per second
        self.spawn_progress = spawn_progress
        self.despawn_progress = despawn_progress

    def progress_at(self, note: ActiveNote, elapsed_ms: float) -> float:
        age_ms = max(0.0, elapsed_ms - note.spawned_at_ms)
        return self.spawn_progress + self.speed * age_ms / 1000.0

    def advance(
        self, notes: list[ActiveNote], elapsed_ms: float
    ) -> tuple[list[ActiveNote], list[ActiveNote]]:
        """Move notes to their position at elapsed_ms.

        Returns (live, despawned). Notes past the despawn threshold are no
        longer live; the caller decides whether an unhit one is a miss.
        """
        live: list[ActiveNote] = []
        despawned: list[ActiveNote] = []
        for note in notes:
            # Never move a note backwards if ticks arrive out of order
            note.progress = max(note.progress, self.progress_at(note, elapsed_ms))
            if note.progress > self.despawn_progress:
                despawned.append(note)
            else:
                live.append(note)
        return live, despawned
