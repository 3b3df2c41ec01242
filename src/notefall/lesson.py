"""Step-by-step lesson: play the highlighted note to move on."""

from __future__ import annotations

from typing import Sequence

from notefall.pitches import is_valid_pitch

FIRST_LESSON = ("C4", "D4", "E4", "C4")


class Lesson:
    def __init__(self, targets: Sequence[str] = FIRST_LESSON) -> None:
        for pitch in targets:
            if not is_valid_pitch(pitch):
                raise ValueError(f"Unknown pitch: {pitch!r}")
        self.targets = tuple(targets)
        self.step = 0

    @property
    def completed(self) -> bool:
        return self.step >= len(self.targets)

    @property
    def current_target(self) -> str | None:
        return None if self.completed else self.targets[self.step]

    def on_note_played(self, pitch: str) -> bool:
        """True if pitch was the note the lesson was waiting for."""
        if self.completed or pitch != self.targets[self.step]:
            return False
        self.step += 1
        return True

    def restart(self) -> None:
        self.step = 0
