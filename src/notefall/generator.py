"""Song generation: the collaborator protocol and an offline pattern generator."""

from __future__ import annotations

import hashlib
import logging
import random
from typing import Protocol, runtime_checkable

from notefall.models import Difficulty, Song
from notefall.song_loader import SongLoadError, validate_song
from notefall.songs import create_pattern

logger = logging.getLogger(__name__)


class SongGenerationError(Exception):
    """The song source could not produce a playable song. Safe to retry."""


@runtime_checkable
class SongGenerator(Protocol):
    def generate(self, theme: str) -> Song: ...


# Naturals and sharps of octaves 3 and 4
_GENERATOR_PITCHES = [
    f"{name}{octave}"
    for octave in (3, 4)
    for name in ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
]


class PatternSongGenerator:
    """Builds a short melody from a theme without any network access.

    The theme seeds the random source, so the same theme always yields the
    same song. Melodies move by small steps to stay singable.
    """

    def __init__(self, min_notes: int = 8, max_notes: int = 15) -> None:
        self.min_notes = min_notes
        self.max_notes = max_notes

    def generate(self, theme: str) -> Song:
        digest = hashlib.sha1(theme.encode("utf-8")).hexdigest()
        rng = random.Random(int(digest, 16))

        count = rng.randint(self.min_notes, self.max_notes)
        index = rng.randrange(len(_GENERATOR_PITCHES))
        pitches: list[str] = []
        for _ in range(count):
            pitches.append(_GENERATOR_PITCHES[index])
            index = max(0, min(len(_GENERATOR_PITCHES) - 1, index + rng.choice((-2, -1, 1, 2))))

        step = rng.choice((350, 400, 500))
        return Song(
            id=f"gen-{digest[:10]}",
            title=f"Song of {theme.title()}",
            difficulty=Difficulty.EASY if step >= 400 else Difficulty.MEDIUM,
            notes=create_pattern(pitches, step),
            description=f"A little tune about {theme}.",
        )


def request_song(generator: SongGenerator, theme: str) -> Song:
    """Ask a generator for a song and make sure it is playable.

    Raises:
        SongGenerationError: When the theme is empty, the generator fails,
            or its song breaks the timeline rules.
    """
    theme = theme.strip()
    if not theme:
        raise SongGenerationError("A theme is required")
    try:
        song = generator.generate(theme)
        return validate_song(song)
    except SongLoadError as exc:
        logger.warning("Generated song for %r is malformed: %s", theme, exc)
        raise SongGenerationError(f"Generated song is not playable: {exc}") from exc
    except Exception as exc:
        logger.warning("Song generation failed for %r: %s", theme, exc)
        raise SongGenerationError(f"Could not generate a song: {exc}") from exc
