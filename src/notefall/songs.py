"""Built-in song catalog."""

from __future__ import annotations

from dataclasses import replace

from notefall.config import CHALLENGE_SONG_COUNT
from notefall.models import Difficulty, NoteEvent, Song


def create_pattern(pitches: list[str], step_ms: float = 500) -> tuple[NoteEvent, ...]:
    """Evenly spaced notes, each lasting one step."""
    return tuple(
        NoteEvent(pitch=p, onset_ms=i * step_ms, duration_ms=step_ms)
        for i, p in enumerate(pitches)
    )


_BASE_SONGS: list[Song] = [
    Song("twinkle", "Twinkle Little Unicorn", Difficulty.EASY,
         create_pattern(["C4", "C4", "G4", "G4", "A4", "A4", "G4"])),
    Song("happy_birthday", "Princess Birthday", Difficulty.MEDIUM,
         create_pattern(["C4", "C4", "D4", "C4", "F4", "E4"], 400)),
    Song("mary_lamb", "The Magic Little Lamb", Difficulty.EASY,
         create_pattern(["E4", "D4", "C4", "D4", "E4", "E4", "E4"])),
    Song("jingle_bells", "Jingle Bells", Difficulty.EASY,
         create_pattern(["E4", "E4", "E4", "E4", "E4", "E4", "E4", "G4", "C4", "D4", "E4"], 300)),
    Song("baby_shark", "Baby Shark", Difficulty.EASY,
         create_pattern(["D4", "E4", "G4", "G4", "G4", "G4", "G4", "G4", "D4", "E4", "G4"], 250)),
    Song("ode_joy", "Ode to Joy", Difficulty.MEDIUM,
         create_pattern(["E4", "E4", "F4", "G4", "G4", "F4", "E4", "D4",
                         "C4", "C4", "D4", "E4", "E4", "D4", "D4"], 350)),
    Song("row_boat", "Row Your Boat", Difficulty.EASY,
         create_pattern(["C4", "C4", "C4", "D4", "E4", "E4", "D4", "E4", "F4", "G4"], 400)),
    Song("london_bridge", "London Bridge", Difficulty.MEDIUM,
         create_pattern(["G4", "A4", "G4", "F4", "E4", "F4", "G4", "D4",
                         "E4", "F4", "E4", "F4", "G4"], 350)),
    Song("itsy_bitsy", "Itsy Bitsy Spider", Difficulty.MEDIUM,
         create_pattern(["G3", "C4", "C4", "C4", "D4", "E4", "E4", "E4",
                         "D4", "C4", "D4", "E4", "C4"], 300)),
    Song("old_macdonald", "Unicorn Farm", Difficulty.MEDIUM,
         create_pattern(["G4", "G4", "G4", "D4", "E4", "E4", "D4", "B4",
                         "B4", "A4", "A4", "G4"], 350)),
]


def _remix(song: Song) -> Song:
    """Faster, shorter notes."""
    return replace(
        song,
        id=f"{song.id}_remix",
        title=f"{song.title} Remix",
        difficulty=Difficulty.HARD,
        notes=tuple(
            NoteEvent(n.pitch, n.onset_ms / 1.5, n.duration_ms / 2) for n in song.notes
        ),
    )


def _magic(song: Song) -> Song:
    """Every other note jumps to the top C."""
    return replace(
        song,
        id=f"{song.id}_magic",
        title=f"Magic {song.title}",
        difficulty=Difficulty.MEDIUM,
        notes=tuple(
            n if i % 2 == 0 else NoteEvent("C5", n.onset_ms, n.duration_ms)
            for i, n in enumerate(song.notes)
        ),
    )


SONGS: tuple[Song, ...] = tuple(
    _BASE_SONGS + [variant for song in _BASE_SONGS for variant in (_remix(song), _magic(song))]
)

CHALLENGE_SONGS: tuple[Song, ...] = SONGS[:CHALLENGE_SONG_COUNT]


def get_song(song_id: str) -> Song:
    for song in SONGS:
        if song.id == song_id:
            return song
    raise KeyError(song_id)
