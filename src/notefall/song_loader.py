"""Validate songs and load them from JSON or MIDI files."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

import mido

from notefall.models import Difficulty, NoteEvent, Song
from notefall.pitches import HIGHEST_MIDI, LOWEST_MIDI, is_valid_pitch, pitch_from_midi

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".mid", ".midi")


class SongLoadError(Exception):
    """Raised when a song file cannot be parsed."""


class MalformedSongError(SongLoadError):
    """Raised when a song breaks the timeline rules and must not be played."""


def validate_song(song: Song) -> Song:
    """Check the timeline invariants; returns the song unchanged.

    Raises:
        MalformedSongError: On an empty id or timeline, an unknown pitch,
            a negative or non-finite time, or onsets that go backwards.
    """
    if not song.id:
        raise MalformedSongError("Song has no id")
    if not song.notes:
        raise MalformedSongError(f"Song {song.id!r} has no notes")

    previous = 0.0
    for i, note in enumerate(song.notes):
        if not is_valid_pitch(note.pitch):
            raise MalformedSongError(f"Note {i} of {song.id!r}: unknown pitch {note.pitch!r}")
        if not (math.isfinite(note.onset_ms) and math.isfinite(note.duration_ms)):
            raise MalformedSongError(f"Note {i} of {song.id!r}: time is not a finite number")
        if note.onset_ms < 0 or note.duration_ms < 0:
            raise MalformedSongError(f"Note {i} of {song.id!r}: negative time")
        if note.onset_ms < previous:
            raise MalformedSongError(
                f"Note {i} of {song.id!r} starts at {note.onset_ms}ms, before {previous}ms"
            )
        previous = note.onset_ms
    return song


def song_from_dict(data: dict[str, Any], song_id: str | None = None) -> Song:
    """Build a Song from ``{title, difficulty, description?, notes: [{note, time, duration}]}``."""
    try:
        notes = tuple(
            NoteEvent(
                pitch=str(item["note"]),
                onset_ms=float(item["time"]),
                duration_ms=float(item.get("duration", 0)),
            )
            for item in data["notes"]
        )
        song = Song(
            id=str(song_id or data.get("id") or ""),
            title=str(data.get("title") or "Untitled"),
            difficulty=Difficulty.parse(data.get("difficulty", Difficulty.EASY)),
            notes=notes,
            description=data.get("description"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedSongError(f"Invalid song data: {exc}") from exc
    return validate_song(song)


def load_song(file_path: str | Path) -> Song:
    """Load a .json or .mid/.midi file and return a validated Song.

    Raises:
        SongLoadError: If the file cannot be parsed or the result is malformed.
    """
    path = Path(file_path)
    try:
        if path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
            return song_from_dict(data, song_id=data.get("id") or path.stem)
        elif path.suffix in (".mid", ".midi"):
            return validate_song(_load_midi(path))
        else:
            raise SongLoadError(f"Unsupported file format: {path.suffix}")
    except SongLoadError:
        raise
    except Exception as exc:
        raise SongLoadError(f"Failed to load {path.name}: {exc}") from exc


def load_song_dir(directory: str | Path) -> list[Song]:
    """Load every supported file in a directory, skipping the ones that fail."""
    root = Path(directory)
    songs: list[Song] = []
    if not root.is_dir():
        return songs
    for path in sorted(root.iterdir()):
        if path.suffix not in SUPPORTED_SUFFIXES:
            continue
        try:
            songs.append(load_song(path))
        except SongLoadError as exc:
            logger.warning("Skipping %s: %s", path.name, exc)
    return songs


def _fold_into_range(number: int) -> str:
    while number < LOWEST_MIDI:
        number += 12
    while number > HIGHEST_MIDI:
        number -= 12
    return pitch_from_midi(number)


def _load_midi(path: Path) -> Song:
    mid = mido.MidiFile(str(path))
    tempo = 500_000  # default 120 BPM
    notes: list[NoteEvent] = []

    for track in mid.tracks:
        abs_ms = 0.0
        pending: dict[int, float] = {}  # MIDI note -> onset ms

        for msg in track:
            abs_ms += mido.tick2second(msg.time, mid.ticks_per_beat, tempo) * 1000.0

            if msg.type == "set_tempo":
                tempo = msg.tempo
            elif msg.type == "note_on" and msg.velocity > 0:
                if msg.note in pending:
                    start = pending.pop(msg.note)
                    notes.append(NoteEvent(_fold_into_range(msg.note), start, abs_ms - start))
                pending[msg.note] = abs_ms
            elif msg.type in ("note_off", "note_on"):
                if msg.note in pending:
                    start = pending.pop(msg.note)
                    notes.append(NoteEvent(_fold_into_range(msg.note), start, abs_ms - start))

    notes.sort(key=lambda n: n.onset_ms)
    return Song(
        id=path.stem,
        title=path.stem.replace("_", " ").title(),
        difficulty=Difficulty.MEDIUM,
        notes=tuple(notes),
    )
