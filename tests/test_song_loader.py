"""Tests for song validation and loading."""

import json

import mido
import pytest

from notefall.models import Difficulty, NoteEvent, Song
from notefall.song_loader import (
    MalformedSongError,
    SongLoadError,
    load_song,
    load_song_dir,
    song_from_dict,
    validate_song,
)


def _song(*notes, song_id="s") -> Song:
    return Song(song_id, "S", Difficulty.EASY, tuple(notes))


def test_valid_song_passes():
    song = _song(NoteEvent("C4", 0, 100), NoteEvent("C4", 0, 100), NoteEvent("C5", 200, 0))
    assert validate_song(song) is song


@pytest.mark.parametrize("song", [
    _song(NoteEvent("C4", 100, 100), NoteEvent("D4", 50, 100)),
    _song(NoteEvent("C6", 0, 100)),
    _song(NoteEvent("C4", -1, 100)),
    _song(NoteEvent("C4", 0, -5)),
    _song(NoteEvent("C4", float("nan"), 100)),
    _song(NoteEvent("C4", 1000, 100), NoteEvent("D4", float("nan"), 100), NoteEvent("E4", 0, 100)),
    _song(NoteEvent("C4", float("inf"), 100)),
    _song(NoteEvent("C4", 0, float("inf"))),
    _song(),
    _song(NoteEvent("C4", 0, 100), song_id=""),
])
def test_malformed_songs_rejected(song):
    with pytest.raises(MalformedSongError):
        validate_song(song)


def test_song_from_generator_dict():
    data = {
        "title": "Cloud Dance",
        "difficulty": "Médio",
        "description": "Dance with the clouds",
        "notes": [
            {"note": "C4", "time": 0, "duration": 400},
            {"note": "F#3", "time": 400, "duration": 400},
        ],
    }
    song = song_from_dict(data, song_id="gen-1")
    assert song.id == "gen-1"
    assert song.difficulty is Difficulty.MEDIUM
    assert song.notes[1] == NoteEvent("F#3", 400.0, 400.0)


def test_song_from_dict_missing_fields():
    with pytest.raises(MalformedSongError):
        song_from_dict({"title": "No notes"}, song_id="x")
    with pytest.raises(MalformedSongError):
        song_from_dict({"notes": [{"time": 0}]}, song_id="x")


@pytest.mark.parametrize("bad_time", ["nan", "inf", "-inf"])
def test_song_from_dict_rejects_non_finite_times(bad_time):
    data = {"notes": [
        {"note": "C4", "time": 1000},
        {"note": "D4", "time": bad_time},
        {"note": "E4", "time": 0},
    ]}
    with pytest.raises(MalformedSongError):
        song_from_dict(data, "s")
    with pytest.raises(MalformedSongError):
        song_from_dict({"notes": [{"note": "C4", "time": 0, "duration": bad_time}]}, "s")


def test_load_json_file(tmp_path):
    path = tmp_path / "lullaby.json"
    path.write_text(json.dumps({
        "title": "Lullaby",
        "difficulty": "Easy",
        "notes": [{"note": "E4", "time": 0, "duration": 300}],
    }), encoding="utf-8")
    song = load_song(path)
    assert song.id == "lullaby"
    assert song.notes[0].pitch == "E4"


def test_load_midi_file_folds_into_range(tmp_path):
    mid = mido.MidiFile(ticks_per_beat=480)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    track.append(mido.Message("note_on", note=60, velocity=80, time=0))
    track.append(mido.Message("note_off", note=60, velocity=0, time=480))
    track.append(mido.Message("note_on", note=84, velocity=80, time=0))
    track.append(mido.Message("note_off", note=84, velocity=0, time=240))
    path = tmp_path / "tune.mid"
    mid.save(str(path))

    song = load_song(path)
    assert [n.pitch for n in song.notes] == ["C4", "C5"]
    assert song.notes[1].onset_ms == pytest.approx(500.0)
    assert song.notes[1].duration_ms == pytest.approx(250.0)


def test_unsupported_and_broken_files(tmp_path):
    txt = tmp_path / "notes.txt"
    txt.write_text("C4 D4")
    with pytest.raises(SongLoadError):
        load_song(txt)
    broken = tmp_path / "broken.json"
    broken.write_text("{")
    with pytest.raises(SongLoadError):
        load_song(broken)


def test_load_song_dir_skips_failures(tmp_path):
    (tmp_path / "good.json").write_text(json.dumps({
        "title": "Good", "notes": [{"note": "C4", "time": 0, "duration": 100}],
    }))
    (tmp_path / "bad.json").write_text(json.dumps({
        "title": "Bad", "notes": [{"note": "Z9", "time": 0, "duration": 100}],
    }))
    (tmp_path / "readme.txt").write_text("ignored")
    songs = load_song_dir(tmp_path)
    assert [s.id for s in songs] == ["good"]
