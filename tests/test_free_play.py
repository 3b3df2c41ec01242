"""Tests for free play recording and playback."""

from notefall.clock import FrameClock
from notefall.free_play import RecordedNote, Recorder


class FakeAudio:
    def __init__(self):
        self.pitches = []

    def play_pitch(self, pitch):
        self.pitches.append(pitch)

    def play_accent(self):
        pass


def _recorded() -> tuple[FrameClock, Recorder]:
    clock = FrameClock(now_ms=0)
    recorder = Recorder(clock)
    recorder.toggle_recording()
    clock.advance(100)
    recorder.on_note_played("C4")
    clock.advance(250)
    recorder.on_note_played("E4")
    recorder.toggle_recording()
    return clock, recorder


def test_records_offsets_only_while_recording():
    clock, recorder = _recorded()
    recorder.on_note_played("G4")
    assert recorder.notes == [RecordedNote("C4", 100), RecordedNote("E4", 250)]


def test_playback_replays_then_ends():
    clock, recorder = _recorded()
    audio = FakeAudio()
    clock.advance(1000)
    recorder.play(audio)
    assert recorder.is_playing
    clock.advance(1100)
    assert audio.pitches == ["C4"]
    clock.advance(1250)
    assert audio.pitches == ["C4", "E4"]
    clock.advance(2249)
    assert recorder.is_playing
    clock.advance(2250)
    assert not recorder.is_playing


def test_stop_cancels_everything_queued():
    clock, recorder = _recorded()
    audio = FakeAudio()
    recorder.play(audio)
    clock.advance(400)
    recorder.stop()
    assert not recorder.is_playing
    assert clock.pending_count == 0
    clock.advance(5000)
    assert audio.pitches == ["C4"]


def test_play_without_recording_is_a_no_op():
    clock = FrameClock()
    recorder = Recorder(clock)
    recorder.play(FakeAudio())
    assert not recorder.is_playing
    assert clock.pending_count == 0
