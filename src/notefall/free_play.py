"""Free play mode: record what the player plays and play it back."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from notefall.config import PLAYBACK_TAIL_MS

if TYPE_CHECKING:
    from notefall.clock import FrameClock, TaskHandle
    from notefall.session import AudioSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedNote:
    pitch: str
    offset_ms: float  # since recording started


class Recorder:
    """Records played pitches and replays them through delayed callbacks.

    Playback queues one callback per note plus an end marker; stop() cancels
    all of them at once.
    """

    def __init__(self, clock: FrameClock) -> None:
        self._clock = clock
        self._recording = False
        self._record_start = 0.0
        self._notes: list[RecordedNote] = []
        self._playback: list[TaskHandle] = []

    @property
    def is_recording(self) -> bool:
        return self._recording

    @property
    def is_playing(self) -> bool:
        return bool(self._playback)

    @property
    def notes(self) -> list[RecordedNote]:
        return list(self._notes)

    def toggle_recording(self) -> None:
        if self._recording:
            self._recording = False
        else:
            self.stop()
            self._notes = []
            self._record_start = self._clock.now_ms
            self._recording = True

    def on_note_played(self, pitch: str) -> None:
        if self._recording:
            self._notes.append(RecordedNote(pitch, self._clock.now_ms - self._record_start))

    def play(self, audio: AudioSink | None) -> None:
        if not self._notes or self._recording or self.is_playing:
            return

        for note in self._notes:
            self._playback.append(
                self._clock.call_later(note.offset_ms, lambda _now, p=note.pitch: self._emit(audio, p))
            )
        end = self._notes[-1].offset_ms + PLAYBACK_TAIL_MS
        self._playback.append(self._clock.call_later(end, self._finish))
        logger.debug("Playing back %d recorded notes", len(self._notes))

    def stop(self) -> None:
        for handle in self._playback:
            handle.cancel()
        self._playback = []

    @staticmethod
    def _emit(audio: AudioSink | None, pitch: str) -> None:
        if audio is not None:
            audio.play_pitch(pitch)

    def _finish(self, _now_ms: float) -> None:
        self._playback = []
