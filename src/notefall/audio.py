"""Audio synthesis via FluidSynth + SoundFonts."""

from __future__ import annotations

import sys
import time
from enum import Enum
from pathlib import Path

import fluidsynth

from notefall.pitches import midi_number

NOTE_LENGTH_S = 0.6
ACCENT_PITCH = 96  # C7, the bright "ding" on a successful hit
ACCENT_CHANNEL = 1
ACCENT_LENGTH_S = 0.3


class InstrumentType(Enum):
    """General MIDI programs for the selectable instruments."""

    PIANO = 0
    XYLOPHONE = 13
    SYNTH = 80


def _detect_audio_driver() -> str:
    """Auto-detect the appropriate FluidSynth audio driver for the platform."""
    if sys.platform == "linux":
        return "pulseaudio"
    elif sys.platform == "darwin":
        return "coreaudio"
    elif sys.platform == "win32":
        return "dsound"
    return "alsa"


class AudioEngine:
    """Fire-and-forget note and accent playback."""

    def __init__(self, soundfont_path: str | Path | None = None) -> None:
        self.fs = fluidsynth.Synth(gain=0.8)
        self.fs.start(driver=_detect_audio_driver())
        self._sfid: int | None = None
        self._pending_offs: list[tuple[float, int, int]] = []  # (off_time, pitch, channel)
        if soundfont_path:
            self.load_soundfont(soundfont_path)

    def load_soundfont(self, path: str | Path) -> None:
        self._sfid = self.fs.sfload(str(path))
        self.fs.program_select(0, self._sfid, 0, InstrumentType.PIANO.value)
        self.fs.program_select(ACCENT_CHANNEL, self._sfid, 0, 9)  # glockenspiel

    def _play(self, midi_pitch: int, velocity: int, length_s: float, channel: int) -> None:
        self.fs.noteon(channel, midi_pitch, velocity)
        self._pending_offs.append((time.time() + length_s, midi_pitch, channel))

    def play_pitch(self, pitch: str) -> None:
        self._play(midi_number(pitch), 90, NOTE_LENGTH_S, 0)

    def play_accent(self) -> None:
        self._play(ACCENT_PITCH, 100, ACCENT_LENGTH_S, ACCENT_CHANNEL)

    def flush_pending_offs(self) -> None:
        """Call each frame to release notes whose duration has elapsed."""
        now = time.time()
        remaining: list[tuple[float, int, int]] = []
        for off_time, pitch, channel in self._pending_offs:
            if now >= off_time:
                self.fs.noteoff(channel, pitch)
            else:
                remaining.append((off_time, pitch, channel))
        self._pending_offs = remaining

    def set_instrument(self, instrument: InstrumentType) -> None:
        if self._sfid is not None:
            self.fs.program_select(0, self._sfid, 0, instrument.value)

    def set_volume(self, volume: float) -> None:
        """Master volume (0.0 to 1.0) via MIDI CC7 on the note channels."""
        cc_value = max(0, min(127, int(volume * 127)))
        for channel in (0, ACCENT_CHANNEL):
            self.fs.cc(channel, 7, cc_value)

    def all_notes_off(self) -> None:
        for _, pitch, channel in self._pending_offs:
            self.fs.noteoff(channel, pitch)
        self._pending_offs.clear()

    def shutdown(self) -> None:
        self.all_notes_off()
        self.fs.delete()
