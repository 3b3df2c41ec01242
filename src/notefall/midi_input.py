"""Instrument input: computer keyboard and MIDI keyboards, as played pitch names."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import pygame

from notefall.pitches import pitch_from_midi

try:
    import rtmidi
    _HAS_RTMIDI = True
except ImportError:
    _HAS_RTMIDI = False


@dataclass
class NotePlayed:
    pitch: str
    timestamp: float


class MidiDeviceError(Exception):
    """Raised when no MIDI device is found or connection fails."""


@runtime_checkable
class InputSource(Protocol):
    """Common interface for MIDI and keyboard input sources."""
    def poll(self) -> NotePlayed | None: ...
    def close(self) -> None: ...


# Computer keyboard -> pitch. Octave 3 on the bottom rows, octave 4 on the top rows.
_LOWER_OCTAVE = {
    pygame.K_z: "C3", pygame.K_s: "C#3", pygame.K_x: "D3", pygame.K_d: "D#3",
    pygame.K_c: "E3", pygame.K_v: "F3", pygame.K_g: "F#3", pygame.K_b: "G3",
    pygame.K_h: "G#3", pygame.K_n: "A3", pygame.K_j: "A#3", pygame.K_m: "B3",
}
_UPPER_OCTAVE = {
    pygame.K_q: "C4", pygame.K_2: "C#4", pygame.K_w: "D4", pygame.K_3: "D#4",
    pygame.K_e: "E4", pygame.K_r: "F4", pygame.K_5: "F#4", pygame.K_t: "G4",
    pygame.K_6: "G#4", pygame.K_y: "A4", pygame.K_7: "A#4", pygame.K_u: "B4",
    pygame.K_i: "C5",
}
KEY_TO_PITCH: dict[int, str] = {**_LOWER_OCTAVE, **_UPPER_OCTAVE}


class KeyboardInput:
    """Fallback input using the computer keyboard as a two-octave piano."""

    def __init__(self) -> None:
        self._events: list[NotePlayed] = []
        self._held: set[int] = set()

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type == pygame.KEYDOWN and event.key in KEY_TO_PITCH:
            # Key repeat would otherwise fire a stream of inputs
            if event.key not in self._held:
                self._held.add(event.key)
                self._events.append(NotePlayed(KEY_TO_PITCH[event.key], time.time()))
        elif event.type == pygame.KEYUP and event.key in KEY_TO_PITCH:
            self._held.discard(event.key)

    def poll(self) -> NotePlayed | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()
        self._held.clear()


class MidiInput:
    def __init__(self, port_index: int | None = None) -> None:
        if not _HAS_RTMIDI:
            raise MidiDeviceError("python-rtmidi is not installed")
        self.midi_in = rtmidi.MidiIn()
        self._port_index = port_index
        self._open = False

    @staticmethod
    def list_ports() -> list[str]:
        if not _HAS_RTMIDI:
            return []
        midi_in = rtmidi.MidiIn()
        return midi_in.get_ports()

    def open(self) -> None:
        ports = self.midi_in.get_ports()
        if not ports:
            raise MidiDeviceError("No MIDI input devices found")
        idx = self._port_index if self._port_index is not None else 0
        self.midi_in.open_port(idx)
        self._open = True

    def poll(self) -> NotePlayed | None:
        """Non-blocking poll for the next in-range note-on. Other messages are dropped."""
        if not self._open:
            return None
        while True:
            msg = self.midi_in.get_message()
            if msg is None:
                return None
            data, _delta = msg
            if len(data) < 3 or (data[0] & 0xF0) != 0x90 or data[2] == 0:
                continue
            pitch = pitch_from_midi(data[1])
            if pitch is not None:
                return NotePlayed(pitch=pitch, timestamp=time.time())

    def close(self) -> None:
        if self._open:
            self.midi_in.close_port()
            self._open = False
