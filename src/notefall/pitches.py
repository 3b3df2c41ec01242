"""The 25-key pitch vocabulary (C3 to C5) and its keyboard layout."""

from __future__ import annotations

_NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

LOWEST_MIDI = 48  # C3
HIGHEST_MIDI = 72  # C5

PITCHES: tuple[str, ...] = tuple(
    f"{_NOTE_NAMES[m % 12]}{m // 12 - 1}" for m in range(LOWEST_MIDI, HIGHEST_MIDI + 1)
)

_MIDI_BY_NAME: dict[str, int] = {name: LOWEST_MIDI + i for i, name in enumerate(PITCHES)}
WHITE_KEYS: tuple[str, ...] = tuple(p for p in PITCHES if "#" not in p)


def is_valid_pitch(name: str) -> bool:
    return name in _MIDI_BY_NAME


def _require(name: str) -> int:
    try:
        return _MIDI_BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown pitch: {name!r}") from None


def is_black(name: str) -> bool:
    _require(name)
    return "#" in name


def midi_number(name: str) -> int:
    return _require(name)


def pitch_from_midi(number: int) -> str | None:
    """Map a MIDI note number to a vocabulary pitch, or None if out of range."""
    if LOWEST_MIDI <= number <= HIGHEST_MIDI:
        return PITCHES[number - LOWEST_MIDI]
    return None


def frequency(name: str) -> float:
    """Equal-temperament frequency in Hz (A4 = 440)."""
    return 440.0 * 2 ** ((_require(name) - 69) / 12)


def lane_position(name: str) -> float:
    """Horizontal centre of a key as a percentage of the keyboard width.

    White keys split the width evenly; a black key sits on the boundary
    between its two flanking white keys.
    """
    _require(name)
    white_w = 100.0 / len(WHITE_KEYS)
    if "#" not in name:
        return WHITE_KEYS.index(name) * white_w + white_w / 2
    # The white key just below a sharp shares its letter: C#4 sits after C4.
    below = name.replace("#", "")
    return (WHITE_KEYS.index(below) + 1) * white_w
