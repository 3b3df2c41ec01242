"""Render the 25-key keyboard at the bottom of the screen."""

from __future__ import annotations

import pygame

from notefall.config import WINDOW_HEIGHT
from notefall.pitches import PITCHES, WHITE_KEYS, is_black, lane_position
from notefall.renderer.colors import BLACK_KEY, KEY_HIGHLIGHT, KEY_PRESSED, LANE_LINE, WHITE_KEY

KEYBOARD_HEIGHT = 160
KEYBOARD_Y = WINDOW_HEIGHT - KEYBOARD_HEIGHT


def key_x_position(pitch: str, width: int) -> float:
    """Return the x center of a key on a keyboard `width` pixels wide."""
    return lane_position(pitch) / 100.0 * width


def key_width(pitch: str, width: int) -> float:
    white_w = width / len(WHITE_KEYS)
    return white_w * 0.6 if is_black(pitch) else white_w


def render_lanes(surface: pygame.Surface, bottom: int) -> None:
    """Faint separators between white-key lanes."""
    width = surface.get_width()
    white_w = width / len(WHITE_KEYS)
    for i in range(1, len(WHITE_KEYS)):
        x = int(i * white_w)
        pygame.draw.line(surface, LANE_LINE, (x, 0), (x, bottom))


def render_keyboard(
    surface: pygame.Surface,
    pressed: set[str],
    highlight: str | None = None,
) -> None:
    width = surface.get_width()
    white_w = width / len(WHITE_KEYS)

    for i, pitch in enumerate(WHITE_KEYS):
        color = WHITE_KEY
        if pitch in pressed:
            color = KEY_PRESSED
        elif pitch == highlight:
            color = KEY_HIGHLIGHT
        rect = pygame.Rect(int(i * white_w), KEYBOARD_Y, int(white_w) - 1, KEYBOARD_HEIGHT)
        pygame.draw.rect(surface, color, rect)

    for pitch in PITCHES:
        if not is_black(pitch):
            continue
        bw = key_width(pitch, width)
        bx = key_x_position(pitch, width) - bw / 2
        color = BLACK_KEY
        if pitch in pressed:
            color = KEY_PRESSED
        elif pitch == highlight:
            color = KEY_HIGHLIGHT
        rect = pygame.Rect(int(bx), KEYBOARD_Y, int(bw), int(KEYBOARD_HEIGHT * 0.6))
        pygame.draw.rect(surface, color, rect)
