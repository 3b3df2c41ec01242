"""Falling notes above the keyboard."""

from __future__ import annotations

import pygame

from notefall.models import ActiveNote, HitEffect, VisualVariant
from notefall.renderer.colors import HIT_LINE, NOTE_DIAMOND, NOTE_PERFECT, NOTE_STAR
from notefall.renderer.keyboard import KEYBOARD_Y, key_width, key_x_position

NOTE_SIZE = 28


def progress_to_y(progress: float) -> int:
    """Progress is a percentage of the playfield height above the keyboard."""
    return int(progress / 100.0 * KEYBOARD_Y)


def render_hit_line(surface: pygame.Surface, hit_line: float) -> None:
    y = progress_to_y(hit_line)
    pygame.draw.line(surface, HIT_LINE, (0, y), (surface.get_width(), y), 2)


def render_notes(surface: pygame.Surface, notes: list[ActiveNote]) -> None:
    width = surface.get_width()
    for note in notes:
        x = key_x_position(note.pitch, width)
        y = progress_to_y(note.progress)
        size = min(NOTE_SIZE, key_width(note.pitch, width) * 0.9)
        if note.variant is VisualVariant.DIAMOND:
            half = size / 2
            points = [(x, y - half), (x + half, y), (x, y + half), (x - half, y)]
            pygame.draw.polygon(surface, NOTE_DIAMOND, points)
        else:
            pygame.draw.circle(surface, NOTE_STAR, (int(x), y), int(size / 2))


def render_effects(
    surface: pygame.Surface, effects: list[HitEffect], hit_line: float, now_ms: float, lifetime_ms: float
) -> None:
    width = surface.get_width()
    y = progress_to_y(hit_line)
    for effect in effects:
        age = max(0.0, now_ms - effect.created_at_ms) / lifetime_ms
        radius = int(NOTE_SIZE * (0.6 + age * 1.5))
        x = int(effect.lane / 100.0 * width)
        pygame.draw.circle(surface, NOTE_PERFECT, (x, y), radius, 2)
