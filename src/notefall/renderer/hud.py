"""Heads-up display: score, combo, multiplier, health."""

from __future__ import annotations

import pygame

from notefall.models import SessionState
from notefall.renderer.colors import HEALTH, HEALTH_FEVER, HUD_DIM, HUD_TEXT


def render_hud(surface: pygame.Surface, state: SessionState) -> None:
    font = pygame.font.SysFont("monospace", 20)
    w = surface.get_width()

    lines = [f"Score: {state.score:,}"]
    if state.health is not None:
        lines.append(f"Combo: {state.combo}  x{state.multiplier}")

    y = 10
    for line in lines:
        text = font.render(line, True, HUD_TEXT)
        surface.blit(text, (10, y))
        y += 28

    if state.health is not None:
        bar = pygame.Rect(w // 2 - 100, 12, 200, 14)
        pygame.draw.rect(surface, HUD_DIM, bar, border_radius=7)
        fill = bar.copy()
        fill.width = int(bar.width * state.health / 100)
        pygame.draw.rect(surface, HEALTH_FEVER if state.fever else HEALTH, fill, border_radius=7)

    if state.feedback:
        big = pygame.font.SysFont("monospace", 36, bold=True)
        text = big.render(state.feedback, True, HUD_TEXT)
        surface.blit(text, (w // 2 - text.get_width() // 2, 60))
