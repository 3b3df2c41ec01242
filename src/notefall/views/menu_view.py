"""Main menu: pick a game mode."""

from __future__ import annotations

import pygame

from notefall.renderer import colors as colors_mod
from notefall.views.base import ViewAction, ViewContext

_ENTRIES = [
    ("magic_show", "Magic Show"),
    ("challenge", "Challenge"),
    ("freeplay", "Free Play"),
    ("lesson", "Lesson"),
]


class MenuView:
    name = "menu"
    display_name = "Main Menu"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._selected: int = 0
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 24)
        self._title_font = pygame.font.SysFont("monospace", 48)

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")
        if event.key == pygame.K_UP:
            self._selected = (self._selected - 1) % len(_ENTRIES)
        elif event.key == pygame.K_DOWN:
            self._selected = (self._selected + 1) % len(_ENTRIES)
        elif event.key == pygame.K_RETURN:
            return ViewAction(kind="push", target=_ENTRIES[self._selected][0])
        return None

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if not self._font or not self._title_font:
            return

        surface.fill(colors_mod.BG)
        w, h = surface.get_size()

        title = self._title_font.render("Notefall", True, colors_mod.NOTE_STAR)
        surface.blit(title, (w // 2 - title.get_width() // 2, 60))

        y = 200
        for i, (_, label) in enumerate(_ENTRIES):
            selected = i == self._selected
            color = colors_mod.NOTE_PERFECT if selected else colors_mod.HUD_TEXT
            text = self._font.render(f"{'> ' if selected else '  '}{label}", True, color)
            surface.blit(text, (w // 2 - 120, y))
            y += 44

        legend = self._font.render("Up/Down: select | Enter: open | Esc: quit", True, colors_mod.HUD_DIM)
        surface.blit(legend, (w // 2 - legend.get_width() // 2, h - 50))
