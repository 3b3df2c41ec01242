"""Challenge: the simple rhythm game, with songs generated from a typed theme."""

from __future__ import annotations

import pygame

from notefall.generator import SongGenerationError, request_song
from notefall.models import Phase, Song
from notefall.renderer import colors as colors_mod
from notefall.session import CHALLENGE_RULES
from notefall.songs import CHALLENGE_SONGS
from notefall.views.base import ViewAction, ViewContext
from notefall.views.session_view import SessionView


class ChallengeView(SessionView):
    name = "challenge"
    display_name = "Challenge"
    rules = CHALLENGE_RULES

    def __init__(self) -> None:
        super().__init__()
        self._typing = False
        self._prompt = ""

    def available_songs(self, context: ViewContext) -> list[Song]:
        return list(CHALLENGE_SONGS)

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if self.session is None or self.session.phase is not Phase.SELECT:
            return super().handle_event(event)

        if event.type == pygame.KEYDOWN and event.key == pygame.K_TAB:
            self._typing = not self._typing
            if self._typing:
                pygame.key.start_text_input()
            else:
                pygame.key.stop_text_input()
            return None
        if not self._typing:
            return super().handle_event(event)

        if event.type == pygame.TEXTINPUT:
            self._prompt += event.text
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKSPACE:
                self._prompt = self._prompt[:-1]
            elif event.key == pygame.K_RETURN:
                self._generate()
            elif event.key == pygame.K_ESCAPE:
                self._typing = False
                pygame.key.stop_text_input()
        return None

    def _generate(self) -> None:
        generator = self._context.generator if self._context else None
        if generator is None:
            self._message = "Song generation is not available"
            return
        try:
            song = request_song(generator, self._prompt)
        except SongGenerationError as exc:
            self._message = f"Oops! Could not make that song, try again. ({exc})"
            return
        self._typing = False
        pygame.key.stop_text_input()
        self.start_song(song)

    def played_pitches(self) -> list[str]:
        played = super().played_pitches()
        # Letters typed into the theme prompt are not notes
        return [] if self._typing else played

    def draw_select(self, surface: pygame.Surface) -> None:
        super().draw_select(surface)
        h = surface.get_height()
        cursor = "_" if self._typing else ""
        label = "Theme: " if self._typing else "Tab: type a theme for a new song"
        text = self._font.render(f"{label}{self._prompt if self._typing else ''}{cursor}", True,
                                 colors_mod.NOTE_DIAMOND)
        surface.blit(text, (40, h - 100))

    def draw_won(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        lines = ["Great job!", f"Score: {self.session.state.score}", "Press Enter to continue"]
        y = h // 3
        for line in lines:
            text = self._font.render(line, True, colors_mod.HUD_TEXT)
            surface.blit(text, (w // 2 - text.get_width() // 2, y))
            y += 36
