"""Shared gameplay view for the rhythm games: song list, play field, results."""

from __future__ import annotations

import pygame

from notefall.config import HIT_EFFECT_LIFETIME_MS
from notefall.models import Phase, Song
from notefall.renderer import colors as colors_mod
from notefall.renderer.hud import render_hud
from notefall.renderer.keyboard import KEYBOARD_Y, render_keyboard, render_lanes
from notefall.renderer.waterfall import render_effects, render_hit_line, render_notes
from notefall.session import RhythmSession, SessionRules
from notefall.song_loader import SongLoadError
from notefall.views.base import ViewAction, ViewContext, drain_played

PRESS_FLASH_MS = 150


class SessionView:
    """Base for views that run a RhythmSession. Subclasses set rules and songs."""

    name = ""
    display_name = ""
    rules: SessionRules

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self.session: RhythmSession | None = None
        self._songs: list[Song] = []
        self._selected = 0
        self._pressed_at: dict[str, float] = {}
        self._message: str | None = None
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def available_songs(self, context: ViewContext) -> list[Song]:
        return list(context.songs)

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._title_font = pygame.font.SysFont("monospace", 36)
        self._songs = self.available_songs(context)
        self._selected = 0
        self._pressed_at = {}
        self.session = RhythmSession(
            self.rules,
            clock=context.clock,
            audio=context.audio,
            high_scores=context.high_scores,
        )

    def on_exit(self) -> None:
        if self.session is not None:
            self.session.close()
        if self._context and self._context.audio:
            self._context.audio.all_notes_off()

    # -- events --------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN or self.session is None:
            return None
        phase = self.session.phase

        if phase is Phase.SELECT:
            return self._handle_select_key(event)
        if event.key == pygame.K_ESCAPE:
            self.session.abort()
        elif phase is Phase.READY and event.key == pygame.K_RETURN:
            self.session.confirm()
        elif phase is Phase.WON and event.key == pygame.K_RETURN:
            self.session.dismiss()
        return None

    def _handle_select_key(self, event: pygame.event.Event) -> ViewAction | None:
        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="pop")
        if event.key == pygame.K_UP:
            self._selected = max(0, self._selected - 1)
        elif event.key == pygame.K_DOWN and self._songs:
            self._selected = min(len(self._songs) - 1, self._selected + 1)
        elif event.key == pygame.K_RETURN and self._songs:
            self.start_song(self._songs[self._selected])
        return None

    def start_song(self, song: Song) -> None:
        try:
            self.session.select_song(song)
            self._message = None
        except SongLoadError as exc:
            self._message = str(exc)

    # -- frame ---------------------------------------------------------

    def update(self, dt: float) -> ViewAction | None:
        if self._context is None or self.session is None:
            return None
        now = self._context.clock.now_ms
        for pitch in self.played_pitches():
            self._pressed_at[pitch] = now
            self.session.on_note_played(pitch)
        self._pressed_at = {
            p: t for p, t in self._pressed_at.items() if now - t < PRESS_FLASH_MS
        }
        return None

    def played_pitches(self) -> list[str]:
        return drain_played(self._context)

    def draw(self, surface: pygame.Surface) -> None:
        if self.session is None or not self._font:
            return
        surface.fill(colors_mod.BG)
        phase = self.session.phase
        if phase is Phase.SELECT:
            self.draw_select(surface)
        elif phase is Phase.READY:
            self._draw_ready(surface)
        elif phase is Phase.PLAYING:
            self._draw_playing(surface)
        else:
            self.draw_won(surface)

    def draw_select(self, surface: pygame.Surface) -> None:
        h = surface.get_height()
        title = self._title_font.render(self.display_name, True, colors_mod.NOTE_STAR)
        surface.blit(title, (40, 30))

        y = 100
        for i, song in enumerate(self._songs):
            prefix = "> " if i == self._selected else "  "
            color = colors_mod.NOTE_PERFECT if i == self._selected else colors_mod.HUD_TEXT
            line = f"{prefix}{song.title}  [{song.difficulty.value}]{self.song_suffix(song)}"
            surface.blit(self._font.render(line, True, color), (40, y))
            y += 26
            if y > h - 80:
                break

        if self._message:
            surface.blit(self._font.render(self._message, True, colors_mod.NOTE_MISS), (40, h - 70))
        legend = self._font.render("Up/Down: select | Enter: play | Esc: back", True, colors_mod.HUD_DIM)
        surface.blit(legend, (40, h - 40))

    def song_suffix(self, song: Song) -> str:
        return ""

    def _draw_ready(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        song = self.session.song
        lines = [song.title, song.description or "", "Press Enter to start, Esc to go back"]
        y = h // 3
        for line in lines:
            text = self._font.render(line, True, colors_mod.HUD_TEXT)
            surface.blit(text, (w // 2 - text.get_width() // 2, y))
            y += 36

    def _draw_playing(self, surface: pygame.Surface) -> None:
        state = self.session.state
        hit_line = self.session.detector.hit_line
        if state.fever:
            surface.fill((40, 20, 50))
        render_lanes(surface, KEYBOARD_Y)
        render_hit_line(surface, hit_line)
        render_notes(surface, state.active_notes)
        render_effects(
            surface, state.effects, hit_line, self.session.elapsed_ms, HIT_EFFECT_LIFETIME_MS
        )
        render_keyboard(surface, set(self._pressed_at))
        render_hud(surface, state)

    def draw_won(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        state = self.session.state
        lines = [
            "You did it!",
            f"Score: {state.score:,}",
            f"Hits: {state.hits}  Misses: {state.misses}  Best combo: {state.max_combo}",
        ]
        for rank, entry in enumerate(self.session.last_high_scores, start=1):
            lines.append(f"#{rank}  {entry.score:,}")
        lines.append("Press Enter to continue")
        y = h // 4
        for line in lines:
            text = self._font.render(line, True, colors_mod.HUD_TEXT)
            surface.blit(text, (w // 2 - text.get_width() // 2, y))
            y += 34
