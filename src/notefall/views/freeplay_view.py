"""Free play sandbox: play freely, record, and replay the recording."""

from __future__ import annotations

import pygame

from notefall.free_play import Recorder
from notefall.renderer.colors import BG, HUD_DIM, HUD_TEXT, NOTE_MISS, NOTE_STAR
from notefall.renderer.keyboard import render_keyboard
from notefall.views.base import ViewAction, ViewContext, drain_played

PRESS_FLASH_MS = 150


class FreePlayView:
    name = "freeplay"
    display_name = "Free Play"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._recorder: Recorder | None = None
        self._pressed_at: dict[str, float] = {}
        self._font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._recorder = Recorder(context.clock)
        self._pressed_at = {}

    def on_exit(self) -> None:
        if self._recorder is not None:
            self._recorder.stop()
        if self._context and self._context.audio:
            self._context.audio.all_notes_off()

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN or self._recorder is None:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="pop")
        elif event.key == pygame.K_F1 and not self._recorder.is_playing:
            self._recorder.toggle_recording()
        elif event.key == pygame.K_F2:
            if self._recorder.is_playing:
                self._recorder.stop()
            else:
                self._recorder.play(self._context.audio if self._context else None)
        return None

    def update(self, dt: float) -> ViewAction | None:
        if not self._context or self._recorder is None:
            return None
        now = self._context.clock.now_ms
        for pitch in drain_played(self._context):
            self._pressed_at[pitch] = now
            if self._context.audio:
                self._context.audio.play_pitch(pitch)
            self._recorder.on_note_played(pitch)
        self._pressed_at = {p: t for p, t in self._pressed_at.items() if now - t < PRESS_FLASH_MS}
        return None

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(BG)
        w, h = surface.get_size()

        if self._font and self._recorder:
            title = self._font.render("Free Play", True, NOTE_STAR)
            surface.blit(title, (20, 15))

            if self._recorder.is_recording:
                rec = self._font.render("REC", True, NOTE_MISS)
                surface.blit(rec, (w - rec.get_width() - 20, 15))
            elif self._recorder.is_playing:
                play = self._font.render("PLAYING", True, NOTE_STAR)
                surface.blit(play, (w - play.get_width() - 20, 15))

            count = self._font.render(f"Recorded notes: {len(self._recorder.notes)}", True, HUD_TEXT)
            surface.blit(count, (20, 60))

        render_keyboard(surface, set(self._pressed_at))

        if self._font:
            hint = self._font.render("F1: record | F2: play/stop | Esc: back", True, HUD_DIM)
            surface.blit(hint, (20, h - 200))
