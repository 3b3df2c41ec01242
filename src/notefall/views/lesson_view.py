"""Lesson: play the glowing key, one note at a time."""

from __future__ import annotations

import pygame

from notefall.lesson import Lesson
from notefall.renderer.colors import BG, HUD_DIM, HUD_TEXT, KEY_HIGHLIGHT, NOTE_PERFECT
from notefall.renderer.keyboard import render_keyboard
from notefall.views.base import ViewAction, ViewContext, drain_played


class LessonView:
    name = "lesson"
    display_name = "Lesson"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._lesson = Lesson()
        self._feedback = ""
        self._font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 24)
        self._lesson.restart()
        self._feedback = "Let's start! Play the glowing key."

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None
        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="pop")
        if event.key == pygame.K_RETURN and self._lesson.completed:
            self._lesson.restart()
            self._feedback = "Again! Play the glowing key."
        return None

    def update(self, dt: float) -> ViewAction | None:
        for pitch in drain_played(self._context):
            if self._context and self._context.audio:
                self._context.audio.play_pitch(pitch)
            if self._lesson.completed:
                continue
            if self._lesson.on_note_played(pitch):
                self._feedback = "You finished the lesson!" if self._lesson.completed else "Well done!"
            else:
                self._feedback = "Oops, try the yellow key!"
        return None

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(BG)
        w = surface.get_width()
        if self._font:
            text = self._font.render(self._feedback, True, HUD_TEXT)
            surface.blit(text, (w // 2 - text.get_width() // 2, 80))

            x = w // 2 - len(self._lesson.targets) * 35
            for i, pitch in enumerate(self._lesson.targets):
                if i < self._lesson.step:
                    color = NOTE_PERFECT
                elif i == self._lesson.step:
                    color = KEY_HIGHLIGHT
                else:
                    color = HUD_DIM
                label = self._font.render(pitch, True, color)
                surface.blit(label, (x + i * 70, 160))

            if self._lesson.completed:
                again = self._font.render("Enter: play again", True, HUD_DIM)
                surface.blit(again, (w // 2 - again.get_width() // 2, 220))

        render_keyboard(surface, set(), highlight=self._lesson.current_target)
