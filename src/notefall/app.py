"""Top-level application: initializes pygame, manages screens, and runs the game loop."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from notefall.clock import FrameClock
from notefall.config import DEFAULT_DB_PATH, FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from notefall.generator import PatternSongGenerator
from notefall.midi_input import KeyboardInput
from notefall.song_loader import load_song_dir
from notefall.songs import SONGS
from notefall.views.base import ViewContext, ViewManager
from notefall.views.challenge_view import ChallengeView
from notefall.views.freeplay_view import FreePlayView
from notefall.views.lesson_view import LessonView
from notefall.views.magic_show_view import MagicShowView
from notefall.views.menu_view import MenuView

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        songs_dir: str = "",
        db_path: Path = DEFAULT_DB_PATH,
        soundfont: str = "",
        instrument: str = "piano",
        volume: float = 0.5,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.pg_clock = pygame.time.Clock()
        self.frame_clock = FrameClock(now_ms=pygame.time.get_ticks())

        # Optional subsystems gracefully degrade to None
        midi_input = self._try_midi()
        self._audio = self._try_audio(soundfont, instrument, volume)
        high_scores = self._try_high_scores(db_path)
        self._keyboard_input = KeyboardInput()

        songs = SONGS
        if songs_dir:
            songs = SONGS + tuple(load_song_dir(songs_dir))

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            clock=self.frame_clock,
            midi_input=midi_input,
            audio=self._audio,
            high_scores=high_scores,
            keyboard_input=self._keyboard_input,
            generator=PatternSongGenerator(),
            songs=songs,
        )

        self.views = ViewManager(context)
        for view_cls in (MenuView, MagicShowView, ChallengeView, FreePlayView, LessonView):
            self.views.register(view_cls)
        self.views.push("menu")

    def run(self) -> None:
        running = True
        while running:
            dt = self.pg_clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._keyboard_input.feed_event(event)
                    if not self.views.handle_event(event):
                        running = False
            if running:
                if not self.views.update(dt):
                    running = False
                # Input first, then session ticks, so a hit sees the previous frame's positions
                self.frame_clock.advance(pygame.time.get_ticks())
                if self._audio:
                    self._audio.flush_pending_offs()
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        if self._audio:
            self._audio.shutdown()

    @staticmethod
    def _try_midi():
        try:
            from notefall.midi_input import MidiInput
            mi = MidiInput()
            mi.open()
            return mi
        except Exception as exc:
            logger.info("MIDI input unavailable: %s", exc)
            return None

    @staticmethod
    def _try_audio(soundfont: str, instrument: str, volume: float):
        try:
            from notefall.audio import AudioEngine, InstrumentType
            engine = AudioEngine(soundfont or None)
            engine.set_instrument(InstrumentType[instrument.upper()])
            engine.set_volume(volume)
            return engine
        except Exception as exc:
            logger.warning("Audio unavailable: %s", exc)
            return None

    @staticmethod
    def _try_high_scores(db_path: Path):
        try:
            from notefall.high_scores import HighScoreStore, SqliteStorage
            return HighScoreStore(SqliteStorage(db_path))
        except Exception as exc:
            logger.warning("High scores will not be saved: %s", exc)
            return None
