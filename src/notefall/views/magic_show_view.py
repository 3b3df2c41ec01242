"""Magic Show: the full rhythm game with combo, health and high scores."""

from __future__ import annotations

from notefall.models import Song
from notefall.session import MAGIC_SHOW_RULES
from notefall.views.base import ViewContext
from notefall.views.session_view import SessionView


class MagicShowView(SessionView):
    name = "magic_show"
    display_name = "Magic Show"
    rules = MAGIC_SHOW_RULES

    def __init__(self) -> None:
        super().__init__()
        self._best: dict[str, int | None] = {}
        self._best_as_of_wins = -1

    def on_enter(self, context: ViewContext) -> None:
        super().on_enter(context)
        self._best = {}
        self._best_as_of_wins = -1

    def song_suffix(self, song: Song) -> str:
        store = self._context.high_scores if self._context else None
        if store is None:
            return ""
        # Scores only change when a session is won
        if self._best_as_of_wins != self.session.wins:
            self._best = {}
            self._best_as_of_wins = self.session.wins
        if song.id not in self._best:
            self._best[song.id] = store.best(song.id)
        best = self._best[song.id]
        return f"  best {best:,}" if best is not None else ""
