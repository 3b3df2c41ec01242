"""Frame clock: cancellable per-frame and delayed callbacks on the game loop."""

from __future__ import annotations

import itertools
import logging
from typing import Callable

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class TaskHandle:
    """Handle to a scheduled callback. Cancelling a finished task is a no-op."""

    def __init__(self, callback: FrameCallback, due_ms: float | None) -> None:
        self._callback = callback
        self.due_ms = due_ms
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        if not self.done:
            self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def _run(self, now_ms: float) -> None:
        if not self.pending:
            return
        self.done = True
        self._callback(now_ms)


class FrameClock:
    """Single-threaded scheduler pumped once per frame by the game loop.

    Nothing runs concurrently: callbacks execute inside advance(), one after
    another, and may schedule further callbacks for later frames.
    """

    def __init__(self, now_ms: float = 0.0) -> None:
        self.now_ms = now_ms
        self._next_frame: list[TaskHandle] = []
        self._delayed: list[tuple[float, int, TaskHandle]] = []
        self._seq = itertools.count()

    def next_frame(self, callback: FrameCallback) -> TaskHandle:
        """Run callback once on the next advance()."""
        handle = TaskHandle(callback, None)
        self._next_frame.append(handle)
        return handle

    def call_later(self, delay_ms: float, callback: FrameCallback) -> TaskHandle:
        handle = TaskHandle(callback, self.now_ms + max(0.0, delay_ms))
        self._delayed.append((handle.due_ms, next(self._seq), handle))
        return handle

    def advance(self, now_ms: float) -> None:
        if now_ms < self.now_ms:
            logger.debug("Clock went backwards (%.1f < %.1f); holding", now_ms, self.now_ms)
            now_ms = self.now_ms
        self.now_ms = now_ms

        due = sorted(entry for entry in self._delayed if entry[0] <= now_ms)
        self._delayed = [entry for entry in self._delayed if entry[0] > now_ms]
        for _, _, handle in due:
            handle._run(now_ms)

        frame, self._next_frame = self._next_frame, []
        for handle in frame:
            handle._run(now_ms)

    @property
    def pending_count(self) -> int:
        live = [h for h in self._next_frame if h.pending]
        live += [h for _, _, h in self._delayed if h.pending]
        return len(live)
