# Fixed-interval tick scheduling around SnakeGame.step().
from __future__ import annotations

import itertools
import logging
import time
from typing import Any, Callable, Protocol

try:
    from .game_logic import Direction, GameSnapshot, GameStatus, SnakeGame
except ImportError:
    from game_logic import Direction, GameSnapshot, GameStatus, SnakeGame

logger = logging.getLogger(__name__)


class TimerBackend(Protocol):
    """Anything with Tk's after/after_cancel pair (a tk.Tk root works as-is)."""

    def after(self, ms: int, func: Callable[[], None]) -> Any: ...

    def after_cancel(self, id: Any) -> None: ...


class GameLoop:
    """Owns the single pending tick for a game and keeps it in sync with pause/over.

    Only one timer handle is ever outstanding, so ``step`` is never re-entered
    and never runs twice for one interval.
    """

    def __init__(
        self,
        engine: SnakeGame,
        timer: TimerBackend,
        interval_ms: int | None = None,
        on_frame: Callable[[GameSnapshot], None] | None = None,
        before_tick: Callable[[], None] | None = None,
    ) -> None:
        self.engine = engine
        self.timer = timer
        self.interval_ms = interval_ms if interval_ms is not None else engine.config.speed_ms
        self.on_frame = on_frame
        self.before_tick = before_tick  # last chance to feed input into this tick
        self.after_id: Any = None  # timer handle for the next tick

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    @property
    def scheduled(self) -> bool:
        return self.after_id is not None

    def start(self) -> None:
        """Begin ticking if the game is running and no tick is pending."""
        if self.engine.status is GameStatus.RUNNING and self.after_id is None:
            self._schedule()

    def stop(self) -> None:
        """Cancel the pending tick, if any (used on pause and teardown)."""
        if self.after_id is not None:
            self.timer.after_cancel(self.after_id)
            self.after_id = None

    def _schedule(self) -> None:
        self.after_id = self.timer.after(self.interval_ms, self.tick)

    def _emit(self, snapshot: GameSnapshot) -> None:
        if self.on_frame is not None:
            self.on_frame(snapshot)

    def tick(self) -> GameSnapshot:
        """Single frame of the game loop; reschedules itself while running."""
        if self.before_tick is not None:
            self.before_tick()
        self.stop()
        snapshot = self.engine.step()
        self._emit(snapshot)
        if snapshot.status is GameStatus.RUNNING:
            self._schedule()
        elif snapshot.is_over:
            logger.debug("Tick loop stopped: game over")
        return snapshot

    def set_direction(self, direction: Direction) -> bool:
        return self.engine.set_direction(direction)

    def toggle_pause(self) -> GameStatus:
        """Pause/resume the engine and suspend/resume the timer with it."""
        status = self.engine.toggle_pause()
        if status is GameStatus.RUNNING:
            self.start()
        else:
            self.stop()
        self._emit(self.engine.snapshot())
        return status

    def restart(self) -> None:
        """Reset the engine and start a fresh tick chain."""
        self.stop()
        self.engine.restart()
        self._emit(self.engine.snapshot())
        self._schedule()


class SleepTimer:
    """Blocking TimerBackend for headless runs: ``run()`` sleeps, then fires, in order."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep) -> None:
        self.sleep = sleep
        self._ids = itertools.count(1)
        self.pending: dict[int, tuple[int, Callable[[], None]]] = {}

    def after(self, ms: int, func: Callable[[], None]) -> int:
        handle = next(self._ids)
        self.pending[handle] = (ms, func)
        return handle

    def after_cancel(self, id: Any) -> None:
        self.pending.pop(id, None)

    def run(self, max_calls: int | None = None) -> int:
        """Fire callbacks until none are pending or ``max_calls`` is reached."""
        fired = 0
        while self.pending and (max_calls is None or fired < max_calls):
            handle = min(self.pending)
            ms, func = self.pending.pop(handle)
            self.sleep(ms / 1000)
            func()
            fired += 1
        return fired
