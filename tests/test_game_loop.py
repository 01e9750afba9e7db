"""
Tests for game_loop.py - tick scheduling, driven by a fake timer instead of Tk.
"""

from collections import deque
import itertools
import random

import pytest

from game_logic import Direction, GameStatus, SnakeConfig, SnakeGame
from game_loop import GameLoop, SleepTimer
from input_controller import Command, InputController


class FakeTimer:
    """Records after() calls; fire() runs the oldest pending callback."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.pending = {}
        self.delays = []

    def after(self, ms, func):
        handle = next(self._ids)
        self.pending[handle] = func
        self.delays.append(ms)
        return handle

    def after_cancel(self, handle):
        self.pending.pop(handle, None)

    def fire(self):
        handle = min(self.pending)
        func = self.pending.pop(handle)
        func()


@pytest.fixture
def game():
    return SnakeGame(SnakeConfig(initial_food=(15, 15)), rng=random.Random(0))


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def frames():
    return []


@pytest.fixture
def loop(game, timer, frames):
    return GameLoop(game, timer, on_frame=frames.append)


class TestScheduling:
    def test_start_schedules_one_tick_at_configured_interval(self, loop, timer):
        loop.start()
        loop.start()
        assert len(timer.pending) == 1
        assert timer.delays == [150]

    def test_tick_steps_and_reschedules(self, loop, timer, frames, game):
        loop.start()
        timer.fire()
        assert game.snake[0] == (11, 10)
        assert len(frames) == 1
        assert frames[0].head == (11, 10)
        assert len(timer.pending) == 1

    def test_interval_override(self, game, timer):
        loop = GameLoop(game, timer, interval_ms=75)
        loop.start()
        assert timer.delays == [75]

    def test_never_more_than_one_pending_tick(self, loop, timer):
        loop.start()
        for _ in range(4):
            timer.fire()
            assert len(timer.pending) == 1

    def test_game_over_stops_ticking(self, loop, timer, game, frames):
        game.snake = deque([(19, 10)])
        loop.start()
        timer.fire()
        assert game.status is GameStatus.OVER
        assert frames[-1].is_over
        assert not timer.pending
        assert not loop.scheduled

    def test_stop_cancels_pending_tick(self, loop, timer):
        loop.start()
        loop.stop()
        assert not timer.pending


class TestPauseResume:
    def test_pause_cancels_and_resume_reschedules(self, loop, timer, frames):
        loop.start()
        assert loop.toggle_pause() is GameStatus.PAUSED
        assert not timer.pending
        assert frames[-1].is_paused

        assert loop.toggle_pause() is GameStatus.RUNNING
        assert len(timer.pending) == 1

    def test_pause_ignored_after_game_over(self, loop, timer, game):
        game.status = GameStatus.OVER
        assert loop.toggle_pause() is GameStatus.OVER
        assert not timer.pending


class TestRestart:
    def test_restart_after_game_over_resumes_ticking(self, loop, timer, game, frames):
        game.snake = deque([(19, 10)])
        loop.start()
        timer.fire()
        assert not timer.pending

        loop.restart()
        assert game.status is GameStatus.RUNNING
        assert list(game.snake) == [(10, 10), (9, 10), (8, 10)]
        assert frames[-1].score == 0
        assert len(timer.pending) == 1

    def test_restart_while_running_keeps_single_tick(self, loop, timer):
        loop.start()
        loop.restart()
        assert len(timer.pending) == 1


class TestWithController:
    def test_controller_drives_loop(self, loop, timer, game):
        controller = InputController(loop)
        loop.start()

        controller.handle_command(Command.UP)
        timer.fire()
        assert game.snake[0] == (11, 9)

        controller.handle_command(Command.PAUSE)
        assert not timer.pending
        assert controller.handle_command(Command.LEFT) is False

        controller.handle_command(Command.PAUSE)
        controller.handle_command(Command.LEFT)
        timer.fire()
        assert game.direction is Direction.LEFT
        assert game.snake[0] == (10, 9)


class TestBeforeTick:
    def test_hook_runs_before_step_in_same_tick(self, game, timer):
        loop = GameLoop(game, timer, before_tick=lambda: game.set_direction(Direction.DOWN))
        loop.start()
        timer.fire()
        assert game.snake[0] == (10, 11)


class TestSleepTimer:
    def test_fires_in_order_after_sleeping(self):
        naps, calls = [], []
        timer = SleepTimer(sleep=naps.append)
        timer.after(100, lambda: calls.append("a"))
        timer.after(250, lambda: calls.append("b"))
        assert timer.run() == 2
        assert calls == ["a", "b"]
        assert naps == [0.1, 0.25]

    def test_cancelled_callback_never_fires(self):
        calls = []
        timer = SleepTimer(sleep=lambda _s: None)
        handle = timer.after(10, lambda: calls.append("x"))
        timer.after_cancel(handle)
        assert timer.run() == 0
        assert calls == []

    def test_drives_game_loop_until_game_over(self, game):
        timer = SleepTimer(sleep=lambda _s: None)
        loop = GameLoop(game, timer)
        loop.start()
        assert timer.run() == 10
        assert game.status is GameStatus.OVER
        assert not loop.scheduled

    def test_max_calls_bounds_the_run(self, game):
        timer = SleepTimer(sleep=lambda _s: None)
        GameLoop(game, timer).start()
        assert timer.run(max_calls=3) == 3
        assert game.snake[0] == (13, 10)
        assert len(timer.pending) == 1
