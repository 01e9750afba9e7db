# Headless terminal front end: prints the board each tick, steers from a key script.
from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO

try:
    from .game_logic import GameSnapshot, SnakeGame
    from .game_loop import GameLoop, SleepTimer
    from .input_controller import InputController
    from .utils import render_text
except ImportError:
    from game_logic import GameSnapshot, SnakeGame
    from game_loop import GameLoop, SleepTimer
    from input_controller import InputController
    from utils import render_text

logger = logging.getLogger(__name__)

IDLE_KEY = "."
SCRIPT_KEYSYMS = {" ": "space"}  # script characters that differ from their Tk keysym


def run_text_mode(
    game: SnakeGame,
    moves: str = "",
    max_ticks: int | None = None,
    stream: TextIO | None = None,
    sleep: Callable[[float], None] | None = None,
) -> GameSnapshot:
    """
    Play a game without a window and return the last snapshot.

    ``moves`` holds one key per tick, using the default single-character
    bindings (w/a/s/d steer, r restarts, space pauses); '.' means no input for that tick.
    The run ends on game over, on a pause, or after ``max_ticks`` ticks.
    """
    out = stream if stream is not None else sys.stdout
    timer = SleepTimer() if sleep is None else SleepTimer(sleep)
    script = iter(moves)
    frames: list[GameSnapshot] = [game.snapshot()]

    def show(snapshot: GameSnapshot) -> None:
        frames.append(snapshot)
        print(render_text(snapshot), end="\n\n", file=out)

    def feed() -> None:
        key = next(script, IDLE_KEY)
        if key != IDLE_KEY:
            controller.handle_key(SCRIPT_KEYSYMS.get(key, key))

    loop = GameLoop(game, timer, on_frame=show, before_tick=feed)
    controller = InputController(loop)

    print(render_text(game.snapshot()), end="\n\n", file=out)
    loop.start()
    ticks = timer.run(max_ticks)
    loop.stop()
    logger.info("Text mode finished after %d ticks: %s", ticks, frames[-1].status.value)
    return frames[-1]
