# Translates raw key/button commands into engine calls.
from __future__ import annotations

from enum import Enum
import logging
from typing import Protocol

try:
    from .game_logic import Direction, GameStatus
except ImportError:
    from game_logic import Direction, GameStatus

logger = logging.getLogger(__name__)


class Command(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAUSE = "pause"
    RESTART = "restart"


COMMAND_DIRECTIONS = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}

# Tk keysyms -> commands. Arrow keys and WASD both steer.
DEFAULT_KEY_BINDINGS = {
    "Up": Command.UP,
    "Down": Command.DOWN,
    "Left": Command.LEFT,
    "Right": Command.RIGHT,
    "w": Command.UP,
    "s": Command.DOWN,
    "a": Command.LEFT,
    "d": Command.RIGHT,
    "W": Command.UP,
    "S": Command.DOWN,
    "A": Command.LEFT,
    "D": Command.RIGHT,
    "space": Command.PAUSE,
    "r": Command.RESTART,
    "R": Command.RESTART,
}


class Controllable(Protocol):
    status: GameStatus

    def set_direction(self, direction: Direction) -> bool: ...

    def toggle_pause(self) -> GameStatus: ...

    def restart(self) -> None: ...


class InputController:
    """Stateless mapping layer between input events and a game target."""

    def __init__(self, target: Controllable, bindings: dict[str, Command] | None = None) -> None:
        self.target = target
        self.bindings = dict(DEFAULT_KEY_BINDINGS if bindings is None else bindings)

    def handle_key(self, keysym: str) -> bool:
        """Dispatch a Tk keysym; unbound keys are ignored."""
        command = self.bindings.get(keysym)
        if command is None:
            return False
        return self.handle_command(command)

    def handle_command(self, command: Command) -> bool:
        """Forward one command. Returns False when it was dropped."""
        status = self.target.status

        if command is Command.RESTART:
            self.target.restart()
            return True

        if command is Command.PAUSE:
            if status is GameStatus.OVER:
                return False
            self.target.toggle_pause()
            return True

        # Steering only matters while the snake is moving.
        if status is not GameStatus.RUNNING:
            logger.debug("Dropped %s while %s", command.value, status.value)
            return False
        return self.target.set_direction(COMMAND_DIRECTIONS[command])
