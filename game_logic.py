# Core Snake game state and rules, independent from GUI/input/timer code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
import random

logger = logging.getLogger(__name__)

Position = tuple[int, int]

# Bounds used when validating a config before a game is built.
MIN_GRID_SIZE = 8
MAX_GRID_SIZE = 60
MIN_CELL_SIZE = 8
MAX_CELL_SIZE = 48
MIN_SPEED_MS = 40
MAX_SPEED_MS = 1000
MIN_INITIAL_LENGTH = 1


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def delta(self) -> Position:
        """Unit vector for one step; y grows downward."""
        return _DELTAS[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}
_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class GameStatus(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class DeathReason(Enum):
    WALL = "wall"
    SELF = "self"


@dataclass
class SnakeConfig:
    """Launch-time settings shared between the logic layer and GUI."""
    grid_size: int = 20
    cell_size: int = 20
    speed_ms: int = 150
    initial_length: int = 3
    score_per_food: int = 10
    food_avoids_snake: bool = False            # respawn only on free cells
    initial_food: Position | None = None       # fixed first food, else random

    def validate(self) -> None:
        """Raise ValueError if any setting is outside its allowed range."""
        _check_range("grid_size", self.grid_size, MIN_GRID_SIZE, MAX_GRID_SIZE)
        _check_range("cell_size", self.cell_size, MIN_CELL_SIZE, MAX_CELL_SIZE)
        _check_range("speed_ms", self.speed_ms, MIN_SPEED_MS, MAX_SPEED_MS)
        _check_range("initial_length", self.initial_length, MIN_INITIAL_LENGTH, self.grid_size // 2 + 1)
        if self.score_per_food < 0:
            raise ValueError("score_per_food must be >= 0.")
        if self.initial_food is not None:
            fx, fy = self.initial_food
            if not (0 <= fx < self.grid_size and 0 <= fy < self.grid_size):
                raise ValueError(f"initial_food {self.initial_food} is outside the grid.")
            if tuple(self.initial_food) in initial_snake(self.grid_size, self.initial_length):
                raise ValueError(f"initial_food {self.initial_food} overlaps the starting snake.")


def initial_snake(grid_size: int, length: int) -> list[Position]:
    """Horizontal body with the head at the board centre, extending left."""
    center = grid_size // 2
    return [(center - i, center) for i in range(length)]


def _check_range(label: str, value: int, low: int, high: int) -> None:
    if not (low <= value <= high):
        raise ValueError(f"{label} must be between {low} and {high}, got {value}.")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of one tick, handed to the presentation layer."""
    snake: tuple[Position, ...]
    food: Position
    direction: Direction
    pending_direction: Direction
    status: GameStatus
    score: int
    grid_size: int
    tick: int = 0
    death_reason: DeathReason | None = None

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.OVER

    @property
    def is_paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    def to_dict(self) -> dict:
        """Convert to plain types for JSON serialization."""
        return {
            "snake": [{"x": x, "y": y} for x, y in self.snake],
            "food": {"x": self.food[0], "y": self.food[1]},
            "direction": self.direction.value,
            "pending_direction": self.pending_direction.value,
            "status": self.status.value,
            "score": self.score,
            "grid_size": self.grid_size,
            "tick": self.tick,
            "death_reason": self.death_reason.value if self.death_reason else None,
        }


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code).

    All state lives on this object and only changes through ``set_direction``,
    ``toggle_pause``, ``step`` and ``restart``. None of them raise for ignored
    input; a refused intent simply leaves ``pending_direction`` untouched.
    """

    def __init__(self, config: SnakeConfig | None = None, rng: random.Random | None = None) -> None:
        self.config = config if config is not None else SnakeConfig()
        self.config.validate()
        self.rng = rng if rng is not None else random.Random()
        self.restart()

    def restart(self) -> None:
        """Rebuild every field of the state from scratch; legal in any status."""
        body = initial_snake(self.config.grid_size, self.config.initial_length)
        self.snake: deque[Position] = deque(body)        # head at index 0
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT         # applied next tick
        self.status = GameStatus.RUNNING
        self.death_reason: DeathReason | None = None
        self.score = 0
        self.tick = 0
        self.food = self._initial_food()
        logger.debug("New game: snake=%s food=%s", list(self.snake), self.food)

    def _initial_food(self) -> Position:
        if self.config.initial_food is not None:
            return tuple(self.config.initial_food)
        return self._random_free_cell(set(self.snake)) or self._random_cell()

    def _random_cell(self) -> Position:
        size = self.config.grid_size
        return self.rng.randrange(size), self.rng.randrange(size)

    def _random_free_cell(self, occupied: set[Position]) -> Position | None:
        size = self.config.grid_size
        free = [(x, y) for y in range(size) for x in range(size) if (x, y) not in occupied]
        if not free:
            return None
        return self.rng.choice(free)

    def _respawn_food(self, next_body: set[Position]) -> Position:
        """Pick the next food cell; by default it may land under the snake."""
        if self.config.food_avoids_snake:
            cell = self._random_free_cell(next_body)
            if cell is not None:
                return cell
        return self._random_cell()

    def _in_bounds(self, x: int, y: int) -> bool:
        size = self.config.grid_size
        return 0 <= x < size and 0 <= y < size

    def set_direction(self, direction: Direction) -> bool:
        """Buffer a turn for the next tick; reject 180-degree reversals."""
        if self.status is not GameStatus.RUNNING:
            return False
        if len(self.snake) > 1 and direction is self.direction.opposite:
            return False
        self.pending_direction = direction
        return True

    def toggle_pause(self) -> GameStatus:
        """Flip RUNNING and PAUSED; a finished game stays finished."""
        if self.status is GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
        elif self.status is GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
        logger.debug("Pause toggled, status=%s", self.status.value)
        return self.status

    def step(self) -> GameSnapshot:
        """Advance one tick and return the resulting snapshot."""
        if self.status is not GameStatus.RUNNING:
            return self.snapshot()

        # Apply the latest accepted intent once per tick.
        self.direction = self.pending_direction
        dx, dy = self.direction.delta
        head_x, head_y = self.snake[0]
        new_head = (head_x + dx, head_y + dy)

        if not self._in_bounds(*new_head):
            return self._end_game(DeathReason.WALL)

        # Every segment counts, the tail included: it has not moved yet.
        if new_head in self.snake:
            return self._end_game(DeathReason.SELF)

        if new_head == self.food:
            self.score += self.config.score_per_food
            self.food = self._respawn_food(set(self.snake) | {new_head})
            logger.debug("Food eaten at %s, score=%d, next food=%s", new_head, self.score, self.food)
        else:
            self.snake.pop()

        self.snake.appendleft(new_head)
        self.tick += 1
        return self.snapshot()

    def _end_game(self, reason: DeathReason) -> GameSnapshot:
        self.status = GameStatus.OVER
        self.death_reason = reason
        logger.info(
            "Game over (%s) after %d ticks: score=%d length=%d",
            reason.value,
            self.tick,
            self.score,
            len(self.snake),
        )
        return self.snapshot()

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            snake=tuple(self.snake),
            food=self.food,
            direction=self.direction,
            pending_direction=self.pending_direction,
            status=self.status,
            score=self.score,
            grid_size=self.config.grid_size,
            tick=self.tick,
            death_reason=self.death_reason,
        )
