# Shared snapshot helpers: numpy board encoding and plain-text rendering.
from __future__ import annotations

import numpy as np

try:
    from .game_logic import DeathReason, GameSnapshot, GameStatus
except ImportError:
    from game_logic import DeathReason, GameSnapshot, GameStatus


EMPTY_VALUE = 0.0
FOOD_VALUE = 0.5
BODY_VALUE = -0.5
HEAD_VALUE = 1.0

TEXT_CELLS = {"empty": ".", "food": "*", "head": "H", "body": "o"}
DEATH_LABELS = {DeathReason.WALL: "HIT WALL", DeathReason.SELF: "HIT SELF"}


def encode_board_state(snapshot: GameSnapshot) -> np.ndarray:
    """
    Grid encoding indexed as board[y, x]:
    - 0.0: empty
    - 0.5: food
    - -0.5: snake body
    - 1.0: snake head
    The snake is drawn after the food, so food hidden under the body is not visible.
    """
    size = snapshot.grid_size
    board = np.full((size, size), EMPTY_VALUE, dtype=np.float32)

    fx, fy = snapshot.food
    board[fy, fx] = FOOD_VALUE

    for idx, (x, y) in enumerate(snapshot.snake):
        board[y, x] = HEAD_VALUE if idx == 0 else BODY_VALUE

    return board


def status_message(snapshot: GameSnapshot) -> str:
    if snapshot.status is GameStatus.OVER:
        if snapshot.death_reason is not None:
            return f"GAME OVER - {DEATH_LABELS[snapshot.death_reason]} - FINAL SCORE: {snapshot.score}"
        return f"GAME OVER - FINAL SCORE: {snapshot.score}"
    if snapshot.status is GameStatus.PAUSED:
        return "PAUSED"
    return f"SCORE: {snapshot.score}"


def render_text(snapshot: GameSnapshot) -> str:
    """ASCII board with (0,0) at top left, followed by a status line."""
    board = encode_board_state(snapshot)
    symbols = {
        EMPTY_VALUE: TEXT_CELLS["empty"],
        FOOD_VALUE: TEXT_CELLS["food"],
        HEAD_VALUE: TEXT_CELLS["head"],
        BODY_VALUE: TEXT_CELLS["body"],
    }
    rows = [" ".join(symbols[float(value)] for value in row) for row in board]
    rows.append(status_message(snapshot))
    return "\n".join(rows)
