# Tkinter presentation layer for SnakeGame, plus the command-line launcher.
from __future__ import annotations

import argparse
from dataclasses import replace
import logging
import random
import tkinter as tk

# Support both package imports and running this file directly.
try:
    from .game_logic import GameSnapshot, SnakeConfig, SnakeGame
    from .game_loop import GameLoop
    from .input_controller import Command, InputController
    from .text_mode import run_text_mode
    from .utils import status_message
except ImportError:
    from game_logic import GameSnapshot, SnakeConfig, SnakeGame
    from game_loop import GameLoop
    from input_controller import Command, InputController
    from text_mode import run_text_mode
    from utils import status_message

logger = logging.getLogger(__name__)


class SnakeApp:
    """Draws snapshots and wires keys/buttons; holds no game state of its own."""
    BG = "#000000"
    BOARD_BG = "#111827"
    BORDER_COLOR = "#00ffff"
    GRID_COLOR = "#0b3b40"
    SNAKE_COLOR = "#00ff00"
    FOOD_COLOR = "#ff00ff"
    TEXT_PRIMARY = "#22d3ee"
    TEXT_ALERT = "#ef4444"
    BUTTON_BG = "#164e63"
    PAUSE_BG = "#581c87"
    PAUSE_FG = "#c084fc"

    def __init__(self, root: tk.Tk, game: SnakeGame) -> None:
        self.root = root
        self.root.title("Neon Snake")
        self.root.configure(bg=self.BG)

        self.game = game
        self.config = game.config
        self.loop = GameLoop(game, root, on_frame=self.draw)
        self.controller = InputController(self.loop)

        self._build_layout()
        self.root.bind("<KeyPress>", self._on_key)
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.draw(game.snapshot())
        self.loop.start()

    def _build_layout(self) -> None:
        """Score on top, board in the middle, buttons and key hints below."""
        side = self.config.grid_size * self.config.cell_size

        self.score_var = tk.StringVar()
        tk.Label(
            self.root,
            textvariable=self.score_var,
            fg=self.TEXT_PRIMARY,
            bg=self.BG,
            font=("Helvetica", 28, "bold"),
        ).pack(pady=(16, 8))

        self.canvas = tk.Canvas(
            self.root,
            width=side,
            height=side,
            bg=self.BOARD_BG,
            highlightthickness=2,
            highlightbackground=self.BORDER_COLOR,
            bd=0,
        )
        self.canvas.pack(padx=16)

        buttons = tk.Frame(self.root, bg=self.BG)
        buttons.pack(pady=12)
        self.restart_btn = self._button(
            buttons, "RESTART", lambda: self.controller.handle_command(Command.RESTART), self.BUTTON_BG, self.TEXT_PRIMARY
        )
        self.restart_btn.pack(side="left", padx=8)
        self.pause_btn = self._button(
            buttons, "PAUSE", lambda: self.controller.handle_command(Command.PAUSE), self.PAUSE_BG, self.PAUSE_FG
        )
        self.pause_btn.pack(side="left", padx=8)

        tk.Label(
            self.root,
            text="CONTROLS:\n↑ ↓ ← → / WASD : STEER\nSPACE : PAUSE    R : RESTART",
            fg=self.TEXT_PRIMARY,
            bg=self.BG,
            justify="center",
            font=("Helvetica", 11),
        ).pack(pady=(0, 16))

    def _button(self, parent: tk.Widget, text: str, command, bg: str, fg: str) -> tk.Button:
        return tk.Button(
            parent,
            text=text,
            command=command,
            fg=fg,
            bg=bg,
            activebackground=bg,
            activeforeground=fg,
            bd=0,
            relief="flat",
            font=("Helvetica", 11, "bold"),
            padx=18,
            pady=6,
            cursor="hand2",
        )

    def _on_key(self, event: tk.Event) -> None:
        self.controller.handle_key(event.keysym)

    def draw(self, snapshot: GameSnapshot) -> None:
        """Render grid, food, snake, labels, and game-over overlay."""
        self.canvas.delete("all")
        cell = self.config.cell_size
        size = self.config.grid_size

        # Gridlines are always shown.
        for i in range(size + 1):
            pos = i * cell
            self.canvas.create_line(0, pos, size * cell, pos, fill=self.GRID_COLOR)
            self.canvas.create_line(pos, 0, pos, size * cell, fill=self.GRID_COLOR)

        fx, fy = snapshot.food
        self.canvas.create_oval(
            fx * cell + 1, fy * cell + 1, (fx + 1) * cell - 1, (fy + 1) * cell - 1,
            fill=self.FOOD_COLOR, outline="",
        )

        for idx, (x, y) in enumerate(snapshot.snake):
            self.canvas.create_rectangle(
                x * cell + 1, y * cell + 1, (x + 1) * cell - 1, (y + 1) * cell - 1,
                fill=self.SNAKE_COLOR,
                outline="#ffffff" if idx == 0 else "",
            )

        self.score_var.set(f"SCORE: {snapshot.score}")
        self.restart_btn.configure(text="NEW GAME" if snapshot.is_over else "RESTART")

        # Pause button is hidden once the game is over.
        if snapshot.is_over:
            self.pause_btn.pack_forget()
        else:
            self.pause_btn.configure(text="RESUME" if snapshot.is_paused else "PAUSE")
            if not self.pause_btn.winfo_manager():
                self.pause_btn.pack(side="left", padx=8)

        if snapshot.is_over or snapshot.is_paused:
            side = self.config.grid_size * cell
            self.canvas.create_text(
                side // 2,
                side // 2,
                text=status_message(snapshot),
                fill=self.TEXT_ALERT if snapshot.is_over else self.TEXT_PRIMARY,
                font=("Helvetica", 16, "bold"),
            )

    def close(self) -> None:
        self.loop.stop()
        self.root.destroy()


def build_config(args: argparse.Namespace) -> SnakeConfig:
    return replace(
        SnakeConfig(),
        grid_size=args.grid_size,
        cell_size=args.cell_size,
        speed_ms=args.speed_ms,
        food_avoids_snake=args.food_avoids_snake,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = SnakeConfig()
    parser = argparse.ArgumentParser(description="Play Neon Snake.")
    parser.add_argument("--grid-size", type=int, default=defaults.grid_size, help="Cells per board side.")
    parser.add_argument("--cell-size", type=int, default=defaults.cell_size, help="Pixels per cell.")
    parser.add_argument("--speed-ms", type=int, default=defaults.speed_ms, help="Milliseconds per tick.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement.")
    parser.add_argument(
        "--food-avoids-snake",
        action="store_true",
        help="Respawn food only on cells the snake does not occupy.",
    )
    parser.add_argument("--text", action="store_true", help="Play in the terminal instead of opening a window.")
    parser.add_argument("--moves", default="", help="Text mode key script, one key per tick (w/a/s/d, r, '.' for none).")
    parser.add_argument("--max-ticks", type=int, default=None, help="Text mode: stop after this many ticks.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    args = parser.parse_args(argv)
    try:
        build_config(args).validate()
    except ValueError as exc:
        parser.error(str(exc))
    return args


def run_player_gui(config: SnakeConfig | None = None, seed: int | None = None) -> None:
    """Launch the Snake window."""
    game = SnakeGame(config, rng=random.Random(seed))
    root = tk.Tk()
    SnakeApp(root, game)
    root.mainloop()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting Neon Snake (seed=%s, text=%s)", args.seed, args.text)
    if args.text:
        game = SnakeGame(build_config(args), rng=random.Random(args.seed))
        final = run_text_mode(game, moves=args.moves, max_ticks=args.max_ticks)
        print(status_message(final))
        return
    run_player_gui(build_config(args), seed=args.seed)


if __name__ == "__main__":
    main()
