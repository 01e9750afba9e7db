"""
Tests for snake_gui.py - the launcher and the (withdrawn) Tk window.
"""

from collections import deque
import random

import pytest

tk = pytest.importorskip("tkinter")

from game_logic import SnakeConfig, SnakeGame  # noqa: E402
from snake_gui import SnakeApp, build_config, main, parse_args  # noqa: E402


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        config = build_config(args)
        assert config.grid_size == 20
        assert config.cell_size == 20
        assert config.speed_ms == 150
        assert config.food_avoids_snake is False
        assert args.seed is None

    def test_flags_map_onto_config(self):
        args = parse_args(["--grid-size", "30", "--speed-ms", "90", "--food-avoids-snake", "--seed", "7"])
        config = build_config(args)
        assert config.grid_size == 30
        assert config.speed_ms == 90
        assert config.food_avoids_snake is True
        assert args.seed == 7

    def test_out_of_range_value_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--speed-ms", "5"])


class TestTextMain:
    def test_text_flag_plays_in_terminal(self, capsys):
        main(["--text", "--speed-ms", "40", "--moves", "ww", "--max-ticks", "2", "--seed", "1"])
        out = capsys.readouterr().out
        boards = out.strip().split("\n\n")
        # Initial board, two ticks, then the closing status line on its own.
        assert len(boards) == 4
        assert boards[-1].startswith("SCORE: ")
        assert "H" in boards[-2]


@pytest.fixture
def tk_root():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    root.destroy()


class TestSnakeAppDraw:
    def test_board_has_gridlines_and_game_over_reason(self, tk_root):
        game = SnakeGame(SnakeConfig(initial_food=(15, 15)), rng=random.Random(0))
        app = SnakeApp(tk_root, game)
        app.loop.stop()

        lines = [item for item in app.canvas.find_all() if app.canvas.type(item) == "line"]
        assert len(lines) == 2 * (20 + 1)
        assert app.canvas.itemcget(lines[0], "fill") == SnakeApp.GRID_COLOR

        game.snake = deque([(19, 10)])
        app.draw(game.step())
        texts = [app.canvas.itemcget(i, "text") for i in app.canvas.find_all() if app.canvas.type(i) == "text"]
        assert texts == ["GAME OVER - HIT WALL - FINAL SCORE: 0"]
        assert app.restart_btn.cget("text") == "NEW GAME"
