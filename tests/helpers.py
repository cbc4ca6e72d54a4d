"""Board builders and a hand-driven clock shared by the tests."""
import numpy as np

from tetris_core.game.board import BOARD_HEIGHT, BOARD_WIDTH, Board


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def board_with_rows(rows, color=1, holes=()):
    """Return a board whose given rows are filled, except (x, y) in holes."""
    grid = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)
    for r in rows:
        grid[r, :] = color
    for x, y in holes:
        grid[y, x] = 0
    return Board(grid=grid)


def random_board(seed, top=10, density=0.5):
    """Random locked cells in rows [top, height)."""
    rng = np.random.default_rng(seed)
    grid = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)
    cells = rng.random((BOARD_HEIGHT - top, BOARD_WIDTH)) < density
    grid[top:][cells] = rng.integers(1, 8, size=int(cells.sum()))
    return Board(grid=grid)
