"""
Line clearing, scoring, levels and gravity speed.

Scoring table (multiplied by the level the lines were cleared on):
  1 line  = 100
  2 lines = 300
  3 lines = 500
  4 lines = 800

Hard drops earn 2 points per row. The level goes up by one every 10 lines,
and each level takes 100 ms off the drop interval down to a 100 ms floor.
"""

from __future__ import annotations

from typing import Iterable

from tetris_core.game.board import Board

SCORE_TABLE: dict[int, int] = {
    1: 100,
    2: 300,
    3: 500,
    4: 800,
}

HARD_DROP_POINTS_PER_ROW = 2
LINES_PER_LEVEL = 10
BASE_DROP_SPEED_MS = 1000
DROP_SPEED_STEP_MS = 100
MIN_DROP_SPEED_MS = 100


def full_lines(board: Board) -> list[int]:
    """Return the ascending indices of rows where every cell is filled."""
    return board.full_rows()


def clear_lines(board: Board, indices: Iterable[int]) -> Board:
    """Return a new board with the given rows removed and gravity applied.

    The input board is not modified. Exactly one empty row is prepended
    per removed row, so the height never changes.
    """
    return board.without_rows(indices)


def line_clear_score(lines: int, level: int) -> int:
    """Points for clearing `lines` rows at once on `level` (0 outside 1-4)."""
    return SCORE_TABLE.get(lines, 0) * level


def hard_drop_score(rows_dropped: int) -> int:
    return rows_dropped * HARD_DROP_POINTS_PER_ROW


def level_for_lines(lines_cleared: int) -> int:
    """Level reached after clearing `lines_cleared` lines in total."""
    return 1 + lines_cleared // LINES_PER_LEVEL


def drop_speed_for_level(level: int) -> int:
    """Milliseconds between automatic drops on `level`."""
    return max(MIN_DROP_SPEED_MS, BASE_DROP_SPEED_MS - (level - 1) * DROP_SPEED_STEP_MS)
