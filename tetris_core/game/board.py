"""
Board logic for a 10x20 Tetris grid.

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - 1-7 = color identifier of the piece type that locked there

Rows above the board (negative y) are not stored. A piece may hang into
that area while spawning or rotating, but only its on-board cells are ever
written into the grid.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from tetris_core.game.pieces import Piece

BOARD_WIDTH = 10
BOARD_HEIGHT = 20
EMPTY = 0


class Board:
    """Locked-cell grid with collision detection and row operations.

    Every operation that changes cells returns a new Board, so a board
    handed out in a snapshot can never change underneath its reader.

    Attributes:
        width: Number of columns (default 10).
        height: Number of rows (default 20).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(
        self,
        width: int = BOARD_WIDTH,
        height: int = BOARD_HEIGHT,
        grid: np.ndarray | None = None,
    ) -> None:
        """Initialize a board, empty unless a grid is given.

        Args:
            width: Number of columns.
            height: Number of rows.
            grid: Optional initial cells; copied, must be (height, width).

        Raises:
            ValueError: If the grid shape does not match the dimensions.
        """
        self.width = width
        self.height = height
        if grid is None:
            self.grid = np.zeros((height, width), dtype=np.int8)
        else:
            grid = np.asarray(grid, dtype=np.int8)
            if grid.shape != (height, width):
                raise ValueError(
                    f"Grid shape {grid.shape} does not match board {height}x{width}"
                )
            self.grid = grid.copy()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Board:
        """Build a board from a list of rows of color identifiers."""
        grid = np.array(rows, dtype=np.int8)
        if grid.ndim != 2:
            raise ValueError("Board rows must form a 2D grid")
        height, width = grid.shape
        return cls(width, height, grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool(
            np.array_equal(self.grid, other.grid)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height}, filled={self.filled_count()})"

    def copy(self) -> Board:
        return Board(self.width, self.height, self.grid)

    def read_only(self) -> Board:
        """Return a copy whose grid cannot be written to."""
        frozen = self.copy()
        frozen.grid.flags.writeable = False
        return frozen

    def get_grid(self) -> np.ndarray:
        """Return a read-only copy of the board grid.

        Returns:
            A numpy array of shape (height, width), dtype int8.
        """
        grid = self.grid.copy()
        grid.flags.writeable = False
        return grid

    def cell(self, x: int, y: int) -> int:
        return int(self.grid[y, x])

    def is_empty(self, x: int, y: int) -> bool:
        return bool(self.grid[y, x] == EMPTY)

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def collides(self, piece: Piece) -> bool:
        """Check whether a piece overlaps the walls, the floor or locked cells.

        A filled cell collides when:
          - its column is outside [0, width), or
          - its row is at or below the floor (row >= height), or
          - its row is on the board (row >= 0) and that cell is occupied.

        Cells above the board (row < 0) are always allowed, so pieces can
        spawn and rotate while partly off-screen.

        Args:
            piece: The piece pose to test.

        Returns:
            True if the pose is blocked, False if it fits.
        """
        for board_x, board_y in piece.cells():
            # Check boundaries
            if board_x < 0 or board_x >= self.width or board_y >= self.height:
                return True
            # Check collision with locked cells
            if board_y >= 0 and self.grid[board_y, board_x] != EMPTY:
                return True
        return False

    def with_piece(self, piece: Piece) -> Board:
        """Return a new board with the piece written in as its color.

        Cells that fall outside the board are dropped. Does NOT check
        validity first; the caller locks only collision-free poses.

        Args:
            piece: The piece to lock.

        Returns:
            A new Board.
        """
        locked = self.copy()
        for board_x, board_y in piece.cells():
            if 0 <= board_y < self.height and 0 <= board_x < self.width:
                locked.grid[board_y, board_x] = piece.color
        return locked

    def full_rows(self) -> list[int]:
        """Return the indices of completely filled rows, top to bottom."""
        full = np.all(self.grid != EMPTY, axis=1)
        return [int(r) for r in np.flatnonzero(full)]

    def without_rows(self, indices: Iterable[int]) -> Board:
        """Remove the given rows and shift everything above them down.

        Args:
            indices: Row indices to remove, in any order. Repeated indices
                count once.

        Returns:
            A new Board of the same height with as many empty rows
            prepended at the top as rows were removed.

        Raises:
            ValueError: If an index is outside [0, height).
        """
        rows = set(indices)
        for r in rows:
            if not 0 <= r < self.height:
                raise ValueError(f"Row index {r} out of range 0-{self.height - 1}")
        if not rows:
            return self.copy()

        # Remove cleared rows and prepend empty rows at the top
        mask = np.ones(self.height, dtype=bool)
        mask[sorted(rows)] = False
        remaining = self.grid[mask]
        empty_rows = np.zeros((len(rows), self.width), dtype=np.int8)
        return Board(self.width, self.height, np.vstack([empty_rows, remaining]))


def create_empty_board(width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> Board:
    return Board(width, height)


def collides(board: Board, piece: Piece) -> bool:
    """Pure collision predicate: does the piece pose overlap the board?"""
    return board.collides(piece)
