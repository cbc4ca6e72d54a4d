"""
Tetromino definitions with all 4 rotation states and SRS kick tables.

Each piece type has a color identifier (the value written into the board
grid when the piece locks), a display color, and four 4x4 rotation
matrices (0=spawn, 1=CW, 2=180, 3=CCW).

Coordinate convention:
  - A piece's (x, y) is the top-left corner of its 4x4 bounding box.
  - On the board, row 0 is the top and row increases downward.
  - Column 0 is the left edge and column increases rightward.
"""

from __future__ import annotations

import dataclasses
from typing import Iterator, NamedTuple

import numpy as np

# =============================================================================
# Piece Colors
# =============================================================================

# Color identifiers stored in the board grid (0 is reserved for empty).
PIECE_IDS: dict[str, int] = {
    "I": 1,
    "O": 2,
    "T": 3,
    "S": 4,
    "Z": 5,
    "J": 6,
    "L": 7,
}

# Display colors, keyed by color identifier.
PIECE_RGB: dict[int, tuple[int, int, int]] = {
    1: (0, 240, 240),    # I  cyan
    2: (240, 240, 0),    # O  yellow
    3: (160, 0, 240),    # T  purple
    4: (0, 240, 0),      # S  green
    5: (240, 0, 0),      # Z  red
    6: (0, 0, 240),      # J  blue
    7: (240, 160, 0),    # L  orange
}

PIECE_TYPES: tuple[str, ...] = ("I", "O", "T", "S", "Z", "J", "L")


def _matrix(*rows: str) -> np.ndarray:
    """Build a read-only 4x4 boolean matrix from '#'/'.' strings."""
    m = np.array([[ch == "#" for ch in row] for row in rows], dtype=bool)
    m.flags.writeable = False
    return m


# =============================================================================
# Tetromino Shapes
# =============================================================================
# Every rotation state lives in a 4x4 box. O occupies the middle two columns
# in all four states, which is why it spawns one column to the right.

PIECE_SHAPES: dict[str, tuple[np.ndarray, ...]] = {
    "I": (
        _matrix("....", "####", "....", "...."),
        _matrix("..#.", "..#.", "..#.", "..#."),
        _matrix("....", "....", "####", "...."),
        _matrix(".#..", ".#..", ".#..", ".#.."),
    ),
    "O": (
        _matrix(".##.", ".##.", "....", "...."),
        _matrix(".##.", ".##.", "....", "...."),
        _matrix(".##.", ".##.", "....", "...."),
        _matrix(".##.", ".##.", "....", "...."),
    ),
    "T": (
        _matrix(".#..", "###.", "....", "...."),
        _matrix(".#..", ".##.", ".#..", "...."),
        _matrix("....", "###.", ".#..", "...."),
        _matrix(".#..", "##..", ".#..", "...."),
    ),
    "S": (
        _matrix(".##.", "##..", "....", "...."),
        _matrix(".#..", ".##.", "..#.", "...."),
        _matrix("....", ".##.", "##..", "...."),
        _matrix("#...", "##..", ".#..", "...."),
    ),
    "Z": (
        _matrix("##..", ".##.", "....", "...."),
        _matrix("..#.", ".##.", ".#..", "...."),
        _matrix("....", "##..", ".##.", "...."),
        _matrix(".#..", "##..", "#...", "...."),
    ),
    "J": (
        _matrix("#...", "###.", "....", "...."),
        _matrix(".##.", ".#..", ".#..", "...."),
        _matrix("....", "###.", "..#.", "...."),
        _matrix(".#..", ".#..", "##..", "...."),
    ),
    "L": (
        _matrix("..#.", "###.", "....", "...."),
        _matrix(".#..", ".#..", ".##.", "...."),
        _matrix("....", "###.", "#...", "...."),
        _matrix("##..", ".#..", ".#..", "...."),
    ),
}

# =============================================================================
# SRS Wall-Kick Offset Data
# =============================================================================
#
# Key format: (from_rotation, to_rotation), written "from->to" in logs.
# Offsets are (dx, dy) added directly to the piece's (x, y); a positive dy
# moves the piece down one row. Candidates are tried in listed order.
# =============================================================================

WALL_KICKS_STANDARD: dict[tuple[int, int], tuple[tuple[int, int], ...]] = {
    (0, 1): ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (1, 0): ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (1, 2): ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (2, 1): ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (2, 3): ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (3, 2): ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (3, 0): ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (0, 3): ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
}

WALL_KICKS_I: dict[tuple[int, int], tuple[tuple[int, int], ...]] = {
    (0, 1): ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    (1, 0): ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    (1, 2): ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
    (2, 1): ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    (2, 3): ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    (3, 2): ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    (3, 0): ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    (0, 3): ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
}

# O never rotates, so it has no kicks at all.
WALL_KICKS_O: dict[tuple[int, int], tuple[tuple[int, int], ...]] = {}


class SpawnPose(NamedTuple):
    x: int
    y: int
    rotation: int


def _check_type(piece_type: str) -> None:
    if piece_type not in PIECE_IDS:
        raise ValueError(f"Unknown piece type: {piece_type!r}")


def all_piece_types() -> tuple[str, ...]:
    """Return the seven piece type tags in table order."""
    return PIECE_TYPES


def shape_of(piece_type: str, rotation: int) -> np.ndarray:
    """Return the 4x4 occupancy matrix for a piece type and rotation.

    Args:
        piece_type: One of 'I', 'O', 'T', 'S', 'Z', 'J', 'L'.
        rotation: Rotation state index (0-3).

    Returns:
        A read-only boolean numpy array of shape (4, 4).

    Raises:
        ValueError: If the type or rotation is outside the defined domain.
    """
    _check_type(piece_type)
    if not 0 <= rotation <= 3:
        raise ValueError(f"Rotation must be in 0-3, got {rotation!r}")
    return PIECE_SHAPES[piece_type][rotation]


def color_of(piece_type: str) -> int:
    """Return the color identifier a piece type writes into the board."""
    _check_type(piece_type)
    return PIECE_IDS[piece_type]


def rgb_of(color: int) -> tuple[int, int, int]:
    """Return the display color for a color identifier."""
    try:
        return PIECE_RGB[color]
    except KeyError:
        raise ValueError(f"Unknown color identifier: {color!r}") from None


def spawn_pose(piece_type: str) -> SpawnPose:
    """Return the spawn pose: x=4 for O, x=3 for everything else, y=0."""
    _check_type(piece_type)
    return SpawnPose(x=4 if piece_type == "O" else 3, y=0, rotation=0)


def wall_kicks(piece_type: str) -> dict[tuple[int, int], tuple[tuple[int, int], ...]]:
    """Return the kick table for a piece type's family (I, O or standard)."""
    _check_type(piece_type)
    if piece_type == "I":
        return WALL_KICKS_I
    if piece_type == "O":
        return WALL_KICKS_O
    return WALL_KICKS_STANDARD


# =============================================================================
# Piece values
# =============================================================================


@dataclasses.dataclass(frozen=True)
class Piece:
    """The active, falling piece.

    Attributes:
        type: Piece type tag.
        rotation: Rotation state (0-3).
        x: Column of the bounding box's left edge.
        y: Row of the bounding box's top edge (may be negative).
        color: Color identifier written into the board on lock.
    """

    type: str
    rotation: int
    x: int
    y: int
    color: int

    @classmethod
    def spawn(cls, piece_type: str) -> Piece:
        """Create a piece of the given type at its spawn pose."""
        pose = spawn_pose(piece_type)
        return cls(piece_type, pose.rotation, pose.x, pose.y, color_of(piece_type))

    @property
    def shape(self) -> np.ndarray:
        return shape_of(self.type, self.rotation)

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield the absolute (x, y) board coordinates of every filled cell."""
        rows, cols = np.nonzero(self.shape)
        for r, c in zip(rows.tolist(), cols.tolist()):
            yield self.x + c, self.y + r

    def moved(self, dx: int, dy: int) -> Piece:
        return dataclasses.replace(self, x=self.x + dx, y=self.y + dy)

    def rotated_to(self, rotation: int, dx: int = 0, dy: int = 0) -> Piece:
        return dataclasses.replace(
            self, rotation=rotation, x=self.x + dx, y=self.y + dy
        )


@dataclasses.dataclass(frozen=True)
class NextPiece:
    """Lookahead piece: type and color only, its pose is chosen at spawn."""

    type: str
    color: int

    @classmethod
    def of(cls, piece_type: str) -> NextPiece:
        return cls(piece_type, color_of(piece_type))
