"""
SRS rotation with wall kicks, and the ghost (landing) position.

Both functions are pure: they never mutate the board or the piece passed
in, and a failed rotation hands back None so the caller keeps the piece
exactly as it was.
"""

from __future__ import annotations

import enum
import logging

from tetris_core.game.board import Board
from tetris_core.game.pieces import Piece, wall_kicks

logger = logging.getLogger(__name__)


class Direction(str, enum.Enum):
    """Rotation direction."""
    CW = "cw"
    CCW = "ccw"


def _target_rotation(rotation: int, direction: Direction) -> int:
    # +3 mod 4 is -1 mod 4
    step = 1 if direction is Direction.CW else 3
    return (rotation + step) % 4


def try_rotate(board: Board, piece: Piece, direction: Direction | str) -> Piece | None:
    """Try to rotate a piece, applying SRS wall kicks when the plain rotation is blocked.

    The unkicked rotation is tested first. If it collides, every offset in
    the kick list for the exact "old->new" transition is tried in order and
    the first collision-free pose wins.

    Args:
        board: The locked-cell board.
        piece: The current piece.
        direction: Direction.CW / Direction.CCW (or "cw" / "ccw").

    Returns:
        The rotated piece, or None if the piece is an O or every kick fails.

    Raises:
        ValueError: If direction is not a known rotation direction.
    """
    direction = Direction(direction)

    # O-piece doesn't rotate
    if piece.type == "O":
        return None

    old_rotation = piece.rotation
    new_rotation = _target_rotation(old_rotation, direction)

    candidate = piece.rotated_to(new_rotation)
    if not board.collides(candidate):
        return candidate

    kicks = wall_kicks(piece.type).get((old_rotation, new_rotation), ())
    for dx, dy in kicks:
        candidate = piece.rotated_to(new_rotation, dx, dy)
        if not board.collides(candidate):
            logger.debug(
                "Kicked %s %d->%d by (%d, %d)",
                piece.type, old_rotation, new_rotation, dx, dy,
            )
            return candidate

    return None


def ghost_position(board: Board, piece: Piece) -> int:
    """Return the row the piece would land on if dropped straight down.

    Probes one row at a time and stops on the last collision-free row. The
    floor always collides eventually, so this terminates for any piece
    whose starting pose fits.

    Args:
        board: The locked-cell board.
        piece: The current piece.

    Returns:
        The landing y, always >= piece.y.
    """
    ghost_y = piece.y
    while not board.collides(piece.moved(0, ghost_y + 1 - piece.y)):
        ghost_y += 1
    return ghost_y
