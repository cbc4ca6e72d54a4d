"""
Random piece selection.

Every draw is independent and uniform over the seven types. There is no
bag, so the same type can repeat and a type can go missing for a while.
"""

from __future__ import annotations

import random

from tetris_core.game.pieces import PIECE_TYPES, NextPiece, Piece


class PieceGenerator:
    """Draws piece types i.i.d. from a seedable random source.

    Attributes:
        rng: The random.Random instance used for every draw.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        """Create a generator.

        Args:
            seed: Seed for a private random.Random (ignored if rng is given).
            rng: An existing random source to draw from.
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def next_type(self) -> str:
        return self.rng.choice(PIECE_TYPES)

    def next_piece(self) -> NextPiece:
        return NextPiece.of(self.next_type())

    @staticmethod
    def spawn(next_piece: NextPiece) -> Piece:
        """Turn a lookahead piece into an active piece at its spawn pose."""
        return Piece.spawn(next_piece.type)
