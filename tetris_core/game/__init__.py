"""Game engine: pieces, board, rotation, scoring, timing, the state manager and its loop."""

from tetris_core.game.board import Board, collides
from tetris_core.game.generator import PieceGenerator
from tetris_core.game.pieces import NextPiece, Piece, all_piece_types
from tetris_core.game.rotation import Direction, ghost_position, try_rotate
from tetris_core.game.state import GameSnapshot, GameStatus, StateManager
from tetris_core.game.loop import GameLoop
from tetris_core.game.timing import TickResult

__all__ = [
    "Board",
    "collides",
    "PieceGenerator",
    "NextPiece",
    "Piece",
    "all_piece_types",
    "Direction",
    "ghost_position",
    "try_rotate",
    "GameSnapshot",
    "GameStatus",
    "StateManager",
    "GameLoop",
    "TickResult",
]
