"""
Player intents and their mapping onto StateManager operations.

Input handlers (keyboard, scripted drivers) translate raw events into an
Intent and hand it to dispatch(); no device data reaches the engine.
"""

from __future__ import annotations

import enum

from tetris_core.game.rotation import Direction
from tetris_core.game.state import StateManager


class Intent(enum.IntEnum):
    """Discrete action space for the Tetris game."""
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    HARD_DROP = 5
    PAUSE = 6
    RESUME = 7
    RESTART = 8


# Intents a player can issue while the piece is falling.
PLAY_INTENTS: tuple[Intent, ...] = (
    Intent.MOVE_LEFT,
    Intent.MOVE_RIGHT,
    Intent.SOFT_DROP,
    Intent.ROTATE_CW,
    Intent.ROTATE_CCW,
    Intent.HARD_DROP,
)


def dispatch(manager: StateManager, intent: Intent, now: float | None = None) -> bool:
    """Apply one intent to the game.

    Args:
        manager: The session to act on.
        intent: The player's intent.
        now: Timestamp in milliseconds for intents that stamp timers
            (pause, resume, restart); read from the manager's clock if omitted.

    Returns:
        True if the intent changed the game, False if it was rejected.

    Raises:
        ValueError: If intent is not an Intent value.
    """
    intent = Intent(intent)

    if intent == Intent.MOVE_LEFT:
        return manager.move_piece(-1, 0)
    if intent == Intent.MOVE_RIGHT:
        return manager.move_piece(1, 0)
    if intent == Intent.SOFT_DROP:
        return manager.move_piece(0, 1)
    if intent == Intent.ROTATE_CW:
        return manager.rotate_piece(Direction.CW)
    if intent == Intent.ROTATE_CCW:
        return manager.rotate_piece(Direction.CCW)
    if intent == Intent.HARD_DROP:
        return manager.hard_drop()
    if intent == Intent.PAUSE:
        return manager.pause_game(now)
    if intent == Intent.RESUME:
        return manager.resume_game(now)
    # RESTART
    manager.reset_game(now)
    return True
