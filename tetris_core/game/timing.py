"""
Drop and lock-delay timing.

DropTimer is the two-timer state machine that decides, for a given `now`,
whether the piece should fall a row, start its lock delay, or lock. It
never reads a clock itself: callers pass `now` in milliseconds.
"""

from __future__ import annotations

import enum
import time
from typing import Callable

from tetris_core.game.scoring import drop_speed_for_level

LOCK_DELAY_MS = 500

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


class TickResult(enum.Enum):
    """What a single tick did."""
    IDLE = "idle"                  # not playing, or nothing was due
    DROPPED = "dropped"            # gravity moved the piece down one row
    LOCK_PENDING = "lock_pending"  # gravity was blocked, lock delay running
    LOCKED = "locked"              # lock delay expired, piece committed


class DropTimer:
    """Gravity and lock-delay timers for one session.

    Attributes:
        drop_speed: Milliseconds between automatic drops.
        lock_delay: Grace period in milliseconds before a resting piece locks.
        last_drop_time: Reference point for the next automatic drop.
        lock_delay_start: When the lock delay started, or None if not running.
    """

    def __init__(self, now: float, level: int = 1, lock_delay: int = LOCK_DELAY_MS) -> None:
        self.drop_speed: int = drop_speed_for_level(level)
        self.lock_delay: int = lock_delay
        self.last_drop_time: float = now
        self.lock_delay_start: float | None = None
        self._paused_at: float | None = None

    @property
    def lock_delay_running(self) -> bool:
        return self.lock_delay_start is not None

    def set_level(self, level: int) -> None:
        self.drop_speed = drop_speed_for_level(level)

    def reset(self, now: float) -> None:
        """Restart both timers relative to `now`."""
        self.last_drop_time = now
        self.lock_delay_start = None

    def pause(self, now: float) -> None:
        self._paused_at = now

    def resume(self, now: float) -> None:
        """Restart gravity from `now` so no catch-up drop fires.

        A running lock delay keeps the time it had left when paused.
        """
        self.last_drop_time = now
        if self.lock_delay_start is not None and self._paused_at is not None:
            self.lock_delay_start += now - self._paused_at
        self._paused_at = None

    def clear_lock_delay(self) -> None:
        self.lock_delay_start = None

    def lock_delay_expired(self, now: float) -> bool:
        return (
            self.lock_delay_start is not None
            and now - self.lock_delay_start >= self.lock_delay
        )

    def drop_due(self, now: float) -> bool:
        return now - self.last_drop_time >= self.drop_speed

    def advance(
        self,
        now: float,
        step_down: Callable[[], bool],
        lock: Callable[[], object],
    ) -> TickResult:
        """Run one tick of the timing state machine.

        An expired lock delay is checked before gravity, so it always wins
        over a drop that is due on the same tick.

        Args:
            now: Current time in milliseconds.
            step_down: Moves the piece down one row; returns False if blocked.
            lock: Commits the current piece to the board.

        Returns:
            The TickResult describing what happened.
        """
        if self.lock_delay_expired(now):
            lock()
            self.reset(now)
            return TickResult.LOCKED

        if not self.drop_due(now):
            return TickResult.IDLE

        if step_down():
            self.last_drop_time = now
            self.lock_delay_start = None
            return TickResult.DROPPED

        if self.lock_delay_start is None:
            self.lock_delay_start = now
        return TickResult.LOCK_PENDING
