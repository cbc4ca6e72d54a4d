"""
Frame-driven controller around a StateManager.

The loop itself never schedules anything: the driver calls update() once
per frame, optionally with its own timestamp. Whether the game is paused
is read from the session, so the loop and the game cannot disagree.
"""

from __future__ import annotations

from tetris_core.game.state import GameStatus, StateManager
from tetris_core.game.timing import Clock, TickResult


class GameLoop:
    """Starts, stops and ticks a session from a frame loop.

    Attributes:
        state_manager: The session being driven.
        clock: Millisecond clock read when a call omits `now`.
        is_running: Whether start() has been called without a stop().
    """

    def __init__(self, state_manager: StateManager, clock: Clock | None = None) -> None:
        self.state_manager = state_manager
        self.clock: Clock = clock or state_manager.clock
        self.is_running = False

    @property
    def is_paused(self) -> bool:
        return self.is_running and self._status() is GameStatus.PAUSED

    def _status(self) -> GameStatus:
        return self.state_manager.get_state().game_status

    def _now(self, now: float | None) -> float:
        return self.clock() if now is None else now

    def start(self) -> None:
        self.is_running = True

    def stop(self) -> None:
        self.is_running = False

    def pause(self, now: float | None = None) -> bool:
        """Pause the game; returns True if it was playing."""
        if not self.is_running:
            return False
        return self.state_manager.pause_game(self._now(now))

    def resume(self, now: float | None = None) -> bool:
        """Resume the game without an immediate catch-up drop."""
        if not self.is_running:
            return False
        return self.state_manager.resume_game(self._now(now))

    def toggle_pause(self, now: float | None = None) -> bool:
        """Pause a running game or resume a paused one; no-op after game over."""
        status = self._status()
        if status is GameStatus.PLAYING:
            return self.pause(now)
        if status is GameStatus.PAUSED:
            return self.resume(now)
        return False

    def update(self, now: float | None = None) -> TickResult:
        """Advance the game by one frame.

        Args:
            now: Frame timestamp in milliseconds; read from the clock if omitted.

        Returns:
            The TickResult of the underlying tick. IDLE when stopped, and
            whenever the game is not playing.
        """
        if not self.is_running:
            return TickResult.IDLE
        return self.state_manager.tick(self._now(now))
