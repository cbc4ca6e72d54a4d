"""
Game orchestrator: session state, piece operations, and subscribers.

The StateManager owns the only mutable session. Drivers change it through
the public operations below and read it through immutable snapshots,
either by calling get_state() or by subscribing to change notifications.

Every operation except start_game() / reset_game() is rejected unless the
game is PLAYING. Rejected and blocked operations leave the session exactly
as it was and do not notify anyone.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import random
from typing import Callable

from tetris_core.game.board import Board
from tetris_core.game.generator import PieceGenerator
from tetris_core.game.pieces import NextPiece, Piece
from tetris_core.game.rotation import Direction, ghost_position, try_rotate
from tetris_core.game.scoring import (
    clear_lines,
    full_lines,
    hard_drop_score,
    level_for_lines,
    line_clear_score,
)
from tetris_core.game.timing import Clock, DropTimer, TickResult, monotonic_ms

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclasses.dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of the session handed to renderers and subscribers.

    Attributes:
        board: Read-only copy of the locked-cell board.
        current_piece: The falling piece. None only when the first spawn of
            a session was blocked by its starting board.
        next_piece: The one-piece lookahead.
        score: Current score.
        level: Current level (starts at 1).
        lines_cleared: Total lines cleared this session.
        game_status: PLAYING, PAUSED or GAME_OVER.
        drop_speed: Milliseconds between automatic drops.
    """

    board: Board
    current_piece: Piece | None
    next_piece: NextPiece
    score: int
    level: int
    lines_cleared: int
    game_status: GameStatus
    drop_speed: int


Listener = Callable[[GameSnapshot], object]


@dataclasses.dataclass
class _Session:
    board: Board
    current_piece: Piece | None
    next_piece: NextPiece
    timer: DropTimer
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    game_status: GameStatus = GameStatus.PLAYING


class StateManager:
    """Single-session Tetris state with an observer registry.

    Not thread-safe: one driver must serialize every call, typically by
    calling everything from a single frame loop.

    Attributes:
        clock: Millisecond clock used only to stamp timers when a caller
            does not pass `now`.
        generator: Source of random piece types.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Create a manager with a freshly started game.

        Args:
            seed: Seed for piece selection (ignored if rng is given).
            rng: Random source for piece selection.
            clock: Millisecond clock; defaults to time.monotonic() in ms.
        """
        self.clock: Clock = clock or monotonic_ms
        self.generator = PieceGenerator(seed=seed, rng=rng)
        self._listeners: list[Listener] = []
        self._session = self._new_session(self.clock(), None)

    # ── Observers ────────────────────────────────────────────────────────

    def get_state(self) -> GameSnapshot:
        s = self._session
        return GameSnapshot(
            board=s.board.read_only(),
            current_piece=s.current_piece,
            next_piece=s.next_piece,
            score=s.score,
            level=s.level,
            lines_cleared=s.lines_cleared,
            game_status=s.game_status,
            drop_speed=s.timer.drop_speed,
        )

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a callback for state changes.

        Args:
            callback: Called with a GameSnapshot after every change.

        Returns:
            A function that unsubscribes the callback. Calling it more than
            once, or from inside a notification, is safe.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.get_state()
        # Copy so listeners can unsubscribe while being notified
        for callback in list(self._listeners):
            callback(snapshot)

    # ── Session lifecycle ────────────────────────────────────────────────

    def _new_session(self, now: float, board: Board | None) -> _Session:
        board = board.copy() if board is not None else Board()
        piece = self.generator.spawn(self.generator.next_piece())
        session = _Session(
            board=board,
            current_piece=piece,
            next_piece=self.generator.next_piece(),
            timer=DropTimer(now),
        )
        if board.collides(piece):
            # The blocked piece is never placed
            session.current_piece = None
            session.game_status = GameStatus.GAME_OVER
            logger.info("Starting board blocks the spawn of %s: game over", piece.type)
        else:
            logger.info(
                "Game started: current=%s next=%s", piece.type, session.next_piece.type
            )
        return session

    def start_game(self, now: float | None = None, board: Board | None = None) -> None:
        """Start a new session, replacing the current one.

        If the starting board blocks the first spawn, the session starts in
        GAME_OVER with no current piece.

        Args:
            now: Start time in milliseconds; read from the clock if omitted.
            board: Optional starting board (copied); empty if omitted.
        """
        self._session = self._new_session(self.clock() if now is None else now, board)
        self._notify()

    def reset_game(self, now: float | None = None) -> None:
        self.start_game(now)

    def pause_game(self, now: float | None = None) -> bool:
        s = self._session
        if s.game_status is not GameStatus.PLAYING:
            return False
        s.game_status = GameStatus.PAUSED
        s.timer.pause(self.clock() if now is None else now)
        self._notify()
        return True

    def resume_game(self, now: float | None = None) -> bool:
        s = self._session
        if s.game_status is not GameStatus.PAUSED:
            return False
        s.game_status = GameStatus.PLAYING
        s.timer.resume(self.clock() if now is None else now)
        self._notify()
        return True

    def _is_playing(self) -> bool:
        return self._session.game_status is GameStatus.PLAYING

    # ── Piece operations ─────────────────────────────────────────────────

    def move_piece(self, dx: int, dy: int) -> bool:
        """Move the current piece by (dx, dy) if the new pose is free.

        A successful downward move also cancels a running lock delay.

        Args:
            dx: Column offset (negative = left).
            dy: Row offset (positive = down).

        Returns:
            True if the piece moved, False if blocked or not playing.
        """
        if not self._is_playing():
            return False
        s = self._session
        moved = s.current_piece.moved(dx, dy)
        if s.board.collides(moved):
            return False
        s.current_piece = moved
        if dy > 0:
            s.timer.clear_lock_delay()
        self._notify()
        return True

    def rotate_piece(self, direction: Direction | str) -> bool:
        """Rotate the current piece with wall kicks.

        Args:
            direction: Direction.CW / Direction.CCW (or "cw" / "ccw").

        Returns:
            True if the piece rotated, False if every kick failed, the piece
            is an O, or the game is not playing.

        Raises:
            ValueError: If direction is not a known rotation direction.
        """
        direction = Direction(direction)
        if not self._is_playing():
            return False
        s = self._session
        rotated = try_rotate(s.board, s.current_piece, direction)
        if rotated is None:
            return False
        s.current_piece = rotated
        self._notify()
        return True

    def hard_drop(self) -> bool:
        """Drop the piece to its landing row, score 2 per row, and lock it."""
        if not self._is_playing():
            return False
        s = self._session
        landing_y = ghost_position(s.board, s.current_piece)
        rows_dropped = landing_y - s.current_piece.y
        s.score += hard_drop_score(rows_dropped)
        s.current_piece = s.current_piece.moved(0, rows_dropped)
        self._lock_current()
        self._notify()
        return True

    def lock_piece(self) -> bool:
        """Commit the current piece, clear lines, and spawn the next piece."""
        if not self._is_playing():
            return False
        self._lock_current()
        self._notify()
        return True

    def spawn_next_piece(self) -> bool:
        """Promote the next piece to current.

        Returns:
            True on success. False if the game is not playing, or if the
            spawn pose is blocked, in which case the game is over and the
            board and current piece are left untouched.
        """
        if not self._is_playing():
            return False
        spawned = self._spawn_next()
        self._notify()
        return spawned

    def update_score(self, points: int) -> bool:
        """Add points to the score.

        Raises:
            ValueError: If points is negative.
        """
        if points < 0:
            raise ValueError(f"Points must be non-negative, got {points}")
        if not self._is_playing():
            return False
        if points:
            self._session.score += points
            self._notify()
        return True

    def tick(self, now: float | None = None) -> TickResult:
        """Advance gravity and lock delay to time `now` (milliseconds).

        Returns:
            What the tick did; IDLE if the game is not playing.
        """
        if not self._is_playing():
            return TickResult.IDLE
        now = self.clock() if now is None else now
        return self._session.timer.advance(now, self._gravity_step, self.lock_piece)

    def _gravity_step(self) -> bool:
        return self.move_piece(0, 1)

    # ── Internals ────────────────────────────────────────────────────────

    def _lock_current(self) -> None:
        s = self._session
        s.board = s.board.with_piece(s.current_piece)

        lines = full_lines(s.board)
        if lines:
            s.board = clear_lines(s.board, lines)
            s.score += line_clear_score(len(lines), s.level)
            s.lines_cleared += len(lines)
            self._update_level()
        logger.debug(
            "Locked %s at (%d, %d) rot=%d, cleared %d line(s)",
            s.current_piece.type, s.current_piece.x, s.current_piece.y,
            s.current_piece.rotation, len(lines),
        )

        self._spawn_next()

    def _update_level(self) -> None:
        s = self._session
        new_level = level_for_lines(s.lines_cleared)
        if new_level != s.level:
            s.level = new_level
            s.timer.set_level(new_level)
            logger.debug("Level %d, drop speed %d ms", new_level, s.timer.drop_speed)

    def _spawn_next(self) -> bool:
        s = self._session
        piece = self.generator.spawn(s.next_piece)
        if s.board.collides(piece):
            s.game_status = GameStatus.GAME_OVER
            logger.info(
                "Game over: score=%d level=%d lines=%d",
                s.score, s.level, s.lines_cleared,
            )
            return False
        s.current_piece = piece
        s.next_piece = self.generator.next_piece()
        s.timer.clear_lock_delay()
        return True
