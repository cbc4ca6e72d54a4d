"""
Headless simulation: random intents against synthetic timestamps.

Runs whole games without a display, advancing a fake millisecond clock by
one frame per step, so a given seed always replays the same game. Useful
for smoke-testing the engine and for rough balance statistics.
"""

from __future__ import annotations

import dataclasses
import logging
import random

import numpy as np

from tetris_core.game.state import GameStatus, StateManager
from tetris_core.game.loop import GameLoop
from tetris_core.game.timing import TickResult
from tetris_core.intents import Intent, dispatch

logger = logging.getLogger(__name__)

# Hard drops end a piece immediately, so they are picked less often.
INTENT_WEIGHTS: dict[Intent, int] = {
    Intent.MOVE_LEFT: 4,
    Intent.MOVE_RIGHT: 4,
    Intent.SOFT_DROP: 3,
    Intent.ROTATE_CW: 2,
    Intent.ROTATE_CCW: 2,
    Intent.HARD_DROP: 1,
}


@dataclasses.dataclass(frozen=True)
class SimulationResult:
    seed: int | None
    score: int
    level: int
    lines_cleared: int
    pieces_locked: int
    steps: int
    elapsed_ms: float
    game_status: GameStatus


class _FrameClock:
    """Synthetic clock advanced by the simulation loop."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def simulate_game(
    seed: int | None = None,
    max_steps: int = 5000,
    frame_ms: float = 16.0,
    intent_chance: float = 0.3,
) -> SimulationResult:
    """Play one game with random intents.

    Args:
        seed: Seed for both piece selection and intent choice.
        max_steps: Stop after this many frames even if the game is still on.
        frame_ms: Milliseconds the synthetic clock advances per frame.
        intent_chance: Probability of issuing an intent on a given frame.

    Returns:
        A SimulationResult describing the final state.
    """
    clock = _FrameClock()
    manager = StateManager(seed=seed, clock=clock)
    loop = GameLoop(manager)
    loop.start()

    # Separate stream so intent choice does not shift the piece sequence
    intent_rng = random.Random(None if seed is None else seed + 1)
    intents = list(INTENT_WEIGHTS)
    weights = [INTENT_WEIGHTS[i] for i in intents]

    pieces_locked = 0
    steps = 0
    while steps < max_steps:
        steps += 1
        clock.now += frame_ms

        if intent_rng.random() < intent_chance:
            intent = intent_rng.choices(intents, weights=weights)[0]
            if dispatch(manager, intent) and intent == Intent.HARD_DROP:
                pieces_locked += 1

        if loop.update() is TickResult.LOCKED:
            pieces_locked += 1

        if manager.get_state().game_status is GameStatus.GAME_OVER:
            break

    loop.stop()
    state = manager.get_state()
    return SimulationResult(
        seed=seed,
        score=state.score,
        level=state.level,
        lines_cleared=state.lines_cleared,
        pieces_locked=pieces_locked,
        steps=steps,
        elapsed_ms=clock.now,
        game_status=state.game_status,
    )


def run_simulations(
    episodes: int,
    seed: int | None = None,
    max_steps: int = 5000,
    frame_ms: float = 16.0,
) -> list[SimulationResult]:
    """Play several games and print per-game and aggregate statistics."""
    results = []
    for ep in range(episodes):
        ep_seed = None if seed is None else seed + ep * 7919
        result = simulate_game(ep_seed, max_steps=max_steps, frame_ms=frame_ms)
        results.append(result)
        print(
            f"  Game {ep + 1}/{episodes} | Score: {result.score} | "
            f"Lines: {result.lines_cleared} | Pieces: {result.pieces_locked} | "
            f"Steps: {result.steps} | {result.game_status.value}"
        )

    if results:
        scores = np.array([r.score for r in results])
        lines = np.array([r.lines_cleared for r in results])
        pieces = np.array([r.pieces_locked for r in results])
        print("=" * 60)
        print(f"{'Metric':<16} {'Mean':>9} {'Median':>9} {'Min':>9} {'Max':>9}")
        print("-" * 60)
        for name, arr in [("Score", scores), ("Lines cleared", lines), ("Pieces locked", pieces)]:
            print(
                f"{name:<16} {arr.mean():>9.1f} {np.median(arr):>9.1f} "
                f"{arr.min():>9d} {arr.max():>9d}"
            )
    logger.debug("Finished %d simulated game(s)", len(results))
    return results
