"""
Manual play mode.

The human plays with the keyboard; key presses are translated into intents
and dispatched to the StateManager, and a GameLoop drives gravity and lock
delay from the frame loop.
"""

from __future__ import annotations

import logging
from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_core.game.state import StateManager
from tetris_core.game.loop import GameLoop
from tetris_core.intents import Intent, dispatch
from tetris_core.renderer import TetrisRenderer

logger = logging.getLogger(__name__)

# ── Keyboard mapping for manual play ─────────────────────────────────────
# Arrow keys for movement, Z/X/Up for rotation, Space for hard drop
KEY_MAP: dict[int, Intent] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_LEFT: Intent.MOVE_LEFT,
        pygame.K_RIGHT: Intent.MOVE_RIGHT,
        pygame.K_DOWN: Intent.SOFT_DROP,
        pygame.K_SPACE: Intent.HARD_DROP,
        pygame.K_z: Intent.ROTATE_CCW,
        pygame.K_x: Intent.ROTATE_CW,
        pygame.K_UP: Intent.ROTATE_CW,
        pygame.K_r: Intent.RESTART,
    }
    PAUSE_KEYS = (pygame.K_p,)
    REPEAT_KEYS = (pygame.K_LEFT, pygame.K_RIGHT, pygame.K_DOWN)

# Key repeat for held movement keys, in milliseconds
KEY_REPEAT_DELAY = 150
KEY_REPEAT_RATE = 50


def play_manual(config: dict[str, Any]) -> None:
    """Run the game in manual (human) play mode.

    The player uses keyboard controls:
      - Left/Right arrow: move piece
      - Down arrow: soft drop
      - Space: hard drop
      - Z: rotate counter-clockwise
      - X / Up arrow: rotate clockwise
      - P: pause / resume
      - R: restart
      - Escape / close window: quit

    Args:
        config: Config dict loaded from settings.yaml.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    fps = config.get("fps", 60)

    manager = StateManager(seed=config.get("seed"))
    loop = GameLoop(manager, clock=lambda: float(pygame.time.get_ticks()))
    renderer = TetrisRenderer(
        manager,
        cell_size=config.get("cell_size", 30),
        show_ghost=config.get("show_ghost", True),
    )
    # Force renderer init before event loop (pygame must be initialized for event.get())
    renderer.render(fps)

    # pygame's tick clock starts at init, so restart the session on it
    manager.start_game(loop.clock())
    loop.start()
    logger.info("Manual play started (seed=%s)", config.get("seed"))

    held_since: dict[int, int] = {}
    last_repeat: dict[int, int] = {}
    running = True

    while running:
        now = pygame.time.get_ticks()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break
                if event.key in PAUSE_KEYS:
                    loop.toggle_pause(now)
                elif event.key in KEY_MAP:
                    dispatch(manager, KEY_MAP[event.key], now)
                    if event.key in REPEAT_KEYS:
                        held_since[event.key] = now
                        last_repeat[event.key] = now
            elif event.type == pygame.KEYUP:
                held_since.pop(event.key, None)
                last_repeat.pop(event.key, None)

        if not running:
            break

        # Auto-repeat for held movement keys
        for key, since in held_since.items():
            if now - since >= KEY_REPEAT_DELAY and now - last_repeat[key] >= KEY_REPEAT_RATE:
                dispatch(manager, KEY_MAP[key], now)
                last_repeat[key] = now

        loop.update(now)
        renderer.render(fps)

    state = manager.get_state()
    print(f"Final score: {state.score} | Level: {state.level} | Lines: {state.lines_cleared}")
    loop.stop()
    renderer.close()
