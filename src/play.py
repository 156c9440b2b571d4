"""
Manual play mode.

The human player drives the game with the keyboard. Each frame:
  1. Pending key events are translated to logical Actions and applied.
  2. Gravity is ticked.
  3. The renderer draws the resulting state.
"""

from __future__ import annotations

from typing import Any

import numpy as np

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from src.game.gravity import Clock, GravitySettings
from src.game.tetris import Action, TetrisGame
from src.renderer import TetrisRenderer


# ── Keyboard mapping ─────────────────────────────────────────────────────
# WASD + J/K/E, with arrows, Z/X, Space and C as alternatives
KEY_MAP: dict[int, Action] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_a: Action.LEFT,
        pygame.K_d: Action.RIGHT,
        pygame.K_s: Action.DOWN,
        pygame.K_w: Action.HARD_DROP,
        pygame.K_j: Action.ROTATE_LEFT,
        pygame.K_k: Action.ROTATE_RIGHT,
        pygame.K_e: Action.HOLD,
        pygame.K_LEFT: Action.LEFT,
        pygame.K_RIGHT: Action.RIGHT,
        pygame.K_DOWN: Action.DOWN,
        pygame.K_SPACE: Action.HARD_DROP,
        pygame.K_z: Action.ROTATE_LEFT,
        pygame.K_x: Action.ROTATE_RIGHT,
        pygame.K_UP: Action.ROTATE_RIGHT,
        pygame.K_c: Action.HOLD,
        pygame.K_RETURN: Action.START,
        pygame.K_KP_ENTER: Action.START,
    }


def action_for_key(key: int) -> Action | None:
    """Translate a pygame key code into a logical input, if it has one."""
    return KEY_MAP.get(key)


def play_manual(config: dict[str, Any], seed: int | None = None) -> None:
    """Run the game in manual (human) play mode.

    Controls:
      - A / D, Left / Right: move piece
      - S, Down: soft drop (repeats while held)
      - W, Space: hard drop
      - J, Z: rotate left
      - K, X, Up: rotate right
      - E, C: hold piece
      - Enter: start / restart
      - Escape / close window: quit

    Args:
        config: Config dict loaded from game.yaml.
        seed: Piece sequence seed (None for fresh entropy).

    Raises:
        ImportError: If pygame is not installed.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    cell_size = config.get("cell_size", 30)
    fps = config.get("fps", 60)
    repeat_delay = config.get("key_repeat_delay_ms", 170)
    repeat_interval = config.get("key_repeat_interval_ms", 50)

    game = TetrisGame(
        rng=np.random.default_rng(seed),
        clock=Clock(pygame.time.get_ticks),
        gravity=GravitySettings.from_config(config.get("gravity")),
    )
    renderer = TetrisRenderer(game, cell_size=cell_size)
    # Force renderer init before the event loop (pygame must be initialized for event.get())
    renderer.render(fps)
    pygame.key.set_repeat(repeat_delay, repeat_interval)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break
                action = action_for_key(event.key)
                if action is not None:
                    game.handle_input(action)

        if not running:
            break

        game.tick()
        renderer.render(fps)

    renderer.close()
    print(f"Final score: {game.score} | Lines: {game.lines_cleared}")
