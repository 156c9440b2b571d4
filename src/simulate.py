"""
Headless simulation: play games with uniformly random inputs and collect
per-episode + aggregate statistics.

Time is simulated, not read from the wall clock: every step advances a manual
millisecond counter before gravity is ticked, so runs are fast and fully
reproducible for a given seed.
"""

from __future__ import annotations

import time
from typing import Any

import numpy as np

from src.game.gravity import Clock, GravitySettings
from src.game.tetris import Action, GameState, TetrisGame

# Inputs a random player may press (START is only used to begin the episode)
PLAYER_ACTIONS: list[Action] = [
    Action.LEFT,
    Action.RIGHT,
    Action.DOWN,
    Action.HARD_DROP,
    Action.ROTATE_LEFT,
    Action.ROTATE_RIGHT,
    Action.HOLD,
]


class SimulatedTime:
    """Manually advanced millisecond counter usable as a Clock time source."""

    def __init__(self) -> None:
        self.now_ms = 0.0

    def advance(self, ms: float) -> None:
        self.now_ms += ms

    def __call__(self) -> float:
        return self.now_ms


def run_episode(
    game: TetrisGame,
    sim_time: SimulatedTime,
    rng: np.random.Generator,
    max_inputs: int = 5000,
    step_ms: float = 50.0,
) -> dict[str, Any]:
    """Start `game` and feed it random inputs until game over or the input cap.

    Args:
        game: Game whose clock reads from `sim_time`.
        sim_time: Simulated time source to advance between inputs.
        rng: Generator used to pick inputs.
        max_inputs: Maximum number of inputs before the episode is cut off.
        step_ms: Simulated milliseconds between inputs.

    Returns:
        Dict with score, lines, inputs, pieces_locked and game_over.
    """
    game.handle_input(Action.START)

    inputs = 0
    while game.state is GameState.PLAYING and inputs < max_inputs:
        action = PLAYER_ACTIONS[int(rng.integers(0, len(PLAYER_ACTIONS)))]
        game.handle_input(action)
        inputs += 1
        sim_time.advance(step_ms)
        game.tick()

    return {
        "score": game.score,
        "lines": game.lines_cleared,
        "inputs": inputs,
        "pieces_locked": game.pieces_locked,
        "game_over": game.state is GameState.GAME_OVER,
    }


def simulate(config: dict[str, Any], episodes: int | None = None, seed: int | None = None) -> list[dict[str, Any]]:
    """Run several random-input episodes and print aggregate statistics.

    Args:
        config: Config dict loaded from game.yaml.
        episodes: Number of episodes (defaults to simulate.episodes in config).
        seed: Seed for both piece and input generation.

    Returns:
        List of per-episode records from run_episode().

    Raises:
        ValueError: If the resolved episode count is less than 1.
    """
    sim_config = config.get("simulate", {}) or {}
    num_episodes = episodes or int(sim_config.get("episodes", 20))
    if num_episodes < 1:
        raise ValueError(f"episodes must be at least 1, got {num_episodes}")
    max_inputs = int(sim_config.get("max_inputs", 5000))
    step_ms = float(sim_config.get("step_ms", 50.0))

    gravity = GravitySettings.from_config(config.get("gravity"))
    seeds = np.random.SeedSequence(seed)
    piece_seed, input_seed = seeds.spawn(2)
    input_rng = np.random.default_rng(input_seed)

    sim_time = SimulatedTime()
    game = TetrisGame(
        rng=np.random.default_rng(piece_seed),
        clock=Clock(sim_time),
        gravity=gravity,
    )

    print(f"Running {num_episodes} random-input episodes...")
    start_time = time.time()

    episode_data = []
    for ep in range(num_episodes):
        record = run_episode(game, sim_time, input_rng, max_inputs=max_inputs, step_ms=step_ms)
        record["episode"] = ep
        episode_data.append(record)

        if (ep + 1) % 10 == 0:
            print(f"  Episode {ep + 1}/{num_episodes} done | "
                  f"Score: {record['score']}, Lines: {record['lines']}, Pieces: {record['pieces_locked']}")

    elapsed = time.time() - start_time

    score_arr = np.array([d["score"] for d in episode_data])
    lines_arr = np.array([d["lines"] for d in episode_data])
    pieces_arr = np.array([d["pieces_locked"] for d in episode_data])

    print(f"\nSimulation complete in {elapsed:.2f}s")
    print(f"  Score   mean {score_arr.mean():.1f}  max {score_arr.max()}")
    print(f"  Lines   mean {lines_arr.mean():.2f}  max {lines_arr.max()}")
    print(f"  Pieces  mean {pieces_arr.mean():.1f}  max {pieces_arr.max()}")
    return episode_data
