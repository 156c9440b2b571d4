"""
Entry point for the Tetris project.

Supports two modes:
  - play:     Play Tetris manually with keyboard controls.
  - simulate: Run headless games with random inputs and print statistics.

Usage:
    python main.py --mode play
    python main.py --mode play --seed 42
    python main.py --mode simulate --episodes 50
    python main.py --mode simulate --config config/game.yaml
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml

DEFAULT_CONFIG_PATH = pathlib.Path(__file__).parent / "config" / "game.yaml"


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs (empty for an empty file).

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file does not contain a mapping.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, seed, episodes and fps attributes.
    """
    parser = argparse.ArgumentParser(
        description="Tetris: play with the keyboard or run headless simulations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "simulate"],
        default="play",
        help="Run mode: 'play' (manual play), 'simulate' (random-input games, no window).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the piece sequence (overrides 'seed' in the config).",
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=0,
        help="Number of episodes in 'simulate' mode (0 = use the config value).",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Frame rate cap for 'play' mode (overrides 'fps' in the config).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    seed = args.seed if args.seed is not None else config.get("seed")

    try:
        if args.mode == "play":
            from src.play import play_manual
            if args.fps is not None:
                config["fps"] = args.fps
            play_manual(config, seed=seed)

        elif args.mode == "simulate":
            from src.simulate import simulate
            simulate(config, episodes=args.episodes, seed=seed)

        else:
            print(f"Unknown mode: {args.mode}", file=sys.stderr)
            sys.exit(1)
    except (ImportError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
