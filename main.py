"""
Entry point for the Tetris game.

Supports two modes:
  - play:     Play Tetris with keyboard controls (needs pygame).
  - simulate: Play headless games with random inputs and print statistics.

Usage:
    python main.py --mode play
    python main.py --mode play --config config/settings.yaml --seed 42
    python main.py --mode simulate --games 20 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys

from tetris_core.config import DEFAULT_CONFIG_PATH, load_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, seed, games and steps attributes.
    """
    parser = argparse.ArgumentParser(
        description="Tetris with SRS rotation, lock delay and level progression.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "simulate"],
        default="play",
        help="Run mode: 'play' (keyboard), 'simulate' (headless random games).",
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
        help="Piece selection seed (overrides the config file).",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games to play in 'simulate' mode.",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Maximum frames per simulated game (overrides the config file).",
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

    if args.seed is not None:
        config["seed"] = args.seed
    if args.steps is not None:
        config["simulate_steps"] = args.steps

    logging.basicConfig(
        level=getattr(logging, str(config["log_level"]).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.mode == "play":
        from tetris_core.play import play_manual
        play_manual(config)

    elif args.mode == "simulate":
        from tetris_core.simulate import run_simulations
        run_simulations(
            args.games,
            seed=config["seed"],
            max_steps=config["simulate_steps"],
            frame_ms=config["simulate_frame_ms"],
        )

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
