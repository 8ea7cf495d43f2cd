"""Command-line tools for headless simulation and config generation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter

logger = logging.getLogger(__name__)

_MOVE_CODES = {"L": "left", "U": "up", "R": "right", "D": "down", ".": None}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arena",
        description="Snake Arena headless simulation and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run the engine without a display.")
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--ticks", type=int, default=100)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--moves", type=str, default="",
        help=(
            "Held key per tick as a string of L/U/R/D, '.' for no key. "
            "The last entry is held for the remaining ticks."
        ),
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write the default config as JSON.")
    cfg_p.add_argument("output", help="Destination path.")

    return parser


def _parse_moves(moves: str) -> list:
    from snake_arena.snake import Direction

    parsed = []
    for ch in moves.upper():
        if ch not in _MOVE_CODES:
            raise ValueError(f"Unknown move code: {ch!r}.")
        name = _MOVE_CODES[ch]
        parsed.append(Direction.from_name(name) if name else None)
    return parsed


def _run_simulate(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from snake_arena.config import GameConfig
    from snake_arena.engine import GameEngine

    config = GameConfig.load(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    try:
        moves = _parse_moves(args.moves)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    engine = GameEngine(config)
    # Food cadence expressed in movement ticks.
    food_every = max(1, round(config.food_interval / config.move_interval))
    event_counts: Counter[str] = Counter()
    best_length = len(engine.snake)

    for i in range(args.ticks):
        if moves:
            engine.set_direction(moves[min(i, len(moves) - 1)])
        result = engine.advance()
        for event in result.events:
            event_counts[event.to_dict()["type"]] += 1
        best_length = max(best_length, len(engine.snake))
        if engine.tick % food_every == 0:
            engine.spawn_food()

    summary = {
        "ticks": engine.tick,
        "deaths": engine.deaths,
        "score": engine.score,
        "length": len(engine.snake),
        "best_length": best_length,
        "events": dict(event_counts),
    }
    print(json.dumps(summary))  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from snake_arena.config import GameConfig

    GameConfig().save(args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arena`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
