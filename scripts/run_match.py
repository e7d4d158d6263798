"""
Run one Filler match between built-in agents and/or external programs.

Player values are a difficulty (easy, medium, hard, expert), an agent type
(random, greedy, minimax) or the command line of an external program.

Example:
    python scripts/run_match.py -p1 hard -p2 "./robots/bender" -t 5 -s 7
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agents.registry import build_game
from engine.errors import BoardFormatError
from schemas.game_state import GameSummary
from schemas.match_config import MatchConfig, PlayerConfig
from utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a Filler match")
    parser.add_argument("-c", "--config", type=Path, help="YAML or JSON match config")
    parser.add_argument("-f", "--map", dest="map_path", help="Map file")
    parser.add_argument("-p1", "--player1", help="Player 1: difficulty, agent type or executable")
    parser.add_argument("-p2", "--player2", help="Player 2: difficulty, agent type or executable")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress turn-by-turn logging")
    parser.add_argument("-t", "--timeout", type=float, help="Seconds per external turn")
    parser.add_argument("-s", "--seed", type=int, help="Piece generator seed")
    parser.add_argument("--width", type=int, help="Board width without a map")
    parser.add_argument("--height", type=int, help="Board height without a map")
    parser.add_argument("--piece-mode", choices=["catalog", "mask"], help="Piece generation strategy")
    parser.add_argument("--max-turns", type=int, help="Stop after this many accepted turns")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> MatchConfig:
    """Merge a config file (if any) with command-line overrides."""
    base = MatchConfig.from_file(args.config).model_dump() if args.config else {}
    overrides = {
        "map_path": args.map_path,
        "timeout": args.timeout,
        "seed": args.seed,
        "width": args.width,
        "height": args.height,
        "piece_mode": args.piece_mode,
        "max_turns": args.max_turns,
    }
    base.update({k: v for k, v in overrides.items() if v is not None})
    if args.quiet:
        base["quiet"] = True
    if args.player1:
        base["player1"] = PlayerConfig.from_spec(args.player1)
    if args.player2:
        base["player2"] = PlayerConfig.from_spec(args.player2)
    return MatchConfig(**base)


def main(argv=None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(level, args.log_file, quiet=args.quiet)

    try:
        config = build_config(args)
        if config.quiet and not args.quiet:
            setup_logging(level, args.log_file, quiet=True)
        game = build_game(config)
    except (BoardFormatError, ValidationError, yaml.YAMLError, ValueError, OSError) as exc:
        logger.error(f"Could not set up the match: {exc}")
        return 1

    result = game.play()
    summary = GameSummary.from_result(result)

    if args.json:
        print(json.dumps(summary.model_dump(mode="json")))
    else:
        print(game.board)
        print("=== GAME OVER ===")
        print(f"Player 1 score: {result.scores[1]}")
        print(f"Player 2 score: {result.scores[2]}")
        print("Result: tie" if result.is_tie else f"Winner: Player {result.winner.value}")
        print(f"Turns: {result.turns} ({result.reason.value if result.reason else 'unfinished'})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
