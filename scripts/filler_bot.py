"""
Reference external Filler player.

Reads one frame from stdin, picks a placement with a built-in agent and
writes ``<x> <y>``. Prints nothing when no legal placement exists.

Example:
    python scripts/run_match.py -p1 "python scripts/filler_bot.py --agent minimax --depth 2" -p2 medium
"""

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agents.registry import build_player
from engine.errors import ProtocolError
from engine.game import GameState
from protocol.codec import encode_reply, parse_frame
from schemas.game_state import AgentType
from schemas.match_config import PlayerConfig

logger = logging.getLogger("filler_bot")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Filler protocol bot")
    parser.add_argument("--agent", choices=["random", "greedy", "minimax"], default="greedy")
    parser.add_argument("--depth", type=int, default=3)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    try:
        frame = parse_frame(sys.stdin.read())
    except ProtocolError as exc:
        logger.error(f"Bad frame: {exc}")
        return 1

    config = PlayerConfig(agent_type=AgentType(args.agent), depth=args.depth, seed=args.seed)
    agent = build_player(config, frame.player)
    move = agent.choose_move(GameState(frame.board, frame.player), frame.piece)
    if move is not None:
        sys.stdout.write(encode_reply(*move))
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
