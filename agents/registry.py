"""
Player registry: turns configuration into move policies and matches.
"""

from __future__ import annotations

import logging
from typing import Optional

from agents.gameplay_protocol import MovePolicy
from agents.greedy_agent import GreedyAgent
from agents.minimax_agent import MinimaxAgent
from agents.random_agent import RandomAgent
from engine.board import Player
from engine.game import FillerGame
from engine.pieces import PieceGenerator
from protocol.external_player import DEFAULT_TIMEOUT_SECONDS, ExternalProcessPlayer
from schemas.game_state import AgentType
from schemas.match_config import MatchConfig, PlayerConfig

logger = logging.getLogger(__name__)


def build_player(
    config: PlayerConfig,
    player: Player,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    seed: Optional[int] = None,
) -> MovePolicy:
    """
    Build the move policy for one seat.

    Args:
        config: Seat configuration
        player: Seat the policy plays
        timeout: Per-turn timeout for external programs
        seed: Fallback seed for random agents without their own

    Returns:
        An object with ``choose_move(state, piece)``
    """
    if config.agent_type == AgentType.RANDOM:
        return RandomAgent(seed=config.seed if config.seed is not None else seed)
    if config.agent_type == AgentType.GREEDY:
        return GreedyAgent()
    if config.agent_type == AgentType.MINIMAX:
        return MinimaxAgent(depth=config.depth)
    if config.agent_type == AgentType.EXTERNAL:
        return ExternalProcessPlayer(config.command, player, timeout=timeout)
    raise ValueError(f"Unknown agent type: {config.agent_type}")


def build_game(config: MatchConfig) -> FillerGame:
    """Assemble board, players and piece generator for a match."""
    board = config.build_board()
    players = {
        Player.ONE: build_player(config.player1, Player.ONE, config.timeout, seed=config.seed),
        Player.TWO: build_player(config.player2, Player.TWO, config.timeout, seed=config.seed + 1),
    }
    generator = PieceGenerator(config.seed, config.piece_mode)
    logger.info(
        f"Match {board.width}x{board.height}: p1={config.player1.agent_type.value}, "
        f"p2={config.player2.agent_type.value}, seed={config.seed}, pieces={config.piece_mode.value}"
    )
    return FillerGame(board, players, generator, max_turns=config.max_turns)
