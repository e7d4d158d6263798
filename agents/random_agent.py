"""
Random agent for Filler that picks uniformly from legal placements.
"""

from typing import Any, Dict, Optional, Tuple

import numpy as np

from engine.game import GameState
from engine.pieces import Piece


class RandomAgent:
    """
    Random agent that selects placements uniformly from legal anchors.

    This agent serves as a baseline for comparison with the greedy and
    minimax agents.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random agent.

        Args:
            seed: Random seed for reproducible behavior
        """
        self.rng = np.random.default_rng(seed)

    def choose_move(self, state: GameState, piece: Piece) -> Optional[Tuple[int, int]]:
        """
        Select a random legal placement.

        Args:
            state: Current match state; the acting player is ``state.current_player``
            piece: Piece to place

        Returns:
            Selected (x, y), or None if no legal placement exists
        """
        legal_moves = state.legal_moves(piece)
        if not legal_moves:
            return None
        return legal_moves[int(self.rng.integers(0, len(legal_moves)))]

    def get_action_info(self) -> Dict[str, Any]:
        """Get information about the agent."""
        return {
            "name": "RandomAgent",
            "type": "random",
            "description": "Selects placements uniformly from legal anchors"
        }

    def set_seed(self, seed: int):
        """Set random seed for reproducible behavior."""
        self.rng = np.random.default_rng(seed)
