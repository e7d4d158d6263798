"""
Minimax agent with alpha-beta pruning for Filler.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from engine.board import Player
from engine.game import GameState
from engine.pieces import Piece

from .evaluation import evaluate

logger = logging.getLogger(__name__)

HARD_DEPTH = 3
EXPERT_DEPTH = 5


class MinimaxAgent:
    """
    Depth-limited minimax over legal placements.

    The next piece is unknown while searching, so every ply reuses the piece
    being placed now. Each branch works on its own copy of the state.
    """

    def __init__(self, depth: int = HARD_DEPTH):
        """
        Initialize minimax agent.

        Args:
            depth: Plies to search, counting the root move
        """
        if depth < 1:
            raise ValueError(f"depth must be at least 1, got {depth}")
        self.depth = depth
        self.nodes_searched = 0

    def choose_move(self, state: GameState, piece: Piece) -> Optional[Tuple[int, int]]:
        """
        Select the placement with the best minimax value.

        Ties go to the earliest anchor in enumeration order.

        Returns:
            Selected (x, y), or None if no legal placement exists
        """
        legal_moves = state.legal_moves(piece)
        if not legal_moves:
            return None
        if len(legal_moves) == 1:
            return legal_moves[0]

        root = state.current_player
        self.nodes_searched = 0
        alpha = float("-inf")
        beta = float("inf")
        best_move = legal_moves[0]
        best_score = float("-inf")

        for x, y in legal_moves:
            child = state.copy()
            child.place(piece, x, y)
            child.switch_player()
            score = self._minimax(child, piece, self.depth - 1, alpha, beta, False, root)
            if score > best_score:
                best_score = score
                best_move = (x, y)
            alpha = max(alpha, best_score)

        logger.debug(f"Minimax depth={self.depth}: best={best_move} score={best_score} nodes={self.nodes_searched}")
        return best_move

    def _minimax(
        self,
        state: GameState,
        piece: Piece,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        root: Player,
    ) -> float:
        self.nodes_searched += 1
        if depth == 0 or state.game_over:
            return evaluate(state, root)

        legal_moves = state.legal_moves(piece)
        if not legal_moves:
            return evaluate(state, root)

        if maximizing:
            value = float("-inf")
            for x, y in legal_moves:
                child = state.copy()
                child.place(piece, x, y)
                child.switch_player()
                value = max(value, self._minimax(child, piece, depth - 1, alpha, beta, False, root))
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = float("inf")
        for x, y in legal_moves:
            child = state.copy()
            child.place(piece, x, y)
            child.switch_player()
            value = min(value, self._minimax(child, piece, depth - 1, alpha, beta, True, root))
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value

    def get_action_info(self) -> Dict[str, Any]:
        """Get information about the agent."""
        return {
            "name": "MinimaxAgent",
            "type": "minimax",
            "description": "Alpha-beta minimax over territory, center control and compactness",
            "depth": self.depth,
        }
