"""
Greedy single-ply agent for Filler.
"""

from typing import Any, Dict, Optional, Tuple

import numpy as np

from engine.board import Board, Player
from engine.game import GameState
from engine.pieces import Piece


class GreedyAgent:
    """
    Greedy agent scoring each legal placement on its own:
    - Prefer large pieces
    - Prefer anchors near the board center
    - Prefer placements touching opponent territory
    """

    def __init__(self):
        # Heuristic weights
        self.piece_size_weight = 10
        self.center_distance_weight = 1
        self.opponent_contact_weight = 5

    def choose_move(self, state: GameState, piece: Piece) -> Optional[Tuple[int, int]]:
        """
        Select the highest scoring legal placement.

        Ties go to the earliest anchor in enumeration order.

        Returns:
            Selected (x, y), or None if no legal placement exists
        """
        legal_moves = state.legal_moves(piece)
        if not legal_moves:
            return None

        best_move = legal_moves[0]
        best_score = self.evaluate_move(state.board, piece, best_move, state.current_player)
        for move in legal_moves[1:]:
            score = self.evaluate_move(state.board, piece, move, state.current_player)
            if score > best_score:
                best_score = score
                best_move = move
        return best_move

    def evaluate_move(self, board: Board, piece: Piece, move: Tuple[int, int], player: Player) -> int:
        """
        Score one placement.

        score = 10 * piece cells - Manhattan distance from anchor to center
                + 5 * distinct opponent cells in the 8-neighbour window of
                  any placed cell
        """
        x, y = move
        center_x = board.width // 2
        center_y = board.height // 2
        distance = abs(x - center_x) + abs(y - center_y)

        score = self.piece_size_weight * piece.size
        score -= self.center_distance_weight * distance
        score += self.opponent_contact_weight * self._count_opponent_contacts(board, piece, move, player)
        return score

    def _count_opponent_contacts(self, board: Board, piece: Piece, move: Tuple[int, int], player: Player) -> int:
        x, y = move
        opponent = board.owned_mask(player.opponent)
        touched = np.zeros_like(opponent)
        for px, py in piece.absolute_cells(x, y):
            x0, x1 = max(px - 1, 0), min(px + 2, board.width)
            y0, y1 = max(py - 1, 0), min(py + 2, board.height)
            touched[y0:y1, x0:x1] = True
        return int(np.count_nonzero(touched & opponent))

    def get_action_info(self) -> Dict[str, Any]:
        """Get information about the agent."""
        return {
            "name": "GreedyAgent",
            "type": "greedy",
            "description": "Single-ply agent with piece size, center and contact preferences",
            "weights": {
                "piece_size": self.piece_size_weight,
                "center_distance": self.center_distance_weight,
                "opponent_contact": self.opponent_contact_weight,
            }
        }

    def set_weights(self, weights: Dict[str, int]):
        """
        Set heuristic weights.

        Args:
            weights: Dictionary of weight names and values
        """
        if "piece_size" in weights:
            self.piece_size_weight = weights["piece_size"]
        if "center_distance" in weights:
            self.center_distance_weight = weights["center_distance"]
        if "opponent_contact" in weights:
            self.opponent_contact_weight = weights["opponent_contact"]
