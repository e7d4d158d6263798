"""
Static position evaluation used by the minimax agent.
"""

import numpy as np

from engine.board import Board, Player
from engine.game import GameState

SCORE_WEIGHT = 100

NEIGHBOUR_OFFSETS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]


def center_control(board: Board, player: Player) -> int:
    """Sum of (3 - |dx| - |dy|) over ``player``'s cells in the 3x3 window around the center."""
    center_x = board.width // 2
    center_y = board.height // 2
    control = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if board.owner_at(center_x + dx, center_y + dy) is player:
                control += 3 - abs(dx) - abs(dy)
    return control


def compactness(board: Board, player: Player) -> int:
    """Number of ordered pairs of ``player`` cells that are 8-neighbours."""
    mask = board.owned_mask(player)
    padded = np.pad(mask, 1).astype(np.int32)
    h, w = mask.shape
    neighbours = np.zeros((h, w), dtype=np.int32)
    for dx, dy in NEIGHBOUR_OFFSETS:
        neighbours += padded[1 + dy:1 + dy + h, 1 + dx:1 + dx + w]
    return int(neighbours[mask].sum())


def evaluate(state: GameState, perspective: Player) -> int:
    """
    Score a position for ``perspective``.

    100 * territory difference plus the center-control and compactness
    differences. Swapping the perspective negates the score.
    """
    board = state.board
    opponent = perspective.opponent
    score = SCORE_WEIGHT * (board.count_owned(perspective) - board.count_owned(opponent))
    score += center_control(board, perspective) - center_control(board, opponent)
    score += compactness(board, perspective) - compactness(board, opponent)
    return score
