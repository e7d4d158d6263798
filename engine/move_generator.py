"""
Placement rules and legal move generation for Filler.

A placement of ``piece`` with its box corner on board cell (x, y) is legal for
a player when every occupied cell lands on the board, none lands on an opponent cell,
and exactly one lands on a cell the player already owns. A player owning no
cells at all may place anywhere that satisfies the first two rules.
"""

import logging
import os
import time
from typing import List, Tuple

import numpy as np

from .board import Board, Cell, Player
from .pieces import Piece

logger = logging.getLogger(__name__)

# Debug flag for move generation timing (controlled via environment variable)
MOVEGEN_DEBUG = bool(os.getenv("FILLER_MOVEGEN_DEBUG", ""))

Position = Tuple[int, int]


def is_legal(board: Board, piece: Piece, x: int, y: int, player: Player) -> bool:
    """
    Check a single placement against the rules.

    Args:
        board: Current board state
        piece: Piece to place
        x: Column of the piece's box corner
        y: Row of the piece's box corner
        player: Acting player

    Returns:
        True if the placement is legal
    """
    if not board.in_bounds(x, y):
        return False
    xs = piece.xs + x
    ys = piece.ys + y
    if xs.max() >= board.width or ys.max() >= board.height:
        return False

    owners = board.owner_grid()[ys, xs]
    if np.any(owners == player.opponent.value):
        return False
    if board.count_owned(player) == 0:
        return True
    return int(np.count_nonzero(owners == player.value)) == 1


def enumerate_legal(board: Board, piece: Piece, player: Player) -> List[Position]:
    """
    All legal (x, y) anchors for ``piece``, row-major (y outer, x inner).

    Anchors range over every board cell. Overlap counts for all anchors are
    accumulated at once by sliding the ownership masks under each piece cell.
    """
    max_dx, max_dy = piece.extent
    span_w = board.width - max_dx
    span_h = board.height - max_dy
    if span_w <= 0 or span_h <= 0:
        return []

    owners = board.owner_grid()
    own = (owners == player.value).astype(np.int32)
    opp = owners == player.opponent.value

    overlap = np.zeros((span_h, span_w), dtype=np.int32)
    blocked = np.zeros((span_h, span_w), dtype=bool)
    for dx, dy in piece.cells:
        overlap += own[dy:dy + span_h, dx:dx + span_w]
        blocked |= opp[dy:dy + span_h, dx:dx + span_w]

    if own.any():
        legal = ~blocked & (overlap == 1)
    else:
        legal = ~blocked
    ys, xs = np.nonzero(legal)
    return [(int(x), int(y)) for y, x in zip(ys, xs)]


def apply(board: Board, piece: Piece, x: int, y: int, player: Player) -> bool:
    """
    Place a piece if the placement is legal.

    The player's fresh cells are settled first, then every covered cell
    becomes the player's fresh cell. An illegal placement leaves the board
    untouched.

    Returns:
        True if the piece was placed, False otherwise
    """
    if not is_legal(board, piece, x, y, player):
        return False
    board.settle(player)
    board.grid[piece.ys + y, piece.xs + x] = Cell.fresh(player)
    return True


class LegalMoveGenerator:
    """Generates and applies legal placements, with optional timing logs."""

    def get_legal_moves(self, board: Board, piece: Piece, player: Player) -> List[Position]:
        """
        Get all legal placements for ``player`` on the current board.

        Args:
            board: Current board state
            piece: Piece to place
            player: Player to generate moves for

        Returns:
            List of legal (x, y) anchors in row-major order
        """
        start = time.perf_counter()
        moves = enumerate_legal(board, piece, player)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if MOVEGEN_DEBUG:
            logger.info(f"MoveGen: player={player.name}, legal_moves={len(moves)}, elapsed_ms={elapsed_ms:.2f}")
        logger.debug(f"Legal move generation: {len(moves)} moves in {elapsed_ms:.3f}ms for player={player.name}")
        return moves

    def has_legal_moves(self, board: Board, piece: Piece, player: Player) -> bool:
        return bool(self.get_legal_moves(board, piece, player))

    def is_legal(self, board: Board, piece: Piece, x: int, y: int, player: Player) -> bool:
        return is_legal(board, piece, x, y, player)

    def apply_move(self, board: Board, piece: Piece, x: int, y: int, player: Player) -> bool:
        placed = apply(board, piece, x, y, player)
        if not placed:
            logger.debug(f"Rejected placement at ({x}, {y}) for player={player.name}")
        return placed
