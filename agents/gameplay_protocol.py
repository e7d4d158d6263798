"""
Move policy protocol shared by built-in agents and external players.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple

from engine.game import GameState
from engine.pieces import Piece


class MovePolicy(Protocol):
    """
    Minimal gameplay contract for anything that can take a turn.

    ``state.current_player`` is the acting player. Returns an (x, y) anchor,
    or None when the policy has no move to offer.
    """

    def choose_move(self, state: GameState, piece: Piece) -> Optional[Tuple[int, int]]:
        ...
