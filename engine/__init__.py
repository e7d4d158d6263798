"""
Filler game engine package.

This package contains the core game logic for Filler, including:
- Board (Anfield) cells and territory bookkeeping
- Piece definitions and the seeded piece generator
- Placement rules and legal move enumeration
- Match state and the turn state machine
"""

from .board import Board, Cell, Player, load_map
from .errors import (
    BoardFormatError, CellOutOfBoundsError, EngineError, FillerError,
    MatchFinishedError, PlayerError, ProtocolError,
)
from .game import EndReason, FillerGame, GameResult, GameState, TurnPhase, TurnRecord
from .move_generator import LegalMoveGenerator, apply, enumerate_legal, is_legal
from .pieces import PIECE_CATALOG, Piece, PieceGenerator, PieceMode

__all__ = [
    'Board', 'Cell', 'Player', 'load_map',
    'Piece', 'PieceGenerator', 'PieceMode', 'PIECE_CATALOG',
    'LegalMoveGenerator', 'is_legal', 'enumerate_legal', 'apply',
    'GameState', 'FillerGame', 'GameResult', 'TurnRecord', 'TurnPhase', 'EndReason',
    'FillerError', 'EngineError', 'CellOutOfBoundsError', 'MatchFinishedError',
    'BoardFormatError', 'ProtocolError', 'PlayerError',
]
