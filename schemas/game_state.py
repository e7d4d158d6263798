"""
Game state schemas
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from engine.game import EndReason, GameResult, GameState
from engine.pieces import Piece


class AgentType(str, Enum):
    """Available player types."""
    RANDOM = "random"
    GREEDY = "greedy"
    MINIMAX = "minimax"
    EXTERNAL = "external"


class Difficulty(str, Enum):
    """Difficulty presets for built-in agents."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class Position(BaseModel):
    """Represents a position on the board."""
    x: int = Field(ge=0)
    y: int = Field(ge=0)


class GameSnapshot(BaseModel):
    """Public match state for renderers, recorders and prompts."""
    width: int
    height: int
    rows: List[str] = Field(description="Board rows using the protocol cell characters")
    current_player: int
    turn: int
    scores: Dict[int, int] = Field(description="Owned cells per player")
    game_over: bool
    winner: Optional[int] = None
    piece: Optional[List[str]] = Field(default=None, description="Rows of the piece to place")
    legal_moves: List[Position] = Field(default_factory=list, description="Legal anchors for the piece")

    @classmethod
    def from_state(cls, state: GameState, piece: Optional[Piece] = None) -> "GameSnapshot":
        legal = state.legal_moves(piece) if piece is not None and not state.game_over else []
        return cls(
            width=state.board.width,
            height=state.board.height,
            rows=state.board.to_rows(),
            current_player=state.current_player.value,
            turn=state.turn,
            scores=state.scores(),
            game_over=state.game_over,
            winner=state.winner.value if state.winner is not None else None,
            piece=piece.to_rows() if piece is not None else None,
            legal_moves=[Position(x=x, y=y) for x, y in legal],
        )


class GameSummary(BaseModel):
    """Final result of a match."""
    scores: Dict[int, int]
    winner: Optional[int] = None
    is_tie: bool
    turns: int
    reason: Optional[EndReason] = None

    @classmethod
    def from_result(cls, result: GameResult) -> "GameSummary":
        return cls(
            scores=result.scores,
            winner=result.winner.value if result.winner is not None else None,
            is_tie=result.is_tie,
            turns=result.turns,
            reason=result.reason,
        )
