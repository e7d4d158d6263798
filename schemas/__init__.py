"""
Pydantic schemas for match configuration and public game state.
"""

from .game_state import AgentType, Difficulty, GameSnapshot, GameSummary, Position
from .match_config import DIFFICULTY_PRESETS, MatchConfig, PlayerConfig

__all__ = [
    "AgentType",
    "Difficulty",
    "Position",
    "GameSnapshot",
    "GameSummary",
    "PlayerConfig",
    "MatchConfig",
    "DIFFICULTY_PRESETS",
]
