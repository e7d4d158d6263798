"""
Match configuration.

Configuration can be provided via CLI arguments or YAML/JSON config files.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from engine.board import Board, load_map
from engine.pieces import MAX_SEED, PieceMode

from .game_state import AgentType, Difficulty

DIFFICULTY_PRESETS = {
    Difficulty.EASY: (AgentType.RANDOM, None),
    Difficulty.MEDIUM: (AgentType.GREEDY, None),
    Difficulty.HARD: (AgentType.MINIMAX, 3),
    Difficulty.EXPERT: (AgentType.MINIMAX, 5),
}


class PlayerConfig(BaseModel):
    """Configuration for one seat."""
    agent_type: AgentType = AgentType.GREEDY
    depth: int = Field(default=3, ge=1, le=8, description="Search depth for minimax")
    command: Optional[str] = Field(default=None, description="Executable for external players")
    seed: Optional[int] = Field(default=None, ge=0, description="Seed for random agents")

    @model_validator(mode="after")
    def _check_command(self) -> "PlayerConfig":
        if self.agent_type == AgentType.EXTERNAL and not self.command:
            raise ValueError("external players need a command")
        return self

    @classmethod
    def from_spec(cls, spec: str) -> "PlayerConfig":
        """
        Build a config from a CLI value.

        A difficulty name or agent type selects a built-in agent; anything
        else is taken as the command line of an external program.
        """
        key = spec.strip().lower()
        if key in {d.value for d in Difficulty}:
            agent_type, depth = DIFFICULTY_PRESETS[Difficulty(key)]
            return cls(agent_type=agent_type, depth=depth or 3)
        if key in {a.value for a in AgentType if a != AgentType.EXTERNAL}:
            return cls(agent_type=AgentType(key))
        return cls(agent_type=AgentType.EXTERNAL, command=spec)


class MatchConfig(BaseModel):
    """Configuration for a single match."""
    width: int = Field(default=15, ge=1, le=500)
    height: int = Field(default=10, ge=1, le=500)
    map_path: Optional[str] = None
    player1: PlayerConfig = Field(default_factory=PlayerConfig)
    player2: PlayerConfig = Field(default_factory=PlayerConfig)
    seed: int = Field(default=42, ge=0, lt=MAX_SEED)
    piece_mode: PieceMode = PieceMode.CATALOG
    timeout: float = Field(default=10.0, gt=0, le=3600.0, description="Seconds per external turn")
    quiet: bool = False
    max_turns: Optional[int] = Field(default=None, ge=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "width": 15,
                "height": 10,
                "player1": {"agent_type": "minimax", "depth": 3},
                "player2": {"agent_type": "external", "command": "./robots/bender"},
                "seed": 42,
                "piece_mode": "catalog",
                "timeout": 10.0,
            }
        }
    }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "MatchConfig":
        """Create config from dictionary, ignoring unknown keys."""
        valid_keys = set(cls.model_fields)
        return cls(**{k: v for k, v in config_dict.items() if k in valid_keys})

    @classmethod
    def from_file(cls, config_path: Path) -> "MatchConfig":
        """Load config from YAML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            if config_path.suffix.lower() in [".yaml", ".yml"]:
                config_dict = yaml.safe_load(f) or {}
            elif config_path.suffix.lower() == ".json":
                config_dict = json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

        return cls.from_dict(config_dict)

    def build_board(self) -> Board:
        """Initial board: the map file when given, else default corner anchors."""
        if self.map_path:
            return load_map(Path(self.map_path).read_text())
        return Board(self.width, self.height)

    def players(self) -> List[PlayerConfig]:
        return [self.player1, self.player2]
