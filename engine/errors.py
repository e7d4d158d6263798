"""
Exception hierarchy for the Filler engine.

Engine errors signal bugs inside the engine and always propagate. Protocol
and player errors describe misbehaving players; the match orchestrator turns
them into forfeits.
"""

from typing import Optional


class FillerError(Exception):
    """Base class for every error raised by this project."""


class EngineError(FillerError):
    """An internal invariant was violated."""


class CellOutOfBoundsError(EngineError):
    """A cell outside the board was written."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"cell ({x}, {y}) is outside a {width}x{height} board")
        self.x = x
        self.y = y


class MatchFinishedError(EngineError):
    """A turn was requested after the match reached GameOver."""


class BoardFormatError(FillerError):
    """A map file or character grid could not be turned into a board."""


class ProtocolError(FillerError):
    """A protocol frame or move reply is malformed."""


class PlayerError(FillerError):
    """An external player failed to produce a reply."""

    def __init__(self, message: str, player_id: Optional[int] = None):
        super().__init__(message)
        self.player_id = player_id
