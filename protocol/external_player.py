"""
Player backed by an external executable speaking the text protocol.
"""

import logging
import shlex
import subprocess
from typing import List, Optional, Sequence, Tuple, Union

from engine.board import Player
from engine.errors import PlayerError, ProtocolError
from engine.game import GameState
from engine.pieces import Piece

from .codec import encode_frame, parse_reply

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ExternalProcessPlayer:
    """
    Spawns the player program once per turn.

    The frame is written to the program's stdin, which is then closed; the
    reply is read from its stdout once it exits. Every call is bounded by
    ``timeout`` seconds.
    """

    def __init__(
        self,
        command: Union[str, Sequence[str]],
        player: Player,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        label: Optional[str] = None,
    ):
        """
        Initialize the external player.

        Args:
            command: Executable path with optional arguments, as a shell-style
                string or an argument list
            player: Seat this program plays
            timeout: Seconds allowed per turn
            label: Path shown in the frame's player line (defaults to command)
        """
        self.argv: List[str] = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.argv:
            raise ValueError("external player command is empty")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.player = player
        self.timeout = timeout
        self.label = label if label is not None else " ".join(self.argv)

    def choose_move(self, state: GameState, piece: Piece) -> Optional[Tuple[int, int]]:
        """
        Ask the program for a placement.

        Returns:
            (x, y) from the reply, or None when the program printed nothing

        Raises:
            PlayerError: If the program cannot be started, times out, exits
                with a non-zero status or replies with anything but two
                unsigned integers
        """
        frame = encode_frame(state.board, piece, self.player, self.label)
        try:
            completed = subprocess.run(
                self.argv,
                input=frame.encode("utf-8"),
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise PlayerError(f"{self.label} timed out after {self.timeout}s", self.player.value) from exc
        except OSError as exc:
            raise PlayerError(f"could not run {self.label}: {exc}", self.player.value) from exc

        stdout = completed.stdout.decode("utf-8", errors="replace")
        stderr = completed.stderr.decode("utf-8", errors="replace")
        if stderr:
            logger.debug(f"{self.label} stderr: {stderr.strip()}")
        if completed.returncode != 0:
            raise PlayerError(f"{self.label} exited with status {completed.returncode}", self.player.value)
        if not stdout.strip():
            return None
        try:
            return parse_reply(stdout)
        except ProtocolError as exc:
            raise PlayerError(str(exc), self.player.value) from exc
