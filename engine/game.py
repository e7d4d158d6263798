"""
Match state and the turn state machine for two-player Filler.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from .board import Board, Player
from .errors import MatchFinishedError, PlayerError
from .move_generator import LegalMoveGenerator, apply, enumerate_legal
from .pieces import Piece, PieceGenerator

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class TurnPhase(str, Enum):
    """States of the turn state machine."""
    AWAITING_PIECE = "awaiting_piece"
    REQUESTING_MOVE = "requesting_move"
    VALIDATING = "validating"
    APPLIED = "applied"
    REJECTED = "rejected"
    GAME_OVER = "game_over"


class EndReason(str, Enum):
    """Why a match ended."""
    NO_LEGAL_MOVES = "no_legal_moves"
    NO_MOVE = "no_move"
    ILLEGAL_MOVE = "illegal_move"
    PLAYER_ERROR = "player_error"
    TURN_LIMIT = "turn_limit"


@dataclass(frozen=True)
class PlayerState:
    """A player's territory snapshot."""
    player: Player
    territory: FrozenSet[Position]

    @property
    def score(self) -> int:
        return len(self.territory)


@dataclass
class TurnRecord:
    """Outcome of one turn, kept in ``FillerGame.history``."""
    turn: int
    player: Player
    piece: Piece
    position: Optional[Position]
    accepted: bool
    scores: Dict[int, int]
    reason: Optional[EndReason] = None


@dataclass
class GameResult:
    """Final scores and winner; ``winner`` is None on a tie."""
    scores: Dict[int, int]
    winner: Optional[Player]
    turns: int
    reason: Optional[EndReason]

    @property
    def is_tie(self) -> bool:
        return self.winner is None


class GameState:
    """
    Board plus whose turn it is.

    ``copy`` returns a fully independent state, which is what search code
    branches on.
    """

    def __init__(self, board: Board, current_player: Player = Player.ONE, turn: int = 1):
        self.board = board
        self.current_player = current_player
        self.turn = turn
        self.game_over = False
        self.winner: Optional[Player] = None

    @property
    def opponent(self) -> Player:
        return self.current_player.opponent

    def score(self, player: Player) -> int:
        return self.board.count_owned(player)

    def scores(self) -> Dict[int, int]:
        return {player.value: self.score(player) for player in Player}

    def player_state(self, player: Player) -> PlayerState:
        return PlayerState(player, frozenset(self.board.positions_owned(player)))

    def legal_moves(self, piece: Piece) -> List[Position]:
        """Legal anchors for the player to move."""
        return enumerate_legal(self.board, piece, self.current_player)

    def place(self, piece: Piece, x: int, y: int) -> bool:
        """Place ``piece`` for the player to move; False if illegal."""
        return apply(self.board, piece, x, y, self.current_player)

    def switch_player(self) -> None:
        self.current_player = self.current_player.opponent
        self.turn += 1

    def finish(self) -> Optional[Player]:
        """Mark the game over and decide the winner (None on equal counts)."""
        self.game_over = True
        one, two = self.score(Player.ONE), self.score(Player.TWO)
        if one > two:
            self.winner = Player.ONE
        elif two > one:
            self.winner = Player.TWO
        else:
            self.winner = None
        return self.winner

    def copy(self) -> "GameState":
        new_state = GameState(self.board.copy(), self.current_player, self.turn)
        new_state.game_over = self.game_over
        new_state.winner = self.winner
        return new_state


class FillerGame:
    """
    Match orchestrator.

    Drives AwaitingPiece -> RequestingMove -> Validating -> Applied ->
    AwaitingPiece until a turn is rejected, at which point the match is over.
    Players are any objects with ``choose_move(state, piece)``.
    """

    def __init__(
        self,
        board: Board,
        players: Dict[Player, object],
        generator: PieceGenerator,
        max_turns: Optional[int] = None,
        first_player: Player = Player.ONE,
    ):
        """
        Initialize a match.

        Args:
            board: Initial board, mutated in place as the match runs
            players: Move policy for each player
            generator: Seeded piece generator
            max_turns: Optional cap on the number of turns
            first_player: Player to move first
        """
        if set(players) != set(Player):
            raise ValueError("a move policy is required for both players")
        self.state = GameState(board, first_player)
        self.players = players
        self.generator = generator
        self.max_turns = max_turns
        self.move_generator = LegalMoveGenerator()
        self.phase = TurnPhase.AWAITING_PIECE
        self.history: List[TurnRecord] = []
        self.end_reason: Optional[EndReason] = None
        self.current_piece: Optional[Piece] = None

    @property
    def board(self) -> Board:
        return self.state.board

    def is_game_over(self) -> bool:
        return self.state.game_over

    def get_current_player(self) -> Player:
        return self.state.current_player

    def get_score(self, player: Player) -> int:
        return self.state.score(player)

    def step(self) -> TurnRecord:
        """
        Play one turn.

        Returns:
            Record of the turn; ``accepted`` is False for the final turn
        """
        if self.state.game_over:
            raise MatchFinishedError("the match is already over")

        player = self.state.current_player
        turn = self.state.turn

        piece = self.generator.next_piece()
        self.current_piece = piece
        self.phase = TurnPhase.REQUESTING_MOVE

        if self.max_turns is not None and len(self.history) >= self.max_turns:
            return self._reject(turn, player, piece, None, EndReason.TURN_LIMIT)

        if not self.move_generator.has_legal_moves(self.state.board, piece, player):
            logger.info(f"Turn {turn}: player {player.value} has no legal placement")
            return self._reject(turn, player, piece, None, EndReason.NO_LEGAL_MOVES)

        try:
            move = self.players[player].choose_move(self.state.copy(), piece)
        except PlayerError as exc:
            logger.warning(f"Turn {turn}: player {player.value} forfeits: {exc}")
            return self._reject(turn, player, piece, None, EndReason.PLAYER_ERROR)

        self.phase = TurnPhase.VALIDATING
        if move is None:
            logger.warning(f"Turn {turn}: player {player.value} reported no move")
            return self._reject(turn, player, piece, None, EndReason.NO_MOVE)

        x, y = move
        if not self.move_generator.apply_move(self.state.board, piece, x, y, player):
            logger.warning(f"Turn {turn}: player {player.value} made an illegal move at ({x}, {y})")
            return self._reject(turn, player, piece, (x, y), EndReason.ILLEGAL_MOVE)

        self.phase = TurnPhase.APPLIED
        record = TurnRecord(turn, player, piece, (x, y), True, self.state.scores())
        self.history.append(record)
        logger.info(f"Turn {turn}: player {player.value} placed {piece.size} cells at ({x}, {y}), scores={record.scores}")

        self.state.switch_player()
        self.phase = TurnPhase.AWAITING_PIECE
        return record

    def play(self) -> GameResult:
        """Run turns until the match is over."""
        while not self.state.game_over:
            self.step()
        return self.get_game_result()

    def get_game_result(self) -> GameResult:
        return GameResult(
            scores=self.state.scores(),
            winner=self.state.winner,
            turns=sum(1 for record in self.history if record.accepted),
            reason=self.end_reason,
        )

    def _reject(
        self,
        turn: int,
        player: Player,
        piece: Piece,
        position: Optional[Position],
        reason: EndReason,
    ) -> TurnRecord:
        self.phase = TurnPhase.REJECTED
        self.end_reason = reason
        record = TurnRecord(turn, player, piece, position, False, self.state.scores(), reason)
        self.history.append(record)
        winner = self.state.finish()
        self.phase = TurnPhase.GAME_OVER
        logger.info(
            f"Game over ({reason.value}): scores={record.scores}, "
            f"winner={'tie' if winner is None else winner.value}"
        )
        return record
