"""
Filler board (the "Anfield") implementation: a width x height grid of cells.
"""

import logging
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .errors import BoardFormatError, CellOutOfBoundsError

logger = logging.getLogger(__name__)


class Player(Enum):
    """Player enumeration."""
    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> "Player":
        return Player.TWO if self is Player.ONE else Player.ONE


class Cell(IntEnum):
    """
    Cell states.

    Settled cells were claimed on an earlier turn; fresh cells were claimed by
    the owner's most recent placement. Both count as owned.
    """
    EMPTY = 0
    ONE_SETTLED = 1
    ONE_FRESH = 2
    TWO_SETTLED = 3
    TWO_FRESH = 4

    @property
    def owner(self) -> Optional[Player]:
        return _CELL_OWNER[self]

    def to_char(self) -> str:
        return CELL_TO_CHAR[self]

    @classmethod
    def from_char(cls, ch: str) -> "Cell":
        try:
            return CHAR_TO_CELL[ch]
        except KeyError:
            raise BoardFormatError(f"unknown cell character {ch!r}") from None

    @classmethod
    def settled(cls, player: Player) -> "Cell":
        return cls.ONE_SETTLED if player is Player.ONE else cls.TWO_SETTLED

    @classmethod
    def fresh(cls, player: Player) -> "Cell":
        return cls.ONE_FRESH if player is Player.ONE else cls.TWO_FRESH


_CELL_OWNER = {
    Cell.EMPTY: None,
    Cell.ONE_SETTLED: Player.ONE,
    Cell.ONE_FRESH: Player.ONE,
    Cell.TWO_SETTLED: Player.TWO,
    Cell.TWO_FRESH: Player.TWO,
}

CELL_TO_CHAR = {
    Cell.EMPTY: ".",
    Cell.ONE_SETTLED: "@",
    Cell.ONE_FRESH: "a",
    Cell.TWO_SETTLED: "$",
    Cell.TWO_FRESH: "s",
}
CHAR_TO_CELL = {ch: cell for cell, ch in CELL_TO_CHAR.items()}

# Maps a raw grid value to the owning player's value (0 = nobody).
OWNER_LOOKUP = np.array([0, 1, 1, 2, 2], dtype=np.int8)


class Board:
    """
    Filler board implementation.

    The grid is stored row-major as ``grid[y, x]`` with ``Cell`` values.
    All public coordinates are ``(x, y)`` = (column, row). The board holds no
    game rules; legality lives in ``engine.move_generator``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        anchors: Optional[Dict[Player, Tuple[int, int]]] = None,
    ):
        """
        Create a board with one settled anchor cell per player.

        Args:
            width: Number of columns
            height: Number of rows
            anchors: Optional mapping of player -> (x, y). Defaults to opposite
                corners: (0, 0) for player one, (width-1, height-1) for player two.
        """
        if width < 1 or height < 1 or width * height < 2:
            raise BoardFormatError(f"board {width}x{height} cannot hold two anchors")
        self.width = width
        self.height = height
        self.grid = np.zeros((height, width), dtype=np.int8)

        if anchors is None:
            anchors = {Player.ONE: (0, 0), Player.TWO: (width - 1, height - 1)}
        if set(anchors) != set(Player):
            raise BoardFormatError("an anchor is required for both players")
        if anchors[Player.ONE] == anchors[Player.TWO]:
            raise BoardFormatError("player anchors must be distinct")
        for player, (x, y) in anchors.items():
            if not self.in_bounds(x, y):
                raise BoardFormatError(f"anchor {(x, y)} for {player.name} is off the board")
            self.grid[y, x] = Cell.settled(player)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Board":
        """
        Build a board from character rows using the protocol cell mapping.

        No anchors are added; the rows are taken as the complete layout.
        """
        rows = list(rows)
        if not rows or not rows[0]:
            raise BoardFormatError("board layout is empty")
        width = len(rows[0])
        board = cls.__new__(cls)
        board.width = width
        board.height = len(rows)
        board.grid = np.zeros((board.height, width), dtype=np.int8)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise BoardFormatError(f"row {y} has {len(row)} cells, expected {width}")
            for x, ch in enumerate(row):
                board.grid[y, x] = Cell.from_char(ch)
        return board

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) lies on the board."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get the cell at (x, y), or None when there is no such cell."""
        if not self.in_bounds(x, y):
            return None
        return Cell(int(self.grid[y, x]))

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        """Set the cell at (x, y). Writing off the board is an engine bug."""
        if not self.in_bounds(x, y):
            raise CellOutOfBoundsError(x, y, self.width, self.height)
        self.grid[y, x] = cell

    def owner_at(self, x: int, y: int) -> Optional[Player]:
        """Get the player owning (x, y), or None if empty or off the board."""
        cell = self.get_cell(x, y)
        return None if cell is None else cell.owner

    def owner_grid(self) -> np.ndarray:
        """Grid of owning player values (0 = empty), same shape as ``grid``."""
        return OWNER_LOOKUP[self.grid]

    def owned_mask(self, player: Player) -> np.ndarray:
        """Boolean grid marking the cells owned by ``player``."""
        return self.owner_grid() == player.value

    def positions_owned(self, player: Player) -> List[Tuple[int, int]]:
        """All (x, y) positions owned by ``player`` in row-major order."""
        ys, xs = np.nonzero(self.owned_mask(player))
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def count_owned(self, player: Player) -> int:
        """Number of cells owned by ``player``, settled and fresh alike."""
        return int(np.count_nonzero(self.owned_mask(player)))

    def settle(self, player: Player) -> int:
        """
        Convert all of ``player``'s fresh cells to settled.

        Returns:
            Number of cells converted
        """
        fresh = self.grid == Cell.fresh(player)
        converted = int(np.count_nonzero(fresh))
        self.grid[fresh] = Cell.settled(player)
        return converted

    def to_rows(self) -> List[str]:
        """Render each row with the protocol cell characters."""
        return [
            "".join(CELL_TO_CHAR[Cell(int(value))] for value in row)
            for row in self.grid
        ]

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        new_board = Board.__new__(Board)
        new_board.width = self.width
        new_board.height = self.height
        new_board.grid = self.grid.copy()
        return new_board

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool(np.array_equal(self.grid, other.grid))

    def __str__(self) -> str:
        return "\n".join(self.to_rows())


def load_map(text: str) -> Board:
    """
    Parse a map file.

    The first line is ``<height> <width>``. Optional following lines give the
    initial character grid; ``@``/``$`` (or their fresh variants) mark each
    player's anchor. Rows shorter than the width are padded with empty cells.
    A player without any marked cell gets the default corner anchor.

    Args:
        text: Map file contents

    Returns:
        The initial board
    """
    lines = text.splitlines()
    if not lines:
        raise BoardFormatError("map file is empty")
    dims = lines[0].split()
    if len(dims) != 2 or not all(part.isdigit() for part in dims):
        raise BoardFormatError(f"invalid map dimensions line: {lines[0]!r}")
    height, width = int(dims[0]), int(dims[1])

    layout = [line.rstrip("\n") for line in lines[1:] if line.strip()]
    if not layout:
        return Board(width, height)
    if len(layout) > height:
        raise BoardFormatError(f"map has {len(layout)} rows, expected at most {height}")

    rows = []
    for y, line in enumerate(layout):
        if len(line) > width:
            raise BoardFormatError(f"map row {y} is wider than {width}")
        rows.append(line.ljust(width, "."))
    rows.extend("." * width for _ in range(height - len(rows)))

    board = Board.from_rows(rows)
    defaults = {Player.ONE: (0, 0), Player.TWO: (width - 1, height - 1)}
    for player, (x, y) in defaults.items():
        if board.count_owned(player) == 0:
            if board.get_cell(x, y) != Cell.EMPTY:
                raise BoardFormatError(f"default anchor for {player.name} is occupied")
            board.set_cell(x, y, Cell.settled(player))
    logger.debug("Loaded %dx%d map", width, height)
    return board
