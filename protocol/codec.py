"""
Wire format for one turn.

The engine writes::

    $$$ exec p<N> : [<path>]
    Anfield <width> <height>:
    000 <width cell characters>
    ...
    Piece <width> <height>:
    <height rows of width characters, 'O' occupied, '.' empty>

and the player answers with ``<x> <y>``, the column and row of the piece's
box corner. Readers accept any non-'.' piece character as occupied.
"""

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from engine.board import Board, Player
from engine.errors import BoardFormatError, ProtocolError
from engine.pieces import Piece

PLAYER_PREFIX = "$$$ exec p"
ANFIELD_PREFIX = "Anfield "
PIECE_PREFIX = "Piece "
PIECE_FILLED = "O"
PIECE_EMPTY = "."
MAX_REPLY_DIGITS = 9

_PLAYER_RE = re.compile(r"^\$\$\$ exec p(\d+) : \[(.*)\]$")
_HEADER_RE = re.compile(r"^(Anfield|Piece) (\d+) (\d+):$")
_ROW_RE = re.compile(r"^(\d{3,}) (.*)$")


@dataclass
class Frame:
    """One decoded turn request."""
    player: Player
    player_path: str
    board: Board
    piece: Piece


def encode_frame(board: Board, piece: Piece, player: Player, player_path: str = "") -> str:
    """Serialize board and piece for ``player``."""
    lines = [f"{PLAYER_PREFIX}{player.value} : [{player_path}]"]
    lines.append(f"{ANFIELD_PREFIX}{board.width} {board.height}:")
    for y, row in enumerate(board.to_rows()):
        lines.append(f"{y:03d} {row}")
    lines.append(f"{PIECE_PREFIX}{piece.width} {piece.height}:")
    lines.extend(piece.to_rows(PIECE_FILLED, PIECE_EMPTY))
    return "\n".join(lines) + "\n"


def _parse_header(line: str, kind: str) -> Tuple[int, int]:
    match = _HEADER_RE.match(line.rstrip("\r"))
    if match is None or match.group(1) != kind:
        raise ProtocolError(f"expected {kind} header, got {line!r}")
    width, height = int(match.group(2)), int(match.group(3))
    if width < 1 or height < 1:
        raise ProtocolError(f"{kind} dimensions must be positive, got {width}x{height}")
    return width, height


def parse_frame(data: Union[str, Sequence[str]]) -> Frame:
    """
    Decode a frame.

    Args:
        data: Whole frame text or its lines

    Returns:
        The decoded frame

    Raises:
        ProtocolError: On a bad header, a wrong row or column count, or an
            unknown cell character
    """
    lines: List[str] = data.splitlines() if isinstance(data, str) else [line.rstrip("\n") for line in data]
    lines = [line.rstrip("\r") for line in lines if line.strip()]
    if not lines:
        raise ProtocolError("empty frame")

    match = _PLAYER_RE.match(lines[0])
    if match is None:
        raise ProtocolError(f"expected player line, got {lines[0]!r}")
    try:
        player = Player(int(match.group(1)))
    except ValueError:
        raise ProtocolError(f"unknown player number {match.group(1)}") from None
    player_path = match.group(2)

    if len(lines) < 2:
        raise ProtocolError("frame is missing the Anfield section")
    width, height = _parse_header(lines[1], "Anfield")
    row_lines = lines[2:2 + height]
    if len(row_lines) != height:
        raise ProtocolError(f"expected {height} Anfield rows, got {len(row_lines)}")
    rows = []
    for y, line in enumerate(row_lines):
        row_match = _ROW_RE.match(line)
        if row_match is None or int(row_match.group(1)) != y:
            raise ProtocolError(f"bad Anfield row {y}: {line!r}")
        cells = row_match.group(2)
        if len(cells) != width:
            raise ProtocolError(f"Anfield row {y} has {len(cells)} cells, expected {width}")
        rows.append(cells)
    try:
        board = Board.from_rows(rows)
    except BoardFormatError as exc:
        raise ProtocolError(str(exc)) from exc

    rest = lines[2 + height:]
    if not rest:
        raise ProtocolError("frame is missing the Piece section")
    piece_width, piece_height = _parse_header(rest[0], "Piece")
    piece_rows = rest[1:1 + piece_height]
    if len(piece_rows) != piece_height:
        raise ProtocolError(f"expected {piece_height} Piece rows, got {len(piece_rows)}")
    for y, row in enumerate(piece_rows):
        if len(row) != piece_width:
            raise ProtocolError(f"Piece row {y} has {len(row)} cells, expected {piece_width}")
    try:
        piece = Piece.from_rows(piece_rows)
    except ValueError as exc:
        raise ProtocolError(str(exc)) from exc

    return Frame(player, player_path, board, piece)


def encode_reply(x: int, y: int) -> str:
    return f"{x} {y}\n"


def parse_reply(text: str) -> Tuple[int, int]:
    """
    Decode a move reply of exactly two unsigned integers ``<x> <y>``.

    Each integer has at most ``MAX_REPLY_DIGITS`` digits.

    Raises:
        ProtocolError: If the reply is anything else
    """
    parts = text.split()
    if len(parts) != 2 or not all(
        part.isascii() and part.isdigit() and len(part) <= MAX_REPLY_DIGITS for part in parts
    ):
        raise ProtocolError(f"malformed move reply: {text.strip()!r}")
    return int(parts[0]), int(parts[1])
