"""
Filler piece definitions and the seeded piece generator.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

MAX_SEED = 2 ** 64


@dataclass(frozen=True)
class Piece:
    """
    Represents a Filler piece.

    ``cells`` holds the occupied (x, y) offsets inside a ``width`` x ``height``
    bounding box, sorted row-major. Mask-generated pieces may leave whole rows
    or columns of their box empty.
    """
    cells: Tuple[Tuple[int, int], ...]
    width: int
    height: int

    def __post_init__(self):
        """Validate piece after initialization."""
        if not self.cells:
            raise ValueError("Piece must occupy at least one cell")
        if len(set(self.cells)) != len(self.cells):
            raise ValueError("Piece cells must be unique")
        for x, y in self.cells:
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise ValueError(f"Piece cell {(x, y)} lies outside its {self.width}x{self.height} box")
        ordered = tuple(sorted(self.cells, key=lambda cell: (cell[1], cell[0])))
        object.__setattr__(self, "cells", ordered)

    @classmethod
    def from_cells(cls, cells: Iterable[Tuple[int, int]]) -> "Piece":
        """Build a piece whose box is the tightest fit around ``cells``."""
        cells = tuple(cells)
        if not cells:
            raise ValueError("Piece must occupy at least one cell")
        width = max(x for x, _ in cells) + 1
        height = max(y for _, y in cells) + 1
        return cls(cells, width, height)

    @classmethod
    def from_mask(cls, mask: np.ndarray) -> "Piece":
        """Build a piece from a 2D boolean mask indexed ``mask[y, x]``."""
        if mask.ndim != 2:
            raise ValueError("Piece mask must be 2D")
        ys, xs = np.nonzero(mask)
        cells = tuple((int(x), int(y)) for y, x in zip(ys, xs))
        return cls(cells, int(mask.shape[1]), int(mask.shape[0]))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Piece":
        """Build a piece from text rows; any character but '.' is occupied."""
        if not rows or not rows[0]:
            raise ValueError("Piece rows are empty")
        width = len(rows[0])
        cells = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Piece row {y} has width {len(row)}, expected {width}")
            cells.extend((x, y) for x, ch in enumerate(row) if ch != ".")
        return cls(tuple(cells), width, len(rows))

    @property
    def size(self) -> int:
        """Number of occupied cells."""
        return len(self.cells)

    @cached_property
    def xs(self) -> np.ndarray:
        return np.array([x for x, _ in self.cells], dtype=np.intp)

    @cached_property
    def ys(self) -> np.ndarray:
        return np.array([y for _, y in self.cells], dtype=np.intp)

    @property
    def extent(self) -> Tuple[int, int]:
        """Largest occupied (x, y) offsets."""
        return int(self.xs.max()), int(self.ys.max())

    def absolute_cells(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Board positions covered when the piece's box corner sits at (x, y)."""
        return [(x + dx, y + dy) for dx, dy in self.cells]

    def to_rows(self, filled: str = "O", empty: str = ".") -> List[str]:
        occupied = set(self.cells)
        return [
            "".join(filled if (x, y) in occupied else empty for x in range(self.width))
            for y in range(self.height)
        ]

    def __str__(self) -> str:
        return "\n".join(self.to_rows())


def _shape(*cells: Tuple[int, int]) -> Piece:
    return Piece.from_cells(cells)


# Canonical catalog, indexed uniformly by the catalog generator.
PIECE_CATALOG: Tuple[Piece, ...] = (
    _shape((0, 0)),                                          # dot
    _shape((0, 0), (1, 0)),                                  # line 2 horizontal
    _shape((0, 0), (0, 1)),                                  # line 2 vertical
    _shape((0, 0), (1, 0), (2, 0)),                          # line 3 horizontal
    _shape((0, 0), (0, 1), (0, 2)),                          # line 3 vertical
    _shape((0, 0), (1, 0), (2, 0), (3, 0)),                  # line 4 horizontal
    _shape((0, 0), (0, 1), (0, 2), (0, 3)),                  # line 4 vertical
    _shape((0, 0), (1, 0), (0, 1), (1, 1)),                  # 2x2 block
    _shape((0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)),  # 3x2 block
    _shape((0, 0), (0, 1), (0, 2), (1, 2)),                  # L
    _shape((0, 0), (1, 0), (2, 0), (0, 1)),                  # L rotated
    _shape((1, 0), (1, 1), (1, 2), (0, 2)),                  # L mirrored
    _shape((0, 0), (0, 1), (1, 1), (2, 1)),                  # L mirrored rotated
    _shape((0, 0), (1, 0), (2, 0), (1, 1)),                  # T
    _shape((0, 0), (0, 1), (0, 2), (1, 1)),                  # T rotated
    _shape((1, 0), (0, 1), (1, 1), (2, 1)),                  # T upside down
    _shape((1, 0), (1, 1), (1, 2), (0, 1)),                  # T rotated left
    _shape((0, 0), (1, 0), (1, 1), (2, 1)),                  # Z
    _shape((1, 0), (2, 0), (0, 1), (1, 1)),                  # Z mirrored
)


class PieceMode(str, Enum):
    """Piece generation strategies."""
    CATALOG = "catalog"
    MASK = "mask"


class PieceGenerator:
    """
    Deterministic piece sequence.

    Every draw comes from one ``numpy.random.Generator`` seeded at
    construction, so two generators with the same seed and mode yield the same
    ordered sequence. The mode is fixed for the generator's lifetime.
    """

    MASK_MAX_WIDTH = 5
    MASK_MAX_HEIGHT = 4
    MASK_FILL_PROBABILITY = 0.6

    def __init__(self, seed: int, mode: PieceMode = PieceMode.CATALOG,
                 catalog: Optional[Sequence[Piece]] = None):
        """
        Initialize the generator.

        Args:
            seed: 64-bit unsigned seed
            mode: Generation strategy for the whole sequence
            catalog: Shapes for catalog mode (defaults to PIECE_CATALOG)
        """
        if not 0 <= seed < MAX_SEED:
            raise ValueError(f"seed must be a 64-bit unsigned integer, got {seed}")
        self.seed = seed
        self.mode = PieceMode(mode)
        self.catalog = tuple(catalog) if catalog is not None else PIECE_CATALOG
        if not self.catalog:
            raise ValueError("catalog must contain at least one piece")
        self.rng = np.random.default_rng(seed)
        self.drawn = 0

    def next_piece(self) -> Piece:
        """Produce the next piece of the sequence."""
        if self.mode is PieceMode.CATALOG:
            piece = self.catalog[int(self.rng.integers(0, len(self.catalog)))]
        else:
            piece = self._random_mask_piece()
        self.drawn += 1
        logger.debug("Piece #%d (%s): %dx%d, %d cells",
                     self.drawn, self.mode.value, piece.width, piece.height, piece.size)
        return piece

    def take(self, count: int) -> List[Piece]:
        """Draw ``count`` pieces."""
        return [self.next_piece() for _ in range(count)]

    def _random_mask_piece(self) -> Piece:
        width = int(self.rng.integers(1, self.MASK_MAX_WIDTH + 1))
        height = int(self.rng.integers(1, self.MASK_MAX_HEIGHT + 1))
        mask = self.rng.random((height, width)) < self.MASK_FILL_PROBABILITY
        if not mask.any():
            mask[0, 0] = True
        return Piece.from_mask(mask)
