"""
Tests for the Filler board model.
"""

import unittest

import numpy as np

from engine.board import Board, Cell, Player, load_map
from engine.errors import BoardFormatError, CellOutOfBoundsError, EngineError


class TestBoard(unittest.TestCase):
    """Test the Board class."""

    def test_default_anchors_at_opposite_corners(self):
        board = Board(5, 4)
        self.assertEqual(board.grid.shape, (4, 5))
        self.assertEqual(board.get_cell(0, 0), Cell.ONE_SETTLED)
        self.assertEqual(board.get_cell(4, 3), Cell.TWO_SETTLED)
        self.assertEqual(board.count_owned(Player.ONE), 1)
        self.assertEqual(board.count_owned(Player.TWO), 1)

    def test_custom_anchors(self):
        board = Board(4, 4, anchors={Player.ONE: (1, 2), Player.TWO: (3, 0)})
        self.assertEqual(board.positions_owned(Player.ONE), [(1, 2)])
        self.assertEqual(board.positions_owned(Player.TWO), [(3, 0)])

    def test_invalid_anchors_rejected(self):
        with self.assertRaises(BoardFormatError):
            Board(3, 3, anchors={Player.ONE: (1, 1), Player.TWO: (1, 1)})
        with self.assertRaises(BoardFormatError):
            Board(3, 3, anchors={Player.ONE: (0, 0), Player.TWO: (3, 0)})
        with self.assertRaises(BoardFormatError):
            Board(1, 1)

    def test_get_cell_outside_returns_none(self):
        board = Board(3, 3)
        self.assertIsNone(board.get_cell(-1, 0))
        self.assertIsNone(board.get_cell(3, 0))
        self.assertIsNone(board.get_cell(0, 3))
        self.assertIsNone(board.owner_at(5, 5))

    def test_set_cell_outside_is_engine_error(self):
        board = Board(3, 3)
        with self.assertRaises(CellOutOfBoundsError) as ctx:
            board.set_cell(3, 1, Cell.ONE_FRESH)
        self.assertIsInstance(ctx.exception, EngineError)

    def test_fresh_and_settled_both_owned(self):
        board = Board.from_rows(["@a.", "..s", "..$"])
        self.assertEqual(board.count_owned(Player.ONE), 2)
        self.assertEqual(board.count_owned(Player.TWO), 2)
        self.assertEqual(board.positions_owned(Player.ONE), [(0, 0), (1, 0)])
        self.assertEqual(board.owner_at(2, 1), Player.TWO)

    def test_settle_only_touches_one_player(self):
        board = Board.from_rows(["aa.", "..s", "..$"])
        converted = board.settle(Player.ONE)
        self.assertEqual(converted, 2)
        self.assertEqual(board.to_rows(), ["@@.", "..s", "..$"])

    def test_from_rows_rejects_bad_layouts(self):
        with self.assertRaises(BoardFormatError):
            Board.from_rows(["@.", "."])
        with self.assertRaises(BoardFormatError):
            Board.from_rows(["@x", ".$"])
        with self.assertRaises(BoardFormatError):
            Board.from_rows([])

    def test_copy_is_independent(self):
        board = Board(4, 4)
        clone = board.copy()
        clone.set_cell(1, 1, Cell.ONE_FRESH)
        self.assertEqual(board.get_cell(1, 1), Cell.EMPTY)
        self.assertNotEqual(board, clone)
        self.assertEqual(board, Board(4, 4))

    def test_str_uses_protocol_characters(self):
        board = Board(3, 2)
        self.assertEqual(str(board), "@..\n..$")

    def test_owner_grid(self):
        board = Board.from_rows(["@a$s."])
        np.testing.assert_array_equal(board.owner_grid(), [[1, 1, 2, 2, 0]])


class TestLoadMap(unittest.TestCase):
    """Test map file parsing."""

    def test_dimensions_only(self):
        board = load_map("4 6\n")
        self.assertEqual((board.width, board.height), (6, 4))
        self.assertEqual(board.positions_owned(Player.ONE), [(0, 0)])
        self.assertEqual(board.positions_owned(Player.TWO), [(5, 3)])

    def test_layout_with_anchors(self):
        board = load_map("3 4\n....\n.@..\n..$\n")
        self.assertEqual(board.positions_owned(Player.ONE), [(1, 1)])
        self.assertEqual(board.positions_owned(Player.TWO), [(2, 2)])
        self.assertEqual(board.get_cell(3, 2), Cell.EMPTY)

    def test_layout_missing_anchor_gets_default(self):
        board = load_map("2 3\n.@.\n")
        self.assertEqual(board.positions_owned(Player.TWO), [(2, 1)])

    def test_malformed_maps(self):
        for text in ["", "abc\n", "3\n", "2 2\n...\n", "1 2\n..\n..\n", "2 2\n.x\n"]:
            with self.subTest(text=text):
                with self.assertRaises(BoardFormatError):
                    load_map(text)


if __name__ == '__main__':
    unittest.main()
