"""
Tests for match configuration, logging setup and the match runner script.
"""

import json
import logging
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from engine.board import Board, Player
from engine.pieces import PieceMode
from schemas.game_state import AgentType, GameSummary
from schemas.match_config import MatchConfig, PlayerConfig
from utils.logging_setup import setup_logging

PROJECT_ROOT = Path(__file__).resolve().parents[1]
RUN_MATCH = PROJECT_ROOT / "scripts" / "run_match.py"


class TestPlayerConfig(unittest.TestCase):
    """Test seat configuration."""

    def test_from_spec_difficulties(self):
        self.assertEqual(PlayerConfig.from_spec("easy").agent_type, AgentType.RANDOM)
        self.assertEqual(PlayerConfig.from_spec("Medium").agent_type, AgentType.GREEDY)
        hard = PlayerConfig.from_spec("hard")
        self.assertEqual((hard.agent_type, hard.depth), (AgentType.MINIMAX, 3))
        expert = PlayerConfig.from_spec("expert")
        self.assertEqual((expert.agent_type, expert.depth), (AgentType.MINIMAX, 5))

    def test_from_spec_agent_types(self):
        self.assertEqual(PlayerConfig.from_spec("minimax").agent_type, AgentType.MINIMAX)
        self.assertEqual(PlayerConfig.from_spec("random").agent_type, AgentType.RANDOM)

    def test_from_spec_external(self):
        config = PlayerConfig.from_spec("./robots/bender --fast")
        self.assertEqual(config.agent_type, AgentType.EXTERNAL)
        self.assertEqual(config.command, "./robots/bender --fast")

    def test_external_needs_command(self):
        with self.assertRaises(ValidationError):
            PlayerConfig(agent_type=AgentType.EXTERNAL)

    def test_depth_bounds(self):
        with self.assertRaises(ValidationError):
            PlayerConfig(agent_type=AgentType.MINIMAX, depth=0)


class TestMatchConfig(unittest.TestCase):
    """Test match configuration loading."""

    def test_defaults(self):
        config = MatchConfig()
        self.assertEqual((config.width, config.height), (15, 10))
        self.assertEqual(config.seed, 42)
        self.assertEqual(config.timeout, 10.0)
        self.assertIs(config.piece_mode, PieceMode.CATALOG)
        self.assertEqual(len(config.players()), 2)

    def test_invalid_values(self):
        with self.assertRaises(ValidationError):
            MatchConfig(seed=-1)
        with self.assertRaises(ValidationError):
            MatchConfig(seed=2 ** 64)
        with self.assertRaises(ValidationError):
            MatchConfig(timeout=0)

    def test_from_dict_ignores_unknown_keys(self):
        config = MatchConfig.from_dict({"width": 20, "unused": True})
        self.assertEqual(config.width, 20)

    def test_from_yaml_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "match.yaml"
            path.write_text(
                "width: 12\n"
                "height: 8\n"
                "seed: 9\n"
                "piece_mode: mask\n"
                "player1:\n"
                "  agent_type: minimax\n"
                "  depth: 2\n"
                "player2:\n"
                "  agent_type: external\n"
                "  command: ./bot\n"
            )
            config = MatchConfig.from_file(path)
        self.assertEqual((config.width, config.height, config.seed), (12, 8, 9))
        self.assertIs(config.piece_mode, PieceMode.MASK)
        self.assertEqual(config.player1.depth, 2)
        self.assertEqual(config.player2.command, "./bot")

    def test_from_json_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "match.json"
            path.write_text(json.dumps({"timeout": 2.5, "player1": {"agent_type": "random", "seed": 3}}))
            config = MatchConfig.from_file(path)
        self.assertEqual(config.timeout, 2.5)
        self.assertEqual(config.player1.seed, 3)

    def test_from_file_errors(self):
        with self.assertRaises(FileNotFoundError):
            MatchConfig.from_file(Path("/nonexistent/match.yaml"))
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "match.toml"
            path.write_text("width = 3\n")
            with self.assertRaises(ValueError):
                MatchConfig.from_file(path)

    def test_build_board_from_map(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "map01"
            path.write_text("3 4\n....\n.@..\n...$\n")
            board = MatchConfig(map_path=str(path)).build_board()
        self.assertEqual((board.width, board.height), (4, 3))
        self.assertEqual(board.positions_owned(Player.ONE), [(1, 1)])

    def test_build_board_default(self):
        self.assertEqual(MatchConfig(width=6, height=4).build_board(), Board(6, 4))


class TestLoggingSetup(unittest.TestCase):
    """Test logging configuration."""

    def setUp(self):
        root = logging.getLogger()
        self.saved_handlers = root.handlers[:]
        self.saved_level = root.level

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in self.saved_handlers:
            root.addHandler(handler)
        root.setLevel(self.saved_level)

    def test_quiet_console(self):
        self.assertIsNone(setup_logging(logging.INFO, quiet=True))
        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertEqual(handlers[0].level, logging.WARNING)

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = setup_logging(logging.INFO, Path(tmp) / "logs" / "match.log")
            logging.getLogger("engine.game").info("Turn 1: placed")
            for handler in logging.getLogger().handlers:
                handler.flush()
            self.assertIn("Turn 1: placed", path.read_text())
            self.assertEqual(len(logging.getLogger().handlers), 2)
            for handler in logging.getLogger().handlers[:]:
                logging.getLogger().removeHandler(handler)
                handler.close()


class TestRunMatchScript(unittest.TestCase):
    """Test the command-line match runner."""

    def run_script(self, *args):
        return subprocess.run(
            [sys.executable, str(RUN_MATCH), *args],
            capture_output=True,
            text=True,
            timeout=120,
            check=False,
        )

    def test_json_summary(self):
        completed = self.run_script("-p1", "medium", "-p2", "easy", "--width", "8", "--height", "6", "-s", "3", "-q", "--json")
        self.assertEqual(completed.returncode, 0, completed.stderr)
        summary = GameSummary.model_validate_json(completed.stdout)
        self.assertEqual(set(summary.scores), {1, 2})
        self.assertEqual(summary.is_tie, summary.winner is None)

        again = self.run_script("-p1", "medium", "-p2", "easy", "--width", "8", "--height", "6", "-s", "3", "-q", "--json")
        self.assertEqual(again.stdout, completed.stdout)

    def test_text_summary(self):
        completed = self.run_script("-p1", "greedy", "-p2", "greedy", "--width", "6", "--height", "5", "-q")
        self.assertEqual(completed.returncode, 0, completed.stderr)
        self.assertIn("=== GAME OVER ===", completed.stdout)
        self.assertIn("Player 1 score:", completed.stdout)

    def test_bad_map(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken"
            path.write_text("not a map\n")
            completed = self.run_script("-f", str(path), "-q")
        self.assertEqual(completed.returncode, 1)
        self.assertIn("Could not set up the match", completed.stderr)

    def test_missing_config_file(self):
        completed = self.run_script("-c", "/nonexistent/match.yaml", "-q")
        self.assertEqual(completed.returncode, 1)
        self.assertNotIn("Traceback", completed.stderr)
        self.assertIn("Config file not found", completed.stderr)

    def test_invalid_option_values(self):
        for args in [("-t", "0"), ("-s", "-5"), ("--width", "0")]:
            with self.subTest(args=args):
                completed = self.run_script(*args, "-q")
                self.assertEqual(completed.returncode, 1)
                self.assertNotIn("Traceback", completed.stderr)


if __name__ == '__main__':
    unittest.main()
