"""
Built-in Filler agents and the player registry.
"""

from .greedy_agent import GreedyAgent
from .minimax_agent import EXPERT_DEPTH, HARD_DEPTH, MinimaxAgent
from .random_agent import RandomAgent

__all__ = ["RandomAgent", "GreedyAgent", "MinimaxAgent", "HARD_DEPTH", "EXPERT_DEPTH"]
