"""
Minesweeper agents module.

Provides automated players that drive the environment:
- RandomAgent: Baseline random clicks
- LogicAgent: Constraint propagation with subset reduction
- Evaluator: Win-rate evaluation and comparison
- play_episode: Step-by-step replay of a single game
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .logic_agent import LogicAgent
from .evaluator import Evaluator, EpisodeStep, play_episode

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "LogicAgent",
    "Evaluator",
    "EpisodeStep",
    "play_episode",
]
