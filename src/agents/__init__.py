"""
Minesweeper agents module.

Provides agents that play through MinesweeperEnv and a way to score them:
- BaseAgent: Action layout and observation helpers
- RandomAgent: Random reveals, optionally with random mine marks
- Evaluator: Outcomes per win rule over many episodes
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .evaluator import EpisodeStats, EvaluationStats, Evaluator, Outcome

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "Evaluator",
    "EvaluationStats",
    "EpisodeStats",
    "Outcome",
]
