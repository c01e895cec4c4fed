"""
Evaluation of Minesweeper agents.

Plays a fixed number of episodes through MinesweeperEnv and tallies how
each one ended. A game is won either by marking exactly the mines or by
revealing every safe cell, so wins are counted per rule.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

import numpy as np

from minesweeper.board import BoardConfig
from minesweeper.environment import MinesweeperEnv

from .base_agent import BaseAgent


# ============================================================================
# Statistics
# ============================================================================

class Outcome(Enum):
    """How an episode ended."""

    WON_BY_REVEALS = auto()
    WON_BY_MARKS = auto()
    LOST = auto()
    UNFINISHED = auto()


@dataclass
class EpisodeStats:
    """Statistics for a single episode."""

    outcome: Outcome = Outcome.UNFINISHED
    total_reward: float = 0.0
    steps: int = 0
    revealed_cells: int = 0


@dataclass
class EvaluationStats:
    """Accumulated statistics over all evaluated episodes."""

    episodes: List[EpisodeStats] = field(default_factory=list)

    def count(self, outcome: Outcome) -> int:
        return sum(1 for episode in self.episodes if episode.outcome == outcome)

    def _mean(self, values: List[float]) -> float:
        return float(np.mean(values)) if values else 0.0

    @property
    def win_rate(self) -> float:
        """Fraction of episodes won by either rule."""
        if not self.episodes:
            return 0.0
        wins = self.count(Outcome.WON_BY_REVEALS) + self.count(Outcome.WON_BY_MARKS)
        return wins / len(self.episodes)

    @property
    def avg_reward(self) -> float:
        return self._mean([e.total_reward for e in self.episodes])

    @property
    def avg_steps(self) -> float:
        return self._mean([e.steps for e in self.episodes])

    @property
    def avg_revealed(self) -> float:
        return self._mean([e.revealed_cells for e in self.episodes])

    def to_dict(self) -> Dict[str, float]:
        """Summary metrics, one entry per outcome plus averages."""
        summary: Dict[str, float] = {
            outcome.name.lower(): self.count(outcome) for outcome in Outcome
        }
        summary.update(
            win_rate=self.win_rate,
            avg_reward=self.avg_reward,
            avg_steps=self.avg_steps,
            avg_revealed=self.avg_revealed,
        )
        return summary


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """Run an agent for many episodes on one board configuration."""

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: int = 500,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Episodes still running after this many steps
                count as unfinished.
            seed: Seed for the first episode; later episodes continue
                the environment's stream.
        """
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> EvaluationStats:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Per-episode statistics and their aggregates.
        """
        env = MinesweeperEnv(config=self.board_config)
        stats = EvaluationStats()

        for episode in range(self.num_episodes):
            observation, _ = env.reset(seed=self.seed if episode == 0 else None)
            agent.reset()
            stats.episodes.append(self.play_episode(env, agent, observation))

        return stats

    def play_episode(
        self,
        env: MinesweeperEnv,
        agent: BaseAgent,
        observation: np.ndarray,
    ) -> EpisodeStats:
        """Play one episode from a freshly reset environment."""
        episode = EpisodeStats()

        for _ in range(self.max_steps):
            action = agent.select_action(observation, env.get_action_mask())
            observation, reward, terminated, truncated, info = env.step(action)
            episode.total_reward += float(reward)
            episode.steps += 1
            episode.revealed_cells = info["revealed"]

            if terminated or truncated:
                episode.outcome = self.classify(info["game_state"], observation)
                break

        return episode

    def classify(self, game_state: str, observation: np.ndarray) -> Outcome:
        """
        Tell which rule ended a finished game.

        A win with only the mines left unrevealed counts as a win by
        reveals, even if the marks are also exactly on the mines.
        """
        if game_state == "LOST":
            return Outcome.LOST
        if game_state != "WON":
            return Outcome.UNFINISHED
        unrevealed = int(np.count_nonzero(observation < 0))
        if unrevealed == self.board_config.num_mines:
            return Outcome.WON_BY_REVEALS
        return Outcome.WON_BY_MARKS
