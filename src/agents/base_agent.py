"""
Base agent interface for playing Minesweeper through MinesweeperEnv.

An agent sees the observation and the action mask and answers with one
flat action: a claim that a cell is free, or a toggle of a mine mark.
"""
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from minesweeper.board import BoardConfig, Intent

# Observation codes, see Cell.to_observation
HIDDEN = -1
MARKED = -2


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    Actions follow MinesweeperEnv: the first ``rows * columns`` actions
    claim a cell as free, the rest toggle a mine mark.
    """

    def __init__(self, config: BoardConfig) -> None:
        self.config = config
        self.total_cells = config.total_cells

    @abstractmethod
    def select_action(
        self, observation: np.ndarray, action_mask: np.ndarray
    ) -> int:
        """
        Choose the next action.

        Args:
            observation: 2D array of cell codes.
            action_mask: Boolean mask over the full action space.

        Returns:
            Flat action index.
        """

    def to_action(self, index: int, intent: Intent) -> int:
        """Convert (cell index, intent) to a flat action index."""
        if intent == Intent.REVEAL:
            return index
        return index + self.total_cells

    def to_move(self, action: int) -> Tuple[int, Intent]:
        """Convert a flat action index to (cell index, intent)."""
        if action < self.total_cells:
            return action, Intent.REVEAL
        return action - self.total_cells, Intent.MARK_MINE

    def split_mask(
        self, action_mask: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Split the action mask into its reveal half and its mark half."""
        return action_mask[:self.total_cells], action_mask[self.total_cells:]

    @staticmethod
    def hidden_cells(observation: np.ndarray) -> np.ndarray:
        """Flat mask of cells that are hidden and not marked."""
        return observation.ravel() == HIDDEN

    @staticmethod
    def marked_cells(observation: np.ndarray) -> np.ndarray:
        """Flat mask of cells that carry a mine mark."""
        return observation.ravel() == MARKED

    def reset(self) -> None:
        """Forget per-episode state."""
