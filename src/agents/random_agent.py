"""
Random agent for Minesweeper.

Serves as a baseline: claims random hidden cells as free and, when asked
to, marks random cells as mines along the way.
"""
from typing import Optional

import numpy as np

from minesweeper.board import BoardConfig, Intent

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that plays uniformly at random over unmarked hidden cells.

    With ``mark_probability`` 0 it only claims cells as free and can win
    only by revealing every safe cell. A positive probability lets it
    place mine marks too, which can win the game once the marks sit on
    exactly the mines. It never places more marks than there are mines,
    and never claims a marked cell as free. When only marked cells are
    left hidden it takes one of its marks back.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        mark_probability: float = 0.0,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            mark_probability: Chance of marking instead of revealing.
            seed: Random seed for reproducibility.
        """
        if not 0.0 <= mark_probability <= 1.0:
            raise ValueError(
                f"mark_probability must be in [0, 1], got {mark_probability}"
            )
        super().__init__(config or BoardConfig())
        self.mark_probability = mark_probability
        self.rng = np.random.default_rng(seed)

    def select_action(
        self, observation: np.ndarray, action_mask: np.ndarray
    ) -> int:
        """
        Pick a random mark or reveal among the allowed actions.

        Args:
            observation: 2D array of cell codes.
            action_mask: Boolean mask over the full action space.

        Returns:
            Flat action index.
        """
        can_reveal, can_mark = self.split_mask(action_mask)
        hidden = self.hidden_cells(observation)
        marked = self.marked_cells(observation)

        reveal_choices = np.flatnonzero(can_reveal & hidden)
        mark_choices = np.flatnonzero(can_mark & hidden)
        marks_left = self.config.num_mines - int(marked.sum())

        wants_mark = self.rng.random() < self.mark_probability
        if wants_mark and marks_left > 0 and len(mark_choices) > 0:
            return self._pick(mark_choices, Intent.MARK_MINE)
        if len(reveal_choices) > 0:
            return self._pick(reveal_choices, Intent.REVEAL)

        unmark_choices = np.flatnonzero(can_mark & marked)
        if len(unmark_choices) > 0:
            return self._pick(unmark_choices, Intent.MARK_MINE)

        # Nothing is playable, the game is over
        return 0

    def _pick(self, choices: np.ndarray, intent: Intent) -> int:
        return self.to_action(int(self.rng.choice(choices)), intent)
