"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over the board engine.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, Intent
from .console import render_table
from .errors import MinesweeperError


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * rows * columns.
        Action a < rows * columns claims cell a as free; larger actions
        toggle a mine mark on cell a - rows * columns.

    Rewards:
        - +1 for a reveal that uncovers new cells
        - +10 for winning the game
        - -10 for revealing a mine
        - 0 for toggling a mark
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode
        self._total_cells = self.config.total_cells

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.columns),
            dtype=np.int8,
        )

        # One reveal action and one mark action per cell
        self.action_space = spaces.Discrete(2 * self._total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        # Mine placement draws from the env seed stream
        self.board.reset(
            rng=random.Random(int(self.np_random.integers(2**32)))
        )
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index, see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        index, intent = self.action_to_move(action)
        self._steps += 1

        reward = self._apply_move(index, intent)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def action_to_move(self, action: int) -> Tuple[int, Intent]:
        """Convert flat action index to (cell index, intent)."""
        if action < self._total_cells:
            return int(action), Intent.REVEAL
        return int(action) - self._total_cells, Intent.MARK_MINE

    def move_to_action(self, index: int, intent: Intent) -> int:
        """Convert (cell index, intent) to flat action index."""
        if intent == Intent.REVEAL:
            return index
        return index + self._total_cells

    def _apply_move(self, index: int, intent: Intent) -> float:
        """
        Play a move on the board and score it.

        Args:
            index: Cell index.
            intent: Reveal or mark.

        Returns:
            Reward value.
        """
        before = self.board.visible_grid()
        try:
            grid, _ = self.board.play(index, intent)
        except MinesweeperError:
            return -0.1

        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        if grid == before:
            return -0.1
        if intent == Intent.MARK_MINE:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(
            1 for index in range(self._total_cells)
            if self.board.get_cell(index).is_revealed
        )

        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._total_cells - self.config.num_mines,
            "game_state": self.board.game_state.name,
            "valid_actions": len(self.board.get_valid_moves()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as a numbered table."""
        return render_table(self.board.visible_grid(), self.config.columns)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for index, intent in self.board.get_valid_moves():
            mask[self.move_to_action(index, intent)] = True
        return mask
