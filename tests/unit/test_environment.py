"""
Unit tests for MinesweeperEnv.

Tests spaces, action mapping, rewards and masking.
"""
import numpy as np
import pytest
from minesweeper import BoardConfig, Intent, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    """3x3 environment with one mine and ansi rendering."""
    return MinesweeperEnv(BoardConfig(3, 3, 1), render_mode="ansi")


def reset_with_mine(env: MinesweeperEnv, scripted_random, mine: int) -> np.ndarray:
    """Reset the environment so the single mine lands on ``mine``."""
    observation, _ = env.reset(seed=0)
    env.board.rng = scripted_random([mine])
    return observation


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_reveal_and_mark(self, env: MinesweeperEnv) -> None:
        """Each cell has a reveal action and a mark action."""
        assert env.action_space.n == 18

    def test_reset_observation_all_hidden(self, env: MinesweeperEnv) -> None:
        """Reset returns an all-hidden observation in the space."""
        observation, info = env.reset(seed=1)
        assert observation.shape == (3, 3)
        assert np.all(observation == -1)
        assert env.observation_space.contains(observation)
        assert info["game_state"] == "ONGOING"
        assert info["total_safe"] == 8

    @pytest.mark.parametrize(
        "action, move",
        [(0, (0, Intent.REVEAL)), (8, (8, Intent.REVEAL)),
         (9, (0, Intent.MARK_MINE)), (17, (8, Intent.MARK_MINE))],
    )
    def test_action_mapping(self, env: MinesweeperEnv, action, move) -> None:
        """Actions split into reveal and mark halves."""
        assert env.action_to_move(action) == move
        assert env.move_to_action(*move) == action


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_opening_that_solves_board_wins(
        self, env: MinesweeperEnv, scripted_random
    ) -> None:
        """Revealing every safe cell at once ends the episode with +10."""
        reset_with_mine(env, scripted_random, 8)
        _, reward, terminated, truncated, info = env.step(0)
        assert reward == 10.0
        assert terminated is True
        assert truncated is False
        assert info["game_state"] == "WON"
        assert info["revealed"] == 8

    def test_safe_reveal_rewards_progress(
        self, env: MinesweeperEnv, scripted_random
    ) -> None:
        """A reveal that uncovers cells earns +1."""
        reset_with_mine(env, scripted_random, 5)
        observation, reward, terminated, _, _ = env.step(0)
        assert reward == 1.0
        assert terminated is False
        assert observation[0, 0] == 0
        assert observation[1, 2] == -1

    def test_repeated_reveal_is_penalized(
        self, env: MinesweeperEnv, scripted_random
    ) -> None:
        """A reveal that changes nothing costs -0.1."""
        reset_with_mine(env, scripted_random, 5)
        env.step(0)
        _, reward, _, _, _ = env.step(0)
        assert reward == pytest.approx(-0.1)

    def test_marking_the_mine_wins(
        self, env: MinesweeperEnv, scripted_random
    ) -> None:
        """Marking the only mine wins."""
        reset_with_mine(env, scripted_random, 5)
        env.step(0)
        _, reward, terminated, _, info = env.step(9 + 5)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_revealing_mine_loses(
        self, env: MinesweeperEnv, scripted_random
    ) -> None:
        """Revealing the mine ends the episode with -10."""
        reset_with_mine(env, scripted_random, 5)
        env.step(0)
        observation, reward, terminated, _, info = env.step(5)
        assert reward == -10.0
        assert terminated is True
        assert observation[1, 2] == 9
        assert info["game_state"] == "LOST"

    def test_pre_game_mark_is_neutral(self, env: MinesweeperEnv) -> None:
        """Marking before the first reveal earns nothing."""
        env.reset(seed=0)
        observation, reward, terminated, _, _ = env.step(9 + 4)
        assert reward == 0.0
        assert terminated is False
        assert observation[1, 1] == -2

    def test_action_after_game_over_is_penalized(
        self, env: MinesweeperEnv, scripted_random
    ) -> None:
        """Moves rejected by the board cost -0.1."""
        reset_with_mine(env, scripted_random, 5)
        env.step(0)
        env.step(5)
        _, reward, terminated, _, _ = env.step(2)
        assert reward == pytest.approx(-0.1)
        assert terminated is True


# ============================================================================
# Mask and Render Tests
# ============================================================================

class TestMaskAndRender:
    """Test action masks and rendering."""

    def test_new_episode_mask_all_valid(self, env: MinesweeperEnv) -> None:
        """Every action is valid before the first move."""
        env.reset(seed=0)
        assert env.get_action_mask().all()

    def test_mask_excludes_revealed_cells(
        self, env: MinesweeperEnv, scripted_random
    ) -> None:
        """Revealed cells can no longer be revealed or marked."""
        reset_with_mine(env, scripted_random, 5)
        env.step(0)
        mask = env.get_action_mask()
        assert not mask[0]
        assert not mask[9 + 0]
        assert mask[2]
        assert mask[9 + 2]
        assert mask.sum() == 6

    def test_ansi_render_is_table(self, env: MinesweeperEnv) -> None:
        """ANSI rendering returns the console table."""
        env.reset(seed=0)
        assert env.render().splitlines()[0] == " |123|"


# ============================================================================
# Seeding Tests
# ============================================================================

class TestSeeding:
    """Test that mine placement follows the environment seed."""

    @staticmethod
    def layouts(seed: int, episodes: int):
        env = MinesweeperEnv(BoardConfig(8, 8, 10))
        env.reset(seed=seed)
        found = []
        for _ in range(episodes):
            env.step(27)
            found.append(env.board.mine_indices)
            env.reset()
        return found

    def test_same_seed_same_layouts(self) -> None:
        """Seeded and follow-up unseeded resets repeat for the same seed."""
        assert self.layouts(3, 3) == self.layouts(3, 3)

    def test_unseeded_resets_draw_new_layouts(self) -> None:
        """Each reset without a seed continues the seeded stream."""
        first, second, third = self.layouts(3, 3)
        assert len({first, second, third}) > 1
