"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, List

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell


# ============================================================================
# Deterministic Random Source
# ============================================================================

class ScriptedRandom:
    """Random source that returns a fixed sequence of draws."""

    def __init__(self, draws: Iterable[int]) -> None:
        self.draws: List[int] = list(draws)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        assert self.calls < len(self.draws), "ran out of scripted draws"
        value = self.draws[self.calls]
        self.calls += 1
        assert 0 <= value < stop
        return value


@pytest.fixture
def scripted_random() -> Callable[[Iterable[int]], ScriptedRandom]:
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory for boards whose mines land on the given draws."""
    def factory(
        rows: int, columns: int, mines: int, draws: Iterable[int]
    ) -> Board:
        return Board(BoardConfig(rows, columns, mines), ScriptedRandom(draws))
    return factory


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board()


@pytest.fixture
def small_board(make_board) -> Board:
    """
    3x3 board whose single mine lands on index 8.

        . . .
        . 1 1
        . 1 *
    """
    return make_board(3, 3, 1, [8])


@pytest.fixture
def strip_board(make_board) -> Board:
    """
    1x5 board with a mine in the middle.

        . 1 * 1 .
    """
    return make_board(1, 5, 1, [2])


@pytest.fixture
def two_mine_board(make_board) -> Board:
    """
    3x4 board with mines on the right edge.

        . . 1 *
        . . 2 2
        . . 1 *
    """
    return make_board(3, 4, 2, [3, 11])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
