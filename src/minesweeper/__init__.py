"""
Minesweeper game module.

Provides the board engine, the console front end and a Gymnasium
environment for agents.
"""
from .cell import Cell, CellKind, CellState, GroundTruth
from .board import Board, BoardConfig, GameState, Intent
from .errors import (
    MinesweeperError,
    InvalidConfigurationError,
    OutOfBoundsError,
    InvalidActionForPhaseError,
)
from .console import ConsoleGame, InputError, parse_move, render_table
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellKind",
    "CellState",
    "GroundTruth",
    "Board",
    "BoardConfig",
    "GameState",
    "Intent",
    "MinesweeperError",
    "InvalidConfigurationError",
    "OutOfBoundsError",
    "InvalidActionForPhaseError",
    "ConsoleGame",
    "InputError",
    "parse_move",
    "render_table",
    "MinesweeperEnv",
]
