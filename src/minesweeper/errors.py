"""
Exception types raised by the Minesweeper engine.

Every engine rejection happens before any state is mutated, so callers
can recover by asking the player for a different move.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidConfigurationError(MinesweeperError, ValueError):
    """Board dimensions or mine count cannot produce a playable game."""


class OutOfBoundsError(MinesweeperError, IndexError):
    """A cell index lies outside the grid."""


class InvalidActionForPhaseError(MinesweeperError, RuntimeError):
    """The action is not allowed at the current stage of the game."""
