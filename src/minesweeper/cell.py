"""
Cell module for Minesweeper game.

Separates what a cell really is (mine, hint or free) from what the
player currently sees of it (hidden, flagged or revealed).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

HIDDEN_SYMBOL = "."
FLAG_SYMBOL = "*"
FREE_SYMBOL = "/"
MINE_SYMBOL = "X"


class CellKind(Enum):
    """Ground-truth classification of a cell."""

    MINE = auto()
    HINT = auto()
    FREE = auto()


class CellState(Enum):
    """Possible visible states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED_FREE = auto()
    REVEALED_HINT = auto()
    REVEALED_MINE = auto()


# ============================================================================
# Ground Truth
# ============================================================================

@dataclass(frozen=True)
class GroundTruth:
    """
    Immutable classification of a cell once the layout exists.

    Attributes:
        kind: Mine, hint or free.
        hint: Adjacent mine count (1-8) for hint cells, 0 otherwise.
    """

    kind: CellKind
    hint: int = 0

    @classmethod
    def classify(cls, is_mine: bool, adjacent_mines: int) -> "GroundTruth":
        """Build the classification from placement and adjacency count."""
        if is_mine:
            return cls(CellKind.MINE)
        if adjacent_mines > 0:
            return cls(CellKind.HINT, adjacent_mines)
        return cls(CellKind.FREE)

    @property
    def is_mine(self) -> bool:
        return self.kind == CellKind.MINE

    @property
    def is_hint(self) -> bool:
        return self.kind == CellKind.HINT

    @property
    def is_free(self) -> bool:
        return self.kind == CellKind.FREE


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Visible state of a single cell in the Minesweeper grid.

    Attributes:
        state: Current visible state.
        hint: Adjacent mine count shown once a hint cell is revealed.
    """

    state: CellState = CellState.HIDDEN
    hint: int = 0

    def toggle_flag(self) -> bool:
        """
        Toggle the mine mark on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.is_revealed:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def reveal(self, truth: GroundTruth) -> bool:
        """
        Show the ground truth of this cell.

        Flags are overwritten. Returns False if the cell was already
        revealed.
        """
        if self.is_revealed:
            return False
        if truth.is_mine:
            self.state = CellState.REVEALED_MINE
        elif truth.is_hint:
            self.state = CellState.REVEALED_HINT
            self.hint = truth.hint
        else:
            self.state = CellState.REVEALED_FREE
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_revealed(self) -> bool:
        """Check if cell shows its ground truth."""
        return self.state in (
            CellState.REVEALED_FREE,
            CellState.REVEALED_HINT,
            CellState.REVEALED_MINE,
        )

    def to_symbol(self) -> str:
        """
        Convert cell to its display symbol.

        Returns:
            '.' hidden, '*' flagged, '/' free, '1'-'8' hint, 'X' mine.
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_SYMBOL
        if self.state == CellState.FLAGGED:
            return FLAG_SYMBOL
        if self.state == CellState.REVEALED_FREE:
            return FREE_SYMBOL
        if self.state == CellState.REVEALED_HINT:
            return str(self.hint)
        return MINE_SYMBOL

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.state == CellState.REVEALED_MINE:
            return 9
        if self.state == CellState.REVEALED_HINT:
            return self.hint
        return 0
