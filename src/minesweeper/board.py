"""
Board module for Minesweeper game.

Implements the board engine: mine placement deferred until the first
reveal, hint computation, flood-fill reveal and win/loss detection.

The board keeps three row-major grids of the same geometry: the initial
mine placement, the ground-truth classification derived from it, and
the visible cells the player acts on.
"""
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, GroundTruth
from .errors import (
    InvalidActionForPhaseError,
    InvalidConfigurationError,
    OutOfBoundsError,
)


VisibleGrid = List[str]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    ONGOING = auto()
    WON = auto()
    LOST = auto()


class Intent(Enum):
    """What the player claims about a cell."""

    MARK_MINE = auto()
    REVEAL = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        columns: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 9
    columns: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.columns < 1:
            raise InvalidConfigurationError("Board dimensions must be positive")
        if self.num_mines <= 0 or self.num_mines >= self.total_cells:
            raise InvalidConfigurationError(
                "Number of mines can be only less than total cells "
                f"({self.total_cells}) and greater than zero"
            )

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Before the first reveal the board is a placeholder on which cells can
    only be flagged. The first reveal generates the layout so that the
    revealed cell has no adjacent mines, then the game proceeds until
    every mine is marked, every safe cell is revealed, or a mine is
    revealed.

    Attributes:
        config: Board geometry and mine count.
        rng: Random source with a ``randrange(n)`` method, used for mine
            placement. Defaults to a fresh ``random.Random()``.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: Any = field(default=None, repr=False)
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _placement: List[bool] = field(default_factory=list, repr=False)
    _truth: List[GroundTruth] = field(default_factory=list, repr=False)
    _mine_indices: Tuple[int, ...] = ()
    _free_indices: Tuple[int, ...] = ()
    _hint_indices: Tuple[int, ...] = ()
    _game_state: GameState = GameState.ONGOING
    _started: bool = False

    def __post_init__(self) -> None:
        """Initialize the grids after dataclass creation."""
        if self.rng is None:
            self.rng = random.Random()
        self._init_cells()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_cells(self) -> None:
        """Create an all-hidden visible grid."""
        self._cells = [Cell() for _ in range(self.config.total_cells)]

    def _check_safe_zone(self, first_index: int) -> None:
        """Ensure the mines fit outside the first cell and its neighbors."""
        safe_zone = 1 + len(self.neighbors(first_index))
        available = self.config.total_cells - safe_zone
        if self.config.num_mines > available:
            raise InvalidConfigurationError(
                f"Cannot place {self.config.num_mines} mines with no mine "
                f"next to cell {first_index} (room for {available})"
            )

    def _place_mines(self, first_index: int) -> None:
        """
        Place mines randomly, keeping ``first_index`` free of neighbors.

        Each draw that lands on the first cell or an existing mine is
        redrawn. A mine that ends up next to the first cell is taken back
        and placed again.
        """
        total = self.config.total_cells
        placement = [False] * total
        mines_left = self.config.num_mines
        while mines_left > 0:
            candidate = self.rng.randrange(total)
            if candidate == first_index or placement[candidate]:
                continue
            placement[candidate] = True
            mines_left -= 1
            if self._count_adjacent_mines(placement, first_index) > 0:
                placement[candidate] = False
                mines_left += 1
        self._placement = placement

    def _count_adjacent_mines(self, placement: List[bool], index: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(1 for neighbor in self.neighbors(index) if placement[neighbor])

    def _calculate_ground_truth(self) -> None:
        """Classify every cell and cache the mine, free and hint sets."""
        self._truth = [
            GroundTruth.classify(
                is_mine, self._count_adjacent_mines(self._placement, index)
            )
            for index, is_mine in enumerate(self._placement)
        ]
        self._mine_indices = tuple(
            i for i, truth in enumerate(self._truth) if truth.is_mine
        )
        self._free_indices = tuple(
            i for i, truth in enumerate(self._truth) if truth.is_free
        )
        self._hint_indices = tuple(
            i for i, truth in enumerate(self._truth) if truth.is_hint
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def position_of(self, index: int) -> Tuple[int, int]:
        """Convert flat index to (row, col) position."""
        return divmod(index, self.config.columns)

    def index_of(self, row: int, col: int) -> int:
        """Convert (row, col) position to flat index."""
        return row * self.config.columns + col

    def neighbors(self, index: int) -> List[int]:
        """
        Get indices of the up to eight cells around ``index``.

        Args:
            index: Flat index of center cell.

        Returns:
            Neighbor indices, clipped at the grid edges.
        """
        row, col = self.position_of(index)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append(self.index_of(new_row, new_col))
        return neighbors

    def orthogonal_neighbors(self, index: int) -> List[int]:
        """Get indices of the north, south, east and west neighbors."""
        row, col = self.position_of(index)
        neighbors = []
        for delta_row, delta_col in ((-1, 0), (1, 0), (0, 1), (0, -1)):
            new_row = row + delta_row
            new_col = col + delta_col
            if self._is_valid_position(new_row, new_col):
                neighbors.append(self.index_of(new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.columns

    def _is_valid_index(self, index: int) -> bool:
        return 0 <= index < self.config.total_cells

    def _check_index(self, index: int) -> None:
        if not self._is_valid_index(index):
            raise OutOfBoundsError(
                f"Cell index {index} is outside [0, {self.config.total_cells})"
            )

    def _require_started(self, action: str) -> None:
        if not self._started:
            raise InvalidActionForPhaseError(
                f"Cannot {action} before the first cell is revealed"
            )

    def _require_playing(self) -> None:
        if self._game_state != GameState.ONGOING:
            raise InvalidActionForPhaseError(
                f"Game is already over ({self._game_state.name})"
            )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def toggle_flag(self, index: int) -> VisibleGrid:
        """
        Toggle a mine flag on the placeholder board.

        Only valid before the first reveal. Flags set here are discarded
        when the game starts.

        Returns:
            The visible grid.
        """
        self._check_index(index)
        if self._started:
            raise InvalidActionForPhaseError(
                "Flags can only be toggled before the first reveal; "
                "use toggle_mine_mark once the game has started"
            )
        self._cells[index].toggle_flag()
        return self.visible_grid()

    def start_game(self, first_index: int) -> Tuple[VisibleGrid, GameState]:
        """
        Generate the layout around the player's first free cell.

        The first cell is guaranteed to be free with no adjacent mines.
        All pre-game flags are cleared before the cell is revealed.

        Args:
            first_index: Cell the player first claimed as free.

        Returns:
            Tuple of (visible grid, game state).
        """
        self._check_index(first_index)
        if self._started:
            raise InvalidActionForPhaseError("Game has already started")
        self._check_safe_zone(first_index)

        self._place_mines(first_index)
        self._calculate_ground_truth()
        self._started = True
        self._init_cells()
        return self.reveal(first_index)

    def reveal(self, index: int) -> Tuple[VisibleGrid, GameState]:
        """
        Claim a cell as free.

        A hint cell shows its count. A free cell reveals the whole
        orthogonally connected free region together with its hint border.
        A mine loses the game and shows every mine. Revealing a cell that
        is already revealed changes nothing.

        Returns:
            Tuple of (visible grid, game state).
        """
        self._check_index(index)
        self._require_started("reveal a cell")
        self._require_playing()

        cell = self._cells[index]
        truth = self._truth[index]
        if cell.is_revealed:
            return self.visible_grid(), self._game_state

        if truth.is_mine:
            self._reveal_all_mines()
            self._game_state = GameState.LOST
        elif truth.is_hint:
            cell.reveal(truth)
        else:
            self._flood_fill(index)

        self._check_win_condition()
        return self.visible_grid(), self._game_state

    def _flood_fill(self, start: int) -> None:
        """Reveal the free region around ``start`` and its hint border."""
        stack = [start]
        while stack:
            index = stack.pop()
            truth = self._truth[index]
            cell = self._cells[index]
            if truth.is_hint:
                cell.reveal(truth)
            elif truth.is_free and cell.state != CellState.REVEALED_FREE:
                cell.reveal(truth)
                stack.extend(self.orthogonal_neighbors(index))

    def _reveal_all_mines(self) -> None:
        for index in self._mine_indices:
            self._cells[index].reveal(self._truth[index])

    def toggle_mine_mark(self, index: int) -> Tuple[VisibleGrid, GameState]:
        """
        Toggle a mine mark once the game has started.

        Marking never loses the game and reveals nothing. Marks on
        revealed cells are ignored.

        Returns:
            Tuple of (visible grid, game state).
        """
        self._check_index(index)
        self._require_started("mark a mine")
        self._require_playing()

        self._cells[index].toggle_flag()
        self._check_win_condition()
        return self.visible_grid(), self._game_state

    def play(self, index: int, intent: Intent) -> Tuple[VisibleGrid, GameState]:
        """
        Apply a player move, picking the action for the current phase.

        Before the first reveal, marking toggles a placeholder flag and
        revealing starts the game. Afterwards, marking toggles a mine mark
        and revealing reveals.

        Returns:
            Tuple of (visible grid, game state).
        """
        if not self._started:
            if intent == Intent.MARK_MINE:
                return self.toggle_flag(index), self._game_state
            return self.start_game(index)
        if intent == Intent.MARK_MINE:
            return self.toggle_mine_mark(index)
        return self.reveal(index)

    def _check_win_condition(self) -> None:
        """Mark the game won if either winning condition holds."""
        if self._game_state != GameState.ONGOING:
            return
        if self._all_mines_marked() or self._all_safe_cells_revealed():
            self._game_state = GameState.WON

    def _all_mines_marked(self) -> bool:
        """Check that the flagged cells are exactly the mines."""
        flagged = {i for i, cell in enumerate(self._cells) if cell.is_flagged}
        return flagged == set(self._mine_indices)

    def _all_safe_cells_revealed(self) -> bool:
        """Check that every free and hint cell is revealed."""
        return all(
            self._cells[i].state == CellState.REVEALED_FREE
            for i in self._free_indices
        ) and all(
            self._cells[i].state == CellState.REVEALED_HINT
            for i in self._hint_indices
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_started(self) -> bool:
        """Check if the layout has been generated."""
        return self._started

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.ONGOING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def mine_indices(self) -> Tuple[int, ...]:
        """Indices of mine cells, empty before the game starts."""
        return self._mine_indices

    @property
    def free_indices(self) -> Tuple[int, ...]:
        return self._free_indices

    @property
    def hint_indices(self) -> Tuple[int, ...]:
        return self._hint_indices

    def get_cell(self, index: int) -> Optional[Cell]:
        """Get visible cell at index, or None if invalid."""
        if not self._is_valid_index(index):
            return None
        return self._cells[index]

    def ground_truth(self, index: int) -> Optional[GroundTruth]:
        """Get the classification at index, or None before the layout exists."""
        if not self._started or not self._is_valid_index(index):
            return None
        return self._truth[index]

    def visible_grid(self) -> VisibleGrid:
        """
        Get the display symbol of every cell in row-major order.

        Returns:
            List of ``rows * columns`` single-character strings.
        """
        return [cell.to_symbol() for cell in self._cells]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for agents.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.array(
            [cell.to_observation() for cell in self._cells], dtype=np.int8
        )
        return obs.reshape(self.config.rows, self.config.columns)

    def get_valid_moves(self) -> List[Tuple[int, Intent]]:
        """
        Get moves that would change the board.

        Returns:
            List of (index, intent) pairs, empty once the game is over.
        """
        if not self.is_playing:
            return []
        moves = []
        for index, cell in enumerate(self._cells):
            if not cell.is_revealed:
                moves.append((index, Intent.REVEAL))
                moves.append((index, Intent.MARK_MINE))
        return moves

    def reset(self, rng: Any = None) -> None:
        """Reset board to the placeholder state for a new game."""
        if rng is not None:
            self.rng = rng
        self._init_cells()
        self._placement = []
        self._truth = []
        self._mine_indices = ()
        self._free_indices = ()
        self._hint_indices = ()
        self._game_state = GameState.ONGOING
        self._started = False
