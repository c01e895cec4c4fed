"""
Console front end for the Minesweeper board.

Renders the visible grid as a numbered table, turns typed moves into
(index, intent) pairs and runs the prompt loop until the game ends.
"""
from typing import Callable, List, Sequence, Tuple

from .board import Board, GameState, Intent
from .errors import InvalidConfigurationError


# ============================================================================
# Messages
# ============================================================================

MINE_COUNT_PROMPT = "How many mines do you want on the field? "
MOVE_PROMPT = "Set/unset mines marks or claim a cell as free: "
INPUT_ERROR = "Input is not correct, please try again . . ."
WRONG_COLUMN = "Column is not correct, please try again"
WRONG_ROW = "Row is not correct, please try again"
WRONG_STATE = "State is not correct, please try again"
OUT_OF_BOUNDS = "Index is out of bounds, please select an appropriate index!"
WIN_MESSAGE = "Congratulations! You found all mines!"
LOSS_MESSAGE = "You stepped on a mine and failed!"

STATE_WORDS = {
    "free": Intent.REVEAL,
    "mine": Intent.MARK_MINE,
}


class InputError(ValueError):
    """Typed input could not be turned into a move."""


# ============================================================================
# Rendering
# ============================================================================

def render_table(symbols: Sequence[str], columns: int) -> str:
    """
    Render a row-major grid of symbols as a table.

    Example for a 3x3 grid::

         |123|
        -|---|
        1|...|
        2|...|
        3|...|
        -|---|

    Args:
        symbols: One display symbol per cell.
        columns: Number of columns in the grid.

    Returns:
        The table as a multi-line string.
    """
    width = len(str(columns))
    header = " " * width + "|" + "".join(str(i) for i in range(1, columns + 1)) + "|"
    bar = "-" * width + "|" + "".join(
        "-" * len(str(i)) for i in range(1, columns + 1)
    ) + "|"

    lines = [header, bar]
    for row_number, start in enumerate(range(0, len(symbols), columns), start=1):
        row = "".join(symbols[start:start + columns])
        lines.append(f"{row_number:>{width}}|{row}|")
    lines.append(bar)
    return "\n".join(lines)


# ============================================================================
# Input Parsing
# ============================================================================

def _parse_int(token: str, message: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InputError(message) from None


def parse_mine_count(text: str) -> int:
    """Parse the answer to the mine count question."""
    tokens = text.split()
    if len(tokens) != 1:
        raise InputError(INPUT_ERROR)
    return _parse_int(tokens[0], INPUT_ERROR)


def parse_move(text: str, rows: int, columns: int) -> Tuple[int, Intent]:
    """
    Parse a move typed as ``<column> <row> <free|mine>``.

    Coordinates are 1-based and the state word is case-insensitive.

    Args:
        text: Raw input line.
        rows: Number of rows on the board.
        columns: Number of columns on the board.

    Returns:
        Tuple of (flat cell index, intent).

    Raises:
        InputError: If any part is malformed or the cell is off the board.
    """
    tokens = text.split()
    if not tokens:
        raise InputError(WRONG_COLUMN)
    col = _parse_int(tokens[0], WRONG_COLUMN)
    if len(tokens) < 2:
        raise InputError(WRONG_ROW)
    row = _parse_int(tokens[1], WRONG_ROW)
    if len(tokens) != 3 or tokens[2].lower() not in STATE_WORDS:
        raise InputError(WRONG_STATE)
    if not (1 <= col <= columns and 1 <= row <= rows):
        raise InputError(OUT_OF_BOUNDS)

    index = (row - 1) * columns + (col - 1)
    return index, STATE_WORDS[tokens[2].lower()]


def ask_mine_count(
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """Prompt until the player types a whole number of mines."""
    while True:
        try:
            return parse_mine_count(input_fn(MINE_COUNT_PROMPT))
        except InputError as exc:
            output_fn(str(exc))


# ============================================================================
# Game Loop
# ============================================================================

class ConsoleGame:
    """
    Interactive game on a text console.

    The player marks suspected mines and claims cells as free. The board
    starts for real with the first cell claimed as free; marks made
    before that are only a scratch pad.
    """

    def __init__(
        self,
        board: Board,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        """
        Initialize the console game.

        Args:
            board: Fresh board to play on.
            input_fn: Reads one line after showing a prompt.
            output_fn: Writes one line of output.
        """
        self.board = board
        self.input_fn = input_fn
        self.output_fn = output_fn

    def run(self) -> GameState:
        """
        Play until the game is won or lost.

        Returns:
            The final game state.
        """
        self.output_fn(self.render(self.board.visible_grid()))
        while self.board.is_playing:
            index, intent = self.read_move()
            try:
                grid, _ = self.board.play(index, intent)
            except InvalidConfigurationError as exc:
                # Board is untouched; another first cell may leave room
                self.output_fn(str(exc))
                continue
            self.output_fn("")
            self.output_fn(self.render(grid))

        self.output_fn(WIN_MESSAGE if self.board.is_won else LOSS_MESSAGE)
        return self.board.game_state

    def read_move(self) -> Tuple[int, Intent]:
        """Prompt until a well-formed, in-bounds move is typed."""
        while True:
            text = self.input_fn(MOVE_PROMPT)
            try:
                return parse_move(
                    text, self.board.config.rows, self.board.config.columns
                )
            except InputError as exc:
                self.output_fn(str(exc))

    def render(self, grid: List[str]) -> str:
        return render_table(grid, self.board.config.columns)
