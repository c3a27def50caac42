"""
Board model for TicTacToe.
Holds the 3x3 grid, validates moves and detects wins and draws.

A board is a tuple of 9 cells in row-major order (index 0 is top-left,
index 8 is bottom-right). Each cell is a Mark or None when empty.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidMove


class Mark(Enum):
    """The two marks a move can place."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the other mark."""
        return Mark.O if self == Mark.X else Mark.X


Board = Tuple[Optional[Mark], ...]

BOARD_CELLS = 9

EMPTY_BOARD: Board = (None,) * BOARD_CELLS

# All possible winning lines as cell indices
WIN_LINES = np.array([
    # Rows
    [0, 1, 2],
    [3, 4, 5],
    [6, 7, 8],
    # Columns
    [0, 3, 6],
    [1, 4, 7],
    [2, 5, 8],
    # Diagonals
    [0, 4, 8],
    [2, 4, 6],
], dtype=np.intp)

# Cell encoding used for line sums
_CELL_VALUES = {None: 0, Mark.X: 1, Mark.O: -1}


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


def _encode(board: Board) -> np.ndarray:
    return np.fromiter((_CELL_VALUES[cell] for cell in board), dtype=np.int8, count=BOARD_CELLS)


def _winning_line_index(board: Board) -> Optional[int]:
    sums = _encode(board)[WIN_LINES].sum(axis=1)
    full = np.flatnonzero(np.abs(sums) == 3)
    if full.size == 0:
        return None
    return int(full[0])


def validate_move(board: Board, index: int) -> ValidationResult:
    """
    Validate a move.

    Args:
        board: Current board.
        index: Cell to place a mark on (0-8).

    Returns:
        ValidationResult with is_valid and error_message.
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid cell {index!r}. Must be an integer 0-8."
        )

    if not 0 <= index < BOARD_CELLS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid cell {index}. Must be 0-8."
        )

    if board[index] is not None:
        return ValidationResult(
            is_valid=False,
            error_message=f"Cell {index} is already occupied by {board[index].value}"
        )

    return ValidationResult(is_valid=True)


def apply_move(board: Board, index: int, mark: Mark) -> Board:
    """
    Place a mark and return the new board.

    The given board is never modified.

    Raises:
        InvalidMove: If the index is out of range or the cell is taken.
    """
    result = validate_move(board, index)
    if not result.is_valid:
        raise InvalidMove(result.error_message)

    index = int(index)
    return board[:index] + (mark,) + board[index + 1:]


def winner(board: Board) -> Optional[Mark]:
    """
    Check if there's a winner.

    Lines are checked rows first, then columns, then diagonals.

    Returns:
        The winning Mark, or None if no line is complete.
    """
    line = _winning_line_index(board)
    if line is None:
        return None
    return board[int(WIN_LINES[line][0])]


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    """Get the completed line as three cell indices, or None."""
    line = _winning_line_index(board)
    if line is None:
        return None
    return tuple(int(i) for i in WIN_LINES[line])


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def empty_cells(board: Board) -> Tuple[int, ...]:
    """Get the indices of all empty cells, ascending."""
    return tuple(i for i, cell in enumerate(board) if cell is None)


def is_terminal(board: Board) -> bool:
    """True if someone has won or no cell is left."""
    return winner(board) is not None or is_full(board)


def board_from_string(text: str) -> Board:
    """
    Build a board from 9 characters, e.g. "XX.OO....".

    Any character other than X or O (case-insensitive) is an empty cell.
    Whitespace is ignored.
    """
    chars = [c for c in text if not c.isspace()]
    if len(chars) != BOARD_CELLS:
        raise ValueError(f"Expected {BOARD_CELLS} cells, got {len(chars)}")

    cells = []
    for c in chars:
        c = c.upper()
        if c == "X":
            cells.append(Mark.X)
        elif c == "O":
            cells.append(Mark.O)
        else:
            cells.append(None)
    return tuple(cells)


def render_board(board: Board) -> str:
    """Draw the board for the console. Empty cells show their number (1-9)."""
    rows = []
    for row in range(3):
        cells = []
        for col in range(3):
            index = row * 3 + col
            cell = board[index]
            cells.append(cell.value if cell is not None else str(index + 1))
        rows.append(" " + " | ".join(cells))
    return "\n---+---+---\n".join(rows)
