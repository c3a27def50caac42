"""
Post-game review for TicTacToe.
A read-only cursor over the move log of a finished game.
"""

from typing import Iterable, Optional, Tuple

from .board import EMPTY_BOARD, Board
from .errors import EmptyHistory
from .timeline import MoveRecord


class ReplayNavigator:
    """
    Walks the move log one move at a time.

    Index -1 is the start of the game (empty board); index i shows the
    board right after log[i]. The navigator keeps its own copy of the log
    and never changes the timeline it came from.
    """

    def __init__(self, log: Iterable[MoveRecord]):
        self.log: Tuple[MoveRecord, ...] = tuple(log)
        self.index = -1

    def __len__(self) -> int:
        return len(self.log)

    @property
    def can_step_forward(self) -> bool:
        return self.index < len(self.log) - 1

    @property
    def can_step_backward(self) -> bool:
        return self.index > -1

    @property
    def current_record(self) -> Optional[MoveRecord]:
        if self.index < 0:
            return None
        return self.log[self.index]

    @property
    def board(self) -> Board:
        """The board at the cursor."""
        record = self.current_record
        return record.board if record is not None else EMPTY_BOARD

    def step_forward(self) -> Board:
        """
        Show the next move.

        Raises:
            EmptyHistory: If the cursor is already on the last move.
        """
        if not self.can_step_forward:
            raise EmptyHistory("Already at the last move")
        self.index += 1
        return self.board

    def step_backward(self) -> Board:
        """
        Show the previous move, or the empty board before the first one.

        Raises:
            EmptyHistory: If the cursor is already at the start.
        """
        if not self.can_step_backward:
            raise EmptyHistory("Already at the start of the game")
        self.index -= 1
        return self.board

    def describe(self) -> str:
        """Status line for the cursor position."""
        record = self.current_record
        if record is None:
            return "Start of game"
        return f"Move {self.index + 1} of {len(self.log)} - {record.mark.value} played"
