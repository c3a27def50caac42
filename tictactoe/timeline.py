"""
Move history for TicTacToe.

Keeps three structures in step:
- undo stack: committed moves not undone, newest on top
- redo queue: undone moves, oldest-undone first
- full log: every committed move of the current game, read by review
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from .board import Board, Mark
from .errors import EmptyHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """
    One committed move.

    board is the position right after the move and random_moves_used is the
    opponent's random-move counter at that point.
    """
    index: int
    mark: Mark
    board: Board
    random_moves_used: int


class Timeline:
    """Undo stack, redo queue and full move log for one game."""

    def __init__(self):
        self.undo_stack: List[MoveRecord] = []
        self.redo_queue: Deque[MoveRecord] = deque()
        self.full_log: List[MoveRecord] = []

    @property
    def top(self) -> Optional[MoveRecord]:
        """The most recent move that has not been undone."""
        return self.undo_stack[-1] if self.undo_stack else None

    @property
    def move_count(self) -> int:
        return len(self.undo_stack)

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_queue)

    def log(self) -> Tuple[MoveRecord, ...]:
        """Read-only copy of the full move log."""
        return tuple(self.full_log)

    def commit(self, record: MoveRecord):
        """
        Record a new move.

        Any undone moves are dropped: the redo queue is cleared and the log
        is cut back to the undo point before the record is appended.
        """
        del self.full_log[len(self.undo_stack):]
        self.undo_stack.append(record)
        self.full_log.append(record)
        if self.redo_queue:
            logger.debug("Discarding %d undone move(s)", len(self.redo_queue))
        self.redo_queue.clear()

    def undo(self) -> MoveRecord:
        """
        Take back the newest move.

        Returns:
            The record that was undone.

        Raises:
            EmptyHistory: If there is nothing to undo.
        """
        if not self.undo_stack:
            raise EmptyHistory("Nothing to undo")

        record = self.undo_stack.pop()
        self.redo_queue.append(record)
        self.full_log.pop()
        return record

    def redo(self) -> MoveRecord:
        """
        Replay the oldest undone move.

        Returns:
            The record that was redone.

        Raises:
            EmptyHistory: If there is nothing to redo.
        """
        if not self.redo_queue:
            raise EmptyHistory("Nothing to redo")

        record = self.redo_queue.popleft()
        self.undo_stack.append(record)
        self.full_log.append(record)
        return record

    def reset(self):
        self.undo_stack.clear()
        self.redo_queue.clear()
        self.full_log.clear()
