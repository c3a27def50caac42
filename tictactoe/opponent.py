"""
Automated opponent for TicTacToe.
Picks moves by difficulty: win, block, spend the random-move budget, or search.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import search
from .board import Board, Mark, apply_move, empty_cells, is_terminal, winner
from .config import Difficulty, EngineConfig
from .errors import InvalidMove

logger = logging.getLogger(__name__)


class MoveReason(Enum):
    """Why the opponent picked a cell."""
    WIN = "win"
    BLOCK = "block"
    RANDOM = "random"
    SEARCH = "search"


@dataclass(frozen=True)
class MoveChoice:
    """A chosen move and the random-move counter after making it."""
    index: int
    random_moves_used: int
    reason: MoveReason


def find_winning_move(board: Board, mark: Mark) -> Optional[int]:
    """
    Find a cell that completes a line for `mark`.

    Returns:
        The lowest such cell index, or None.
    """
    for index in empty_cells(board):
        if winner(apply_move(board, index, mark)) == mark:
            return index
    return None


class OpponentPolicy:
    """
    Difficulty-tiered move selector for the automated mark.

    Immediate wins and blocks always come first, so the random-move budget
    is only spent on otherwise neutral positions. Once the budget for the
    difficulty is used up, every decision goes to the minimax search.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        mark: Mark = EngineConfig.AI_MARK,
        random_move_budget: Optional[dict] = None
    ):
        """
        Initialize the policy.

        Args:
            rng: Random source for random moves (default: a fresh Random).
            mark: Which mark the opponent plays.
            random_move_budget: Random moves allowed per difficulty.
        """
        self.rng = rng if rng is not None else random.Random()
        self.mark = mark
        self.random_move_budget = dict(
            random_move_budget if random_move_budget is not None
            else EngineConfig.RANDOM_MOVE_BUDGET
        )

    def choose_move(
        self,
        board: Board,
        difficulty: Difficulty,
        random_moves_used: int
    ) -> MoveChoice:
        """
        Choose the opponent's next cell.

        Args:
            board: Current board with the opponent to move.
            difficulty: Difficulty level of the game.
            random_moves_used: Random moves already spent this game.

        Returns:
            MoveChoice with the cell, the updated counter and the reason.

        Raises:
            InvalidMove: If the game is already over.
        """
        if is_terminal(board):
            raise InvalidMove("No move available: the game is over")

        difficulty = Difficulty.parse(difficulty)

        index = find_winning_move(board, self.mark)
        if index is not None:
            return self._log(MoveChoice(index, random_moves_used, MoveReason.WIN))

        index = find_winning_move(board, self.mark.opposite())
        if index is not None:
            return self._log(MoveChoice(index, random_moves_used, MoveReason.BLOCK))

        if random_moves_used < self.random_move_budget.get(difficulty, 0):
            index = self.rng.choice(empty_cells(board))
            return self._log(MoveChoice(index, random_moves_used + 1, MoveReason.RANDOM))

        result = search.evaluate(board, self.mark)
        return self._log(MoveChoice(result.index, random_moves_used, MoveReason.SEARCH))

    def _log(self, choice: MoveChoice) -> MoveChoice:
        logger.debug(
            "Opponent %s plays cell %d (%s, random moves used: %d)",
            self.mark.value, choice.index, choice.reason.value, choice.random_moves_used
        )
        return choice
