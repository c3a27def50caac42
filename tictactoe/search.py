"""
Minimax search for TicTacToe.

Walks the full game tree from a position and returns the best cell for the
side to move. The automated mark always maximizes and the human mark always
minimizes, whichever of them is to move.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .board import Board, Mark, apply_move, empty_cells, winner
from .config import EngineConfig

logger = logging.getLogger(__name__)

# Positions searched by the last evaluate() call (memoized positions not counted)
positions_evaluated = 0


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of a search.

    index is None when the position is already over (win or full board);
    the score is then the terminal score and there is nothing to play.
    """
    index: Optional[int]
    score: int


def evaluate(board: Board, mark: Mark) -> SearchResult:
    """
    Find the best move for `mark` on `board`.

    Terminal scores are +10 for an automated-mark win, -10 for a human-mark
    win and 0 for a draw, with no depth discount. Among equal scores the
    lowest cell index wins.

    Args:
        board: Position to search from. Not modified.
        mark: The mark to move.

    Returns:
        SearchResult with the chosen index and its minimax score.
    """
    global positions_evaluated
    positions_evaluated = 0

    result = _minimax(tuple(board), mark)
    logger.debug(
        "Search for %s evaluated %d positions. Best cell: %s (score: %s)",
        mark.value, positions_evaluated, result.index, result.score
    )
    return result


def clear_cache():
    """Forget memoized positions."""
    _minimax.cache_clear()


def _terminal_score(board: Board) -> Optional[int]:
    won = winner(board)
    if won == EngineConfig.AI_MARK:
        return EngineConfig.WIN_SCORE
    if won == EngineConfig.HUMAN_MARK:
        return EngineConfig.LOSS_SCORE
    return None


@lru_cache(maxsize=None)
def _minimax(board: Board, mark: Mark) -> SearchResult:
    global positions_evaluated
    positions_evaluated += 1

    score = _terminal_score(board)
    if score is not None:
        return SearchResult(index=None, score=score)

    cells = empty_cells(board)
    if not cells:
        return SearchResult(index=None, score=EngineConfig.DRAW_SCORE)

    maximizing = mark == EngineConfig.AI_MARK
    best_index = None
    best_score = None

    for index in cells:
        child = _minimax(apply_move(board, index, mark), mark.opposite())

        # Strict comparison keeps the first (lowest) index on ties
        if best_score is None:
            better = True
        elif maximizing:
            better = child.score > best_score
        else:
            better = child.score < best_score

        if better:
            best_index = index
            best_score = child.score

    return SearchResult(index=best_index, score=best_score)
