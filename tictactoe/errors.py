"""
Errors raised by the TicTacToe engine.

Both are recoverable: the session turns them into no-ops.
"""


class GameError(Exception):
    """Base class for engine errors."""


class InvalidMove(GameError):
    """Occupied cell, out-of-range index, or a move while play is closed."""


class EmptyHistory(GameError):
    """Nothing to undo, nothing to redo, or a replay step past a boundary."""
