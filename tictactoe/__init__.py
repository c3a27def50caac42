"""
TicTacToe Engine
================
Single-player TicTacToe against a computer opponent with three difficulty
levels, undo/redo during play and a move-by-move review once the game ends.

The human plays X and moves first; the computer plays O.
"""

from .board import Mark, Board, EMPTY_BOARD
from .config import Difficulty, EngineConfig
from .errors import GameError, InvalidMove, EmptyHistory
from .opponent import OpponentPolicy, MoveChoice, MoveReason
from .replay import ReplayNavigator
from .scheduler import Scheduler, ManualScheduler
from .search import SearchResult, evaluate
from .session import GameSession, GameSnapshot
from .timeline import MoveRecord, Timeline

__version__ = "1.0.0"
