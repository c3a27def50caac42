"""
Engine configuration for TicTacToe.
All the tunable settings for marks, scoring, pacing and difficulty.
"""

from enum import Enum

from .board import Mark


class Difficulty(Enum):
    """Opponent difficulty levels."""
    EASY = "easy"        # Two random moves, then minimax
    MEDIUM = "medium"    # One random move, then minimax
    HARD = "hard"        # Full minimax

    @classmethod
    def parse(cls, value) -> "Difficulty":
        """
        Accept a Difficulty, its value or its name (any case).

        Raises:
            ValueError: If the value is not a known difficulty.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for level in cls:
            if level.value == text:
                return level
        raise ValueError(f"Unknown difficulty: {value!r} (expected easy, medium or hard)")


class EngineConfig:
    """
    Configuration class for the game engine.
    Change these values to tune the opponent.
    """

    # ==================== MARKS ====================
    # The human always plays X and moves first
    HUMAN_MARK = Mark.X
    AI_MARK = Mark.O

    # ==================== SEARCH SCORES ====================
    WIN_SCORE = 10       # Automated mark wins
    LOSS_SCORE = -10     # Human mark wins
    DRAW_SCORE = 0

    # ==================== PACING ====================
    # Delay before the opponent answers a human move
    AI_DELAY_MS = 500

    # ==================== DIFFICULTY ====================
    DEFAULT_DIFFICULTY = Difficulty.MEDIUM

    # How many random moves the opponent may spend per game
    RANDOM_MOVE_BUDGET = {
        Difficulty.EASY: 2,
        Difficulty.MEDIUM: 1,
        Difficulty.HARD: 0,
    }
