"""
Game session for TicTacToe.

Ties the board, the opponent, the move history and review together behind
a small set of commands. Front ends call the commands and draw whatever
GameSnapshot they get back; the session never touches the screen.

Game flow:
1. Human (X) plays a cell with player_move()
2. The opponent's answer is scheduled after a short delay
3. The opponent (O) plays, and on_change is called with the new snapshot
4. Repeat until someone wins or the board is full
5. Once the game is over, enter_review() walks through the moves
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from .board import (
    EMPTY_BOARD, Board, Mark, apply_move, is_full, is_terminal, winner, winning_line
)
from .config import Difficulty, EngineConfig
from .errors import EmptyHistory, GameError, InvalidMove
from .opponent import OpponentPolicy
from .replay import ReplayNavigator
from .scheduler import ManualScheduler, Scheduler
from .timeline import MoveRecord, Timeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSnapshot:
    """
    Everything a front end needs to draw the game.

    board and winning_line describe the board on screen: the review board
    while reviewing, otherwise the live board. winner, is_draw and
    is_game_over always describe the game itself, so during review they keep
    reporting the final result even when the cursor is on the empty board.
    message is set when the command that produced the snapshot was ignored.
    """
    board: Board
    active_mark: Mark
    is_live: bool
    is_game_over: bool
    winner: Optional[Mark]
    is_draw: bool
    winning_line: Optional[Tuple[int, int, int]]
    move_count: int
    can_undo: bool
    can_redo: bool
    can_review: bool
    in_review: bool
    review_index: int
    can_step_forward: bool
    can_step_backward: bool
    opponent_pending: bool
    difficulty: Difficulty
    random_moves_used: int
    status: str
    message: Optional[str] = None


class GameSession:
    """
    The one live game, with its history and review state.

    All commands run to completion and return a GameSnapshot. Invalid
    commands (occupied cell, nothing to undo, ...) change nothing and return
    the current snapshot with `message` explaining why.
    """

    def __init__(
        self,
        difficulty: Optional[Difficulty] = None,
        scheduler: Optional[Scheduler] = None,
        policy: Optional[OpponentPolicy] = None,
        on_change: Optional[Callable[[GameSnapshot], None]] = None,
        delay_ms: Optional[int] = None
    ):
        """
        Initialize the session and start a game.

        Args:
            difficulty: Starting difficulty (default: EngineConfig.DEFAULT_DIFFICULTY).
            scheduler: Runs the deferred opponent move (default: ManualScheduler).
            policy: Opponent move selector (default: OpponentPolicy()).
            on_change: Called with a snapshot after the opponent has moved.
            delay_ms: Pause before the opponent answers (default: EngineConfig.AI_DELAY_MS).
        """
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.policy = policy if policy is not None else OpponentPolicy()
        self.on_change = on_change
        self.delay_ms = EngineConfig.AI_DELAY_MS if delay_ms is None else delay_ms

        self.human_mark = EngineConfig.HUMAN_MARK
        self.ai_mark = EngineConfig.AI_MARK

        self.timeline = Timeline()
        self.replay: Optional[ReplayNavigator] = None

        self.difficulty = Difficulty.parse(difficulty or EngineConfig.DEFAULT_DIFFICULTY)
        self.board: Board = EMPTY_BOARD
        self.active_mark = self.human_mark
        self.is_live = True
        self.random_moves_used = 0

        # Handle of the scheduled opponent move, if any
        self._pending: Any = None
        # Bumped whenever a scheduled opponent move must not land
        self._generation = 0

        self._reset()

    # ==================== COMMANDS ====================

    def start_game(self, difficulty: Optional[Difficulty] = None) -> GameSnapshot:
        """Start a new game, optionally switching difficulty."""
        if difficulty is not None:
            try:
                self.difficulty = Difficulty.parse(difficulty)
            except ValueError as e:
                return self._rejected(InvalidMove(str(e)))
        self._reset()
        logger.info("New game (%s)", self.difficulty.value)
        return self.snapshot()

    def reset_game(self) -> GameSnapshot:
        """Start over with the same difficulty."""
        return self.start_game()

    def player_move(self, index: int) -> GameSnapshot:
        """
        Play the human's mark on a cell.

        If the game goes on, the opponent's answer is scheduled.
        """
        try:
            self._check_human_can_play()
            self._apply(index, self.human_mark, self.random_moves_used)
        except InvalidMove as e:
            return self._rejected(e)

        if self.is_live and self.active_mark == self.ai_mark:
            self._schedule_opponent()
        return self.snapshot()

    def undo(self) -> GameSnapshot:
        """Take back the newest move and reopen play."""
        if self.replay is not None:
            return self._rejected(InvalidMove("Undo is not available in review mode"))

        try:
            self.timeline.undo()
        except EmptyHistory as e:
            return self._rejected(e)

        self._cancel_pending()
        top = self.timeline.top
        if top is None:
            self.board = EMPTY_BOARD
            self.active_mark = self.human_mark
            self.random_moves_used = 0
        else:
            self._restore(top)
        self.is_live = True
        return self.snapshot()

    def redo(self) -> GameSnapshot:
        """Replay the oldest undone move."""
        if self.replay is not None:
            return self._rejected(InvalidMove("Redo is not available in review mode"))

        try:
            record = self.timeline.redo()
        except EmptyHistory as e:
            return self._rejected(e)

        self._cancel_pending()
        self._restore(record)
        self.is_live = not is_terminal(self.board)
        if not self.is_live:
            self._log_result()
        return self.snapshot()

    def enter_review(self) -> GameSnapshot:
        """
        Switch a finished game to review mode, starting at the empty board.

        Live play does not resume afterwards; start a new game instead.
        """
        if self.replay is not None:
            return self._rejected(InvalidMove("Already in review mode"))
        if self.is_live:
            return self._rejected(InvalidMove("Review is available once the game is over"))
        if not self.timeline.full_log:
            return self._rejected(EmptyHistory("No moves to review"))

        self._cancel_pending()
        self.replay = ReplayNavigator(self.timeline.log())
        self.random_moves_used = 0
        logger.info("Reviewing %d move(s)", len(self.replay))
        return self.snapshot()

    def review_step_forward(self) -> GameSnapshot:
        return self._review_step(forward=True)

    def review_step_backward(self) -> GameSnapshot:
        return self._review_step(forward=False)

    # ==================== STATE ====================

    @property
    def in_review(self) -> bool:
        return self.replay is not None

    @property
    def opponent_pending(self) -> bool:
        return self._pending is not None

    def snapshot(self, message: Optional[str] = None) -> GameSnapshot:
        """Build a snapshot of the current state."""
        won = winner(self.board)
        is_draw = won is None and is_full(self.board)
        shown = self.replay.board if self.replay is not None else self.board

        return GameSnapshot(
            board=shown,
            active_mark=self.active_mark,
            is_live=self.is_live and self.replay is None,
            is_game_over=not self.is_live,
            winner=won,
            is_draw=is_draw,
            winning_line=winning_line(shown),
            move_count=self.timeline.move_count,
            can_undo=self.replay is None and self.timeline.can_undo,
            can_redo=self.replay is None and self.timeline.can_redo,
            can_review=(
                self.replay is None and not self.is_live and bool(self.timeline.full_log)
            ),
            in_review=self.replay is not None,
            review_index=self.replay.index if self.replay is not None else -1,
            can_step_forward=self.replay is not None and self.replay.can_step_forward,
            can_step_backward=self.replay is not None and self.replay.can_step_backward,
            opponent_pending=self.opponent_pending,
            difficulty=self.difficulty,
            random_moves_used=self.random_moves_used,
            status=self._status(won, is_draw),
            message=message
        )

    # ==================== INTERNALS ====================

    def _reset(self):
        self._cancel_pending()
        self.timeline.reset()
        self.replay = None
        self.board = EMPTY_BOARD
        self.active_mark = self.human_mark
        self.is_live = True
        self.random_moves_used = 0

    def _check_human_can_play(self):
        if self.replay is not None:
            raise InvalidMove("Moves are not allowed in review mode")
        if not self.is_live:
            raise InvalidMove("Game is already over")
        if self._pending is not None or self.active_mark != self.human_mark:
            raise InvalidMove("Not your turn")

    def _apply(self, index: int, mark: Mark, random_moves_used: int):
        board = apply_move(self.board, index, mark)
        self.timeline.commit(MoveRecord(
            index=int(index),
            mark=mark,
            board=board,
            random_moves_used=random_moves_used
        ))
        self.board = board
        self.random_moves_used = random_moves_used
        self.active_mark = mark.opposite()

        if is_terminal(board):
            self.is_live = False
            self._log_result()

    def _restore(self, record: MoveRecord):
        self.board = record.board
        self.active_mark = record.mark.opposite()
        self.random_moves_used = record.random_moves_used

    def _schedule_opponent(self):
        generation = self._generation
        self._pending = self.scheduler.call_later(
            self.delay_ms, lambda: self._opponent_turn(generation)
        )

    def _cancel_pending(self):
        self._generation += 1
        if self._pending is not None:
            logger.debug("Dropping pending opponent move")
            self.scheduler.cancel(self._pending)
            self._pending = None

    def _opponent_turn(self, generation: int):
        if generation != self._generation:
            logger.debug("Ignoring stale opponent move")
            return
        self._pending = None

        if not self.is_live or self.replay is not None or self.active_mark != self.ai_mark:
            return

        choice = self.policy.choose_move(self.board, self.difficulty, self.random_moves_used)
        self._apply(choice.index, self.ai_mark, choice.random_moves_used)

        if self.on_change is not None:
            self.on_change(self.snapshot())

    def _review_step(self, forward: bool) -> GameSnapshot:
        if self.replay is None:
            return self._rejected(InvalidMove("Review mode is off"))
        try:
            if forward:
                self.replay.step_forward()
            else:
                self.replay.step_backward()
        except EmptyHistory as e:
            return self._rejected(e)
        return self.snapshot()

    def _rejected(self, error: GameError) -> GameSnapshot:
        logger.debug("Ignored: %s", error)
        return self.snapshot(message=str(error))

    def _log_result(self):
        won = winner(self.board)
        if won is not None:
            logger.info("%s wins after %d moves", won.value, self.timeline.move_count)
        else:
            logger.info("Draw after %d moves", self.timeline.move_count)

    def _status(self, won: Optional[Mark], is_draw: bool) -> str:
        if self.replay is not None:
            return f"Review Mode: {self.replay.describe()}"
        if won is not None:
            return f"{won.value} wins!"
        if is_draw:
            return "It's a draw!"
        who = "(You)" if self.active_mark == self.human_mark else "(Computer)"
        return f"{self.active_mark.value}'s turn {who}"
