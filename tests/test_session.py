from tictactoe import Difficulty, GameSession, ManualScheduler
from tictactoe.board import EMPTY_BOARD, Mark, board_from_string



class StubbornScheduler(ManualScheduler):
    """Ignores cancel(), so stale callbacks still fire."""

    def cancel(self, handle):
        pass


def test_new_session_is_live_and_empty(make_session):
    snapshot = make_session().snapshot()
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.active_mark == Mark.X
    assert snapshot.is_live and not snapshot.is_game_over
    assert snapshot.move_count == 0
    assert not (snapshot.can_undo or snapshot.can_redo or snapshot.can_review)
    assert snapshot.status == "X's turn (You)"


def test_player_move_schedules_opponent(make_session, scheduler):
    seen = []
    session = make_session(on_change=seen.append)

    snapshot = session.player_move(4)
    assert snapshot.board[4] == Mark.X
    assert snapshot.opponent_pending
    assert snapshot.active_mark == Mark.O
    assert snapshot.status == "O's turn (Computer)"
    assert scheduler.pending == 1

    assert scheduler.run_pending() == 1
    assert len(seen) == 1
    assert seen[0].board.count(Mark.O) == 1
    assert seen[0].move_count == 2
    assert seen[0].active_mark == Mark.X
    assert not seen[0].opponent_pending


def test_invalid_moves_are_ignored(make_session, scheduler):
    session = make_session()

    for index in (-1, 9):
        snapshot = session.player_move(index)
        assert snapshot.message
        assert snapshot.board == EMPTY_BOARD

    session.player_move(0)
    snapshot = session.player_move(1)
    assert snapshot.message == "Not your turn"
    assert snapshot.move_count == 1

    scheduler.run_pending()
    snapshot = session.player_move(0)
    assert "occupied" in snapshot.message
    assert snapshot.move_count == 2


def test_opponent_blocks_in_session(make_session, scheduler):
    session = make_session("easy")
    session.player_move(0)
    scheduler.run_pending()
    # Seed 7 keeps the random answer off the top row
    assert session.board[1] is None and session.board[2] is None

    session.player_move(1)
    scheduler.run_pending()
    assert session.board[2] == Mark.O


def test_undo_redo_round_trip(make_session, scheduler):
    session = make_session("medium")
    session.player_move(4)
    scheduler.run_pending()
    session.player_move(empty_first(session))
    scheduler.run_pending()

    before = session.snapshot()
    session.undo()
    after = session.redo()

    assert after.board == before.board
    assert after.active_mark == before.active_mark
    assert after.random_moves_used == before.random_moves_used
    assert after.move_count == before.move_count


def test_undo_restores_previous_record(make_session, scheduler):
    session = make_session("medium")
    session.player_move(4)
    scheduler.run_pending()
    assert session.random_moves_used == 1

    snapshot = session.undo()
    assert snapshot.board == board_from_string("...." "X" "....")
    assert snapshot.active_mark == Mark.O
    assert snapshot.random_moves_used == 0
    assert snapshot.can_redo
    assert snapshot.is_live

    snapshot = session.undo()
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.active_mark == Mark.X
    assert snapshot.move_count == 0

    snapshot = session.undo()
    assert snapshot.message == "Nothing to undo"


def test_redo_with_nothing_undone(make_session):
    snapshot = make_session().redo()
    assert snapshot.message == "Nothing to redo"


def test_new_move_after_undo_clears_redo(make_session, scheduler):
    session = make_session()
    session.player_move(4)
    scheduler.run_pending()
    session.undo()
    session.undo()

    snapshot = session.player_move(0)
    assert not snapshot.can_redo
    assert session.timeline.full_log[-1].index == 0
    assert session.timeline.full_log == session.timeline.undo_stack


def test_undo_discards_pending_opponent_move(make_session, scheduler):
    session = make_session()
    session.player_move(4)
    snapshot = session.undo()
    assert not snapshot.opponent_pending
    assert scheduler.run_pending() == 0
    assert session.board == EMPTY_BOARD


def test_reset_discards_stale_opponent_move():
    scheduler = StubbornScheduler()
    session = GameSession(difficulty="hard", scheduler=scheduler, delay_ms=0)
    session.player_move(4)

    session.reset_game()
    assert scheduler.run_pending() == 1
    assert session.board == EMPTY_BOARD
    assert session.snapshot().move_count == 0

    # The fresh game still gets its own opponent move
    session.player_move(0)
    scheduler.run_pending()
    assert session.board.count(Mark.O) == 1


def test_hard_game_ends_without_human_win(make_session, play_out):
    snapshot = play_out(make_session("hard"))
    assert snapshot.is_game_over
    assert snapshot.winner != Mark.X
    assert snapshot.can_review
    assert snapshot.status in ("O wins!", "It's a draw!")


def test_finished_game_rejects_moves(make_session, play_out):
    session = make_session("hard")
    play_out(session)
    empty = [i for i, cell in enumerate(session.board) if cell is None]
    if empty:
        snapshot = session.player_move(empty[0])
        assert snapshot.message == "Game is already over"


def test_redo_into_finished_game_closes_play(make_session, play_out):
    session = make_session("hard")
    final = play_out(session)

    snapshot = session.undo()
    assert snapshot.is_live and not snapshot.can_review

    snapshot = session.redo()
    assert snapshot.board == final.board
    assert snapshot.is_game_over
    assert snapshot.can_review


def test_review_walks_the_log(make_session, play_out):
    session = make_session("hard")
    final = play_out(session)
    log = session.timeline.log()

    snapshot = session.enter_review()
    assert snapshot.in_review
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.review_index == -1
    assert snapshot.random_moves_used == 0
    assert snapshot.can_step_forward and not snapshot.can_step_backward
    assert not (snapshot.can_undo or snapshot.can_redo or snapshot.can_review)
    assert snapshot.status == "Review Mode: Start of game"

    shown = [session.review_step_forward().board for _ in log]
    assert shown == [record.board for record in log]
    assert shown[-1] == final.board

    snapshot = session.review_step_forward()
    assert snapshot.message
    assert snapshot.review_index == len(log) - 1

    for _ in log:
        snapshot = session.review_step_backward()
    assert snapshot.board == EMPTY_BOARD
    assert session.review_step_backward().message

    assert session.timeline.log() == log


def test_review_blocks_play_and_history(make_session, play_out):
    session = make_session("hard")
    play_out(session)
    session.enter_review()

    assert session.player_move(0).message == "Moves are not allowed in review mode"
    assert session.undo().message
    assert session.redo().message
    assert session.enter_review().message == "Already in review mode"

    snapshot = session.reset_game()
    assert not snapshot.in_review
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.is_live


def test_review_needs_finished_game(make_session):
    session = make_session()
    assert session.enter_review().message == "Review is available once the game is over"
    session.player_move(4)
    assert session.enter_review().message == "Review is available once the game is over"
    assert session.review_step_forward().message == "Review mode is off"


def test_start_game_switches_difficulty(make_session, scheduler):
    session = make_session("hard")
    session.player_move(4)

    snapshot = session.start_game(Difficulty.EASY)
    assert snapshot.difficulty == Difficulty.EASY
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.move_count == 0
    assert scheduler.run_pending() == 0

    snapshot = session.start_game("extreme")
    assert snapshot.message
    assert snapshot.difficulty == Difficulty.EASY


def test_medium_spends_exactly_one_random_move(make_session, scheduler, play_out):
    session = make_session("medium", seed=11)
    session.player_move(0)
    scheduler.run_pending()
    assert session.random_moves_used == 1

    play_out(session)
    assert all(record.random_moves_used == 1 for record in session.timeline.full_log[1:])


def empty_first(session):
    return next(i for i, cell in enumerate(session.board) if cell is None)


def test_review_snapshot_keeps_game_result(make_session, play_out):
    session = make_session("hard")
    final = play_out(session)

    snapshot = session.enter_review()
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.winning_line is None
    assert snapshot.winner == final.winner
    assert snapshot.is_draw == final.is_draw
    assert snapshot.is_game_over

    for _ in session.timeline.full_log:
        snapshot = session.review_step_forward()
    assert snapshot.winning_line == final.winning_line
