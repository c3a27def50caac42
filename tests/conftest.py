import random

import pytest

from tictactoe import GameSession, ManualScheduler, OpponentPolicy
from tictactoe.board import empty_cells


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_session(scheduler):
    def _make(difficulty="hard", seed=7, on_change=None):
        return GameSession(
            difficulty=difficulty,
            scheduler=scheduler,
            policy=OpponentPolicy(rng=random.Random(seed)),
            on_change=on_change,
            delay_ms=0
        )
    return _make


@pytest.fixture
def play_out(scheduler):
    return lambda session: _play_out(session, scheduler)


def _play_out(session, scheduler):
    """Human always takes the lowest empty cell until the game ends."""
    snapshot = session.snapshot()
    while snapshot.is_live:
        session.player_move(empty_cells(session.board)[0])
        scheduler.run_pending()
        snapshot = session.snapshot()
    return snapshot
