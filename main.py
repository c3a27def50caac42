"""
Main entry point for TicTacToe.

Launches the Tkinter UI by default, or a console game with --no-ui.

Run this script to play TicTacToe against the computer!
"""

import logging
import random
import time
from typing import Optional

from tictactoe import Difficulty, EngineConfig, GameSession, ManualScheduler, OpponentPolicy
from tictactoe.board import render_board
from tictactoe.session import GameSnapshot


HELP_TEXT = """Commands:
  1-9   play that cell
  u     undo          r   redo
  v     review game   n   next move   p   previous move
  e/m/h new game on easy/medium/hard
  x     new game      q   quit"""


class ConsoleGame:
    """
    Console front end for a GameSession.

    Game flow:
    1. Human (X) types a cell number
    2. The computer (O) answers after a short pause
    3. Repeat until someone wins or it's a draw
    4. Then review the game move by move, or start a new one
    """

    def __init__(
        self,
        difficulty: Difficulty = EngineConfig.DEFAULT_DIFFICULTY,
        delay_ms: int = EngineConfig.AI_DELAY_MS,
        seed: Optional[int] = None
    ):
        """
        Initialize the console game.

        Args:
            difficulty: Starting difficulty.
            delay_ms: Pause before the computer answers.
            seed: Seed for the computer's random moves.
        """
        self.scheduler = ManualScheduler()
        self.session = GameSession(
            difficulty=difficulty,
            scheduler=self.scheduler,
            policy=OpponentPolicy(rng=random.Random(seed)),
            on_change=self._on_change,
            delay_ms=delay_ms
        )
        self.is_running = False

    def start(self):
        """Start the game loop."""
        print("\n" + "="*40)
        print(f"   TicTacToe - {self.session.difficulty.value.upper()}")
        print("="*40)
        print(HELP_TEXT)

        self.is_running = True
        self._show(self.session.snapshot())

        while self.is_running:
            try:
                command = input("\n> ").strip().lower()
            except EOFError:
                break
            self._handle(command)

    def _handle(self, command: str):
        """Dispatch one console command."""
        if not command:
            return

        if command.isdigit():
            snapshot = self.session.player_move(int(command) - 1)
            self._show(snapshot)
            if snapshot.opponent_pending:
                self._wait_for_opponent()
        elif command == "u":
            self._show(self.session.undo())
        elif command == "r":
            self._show(self.session.redo())
        elif command == "v":
            self._show(self.session.enter_review())
        elif command == "n":
            self._show(self.session.review_step_forward())
        elif command == "p":
            self._show(self.session.review_step_backward())
        elif command in ("e", "m", "h"):
            level = {"e": Difficulty.EASY, "m": Difficulty.MEDIUM, "h": Difficulty.HARD}[command]
            self._show(self.session.start_game(level))
        elif command == "x":
            self._show(self.session.reset_game())
        elif command == "q":
            print("\nGame quit by user.")
            self.is_running = False
        else:
            print(HELP_TEXT)

    def _wait_for_opponent(self):
        print("\nComputer is thinking...")
        time.sleep(self.session.delay_ms / 1000.0)
        self.scheduler.run_pending()

    def _on_change(self, snapshot: GameSnapshot):
        self._show(snapshot)

    def _show(self, snapshot: GameSnapshot):
        """Print the board and the game info."""
        if snapshot.message:
            print(f"\n! {snapshot.message}")
            return

        print()
        print(render_board(snapshot.board))
        print(f"\n{snapshot.status}")
        print(f"Move: {snapshot.move_count}")

        if snapshot.can_review:
            print("Type 'v' to review the game, or 'x' for a new one.")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe against the computer")
    parser.add_argument(
        "--difficulty",
        choices=[level.value for level in Difficulty],
        default=EngineConfig.DEFAULT_DIFFICULTY.value,
        help="Computer difficulty"
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=EngineConfig.AI_DELAY_MS,
        help="Pause before the computer answers"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the computer's random moves"
    )
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine decisions"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    difficulty = Difficulty.parse(args.difficulty)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(difficulty=difficulty, delay_ms=args.delay_ms, seed=args.seed)
        ui.run()
        return

    game = ConsoleGame(difficulty=difficulty, delay_ms=args.delay_ms, seed=args.seed)

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
