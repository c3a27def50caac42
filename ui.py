"""
TicTacToe UI
A graphical interface for the TicTacToe engine using Tkinter.

Shows:
- The 3x3 board (X for the human, O for the computer)
- Game status and move counter
- Difficulty level selection
- Undo / redo during play and a review of finished games
"""

import random
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from tictactoe import Difficulty, EngineConfig, GameSession, OpponentPolicy
from tictactoe.board import Mark
from tictactoe.scheduler import Scheduler
from tictactoe.session import GameSnapshot


CELL_BG = '#16213e'
HIGHLIGHT_BG = '#854d0e'

MARK_COLORS = {
    Mark.X: '#10b981',   # Green for the human
    Mark.O: '#f87171',   # Red for the computer
}

DIFFICULTY_COLORS = {
    Difficulty.EASY: "#4ade80",
    Difficulty.MEDIUM: "#fbbf24",
    Difficulty.HARD: "#f87171",
}


class TkScheduler(Scheduler):
    """Schedules callbacks on the Tk event loop."""

    def __init__(self, root: tk.Misc):
        self.root = root

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.root.after(delay_ms, callback)

    def cancel(self, handle: str):
        self.root.after_cancel(handle)


class TicTacToeUI:
    """
    Main UI class for TicTacToe.
    """

    def __init__(
        self,
        difficulty: Difficulty = EngineConfig.DEFAULT_DIFFICULTY,
        delay_ms: int = EngineConfig.AI_DELAY_MS,
        seed: Optional[int] = None
    ):
        """Initialize the UI and start a game."""
        self._create_ui()

        self.session = GameSession(
            difficulty=difficulty,
            scheduler=TkScheduler(self.root),
            policy=OpponentPolicy(rng=random.Random(seed)),
            on_change=self._render,
            delay_ms=delay_ms
        )
        self._render(self.session.snapshot())

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("TicTacToe")
        self.root.configure(bg='#1a1a2e')
        self.root.resizable(False, False)

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=20, pady=20)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')

        ttk.Label(main_frame, text="🎮 TicTacToe", style='Title.TLabel').pack(pady=(0, 10))

        # Board
        board_frame = ttk.Frame(main_frame)
        board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(9):
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=4,
                height=2,
                bg=CELL_BG,
                fg='white',
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell(i)
            )
            cell.grid(row=index // 3, column=index % 3, padx=2, pady=2)
            self.board_cells.append(cell)

        # Legend
        legend_frame = ttk.Frame(main_frame)
        legend_frame.pack(pady=5)
        ttk.Label(legend_frame, text="X = You  ", foreground=MARK_COLORS[Mark.X]).pack(side=tk.LEFT)
        ttk.Label(legend_frame, text="O = Computer", foreground=MARK_COLORS[Mark.O]).pack(side=tk.LEFT)

        # Status
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)

        self.status_label = ttk.Label(main_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        self.move_label = ttk.Label(main_frame, text="Move: 0")
        self.move_label.pack()

        # Difficulty
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        ttk.Label(main_frame, text="⚙️ Difficulty", style='Title.TLabel').pack()

        diff_frame = ttk.Frame(main_frame)
        diff_frame.pack(pady=10)

        self.difficulty_buttons = {}
        for level in Difficulty:
            btn = tk.Button(
                diff_frame,
                text=level.value.capitalize(),
                font=('Segoe UI', 10, 'bold'),
                width=8,
                bg='#2d3748',
                fg='white',
                activebackground=DIFFICULTY_COLORS[level],
                command=lambda lv=level: self._render(self.session.start_game(lv))
            )
            btn.pack(side=tk.LEFT, padx=5)
            self.difficulty_buttons[level] = btn

        # History controls
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)

        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=5)

        self.backward_btn = self._control_button(control_frame, "◀ Back", self._on_backward)
        self.forward_btn = self._control_button(control_frame, "Forward ▶", self._on_forward)
        self.review_btn = self._control_button(
            control_frame, "🔍 Review", lambda: self._render(self.session.enter_review())
        )

        tk.Button(
            main_frame,
            text="🔄 New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=26,
            command=lambda: self._render(self.session.reset_game())
        ).pack(pady=10)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _control_button(self, parent, text: str, command) -> tk.Button:
        btn = tk.Button(
            parent,
            text=text,
            font=('Segoe UI', 10, 'bold'),
            bg='#10b981',
            fg='white',
            width=9,
            command=command
        )
        btn.pack(side=tk.LEFT, padx=4)
        return btn

    def _on_cell(self, index: int):
        self._render(self.session.player_move(index))

    def _on_backward(self):
        """Undo during play, previous move during review."""
        if self.session.in_review:
            self._render(self.session.review_step_backward())
        else:
            self._render(self.session.undo())

    def _on_forward(self):
        """Redo during play, next move during review."""
        if self.session.in_review:
            self._render(self.session.review_step_forward())
        else:
            self._render(self.session.redo())

    def _render(self, snapshot: GameSnapshot):
        """Redraw everything from a snapshot."""
        can_play = (
            snapshot.is_live
            and not snapshot.opponent_pending
            and snapshot.active_mark == EngineConfig.HUMAN_MARK
        )
        highlight = snapshot.winning_line or ()

        for index, cell in enumerate(self.board_cells):
            mark = snapshot.board[index]
            bg = HIGHLIGHT_BG if index in highlight else CELL_BG
            if mark is None:
                cell.configure(text="", bg=bg)
            else:
                cell.configure(text=mark.value, bg=bg, fg=MARK_COLORS[mark],
                               disabledforeground=MARK_COLORS[mark])
            cell.configure(state='normal' if can_play and mark is None else 'disabled')

        status = snapshot.status
        if snapshot.winner is not None and not snapshot.in_review:
            status = "🏆 You win!" if snapshot.winner == EngineConfig.HUMAN_MARK else "🤖 Computer wins!"
        elif snapshot.is_draw and not snapshot.in_review:
            status = "🤝 It's a draw!"
        self.status_label.configure(text=status)
        self.move_label.configure(text=f"Move: {snapshot.move_count}")

        for level, btn in self.difficulty_buttons.items():
            if level == snapshot.difficulty:
                btn.configure(bg=DIFFICULTY_COLORS[level], fg='black')
            else:
                btn.configure(bg='#2d3748', fg='white')

        if snapshot.in_review:
            back, forward = snapshot.can_step_backward, snapshot.can_step_forward
        else:
            back, forward = snapshot.can_undo, snapshot.can_redo
        self.backward_btn.configure(state='normal' if back else 'disabled')
        self.forward_btn.configure(state='normal' if forward else 'disabled')
        self.review_btn.configure(state='normal' if snapshot.can_review else 'disabled')

    def _quit(self):
        """Quit the application."""
        self.session.reset_game()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


if __name__ == "__main__":
    from main import main
    main()
