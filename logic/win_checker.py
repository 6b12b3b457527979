"""
Win checker for TicTacToe.
Checks if a symbol has won or if the game is a draw.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .board import Board, Symbol, board_from_string

Line = Tuple[int, int, int]


class OutcomeKind(Enum):
    """Where a board stands."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    winner and line are only set for a WIN.
    """
    kind: OutcomeKind
    winner: Optional[Symbol] = None
    line: Optional[Line] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeKind.IN_PROGRESS)

    @classmethod
    def win(cls, winner: Symbol, line: Line) -> "Outcome":
        return cls(OutcomeKind.WIN, winner, line)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeKind.DRAW)

    @property
    def is_win(self) -> bool:
        return self.kind == OutcomeKind.WIN

    @property
    def is_draw(self) -> bool:
        return self.kind == OutcomeKind.DRAW

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells with the same symbol in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines, scanned in this order:
    # rows, then columns, then diagonals
    WINNING_LINES: Tuple[Line, ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    def evaluate(self, board: Board) -> Outcome:
        """
        Evaluate a board.

        The first winning line in scan order decides the winner, even on
        artificial boards where more than one line is complete.

        Args:
            board: The board to evaluate.

        Returns:
            Outcome.win, Outcome.draw or Outcome.in_progress.
        """
        line = self.get_winning_line(board)
        if line is not None:
            return Outcome.win(board[line[0]], line)

        if all(cell is not None for cell in board):
            return Outcome.draw()

        return Outcome.in_progress()

    def check_winner(self, board: Board) -> Optional[Symbol]:
        """
        Check if there's a winner.

        Returns:
            The winning Symbol, or None if no winner yet.
        """
        line = self.get_winning_line(board)
        return board[line[0]] if line is not None else None

    def get_winning_line(self, board: Board) -> Optional[Line]:
        """Get the first winning line, or None."""
        for line in self.WINNING_LINES:
            a, b, c = line
            if board[a] is not None and board[a] == board[b] == board[c]:
                return line
        return None

    def check_draw(self, board: Board) -> bool:
        """A draw is a full board with no winner."""
        return self.evaluate(board).is_draw


# Quick test
if __name__ == "__main__":
    print("Testing WinChecker...")

    checker = WinChecker()

    for text in ["XXX/OO_/___", "OX_/OX_/O__", "XOX/XOO/OXX", "XO_/_X_/___"]:
        board = board_from_string(text)
        print(f"{text}: {checker.evaluate(board)}")

    print("\nWinChecker test done!")
