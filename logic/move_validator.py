"""
Move validator for TicTacToe.
Lists legal moves and checks that a move follows the rules.
"""

from dataclasses import dataclass
from typing import Optional, List

from .board import Board, BOARD_CELLS, empty_cells


class NoLegalMovesError(ValueError):
    """Move selection was asked for on a full or finished board."""


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Index must be on the board (0-8)
    2. Can only place on empty cells
    """

    def validate_move(self, board: Board, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place a mark on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if not 0 <= index < BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index}. Must be 0-{BOARD_CELLS - 1}."
            )

        if board[index] is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: Board) -> List[int]:
        """
        Get all legal moves in ascending index order.

        An empty list means the board is full.
        """
        return empty_cells(board)
