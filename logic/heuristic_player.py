"""
Heuristic player for TicTacToe.
Picks moves from fixed priority rules with no look-ahead beyond one ply.
"""

from typing import Optional

import numpy as np

from .board import Board, Symbol, place, is_empty_board
from .move_validator import MoveValidator
from .win_checker import WinChecker

# Center and corners, used for the opening move
OPENING_CELLS = (0, 2, 4, 6, 8)

# Center, corners, then edges
PREFERENCE_ORDER = (4, 0, 2, 6, 8, 1, 3, 5, 7)

# Returned when there is nothing left to play
NO_MOVE = -1


class HeuristicPlayer:
    """
    Rule-based move picker.

    Priority:
    1. Opening: random center or corner on an empty board
    2. Take an immediate win
    3. Block the opponent's immediate win
    4. Center, then corners, then edges
    5. Random legal move
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize the heuristic player.

        Args:
            rng: Random generator for openings and fallbacks.
                 A fresh unseeded one is created if not given.
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.validator = MoveValidator()
        self.win_checker = WinChecker()

    def pick(self, board: Board, mover: Symbol, opponent: Optional[Symbol] = None) -> int:
        """
        Pick a move for mover.

        Returns:
            Cell index, or NO_MOVE if the board is full.
        """
        move = self.shortcut_move(board, mover, opponent)
        if move is not None:
            return move

        return self.strategic_move(board)

    def shortcut_move(
        self,
        board: Board,
        mover: Symbol,
        opponent: Optional[Symbol] = None
    ) -> Optional[int]:
        """
        Try the opening, win and block rules.

        Returns:
            Cell index, or None if none of them applies.
        """
        if opponent is None:
            opponent = mover.opposite()

        if is_empty_board(board):
            return self._choice(OPENING_CELLS)

        win = self.find_winning_move(board, mover)
        if win != NO_MOVE:
            return win

        block = self.find_winning_move(board, opponent)
        if block != NO_MOVE:
            return block

        return None

    def find_winning_move(self, board: Board, symbol: Symbol) -> int:
        """Lowest-indexed cell that completes a line for symbol, or NO_MOVE."""
        for index in self.validator.get_valid_moves(board):
            if self.win_checker.check_winner(place(board, index, symbol)) == symbol:
                return index
        return NO_MOVE

    def strategic_move(self, board: Board) -> int:
        """First free cell in PREFERENCE_ORDER, else a random legal move."""
        for index in PREFERENCE_ORDER:
            if board[index] is None:
                return index

        return self.random_move(board)

    def random_move(self, board: Board) -> int:
        """Uniformly random legal move, or NO_MOVE on a full board."""
        moves = self.validator.get_valid_moves(board)
        if not moves:
            return NO_MOVE
        return self._choice(moves)

    def _choice(self, cells) -> int:
        return int(cells[self.rng.integers(len(cells))])
