"""
AI player for TicTacToe.
Uses the Minimax algorithm to choose the best move.
"""

import logging
from typing import Optional

from .board import Board, Symbol, place, board_from_string
from .heuristic_player import HeuristicPlayer
from .move_validator import MoveValidator, NoLegalMovesError
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class MinimaxPlayer:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    The AI will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    """

    WIN_SCORE = 10

    def __init__(self, heuristic: Optional[HeuristicPlayer] = None):
        """
        Initialize the AI player.

        Args:
            heuristic: Supplies the opening/win/block shortcuts that are
                       tried before the full search.
        """
        self.heuristic = heuristic if heuristic is not None else HeuristicPlayer()
        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def best_move(
        self,
        board: Board,
        mover: Symbol,
        opponent: Optional[Symbol] = None,
        use_shortcuts: bool = True
    ) -> int:
        """
        Get the best move for mover.

        Args:
            board: Current board. Must not be finished.
            mover: Symbol to move.
            opponent: The other symbol (default: mover.opposite()).
            use_shortcuts: Try opening/win/block rules before searching.

        Returns:
            Index of the lowest-indexed move with the best score.

        Raises:
            NoLegalMovesError: If the board is full or already decided.
        """
        if opponent is None:
            opponent = mover.opposite()

        valid_moves = self.validator.get_valid_moves(board)
        if not valid_moves or self.win_checker.evaluate(board).is_terminal:
            raise NoLegalMovesError("No legal moves: board is full or the game is over")

        if use_shortcuts:
            move = self.heuristic.shortcut_move(board, mover, opponent)
            if move is not None:
                logger.debug("Shortcut move for %s: %d", mover.value, move)
                return move

        self.positions_evaluated = 0
        best_score = float('-inf')
        best_move = valid_moves[0]

        for index in valid_moves:
            score = self.minimax(place(board, index, mover), 0, False, mover, opponent)

            # Strictly greater: earliest index wins ties
            if score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            "AI evaluated %d positions. Best move: %d (score: %s)",
            self.positions_evaluated, best_move, best_score
        )

        return best_move

    def minimax(
        self,
        board: Board,
        depth: int,
        is_maximizing: bool,
        mover: Symbol,
        opponent: Symbol
    ) -> int:
        """
        Score a position by searching to the end of the game.

        Args:
            board: Position to score.
            depth: Plies played since the root move.
            is_maximizing: True if it is mover's turn.
            mover: Symbol the score is computed for.
            opponent: The other symbol.

        Returns:
            10 - depth for a mover win, depth - 10 for a loss, 0 for a draw.
        """
        self.positions_evaluated += 1

        outcome = self.win_checker.evaluate(board)
        if outcome.is_win:
            if outcome.winner == mover:
                return self.WIN_SCORE - depth  # Prefer faster wins
            return depth - self.WIN_SCORE      # Prefer slower losses
        if outcome.is_draw:
            return 0

        valid_moves = self.validator.get_valid_moves(board)

        if is_maximizing:
            return max(
                self.minimax(place(board, index, mover), depth + 1, False, mover, opponent)
                for index in valid_moves
            )

        return min(
            self.minimax(place(board, index, opponent), depth + 1, True, mover, opponent)
            for index in valid_moves
        )


# Quick test
if __name__ == "__main__":
    print("Testing MinimaxPlayer...")

    ai = MinimaxPlayer()

    # O must block at 2
    board = board_from_string("XX_/_O_/___")
    move = ai.best_move(board, Symbol.SECOND)
    print(f"Block test: {move}")
    assert move == 2, f"Expected 2, got {move}"

    # X takes the win at 2 rather than blocking at 5
    board = board_from_string("XX_/OO_/___")
    move = ai.best_move(board, Symbol.FIRST)
    print(f"Win test: {move}")
    assert move == 2, f"Expected 2, got {move}"

    print("\nMinimaxPlayer test done!")
