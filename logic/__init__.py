"""
Logic module for TicTacToe.
Handles the board, rules, and AI opponents.
"""

from .board import Symbol, Board, new_board, place, empty_cells, board_from_string, format_board
from .win_checker import WinChecker, Outcome, OutcomeKind
from .move_validator import MoveValidator, ValidationResult, NoLegalMovesError
from .heuristic_player import HeuristicPlayer, NO_MOVE
from .ai_player import MinimaxPlayer
