"""
Configuration for TicTacToe game sessions.
Timing, difficulty blending, and the default session settings.
"""

from dataclasses import dataclass
from enum import Enum

from logic.board import Symbol


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "easy"        # Random moves
    MEDIUM = "medium"    # Mix of best and random moves
    HARD = "hard"        # Full minimax, never loses


class GameConfig:
    """
    Configuration class for session behaviour.
    Change these values to tune how the computer plays.
    """

    # ==================== TIMING ====================
    # Pause before the computer's move is applied (seconds).
    # Purely for the player's benefit, the search itself is fast.
    THINKING_DELAY_S = 0.6

    # ==================== DIFFICULTY ====================
    # Chance that MEDIUM plays its smart move instead of a random one
    MEDIUM_SEARCH_PROBABILITY = 0.7

    # True: MEDIUM's smart move is the full minimax search.
    # False: MEDIUM's smart move is the one-ply heuristic player.
    MEDIUM_FULL_SEARCH = True

    # ==================== DEFAULTS ====================
    DEFAULT_ARTIFICIAL_OPPONENT = True
    DEFAULT_DIFFICULTY = Difficulty.MEDIUM
    DEFAULT_ARTIFICIAL_SYMBOL = Symbol.SECOND


@dataclass(frozen=True)
class SessionConfig:
    """Per-session settings chosen by the player."""
    artificial_opponent: bool = GameConfig.DEFAULT_ARTIFICIAL_OPPONENT
    difficulty: Difficulty = GameConfig.DEFAULT_DIFFICULTY
    artificial_symbol: Symbol = GameConfig.DEFAULT_ARTIFICIAL_SYMBOL
