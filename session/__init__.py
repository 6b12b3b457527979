"""
Session module for TicTacToe.
Runs rounds, keeps score, and schedules the computer's moves.
"""

from .config import GameConfig, SessionConfig, Difficulty
from .scheduler import ThreadingScheduler, ManualScheduler
from .game_session import GameSession, SessionStatus, Tally, MoveHistory, PlayerKind, new_session
