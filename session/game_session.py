"""
Game session for TicTacToe.
Owns the board, move history and score, and drives the computer opponent.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List, Tuple

import numpy as np

from logic.board import Board, Symbol, new_board, place, format_board
from logic.win_checker import WinChecker, Outcome
from logic.move_validator import MoveValidator, ValidationResult
from logic.heuristic_player import HeuristicPlayer
from logic.ai_player import MinimaxPlayer
from .config import GameConfig, SessionConfig, Difficulty
from .scheduler import ScheduledCall, ThreadingScheduler

logger = logging.getLogger(__name__)


class PlayerKind(Enum):
    """Who controls a symbol."""
    HUMAN = "human"
    ARTIFICIAL = "artificial"


@dataclass
class Tally:
    """Wins per symbol and draws, kept across rounds."""
    first_wins: int = 0
    second_wins: int = 0
    draws: int = 0

    def record(self, outcome: Outcome):
        """Count a finished round. In-progress outcomes are ignored."""
        if outcome.is_win:
            if outcome.winner == Symbol.FIRST:
                self.first_wins += 1
            else:
                self.second_wins += 1
        elif outcome.is_draw:
            self.draws += 1

    def wins_for(self, symbol: Symbol) -> int:
        return self.first_wins if symbol == Symbol.FIRST else self.second_wins

    @property
    def total(self) -> int:
        """Number of rounds counted."""
        return self.first_wins + self.second_wins + self.draws


class MoveHistory:
    """
    Board snapshots for one round.

    Index 0 is the empty board, index k the board after k plies.
    """

    def __init__(self):
        self._boards: List[Board] = [new_board()]

    def __len__(self) -> int:
        return len(self._boards)

    def __getitem__(self, ply: int) -> Board:
        return self._boards[ply]

    def record(self, ply: int, board: Board):
        """Store board as the snapshot after ply, dropping any redo snapshots from ply on."""
        del self._boards[ply:]
        self._boards.append(board)

    @property
    def boards(self) -> Tuple[Board, ...]:
        return tuple(self._boards)


@dataclass(frozen=True)
class SessionStatus:
    """Everything a front end needs to draw the game."""
    board: Board
    outcome: Outcome
    current_symbol: Symbol
    current_move: int
    is_thinking: bool
    has_started: bool
    tally: Tally = field(default_factory=Tally)


class GameSession:
    """
    A sequence of TicTacToe rounds between two players.

    Game flow:
    1. A human move comes in through apply_move()
    2. The board is evaluated for a win or draw
    3. If the computer is next, its move is scheduled after a short delay
    4. The scheduled move is applied, unless reset() or jump_to()
       happened in the meantime
    5. Repeat until someone wins or it's a draw, then reset() for a new round

    Symbol.FIRST always moves on even plies.
    All mutations go through a lock, so a timer thread and the front end
    can safely share one session.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        scheduler=None,
        rng: Optional[np.random.Generator] = None,
        thinking_delay: Optional[float] = None
    ):
        """
        Initialize a session.

        Args:
            config: Player settings (default: SessionConfig()).
            scheduler: Runs the computer's delayed move
                       (default: ThreadingScheduler).
            rng: Random generator for the computer's choices.
            thinking_delay: Seconds before the computer moves
                            (default: GameConfig.THINKING_DELAY_S).
        """
        self._lock = threading.RLock()

        self.config = config if config is not None else SessionConfig()
        self._next_config = self.config
        # Set when the player picks the computer's symbol for the next round
        self._symbol_chosen = False

        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self.thinking_delay = (
            GameConfig.THINKING_DELAY_S if thinking_delay is None else thinking_delay
        )

        self.rng = rng if rng is not None else np.random.default_rng()
        self.heuristic = HeuristicPlayer(self.rng)
        self.ai = MinimaxPlayer(self.heuristic)
        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        self.tally = Tally()

        # Bumped whenever a scheduled computer move must not land
        self._generation = 0
        self._pending: Optional[ScheduledCall] = None

        self._start_round()

    # ==================== STATE ====================

    @property
    def board(self) -> Board:
        return self._history[self.current_move]

    @property
    def history(self) -> Tuple[Board, ...]:
        return self._history.boards

    @property
    def current_symbol(self) -> Symbol:
        return Symbol.FIRST if self.current_move % 2 == 0 else Symbol.SECOND

    @property
    def is_thinking(self) -> bool:
        """True while a computer move is scheduled but not yet applied."""
        return self._pending is not None

    @property
    def is_terminal(self) -> bool:
        return self.outcome.is_terminal

    @property
    def can_undo(self) -> bool:
        return self.current_move > 0

    @property
    def pending_config(self) -> SessionConfig:
        """Settings that will be used from the next round."""
        return self._next_config

    def player_kind(self, symbol: Symbol) -> PlayerKind:
        if self.config.artificial_opponent and symbol == self.config.artificial_symbol:
            return PlayerKind.ARTIFICIAL
        return PlayerKind.HUMAN

    @property
    def is_artificial_turn(self) -> bool:
        return self.player_kind(self.current_symbol) == PlayerKind.ARTIFICIAL

    def player_scores(self) -> Tuple[int, int]:
        """
        Wins for (player 1, player 2).

        Against the computer, player 1 is the human and player 2 the
        computer, whichever symbol each currently plays.
        """
        if self.config.artificial_opponent:
            computer = self.config.artificial_symbol
            return self.tally.wins_for(computer.opposite()), self.tally.wins_for(computer)
        return self.tally.first_wins, self.tally.second_wins

    def status(self) -> SessionStatus:
        with self._lock:
            return SessionStatus(
                board=self.board,
                outcome=self.outcome,
                current_symbol=self.current_symbol,
                current_move=self.current_move,
                is_thinking=self.is_thinking,
                has_started=self.has_started,
                tally=replace(self.tally),
            )

    # ==================== MOVES ====================

    def check_move(self, index: int) -> ValidationResult:
        """Check whether a human may play index right now."""
        if self.outcome.is_terminal:
            return ValidationResult(is_valid=False, error_message="Game is already over!")

        if self.is_thinking:
            return ValidationResult(is_valid=False, error_message="Computer is thinking...")

        if self.is_artificial_turn:
            return ValidationResult(
                is_valid=False,
                error_message=f"It's the computer's turn ({self.current_symbol.value})"
            )

        return self.validator.validate_move(self.board, index)

    def apply_move(self, index: int) -> bool:
        """
        Play index for the human whose turn it is.

        Returns:
            True if the move was played, False if it was rejected.
        """
        with self._lock:
            result = self.check_move(index)
            if not result.is_valid:
                logger.warning("Move %s rejected: %s", index, result.error_message)
                return False

            self._play(index)
            return True

    def artificial_turn(self) -> Optional[int]:
        """
        Choose and play the computer's move.

        Normally run by the scheduler; a host may also call it directly.

        Returns:
            The cell played, or None if it isn't the computer's turn.
        """
        with self._lock:
            if self.outcome.is_terminal or not self.is_artificial_turn:
                logger.debug("No computer move to make")
                return None

            move = self.choose_artificial_move()

            # Any scheduled call for this turn is now stale
            self._cancel_pending()

            self._play(move)
            return move

    def choose_artificial_move(self) -> int:
        """Pick a move for the side to play according to the difficulty."""
        board = self.board
        mover = self.current_symbol
        difficulty = self.config.difficulty

        if difficulty == Difficulty.EASY:
            move = self.heuristic.random_move(board)
        elif difficulty == Difficulty.MEDIUM:
            if self.rng.random() < GameConfig.MEDIUM_SEARCH_PROBABILITY:
                move = self._smart_move(board, mover)
            else:
                move = self.heuristic.random_move(board)
        else:
            move = self.ai.best_move(board, mover)

        logger.info("Computer (%s, %s) plays %d", mover.value, difficulty.value, move)
        return move

    def _smart_move(self, board: Board, mover: Symbol) -> int:
        if GameConfig.MEDIUM_FULL_SEARCH:
            return self.ai.best_move(board, mover)
        return self.heuristic.pick(board, mover)

    def _play(self, index: int):
        symbol = self.current_symbol
        ply = self.current_move + 1

        self._history.record(ply, place(self.board, index, symbol))
        self.current_move = ply
        self.has_started = True

        logger.debug("%s plays %d:\n%s", symbol.value, index, format_board(self.board))

        self.outcome = self.win_checker.evaluate(self.board)
        if self.outcome.is_terminal:
            self.record_outcome(self.outcome)
        else:
            self._schedule_artificial_move()

    # ==================== OUTCOME ====================

    def record_outcome(self, outcome: Outcome) -> bool:
        """
        Add a finished round to the tally.

        Only the first terminal outcome of a round is counted.

        Returns:
            True if the tally changed.
        """
        with self._lock:
            if not outcome.is_terminal or self._outcome_recorded:
                return False

            self.tally.record(outcome)
            self._outcome_recorded = True

            if outcome.is_win:
                logger.info("%s wins on line %s", outcome.winner.value, outcome.line)
            else:
                logger.info("Game ended in a draw")
            return True

    # ==================== HISTORY ====================

    def jump_to(self, ply: int) -> bool:
        """
        Go back (or forward) to the board after ply moves.

        Snapshots after ply are kept until the next move overwrites them.
        The outcome of the target board is restored straight away, but it
        is not counted in the tally again.

        Returns:
            False if ply is not in the history.
        """
        with self._lock:
            if not 0 <= ply < len(self._history):
                logger.warning("Cannot jump to move %s (history has %d)", ply, len(self._history))
                return False

            self._cancel_pending()
            self.current_move = ply
            self.outcome = self.win_checker.evaluate(self.board)
            self._outcome_recorded = self.outcome.is_terminal

            self._schedule_artificial_move()
            return True

    # ==================== ROUNDS ====================

    def reset(self):
        """
        Start a new round, keeping the tally.

        After a finished game against the computer, the computer switches
        symbols so both sides take turns going first.
        """
        with self._lock:
            self._cancel_pending()

            current = self.config
            upcoming = self._next_config
            if (self.outcome.is_terminal
                    and current.artificial_opponent
                    and not self._symbol_chosen):
                upcoming = replace(upcoming, artificial_symbol=current.artificial_symbol.opposite())

            self.config = self._next_config = upcoming
            self._symbol_chosen = False
            self._start_round()

    def configure(self, **changes):
        """
        Change artificial_opponent, difficulty or artificial_symbol.

        Before the first move of a round the change applies at once,
        otherwise it applies from the next reset().

        Raises:
            TypeError: For unknown settings.
        """
        with self._lock:
            self._next_config = replace(self._next_config, **changes)
            if "artificial_symbol" in changes:
                self._symbol_chosen = True

            if not self.has_started:
                self.reset()
            else:
                logger.info("Settings will apply from the next round")

    def _start_round(self):
        self._history = MoveHistory()
        self.current_move = 0
        self.outcome = Outcome.in_progress()
        self._outcome_recorded = False
        self.has_started = False

        self._schedule_artificial_move()

    # ==================== SCHEDULING ====================

    def _schedule_artificial_move(self):
        if self.outcome.is_terminal or not self.is_artificial_turn or self._pending is not None:
            return

        token = self._generation
        self._pending = self.scheduler.schedule(
            self.thinking_delay, lambda: self._run_scheduled(token)
        )

    def _run_scheduled(self, token: int):
        with self._lock:
            if token != self._generation or self._pending is None:
                logger.debug("Discarding stale computer move")
                return
            self.artificial_turn()

    def _cancel_pending(self):
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def __str__(self) -> str:
        return format_board(self.board)


def new_session(config: Optional[SessionConfig] = None, **kwargs) -> GameSession:
    """Create a session. Extra keyword arguments go to GameSession."""
    return GameSession(config, **kwargs)
