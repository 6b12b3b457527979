"""
Console front end for TicTacToe.

A thin shell over GameSession: it reads commands, forwards them to the
session and prints the board. All game rules live in logic/ and session/.

Commands:
    1-9     place a mark (cells are numbered left to right, top to bottom)
    u       undo back to your previous turn
    j N     jump to the board after N moves
    r       new round
    q       quit
"""

import argparse
import logging
import time
from typing import Optional

import numpy as np

from logic.board import Symbol, format_board
from session.config import GameConfig, SessionConfig, Difficulty
from session.game_session import GameSession, PlayerKind


class ConsoleGame:
    """
    Plays rounds in the terminal.

    Game flow:
    1. Print the board and whose turn it is
    2. Wait for the computer if it is thinking, else read a command
    3. Repeat until the player quits
    """

    POLL_INTERVAL_S = 0.05

    def __init__(self, session: GameSession):
        self.session = session
        self.is_running = False

    def describe_status(self) -> str:
        """One-line status, e.g. 'Next player: X (human)'."""
        session = self.session
        outcome = session.outcome

        if outcome.is_win:
            kind = session.player_kind(outcome.winner).value
            return f"Winner: {outcome.winner.value} ({kind})"
        if outcome.is_draw:
            return "Game ended in a draw!"
        if session.is_thinking:
            return "Computer is thinking..."

        kind = session.player_kind(session.current_symbol).value
        return f"Next player: {session.current_symbol.value} ({kind})"

    def describe_score(self) -> str:
        tally = self.session.tally
        player1, player2 = self.session.player_scores()
        return (
            f"Player 1: {player1}  Player 2: {player2}  Draws: {tally.draws}"
            f"  (X: {tally.first_wins}, O: {tally.second_wins})"
        )

    def start(self):
        """Start playing."""
        config = self.session.config
        print("\n" + "=" * 40)
        print("   TicTacToe")
        if config.artificial_opponent:
            print(f"   Computer plays: {config.artificial_symbol.value} ({config.difficulty.value})")
            if config.difficulty == Difficulty.HARD:
                print("   The computer will never lose. At best, you can force a draw.")
        else:
            print("   Two players")
        print("=" * 40 + "\n")

        self.is_running = True
        while self.is_running:
            self._wait_for_computer()
            self._show()
            self.handle_command(input("> ").strip().lower())

    def handle_command(self, command: str):
        """Run one command typed by the player."""
        session = self.session

        if command == "q":
            self.is_running = False
        elif command == "r":
            session.reset()
        elif command == "u":
            self._undo()
        elif command.startswith("j"):
            try:
                ply = int(command[1:])
            except ValueError:
                print("Usage: j N")
                return
            if not session.jump_to(ply):
                print(f"No move {ply} in this game.")
        elif command.isdigit():
            if not session.apply_move(int(command) - 1):
                print(session.check_move(int(command) - 1).error_message or "Illegal move.")
        else:
            print("Type 1-9, u, j N, r or q.")

    def _undo(self):
        session = self.session
        ply = session.current_move - 1
        # Step past the computer's reply so the human is to move again
        while ply > 0 and session.player_kind(
                Symbol.FIRST if ply % 2 == 0 else Symbol.SECOND) == PlayerKind.ARTIFICIAL:
            ply -= 1
        if ply < 0 or not session.jump_to(ply):
            print("Nothing to undo.")

    def _wait_for_computer(self):
        while self.session.is_thinking:
            time.sleep(self.POLL_INTERVAL_S)

    def _show(self):
        print()
        print(format_board(self.session.board, show_indices=True))
        print()
        print(self.describe_status())
        print(self.describe_score())


def build_session(args: argparse.Namespace) -> GameSession:
    """Create the session described by the command line."""
    config = SessionConfig(
        artificial_opponent=not args.two_players,
        difficulty=Difficulty(args.difficulty),
        artificial_symbol=Symbol(args.computer_plays),
    )
    rng = np.random.default_rng(args.seed)
    return GameSession(config, rng=rng, thinking_delay=args.delay)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="TicTacToe in the terminal")
    parser.add_argument(
        "--two-players",
        action="store_true",
        help="Two humans, no computer opponent"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=GameConfig.DEFAULT_DIFFICULTY.value,
        help="Computer difficulty"
    )
    parser.add_argument(
        "--computer-plays",
        choices=[s.value for s in Symbol],
        default=GameConfig.DEFAULT_ARTIFICIAL_SYMBOL.value,
        help="Symbol the computer plays in the first round"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=GameConfig.THINKING_DELAY_S,
        help="Seconds the computer 'thinks' before moving"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s: %(message)s"
    )

    game = ConsoleGame(build_session(args))
    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\nGame quit by user.")


if __name__ == "__main__":
    main()
