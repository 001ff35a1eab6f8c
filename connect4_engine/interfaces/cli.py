"""
cli.py - Command-line interface for the Connect Four engine

Two humans share a terminal: this module reads their column choices (the
input side) and prints the board and messages whenever the engine reports a
move or a reset (the presentation side). A benchmark command plays random
games to time the engine.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.errors import InvalidConfiguration
from connect4_engine.game.rules import ConnectFourGame, GameObserver, GameState, MoveResult
from connect4_engine.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, MoveOutcome,
                                   RejectReason, render_board_ascii)

QUIT_COMMANDS = ('q', 'quit', 'exit')
RESTART_COMMANDS = ('r', 'restart', 'reset')

REJECTION_MESSAGES = {
    RejectReason.COLUMN_FULL: "That column is full, pick another one.",
    RejectReason.GAME_OVER: "The game is over. Press 'r' to play again.",
    RejectReason.OUT_OF_RANGE: "That column is not on the board.",
}


def parse_column(raw: str, width: int) -> Optional[int]:
    """
    Turn raw user input into a column index.

    Args:
        raw: Text typed by the user
        width: Number of columns on the board

    Returns:
        Column index, or None if the input does not name a column
    """
    try:
        column = int(raw.strip())
    except (ValueError, AttributeError):
        return None
    if 0 <= column < width:
        return column
    return None


class TerminalPresenter(GameObserver):
    """Prints the board and game messages to a text stream."""

    def __init__(self, write: Callable[[str], None] = print):
        self.write = write

    def on_reset(self, state: GameState) -> None:
        self.write(self._board(state))
        self.write(f"{state.current_player.color} player's turn")

    def on_move(self, result: MoveResult, state: GameState) -> None:
        if result.outcome == MoveOutcome.REJECTED:
            self.write(REJECTION_MESSAGES.get(result.reason, result.message))
            return

        self.write(self._board(state))
        if result.outcome == MoveOutcome.WIN:
            self.write(f"The {result.player.color} player won!")
        elif result.outcome == MoveOutcome.TIE:
            self.write("Player 1 and 2 have tied!")
        else:
            self.write(f"{result.next_player.color} player's turn")

    @staticmethod
    def _board(state: GameState) -> str:
        return render_board_ascii(state.grid, list(state.winning_run))


class SimpleCLI:
    """Simple command-line interface for two human players."""

    def __init__(self,
                 input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        """Initialize the CLI."""
        self.input = input_func
        self.output = output_func
        self.args = None
        self.game: Optional[ConnectFourGame] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game in the terminal')
        play_parser.add_argument('--p1', default='red', help='Color of player 1 (moves first)')
        play_parser.add_argument('--p2', default='yellow', help='Color of player 2')
        play_parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='Number of rows')
        play_parser.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='Number of columns')

        benchmark_parser = subparsers.add_parser('benchmark', help='Time random games')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of games to play')
        benchmark_parser.add_argument('--incremental', action='store_true',
                                      help='Only check runs through the last piece for wins')

        for sub in (play_parser, benchmark_parser):
            sub.add_argument('--debug', action='store_true', help='Enable debug logging')
            sub.add_argument('--debug_level',
                             choices=[level.name.lower() for level in DebugLevel],
                             default='warning',
                             help='Logging level (ignored when --debug is given)')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        self.output("Please specify a command. Use --help for options.")
        return 1

    def play_game(self) -> int:
        """Play a Connect Four game interactively."""
        try:
            self.game = ConnectFourGame(
                self.args.p1.lower(), self.args.p2.lower(),
                height=self.args.height, width=self.args.width,
                observers=[TerminalPresenter(self.output)],
            )
        except InvalidConfiguration as e:
            self.output(str(e))
            return 1

        self.output(f"Enter a column number (0-{self.game.width - 1}) to drop a piece.")
        self.output("Other commands: 'q' to quit, 'r' to restart.")

        while True:
            prompt = "Play again? ('r' to restart, 'q' to quit): " if self.game.is_game_over() \
                else f"{self.game.current_player.color} player, your move: "
            try:
                raw = self.input(prompt)
            except EOFError:
                raw = 'q'

            command = raw.strip().lower()
            if command in QUIT_COMMANDS:
                self.output("Quitting game.")
                return 0
            if command in RESTART_COMMANDS:
                self.output("Game restarted.")
                self.game.reset()
                continue
            if self.game.is_game_over():
                continue

            column = parse_column(raw, self.game.width)
            if column is None:
                self.output(f"Invalid input. Enter a column between 0 and {self.game.width - 1}.")
                continue

            self.game.apply_move(column)

    def benchmark(self) -> int:
        """Play random games to completion and report timings."""
        iterations = self.args.iterations
        self.output(f"Running benchmark with {iterations} games...")

        game = ConnectFourGame('red', 'yellow', incremental_win_check=self.args.incremental)
        totals = {MoveOutcome.WIN: 0, MoveOutcome.TIE: 0}
        moves = 0

        debug.start_timer("benchmark")
        for _ in range(iterations):
            game.reset()
            while not game.is_game_over():
                result = game.apply_move(random.choice(game.get_valid_moves()))
                moves += 1
                if result.outcome in totals:
                    totals[result.outcome] += 1
        elapsed = debug.end_timer("benchmark", "cli") or 0.0

        self.output(f"Played {iterations} games ({moves} moves) in {elapsed:.3f} seconds")
        self.output(f"Wins: {totals[MoveOutcome.WIN]}, ties: {totals[MoveOutcome.TIE]}")
        if moves:
            self.output(f"{elapsed / moves * 1000:.4f} ms per move")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
