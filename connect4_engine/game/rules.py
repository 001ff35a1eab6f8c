"""
rules.py - Turn state machine and session management for Connect Four

This module provides:
1. The Player descriptor and the immutable GameState / MoveResult values
   handed to front ends
2. GameObserver, the hook a presentation layer implements to be told about
   moves and resets
3. ConnectFourGame, the session object that owns the board, the active
   player and the game phase
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.errors import GameOver, InvalidConfiguration, MoveRejected
from connect4_engine.game.board import Board
from connect4_engine.game.colors import ColorValidator, is_color, normalize_color
from connect4_engine.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, GamePhase,
                                   MoveOutcome, PlayerId, Position,
                                   RejectReason)


@dataclass(frozen=True)
class Player:
    """A participant: which seat they occupy and the color of their pieces."""
    color: str
    player_id: PlayerId = PlayerId.ONE

    def __str__(self) -> str:
        return self.color


PlayerLike = Union[Player, str]


@dataclass(frozen=True, eq=False)
class GameState:
    """Read-only snapshot of a game at one point in time."""
    grid: np.ndarray
    current_player: Player
    phase: GamePhase
    winner: Optional[Player] = None
    winning_run: Tuple[Position, ...] = ()
    move_count: int = 0

    @property
    def height(self) -> int:
        return self.grid.shape[0]

    @property
    def width(self) -> int:
        return self.grid.shape[1]


@dataclass(frozen=True)
class MoveResult:
    """
    What happened when a column was submitted.

    `player` is whoever made (or tried to make) the move. `next_player` is
    only set for CONTINUE results.
    """
    outcome: MoveOutcome
    column: int
    player: Player
    row: Optional[int] = None
    next_player: Optional[Player] = None
    winning_run: Tuple[Position, ...] = ()
    reason: Optional[RejectReason] = None
    message: str = ""

    @property
    def applied(self) -> bool:
        return self.outcome != MoveOutcome.REJECTED

    @property
    def winner(self) -> Optional[Player]:
        return self.player if self.outcome == MoveOutcome.WIN else None


class GameObserver:
    """Base class for front ends that want to follow a game."""

    def on_move(self, result: MoveResult, state: GameState) -> None:
        """Called after every apply_move, including rejected ones."""

    def on_reset(self, state: GameState) -> None:
        """Called when a session starts or is reset."""


def _make_player(value: PlayerLike, player_id: PlayerId) -> Player:
    if isinstance(value, Player):
        return Player(color=value.color, player_id=player_id)
    return Player(color=value, player_id=player_id)


def _validate_dimension(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise InvalidConfiguration(f"Board {name} must be a positive whole number, got {value!r}.")


class ConnectFourGame:
    """
    A single Connect Four session between two players.

    The session owns all mutable state. Front ends submit columns through
    apply_move (or drop, which raises instead of returning a rejection) and
    follow along through GameObserver callbacks or the `state` snapshot.
    """

    def __init__(self,
                 player1: PlayerLike,
                 player2: PlayerLike,
                 height: int = DEFAULT_HEIGHT,
                 width: int = DEFAULT_WIDTH,
                 color_validator: ColorValidator = is_color,
                 incremental_win_check: bool = False,
                 observers: Optional[List[GameObserver]] = None):
        """
        Initialize a new game.

        Args:
            player1: First player (moves first), or just their color
            player2: Second player, or just their color
            height: Number of rows
            width: Number of columns
            color_validator: Predicate deciding whether a color token is usable
            incremental_win_check: Only inspect runs through the last piece
                instead of rescanning the whole board
            observers: Front ends to notify of moves and resets

        Raises:
            InvalidConfiguration: colors invalid or equal, or bad dimensions
        """
        self.color_validator = color_validator
        self.incremental_win_check = incremental_win_check
        self._observers: List[GameObserver] = list(observers or [])
        self._initialize(player1, player2, height, width)
        self._notify_reset()

    def _initialize(self, player1: PlayerLike, player2: PlayerLike, height: int, width: int) -> None:
        p1 = _make_player(player1, PlayerId.ONE)
        p2 = _make_player(player2, PlayerId.TWO)
        try:
            self._check_configuration(p1, p2, height, width)
        except InvalidConfiguration as e:
            debug.error(f"Cannot start game: {e}", "game")
            raise

        debug.debug(f"Starting {height}x{width} game: {p1.color} vs {p2.color}", "game")
        self.player1 = p1
        self.player2 = p2
        self.board = Board(height, width)
        self.current_player = p1
        self.phase = GamePhase.AWAITING_MOVE
        self.winner: Optional[Player] = None
        self.winning_run: Tuple[Position, ...] = ()
        self.move_count = 0

    def _check_configuration(self, p1: Player, p2: Player, height: int, width: int) -> None:
        for player in (p1, p2):
            if not self.color_validator(player.color):
                raise InvalidConfiguration(
                    f"Player {player.player_id.value} color {player.color!r} is not a valid color. "
                    "Please enter 2 valid different colors!")
        if normalize_color(p1.color) == normalize_color(p2.color):
            raise InvalidConfiguration(
                f"Both players chose {normalize_color(p1.color)!r}. Please enter 2 valid different colors!")
        _validate_dimension("height", height)
        _validate_dimension("width", width)

    # Observers
    def add_observer(self, observer: GameObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: GameObserver) -> None:
        self._observers.remove(observer)

    def _notify_reset(self) -> None:
        if not self._observers:
            return
        state = self.state
        for observer in list(self._observers):
            observer.on_reset(state)

    def _notify_move(self, result: MoveResult) -> None:
        if not self._observers:
            return
        state = self.state
        for observer in list(self._observers):
            observer.on_move(result, state)

    # Queries
    @property
    def height(self) -> int:
        return self.board.height

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def players(self) -> Tuple[Player, Player]:
        return self.player1, self.player2

    @property
    def state(self) -> GameState:
        return GameState(
            grid=self.board.get_state(),
            current_player=self.current_player,
            phase=self.phase,
            winner=self.winner,
            winning_run=self.winning_run,
            move_count=self.move_count,
        )

    def is_game_over(self) -> bool:
        return self.phase.is_terminal()

    def get_valid_moves(self) -> List[int]:
        """Columns that would accept a piece right now (none once the game is over)."""
        if self.is_game_over():
            return []
        return self.board.get_valid_moves()

    def other_player(self, player: Player) -> Player:
        return self.player2 if player == self.player1 else self.player1

    def render(self) -> str:
        return self.board.render(list(self.winning_run))

    # Moves
    def drop(self, column: int) -> MoveResult:
        """
        Apply a move for the current player, raising if it is refused.

        Raises:
            GameOver: the game has already been won or tied
            OutOfRange: column is not on the board
            ColumnFull: column has no empty cell
        """
        if self.is_game_over():
            raise GameOver(f"The game is over ({self.phase.name.lower()}); no more moves are accepted.")

        mover = self.current_player
        row = self.board.drop(column, mover.player_id)
        self.move_count += 1
        debug.debug(f"{mover.color} played column {column} (row {row})", "game")

        if self.incremental_win_check:
            run = self.board.find_winning_run_through(row, column)
        else:
            run = self.board.find_winning_run(mover.player_id)

        if run is not None:
            self.phase = GamePhase.WON
            self.winner = mover
            self.winning_run = tuple(run)
            debug.info(f"The {mover.color} player won with {self.winning_run}", "game")
            return MoveResult(MoveOutcome.WIN, column, mover, row=row, winning_run=self.winning_run,
                              message=f"The {mover.color} player won!")

        if self.board.is_full():
            self.phase = GamePhase.TIED
            debug.info("Board is full; game tied", "game")
            return MoveResult(MoveOutcome.TIE, column, mover, row=row,
                              message="Player 1 and 2 have tied!")

        self.current_player = self.other_player(mover)
        return MoveResult(MoveOutcome.CONTINUE, column, mover, row=row, next_player=self.current_player,
                          message=f"{self.current_player.color} player's turn")

    def apply_move(self, column: int) -> MoveResult:
        """
        Apply a move for the current player.

        Refused moves come back as REJECTED results carrying the reason;
        the board and turn are untouched in that case.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            The MoveResult, which is also delivered to every observer
        """
        mover = self.current_player
        try:
            result = self.drop(column)
        except MoveRejected as e:
            debug.warning(f"Rejected move by {mover.color} in column {column!r}: {e}", "game")
            result = MoveResult(MoveOutcome.REJECTED, column, mover, reason=e.reason, message=str(e))

        self._notify_move(result)
        return result

    def reset(self,
              player1: Optional[PlayerLike] = None,
              player2: Optional[PlayerLike] = None,
              height: Optional[int] = None,
              width: Optional[int] = None) -> GameState:
        """
        Start a new session, discarding the current one.

        Arguments left as None keep their current value.

        Raises:
            InvalidConfiguration: the new settings are unusable; the current
                session is left as it was
        """
        self._initialize(
            player1 if player1 is not None else self.player1,
            player2 if player2 is not None else self.player2,
            height if height is not None else self.height,
            width if width is not None else self.width,
        )
        debug.debug("Game reset", "game")
        self._notify_reset()
        return self.state
