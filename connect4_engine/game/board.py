"""
board.py - Board representation and win/tie detection for Connect Four

This module implements the Board class which owns the grid of cells. It
knows how pieces fall under gravity and how to find four-in-a-row, but not
whose turn it is; turn order lives in connect4_engine.game.rules.
"""

import numpy as np
from typing import List, Optional

from connect4_engine.debug import debug
from connect4_engine.errors import ColumnFull, OutOfRange
from connect4_engine.utils import (CONNECT_N, DEFAULT_HEIGHT, DEFAULT_WIDTH,
                                   DIRECTION_VECTORS, Direction, PlayerId,
                                   Position, build_run, is_valid_position,
                                   render_board_ascii)


class Board:
    """
    Represents a Connect Four grid of `height` rows by `width` columns.

    Row 0 is the top of the board and row `height - 1` the bottom, where
    pieces come to rest.
    """

    def __init__(self, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH):
        """Initialize an empty board."""
        debug.debug(f"Initializing new {height}x{width} Board", "board")
        self.height = height
        self.width = width
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def copy(self) -> 'Board':
        """Create a deep copy of the current board."""
        new_board = Board(self.height, self.width)
        new_board.grid = self.grid.copy()
        return new_board

    def __getitem__(self, position: Position) -> PlayerId:
        row, col = position
        return PlayerId(int(self.grid[row, col]))

    def in_bounds(self, row: int, col: int) -> bool:
        return is_valid_position(row, col, self.height, self.width)

    def is_valid_column(self, column) -> bool:
        """Check that `column` is an integer index onto the board."""
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            return False
        return 0 <= column < self.width

    def find_row_for_column(self, column: int) -> Optional[int]:
        """
        Find where a piece dropped into `column` would land.

        Returns:
            The lowest empty row index, or None if the column is full
        """
        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] == PlayerId.EMPTY.value:
                return row
        return None

    def is_column_full(self, column: int) -> bool:
        return self.grid[0, column] != PlayerId.EMPTY.value

    def drop(self, column: int, player: PlayerId) -> int:
        """
        Drop a piece for `player` into `column`.

        Args:
            column: The column to place a piece (0-indexed)
            player: The owner of the new piece

        Returns:
            The row the piece came to rest in

        Raises:
            OutOfRange: column is not on the board
            ColumnFull: column has no empty cell
        """
        if not self.is_valid_column(column):
            raise OutOfRange(f"Column {column!r} is outside 0-{self.width - 1}.")

        row = self.find_row_for_column(column)
        if row is None:
            raise ColumnFull(f"Column {column} is full.")

        self.grid[row, column] = player.value
        debug.trace(f"Placed {player.name} at ({row}, {column})", "board")
        return row

    def get_valid_moves(self) -> List[int]:
        """Return the columns that still have room for a piece."""
        return [col for col in range(self.width) if not self.is_column_full(col)]

    def is_winning_run(self, run: List[Position], player: PlayerId) -> bool:
        """Check that every cell of `run` is on the board and owned by `player`."""
        return all(self.in_bounds(r, c) and self.grid[r, c] == player.value for r, c in run)

    def find_winning_run(self, player: PlayerId) -> Optional[List[Position]]:
        """
        Scan every cell and direction for four of `player`'s pieces in a row.

        Each cell is treated as the start of a run in every direction; the
        first complete run short-circuits the search.

        Returns:
            The winning coordinates, or None if `player` has no line
        """
        for row in range(self.height):
            for col in range(self.width):
                for direction in Direction:
                    run = build_run(row, col, direction)
                    if self.is_winning_run(run, player):
                        return run
        return None

    def find_winning_run_through(self, row: int, col: int) -> Optional[List[Position]]:
        """
        Look only at runs passing through (row, col).

        Gives the same win/no-win answer as find_winning_run for the piece
        just placed at (row, col), while touching far fewer cells.
        """
        player = self[row, col]
        if player == PlayerId.EMPTY:
            return None

        for direction in Direction:
            dr, dc = DIRECTION_VECTORS[direction]
            for offset in range(CONNECT_N):
                run = build_run(row - dr * offset, col - dc * offset, direction)
                if self.is_winning_run(run, player):
                    return run
        return None

    def is_full(self) -> bool:
        """
        Check whether the board is full.

        Only the top row is inspected: pieces always fill columns from the
        bottom, so a full top row means every column is full.
        """
        return bool(np.all(self.grid[0, :] != PlayerId.EMPTY.value))

    def count_pieces(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid as a numpy array."""
        return self.grid.copy()

    def render(self, highlight: Optional[List[Position]] = None) -> str:
        return render_board_ascii(self.grid, highlight)

    def __str__(self) -> str:
        return self.render()
