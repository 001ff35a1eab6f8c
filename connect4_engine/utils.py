"""
utils.py - Constants, enumerations and grid helpers for the Connect Four engine

This module provides the default board dimensions, the enumerations shared by
the engine and its adapters, and small helper functions that operate on a
numpy grid of any size.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple
import numpy as np

# Game constants
DEFAULT_HEIGHT = 6
DEFAULT_WIDTH = 7
CONNECT_N = 4  # Number of pieces in a row to win

Position = Tuple[int, int]


class PlayerId(Enum):
    """Enumeration representing player identities and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'PlayerId':
        """Get the other player."""
        if self == PlayerId.ONE:
            return PlayerId.TWO
        elif self == PlayerId.TWO:
            return PlayerId.ONE
        return PlayerId.EMPTY

    def __str__(self):
        if self == PlayerId.EMPTY:
            return " "
        elif self == PlayerId.ONE:
            return "X"
        else:
            return "O"


class GamePhase(Enum):
    """Enumeration representing the phase of the turn state machine."""
    AWAITING_MOVE = auto()
    WON = auto()
    TIED = auto()

    def is_terminal(self) -> bool:
        """Check if no further moves are accepted."""
        return self != GamePhase.AWAITING_MOVE


class MoveOutcome(Enum):
    """Enumeration of what a call to apply_move reports."""
    CONTINUE = auto()
    WIN = auto()
    TIE = auto()
    REJECTED = auto()


class RejectReason(Enum):
    """Why a move was rejected without touching the board."""
    COLUMN_FULL = auto()
    GAME_OVER = auto()
    OUT_OF_RANGE = auto()


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1)
}


def is_valid_position(row: int, col: int, height: int, width: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        height: Number of rows on the board
        width: Number of columns on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < height and 0 <= col < width


def build_run(row: int, col: int, direction: Direction, length: int = CONNECT_N) -> List[Position]:
    """Return the run of `length` coordinates starting at (row, col) in the given direction."""
    dr, dc = DIRECTION_VECTORS[direction]
    return [(row + dr * i, col + dc * i) for i in range(length)]


def get_column_height(grid: np.ndarray, column: int) -> int:
    """
    Get the current height of a column (number of pieces).

    Args:
        grid: The game grid
        column: The column to check

    Returns:
        Number of occupied cells in the column
    """
    return int(np.count_nonzero(grid[:, column] != PlayerId.EMPTY.value))


def is_gravity_consistent(grid: np.ndarray) -> bool:
    """
    Check that every column's pieces form a contiguous block at the bottom.

    Returns:
        True if no empty cell sits below an occupied one
    """
    height, width = grid.shape
    for col in range(width):
        filled = get_column_height(grid, col)
        column = grid[:, col]
        if np.any(column[:height - filled] != PlayerId.EMPTY.value):
            return False
        if np.any(column[height - filled:] == PlayerId.EMPTY.value):
            return False
    return True


def render_board_ascii(grid: np.ndarray, highlight: Optional[List[Position]] = None) -> str:
    """
    Render the grid as ASCII art.

    Args:
        grid: The game grid
        highlight: Optional positions (e.g. a winning run) drawn in upper case brackets

    Returns:
        ASCII representation of the board
    """
    height, width = grid.shape
    highlight = set(highlight or [])
    result = []
    result.append("|" + "-" * (width * 2 - 1) + "|")

    for row in range(height):
        line = "|"
        for col in range(width):
            symbol = str(PlayerId(int(grid[row, col])))
            if (row, col) in highlight:
                symbol = "*"
            line += symbol
            if col < width - 1:
                line += " "
        line += "|"
        result.append(line)

    result.append("|" + "-" * (width * 2 - 1) + "|")

    # Column numbers only fit one character per cell
    col_numbers = "|"
    for i in range(width):
        col_numbers += str(i % 10)
        if i < width - 1:
            col_numbers += " "
    col_numbers += "|"

    result.append(col_numbers)

    return "\n".join(result)
