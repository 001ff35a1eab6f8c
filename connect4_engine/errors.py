"""
errors.py - Exceptions raised by the Connect Four engine
"""

from connect4_engine.utils import RejectReason


class Error(Exception):
    """A base error class for the connect4_engine package."""

    def __init__(self, message: str = "connect4_engine: Unknown error occurred.") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidConfiguration(Error):
    """The players or board dimensions given to a new game are unusable."""
    pass


class MoveRejected(Error):
    """A move was refused before anything on the board changed."""
    reason: RejectReason = None


class ColumnFull(MoveRejected):
    """The targeted column has no empty cell left."""
    reason = RejectReason.COLUMN_FULL


class GameOver(MoveRejected):
    """A move was attempted after the game was won or tied."""
    reason = RejectReason.GAME_OVER


class OutOfRange(MoveRejected):
    """The column index is not on the board."""
    reason = RejectReason.OUT_OF_RANGE
