"""
connect4_engine.game - Core game mechanics for Connect Four

This package contains the board representation, color validation and the
turn state machine.
"""

from connect4_engine.game.board import Board
from connect4_engine.game.rules import (ConnectFourGame, GameObserver,
                                        GameState, MoveResult, Player)

__all__ = ['Board', 'ConnectFourGame', 'GameObserver', 'GameState', 'MoveResult', 'Player']
