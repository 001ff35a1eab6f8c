from typing import Iterable, List

import pytest

from connect4_engine.game.rules import ConnectFourGame, GameObserver, MoveResult

# Fills a 6x7 board with no four-in-a-row: columns are paired so each pair
# takes twelve alternating moves, then column 5 is filled on its own.
TIE_SEQUENCE = (
    [0, 2, 2, 0, 0, 2, 2, 0, 0, 2, 2, 0]
    + [1, 3, 3, 1, 1, 3, 3, 1, 1, 3, 3, 1]
    + [4, 6, 6, 4, 4, 6, 6, 4, 4, 6, 6, 4]
    + [5, 5, 5, 5, 5, 5]
)


def play(game: ConnectFourGame, columns: Iterable[int]) -> List[MoveResult]:
    """Apply each column in turn and return every result."""
    return [game.apply_move(column) for column in columns]


class RecordingObserver(GameObserver):
    def __init__(self):
        self.moves = []
        self.resets = []

    def on_move(self, result, state):
        self.moves.append((result, state))

    def on_reset(self, state):
        self.resets.append(state)


@pytest.fixture
def game():
    return ConnectFourGame("red", "yellow")


@pytest.fixture
def observer():
    return RecordingObserver()
