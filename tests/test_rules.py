import random

import numpy as np
import pytest

from connect4_engine.errors import ColumnFull, GameOver, InvalidConfiguration, OutOfRange
from connect4_engine.game.rules import ConnectFourGame, Player
from connect4_engine.utils import (GamePhase, MoveOutcome, PlayerId,
                                   RejectReason, is_gravity_consistent)

from tests.conftest import TIE_SEQUENCE, play


class TestConfiguration:
    def test_new_game_starts_with_player_one(self, game):
        assert game.current_player == Player("red", PlayerId.ONE)
        assert game.phase == GamePhase.AWAITING_MOVE
        assert game.winner is None
        assert (game.height, game.width) == (6, 7)
        assert game.board.count_pieces() == 0

    def test_accepts_player_objects(self):
        game = ConnectFourGame(Player("blue"), Player("green"), height=5, width=8)
        assert game.player1.player_id == PlayerId.ONE
        assert game.player2.player_id == PlayerId.TWO
        assert game.state.grid.shape == (5, 8)

    @pytest.mark.parametrize("p1, p2", [
        ("red", "red"),
        ("Red", " red "),
        ("#ff0000", "#FF0000"),
    ])
    def test_same_color_rejected(self, p1, p2):
        with pytest.raises(InvalidConfiguration, match="different colors"):
            ConnectFourGame(p1, p2)

    @pytest.mark.parametrize("p1, p2", [
        ("", "blue"),
        ("red", "   "),
        ("red", "notacolor"),
        ("#12", "blue"),
    ])
    def test_invalid_color_rejected(self, p1, p2):
        with pytest.raises(InvalidConfiguration, match="not a valid color"):
            ConnectFourGame(p1, p2)

    @pytest.mark.parametrize("height, width", [(0, 7), (6, 0), (-1, 7), (6, 2.5), (True, 7)])
    def test_bad_dimensions_rejected(self, height, width):
        with pytest.raises(InvalidConfiguration):
            ConnectFourGame("red", "yellow", height=height, width=width)

    def test_custom_color_validator(self):
        palette = {"x", "o"}
        game = ConnectFourGame("x", "o", color_validator=palette.__contains__)
        assert game.player1.color == "x"
        with pytest.raises(InvalidConfiguration):
            ConnectFourGame("red", "o", color_validator=palette.__contains__)


class TestScenarios:
    def test_vertical_win(self, game):
        results = play(game, [0, 1, 0, 1, 0, 1, 0])

        assert [r.outcome for r in results[:-1]] == [MoveOutcome.CONTINUE] * 6
        final = results[-1]
        assert final.outcome == MoveOutcome.WIN
        assert final.winner == game.player1
        assert set(final.winning_run) == {(5, 0), (4, 0), (3, 0), (2, 0)}
        assert game.phase == GamePhase.WON
        assert game.winner == game.player1

    def test_horizontal_win(self, game):
        results = play(game, [0, 6, 1, 6, 2, 6, 3])

        final = results[-1]
        assert final.outcome == MoveOutcome.WIN
        assert final.player == game.player1
        assert (final.row, final.column) == (5, 3)
        assert set(final.winning_run) == {(5, 0), (5, 1), (5, 2), (5, 3)}

    def test_full_board_without_line_is_a_tie(self, game):
        assert len(TIE_SEQUENCE) == 42
        results = play(game, TIE_SEQUENCE)

        assert [r.outcome for r in results[:-1]] == [MoveOutcome.CONTINUE] * 41
        assert results[-1].outcome == MoveOutcome.TIE
        assert game.phase == GamePhase.TIED
        assert game.winner is None
        assert game.board.is_full()
        assert game.get_valid_moves() == []

    def test_seventh_drop_into_full_column(self, game):
        play(game, [2] * 6)
        before = game.state
        assert before.current_player == game.player1

        result = game.apply_move(2)

        assert result.outcome == MoveOutcome.REJECTED
        assert result.reason == RejectReason.COLUMN_FULL
        assert np.array_equal(game.state.grid, before.grid)
        assert game.current_player == before.current_player
        assert game.move_count == 6

    def test_duplicate_colors_create_no_game(self):
        with pytest.raises(InvalidConfiguration) as excinfo:
            ConnectFourGame(Player("red"), Player("red"))
        assert "Please enter 2 valid different colors!" in str(excinfo.value)

    def test_move_after_win_is_game_over(self, game):
        play(game, [0, 1, 0, 1, 0, 1, 0])
        before = game.state

        result = game.apply_move(3)

        assert result.outcome == MoveOutcome.REJECTED
        assert result.reason == RejectReason.GAME_OVER
        assert np.array_equal(game.state.grid, before.grid)
        assert game.winner == before.winner
        assert game.winning_run == before.winning_run


class TestProperties:
    def test_turns_alternate(self, game):
        seen = []
        for column in [3, 3, 4, 4, 2, 5, 6]:
            seen.append(game.current_player.player_id)
            result = game.apply_move(column)
            assert result.outcome == MoveOutcome.CONTINUE
            assert result.next_player == game.current_player
        assert seen == [PlayerId.ONE, PlayerId.TWO] * 3 + [PlayerId.ONE]

    @pytest.mark.parametrize("seed", range(20))
    def test_random_games_keep_invariants(self, seed):
        rng = random.Random(seed)
        game = ConnectFourGame("red", "yellow")
        while not game.is_game_over():
            mover = game.current_player
            result = game.apply_move(rng.choice(game.get_valid_moves()))
            assert is_gravity_consistent(game.board.grid)
            if result.outcome == MoveOutcome.CONTINUE:
                assert game.current_player != mover
            else:
                assert game.current_player == mover

        if game.phase == GamePhase.TIED:
            assert game.board.is_full()
            assert game.board.find_winning_run(PlayerId.ONE) is None
            assert game.board.find_winning_run(PlayerId.TWO) is None
        else:
            assert game.board.find_winning_run(game.winner.player_id) is not None

    @pytest.mark.parametrize("seed", range(20))
    def test_incremental_check_matches_full_scan(self, seed):
        rng = random.Random(seed)
        full = ConnectFourGame("red", "yellow")
        incremental = ConnectFourGame("red", "yellow", incremental_win_check=True)
        while not full.is_game_over():
            column = rng.choice(full.get_valid_moves())
            assert full.apply_move(column).outcome == incremental.apply_move(column).outcome
        assert incremental.phase == full.phase

    def test_winning_move_that_fills_board_is_a_win(self):
        game = ConnectFourGame("red", "yellow", height=1, width=7)
        results = play(game, [0, 4, 1, 5, 2, 6, 3])

        assert game.board.is_full()
        assert results[-1].outcome == MoveOutcome.WIN
        assert game.phase == GamePhase.WON

    def test_tied_game_absorbs_moves(self, game):
        play(game, TIE_SEQUENCE)
        before = game.state
        for column in range(7):
            assert game.apply_move(column).reason == RejectReason.GAME_OVER
        assert np.array_equal(game.state.grid, before.grid)
        assert game.phase == GamePhase.TIED

    @pytest.mark.parametrize("column", [-1, 7, "0", None])
    def test_out_of_range_is_rejected(self, game, column):
        result = game.apply_move(column)
        assert result.reason == RejectReason.OUT_OF_RANGE
        assert game.move_count == 0
        assert game.current_player == game.player1


class TestDrop:
    def test_drop_raises_for_each_rejection(self, game):
        with pytest.raises(OutOfRange):
            game.drop(9)
        play(game, [1] * 6)
        with pytest.raises(ColumnFull):
            game.drop(1)
        play(game, [0, 2, 0, 2, 0, 2, 0])
        with pytest.raises(GameOver):
            game.drop(3)

    def test_drop_returns_result(self, game):
        result = game.drop(4)
        assert result.outcome == MoveOutcome.CONTINUE
        assert result.row == 5
        assert result.next_player == game.player2


class TestReset:
    def test_reset_discards_state(self, game):
        play(game, [0, 1, 0, 1, 0, 1, 0])
        state = game.reset()

        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.move_count == 0
        assert state.winner is None
        assert state.winning_run == ()
        assert not state.grid.any()
        assert game.current_player == game.player1

    def test_reset_with_new_settings(self, game):
        game.apply_move(0)
        game.reset(player1="blue", height=4, width=5)

        assert game.player1 == Player("blue", PlayerId.ONE)
        assert game.player2.color == "yellow"
        assert game.state.grid.shape == (4, 5)

    def test_failed_reset_keeps_current_session(self, game):
        game.apply_move(3)
        with pytest.raises(InvalidConfiguration):
            game.reset(player2="red")

        assert game.move_count == 1
        assert game.player2.color == "yellow"
        assert game.current_player == game.player2


class TestObservers:
    def test_observer_sees_start_moves_and_resets(self, observer):
        game = ConnectFourGame("red", "yellow", observers=[observer])
        assert len(observer.resets) == 1

        game.apply_move(0)
        game.apply_move(-1)
        game.reset()

        outcomes = [result.outcome for result, _ in observer.moves]
        assert outcomes == [MoveOutcome.CONTINUE, MoveOutcome.REJECTED]
        first_state = observer.moves[0][1]
        assert first_state.grid[5, 0] == PlayerId.ONE.value
        assert first_state.current_player == game.player2
        assert len(observer.resets) == 2

    def test_removed_observer_is_not_called(self, game, observer):
        game.add_observer(observer)
        game.apply_move(0)
        game.remove_observer(observer)
        game.apply_move(0)
        assert len(observer.moves) == 1

    def test_snapshot_is_detached_from_board(self, game):
        state = game.state
        game.apply_move(0)
        assert not state.grid.any()
