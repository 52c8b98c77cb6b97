"""
Tests for snapshot models.
"""

import pytest
from pydantic import ValidationError

from knucklebones.engine.base import Difficulty, GamePhase, Side
from knucklebones.engine.grid import Grid
from knucklebones.models import GameSnapshot, GridSnapshot


class TestGridSnapshot:
    """Tests for GridSnapshot."""

    def test_from_grid(self):
        grid = Grid.from_columns([[3, 3], [1, 2, 3], []])
        snap = GridSnapshot.from_grid(grid)
        assert snap.columns == [[3, 3, None], [1, 2, 3], [None, None, None]]
        assert snap.column_scores == [12, 6, 0]
        assert snap.total == 18

    def test_frozen(self):
        snap = GridSnapshot.from_grid(Grid.empty())
        with pytest.raises(ValidationError):
            snap.total = 5

    def test_requires_three_columns(self):
        with pytest.raises(ValidationError):
            GridSnapshot(columns=[[None] * 3] * 2, column_scores=[0, 0])


class TestGameSnapshot:
    """Tests for GameSnapshot."""

    def test_fresh_game(self, make_game):
        snap = make_game(difficulty="hard").snapshot()
        assert snap.phase is GamePhase.PLAYING
        assert snap.active_side is Side.PLAYER
        assert snap.pending_value is None
        assert snap.winner is None
        assert snap.difficulty is Difficulty.HARD
        assert snap.available_columns == [0, 1, 2]
        assert snap.player.total == 0

    def test_mid_game(self, make_game):
        game = make_game(rolls=[5, 2])
        game.roll_die()
        game.place_pending(1)
        game.roll_die(Side.OPPONENT)

        snap = game.snapshot()

        assert snap.active_side is Side.OPPONENT
        assert snap.pending_value == 2
        assert snap.move_count == 1
        assert snap.player.columns[1] == [5, None, None]
        assert snap.player.total == 5

    def test_snapshot_is_detached(self, make_game):
        game = make_game(rolls=[5])
        snap = game.snapshot()
        game.roll_die()
        game.place_pending(0)
        assert snap.player.total == 0

    def test_json_round_trip(self, make_game):
        game = make_game(rolls=[4])
        game.roll_die()
        data = game.snapshot().model_dump(mode="json")
        assert data["phase"] == "playing"
        assert data["active_side"] == "player"
        assert data["pending_value"] == 4
        assert data["difficulty"] == "medium"
        assert GameSnapshot.model_validate(data) == game.snapshot()

    def test_no_columns_offered_after_game_over(self, make_game):
        game = make_game(rolls=[3])
        game.state.player_grid = Grid.from_columns([[1, 2, 3], [4, 5, 6], [1, 2]])
        game.roll_die()
        game.place_pending(2)

        snap = game.snapshot()

        assert snap.phase is GamePhase.GAME_OVER
        assert snap.available_columns == []

    def test_no_columns_offered_before_coin_flip(self, make_game):
        snap = make_game(coin_flip=True).snapshot()
        assert snap.phase is GamePhase.COIN_FLIP
        assert snap.available_columns == []
