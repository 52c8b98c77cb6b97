"""
Tests for column and grid scoring.
"""

from collections import Counter

from knucklebones.engine.base import Winner
from knucklebones.engine.grid import Grid
from knucklebones.engine.scoring import (
    column_score,
    column_scores,
    decide_winner,
    scores,
    total_score,
)


class TestColumnScoring:
    """Tests for column scoring logic."""

    def test_known_columns(self, column_scoring_cases):
        for name, (slots, expected) in column_scoring_cases.items():
            assert column_score(slots) == expected, name

    def test_empty_column(self):
        assert column_score(()) == 0
        assert column_score((None, None, None)) == 0

    def test_single_die(self):
        """Test single die scores face value."""
        assert column_score((1,)) == 1
        assert column_score((6, None, None)) == 6

    def test_pair_multiplies(self):
        # 3×2 + 3×2 = 12
        assert column_score((3, 3, None)) == 12

    def test_triple_multiplies(self):
        # 4×3 + 4×3 + 4×3 = 36
        assert column_score((4, 4, 4)) == 36

    def test_mixed_values_no_multiplier(self):
        assert column_score((1, 2, 3)) == 6
        assert column_score((4, 5, 6)) == 15

    def test_position_does_not_matter(self):
        assert column_score((6, 4, 4)) == column_score((4, 4, 6)) == 22

    def test_matches_count_formula(self):
        """Every layout scores the sum of v × count(v) over its slots."""
        for a in range(1, 7):
            for b in range(1, 7):
                for c in (None, 1, 3, 6):
                    slots = (a, b, c)
                    values = [v for v in slots if v is not None]
                    counts = Counter(values)
                    expected = sum(v * counts[v] for v in values)
                    assert column_score(slots) == expected


class TestGridScoring:
    """Tests for total grid scoring."""

    def test_empty_grid(self):
        assert total_score(Grid.empty()) == 0

    def test_partial_grid(self):
        # Column 0: [4] = 4
        # Column 1: [1, 1] = 4
        # Column 2: [6] = 6
        grid = Grid.from_columns([[4], [1, 1], [6]])
        assert column_scores(grid) == (4, 4, 6)
        assert total_score(grid) == 14

    def test_full_grid(self):
        # Column 0: [4, 4, 4] = 36
        # Column 1: [1, 2, 3] = 6
        # Column 2: [6, 6] = 24
        grid = Grid.from_columns([[4, 4, 4], [1, 2, 3], [6, 6]])
        assert total_score(grid) == 66

    def test_total_is_sum_of_columns(self):
        grid = Grid.from_columns([[2, 2, 5], [3], [6, 1, 6]])
        assert total_score(grid) == sum(column_score(col) for col in grid.columns)

    def test_scores_pair(self):
        player = Grid.from_columns([[5], [], []])
        opponent = Grid.from_columns([[2, 2], [], []])
        assert scores(player, opponent) == (5, 8)


class TestWinner:
    """Tests for winner determination."""

    def test_player_higher_score(self):
        player = Grid.from_columns([[4, 4, 4], [6, 6], [1]])
        opponent = Grid.from_columns([[1, 2, 3], [4], [5]])
        assert decide_winner(player, opponent) is Winner.PLAYER

    def test_opponent_higher_score(self):
        player = Grid.from_columns([[1], [2], [3]])
        opponent = Grid.from_columns([[6, 6, 6], [5, 5], [4]])
        assert decide_winner(player, opponent) is Winner.OPPONENT

    def test_tie(self):
        player = Grid.from_columns([[3, 3], [2], []])
        opponent = Grid.from_columns([[2], [3, 3], []])
        assert decide_winner(player, opponent) is Winner.TIE

    def test_empty_grids_tie(self):
        assert decide_winner(Grid.empty(), Grid.empty()) is Winner.TIE
