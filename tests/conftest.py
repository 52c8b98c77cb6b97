"""
Knucklebones - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from collections import deque
from typing import Iterable, Sequence

import pytest

from knucklebones.engine.game import KnucklebonesGame
from knucklebones.engine.grid import Grid


class ScriptedDiceSource:
    """
    Dice source replaying predetermined outcomes.

    Rolls and coin flips are consumed in order; choice() picks the option
    at each scripted index (the first option once the script runs out).
    """

    def __init__(
        self,
        rolls: Iterable[int] = (),
        flips: Iterable[bool] = (),
        choices: Iterable[int] = (),
    ) -> None:
        self.rolls = deque(rolls)
        self.flips = deque(flips)
        self.choices = deque(choices)

    def roll_die(self) -> int:
        if not self.rolls:
            raise AssertionError("ScriptedDiceSource ran out of rolls")
        return self.rolls.popleft()

    def flip_coin(self) -> bool:
        if not self.flips:
            raise AssertionError("ScriptedDiceSource ran out of coin flips")
        return self.flips.popleft()

    def choice(self, options: Sequence):
        index = self.choices.popleft() if self.choices else 0
        return options[index]


@pytest.fixture
def scripted_dice():
    """Factory for scripted dice sources."""
    return ScriptedDiceSource


@pytest.fixture
def make_game():
    """
    Factory building a game that skips the coin flip by default.

    Usage:
        game = make_game(rolls=[5, 5])
    """
    def _make(rolls=(), flips=(), choices=(), difficulty="medium", coin_flip=False):
        dice = ScriptedDiceSource(rolls=rolls, flips=flips, choices=choices)
        return KnucklebonesGame(difficulty=difficulty, dice=dice, coin_flip=coin_flip)
    return _make


# =============================================================================
# GRID TEST DATA
# =============================================================================

@pytest.fixture
def full_grid() -> Grid:
    """A completely filled grid scoring 6 + 15 + 6 = 27."""
    return Grid.from_columns([[1, 2, 3], [4, 5, 6], [1, 2, 3]])


@pytest.fixture
def nearly_full_grid() -> Grid:
    """Eight dice; only column 2 has room."""
    return Grid.from_columns([[1, 2, 3], [4, 5, 6], [1, 2]])


@pytest.fixture
def column_scoring_cases() -> dict[str, tuple[tuple[int | None, ...], int]]:
    """
    Column layouts with expected scores.

    Returns:
        Dict mapping name to (slots, expected_points)
    """
    return {
        "empty": ((None, None, None), 0),
        "single_four": ((4, None, None), 4),
        "pair_of_threes": ((3, 3, None), 12),
        "pair_of_fives": ((5, 5, None), 20),
        "triple_fours": ((4, 4, 4), 36),
        "triple_sixes": ((6, 6, 6), 54),
        "run": ((1, 2, 3), 6),
        "pair_plus_single": ((4, 4, 6), 22),
        "split_pair": ((4, 6, 4), 22),
    }
