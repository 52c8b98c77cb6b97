"""
Knucklebones - Computer Opponent

Column selection for the computer side. Each difficulty is a strategy that
scores the available columns for the die just rolled; the highest score
wins and ties go to the lowest column index.

Strategies only read the grids. The turn engine applies the chosen move.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable

from knucklebones.engine.base import Difficulty
from knucklebones.engine.grid import Grid
from knucklebones.engine.rng import DiceSource
from knucklebones.engine.scoring import total_score

logger = logging.getLogger(__name__)


# -- Shared heuristics ---------------------------------------------------

def count_matching(grid: Grid, column_index: int, value: int) -> int:
    """Dice in a column showing the given face."""
    return grid.count(column_index, value)


def filled_count(grid: Grid, column_index: int) -> int:
    """Dice in a column."""
    return grid.filled_count(column_index)


def pick_best(evaluations: dict[int, int]) -> int:
    """Highest-scoring column; the first one wins on equal scores."""
    best_column = None
    best_score = None
    for column_index, score in evaluations.items():
        if best_score is None or score > best_score:
            best_column = column_index
            best_score = score
    return best_column


# -- Strategies ----------------------------------------------------------

class Strategy(ABC):
    """Base class for column-selection policies."""

    difficulty: Difficulty

    @abstractmethod
    def choose(self, own: Grid, enemy: Grid, value: int, rng: DiceSource) -> int:
        """Return the column to place `value` in."""
        raise NotImplementedError


class HeuristicStrategy(Strategy):
    """Strategy that scores every available column and keeps the best."""

    @abstractmethod
    def score_column(self, own: Grid, enemy: Grid, column_index: int, value: int) -> int:
        raise NotImplementedError

    def evaluate(self, own: Grid, enemy: Grid, value: int) -> dict[int, int]:
        """Score per available column, in ascending column order."""
        return {
            col: self.score_column(own, enemy, col, value)
            for col in own.available_columns()
        }

    def choose(self, own: Grid, enemy: Grid, value: int, rng: DiceSource) -> int:
        evaluations = self.evaluate(own, enemy, value)
        column_index = pick_best(evaluations)
        logger.debug(
            "%s opponent scored columns %s for a %d, picked %d",
            self.difficulty.value, evaluations, value, column_index,
        )
        return column_index


_STRATEGIES: dict[Difficulty, Strategy] = {}


def register_strategy(difficulty: Difficulty) -> Callable[[type[Strategy]], type[Strategy]]:
    """Class decorator registering a strategy for a difficulty level."""
    def decorator(cls: type[Strategy]) -> type[Strategy]:
        cls.difficulty = difficulty
        _STRATEGIES[difficulty] = cls()
        return cls
    return decorator


def get_strategy(difficulty: Difficulty) -> Strategy:
    """Strategy registered for a difficulty."""
    try:
        return _STRATEGIES[difficulty]
    except KeyError:
        raise ValueError(f"No strategy registered for difficulty {difficulty!r}") from None


@register_strategy(Difficulty.EASY)
class EasyStrategy(Strategy):
    """Any open column, uniformly at random."""

    def choose(self, own: Grid, enemy: Grid, value: int, rng: DiceSource) -> int:
        return rng.choice(own.available_columns())


@register_strategy(Difficulty.MEDIUM)
class MediumStrategy(HeuristicStrategy):
    """Stack own matches and destroy the enemy's."""

    STACK_WEIGHT = 10
    DESTROY_WEIGHT = 5

    def score_column(self, own: Grid, enemy: Grid, column_index: int, value: int) -> int:
        stack = count_matching(own, column_index, value) * self.STACK_WEIGHT
        destroy = count_matching(enemy, column_index, value) * value * self.DESTROY_WEIGHT
        return stack + destroy


@register_strategy(Difficulty.HARD)
class HardStrategy(HeuristicStrategy):
    """
    Medium's ideas with heavier stacking plus situational bonuses.

    - stack: 15 per own matching die
    - destroy: 3 × destroyed dice × destroyed pips
    - big stack: +20 when destroying from an enemy column with 2+ dice
    - closing: +10 for an own column with exactly 2 dice while ahead
    - safety: +5 when the enemy column has no matching die
    """

    STACK_WEIGHT = 15
    DESTROY_WEIGHT = 3
    BIG_STACK_BONUS = 20
    CLOSING_BONUS = 10
    SAFETY_BONUS = 5

    def evaluate(self, own: Grid, enemy: Grid, value: int) -> dict[int, int]:
        ahead = total_score(own) > total_score(enemy)
        return {
            col: self._score(own, enemy, col, value, ahead)
            for col in own.available_columns()
        }

    def score_column(self, own: Grid, enemy: Grid, column_index: int, value: int) -> int:
        ahead = total_score(own) > total_score(enemy)
        return self._score(own, enemy, column_index, value, ahead)

    def _score(self, own: Grid, enemy: Grid, column_index: int, value: int, ahead: bool) -> int:
        score = count_matching(own, column_index, value) * self.STACK_WEIGHT

        destroy_count = count_matching(enemy, column_index, value)
        destroy_value = value * destroy_count
        score += destroy_count * destroy_value * self.DESTROY_WEIGHT

        if destroy_count > 0 and filled_count(enemy, column_index) >= 2:
            score += self.BIG_STACK_BONUS

        if ahead and filled_count(own, column_index) == 2:
            score += self.CLOSING_BONUS

        if destroy_count == 0:
            score += self.SAFETY_BONUS

        return score


# -- Entry points --------------------------------------------------------

def evaluate_columns(own: Grid, enemy: Grid, value: int, difficulty: Difficulty) -> dict[int, int]:
    """
    Heuristic score of each available column.

    Easy has no heuristic, so every open column scores 0.
    """
    strategy = get_strategy(difficulty)
    if isinstance(strategy, HeuristicStrategy):
        return strategy.evaluate(own, enemy, value)
    return {col: 0 for col in own.available_columns()}


def choose_column(
    own: Grid,
    enemy: Grid,
    value: int,
    difficulty: Difficulty,
    rng: DiceSource,
) -> int:
    """
    Select a column for the computer side.

    Args:
        own: The computer's grid
        enemy: The other side's grid
        value: Die just rolled
        difficulty: Which strategy to use
        rng: Source for the easy strategy's random pick

    Returns:
        Index of an available column in `own`

    Raises:
        ValueError: If `own` has no open column
    """
    if own.is_full():
        raise ValueError("No available column to choose from")
    return get_strategy(difficulty).choose(own, enemy, value, rng)
