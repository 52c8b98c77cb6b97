"""
Knucklebones - Scoring

Matching dice in a column multiply each other: every die scores its face
value times the number of dice in the column showing that face.

    [4]          = 4
    [3, 3]       = 3×2 + 3×2 = 12
    [4, 4, 4]    = 4×3 × 3 = 36
    [4, 4, 6]    = 4×2 + 4×2 + 6 = 22
    [1, 2, 3]    = 6

Scores are always derived from the grid, never stored.
"""

from collections import Counter
from typing import Iterable

from knucklebones.engine.base import Winner
from knucklebones.engine.grid import Grid


def column_score(column: Iterable[int | None]) -> int:
    """
    Calculate score for a single column.

    Args:
        column: Slots or values of one column; None slots are ignored

    Returns:
        Total points for the column
    """
    values = [v for v in column if v is not None]
    if not values:
        return 0

    counts = Counter(values)
    return sum(face * count * count for face, count in counts.items())


def column_scores(grid: Grid) -> tuple[int, ...]:
    """Score of each column, left to right."""
    return tuple(column_score(col) for col in grid.columns)


def total_score(grid: Grid) -> int:
    """Total score for a grid (sum of its column scores)."""
    return sum(column_scores(grid))


def scores(player_grid: Grid, opponent_grid: Grid) -> tuple[int, int]:
    """(player, opponent) totals."""
    return total_score(player_grid), total_score(opponent_grid)


def decide_winner(player_grid: Grid, opponent_grid: Grid) -> Winner:
    """
    Determine the outcome from final scores.

    Returns:
        Winner.PLAYER or Winner.OPPONENT for the higher total, Winner.TIE otherwise
    """
    player_score, opponent_score = scores(player_grid, opponent_grid)

    if player_score > opponent_score:
        return Winner.PLAYER
    elif opponent_score > player_score:
        return Winner.OPPONENT
    else:
        return Winner.TIE
