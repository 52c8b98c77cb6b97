"""
Knucklebones Game Engine.

Pure Python game logic with zero UI dependencies.
Handles grids, scoring, dice, turn sequencing and the computer opponent.
"""

from knucklebones.engine.base import (
    ActionResult,
    Difficulty,
    GamePhase,
    PlacementResult,
    Rejection,
    Side,
    Winner,
)
from knucklebones.engine.game import GameState, KnucklebonesGame
from knucklebones.engine.grid import Grid
from knucklebones.engine.opponent import choose_column, evaluate_columns
from knucklebones.engine.rng import DiceSource, SecureDiceSource, SeededDiceSource
from knucklebones.engine.scoring import column_score, decide_winner, total_score

__all__ = [
    # Data Classes
    "ActionResult",
    "GameState",
    "Grid",
    "PlacementResult",
    # Enums
    "Difficulty",
    "GamePhase",
    "Rejection",
    "Side",
    "Winner",
    # Dice
    "DiceSource",
    "SecureDiceSource",
    "SeededDiceSource",
    # Scoring
    "column_score",
    "decide_winner",
    "total_score",
    # Opponent
    "choose_column",
    "evaluate_columns",
    # Engine
    "KnucklebonesGame",
]
