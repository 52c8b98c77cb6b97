"""
Knucklebones - Game Engine Base Classes

This module defines the enums and result records shared by the grid, the
turn engine and the computer opponent. Result records are frozen dataclasses
so callers can hold on to them without worrying about later mutation.
"""

from dataclasses import dataclass
from enum import Enum, auto

GRID_COLUMNS = 3
GRID_ROWS = 3
DIE_FACES = 6


class Side(Enum):
    """The two sides of the table."""
    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        """The side across the table."""
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class GamePhase(Enum):
    """Phases of a single game."""
    COIN_FLIP = "coin_flip"
    FLIPPING = "flipping"    # Presentation only, the engine never rests here
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Winner(Enum):
    """Final outcome of a finished game."""
    PLAYER = "player"
    OPPONENT = "opponent"
    TIE = "tie"


class Difficulty(Enum):
    """Computer opponent difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Rejection(Enum):
    """Reasons a command was refused by the engine."""
    WRONG_PHASE = auto()
    GAME_OVER = auto()
    NOT_YOUR_TURN = auto()
    ROLL_PENDING = auto()
    NO_PENDING_ROLL = auto()
    ROLL_IN_PROGRESS = auto()
    INVALID_COLUMN = auto()
    COLUMN_FULL = auto()
    ABANDONED = auto()


@dataclass(frozen=True)
class PlacementResult:
    """
    Outcome of placing a die.

    Attributes:
        side: Side that placed the die
        column_index: Column the die went into
        die_value: Face value placed
        destroyed_count: Number of the other side's dice removed
        score_delta: Change in the placing side's total score
        other_score_delta: Change in the other side's total (zero or negative)
        game_over: Whether this placement ended the game
        winner: Final outcome when game_over is set
    """
    side: Side
    column_index: int
    die_value: int
    destroyed_count: int
    score_delta: int
    other_score_delta: int
    game_over: bool = False
    winner: Winner | None = None


@dataclass(frozen=True)
class ActionResult:
    """
    Result of an engine command.

    Commands never raise for rule violations; they return a rejected result
    instead. The result is truthy only when the command was applied.

    Attributes:
        accepted: Whether the command changed the game
        reason: Why the command was rejected (None when accepted)
        value: Rolled die value or coin flip outcome, when relevant
        column_index: Column chosen, for placements
        placement: Placement details, for placements
    """
    accepted: bool
    reason: Rejection | None = None
    value: int | bool | None = None
    column_index: int | None = None
    placement: PlacementResult | None = None

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def rejected(cls, reason: Rejection) -> "ActionResult":
        """Build a rejected result."""
        return cls(accepted=False, reason=reason)
