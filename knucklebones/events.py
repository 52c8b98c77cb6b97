"""
Knucklebones - Game Event Definitions

Event types and payloads emitted by the engine to whatever presentation
layer is listening. Payloads are delivered after the command that caused
them has finished mutating state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable


class GameEvent(Enum):
    """Events that can occur during a game."""

    COIN_FLIPPED = auto()
    DIE_ROLLED = auto()
    DIE_PLACED = auto()
    DICE_DESTROYED = auto()
    TURN_ADVANCED = auto()
    GAME_OVER = auto()
    GAME_RESET = auto()
    DIFFICULTY_CHANGED = auto()


@dataclass
class EventPayload:
    """Wrapper for engine event data."""

    event: GameEvent
    side: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[EventPayload], None]
