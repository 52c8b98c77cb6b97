"""
Knucklebones - Snapshot Models

Pydantic models giving presentation code a frozen, serializable view of a
game. Snapshots are built from the engine and never fed back into it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from knucklebones.engine.base import Difficulty, GamePhase, Side, Winner
from knucklebones.engine.grid import Grid
from knucklebones.engine.scoring import column_scores

if TYPE_CHECKING:
    from knucklebones.engine.game import KnucklebonesGame


class GridSnapshot(BaseModel):
    """One side's grid with its derived scores."""

    columns: list[list[int | None]] = Field(min_length=3, max_length=3)
    column_scores: list[int] = Field(min_length=3, max_length=3)
    total: int = 0

    model_config = {"frozen": True}

    @classmethod
    def from_grid(cls, grid: Grid) -> GridSnapshot:
        per_column = list(column_scores(grid))
        return cls(
            columns=[list(col) for col in grid.columns],
            column_scores=per_column,
            total=sum(per_column),
        )


class GameSnapshot(BaseModel):
    """Everything a presentation layer needs to draw a game."""

    phase: GamePhase
    active_side: Side
    pending_value: int | None = Field(default=None, ge=1, le=6)
    winner: Winner | None = None
    difficulty: Difficulty
    coin_flip_enabled: bool = True
    first_side: Side | None = None
    move_count: int = 0
    player: GridSnapshot
    opponent: GridSnapshot
    available_columns: list[int] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_game(cls, game: KnucklebonesGame) -> GameSnapshot:
        state = game.state
        return cls(
            phase=state.phase,
            active_side=state.active_side,
            pending_value=state.pending_value,
            winner=state.winner,
            difficulty=game.difficulty,
            coin_flip_enabled=game.coin_flip_enabled,
            first_side=state.first_side,
            move_count=state.move_count,
            player=GridSnapshot.from_grid(state.player_grid),
            opponent=GridSnapshot.from_grid(state.opponent_grid),
            available_columns=(
                game.available_columns() if state.phase is GamePhase.PLAYING else []
            ),
        )
