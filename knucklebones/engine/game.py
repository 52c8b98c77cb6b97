"""
Knucklebones - Turn Engine

Owns the game state and is the only thing that mutates it. Presentation
code reads the state and drives the game through a handful of commands:

- perform_coin_flip(): decide who moves first
- roll_die(side): roll for the side whose turn it is
- place_pending(column, side): place the rolled die, destroy matches across
  the table, check for game over and pass the turn
- play_opponent_turn(): roll and place for the computer in one step
- reset() / set_difficulty(level)

Commands never raise for rule violations. They return an ActionResult that
is falsy and carries a Rejection reason, and the state is left untouched.

Game Rules:
- 2 sides, each with a 3x3 grid
- Roll a single D6, place it in any non-full column of your own grid
- Placing a die destroys matching dice in the same column across the table
- Matching dice in a column multiply each other
- Game ends as soon as either grid is full; highest score wins
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from knucklebones.engine.base import (
    ActionResult,
    Difficulty,
    GamePhase,
    PlacementResult,
    Rejection,
    Side,
    Winner,
)
from knucklebones.engine.grid import Grid
from knucklebones.engine.opponent import choose_column
from knucklebones.engine.rng import DiceSource, SecureDiceSource, SeededDiceSource
from knucklebones.engine.scoring import decide_winner, total_score
from knucklebones.engine.validators import is_valid_column_index, validate_difficulty
from knucklebones.events import EventListener, EventPayload, GameEvent

if TYPE_CHECKING:
    from knucklebones.config.settings import Settings
    from knucklebones.models import GameSnapshot

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    """
    Complete mutable state of one game.

    Attributes:
        player_grid: The human side's grid
        opponent_grid: The computer side's grid
        phase: Current phase
        active_side: Side allowed to roll and place
        pending_value: Rolled die waiting to be placed
        is_rolling: Set while a roll is being decided
        winner: Outcome, once the game is over
        first_side: Side that won the coin flip (None without a flip)
        move_count: Dice placed so far
    """
    player_grid: Grid = field(default_factory=Grid)
    opponent_grid: Grid = field(default_factory=Grid)
    phase: GamePhase = GamePhase.PLAYING
    active_side: Side = Side.PLAYER
    pending_value: int | None = None
    is_rolling: bool = False
    winner: Winner | None = None
    first_side: Side | None = None
    move_count: int = 0

    def grid_for(self, side: Side) -> Grid:
        """Grid belonging to a side."""
        return self.player_grid if side is Side.PLAYER else self.opponent_grid


class KnucklebonesGame:
    """
    Turn engine for a player-versus-computer game.

    Args:
        difficulty: Computer opponent level
        dice: Random source (defaults to SecureDiceSource)
        coin_flip: Start each game with a coin flip instead of letting the
            player move first
    """

    def __init__(
        self,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        dice: DiceSource | None = None,
        *,
        coin_flip: bool = True,
    ) -> None:
        self._difficulty = validate_difficulty(difficulty)
        self._dice = dice or SecureDiceSource()
        self._coin_flip = coin_flip
        self._listeners: list[EventListener] = []
        self._state = self._initial_state()

    @classmethod
    def from_settings(
        cls,
        settings: "Settings | None" = None,
        dice: DiceSource | None = None,
    ) -> "KnucklebonesGame":
        """Build an engine from application settings."""
        from knucklebones.config.settings import get_settings

        settings = settings or get_settings()
        if dice is None and settings.rng_seed is not None:
            dice = SeededDiceSource(settings.rng_seed)
        return cls(difficulty=settings.difficulty, dice=dice, coin_flip=settings.coin_flip)

    def _initial_state(self) -> GameState:
        phase = GamePhase.COIN_FLIP if self._coin_flip else GamePhase.PLAYING
        return GameState(phase=phase)

    # -- Queries ---------------------------------------------------------

    @property
    def state(self) -> GameState:
        """The live state record. Treat as read-only."""
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def active_side(self) -> Side:
        return self._state.active_side

    @property
    def pending_value(self) -> int | None:
        return self._state.pending_value

    @property
    def winner(self) -> Winner | None:
        return self._state.winner

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def coin_flip_enabled(self) -> bool:
        return self._coin_flip

    @property
    def player_grid(self) -> Grid:
        """Copy of the player's grid."""
        return self._state.player_grid.copy()

    @property
    def opponent_grid(self) -> Grid:
        """Copy of the opponent's grid."""
        return self._state.opponent_grid.copy()

    @property
    def player_score(self) -> int:
        return total_score(self._state.player_grid)

    @property
    def opponent_score(self) -> int:
        return total_score(self._state.opponent_grid)

    @property
    def is_game_over(self) -> bool:
        return self._state.phase is GamePhase.GAME_OVER

    @property
    def is_game_in_progress(self) -> bool:
        """True once a die has been rolled or placed in the current game."""
        state = self._state
        return (
            state.pending_value is not None
            or not state.player_grid.is_empty()
            or not state.opponent_grid.is_empty()
        )

    def available_columns(self, side: Side | None = None) -> list[int]:
        """Open columns for a side (the active side by default)."""
        side = side or self._state.active_side
        return self._state.grid_for(side).available_columns()

    def snapshot(self) -> "GameSnapshot":
        """Immutable, serializable view of the current game."""
        from knucklebones.models import GameSnapshot

        return GameSnapshot.from_game(self)

    # -- Listeners -------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback receiving an EventPayload per game event."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _dispatch(self, events: list[EventPayload]) -> None:
        for payload in events:
            for listener in list(self._listeners):
                try:
                    listener(payload)
                except Exception:
                    logger.exception("Listener failed handling %s", payload.event.name)

    def _reject(self, command: str, reason: Rejection) -> ActionResult:
        logger.debug("Rejected %s: %s", command, reason.name)
        return ActionResult.rejected(reason)

    def _check_turn(self, side: Side) -> Rejection | None:
        """Guards shared by roll and place."""
        state = self._state
        if state.is_rolling:
            return Rejection.ROLL_IN_PROGRESS
        if state.phase is GamePhase.GAME_OVER:
            return Rejection.GAME_OVER
        if state.phase is not GamePhase.PLAYING:
            return Rejection.WRONG_PHASE
        if side is not state.active_side:
            return Rejection.NOT_YOUR_TURN
        return None

    # -- Commands --------------------------------------------------------

    def perform_coin_flip(self) -> ActionResult:
        """
        Decide who moves first.

        Heads (True) gives the player the first move. Only valid while the
        game is waiting for its coin flip.
        """
        state = self._state
        if state.phase is GamePhase.GAME_OVER:
            return self._reject("coin flip", Rejection.GAME_OVER)
        if state.phase is not GamePhase.COIN_FLIP:
            return self._reject("coin flip", Rejection.WRONG_PHASE)

        heads = self._dice.flip_coin()
        first = Side.PLAYER if heads else Side.OPPONENT
        state.first_side = first
        state.active_side = first
        state.phase = GamePhase.PLAYING
        logger.info("Coin flip: %s moves first", first.value)

        self._dispatch([
            EventPayload(GameEvent.COIN_FLIPPED, side=first.value, data={"heads": heads}),
        ])
        return ActionResult(accepted=True, value=heads)

    def roll_die(self, side: Side = Side.PLAYER) -> ActionResult:
        """
        Roll a die for `side`.

        The value is decided immediately and stored as pending; the
        presentation layer decides when to reveal it.

        Returns:
            Accepted result carrying the rolled value, or a rejection
        """
        reason = self._check_turn(side)
        if reason is None and self._state.pending_value is not None:
            reason = Rejection.ROLL_PENDING
        if reason is not None:
            return self._reject("roll", reason)

        state = self._state
        state.is_rolling = True
        try:
            value = self._dice.roll_die()
        finally:
            state.is_rolling = False

        if state is not self._state:
            # Game was reset while the roll was being decided
            logger.debug("Discarding roll of %d from an abandoned game", value)
            return self._reject("roll", Rejection.ABANDONED)

        state.pending_value = value
        logger.debug("%s rolled %d", side.value, value)

        self._dispatch([
            EventPayload(GameEvent.DIE_ROLLED, side=side.value, data={"value": value}),
        ])
        return ActionResult(accepted=True, value=value)

    def place_pending(self, column_index: int, side: Side = Side.PLAYER) -> ActionResult:
        """
        Place the pending die for `side` in one of its columns.

        Steps, applied together:
        1. Add the die to the side's own column
        2. Destroy matching dice in the same column across the table
        3. Clear the pending die
        4. End the game if either grid is full
        5. Otherwise pass the turn

        Returns:
            Accepted result with PlacementResult details, or a rejection
        """
        reason = self._check_turn(side)
        if reason is None and self._state.pending_value is None:
            reason = Rejection.NO_PENDING_ROLL
        if reason is None and not is_valid_column_index(column_index):
            reason = Rejection.INVALID_COLUMN
        if reason is None and not self._state.grid_for(side).is_column_available(column_index):
            reason = Rejection.COLUMN_FULL
        if reason is not None:
            return self._reject("placement", reason)

        placement, events = self._apply_placement(side, column_index)
        self._dispatch(events)
        return ActionResult(
            accepted=True,
            value=placement.die_value,
            column_index=column_index,
            placement=placement,
        )

    def _apply_placement(
        self, side: Side, column_index: int
    ) -> tuple[PlacementResult, list[EventPayload]]:
        state = self._state
        value = state.pending_value
        own = state.grid_for(side)
        other = state.grid_for(side.other)

        own_before = total_score(own)
        other_before = total_score(other)

        own.place(column_index, value)
        destroyed = other.remove_matching(column_index, value)
        state.pending_value = None
        state.move_count += 1

        events = [
            EventPayload(
                GameEvent.DIE_PLACED,
                side=side.value,
                data={"column": column_index, "value": value},
            ),
        ]
        if destroyed:
            events.append(EventPayload(
                GameEvent.DICE_DESTROYED,
                side=side.other.value,
                data={"column": column_index, "value": value, "count": destroyed},
            ))

        game_over = own.is_full() or other.is_full()
        if game_over:
            state.phase = GamePhase.GAME_OVER
            state.winner = decide_winner(state.player_grid, state.opponent_grid)
            logger.info(
                "Game over after %d moves: %s (player %d, opponent %d)",
                state.move_count,
                state.winner.value,
                total_score(state.player_grid),
                total_score(state.opponent_grid),
            )
            events.append(EventPayload(
                GameEvent.GAME_OVER,
                data={
                    "winner": state.winner.value,
                    "player_score": total_score(state.player_grid),
                    "opponent_score": total_score(state.opponent_grid),
                },
            ))
        else:
            state.active_side = side.other
            events.append(EventPayload(GameEvent.TURN_ADVANCED, side=state.active_side.value))

        logger.debug(
            "%s placed %d in column %d, destroyed %d", side.value, value, column_index, destroyed
        )

        placement = PlacementResult(
            side=side,
            column_index=column_index,
            die_value=value,
            destroyed_count=destroyed,
            score_delta=total_score(own) - own_before,
            other_score_delta=total_score(other) - other_before,
            game_over=game_over,
            winner=state.winner,
        )
        return placement, events

    def play_opponent_turn(self) -> ActionResult:
        """
        Roll (unless already rolled) and place for the computer side.

        The driver calls this once it is the opponent's turn; the engine
        never schedules it on its own.
        """
        reason = self._check_turn(Side.OPPONENT)
        if reason is not None:
            return self._reject("opponent turn", reason)

        state = self._state
        if state.pending_value is None:
            rolled = self.roll_die(Side.OPPONENT)
            if not rolled:
                return rolled

            # Listeners of the roll may have reset the game or moved for us
            if state is not self._state:
                return self._reject("opponent turn", Rejection.ABANDONED)
            reason = self._check_turn(Side.OPPONENT)
            if reason is None and state.pending_value is None:
                reason = Rejection.NO_PENDING_ROLL
            if reason is not None:
                return self._reject("opponent turn", reason)

        column_index = choose_column(
            state.opponent_grid,
            state.player_grid,
            state.pending_value,
            self._difficulty,
            self._dice,
        )
        return self.place_pending(column_index, Side.OPPONENT)

    def reset(self) -> ActionResult:
        """Start over from the initial state, abandoning the current game."""
        self._state = self._initial_state()
        logger.info("Game reset (difficulty %s)", self._difficulty.value)
        self._dispatch([EventPayload(GameEvent.GAME_RESET)])
        return ActionResult(accepted=True)

    def set_difficulty(self, level: Difficulty | str) -> ActionResult:
        """
        Change the computer opponent's level.

        Changing the level while a game is in progress resets the game.

        Raises:
            ValueError: If `level` is not a known difficulty
        """
        level = validate_difficulty(level)
        if level is self._difficulty:
            return ActionResult(accepted=True)

        if self.is_game_in_progress:
            logger.info("Difficulty changed mid-game, resetting")
            self._difficulty = level
            self.reset()
        else:
            self._difficulty = level

        logger.info("Difficulty set to %s", level.value)
        self._dispatch([
            EventPayload(GameEvent.DIFFICULTY_CHANGED, data={"difficulty": level.value}),
        ])
        return ActionResult(accepted=True)

    def set_coin_flip_enabled(self, enabled: bool) -> ActionResult:
        """Toggle the opening coin flip. Takes effect through a reset."""
        if enabled == self._coin_flip:
            return ActionResult(accepted=True)
        self._coin_flip = enabled
        return self.reset()
