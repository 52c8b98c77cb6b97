"""
Knucklebones - Headless Simulation

Plays computer-versus-computer games through the public engine API. The
player side is driven by the same column strategies as the opponent, so
difficulty levels can be compared against each other.
"""

import logging
from dataclasses import dataclass

from knucklebones.engine.base import Difficulty, GamePhase, Side, Winner
from knucklebones.engine.game import KnucklebonesGame
from knucklebones.engine.opponent import choose_column
from knucklebones.engine.rng import DiceSource, SeededDiceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameRecord:
    """Final figures of one simulated game."""
    winner: Winner
    player_score: int
    opponent_score: int
    moves: int
    first_side: Side | None


@dataclass(frozen=True)
class SimulationReport:
    """
    Aggregate results of a batch of games.

    Attributes:
        games: Number of games played
        player_wins: Games won by the player side
        opponent_wins: Games won by the opponent side
        ties: Drawn games
        mean_player_score: Average final player score
        mean_opponent_score: Average final opponent score
        mean_moves: Average number of dice placed per game
    """
    games: int
    player_wins: int
    opponent_wins: int
    ties: int
    mean_player_score: float
    mean_opponent_score: float
    mean_moves: float

    @property
    def player_win_rate(self) -> float:
        return self.player_wins / self.games if self.games else 0.0

    @property
    def opponent_win_rate(self) -> float:
        return self.opponent_wins / self.games if self.games else 0.0

    def __str__(self) -> str:
        return (
            f"{self.games} games: player {self.player_wins}, "
            f"opponent {self.opponent_wins}, ties {self.ties} "
            f"(mean score {self.mean_player_score:.1f} vs {self.mean_opponent_score:.1f})"
        )


def play_game(
    game: KnucklebonesGame,
    player_difficulty: Difficulty,
    dice: DiceSource,
) -> GameRecord:
    """
    Play one game to completion from the engine's current state.

    Args:
        game: Engine to drive (reset first for a fresh game)
        player_difficulty: Strategy used for the player side
        dice: Source for the player strategy's random picks
    """
    if game.phase is GamePhase.COIN_FLIP:
        game.perform_coin_flip()

    while not game.is_game_over:
        if game.active_side is Side.OPPONENT:
            result = game.play_opponent_turn()
        else:
            rolled = game.roll_die(Side.PLAYER)
            if not rolled:
                raise RuntimeError(f"Simulated move rejected: {rolled.reason}")
            state = game.state
            column_index = choose_column(
                state.player_grid,
                state.opponent_grid,
                state.pending_value,
                player_difficulty,
                dice,
            )
            result = game.place_pending(column_index, Side.PLAYER)
        if not result:
            raise RuntimeError(f"Simulated move rejected: {result.reason}")

    return GameRecord(
        winner=game.winner,
        player_score=game.player_score,
        opponent_score=game.opponent_score,
        moves=game.state.move_count,
        first_side=game.state.first_side,
    )


def simulate_games(
    games: int,
    player_difficulty: Difficulty = Difficulty.MEDIUM,
    opponent_difficulty: Difficulty = Difficulty.MEDIUM,
    seed: int | None = None,
    coin_flip: bool = True,
) -> SimulationReport:
    """
    Play a batch of games and summarize them.

    Args:
        games: Number of games (must be positive)
        player_difficulty: Strategy for the player side
        opponent_difficulty: Strategy for the opponent side
        seed: Seed for reproducible batches
        coin_flip: Whether each game opens with a coin flip

    Returns:
        SimulationReport for the batch
    """
    if games <= 0:
        raise ValueError(f"Number of games must be positive, got {games}.")

    dice = SeededDiceSource(seed)
    game = KnucklebonesGame(difficulty=opponent_difficulty, dice=dice, coin_flip=coin_flip)
    records = []
    for _ in range(games):
        game.reset()
        records.append(play_game(game, player_difficulty, dice))

    report = SimulationReport(
        games=games,
        player_wins=sum(1 for r in records if r.winner is Winner.PLAYER),
        opponent_wins=sum(1 for r in records if r.winner is Winner.OPPONENT),
        ties=sum(1 for r in records if r.winner is Winner.TIE),
        mean_player_score=sum(r.player_score for r in records) / games,
        mean_opponent_score=sum(r.opponent_score for r in records) / games,
        mean_moves=sum(r.moves for r in records) / games,
    )
    logger.info(
        "Simulated %s vs %s: %s",
        player_difficulty.value, opponent_difficulty.value, report,
    )
    return report
