"""
Game initialization and progression for Shelem.
"""

from __future__ import annotations

import structlog

from shelem.logic.completion import evaluate
from shelem.logic.dealer import dealer_for_round, seat_order, seed_dealer_seat
from shelem.logic.enums import GamePhase, Team
from shelem.logic.exceptions import GameFinishedError, InvalidRoundInputError
from shelem.logic.scoring import score_round
from shelem.logic.seating import default_bidder, validate_bidder, validate_seating
from shelem.logic.settings import SessionConfiguration, validate_configuration
from shelem.logic.state import GameState
from shelem.logic.types import GameOutcome, LedgerView, Player, PlayerStats, Seating

logger = structlog.get_logger()

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600


def init_game(
    seating: Seating,
    config: SessionConfiguration | None = None,
    elapsed_seconds: int = 0,
) -> GameState:
    """
    Start a new game.

    Refuses to start (EmptyPlayerNameError, DealerNotSeededError,
    InvalidConfigurationError) rather than assuming a default dealer or
    silently fixing the rules. Returns a frozen GameState with an empty ledger.
    """
    game_config = config or SessionConfiguration()

    validate_seating(seating)
    validate_configuration(game_config)

    state = GameState(seating=seating, config=game_config, elapsed_seconds=elapsed_seconds)
    logger.info(
        "game started",
        players=[player.name for player in seating.players()],
        dealer=current_dealer(state).name,
        with_joker=game_config.with_joker,
        double_penalty=game_config.double_penalty,
        shelem_score=game_config.shelem_score,
        victory=game_config.victory.mode,
    )
    return state


def game_outcome(state: GameState) -> GameOutcome:
    return evaluate(state.ledger, state.config)


def game_phase(state: GameState) -> GamePhase:
    return GamePhase.FINISHED if game_outcome(state).finished else GamePhase.IN_PROGRESS


def record_round(
    state: GameState,
    *,
    bid: int,
    bidding_team: Team,
    defender_points: int,
    bidder_player: str | None = None,
) -> GameState:
    """
    Score a round and append it to the ledger.

    The bidder defaults to the bidding team's first player and must sit on
    the bidding team. Raises GameFinishedError once the game has a winner
    and InvalidRoundInputError for illegal input; in both cases the caller
    keeps the unchanged state.
    """
    if game_outcome(state).finished:
        raise GameFinishedError("game is already finished; no more rounds can be recorded")

    try:
        team = Team(bidding_team)
    except ValueError as e:
        raise InvalidRoundInputError(f"bidding_team={bidding_team!r} is not a team") from e
    bidder = bidder_player if bidder_player is not None else default_bidder(state.seating, team)
    validate_bidder(state.seating, team, bidder)

    scored = score_round(bid, team, defender_points, bidder, state.config)
    new_state = state.model_copy(update={"ledger": state.ledger.append(scored)})

    total_a, total_b = new_state.ledger.totals()
    logger.info(
        "round recorded",
        round_index=len(new_state.ledger) - 1,
        bidder=bidder,
        bidding_team=team,
        bid=bid,
        defender_points=defender_points,
        outcome=scored.outcome,
        team_a_delta=scored.team_a_delta,
        team_b_delta=scored.team_b_delta,
        total_a=total_a,
        total_b=total_b,
    )

    outcome = game_outcome(new_state)
    if outcome.finished:
        logger.info(
            "game finished",
            winner=outcome.winner,
            rounds=len(new_state.ledger),
            total_a=total_a,
            total_b=total_b,
            elapsed=format_elapsed(new_state.elapsed_seconds),
        )
    return new_state


def ledger_view(state: GameState) -> LedgerView:
    return state.ledger.view(state.seating)


def player_stats(state: GameState) -> dict[str, PlayerStats]:
    """Stats for all four players in listing order (A1, A2, B1, B2)."""
    return state.ledger.player_stats(player.name for player in state.seating.players())


def dealer_for(state: GameState, round_index: int) -> Player:
    order = seat_order(state.seating)
    return dealer_for_round(round_index, order, seed_dealer_seat(order))


def current_dealer(state: GameState) -> Player:
    """Dealer of the next round to be played."""
    return dealer_for(state, len(state.ledger))


def tick(state: GameState, seconds: int = 1) -> GameState:
    """Advance the elapsed-time counter; the clock stops once the game is finished."""
    if seconds < 0:
        raise ValueError(f"seconds must be >= 0, got {seconds}")
    if seconds == 0 or game_outcome(state).finished:
        return state
    return state.model_copy(update={"elapsed_seconds": state.elapsed_seconds + seconds})


def format_elapsed(seconds: int) -> str:
    """Format a duration as HH:MM:SS."""
    hours = seconds // SECONDS_PER_HOUR
    minutes = (seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    secs = seconds % SECONDS_PER_MINUTE
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
