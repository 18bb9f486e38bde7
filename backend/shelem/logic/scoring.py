"""
Scoring rules: turn one round's raw bid/defense input into a scored Round.

The bidding team either collects the points it captured (bid made), loses
its bid (bid failed), loses twice its bid (failed with the double-penalty
rule), or collects the shelem payout on a clean sweep. The defending team
is always credited with its raw points, so a round is not zero-sum.
"""

from __future__ import annotations

from shelem.logic.enums import RoundOutcome, Team
from shelem.logic.exceptions import InvalidRoundInputError
from shelem.logic.settings import (
    BID_STEP,
    SessionConfiguration,
    double_shelem_payout,
    get_point_limits,
    legal_bids,
    shelem_payout,
)
from shelem.logic.types import Round


def _require_int(value: object, field: str) -> int:
    # bool is an int subclass; True is not a bid
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRoundInputError(f"{field} must be an integer, got {value!r}")
    return value


def validate_round_input(bid: object, defender_points: object, config: SessionConfiguration) -> None:
    """Reject a bid or defender score outside the legal grid for the configuration."""
    bid = _require_int(bid, "bid")
    defender_points = _require_int(defender_points, "defender_points")
    limits = get_point_limits(config)

    if bid not in legal_bids(config):
        raise InvalidRoundInputError(
            f"bid={bid} is not legal (multiples of {BID_STEP} from {limits.min_bid} to {limits.max_bid}, "
            f"or {limits.shelem_bid}/{limits.double_shelem_bid})",
        )

    if defender_points < 0 or defender_points > limits.total_points or defender_points % BID_STEP:
        raise InvalidRoundInputError(
            f"defender_points={defender_points} is not legal "
            f"(multiples of {BID_STEP} from 0 to {limits.total_points})",
        )


def _bidding_score(
    bid: int,
    defender_points: int,
    config: SessionConfiguration,
) -> tuple[int, RoundOutcome]:
    limits = get_point_limits(config)
    bidding_points = limits.total_points - defender_points

    if defender_points == 0:
        if bid == limits.double_shelem_bid:
            return double_shelem_payout(config), RoundOutcome.DOUBLE_SHELEM
        return shelem_payout(config), RoundOutcome.SHELEM

    if bidding_points < bid and config.double_penalty:
        return -2 * bid, RoundOutcome.DOUBLE_PENALTY

    if bidding_points >= bid:
        return bidding_points, RoundOutcome.NORMAL
    return -bid, RoundOutcome.NORMAL


def score_round(
    bid: int,
    bidding_team: Team,
    defender_points: int,
    bidder_player: str,
    config: SessionConfiguration,
) -> Round:
    """
    Score one round.

    Validates the input against the configuration's grid, then classifies
    the round and assigns the bidding team's signed score and the
    defenders' raw points to team A/B.

    Raises InvalidRoundInputError for an illegal bid, defender score or an
    empty bidder name. Pure: no logging, no state.
    """
    validate_round_input(bid, defender_points, config)
    if not isinstance(bidder_player, str) or not bidder_player.strip():
        raise InvalidRoundInputError("bidder_player must not be empty")
    try:
        bidding_team = Team(bidding_team)
    except ValueError as e:
        raise InvalidRoundInputError(f"bidding_team={bidding_team!r} is not a team") from e

    bidding_score, outcome = _bidding_score(bid, defender_points, config)

    team_a_delta = bidding_score if bidding_team is Team.A else defender_points
    team_b_delta = bidding_score if bidding_team is Team.B else defender_points

    return Round(
        bid=bid,
        bidding_team=bidding_team,
        bidder_player=bidder_player,
        defender_points=defender_points,
        outcome=outcome,
        team_a_delta=team_a_delta,
        team_b_delta=team_b_delta,
    )
