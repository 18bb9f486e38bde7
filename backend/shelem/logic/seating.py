"""
Pre-game table setup: naming seats, choosing the dealer, swapping players.

All functions return a new Seating; the input is never mutated.
"""

from __future__ import annotations

import structlog

from shelem.logic.dealer import seat_order, seed_dealer_seat
from shelem.logic.enums import Team
from shelem.logic.exceptions import EmptyPlayerNameError, InvalidRoundInputError
from shelem.logic.types import TEAM_SIZE, Player, Seating

logger = structlog.get_logger()

SeatRef = tuple[Team, int]


def _check_index(index: int) -> None:
    if not 0 <= index < TEAM_SIZE:
        raise IndexError(f"seat index must be 0 or 1, got {index}")


def _label(team: Team, index: int) -> str:
    return f"{team.value}{index + 1}"


def _replace_seat(seating: Seating, team: Team, index: int, player: Player) -> Seating:
    players = list(seating.team(team))
    players[index] = player
    field = "team_a" if team is Team.A else "team_b"
    return seating.model_copy(update={field: tuple(players)})


def rename_player(seating: Seating, team: Team, index: int, name: str) -> Seating:
    _check_index(index)
    player = seating.team(team)[index]
    return _replace_seat(seating, team, index, player.model_copy(update={"name": name}))


def assign_dealer(seating: Seating, team: Team, index: int) -> Seating:
    """Make the given seat the only dealer."""
    _check_index(index)
    already_dealer = seating.team(team)[index].is_dealer
    updated = seating.model_copy(
        update={
            "team_a": tuple(
                p.model_copy(update={"is_dealer": team is Team.A and i == index}) for i, p in enumerate(seating.team_a)
            ),
            "team_b": tuple(
                p.model_copy(update={"is_dealer": team is Team.B and i == index}) for i, p in enumerate(seating.team_b)
            ),
        },
    )
    if not already_dealer:
        dealer = seating.team(team)[index]
        logger.info("dealer changed", seat=_label(team, index), dealer=dealer.name or _label(team, index))
    return updated


def swap_players(seating: Seating, first: SeatRef, second: SeatRef) -> Seating:
    """
    Swap the names of two seats.

    The dealer marker belongs to the seat, not the player, so whoever moves
    into the dealer's seat becomes the dealer.
    """
    (team_1, index_1), (team_2, index_2) = first, second
    _check_index(index_1)
    _check_index(index_2)
    player_1 = seating.team(team_1)[index_1]
    player_2 = seating.team(team_2)[index_2]

    updated = rename_player(seating, team_1, index_1, player_2.name)
    updated = rename_player(updated, team_2, index_2, player_1.name)
    logger.info(
        "players swapped",
        first_seat=_label(team_1, index_1),
        second_seat=_label(team_2, index_2),
        first=player_1.name,
        second=player_2.name,
    )
    return updated


def default_bidder(seating: Seating, team: Team) -> str:
    """Name pre-selected as bidder when a team is chosen: its first player."""
    return seating.team(team)[0].name


def validate_seating(seating: Seating) -> None:
    """Validate that a game can start with this seating.

    Raises EmptyPlayerNameError for the first blank (after trim) name, then
    DealerNotSeededError unless exactly one seat is marked as dealer.
    """
    for label, player in seating.labelled():
        if not player.name.strip():
            raise EmptyPlayerNameError(label)
    seed_dealer_seat(seat_order(seating))


def validate_bidder(seating: Seating, team: Team, bidder: str) -> None:
    """Raise InvalidRoundInputError unless `bidder` sits on `team`."""
    if bidder not in (player.name for player in seating.team(team)):
        raise InvalidRoundInputError(f"bidder {bidder!r} does not sit on team {team.value}")
