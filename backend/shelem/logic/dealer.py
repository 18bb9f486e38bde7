"""
Dealer rotation.

The deal moves backward through a fixed, interleaved seat order by one seat
per round. Nothing is stored: the dealer of any round is recomputed from the
round index and the seat seeded as dealer before the first round, so a
replayed or partially displayed ledger always agrees with itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shelem.logic.exceptions import DealerNotSeededError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shelem.logic.types import Player, Seating

NUM_SEATS = 4


def seat_order(seating: Seating) -> tuple[Player, Player, Player, Player]:
    """Rotation order: A2, B2, A1, B1."""
    return (seating.team_a[1], seating.team_b[1], seating.team_a[0], seating.team_b[0])


def seed_dealer_seat(order: Sequence[Player]) -> int:
    """Index in `order` of the seat that holds the deal for round 0.

    Raises DealerNotSeededError unless exactly one seat is marked as dealer.
    """
    dealers = [i for i, player in enumerate(order) if player.is_dealer]
    if not dealers:
        raise DealerNotSeededError("no dealer selected; mark exactly one seat as dealer")
    if len(dealers) > 1:
        raise DealerNotSeededError(f"{len(dealers)} seats are marked as dealer; expected exactly one")
    return dealers[0]


def dealer_seat_for_round(round_index: int, seed_seat: int) -> int:
    if round_index < 0:
        raise ValueError(f"round_index must be >= 0, got {round_index}")
    return (seed_seat - round_index) % NUM_SEATS


def dealer_for_round(round_index: int, order: Sequence[Player], seed_seat: int) -> Player:
    """Return the player holding the deal in round `round_index` (0-based)."""
    return order[dealer_seat_for_round(round_index, seed_seat)]
