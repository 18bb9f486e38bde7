"""
Append-only record of scored rounds.

Totals, running totals and per-player statistics are always derived from
the rounds by a fold in insertion order; nothing is cached, so calling any
of them twice on the same ledger returns the same values.
"""

from __future__ import annotations

from itertools import accumulate
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from shelem.logic.dealer import dealer_for_round, seat_order, seed_dealer_seat
from shelem.logic.enums import RoundOutcome
from shelem.logic.types import LedgerRow, LedgerView, PlayerStats, Round

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shelem.logic.types import Seating


class RoundLedger(BaseModel):
    model_config = ConfigDict(frozen=True)

    rounds: tuple[Round, ...] = ()

    def __len__(self) -> int:
        return len(self.rounds)

    def append(self, round_: Round) -> RoundLedger:
        """Return a new ledger with `round_` added at the end."""
        return self.model_copy(update={"rounds": (*self.rounds, round_)})

    def totals(self) -> tuple[int, int]:
        """Cumulative (team A, team B) totals over all rounds."""
        return (
            sum(r.team_a_delta for r in self.rounds),
            sum(r.team_b_delta for r in self.rounds),
        )

    def cumulative_totals(self) -> list[tuple[int, int]]:
        """Running (team A, team B) totals after each round."""
        return list(
            accumulate(
                ((r.team_a_delta, r.team_b_delta) for r in self.rounds),
                lambda acc, delta: (acc[0] + delta[0], acc[1] + delta[1]),
            ),
        )

    def player_stats(self, players: Iterable[str] = ()) -> dict[str, PlayerStats]:
        """
        Aggregate each bidder's results.

        Every round is attributed to its bidder_player. A non-negative bidding
        score counts as positive, a negative one adds its magnitude to
        negative. Names in `players` are listed first, in order, with zero
        stats if they never bid.
        """
        counters: dict[str, dict[str, int]] = {name: _empty_counters() for name in players}

        for r in self.rounds:
            c = counters.setdefault(r.bidder_player, _empty_counters())
            score = r.bidding_delta
            if score >= 0:
                c["positive"] += score
            else:
                c["negative"] += -score

            if r.outcome in (RoundOutcome.SHELEM, RoundOutcome.DOUBLE_SHELEM):
                c["shelem_count"] += 1
            if r.outcome == RoundOutcome.DOUBLE_SHELEM:
                c["double_shelem_count"] += 1
            if r.outcome == RoundOutcome.DOUBLE_PENALTY:
                c["double_penalty_count"] += 1

        return {name: PlayerStats(total=c["positive"] - c["negative"], **c) for name, c in counters.items()}

    def view(self, seating: Seating) -> LedgerView:
        """Build the score sheet: each round with running totals and its dealer."""
        order = seat_order(seating)
        seed_seat = seed_dealer_seat(order)
        rows = tuple(
            LedgerRow(
                index=i,
                round=r,
                cumulative_a=total_a,
                cumulative_b=total_b,
                dealer=dealer_for_round(i, order, seed_seat).name,
            )
            for i, (r, (total_a, total_b)) in enumerate(zip(self.rounds, self.cumulative_totals(), strict=True))
        )
        total_a, total_b = self.totals()
        return LedgerView(rows=rows, total_a=total_a, total_b=total_b)


def _empty_counters() -> dict[str, int]:
    return {
        "positive": 0,
        "negative": 0,
        "shelem_count": 0,
        "double_shelem_count": 0,
        "double_penalty_count": 0,
    }
