"""Domain records shared by the scoring engine, ledger and controller."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from shelem.logic.enums import RoundOutcome, Team

TEAM_SIZE = 2


class Player(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    is_dealer: bool = False


class Seating(BaseModel):
    """
    The four seats at the table, two per team.

    Listing order is team_a[0], team_a[1], team_b[0], team_b[1]
    (seat labels A1, A2, B1, B2). The deal rotates in a different,
    interleaved order; see shelem.logic.dealer.seat_order.
    """

    model_config = ConfigDict(frozen=True)

    team_a: tuple[Player, Player] = (Player(), Player())
    team_b: tuple[Player, Player] = (Player(), Player())

    def team(self, team: Team) -> tuple[Player, Player]:
        return self.team_a if team is Team.A else self.team_b

    def players(self) -> tuple[Player, Player, Player, Player]:
        return (*self.team_a, *self.team_b)

    def labelled(self) -> list[tuple[str, Player]]:
        """(label, player) pairs in listing order, e.g. ("A1", player)."""
        return [
            (f"{team.value}{index + 1}", player)
            for team in Team
            for index, player in enumerate(self.team(team))
        ]


class Round(BaseModel):
    """
    One completed and scored round ("set").

    Exactly one of team_a_delta/team_b_delta is the bidding team's score;
    the other is the defending team's raw points, so the two do not net to zero.
    """

    model_config = ConfigDict(frozen=True)

    bid: int
    bidding_team: Team
    bidder_player: str
    defender_points: int
    outcome: RoundOutcome
    team_a_delta: int
    team_b_delta: int

    @property
    def defending_team(self) -> Team:
        return self.bidding_team.opponent

    @property
    def bidding_delta(self) -> int:
        return self.team_a_delta if self.bidding_team is Team.A else self.team_b_delta

    @property
    def defending_delta(self) -> int:
        return self.team_b_delta if self.bidding_team is Team.A else self.team_a_delta

    @property
    def is_successful(self) -> bool:
        """True when the bidding team made its bid (or swept)."""
        return self.bidding_delta >= 0

    def delta_for(self, team: Team) -> int:
        return self.team_a_delta if team is Team.A else self.team_b_delta


class PlayerStats(BaseModel):
    """Aggregate results of the rounds a player bid."""

    model_config = ConfigDict(frozen=True)

    positive: int = 0
    negative: int = 0  # magnitude of losses
    total: int = 0
    shelem_count: int = 0
    double_shelem_count: int = 0
    double_penalty_count: int = 0


class GameOutcome(BaseModel):
    """Result of evaluating the ledger against the victory condition."""

    model_config = ConfigDict(frozen=True)

    finished: bool = False
    winner: Team | None = None
    decided_at: int | None = None  # 0-based index of the deciding round


class LedgerRow(BaseModel):
    """A round as shown on the score sheet, with running totals after it."""

    model_config = ConfigDict(frozen=True)

    index: int
    round: Round
    cumulative_a: int
    cumulative_b: int
    dealer: str


class LedgerView(BaseModel):
    """Read-only projection of the ledger for the presentation layer."""

    model_config = ConfigDict(frozen=True)

    rows: tuple[LedgerRow, ...] = ()
    total_a: int = 0
    total_b: int = 0

    @property
    def round_count(self) -> int:
        return len(self.rows)
