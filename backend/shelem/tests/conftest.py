from __future__ import annotations

import pytest

from shelem.logic.enums import RoundOutcome, Team
from shelem.logic.game import init_game
from shelem.logic.settings import SessionConfiguration
from shelem.logic.state import GameState
from shelem.logic.types import Player, Round, Seating

# ============================================================================
# Test State Builder Helpers
# ============================================================================

DEFAULT_NAMES = ("Ali", "Sara", "Reza", "Mina")  # A1, A2, B1, B2


def create_seating(
    names: tuple[str, str, str, str] = DEFAULT_NAMES,
    dealer: str | None = "A1",
) -> Seating:
    """Create a Seating; `dealer` is a seat label (A1, A2, B1, B2) or None."""
    labels = ("A1", "A2", "B1", "B2")
    players = [Player(name=name, is_dealer=label == dealer) for name, label in zip(names, labels, strict=True)]
    return Seating(team_a=(players[0], players[1]), team_b=(players[2], players[3]))


def create_round(  # noqa: PLR0913
    team_a_delta: int,
    team_b_delta: int,
    *,
    bidding_team: Team = Team.A,
    bidder_player: str = "Ali",
    bid: int = 100,
    defender_points: int = 0,
    outcome: RoundOutcome = RoundOutcome.NORMAL,
) -> Round:
    """Create a Round with explicit deltas, bypassing the scoring engine."""
    return Round(
        bid=bid,
        bidding_team=bidding_team,
        bidder_player=bidder_player,
        defender_points=defender_points,
        outcome=outcome,
        team_a_delta=team_a_delta,
        team_b_delta=team_b_delta,
    )


def create_game_state(
    config: SessionConfiguration | None = None,
    *,
    seating: Seating | None = None,
) -> GameState:
    return init_game(seating or create_seating(), config or SessionConfiguration())


@pytest.fixture
def seating() -> Seating:
    return create_seating()


@pytest.fixture
def config() -> SessionConfiguration:
    return SessionConfiguration()
