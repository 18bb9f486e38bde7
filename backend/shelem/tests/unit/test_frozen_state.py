"""
Game state records are immutable; every operation returns a new value.
"""

import pytest
from pydantic import ValidationError

from shelem.logic.enums import Team
from shelem.logic.game import record_round, tick
from shelem.logic.state import GameState
from shelem.logic.types import Player
from shelem.tests.conftest import create_game_state, create_round, create_seating


class TestFrozenModels:
    def test_player_is_frozen(self):
        player = Player(name="Ali")
        with pytest.raises(ValidationError):
            player.name = "Sara"

    def test_round_is_frozen(self):
        r = create_round(125, 40)
        with pytest.raises(ValidationError):
            r.team_a_delta = 0

    def test_game_state_is_frozen(self):
        state = create_game_state()
        with pytest.raises(ValidationError):
            state.elapsed_seconds = 10

    def test_seating_teams_are_tuples(self):
        seating = create_seating()
        assert isinstance(seating.team_a, tuple)
        assert isinstance(seating.team_b, tuple)

    def test_negative_elapsed_rejected(self):
        with pytest.raises(ValidationError, match="elapsed_seconds"):
            GameState(seating=create_seating(), elapsed_seconds=-1)


class TestOperationsReturnNewState:
    def test_record_round_does_not_mutate_input(self):
        state = create_game_state()
        before = state.model_dump()

        record_round(state, bid=100, bidding_team=Team.A, defender_points=40)

        assert state.model_dump() == before

    def test_tick_does_not_mutate_input(self):
        state = create_game_state()
        new_state = tick(state, 5)

        assert state.elapsed_seconds == 0
        assert new_state.elapsed_seconds == 5
        assert new_state.ledger is state.ledger
