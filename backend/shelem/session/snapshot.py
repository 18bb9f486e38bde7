"""Snapshot codec: flat key-value persistence of a GameState.

A snapshot maps five keys to JSON-encoded values:

- teamA / teamB: list of {"name", "isDealer"}
- gameSettings: {"withJoker", "doublePenalty", "shelemScore", "mode", "targetScore" | "sets"}
- sets: list of {"bid", "biddingTeam", "bidderPlayer", "defenderPoints", "teamA", "teamB", "type"}
- elapsedTime: seconds as an integer

Restoring re-scores every stored round from its raw inputs and rejects the
snapshot if the stored deltas or outcome disagree, so derived values after a
restore always equal a fresh replay of the same rounds.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from shelem.logic.completion import evaluate
from shelem.logic.enums import RoundOutcome, Team, VictoryMode
from shelem.logic.exceptions import ShelemRuleError
from shelem.logic.ledger import RoundLedger
from shelem.logic.scoring import score_round
from shelem.logic.seating import validate_bidder, validate_seating
from shelem.logic.settings import SessionConfiguration, SetCount, TargetScore, validate_configuration
from shelem.logic.state import GameState
from shelem.logic.types import Player, Round, Seating

if TYPE_CHECKING:
    from collections.abc import Mapping

KEY_TEAM_A = "teamA"
KEY_TEAM_B = "teamB"
KEY_SETTINGS = "gameSettings"
KEY_SETS = "sets"
KEY_ELAPSED = "elapsedTime"

SNAPSHOT_KEYS = (KEY_TEAM_A, KEY_TEAM_B, KEY_SETTINGS, KEY_SETS, KEY_ELAPSED)


class SnapshotError(Exception):
    """Raised when a snapshot cannot be restored."""


def _dump(value: object) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _team_to_wire(players: tuple[Player, Player]) -> list[dict[str, Any]]:
    return [{"name": p.name, "isDealer": p.is_dealer} for p in players]


def _settings_to_wire(config: SessionConfiguration) -> dict[str, Any]:
    wire: dict[str, Any] = {
        "withJoker": config.with_joker,
        "doublePenalty": config.double_penalty,
        "shelemScore": config.shelem_score,
        "mode": config.victory.mode,
    }
    if isinstance(config.victory, TargetScore):
        wire["targetScore"] = config.victory.target
    else:
        wire["sets"] = config.victory.sets
    return wire


def _round_to_wire(r: Round) -> dict[str, Any]:
    return {
        "bid": r.bid,
        "biddingTeam": r.bidding_team.value,
        "bidderPlayer": r.bidder_player,
        "defenderPoints": r.defender_points,
        "teamA": r.team_a_delta,
        "teamB": r.team_b_delta,
        "type": r.outcome.value,
    }


def to_snapshot(state: GameState) -> dict[str, str]:
    """Serialize the full game state to a flat {key: JSON string} mapping."""
    return {
        KEY_TEAM_A: _dump(_team_to_wire(state.seating.team_a)),
        KEY_TEAM_B: _dump(_team_to_wire(state.seating.team_b)),
        KEY_SETTINGS: _dump(_settings_to_wire(state.config)),
        KEY_SETS: _dump([_round_to_wire(r) for r in state.ledger.rounds]),
        KEY_ELAPSED: _dump(state.elapsed_seconds),
    }


def _load_key(snapshot: Mapping[str, str], key: str) -> Any:  # noqa: ANN401
    if key not in snapshot:
        raise SnapshotError(f"snapshot is missing key '{key}'")
    try:
        return json.loads(snapshot[key])
    except (json.JSONDecodeError, TypeError) as exc:
        raise SnapshotError(f"snapshot key '{key}' is not valid JSON: {exc}") from exc


def _team_from_wire(raw: Any, key: str) -> tuple[Player, Player]:  # noqa: ANN401
    if not isinstance(raw, list) or len(raw) != 2:  # noqa: PLR2004
        raise SnapshotError(f"snapshot key '{key}' must hold exactly two players")
    try:
        first, second = (Player(name=p["name"], is_dealer=p["isDealer"]) for p in raw)
    except (KeyError, TypeError, ValidationError) as exc:
        raise SnapshotError(f"snapshot key '{key}' has a malformed player: {exc}") from exc
    return first, second


def _settings_from_wire(raw: Any) -> SessionConfiguration:  # noqa: ANN401
    if not isinstance(raw, dict):
        raise SnapshotError(f"snapshot key '{KEY_SETTINGS}' must be an object")
    try:
        mode = VictoryMode(raw["mode"])
        victory = TargetScore(target=raw["targetScore"]) if mode == VictoryMode.TARGET else SetCount(sets=raw["sets"])
        return SessionConfiguration(
            with_joker=raw["withJoker"],
            double_penalty=raw["doublePenalty"],
            shelem_score=raw["shelemScore"],
            victory=victory,
        )
    except (KeyError, TypeError, ValueError) as exc:
        # pydantic ValidationError is a ValueError
        raise SnapshotError(f"snapshot key '{KEY_SETTINGS}' is malformed: {exc}") from exc


def _replay_round(index: int, raw: Any, seating: Seating, config: SessionConfiguration) -> Round:  # noqa: ANN401
    """Re-score a stored round and check it against what was stored and who sits where."""
    try:
        replayed = score_round(
            raw["bid"],
            Team(raw["biddingTeam"]),
            raw["defenderPoints"],
            raw["bidderPlayer"],
            config,
        )
        stored = (raw["teamA"], raw["teamB"], RoundOutcome(raw["type"]))
    except (AttributeError, KeyError, TypeError, ValueError, ShelemRuleError) as exc:
        raise SnapshotError(f"stored round {index} is malformed: {exc}") from exc

    try:
        validate_bidder(seating, replayed.bidding_team, replayed.bidder_player)
    except ShelemRuleError as exc:
        raise SnapshotError(f"stored round {index} has an impossible bidder: {exc}") from exc

    if stored != (replayed.team_a_delta, replayed.team_b_delta, replayed.outcome):
        raise SnapshotError(
            f"stored round {index} does not match a replay: stored {stored}, "
            f"replayed {(replayed.team_a_delta, replayed.team_b_delta, replayed.outcome)}",
        )
    return replayed


def from_snapshot(snapshot: Mapping[str, str]) -> GameState:
    """
    Restore a GameState from a snapshot produced by to_snapshot().

    Raises SnapshotError for missing keys, malformed values, seating or
    rules that would not be allowed to start a game, rounds that do not
    replay to their stored scores, rounds whose bidder does not sit on the
    bidding team, or rounds recorded after the game ended.
    """
    seating = Seating(
        team_a=_team_from_wire(_load_key(snapshot, KEY_TEAM_A), KEY_TEAM_A),
        team_b=_team_from_wire(_load_key(snapshot, KEY_TEAM_B), KEY_TEAM_B),
    )
    config = _settings_from_wire(_load_key(snapshot, KEY_SETTINGS))
    try:
        validate_seating(seating)
        validate_configuration(config)
    except ShelemRuleError as exc:
        raise SnapshotError(f"snapshot cannot start a game: {exc}") from exc

    raw_sets = _load_key(snapshot, KEY_SETS)
    if not isinstance(raw_sets, list):
        raise SnapshotError(f"snapshot key '{KEY_SETS}' must be a list")

    ledger = RoundLedger()
    for index, raw in enumerate(raw_sets):
        if evaluate(ledger, config).finished:
            raise SnapshotError(f"stored round {index} was recorded after the game ended")
        ledger = ledger.append(_replay_round(index, raw, seating, config))

    elapsed = _load_key(snapshot, KEY_ELAPSED)
    if isinstance(elapsed, bool) or not isinstance(elapsed, int) or elapsed < 0:
        raise SnapshotError(f"snapshot key '{KEY_ELAPSED}' must be a non-negative integer")

    return GameState(seating=seating, config=config, ledger=ledger, elapsed_seconds=elapsed)
