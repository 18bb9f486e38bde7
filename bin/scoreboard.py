"""Keep score for a Shelem game from the command line.

Games are stored as snapshots in SHELEM_SNAPSHOT_DIR.

Usage:
    uv run python bin/scoreboard.py new friday --a1 Ali --a2 Sara --b1 Reza --b2 Mina --dealer A1
    uv run python bin/scoreboard.py new friday ... --joker --double-penalty --shelem 400 --sets 8
    uv run python bin/scoreboard.py record friday --team A --bid 100 --defender 40 --bidder Ali
    uv run python bin/scoreboard.py show friday
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from shared.logging import resolve_log_level, setup_logging
from shared.storage import LocalSnapshotStorage, SnapshotStorage
from shelem.app.settings import ScoreKeeperSettings
from shelem.logic.enums import Team
from shelem.logic.exceptions import ShelemRuleError
from shelem.logic.game import (
    current_dealer,
    format_elapsed,
    game_outcome,
    init_game,
    ledger_view,
    player_stats,
    record_round,
)
from shelem.logic.seating import assign_dealer, rename_player
from shelem.logic.settings import (
    DOUBLE,
    SET_COUNT_PRESETS,
    TARGET_SCORE_PRESETS,
    SessionConfiguration,
    SetCount,
    TargetScore,
)
from shelem.logic.state import GameState
from shelem.logic.types import Seating
from shelem.session.snapshot import SnapshotError, from_snapshot, to_snapshot

SEAT_LABELS = {"A1": (Team.A, 0), "A2": (Team.A, 1), "B1": (Team.B, 0), "B2": (Team.B, 1)}


def _shelem_score(value: str) -> int | str:
    return value if value == DOUBLE else int(value)


def _cmd_new(args: argparse.Namespace, storage: SnapshotStorage) -> None:
    seating = Seating()
    for label, name in (("A1", args.a1), ("A2", args.a2), ("B1", args.b1), ("B2", args.b2)):
        team, index = SEAT_LABELS[label]
        seating = rename_player(seating, team, index, name)
    team, index = SEAT_LABELS[args.dealer]
    seating = assign_dealer(seating, team, index)

    victory = SetCount(sets=args.sets) if args.sets is not None else TargetScore(target=args.target)
    config = SessionConfiguration(
        with_joker=args.joker,
        double_penalty=args.double_penalty,
        shelem_score=args.shelem if args.shelem is not None else (400 if args.joker else 330),
        victory=victory,
    )
    state = init_game(seating, config)
    storage.save_snapshot(args.game_id, to_snapshot(state))
    print(f"Started {args.game_id}; {current_dealer(state).name} deals first")


def _cmd_record(args: argparse.Namespace, storage: SnapshotStorage) -> None:
    state = from_snapshot(storage.load_snapshot(args.game_id))
    state = record_round(
        state,
        bid=args.bid,
        bidding_team=Team(args.team),
        defender_points=args.defender,
        bidder_player=args.bidder,
    )
    storage.save_snapshot(args.game_id, to_snapshot(state))
    _print_state(state)


def _cmd_show(args: argparse.Namespace, storage: SnapshotStorage) -> None:
    _print_state(from_snapshot(storage.load_snapshot(args.game_id)))


def _print_state(state: GameState) -> None:
    view = ledger_view(state)
    print(f"{'#':>3}  {'dealer':<12} {'bidder':<12} {'bid':>4} {'A':>6} {'B':>6}  outcome")
    for row in view.rows:
        r = row.round
        print(
            f"{row.index + 1:>3}  {row.dealer:<12} {r.bidding_team.value} {r.bidder_player:<10} {r.bid:>4} "
            f"{row.cumulative_a:>6} {row.cumulative_b:>6}  {r.outcome.value}",
        )
    print(f"Totals: A={view.total_a} B={view.total_b}  time {format_elapsed(state.elapsed_seconds)}")
    print()

    print(f"{'player':<12} {'+':>6} {'-':>6} {'total':>6} {'shelem':>6} {'x2 -':>5}")
    for name, stats in player_stats(state).items():
        print(
            f"{name:<12} {stats.positive:>6} {stats.negative:>6} {stats.total:>6} "
            f"{stats.shelem_count:>6} {stats.double_penalty_count:>5}",
        )
    print()

    outcome = game_outcome(state)
    if outcome.finished and outcome.winner is not None:
        print(f"Team {outcome.winner.value} wins")
    else:
        print(f"In progress; next dealer: {current_dealer(state).name}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Shelem score keeper")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="start a new game")
    new.add_argument("game_id")
    for label in ("a1", "a2", "b1", "b2"):
        new.add_argument(f"--{label}", required=True, help=f"name of seat {label.upper()}")
    new.add_argument("--dealer", choices=sorted(SEAT_LABELS), required=True, help="seat dealing the first round")
    new.add_argument("--joker", action="store_true", help="play with the joker (200 points per round)")
    new.add_argument("--double-penalty", action="store_true", help="failed bids cost twice the bid")
    new.add_argument("--shelem", type=_shelem_score, help="shelem payout: 165/330 (200/400 with joker) or 'double'")
    victory = new.add_mutually_exclusive_group()
    target_presets = ", ".join(map(str, TARGET_SCORE_PRESETS))
    victory.add_argument("--target", type=int, default=800, help=f"target score (default: 800; {target_presets})")
    set_presets = ", ".join(map(str, SET_COUNT_PRESETS))
    victory.add_argument("--sets", type=int, help=f"play a fixed number of sets instead of a target ({set_presets})")

    record = sub.add_parser("record", help="record a finished round")
    record.add_argument("game_id")
    record.add_argument("--team", choices=["A", "B"], required=True, help="bidding team")
    record.add_argument("--bid", type=int, required=True)
    record.add_argument("--defender", type=int, required=True, help="points taken by the defending team")
    record.add_argument("--bidder", help="bidding player (default: the team's first player)")

    show = sub.add_parser("show", help="print the score sheet")
    show.add_argument("game_id")

    args = parser.parse_args()

    settings = ScoreKeeperSettings()
    setup_logging(
        log_dir=settings.log_dir,
        level=resolve_log_level(settings.log_level),
        log_format=settings.log_format,
    )
    storage = LocalSnapshotStorage(settings.snapshot_dir)

    commands = {"new": _cmd_new, "record": _cmd_record, "show": _cmd_show}
    try:
        commands[args.command](args, storage)
    except FileNotFoundError:
        print(f"No saved game named {args.game_id!r}", file=sys.stderr)
        sys.exit(1)
    except (ShelemRuleError, SnapshotError, ValueError) as exc:
        # ValueError covers pydantic ValidationError and corrupt snapshot files
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
