"""
Game completion: decide whether the ledger has produced a winner.

The ledger is folded from the first round, and the first round that meets
the victory condition decides the game. Rounds after it cannot change the
winner, so re-evaluating a finished game always gives the same outcome.

Tie-breaks are fixed and asymmetric:
- target score: team A is checked before team B, so a simultaneous crossing goes to A
- set count: an exact tie after the last set goes to B (there is no draw)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shelem.logic.enums import Team
from shelem.logic.settings import SetCount, TargetScore
from shelem.logic.types import GameOutcome

if TYPE_CHECKING:
    from shelem.logic.ledger import RoundLedger
    from shelem.logic.settings import SessionConfiguration

IN_PROGRESS = GameOutcome()


def _target_winner(total_a: int, total_b: int, target: int) -> Team | None:
    if total_a >= target:
        return Team.A
    if total_b >= target:
        return Team.B
    return None


def _set_count_winner(total_a: int, total_b: int) -> Team:
    return Team.A if total_a > total_b else Team.B


def evaluate(ledger: RoundLedger, config: SessionConfiguration) -> GameOutcome:
    """Evaluate the ledger against the configured victory condition."""
    victory = config.victory
    for index, (total_a, total_b) in enumerate(ledger.cumulative_totals()):
        if isinstance(victory, TargetScore):
            winner = _target_winner(total_a, total_b, victory.target)
            if winner is not None:
                return GameOutcome(finished=True, winner=winner, decided_at=index)
        elif isinstance(victory, SetCount):
            if index + 1 >= victory.sets:
                return GameOutcome(finished=True, winner=_set_count_winner(total_a, total_b), decided_at=index)
        else:
            raise AssertionError(f"unexpected victory condition: {victory!r}")  # pragma: no cover
    return IN_PROGRESS
