"""
String enum definitions for Shelem score-keeping concepts.
"""

from __future__ import annotations

from enum import Enum


class Team(str, Enum):
    """The two partnerships at the table."""

    A = "A"
    B = "B"

    @property
    def opponent(self) -> Team:
        return Team.B if self is Team.A else Team.A


class RoundOutcome(str, Enum):
    """Classification of a scored round."""

    NORMAL = "normal"
    SHELEM = "shelem"
    DOUBLE_SHELEM = "double_shelem"
    DOUBLE_PENALTY = "double_penalty"


class VictoryMode(str, Enum):
    """How the end of the game is decided."""

    TARGET = "target"  # first team to reach a target score
    SETS = "sets"  # fixed number of rounds


class GamePhase(str, Enum):
    """Phase of a Shelem game."""

    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
