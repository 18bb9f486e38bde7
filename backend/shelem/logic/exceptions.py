"""Typed domain exceptions for score-keeping rule violations.

All domain-level rejections use subclasses of ShelemRuleError rather than
raw ValueError, so callers (setup screen, round-entry form) can catch one
base class and re-prompt. Every error is raised before any new state is
built, so a rejected round never leaves a partial ledger behind.
"""


class ShelemRuleError(Exception):
    """Base exception for score-keeping rule violations."""


class InvalidRoundInputError(ShelemRuleError):
    """Bid, defender points or bidder are outside the legal grid for the configuration."""


class InvalidConfigurationError(ShelemRuleError):
    """Session configuration values are inconsistent with each other."""


class DealerNotSeededError(ShelemRuleError):
    """Game start attempted without exactly one seeded dealer."""


class EmptyPlayerNameError(ShelemRuleError):
    """Game start attempted with a blank name in one of the four seats.

    Attributes:
        label: Seat label of the first blank seat (e.g. "A1", "B2").

    """

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"player name for seat {label} must not be empty")


class GameFinishedError(ShelemRuleError):
    """A round was submitted after the game already has a winner."""
