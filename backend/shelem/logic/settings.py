"""Session configuration for a Shelem game - the fixed rule parameters."""

from __future__ import annotations

from typing import Annotated, Literal, NamedTuple

import structlog
from pydantic import BaseModel, ConfigDict, Field

from shelem.logic.exceptions import InvalidConfigurationError

logger = structlog.get_logger()

DOUBLE = "double"

ShelemScore = Literal[165, 200, 330, 400, "double"]

# shelem score choices per joker setting, in the order the setup screen offers them
SHELEM_SCORES_WITHOUT_JOKER: tuple[ShelemScore, ...] = (165, 330, DOUBLE)
SHELEM_SCORES_WITH_JOKER: tuple[ShelemScore, ...] = (200, 400, DOUBLE)

# payout used when shelem_score is "double"
DOUBLE_SHELEM_PAYOUT = 330

TARGET_SCORE_PRESETS = (600, 800, 1165, 2000)
SET_COUNT_PRESETS = (4, 8)

BID_STEP = 5

# stale value left over from the other joker setting -> its counterpart
_JOKER_SHELEM_SCORE_MAP: dict[int, int] = {165: 200, 330: 400}
_NO_JOKER_SHELEM_SCORE_MAP: dict[int, int] = {200: 165, 400: 330}


class TargetScore(BaseModel):
    """First team whose cumulative total reaches `target` wins."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["target"] = "target"
    target: int = Field(default=800, ge=1)


class SetCount(BaseModel):
    """Game ends after `sets` rounds; the higher total wins."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["sets"] = "sets"
    sets: int = Field(default=8, ge=1)


VictoryCondition = Annotated[TargetScore | SetCount, Field(discriminator="mode")]


class SessionConfiguration(BaseModel):
    """
    Rule parameters chosen on the setup screen, immutable for the life of a game.

    Use validate_configuration() to check cross-field consistency and
    toggle_joker() to flip the joker rule without leaving a stale shelem score.
    """

    model_config = ConfigDict(frozen=True)

    with_joker: bool = False
    double_penalty: bool = False
    shelem_score: ShelemScore = 330
    victory: VictoryCondition = Field(default_factory=TargetScore)


class PointLimits(NamedTuple):
    """Point grid for one joker setting."""

    total_points: int  # points in play per round
    min_bid: int
    max_bid: int  # highest ordinary bid
    shelem_bid: int  # bidding every point in play
    double_shelem_bid: int  # sentinel bid that turns a clean sweep into a double shelem


_LIMITS_WITHOUT_JOKER = PointLimits(total_points=165, min_bid=70, max_bid=160, shelem_bid=165, double_shelem_bid=330)
_LIMITS_WITH_JOKER = PointLimits(total_points=200, min_bid=85, max_bid=195, shelem_bid=200, double_shelem_bid=400)


def get_point_limits(config: SessionConfiguration) -> PointLimits:
    """Return the point grid for the configuration's joker setting."""
    return _LIMITS_WITH_JOKER if config.with_joker else _LIMITS_WITHOUT_JOKER


def legal_bids(config: SessionConfiguration) -> tuple[int, ...]:
    """All legal bids in ascending order, including the two shelem sentinels."""
    limits = get_point_limits(config)
    ordinary = range(limits.min_bid, limits.max_bid + 1, BID_STEP)
    return (*ordinary, limits.shelem_bid, limits.double_shelem_bid)


def legal_defender_points(config: SessionConfiguration) -> tuple[int, ...]:
    """All legal defender point values, 0 to total points in steps of five."""
    return tuple(range(0, get_point_limits(config).total_points + 1, BID_STEP))


def shelem_score_options(*, with_joker: bool) -> tuple[ShelemScore, ...]:
    return SHELEM_SCORES_WITH_JOKER if with_joker else SHELEM_SCORES_WITHOUT_JOKER


def validate_configuration(config: SessionConfiguration) -> None:
    """Validate that the configuration's values are consistent with each other.

    Raises InvalidConfigurationError when the shelem score does not belong
    to the joker setting (e.g. 330 while the joker is enabled).
    """
    options = shelem_score_options(with_joker=config.with_joker)
    if config.shelem_score not in options:
        joker = "enabled" if config.with_joker else "disabled"
        raise InvalidConfigurationError(
            f"shelem_score={config.shelem_score!r} is not valid while the joker is {joker} "
            f"(expected one of {', '.join(str(o) for o in options)})",
        )


def toggle_joker(config: SessionConfiguration, *, enabled: bool) -> SessionConfiguration:
    """Return a copy with the joker rule set to `enabled`.

    A shelem score left over from the other joker setting is replaced with
    its counterpart (330 <-> 400, 165 <-> 200); "double" is kept as is.
    """
    score = config.shelem_score
    if score != DOUBLE:
        mapping = _JOKER_SHELEM_SCORE_MAP if enabled else _NO_JOKER_SHELEM_SCORE_MAP
        corrected = mapping.get(score, score)
        if corrected != score:
            logger.warning(
                "stale shelem score corrected",
                with_joker=enabled,
                previous_score=score,
                shelem_score=corrected,
            )
            score = corrected

    updated = config.model_copy(update={"with_joker": enabled, "shelem_score": score})
    validate_configuration(updated)
    return updated


def shelem_payout(config: SessionConfiguration) -> int:
    """Points paid to the bidding team for a clean sweep."""
    if config.shelem_score == DOUBLE:
        return DOUBLE_SHELEM_PAYOUT
    return config.shelem_score


def double_shelem_payout(config: SessionConfiguration) -> int:
    """Points paid for a clean sweep at the double-shelem sentinel bid."""
    return 2 * shelem_payout(config)
