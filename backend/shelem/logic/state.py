"""
Game state aggregate for Shelem.

GameState is the single owner of everything the core needs: the seating,
the rule configuration, the ledger and the elapsed-time counter. Derived
values (totals, stats, dealer, outcome) are never stored on it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from shelem.logic.ledger import RoundLedger
from shelem.logic.settings import SessionConfiguration
from shelem.logic.types import Seating


class GameState(BaseModel):
    model_config = ConfigDict(frozen=True)

    seating: Seating
    config: SessionConfiguration = Field(default_factory=SessionConfiguration)
    ledger: RoundLedger = Field(default_factory=RoundLedger)
    elapsed_seconds: int = Field(default=0, ge=0)
