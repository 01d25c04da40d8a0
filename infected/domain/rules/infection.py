"""Infection exposure rule — GRIT + Endure after a bite or blood exposure."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from infected.modules.dice import roller
from infected.modules.dice.parser import roll_expression
from infected.modules.dice.source import DrawSource, RandomSource

INFECTED_SYMPTOMS = "1d6"
INFECTED_TURNING = "2d6"
FIGHTING_SYMPTOMS = "1d6x10"


class InfectionOutcome(str, Enum):
    INFECTED = "infected"
    FIGHTING = "fighting"
    CLEAR = "clear"


@dataclass(frozen=True)
class InfectionResult:
    result: roller.RollOutcome
    outcome: InfectionOutcome
    symptoms_in_minutes: int
    turned_in_minutes: int | None = None


def resolve_infection(
    grit: int,
    endure: int,
    source: DrawSource | None = None,
) -> InfectionResult:
    """Roll an exposure check.

    0 hits: infected, symptoms in 1d6 minutes, turned in 2d6 minutes.
    1 hit: fighting it, symptoms in 1d6×10 minutes.
    2+ hits: clear.

    Timer dice are drawn after the pool, symptoms first.
    """
    source = source or RandomSource()
    result = roller.roll_pool(grit + endure, source=source)

    if result.total_hits == 0:
        return InfectionResult(
            result=result,
            outcome=InfectionOutcome.INFECTED,
            symptoms_in_minutes=roll_expression(INFECTED_SYMPTOMS, source).total,
            turned_in_minutes=roll_expression(INFECTED_TURNING, source).total,
        )
    if result.total_hits == 1:
        return InfectionResult(
            result=result,
            outcome=InfectionOutcome.FIGHTING,
            symptoms_in_minutes=roll_expression(FIGHTING_SYMPTOMS, source).total,
        )
    return InfectionResult(
        result=result,
        outcome=InfectionOutcome.CLEAR,
        symptoms_in_minutes=0,
    )
