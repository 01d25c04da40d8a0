"""Breaking point rule — NERVE + Resolve when the stress track fills."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from infected.modules.dice import roller
from infected.modules.dice.source import DrawSource, RandomSource

# Breakdown clears the whole track rather than a fixed amount.
CLEAR_ALL: float = math.inf


class BreakingPointOutcome(str, Enum):
    HOLD = "hold"
    PANIC = "panic"
    BREAKDOWN = "breakdown"


@dataclass(frozen=True)
class BreakingPointResult:
    result: roller.RollOutcome
    outcome: BreakingPointOutcome
    stress_cleared: float

    @property
    def clears_all(self) -> bool:
        return self.stress_cleared == CLEAR_ALL


def resolve_breaking_point(
    nerve: int,
    resolve: int,
    source: DrawSource | None = None,
) -> BreakingPointResult:
    """2+ hits hold (clear 1), 1 hit panic (clear 2), 0 hits breakdown (clear all)."""
    result = roller.roll_pool(nerve + resolve, source=source or RandomSource())

    if result.total_hits >= 2:
        outcome, cleared = BreakingPointOutcome.HOLD, 1
    elif result.total_hits == 1:
        outcome, cleared = BreakingPointOutcome.PANIC, 2
    else:
        outcome, cleared = BreakingPointOutcome.BREAKDOWN, CLEAR_ALL

    return BreakingPointResult(result=result, outcome=outcome, stress_cleared=cleared)


def clear_stress(current: int, cleared: float) -> int:
    """Stress left after a breaking point; CLEAR_ALL always lands on zero."""
    if cleared == CLEAR_ALL:
        return 0
    return max(0, current - int(cleared))
