"""Opposed contest rule — both sides roll, hits are compared."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from infected.modules.dice import roller
from infected.modules.dice.source import DrawSource, RandomSource


class Winner(str, Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"
    TIE = "tie"


@dataclass(frozen=True)
class ContestResult:
    attacker_result: roller.RollOutcome
    defender_result: roller.RollOutcome
    winner: Winner
    margin: int

    @property
    def defender_holds(self) -> bool:
        """Ties go to the defender / status quo."""
        return self.winner is not Winner.ATTACKER


def resolve_contest(
    attacker_pool: int,
    defender_pool: int,
    source: DrawSource | None = None,
) -> ContestResult:
    """Roll attacker then defender and decide the winner.

    An attacker with no hits always loses, even against a defender who also
    rolled nothing.
    """
    source = source or RandomSource()
    attacker = roller.roll_pool(attacker_pool, source=source)
    defender = roller.roll_pool(defender_pool, source=source)

    margin = attacker.total_hits - defender.total_hits
    if attacker.total_hits == 0:
        winner = Winner.DEFENDER
    elif margin > 0:
        winner = Winner.ATTACKER
    elif margin < 0:
        winner = Winner.DEFENDER
    else:
        winner = Winner.TIE

    return ContestResult(
        attacker_result=attacker,
        defender_result=defender,
        winner=winner,
        margin=margin,
    )
