"""d6 dice pool roller for INFECTED."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from infected.modules.dice.source import DrawSource, RandomSource

DIE_SIDES = 6
HIT_THRESHOLD = 5
EXPLOSION_FACE = 6
MAX_BONUS_DICE = 3


class Outcome(str, Enum):
    CRITICAL_FAILURE = "critical_failure"
    FAILURE = "failure"
    PARTIAL_SUCCESS = "partial_success"
    SUCCESS = "success"
    STRONG_SUCCESS = "strong_success"

    @property
    def label(self) -> str:
        if self is Outcome.CRITICAL_FAILURE:
            return "CRITICAL FAILURE"
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class DieResult:
    value: int
    is_hit: bool
    is_explosion: bool = False
    is_critical_one: bool = False


@dataclass(frozen=True)
class RollOutcome:
    dice: tuple[DieResult, ...]
    bonus_dice: tuple[DieResult, ...] = field(default_factory=tuple)
    total_hits: int = 0
    is_critical_failure: bool = False
    description: Outcome = Outcome.FAILURE
    pushed: bool = False

    @property
    def pool_size(self) -> int:
        return len(self.dice)


def is_hit(value: int) -> bool:
    return value >= HIT_THRESHOLD


def classify(total_hits: int, critical_failure: bool = False) -> Outcome:
    """Map a hit count to its outcome band; critical failure overrides."""
    if critical_failure:
        return Outcome.CRITICAL_FAILURE
    if total_hits <= 0:
        return Outcome.FAILURE
    if total_hits == 1:
        return Outcome.PARTIAL_SUCCESS
    if total_hits == 2:
        return Outcome.SUCCESS
    return Outcome.STRONG_SUCCESS


def roll_pool(
    size: int,
    is_push: bool = False,
    source: DrawSource | None = None,
) -> RollOutcome:
    """Roll a pool of d6s.

    Args:
        size: Number of dice. Anything below 1 is rolled as a single die.
        is_push: Whether this is a pushed (desperate) roll. Pushed 1s are
            flagged as critical ones and the roll can never critically fail.
        source: Draw source; a fresh unseeded RandomSource when omitted.

    Returns:
        A RollOutcome with initial dice, bonus dice and the classified result.
    """
    source = source or RandomSource()
    count = max(size, 1)
    dice = _roll_dice(count, is_push, source)
    bonus = _roll_bonus(_explosions(dice), MAX_BONUS_DICE, source)

    total_hits = _count_hits(dice) + _count_hits(bonus)
    ones = sum(1 for d in dice if d.value == 1)
    critical = not is_push and total_hits == 0 and ones * 2 > count

    return RollOutcome(
        dice=dice,
        bonus_dice=bonus,
        total_hits=total_hits,
        is_critical_failure=critical,
        description=classify(total_hits, critical),
        pushed=is_push,
    )


def push_roll(original: RollOutcome, source: DrawSource | None = None) -> RollOutcome:
    """Push a roll: keep the hits, reroll every other initial die once.

    Bonus dice already earned are kept; the rerolled dice may only explode into
    whatever is left of the shared bonus-die cap. Raises ValueError when the
    outcome has already been pushed.
    """
    if original.pushed:
        raise ValueError("Cannot push a pushed roll")
    source = source or RandomSource()

    kept = tuple(d for d in original.dice if d.is_hit)
    rerolled = _roll_dice(len(original.dice) - len(kept), True, source)
    remaining_cap = MAX_BONUS_DICE - len(original.bonus_dice)
    extra_bonus = _roll_bonus(_explosions(rerolled), remaining_cap, source)

    dice = kept + rerolled
    bonus = original.bonus_dice + extra_bonus
    total_hits = _count_hits(dice) + _count_hits(bonus)
    return RollOutcome(
        dice=dice,
        bonus_dice=bonus,
        total_hits=total_hits,
        is_critical_failure=False,
        description=classify(total_hits),
        pushed=True,
    )


def critical_ones(outcome: RollOutcome) -> int:
    """Number of pushed 1s; each one costs the caller a point of stress."""
    return sum(1 for d in outcome.dice if d.is_critical_one)


def with_extra_hit(outcome: RollOutcome) -> RollOutcome:
    """Spend guts for "just enough": one more hit after seeing the result."""
    total_hits = outcome.total_hits + 1
    return replace(
        outcome,
        total_hits=total_hits,
        is_critical_failure=False,
        description=classify(total_hits),
    )


def format_roll(outcome: RollOutcome) -> str:
    """Render a roll as e.g. ``[5]✓ [2] → [6]✓ = 2 hits (Success)``."""
    dice_str = " ".join(_format_die(d) for d in outcome.dice)
    bonus_str = ""
    if outcome.bonus_dice:
        bonus_str = " → " + " ".join(_format_die(d) for d in outcome.bonus_dice)
    return f"{dice_str}{bonus_str} = {outcome.total_hits} hits ({outcome.description.label})"


def _roll_dice(count: int, is_push: bool, source: DrawSource) -> tuple[DieResult, ...]:
    results = []
    for _ in range(count):
        value = source.randint(1, DIE_SIDES)
        results.append(
            DieResult(
                value=value,
                is_hit=is_hit(value),
                is_critical_one=is_push and value == 1,
            )
        )
    return tuple(results)


def _roll_bonus(pending: int, cap: int, source: DrawSource) -> tuple[DieResult, ...]:
    # Initial sixes and bonus sixes draw from the same cap.
    pending = min(pending, max(cap, 0))
    bonus: list[DieResult] = []
    while len(bonus) < pending:
        value = source.randint(1, DIE_SIDES)
        bonus.append(DieResult(value=value, is_hit=is_hit(value), is_explosion=True))
        if value == EXPLOSION_FACE and pending < cap:
            pending += 1
    return tuple(bonus)


def _explosions(dice: tuple[DieResult, ...]) -> int:
    return sum(1 for d in dice if d.value == EXPLOSION_FACE)


def _count_hits(dice: tuple[DieResult, ...]) -> int:
    return sum(1 for d in dice if d.is_hit)


def _format_die(die: DieResult) -> str:
    return f"[{die.value}]✓" if die.is_hit else f"[{die.value}]"
