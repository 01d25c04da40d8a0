"""Check dispatcher — the single entry point for dice checks requested by the narrative layer."""

from __future__ import annotations

import logging
from dataclasses import asdict

from infected.domain import wounds as wounds_mod
from infected.domain.rules import breaking_point, contest, infection
from infected.models.event import (
    BreakingPointPayload,
    CheckEvent,
    CheckType,
    DamagePayload,
    InfectionPayload,
    OpposedPayload,
    PushPayload,
    RollPayload,
)
from infected.models.result import DiceRollResult, DieResultModel, EngineResult
from infected.modules.dice import roller
from infected.modules.dice.source import DrawSource, RandomSource

logger = logging.getLogger("infected-core.dispatcher")

PUSH_STRESS_COST = 1


def dispatch(event: CheckEvent, source: DrawSource | None = None) -> EngineResult:
    """Route a CheckEvent to its handler and return an EngineResult."""
    payload = event.payload
    ct = payload.check_type
    source = source or RandomSource()

    try:
        if ct == CheckType.ROLL:
            return _handle_roll(payload, source)
        elif ct == CheckType.PUSH:
            return _handle_push(payload, source)
        elif ct == CheckType.OPPOSED:
            return _handle_opposed(payload, source)
        elif ct == CheckType.INFECTION:
            return _handle_infection(payload, source)
        elif ct == CheckType.BREAKING_POINT:
            return _handle_breaking_point(payload, source)
        elif ct == CheckType.DAMAGE:
            return _handle_damage(payload)
        else:
            return EngineResult(
                success=False, event_type=ct, error=f"Unhandled check type: {ct}"
            )
    except Exception as exc:
        logger.exception("Check %s failed for session %s", ct, event.session_id)
        return EngineResult(success=False, event_type=ct, error=str(exc))


# --- Conversions ---


def to_roll_result(outcome: roller.RollOutcome) -> DiceRollResult:
    return DiceRollResult(
        dice=[DieResultModel(**asdict(d)) for d in outcome.dice],
        bonus_dice=[DieResultModel(**asdict(d)) for d in outcome.bonus_dice],
        total_hits=outcome.total_hits,
        is_critical_failure=outcome.is_critical_failure,
        description=outcome.description.value,
        pushed=outcome.pushed,
        summary=roller.format_roll(outcome),
    )


def to_outcome(result: DiceRollResult) -> roller.RollOutcome:
    """Rebuild a RollOutcome from a previously returned DiceRollResult."""
    return roller.RollOutcome(
        dice=tuple(roller.DieResult(**d.model_dump()) for d in result.dice),
        bonus_dice=tuple(roller.DieResult(**d.model_dump()) for d in result.bonus_dice),
        total_hits=result.total_hits,
        is_critical_failure=result.is_critical_failure,
        description=roller.Outcome(result.description),
        pushed=result.pushed,
    )


# --- Handlers ---


def _handle_roll(payload: RollPayload, source: DrawSource) -> EngineResult:
    outcome = roller.roll_pool(payload.pool, is_push=payload.is_push, source=source)
    logger.debug("Rolled pool %d: %s", payload.pool, roller.format_roll(outcome))
    return EngineResult(
        success=True,
        event_type="roll",
        data={
            "pool": outcome.pool_size,
            "total_hits": outcome.total_hits,
            "outcome": outcome.description.value,
            "critical_failure": outcome.is_critical_failure,
            "can_push": not outcome.pushed and outcome.total_hits == 0,
        },
        rolls=[to_roll_result(outcome)],
    )


def _handle_push(payload: PushPayload, source: DrawSource) -> EngineResult:
    if not payload.original.dice:
        return EngineResult(
            success=False, event_type="push", error="Cannot push a roll with no dice"
        )
    original = to_outcome(payload.original)
    if original.pushed:
        return EngineResult(
            success=False, event_type="push", error="Cannot push a pushed roll"
        )
    outcome = roller.push_roll(original, source=source)
    return EngineResult(
        success=True,
        event_type="push",
        data={
            "total_hits": outcome.total_hits,
            "outcome": outcome.description.value,
            "stress_cost": PUSH_STRESS_COST,
            "critical_ones": roller.critical_ones(outcome),
        },
        rolls=[to_roll_result(outcome)],
    )


def _handle_opposed(payload: OpposedPayload, source: DrawSource) -> EngineResult:
    result = contest.resolve_contest(payload.attacker_pool, payload.defender_pool, source)
    return EngineResult(
        success=True,
        event_type="opposed",
        data={
            "winner": result.winner.value,
            "margin": result.margin,
            "defender_holds": result.defender_holds,
            "attacker_hits": result.attacker_result.total_hits,
            "defender_hits": result.defender_result.total_hits,
        },
        rolls=[to_roll_result(result.attacker_result), to_roll_result(result.defender_result)],
    )


def _handle_infection(payload: InfectionPayload, source: DrawSource) -> EngineResult:
    result = infection.resolve_infection(payload.grit, payload.endure, source)
    if result.outcome is infection.InfectionOutcome.INFECTED:
        logger.info("Infection check failed: turning in %s minutes", result.turned_in_minutes)
    return EngineResult(
        success=True,
        event_type="infection",
        data={
            "outcome": result.outcome.value,
            "symptoms_in_minutes": result.symptoms_in_minutes,
            "turned_in_minutes": result.turned_in_minutes,
        },
        rolls=[to_roll_result(result.result)],
    )


def _handle_breaking_point(payload: BreakingPointPayload, source: DrawSource) -> EngineResult:
    result = breaking_point.resolve_breaking_point(payload.nerve, payload.resolve, source)
    return EngineResult(
        success=True,
        event_type="breaking_point",
        data={
            "outcome": result.outcome.value,
            # JSON has no infinity; "all" stands in for CLEAR_ALL
            "stress_cleared": "all" if result.clears_all else int(result.stress_cleared),
        },
        rolls=[to_roll_result(result.result)],
    )


def _handle_damage(payload: DamagePayload) -> EngineResult:
    amount = max(0, wounds_mod.damage(payload.base_damage, payload.hits) - max(payload.armor, 0))
    return EngineResult(
        success=True,
        event_type="damage",
        data={
            "damage": amount,
            "severity": wounds_mod.severity_of(amount).value if amount > 0 else None,
        },
    )
