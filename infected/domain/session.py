"""Session state application — turn declared deltas and check results into the next snapshot."""

from __future__ import annotations

import logging

from infected.domain import tracks, wounds as wounds_mod
from infected.domain.inventory import apply_inventory
from infected.domain.objectives import apply_objectives
from infected.domain.rules.breaking_point import BreakingPointResult, clear_stress
from infected.infra.config import settings
from infected.models.event import StateChanges
from infected.models.result import StateChange
from infected.models.state import (
    CharacterState,
    GameSession,
    Item,
    Objective,
    WoundTier,
    Wounds,
)

logger = logging.getLogger("infected-core.session")

MAX_GUTS_EARNED_PER_SESSION = 2
LONG_REST_BLEEDING_HEALED = 2


class _Changes:
    """Collects StateChange records for fields whose value actually moved."""

    def __init__(self, session: GameSession) -> None:
        self.session_id = session.id
        self.character_id = session.character.id
        self.records: list[StateChange] = []

    def session(self, field: str, old: object, new: object) -> None:
        self._add("session", self.session_id, field, old, new)

    def character(self, field: str, old: object, new: object) -> None:
        self._add("character", self.character_id, field, old, new)

    def _add(self, entity_type: str, entity_id: str, field: str, old: object, new: object) -> None:
        if old == new:
            return
        self.records.append(
            StateChange(
                entity_type=entity_type,
                entity_id=entity_id,
                field=field,
                old_value=_fmt(old),
                new_value=_fmt(new),
            )
        )


def _fmt(value: object) -> str:
    if isinstance(value, list):
        return ", ".join(_fmt(v) for v in value)
    if isinstance(value, Item):
        return f"{value.name} x{value.quantity}"
    if isinstance(value, Objective):
        return f"{value.text} [{'x' if value.completed else ' '}]"
    if hasattr(value, "value"):  # enums
        return str(value.value)
    return str(value)


def apply_state_changes(
    session: GameSession,
    changes: StateChanges,
    cascade_wounds: bool | None = None,
) -> tuple[GameSession, list[StateChange]]:
    """Apply a validated delta envelope and return (new session, change records).

    Args:
        session: Current snapshot. Never modified.
        changes: Declared deltas from the narrative turn.
        cascade_wounds: Spill full wound tiers into the next severity. Falls
            back to ``settings.wound_overflow_cascade`` when None.
    """
    if cascade_wounds is None:
        cascade_wounds = settings.wound_overflow_cascade

    log = _Changes(session)
    character = session.character
    char_updates: dict = {}
    session_updates: dict = {}

    # Threat: absolute target first, then any relative adjustment
    if changes.threat is not None or changes.threat_change is not None:
        threat = session.threat
        if changes.threat is not None:
            threat = tracks.set_value(changes.threat, tracks.THREAT_MIN, tracks.THREAT_MAX)
        if changes.threat_change is not None:
            threat = tracks.apply_delta(
                threat, changes.threat_change, tracks.THREAT_MIN, tracks.THREAT_MAX
            )
        session_updates["threat"] = threat
        log.session("threat", session.threat, threat)

    if changes.threat_state is not None:
        threat_state = changes.threat_state
    elif "threat" in session_updates:
        threat_state = tracks.threat_state_for(session_updates["threat"])
    else:
        threat_state = session.threat_state
    session_updates["threat_state"] = threat_state
    log.session("threat_state", session.threat_state, threat_state)

    if changes.stress is not None:
        stress = tracks.apply_delta(
            character.stress, changes.stress, tracks.STRESS_MIN, character.max_stress
        )
        char_updates["stress"] = stress
        log.character("stress", character.stress, stress)
        if tracks.at_breaking_point(stress, character.max_stress):
            logger.info("Character %s reached breaking point", character.id)

    if changes.wounds is not None:
        tier = changes.wounds.type
        if cascade_wounds:
            outcome = wounds_mod.apply_wound_cascading(
                character.wounds, character.wound_capacity, tier, changes.wounds.change
            )
        else:
            outcome = wounds_mod.WoundResult(
                wounds=wounds_mod.apply_wound(character.wounds, tier, changes.wounds.change)
            )
        char_updates["wounds"] = outcome.wounds
        _log_wounds(log, character.wounds, outcome.wounds)
        if outcome.overflow_death and not character.dead:
            char_updates["dead"] = True
            log.character("dead", False, True)
            logger.warning("Character %s died from wound overflow", character.id)

    if changes.guts is not None:
        guts = tracks.apply_delta(character.guts, changes.guts, tracks.GUTS_MIN, tracks.GUTS_MAX)
        char_updates["guts"] = guts
        log.character("guts", character.guts, guts)

    if changes.guts_earned is not None:
        earned = tracks.apply_delta(
            character.guts_earned_this_session,
            changes.guts_earned,
            0,
            MAX_GUTS_EARNED_PER_SESSION,
        )
        char_updates["guts_earned_this_session"] = earned
        log.character("guts_earned_this_session", character.guts_earned_this_session, earned)

    if changes.kills:
        kill_count = session.kill_count + max(0, changes.kills)
        session_updates["kill_count"] = kill_count
        log.session("kill_count", session.kill_count, kill_count)

    if changes.day is not None:
        day = max(1, changes.day)
        session_updates["day"] = day
        log.session("day", session.day, day)

    if changes.time is not None:
        session_updates["time"] = changes.time
        log.session("time", session.time, changes.time)

    if changes.inventory is not None:
        inventory = apply_inventory(
            character.inventory, changes.inventory.add, changes.inventory.remove
        )
        char_updates["inventory"] = inventory
        log.character("inventory", character.inventory, inventory)

    if changes.objectives is not None:
        objectives = apply_objectives(
            session.objectives, changes.objectives.add, changes.objectives.complete
        )
        session_updates["objectives"] = objectives
        log.session("objectives", session.objectives, objectives)

    if char_updates:
        session_updates["character"] = character.model_copy(update=char_updates)

    return session.model_copy(update=session_updates), log.records


def _log_wounds(log: _Changes, old: Wounds, new: Wounds) -> None:
    for tier in WoundTier:
        log.character(f"wounds.{tier.value}", getattr(old, tier.value), getattr(new, tier.value))


def record_roll(session: GameSession) -> GameSession:
    return session.model_copy(update={"roll_count": session.roll_count + 1})


def apply_breaking_point(
    session: GameSession, result: BreakingPointResult
) -> tuple[GameSession, list[StateChange]]:
    """Clear stress according to a breaking point result."""
    log = _Changes(session)
    character = session.character
    stress = clear_stress(character.stress, result.stress_cleared)
    log.character("stress", character.stress, stress)
    return _with_character(session, stress=stress), log.records


def spend_guts(session: GameSession, amount: int = 1) -> tuple[GameSession, list[StateChange]]:
    """Spend guts for a reroll, damage reduction or similar favour.

    Raises:
        ValueError: If the character cannot afford the spend.
    """
    character = session.character
    if amount < 1:
        raise ValueError("Guts spend must be at least 1")
    if character.guts < amount:
        raise ValueError(f"Not enough guts (have {character.guts}, need {amount})")
    log = _Changes(session)
    guts = character.guts - amount
    log.character("guts", character.guts, guts)
    return _with_character(session, guts=guts), log.records


def short_rest(session: GameSession) -> tuple[GameSession, list[StateChange]]:
    """One hour of rest recovers 1 stress."""
    log = _Changes(session)
    character = session.character
    stress = tracks.apply_delta(character.stress, -1, tracks.STRESS_MIN, character.max_stress)
    log.character("stress", character.stress, stress)
    return _with_character(session, stress=stress), log.records


def long_rest(session: GameSession) -> tuple[GameSession, list[StateChange]]:
    """Eight hours of rest: all bruised and two bleeding wounds heal, stress clears."""
    log = _Changes(session)
    character = session.character
    wounds = wounds_mod.apply_wound(character.wounds, WoundTier.BRUISED, -character.wounds.bruised)
    wounds = wounds_mod.apply_wound(wounds, WoundTier.BLEEDING, -LONG_REST_BLEEDING_HEALED)
    _log_wounds(log, character.wounds, wounds)
    log.character("stress", character.stress, 0)
    return _with_character(session, wounds=wounds, stress=0), log.records


def _with_character(session: GameSession, **updates) -> GameSession:
    character: CharacterState = session.character.model_copy(update=updates)
    return session.model_copy(update={"character": character})
