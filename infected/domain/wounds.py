"""Damage and wounds — hits to damage, damage to severity, severity to the wound ledger."""

from __future__ import annotations

from dataclasses import dataclass

from infected.models.state import WoundCapacity, WoundTier, Wounds

BASE_BRUISED_SLOTS = 4
MAX_DAMAGE_STEP = 3

# Overflow order when a tier fills up.
_NEXT_TIER = {
    WoundTier.BRUISED: WoundTier.BLEEDING,
    WoundTier.BLEEDING: WoundTier.BROKEN,
    WoundTier.BROKEN: WoundTier.CRITICAL,
}


@dataclass(frozen=True)
class WoundResult:
    wounds: Wounds
    overflow_death: bool = False


def damage(base: int, hits: int) -> int:
    """Weapon damage for a hit count: base, +1, +2, then +3 from four hits on."""
    if hits <= 0:
        return 0
    return base + min(hits - 1, MAX_DAMAGE_STEP)


def severity_of(amount: int) -> WoundTier:
    if amount <= 2:
        return WoundTier.BRUISED
    if amount <= 4:
        return WoundTier.BLEEDING
    if amount <= 6:
        return WoundTier.BROKEN
    return WoundTier.CRITICAL


def apply_wound(current: Wounds, tier: WoundTier | str, delta: int) -> Wounds:
    """Apply a wound delta to a single tier.

    Critical is a flag: a positive delta sets it, anything else clears it.
    Counted tiers never drop below zero and are not capped here.
    """
    tier = WoundTier(tier)
    if tier is WoundTier.CRITICAL:
        return current.model_copy(update={"critical": delta > 0})
    value = getattr(current, tier.value)
    return current.model_copy(update={tier.value: max(0, value + delta)})


def apply_wound_cascading(
    current: Wounds,
    capacity: WoundCapacity,
    tier: WoundTier | str,
    delta: int,
) -> WoundResult:
    """Apply a wound delta, spilling overflow into the next-worse tier.

    A full bruised track turns further bruises into bleeding, and so on up to
    critical. Overflow that reaches an already critical character is death.
    Healing (delta <= 0) behaves exactly like apply_wound.
    """
    tier = WoundTier(tier)
    if delta <= 0:
        return WoundResult(wounds=apply_wound(current, tier, delta))

    wounds = current
    remaining = delta
    while remaining > 0:
        if tier is WoundTier.CRITICAL:
            if wounds.critical:
                return WoundResult(wounds=wounds, overflow_death=True)
            wounds = apply_wound(wounds, tier, 1)
            remaining -= 1
            continue
        value = getattr(wounds, tier.value)
        free = max(0, getattr(capacity, tier.value) - value)
        taken = min(free, remaining)
        if taken:
            wounds = wounds.model_copy(update={tier.value: value + taken})
            remaining -= taken
        if remaining:
            tier = _NEXT_TIER[tier]
    return WoundResult(wounds=wounds)


def take_damage(
    current: Wounds,
    capacity: WoundCapacity,
    amount: int,
    cascade: bool = False,
) -> WoundResult:
    """Record one wound at the severity of the damage taken."""
    if amount <= 0:
        return WoundResult(wounds=current)
    tier = severity_of(amount)
    if cascade:
        return apply_wound_cascading(current, capacity, tier, 1)
    return WoundResult(wounds=apply_wound(current, tier, 1))


def wound_capacity_for(grit: int) -> WoundCapacity:
    return WoundCapacity(bruised=BASE_BRUISED_SLOTS + max(0, grit - 2))


def wound_penalty(wounds: Wounds) -> int:
    """Dice penalty outside combat; broken replaces the bleeding penalty."""
    if wounds.broken > 0:
        return -2
    if wounds.bleeding > 0:
        return -1
    return 0


def is_dying(wounds: Wounds) -> bool:
    return wounds.critical
