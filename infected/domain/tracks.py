"""Bounded scalar tracks — stress, threat and guts share one clamp-and-apply contract."""

from __future__ import annotations

from dataclasses import dataclass, replace

from infected.models.state import ThreatState

THREAT_MIN = 0
THREAT_MAX = 10
GUTS_MIN = 0
GUTS_MAX = 5
STRESS_MIN = 0

_THREAT_BANDS = (
    (2, ThreatState.SAFE),
    (4, ThreatState.NOTICED),
    (6, ThreatState.INVESTIGATING),
    (8, ThreatState.ENCOUNTER),
)


def clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


def apply_delta(current: int, delta: int, minimum: int, maximum: int) -> int:
    return clamp(current + delta, minimum, maximum)


def set_value(value: int, minimum: int, maximum: int) -> int:
    """Absolute mode, for when a target value is declared instead of a delta."""
    return clamp(value, minimum, maximum)


@dataclass(frozen=True)
class ScalarTrack:
    current: int
    minimum: int
    maximum: int

    def apply(self, delta: int) -> ScalarTrack:
        return replace(self, current=apply_delta(self.current, delta, self.minimum, self.maximum))

    def set(self, value: int) -> ScalarTrack:
        return replace(self, current=set_value(value, self.minimum, self.maximum))

    @property
    def is_full(self) -> bool:
        return self.current >= self.maximum

    @property
    def is_empty(self) -> bool:
        return self.current <= self.minimum


def stress_track(current: int, max_stress: int) -> ScalarTrack:
    return ScalarTrack(clamp(current, STRESS_MIN, max_stress), STRESS_MIN, max_stress)


def threat_track(current: int) -> ScalarTrack:
    return ScalarTrack(clamp(current, THREAT_MIN, THREAT_MAX), THREAT_MIN, THREAT_MAX)


def guts_track(current: int) -> ScalarTrack:
    return ScalarTrack(clamp(current, GUTS_MIN, GUTS_MAX), GUTS_MIN, GUTS_MAX)


def threat_state_for(threat: int) -> ThreatState:
    """0-2 safe, 3-4 noticed, 5-6 investigating, 7-8 encounter, 9-10 swarm."""
    for upper, state in _THREAT_BANDS:
        if threat <= upper:
            return state
    return ThreatState.SWARM


def at_breaking_point(stress: int, max_stress: int) -> bool:
    return stress >= max_stress
