"""Game-state value schemas — immutable snapshots handed to and from the rules core."""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def _uuid() -> str:
    return uuid.uuid4().hex


class WoundTier(str, Enum):
    BRUISED = "bruised"
    BLEEDING = "bleeding"
    BROKEN = "broken"
    CRITICAL = "critical"


class ThreatState(str, Enum):
    SAFE = "safe"
    NOTICED = "noticed"
    INVESTIGATING = "investigating"
    ENCOUNTER = "encounter"
    SWARM = "swarm"


class TimeOfDay(str, Enum):
    NIGHT = "night"
    DAWN = "dawn"
    DAY = "day"
    DUSK = "dusk"


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class Attributes(Snapshot):
    grit: int = 1
    reflex: int = 1
    wits: int = 1
    nerve: int = 1


class Skills(Snapshot):
    # GRIT
    brawl: int = 0
    endure: int = 0
    athletics: int = 0
    # REFLEX
    shoot: int = 0
    stealth: int = 0
    drive: int = 0
    # WITS
    notice: int = 0
    craft: int = 0
    tech: int = 0
    medicine: int = 0
    survival: int = 0
    knowledge: int = 0
    # NERVE
    persuade: int = 0
    deceive: int = 0
    resolve: int = 0
    intimidate: int = 0
    animals: int = 0


class Wounds(Snapshot):
    bruised: int = 0
    bleeding: int = 0
    broken: int = 0
    critical: bool = False


class WoundCapacity(Snapshot):
    bruised: int = 4
    bleeding: int = 3
    broken: int = 2
    critical: int = 1


class Item(Snapshot):
    id: str = Field(default_factory=lambda: f"item-{_uuid()[:12]}")
    name: str
    quantity: int = 1
    is_significant: bool = True
    description: str | None = None


class Objective(Snapshot):
    id: str = Field(default_factory=lambda: f"obj-{_uuid()[:12]}")
    text: str
    completed: bool = False


class CharacterState(Snapshot):
    id: str = Field(default_factory=_uuid)
    name: str
    background: str
    motivation: str = ""
    attributes: Attributes = Attributes()
    skills: Skills = Skills()
    wounds: Wounds = Wounds()
    wound_capacity: WoundCapacity = WoundCapacity()
    stress: int = 0
    max_stress: int = 6
    guts: int = 3
    guts_earned_this_session: int = 0
    inventory: list[Item] = []
    carrying_capacity: int = 6
    food: int = 3
    water: int = 3
    dead: bool = False


class GameSession(Snapshot):
    id: str = Field(default_factory=_uuid)
    title: str = ""
    character: CharacterState
    day: int = 1
    time: TimeOfDay = TimeOfDay.DAY
    threat: int = 0
    threat_state: ThreatState = ThreatState.SAFE
    objectives: list[Objective] = []
    roll_count: int = 0
    kill_count: int = 0
