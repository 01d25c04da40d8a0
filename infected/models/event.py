"""Check request and state-delta schemas — input to the rules core.

Both arrive from the narrative layer as loosely shaped JSON; they are validated
here so the rules code only ever sees typed fields.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from infected.models.result import DiceRollResult
from infected.models.state import ThreatState, TimeOfDay, WoundTier


class CheckType(str, Enum):
    ROLL = "roll"
    PUSH = "push"
    OPPOSED = "opposed"
    INFECTION = "infection"
    BREAKING_POINT = "breaking_point"
    DAMAGE = "damage"


# --- Check payloads ---


class RollPayload(BaseModel):
    check_type: Literal["roll"] = "roll"
    pool: int
    is_push: bool = False


class PushPayload(BaseModel):
    check_type: Literal["push"] = "push"
    original: DiceRollResult  # The roll being pushed


class OpposedPayload(BaseModel):
    check_type: Literal["opposed"] = "opposed"
    attacker_pool: int
    defender_pool: int


class InfectionPayload(BaseModel):
    check_type: Literal["infection"] = "infection"
    grit: int
    endure: int


class BreakingPointPayload(BaseModel):
    check_type: Literal["breaking_point"] = "breaking_point"
    nerve: int
    resolve: int


class DamagePayload(BaseModel):
    check_type: Literal["damage"] = "damage"
    base_damage: int
    hits: int
    armor: int = 0


CheckPayload = Annotated[
    Union[
        RollPayload,
        PushPayload,
        OpposedPayload,
        InfectionPayload,
        BreakingPointPayload,
        DamagePayload,
    ],
    Field(discriminator="check_type"),
]


class CheckEvent(BaseModel):
    """Top-level check request submitted by the narrative layer."""

    session_id: str | None = None
    payload: CheckPayload
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# --- State deltas ---


class WoundChange(BaseModel):
    type: WoundTier
    change: int


class InventoryChange(BaseModel):
    add: list[str] = []
    remove: list[str] = []

    @field_validator("add", "remove", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return value or []


class ObjectiveChange(BaseModel):
    add: list[str] = []
    complete: list[str] = []

    @field_validator("add", "complete", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return value or []


class StateChanges(BaseModel):
    """Declared deltas from a narrative turn. Every field is optional.

    ``threat`` is an absolute target, ``threat_change`` a delta; ``stress``,
    ``guts`` and ``kills`` are deltas. Unknown keys are ignored and the
    camelCase spellings used by the model prompt are accepted.
    """

    model_config = ConfigDict(extra="ignore")

    threat: int | None = None
    threat_change: int | None = Field(
        default=None, validation_alias=AliasChoices("threat_change", "threatChange")
    )
    threat_state: ThreatState | None = Field(
        default=None, validation_alias=AliasChoices("threat_state", "threatState")
    )
    stress: int | None = None
    wounds: WoundChange | None = None
    guts: int | None = None
    guts_earned: int | None = Field(
        default=None, validation_alias=AliasChoices("guts_earned", "gutsEarned")
    )
    kills: int | None = None
    day: int | None = None
    time: TimeOfDay | None = None
    inventory: InventoryChange | None = None
    objectives: ObjectiveChange | None = None

    @property
    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)
