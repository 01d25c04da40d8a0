"""Engine result schemas — output from the check dispatcher and state application."""

from __future__ import annotations

from pydantic import BaseModel


class DieResultModel(BaseModel):
    value: int
    is_hit: bool
    is_explosion: bool = False
    is_critical_one: bool = False


class DiceRollResult(BaseModel):
    dice: list[DieResultModel]
    bonus_dice: list[DieResultModel] = []
    total_hits: int
    is_critical_failure: bool = False
    description: str
    pushed: bool = False
    summary: str | None = None


class StateChange(BaseModel):
    entity_type: str  # "character", "session"
    entity_id: str
    field: str
    old_value: str | None = None
    new_value: str | None = None


class EngineResult(BaseModel):
    success: bool
    event_type: str
    data: dict = {}
    state_changes: list[StateChange] = []
    rolls: list[DiceRollResult] = []
    error: str | None = None
