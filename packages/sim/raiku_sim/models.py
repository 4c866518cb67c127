from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TeamTag = Literal["A", "B"]
Winner = Literal["A", "B", "DRAW"]


class CombatantTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    max_hp: int = Field(ge=0)
    attack: float
    defense: float
    speed: float
    crit_chance: float = Field(ge=0.0, le=1.0)
    skill_multiplier: float


class BattleConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    seed: str
    # Not range-checked here; callers normalize or reject non-positive values.
    max_rounds: int


class CombatantSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    hp_before: int = Field(ge=0)
    hp_after: int = Field(ge=0)


class BattleEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    round: int = Field(ge=1)
    actor_team: TeamTag
    actor: CombatantSnapshot
    target: CombatantSnapshot
    damage: int = Field(ge=1)
    is_crit: bool
    description: str


class FighterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    hp: int = Field(ge=0)
    max_hp: int = Field(ge=0)
    alive: bool


class FinalState(BaseModel):
    model_config = ConfigDict(frozen=True)

    team_a: tuple[FighterState, ...]
    team_b: tuple[FighterState, ...]


class BattleResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    config: BattleConfig
    winner: Winner
    rounds: int = Field(ge=0)
    log: tuple[BattleEvent, ...]
    final_state: FinalState
    trace_version: str
    digest: str
