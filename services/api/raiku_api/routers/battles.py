from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from raiku_api.core.config import Settings
from raiku_sim.models import BattleConfig, BattleResult, CombatantTemplate
from raiku_sim.roster import create_default_teams
from raiku_sim.simulate import simulate_battle

router = APIRouter(prefix="/api/battles", tags=["battles"])

MAX_TEAM_SIZE = 16


class SimulateIn(BaseModel):
    seed: str | None = Field(default=None, max_length=256)
    max_rounds: int | None = Field(default=None, ge=1)
    team_a: list[CombatantTemplate] | None = Field(
        default=None, max_length=MAX_TEAM_SIZE
    )
    team_b: list[CombatantTemplate] | None = Field(
        default=None, max_length=MAX_TEAM_SIZE
    )


class VerifyIn(SimulateIn):
    digest: str = Field(min_length=64, max_length=64)


class VerifyOut(BaseModel):
    ok: bool
    expected: str
    computed: str
    winner: str
    rounds: int


def _run(req: SimulateIn) -> BattleResult:
    settings = Settings()
    if req.max_rounds is not None:
        max_rounds = req.max_rounds
    else:
        max_rounds = min(settings.default_max_rounds, settings.max_rounds_limit)
    if max_rounds > settings.max_rounds_limit:
        raise HTTPException(
            status_code=422,
            detail=f"max_rounds must be <= {settings.max_rounds_limit}",
        )

    default_a, default_b = create_default_teams()
    team_a = req.team_a if req.team_a is not None else default_a
    team_b = req.team_b if req.team_b is not None else default_b
    seed = req.seed if req.seed is not None else settings.default_seed

    return simulate_battle(
        team_a, team_b, BattleConfig(seed=seed, max_rounds=max_rounds)
    )


@router.get("/roster")
def default_roster() -> dict[str, Any]:
    team_a, team_b = create_default_teams()
    return {
        "team_a": [t.model_dump() for t in team_a],
        "team_b": [t.model_dump() for t in team_b],
    }


@router.post("/simulate", response_model=BattleResult)
def simulate(req: SimulateIn) -> BattleResult:
    return _run(req)


@router.post("/verify", response_model=VerifyOut)
def verify(req: VerifyIn) -> VerifyOut:
    result = _run(req)
    expected = req.digest.strip().lower()
    return VerifyOut(
        ok=result.digest == expected,
        expected=expected,
        computed=result.digest,
        winner=result.winner,
        rounds=result.rounds,
    )
