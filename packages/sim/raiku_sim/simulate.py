from __future__ import annotations

from typing import Sequence

from raiku_sim.battle import run_battle
from raiku_sim.canonical import TRACE_VERSION, trace_digest, verify_digest
from raiku_sim.models import BattleConfig, BattleResult, CombatantTemplate, FinalState
from raiku_sim.rng import StreamGenerator


def simulate_battle(
    team_a: Sequence[CombatantTemplate],
    team_b: Sequence[CombatantTemplate],
    config: BattleConfig,
) -> BattleResult:
    """Run one battle to completion and commit to its log.

    Pure apart from the returned value: every call owns its own fighters,
    stream and log.
    """
    stream = StreamGenerator(config.seed)
    outcome = run_battle(team_a, team_b, stream=stream, max_rounds=config.max_rounds)
    return BattleResult(
        config=config,
        winner=outcome.winner,
        rounds=outcome.rounds,
        log=outcome.log,
        final_state=FinalState(team_a=outcome.team_a, team_b=outcome.team_b),
        trace_version=TRACE_VERSION,
        digest=trace_digest(outcome.log),
    )


def verify_result(result: BattleResult) -> bool:
    if result.trace_version != TRACE_VERSION:
        return False
    return verify_digest(result.log, result.digest)


def verify_battle(
    team_a: Sequence[CombatantTemplate],
    team_b: Sequence[CombatantTemplate],
    config: BattleConfig,
    digest: str,
) -> bool:
    """Replay from inputs and compare against a recorded digest."""
    replayed = simulate_battle(team_a, team_b, config)
    return replayed.digest == str(digest or "").strip().lower()
