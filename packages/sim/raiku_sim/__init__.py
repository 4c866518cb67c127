__all__ = [
    "TRACE_VERSION",
    "BattleConfig",
    "BattleEvent",
    "BattleResult",
    "CombatantTemplate",
    "StreamGenerator",
    "TraceEncodingError",
    "canonical_trace_bytes",
    "create_default_teams",
    "simulate_battle",
    "trace_digest",
    "verify_battle",
    "verify_result",
]

from raiku_sim.canonical import (
    TRACE_VERSION,
    TraceEncodingError,
    canonical_trace_bytes,
    trace_digest,
)
from raiku_sim.models import BattleConfig, BattleEvent, BattleResult, CombatantTemplate
from raiku_sim.rng import StreamGenerator
from raiku_sim.roster import create_default_teams
from raiku_sim.simulate import simulate_battle, verify_battle, verify_result
