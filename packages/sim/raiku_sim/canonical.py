from __future__ import annotations

import hashlib
from typing import Any, Iterable

import orjson

from raiku_sim.models import BattleEvent, CombatantSnapshot

TRACE_VERSION = "raiku-trace/v1"


class TraceEncodingError(ValueError):
    """The battle log cannot be encoded canonically."""


def _snapshot_fields(snap: CombatantSnapshot) -> dict[str, Any]:
    return {
        "id": snap.id,
        "name": snap.name,
        "hpBefore": snap.hp_before,
        "hpAfter": snap.hp_after,
    }


def event_fields(event: BattleEvent) -> dict[str, Any]:
    # Key order is part of the encoding; do not reorder.
    return {
        "round": event.round,
        "actorTeam": event.actor_team,
        "actor": _snapshot_fields(event.actor),
        "target": _snapshot_fields(event.target),
        "damage": event.damage,
        "isCrit": event.is_crit,
        "description": event.description,
    }


def _check_value(value: Any, path: str) -> None:
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return
    if isinstance(value, int):
        return
    if isinstance(value, dict):
        for k, v in value.items():
            _check_value(v, f"{path}.{k}")
        return
    raise TraceEncodingError(
        f"{path}: {type(value).__name__} is not allowed in a canonical trace"
    )


def canonical_trace_bytes(log: Iterable[BattleEvent]) -> bytes:
    """Compact JSON array of events, fixed key order, integers only."""
    rows = []
    for idx, event in enumerate(log):
        row = event_fields(event)
        _check_value(row, f"log[{idx}]")
        rows.append(row)
    try:
        return orjson.dumps(rows)
    except orjson.JSONEncodeError as exc:
        raise TraceEncodingError(str(exc)) from exc


def trace_digest(log: Iterable[BattleEvent]) -> str:
    return hashlib.sha256(canonical_trace_bytes(log)).hexdigest()


def verify_digest(log: Iterable[BattleEvent], digest: str) -> bool:
    return trace_digest(log) == str(digest or "").strip().lower()
