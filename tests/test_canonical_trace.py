from __future__ import annotations

import hashlib

import pytest

from raiku_sim.canonical import (
    TraceEncodingError,
    canonical_trace_bytes,
    trace_digest,
    verify_digest,
)
from raiku_sim.models import BattleConfig, BattleEvent, CombatantSnapshot
from raiku_sim.roster import create_default_teams
from raiku_sim.simulate import simulate_battle

EMPTY_LOG_DIGEST = "4f53cda18c2baa0c0354bb5f9a3ecbe5ed12ab4d8e11ba873c2f11161202b945"


def _event(**overrides) -> BattleEvent:
    fields = {
        "round": 1,
        "actor_team": "A",
        "actor": CombatantSnapshot(id="a", name="Ä", hp_before=10, hp_after=10),
        "target": CombatantSnapshot(id="b", name="B", hp_before=9, hp_after=4),
        "damage": 5,
        "is_crit": False,
        "description": "Ä from Team A hits B for 5 damage.",
    }
    fields.update(overrides)
    return BattleEvent(**fields)


def test_empty_log_encodes_as_empty_array() -> None:
    assert canonical_trace_bytes([]) == b"[]"
    assert trace_digest([]) == EMPTY_LOG_DIGEST


def test_event_encoding_field_order_and_formatting() -> None:
    encoded = canonical_trace_bytes([_event()])
    expected = (
        '[{"round":1,"actorTeam":"A",'
        '"actor":{"id":"a","name":"Ä","hpBefore":10,"hpAfter":10},'
        '"target":{"id":"b","name":"B","hpBefore":9,"hpAfter":4},'
        '"damage":5,"isCrit":false,'
        '"description":"Ä from Team A hits B for 5 damage."}]'
    ).encode("utf-8")
    assert encoded == expected
    assert trace_digest([_event()]) == hashlib.sha256(expected).hexdigest()


def test_first_event_of_demo_battle_matches_reference_bytes() -> None:
    team_a, team_b = create_default_teams()
    result = simulate_battle(
        team_a, team_b, BattleConfig(seed="RAIKU-DEMO-SEED-001", max_rounds=20)
    )
    first = canonical_trace_bytes(result.log[:1])
    assert first == (
        b'[{"round":1,"actorTeam":"A",'
        b'"actor":{"id":"archer","name":"Stellar Archer","hpBefore":80,"hpAfter":80},'
        b'"target":{"id":"orc","name":"Raiku Orc Brute","hpBefore":140,"hpAfter":101},'
        b'"damage":39,"isCrit":true,'
        b'"description":"Stellar Archer from Team A hits Raiku Orc Brute for 39 damage (CRIT)."}]'
    )


def test_verify_digest_round_trip_and_tamper() -> None:
    log = [_event(), _event(round=2, damage=4)]
    digest = trace_digest(log)
    assert verify_digest(log, digest)
    assert verify_digest(log, digest.upper())
    assert not verify_digest(log[:1], digest)
    assert not verify_digest(list(reversed(log)), digest)


def test_non_integer_number_is_an_encoding_error() -> None:
    bad = BattleEvent.model_construct(**{**_event().__dict__, "damage": 5.0})
    with pytest.raises(TraceEncodingError):
        canonical_trace_bytes([bad])


def test_unencodable_string_is_an_encoding_error() -> None:
    bad = BattleEvent.model_construct(
        **{**_event().__dict__, "description": "lone surrogate \ud800"}
    )
    with pytest.raises(TraceEncodingError):
        canonical_trace_bytes([bad])
