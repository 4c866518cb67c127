from __future__ import annotations

import pytest

from raiku_sim.models import CombatantTemplate


class ScriptedStream:
    """Stand-in stream that replays fixed values and records each draw."""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)
        self.calls: list[str] = []

    def next(self) -> float:
        self.calls.append("next")
        return self._values.pop(0)

    def next_bounded_int(self, n: int) -> int:
        self.calls.append(f"int:{n}")
        if n <= 0:
            return 0
        return int(self._values.pop(0) * n)


@pytest.fixture
def scripted_stream():
    return ScriptedStream


@pytest.fixture
def make_template():
    def _make(
        id: str,
        *,
        max_hp: int = 100,
        attack: float = 20,
        defense: float = 10,
        speed: float = 10,
        crit_chance: float = 0.1,
        skill_multiplier: float = 1.5,
    ) -> CombatantTemplate:
        return CombatantTemplate(
            id=id,
            name=id.title(),
            max_hp=max_hp,
            attack=attack,
            defense=defense,
            speed=speed,
            crit_chance=crit_chance,
            skill_multiplier=skill_multiplier,
        )

    return _make


@pytest.fixture
def api_client(monkeypatch):
    from fastapi.testclient import TestClient

    from raiku_api.main import create_app

    monkeypatch.delenv("RAIKU_DEFAULT_SEED", raising=False)
    monkeypatch.delenv("RAIKU_DEFAULT_MAX_ROUNDS", raising=False)
    return TestClient(create_app())
