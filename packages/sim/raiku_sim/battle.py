from __future__ import annotations

from dataclasses import dataclass, field
from itertools import groupby
from typing import Sequence

from raiku_sim.combat import choose_target, compute_damage
from raiku_sim.models import (
    BattleEvent,
    CombatantSnapshot,
    CombatantTemplate,
    FighterState,
    TeamTag,
    Winner,
)
from raiku_sim.rng import StreamGenerator


@dataclass
class Fighter:
    template: CombatantTemplate
    team: TeamTag
    hp: int

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def snapshot(self) -> FighterState:
        return FighterState(
            id=self.template.id,
            name=self.template.name,
            hp=self.hp,
            max_hp=self.template.max_hp,
            alive=self.alive,
        )


@dataclass
class BattleState:
    team_a: list[Fighter]
    team_b: list[Fighter]
    round: int = 0
    log: list[BattleEvent] = field(default_factory=list)

    def opponents_of(self, fighter: Fighter) -> list[Fighter]:
        return self.team_b if fighter.team == "A" else self.team_a


@dataclass(frozen=True)
class BattleOutcome:
    winner: Winner
    rounds: int
    log: tuple[BattleEvent, ...]
    team_a: tuple[FighterState, ...]
    team_b: tuple[FighterState, ...]


def materialize_team(
    team_id: TeamTag, templates: Sequence[CombatantTemplate]
) -> list[Fighter]:
    return [Fighter(template=t, team=team_id, hp=t.max_hp) for t in templates]


def all_dead(team: Sequence[Fighter]) -> bool:
    return not any(f.alive for f in team)


def resolve_turn_order(state: BattleState, stream: StreamGenerator) -> list[Fighter]:
    """Living fighters, fastest first.

    Speed ties are settled group by group (fastest group first): one draw per
    member in current order, then the group is stable-sorted by draw,
    highest first. Untied fighters consume no draws.
    """
    living = [f for f in state.team_a if f.alive] + [
        f for f in state.team_b if f.alive
    ]
    by_speed = sorted(living, key=lambda f: -f.template.speed)

    order: list[Fighter] = []
    for _, group_iter in groupby(by_speed, key=lambda f: f.template.speed):
        group = list(group_iter)
        if len(group) > 1:
            rolls = [stream.next() for _ in group]
            ranked = sorted(range(len(group)), key=lambda i: -rolls[i])
            group = [group[i] for i in ranked]
        order.extend(group)
    return order


def _describe(actor: Fighter, target: Fighter, damage: int, is_crit: bool) -> str:
    crit = " (CRIT)" if is_crit else ""
    return (
        f"{actor.template.name} from Team {actor.team} hits "
        f"{target.template.name} for {damage} damage{crit}."
    )


def execute_turn(
    state: BattleState, stream: StreamGenerator, actor: Fighter
) -> BattleEvent | None:
    target = choose_target(stream, state.opponents_of(actor))
    if target is None:
        return None

    hp_before = target.hp
    roll = compute_damage(stream, actor.template, target.template)
    target.hp = max(0, target.hp - roll.damage)

    event = BattleEvent(
        round=state.round,
        actor_team=actor.team,
        actor=CombatantSnapshot(
            id=actor.template.id,
            name=actor.template.name,
            hp_before=actor.hp,
            hp_after=actor.hp,
        ),
        target=CombatantSnapshot(
            id=target.template.id,
            name=target.template.name,
            hp_before=hp_before,
            hp_after=target.hp,
        ),
        damage=roll.damage,
        is_crit=roll.is_crit,
        description=_describe(actor, target, roll.damage, roll.is_crit),
    )
    state.log.append(event)
    return event


def execute_round(state: BattleState, stream: StreamGenerator) -> None:
    for actor in resolve_turn_order(state, stream):
        if not actor.alive:
            continue
        if all_dead(state.opponents_of(actor)):
            break
        execute_turn(state, stream, actor)


def resolve_winner(team_a: Sequence[Fighter], team_b: Sequence[Fighter]) -> Winner:
    a_dead = all_dead(team_a)
    b_dead = all_dead(team_b)
    if a_dead and not b_dead:
        return "B"
    if b_dead and not a_dead:
        return "A"
    hp_a = sum(f.hp for f in team_a)
    hp_b = sum(f.hp for f in team_b)
    if hp_a > hp_b:
        return "A"
    if hp_b > hp_a:
        return "B"
    return "DRAW"


def run_battle(
    team_a: Sequence[CombatantTemplate],
    team_b: Sequence[CombatantTemplate],
    *,
    stream: StreamGenerator,
    max_rounds: int,
) -> BattleOutcome:
    state = BattleState(
        team_a=materialize_team("A", team_a),
        team_b=materialize_team("B", team_b),
    )

    while state.round < max_rounds:
        if all_dead(state.team_a) and all_dead(state.team_b):
            break
        state.round += 1
        execute_round(state, stream)
        if all_dead(state.team_a) or all_dead(state.team_b):
            break

    return BattleOutcome(
        winner=resolve_winner(state.team_a, state.team_b),
        rounds=state.round,
        log=tuple(state.log),
        team_a=tuple(f.snapshot() for f in state.team_a),
        team_b=tuple(f.snapshot() for f in state.team_b),
    )
