from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from raiku_sim.models import CombatantTemplate
from raiku_sim.rng import StreamGenerator

if TYPE_CHECKING:
    from raiku_sim.battle import Fighter

SKILL_CHANCE = 0.35
CRIT_MULTIPLIER = 1.7
VARIANCE_MIN = 0.9
VARIANCE_SPAN = 0.2


@dataclass(frozen=True)
class DamageRoll:
    damage: int
    is_crit: bool


def choose_target(
    stream: StreamGenerator, opponents: Sequence["Fighter"]
) -> "Fighter | None":
    living = [f for f in opponents if f.alive]
    if not living:
        return None
    return living[stream.next_bounded_int(len(living))]


def compute_damage(
    stream: StreamGenerator,
    attacker: CombatantTemplate,
    defender: CombatantTemplate,
) -> DamageRoll:
    """Roll one attack.

    Draws exactly three values, in order: skill, crit, variance. The result
    is not applied to the defender.
    """
    base = max(1, attacker.attack - defender.defense * 0.5)
    use_skill = stream.next() < SKILL_CHANCE
    is_crit = stream.next() < attacker.crit_chance
    skill_multiplier = attacker.skill_multiplier if use_skill else 1.0
    variance = VARIANCE_MIN + stream.next() * VARIANCE_SPAN

    dmg = base * skill_multiplier * variance
    if is_crit:
        dmg *= CRIT_MULTIPLIER
    return DamageRoll(damage=max(1, math.floor(dmg)), is_crit=is_crit)
