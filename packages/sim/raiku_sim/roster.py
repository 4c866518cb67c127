from __future__ import annotations

from raiku_sim.models import CombatantTemplate


def create_default_teams() -> tuple[list[CombatantTemplate], list[CombatantTemplate]]:
    """Return fresh copies of the two demo rosters (team A, team B)."""
    team_a = [
        CombatantTemplate(
            id="knight",
            name="Aurora Knight",
            max_hp=120,
            attack=24,
            defense=16,
            speed=8,
            crit_chance=0.15,
            skill_multiplier=1.4,
        ),
        CombatantTemplate(
            id="archer",
            name="Stellar Archer",
            max_hp=80,
            attack=28,
            defense=10,
            speed=14,
            crit_chance=0.25,
            skill_multiplier=1.5,
        ),
    ]
    team_b = [
        CombatantTemplate(
            id="orc",
            name="Raiku Orc Brute",
            max_hp=140,
            attack=22,
            defense=14,
            speed=7,
            crit_chance=0.12,
            skill_multiplier=1.3,
        ),
        CombatantTemplate(
            id="mage",
            name="Deterministic Mage",
            max_hp=70,
            attack=30,
            defense=8,
            speed=12,
            crit_chance=0.20,
            skill_multiplier=1.6,
        ),
    ]
    return team_a, team_b
