from __future__ import annotations

import argparse
import sys
from pathlib import Path

import orjson

from raiku_api.core.config import Settings
from raiku_sim.models import BattleConfig, BattleResult, FighterState
from raiku_sim.roster import create_default_teams
from raiku_sim.simulate import simulate_battle, verify_battle


def normalize_max_rounds(raw: str | None, *, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value > 0 else default


def _fmt_fighter(f: FighterState) -> str:
    status = "alive" if f.alive else "down"
    return f"  {f.name} ({f.id}): {f.hp}/{f.max_hp} {status}"


def render_text(result: BattleResult) -> str:
    lines = [
        "=== Raiku Deterministic Battle Simulator ===",
        f"Seed: {result.config.seed!r}  Max rounds: {result.config.max_rounds}",
        f"Winner: {result.winner}",
        f"Rounds: {result.rounds}",
        "",
        "Final State:",
        "Team A:",
        *[_fmt_fighter(f) for f in result.final_state.team_a],
        "Team B:",
        *[_fmt_fighter(f) for f in result.final_state.team_b],
        "",
        f"Battle Log Digest ({result.trace_version}, sha256):",
        result.digest,
        "",
        "Battle Log:",
    ]
    for event in result.log:
        lines.append(
            f"Round {event.round} | Team {event.actor_team} | {event.description} "
            f"(HP {event.target.hp_before} -> {event.target.hp_after})"
        )
    return "\n".join(lines)


def _log_json(payload: dict[str, object]) -> None:
    try:
        sys.stderr.write(orjson.dumps(payload).decode("utf-8") + "\n")
    except Exception:  # noqa: BLE001
        pass


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    parser = argparse.ArgumentParser(
        description="Run a deterministic battle between the default rosters."
    )
    parser.add_argument(
        "seed", nargs="?", default=settings.default_seed, help="Seed string."
    )
    parser.add_argument(
        "max_rounds",
        nargs="?",
        default=None,
        help=f"Round cap (invalid values fall back to {settings.default_max_rounds}).",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the full result as JSON."
    )
    parser.add_argument("--out", default=None, help="Also write the JSON result here.")
    parser.add_argument(
        "--verify",
        default=None,
        metavar="DIGEST",
        help="Replay and compare against a recorded digest (exit 1 on mismatch).",
    )
    args = parser.parse_args(argv)

    config = BattleConfig(
        seed=args.seed,
        max_rounds=normalize_max_rounds(
            args.max_rounds, default=settings.default_max_rounds
        ),
    )
    team_a, team_b = create_default_teams()
    result = simulate_battle(team_a, team_b, config)

    if settings.log_json:
        _log_json(
            {
                "level": "info",
                "event": "battle_simulated",
                "seed": config.seed,
                "max_rounds": config.max_rounds,
                "winner": result.winner,
                "rounds": result.rounds,
                "events": len(result.log),
                "digest": result.digest,
            }
        )

    payload = orjson.dumps(result.model_dump(), option=orjson.OPT_INDENT_2)
    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(payload)

    if args.json:
        print(payload.decode("utf-8"))
    else:
        print(render_text(result))

    if args.verify is not None:
        ok = verify_battle(team_a, team_b, config, args.verify)
        print(f"verify: {'ok' if ok else 'MISMATCH'}", file=sys.stderr)
        return 0 if ok else 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
