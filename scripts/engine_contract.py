"""Check every registered rules system against the engine contract.

Usage:
    python scripts/engine_contract.py
"""

from __future__ import annotations

import sys
from collections import Counter

from taleweaver.domain.rules.registry import available_systems, make_engine
from taleweaver.models.rules import CheckInput


def check_system(system_id: str) -> list[str]:
    """Return a list of contract violations for one system (empty when it conforms)."""
    problems: list[str] = []
    engine = make_engine(system_id)
    engine.init_session(42)

    chk = engine.ability_check(
        CheckInput(actor_id="pc1", skill="athletics", difficulty=12, tags=["test"])
    )
    if not isinstance(chk.success, bool):
        problems.append("ability_check.success is not a bool")
    if not isinstance(chk.roll_total, int):
        problems.append("ability_check.roll_total is not an int")
    if not chk.detail:
        problems.append("ability_check.detail is empty")

    dmg = engine.damage_roll("2d6+1")
    if len(dmg.breakdown) != 2 or dmg.total != sum(dmg.breakdown) + 1:
        problems.append(f"damage_roll('2d6+1') returned {dmg}")

    bad = engine.damage_roll("not-a-dice-expr")
    if bad.total != 0 or bad.breakdown:
        problems.append(f"damage_roll on malformed input returned {bad}")

    ids = ["a", "b", "c", "b"]
    order = engine.turn_order(ids)
    if Counter(order) != Counter(ids):
        problems.append(f"turn_order({ids}) returned {order}")

    return problems


def main() -> int:
    failed = False
    for system_id in available_systems():
        problems = check_system(system_id)
        if problems:
            failed = True
            for problem in problems:
                print(f"FAIL: {system_id}: {problem}")
        else:
            print(f"OK: {system_id}")
    if failed:
        return 1
    print("Contract: all engines passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
