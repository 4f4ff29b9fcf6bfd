"""d20 rules — 1d20 + modifier against a difficulty class."""

from __future__ import annotations

from typing import Any

from taleweaver.domain.rules.base import RulesEngine, format_modifier
from taleweaver.models.rules import CheckInput, CheckResult

DEFAULT_DIFFICULTY = 10
INITIATIVE_STAT = "dexterity"


class Dnd5eEngine(RulesEngine):
    def name(self) -> str:
        return "dnd5e"

    def ability_check(self, check: CheckInput) -> CheckResult:
        """Roll 1d20 + skill modifier; meet or beat the DC to succeed."""
        difficulty = check.difficulty if check.difficulty is not None else DEFAULT_DIFFICULTY
        mod = self.modifier(check.actor_id, check.skill)
        roll = self.roller.roll_die(20)
        total = roll + mod
        return CheckResult(
            success=total >= difficulty,
            roll_total=total,
            detail=f"1d20({roll}) {format_modifier(mod)} vs DC {difficulty}",
            margin=total - difficulty,
            rolls=[roll],
        )

    def _initiative_order(self, actor_ids: list[str]) -> list[str]:
        # 1d20 + DEX each, highest first; ties keep the order they came in
        scored = []
        for position, actor_id in enumerate(actor_ids):
            total = self.roller.roll_die(20) + self.modifier(actor_id, INITIATIVE_STAT)
            scored.append((total, position, actor_id))
        scored.sort(key=lambda entry: (-entry[0], entry[1]))
        return [actor_id for _, _, actor_id in scored]

    def _apply(self, result: CheckResult, state: dict[str, Any]) -> dict[str, Any]:
        if not result.success:
            state["checks_failed"] = int(state.get("checks_failed", 0)) + 1
        return state
