"""Powered by the Apocalypse rules — 2d6 + stat read as miss / partial / full."""

from __future__ import annotations

from typing import Any

from taleweaver.domain.rules.base import RulesEngine, format_modifier
from taleweaver.models.rules import CheckInput, CheckResult, Tier

# Each tier measures its margin against its own threshold.
TIER_THRESHOLDS = {
    Tier.FULL: 10,
    Tier.PARTIAL: 7,
    Tier.MISS: 6,
}


def classify(total: int) -> Tier:
    if total >= TIER_THRESHOLDS[Tier.FULL]:
        return Tier.FULL
    if total >= TIER_THRESHOLDS[Tier.PARTIAL]:
        return Tier.PARTIAL
    return Tier.MISS


class PbtaEngine(RulesEngine):
    """2d6 moves.

    ``difficulty`` is ignored: the tiers are fixed. Damage rolls keep the
    generic NdM+K grammar so callers can treat both systems alike, even
    though harm in these games is usually narrative.
    """

    def name(self) -> str:
        return "pbta"

    def ability_check(self, check: CheckInput) -> CheckResult:
        mod = self.modifier(check.actor_id, check.skill)
        first, second = self.roller.roll_dice(2, 6)
        total = first + second + mod
        tier = classify(total)

        detail = f"2d6({first}+{second}) {format_modifier(mod)} => {tier.value}"
        if check.tags:
            detail += f" [{', '.join(check.tags)}]"

        return CheckResult(
            success=tier is not Tier.MISS,
            roll_total=total,
            detail=detail,
            margin=total - TIER_THRESHOLDS[tier],
            tier=tier,
            rolls=[first, second],
        )

    def _apply(self, result: CheckResult, state: dict[str, Any]) -> dict[str, Any]:
        # Mark XP on a miss
        if result.tier is Tier.MISS or (result.tier is None and not result.success):
            state["xp"] = int(state.get("xp", 0)) + 1
        return state
