"""Mechanics facade — the only surface request handlers call for dice mechanics.

Pure pass-through to the active RulesEngine: results are reshaped into the
field names the calling layer uses, nothing here looks at which system is
running.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any

from fastapi import Request

from taleweaver.domain.rules.base import RulesEngine
from taleweaver.models.rules import CheckInput, CheckOutcome, CheckResult, DamageOutcome

logger = logging.getLogger("taleweaver.mechanics")


class Mechanics:
    def __init__(self, engine: RulesEngine) -> None:
        self._engine = engine
        # Serializes calls so a session reset never lands between the draws of one call.
        self._lock = threading.Lock()

    @property
    def system(self) -> str:
        return self._engine.name()

    def reset_session(self, seed: int | None = None) -> None:
        with self._lock:
            self._engine.init_session(seed)

    def ability_check(
        self,
        actor_id: str,
        skill: str | None = None,
        difficulty: int | None = None,
        tags: Sequence[str] | None = None,
    ) -> CheckOutcome:
        check = CheckInput(
            actor_id=actor_id,
            skill=skill,
            difficulty=difficulty,
            tags=list(tags or []),
        )
        with self._lock:
            result = self._engine.ability_check(check)
        logger.debug("Check %s/%s: %s", actor_id, skill, result.detail)
        return CheckOutcome(
            success=result.success,
            result=result.roll_total,
            detail=result.detail,
            margin=result.margin,
            tier=result.tier,
        )

    def damage_roll(self, expr: str) -> DamageOutcome:
        with self._lock:
            result = self._engine.damage_roll(expr)
        return DamageOutcome(expression=expr, total=result.total, breakdown=result.breakdown)

    def turn_order(self, actor_ids: Sequence[str]) -> list[str]:
        with self._lock:
            return self._engine.turn_order(actor_ids)

    def apply_outcome(self, outcome: CheckOutcome, state: Mapping[str, Any]) -> dict[str, Any]:
        result = CheckResult(
            success=outcome.success,
            roll_total=outcome.result,
            detail=outcome.detail,
            margin=outcome.margin,
            tier=outcome.tier,
        )
        return self._engine.apply_outcome(result, state)


def get_mechanics(request: Request) -> Mechanics:
    """FastAPI dependency returning the process-wide Mechanics instance."""
    return request.app.state.mechanics
