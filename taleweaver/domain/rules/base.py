"""Rules engine contract — every tabletop system plugs in behind this ABC."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from taleweaver.models.rules import CheckInput, CheckResult, DamageResult
from taleweaver.modules.dice.roller import DiceRoller

logger = logging.getLogger("taleweaver.rules")

# (actor_id, stat or skill name) -> modifier, or None when the actor has no such stat
StatLookup = Callable[[str, str | None], int | None]


class RulesEngine(ABC):
    """Stateless resolution of dice mechanics for one rule system.

    The only state an engine owns is its DiceRoller. Actor stats come from
    the injected ``stat_lookup`` and game state is passed in and returned by
    ``apply_outcome``; nothing about actors or campaigns is kept here.
    """

    def __init__(
        self,
        seed: int | None = None,
        stat_lookup: StatLookup | None = None,
        roller: DiceRoller | None = None,
    ) -> None:
        self.roller = roller if roller is not None else DiceRoller(seed)
        self._stat_lookup = stat_lookup

    @abstractmethod
    def name(self) -> str:
        """Stable identifier of the rule system (for logs and telemetry)."""

    def init_session(self, seed: int | None = None) -> None:
        """Reset the dice source; a seed makes the following rolls reproducible."""
        self.roller.seed(seed)
        logger.info("Rules session initialised: system=%s seeded=%s", self.name(), seed is not None)

    @abstractmethod
    def ability_check(self, check: CheckInput) -> CheckResult:
        ...

    def damage_roll(self, expr: str) -> DamageResult:
        """Roll an ``NdM+K`` expression as written.

        Malformed expressions return ``DamageResult(total=0, breakdown=[])``
        rather than raising.
        """
        rolled = self.roller.roll(expr)
        return DamageResult(total=rolled.total, breakdown=rolled.parts)

    def turn_order(self, actor_ids: Sequence[str]) -> list[str]:
        """Return a new list holding a permutation of ``actor_ids``.

        Raises:
            TypeError: If ``actor_ids`` is not a sequence of strings.
        """
        if isinstance(actor_ids, (str, bytes)) or not isinstance(actor_ids, Sequence):
            raise TypeError(
                f"turn_order expects a sequence of actor ids, got {type(actor_ids).__name__}"
            )
        ids = list(actor_ids)
        for actor_id in ids:
            if not isinstance(actor_id, str):
                raise TypeError(f"Actor ids must be strings, got {type(actor_id).__name__}")
        return self._initiative_order(ids)

    def _initiative_order(self, actor_ids: list[str]) -> list[str]:
        return actor_ids

    def apply_outcome(self, result: CheckResult, state: Mapping[str, Any]) -> dict[str, Any]:
        """Fold a check result into caller-owned game state.

        The given mapping is never modified; a new dict is returned.

        Raises:
            TypeError: If ``state`` is not a mapping.
        """
        if not isinstance(state, Mapping):
            raise TypeError(f"apply_outcome expects a mapping, got {type(state).__name__}")
        updated = dict(state)
        updated["last_check"] = {
            "system": self.name(),
            "success": result.success,
            "roll_total": result.roll_total,
            "margin": result.margin,
            "tier": result.tier.value if result.tier is not None else None,
            "detail": result.detail,
        }
        return self._apply(result, updated)

    def _apply(self, result: CheckResult, state: dict[str, Any]) -> dict[str, Any]:
        return state

    def modifier(self, actor_id: str, stat: str | None) -> int:
        """Look up an actor modifier; missing data counts as 0."""
        if self._stat_lookup is None:
            return 0
        value = self._stat_lookup(actor_id, stat)
        return int(value) if value is not None else 0


def format_modifier(value: int) -> str:
    """Render a modifier as ``+ 2`` / ``- 2`` for roll traces."""
    return f"- {abs(value)}" if value < 0 else f"+ {value}"
