"""Turn mechanics outcomes into text for the adventure log.

LLM replies may ask for rolls inline with markers such as ``[[roll 2d6+1]]``
or ``[[check stealth DC 12]]``. ``resolve_roll_requests`` resolves each one
through the Mechanics facade and splices the result description back in.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from taleweaver.domain.mechanics import Mechanics
from taleweaver.models.rules import CheckOutcome, DamageOutcome
from taleweaver.modules.llm.prompts import (
    CHECK_DESCRIPTION,
    CHECK_NARRATION,
    DAMAGE_DESCRIPTION,
    ROLL_FALLBACK,
    outcome_label,
)

logger = logging.getLogger("taleweaver.narration")

_MARKER_PATTERN = re.compile(r"\[\[\s*(roll|check)\s+([^\]]*?)\s*\]\]", re.IGNORECASE)
_CHECK_ARGS_PATTERN = re.compile(
    r"^(?P<skill>[A-Za-z][\w' -]*?)(?:\s+DC\s*(?P<dc>-?\d+))?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class RollRequest:
    """A roll marker found in narrative text."""

    kind: str  # "roll" | "check"
    argument: str
    raw: str


def _tier_value(outcome: CheckOutcome) -> str | None:
    return outcome.tier.value if outcome.tier is not None else None


def describe_check(actor_name: str, outcome: CheckOutcome, skill: str | None = None) -> str:
    return CHECK_DESCRIPTION.safe_substitute(
        actor_name=actor_name,
        skill=skill or "a check",
        detail=outcome.detail,
        result=outcome.result,
        outcome=outcome_label(outcome.success, _tier_value(outcome)),
    )


def describe_damage(actor_name: str, outcome: DamageOutcome) -> str:
    if not outcome.breakdown:
        # Malformed expression: only the zero total is meaningful
        breakdown = "no dice"
    else:
        breakdown = " + ".join(str(part) for part in outcome.breakdown)
    return DAMAGE_DESCRIPTION.safe_substitute(
        actor_name=actor_name,
        expression=outcome.expression.strip(),
        breakdown=breakdown,
        total=outcome.total,
    )


def build_check_prompt(
    actor_name: str,
    outcome: CheckOutcome,
    skill: str | None = None,
    context: str = "",
) -> str:
    """Prompt asking the narrative layer to describe a resolved check."""
    return CHECK_NARRATION.safe_substitute(
        actor_name=actor_name,
        skill=skill or "unspecified action",
        detail=outcome.detail,
        outcome=outcome_label(outcome.success, _tier_value(outcome)),
        context=context or "(no additional context)",
    )


def extract_roll_requests(text: str) -> list[RollRequest]:
    return [
        RollRequest(kind=match.group(1).lower(), argument=match.group(2), raw=match.group(0))
        for match in _MARKER_PATTERN.finditer(text)
    ]


def _resolve_one(mechanics: Mechanics, actor_id: str, actor_name: str, request: RollRequest) -> str:
    if request.kind == "roll":
        return describe_damage(actor_name, mechanics.damage_roll(request.argument))

    args = _CHECK_ARGS_PATTERN.match(request.argument)
    if args is None:
        raise ValueError(f"Unreadable check request: {request.argument!r}")
    skill = args.group("skill").strip()
    difficulty = int(args.group("dc")) if args.group("dc") else None
    outcome = mechanics.ability_check(actor_id, skill=skill, difficulty=difficulty)
    return describe_check(actor_name, outcome, skill=skill)


def resolve_roll_requests(
    mechanics: Mechanics,
    actor_id: str,
    text: str,
    actor_name: str | None = None,
) -> str:
    """Replace every roll marker in ``text`` with its resolved description.

    A marker that cannot be resolved is replaced by ``ROLL_FALLBACK``.
    """
    name = actor_name or actor_id

    def _replace(match: re.Match[str]) -> str:
        request = RollRequest(kind=match.group(1).lower(), argument=match.group(2), raw=match.group(0))
        try:
            return _resolve_one(mechanics, actor_id, name, request)
        except Exception:
            logger.warning("Could not resolve roll marker %r", request.raw, exc_info=True)
            return ROLL_FALLBACK

    return _MARKER_PATTERN.sub(_replace, text)
