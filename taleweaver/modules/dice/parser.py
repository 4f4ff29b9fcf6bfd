"""Dice expression parser — supports NdM, NdM+K and NdM-K.

Parsing is permissive on purpose: expressions usually arrive as player or
LLM supplied text, so anything that does not match the grammar evaluates
to a zero result instead of raising. Callers that need strict validation
should check ``parse_expression(expr) is not None`` first.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, field

logger = logging.getLogger("taleweaver.dice")

# Guard against "99999999d6" style input tying up a request handler.
MAX_DICE_COUNT = 1000


@dataclass(frozen=True)
class DiceExpression:
    """Result of parsing a dice expression."""

    original: str
    count: int
    faces: int
    modifier: int = 0


@dataclass
class DiceExpressionResult:
    """Full result of evaluating a dice expression."""

    expression: str
    parts: list[int] = field(default_factory=list)
    modifier: int = 0
    total: int = 0


# Digit runs are bounded so int() never sees an oversized literal.
_DICE_PATTERN = re.compile(
    r"^(\d{1,4})d(\d{1,6})"  # NdM
    r"([+-]\d{1,9})?$",  # optional +K or -K
    re.IGNORECASE,
)

_WHITESPACE = re.compile(r"\s+")


def parse_expression(expr: str) -> DiceExpression | None:
    """Parse a dice expression string.

    Supported formats:
        NdM        - e.g. 2d6
        NdM+K      - e.g. 2d6+3
        NdM-K      - e.g. 1d20-1

    Whitespace is ignored anywhere in the expression and ``D`` is accepted
    as well as ``d``.

    Returns:
        The parsed DiceExpression, or None when the input does not match.
    """
    if not isinstance(expr, str):
        return None

    compact = _WHITESPACE.sub("", expr)
    match = _DICE_PATTERN.match(compact)
    if match is None:
        return None

    count = int(match.group(1))
    faces = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0

    if faces < 1 or count > MAX_DICE_COUNT:
        return None

    return DiceExpression(original=expr, count=count, faces=faces, modifier=modifier)


def evaluate(parsed: DiceExpression, rng: random.Random | None = None) -> DiceExpressionResult:
    """Roll dice according to a DiceExpression; ``parts`` keeps roll order."""
    source = rng if rng is not None else random
    parts = [source.randint(1, parsed.faces) for _ in range(parsed.count)]
    return DiceExpressionResult(
        expression=parsed.original,
        parts=parts,
        modifier=parsed.modifier,
        total=sum(parts) + parsed.modifier,
    )


def roll_expression(expr: str, rng: random.Random | None = None) -> DiceExpressionResult:
    """Convenience: parse + evaluate in one call.

    Malformed input yields ``total=0`` with no parts.
    """
    parsed = parse_expression(expr)
    if parsed is None:
        logger.debug("Unparseable dice expression %r, using zero result", expr)
        return DiceExpressionResult(expression=expr if isinstance(expr, str) else "")
    return evaluate(parsed, rng)
