"""Seedable dice roller shared by a rules engine instance."""

from __future__ import annotations

import random
import threading

from taleweaver.modules.dice.parser import DiceExpressionResult, evaluate, parse_expression, roll_expression


class DiceRoller:
    """Owns the randomness source for one engine.

    ``random.Random`` is not safe to share between threads that draw
    concurrently, so every draw and every reseed happens under one lock.
    """

    def __init__(self, seed: int | None = None, source: random.Random | None = None) -> None:
        self._lock = threading.Lock()
        if source is not None:
            self._source = source
            self._seeded = True
        else:
            self._source = random.Random(seed)
            self._seeded = seed is not None

    @property
    def seeded(self) -> bool:
        return self._seeded

    def seed(self, value: int | None = None) -> None:
        """Rebind the generator. ``None`` reseeds from OS entropy."""
        source = random.Random(value)
        with self._lock:
            self._source = source
            self._seeded = value is not None

    def randint(self, low: int, high: int) -> int:
        with self._lock:
            return self._source.randint(low, high)

    def roll_die(self, faces: int) -> int:
        return self.randint(1, faces)

    def roll_dice(self, count: int, faces: int) -> list[int]:
        with self._lock:
            return [self._source.randint(1, faces) for _ in range(count)]

    def roll(self, expr: str) -> DiceExpressionResult:
        """Roll an ``NdM+K`` expression; malformed input gives a zero result."""
        parsed = parse_expression(expr)
        if parsed is None:
            return roll_expression(expr)
        with self._lock:
            return evaluate(parsed, self._source)
