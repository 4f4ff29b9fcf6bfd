"""Time ability checks for every registered rules system.

Usage:
    python scripts/bench.py [iterations]
"""

from __future__ import annotations

import sys
import timeit

from taleweaver.domain.rules.registry import available_systems, make_engine
from taleweaver.models.rules import CheckInput


def bench(iterations: int) -> None:
    check = CheckInput(actor_id="pc1", skill="athletics", difficulty=12)
    for system_id in available_systems():
        engine = make_engine(system_id)
        engine.init_session(42)
        elapsed = timeit.timeit(lambda: engine.ability_check(check), number=iterations)
        print(f"{system_id} ability_check x{iterations}: {elapsed * 1000:.1f} ms")


if __name__ == "__main__":
    bench(int(sys.argv[1]) if len(sys.argv) > 1 else 10000)
