"""Shared test fixtures."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from taleweaver.domain.mechanics import Mechanics, get_mechanics
from taleweaver.domain.rules.base import RulesEngine
from taleweaver.domain.rules.registry import make_engine
from taleweaver.main import app
from taleweaver.modules.dice.roller import DiceRoller


class ScriptedDice:
    """Stand-in randomness source that returns predetermined faces in order."""

    def __init__(self, *faces: int) -> None:
        self.faces = list(faces)

    def randint(self, low: int, high: int) -> int:
        face = self.faces.pop(0)
        assert low <= face <= high, f"scripted face {face} outside {low}..{high}"
        return face


def scripted_engine(engine_cls: type[RulesEngine], *faces: int, stat_lookup=None) -> RulesEngine:
    """Build an engine whose dice come up as ``faces``."""
    return engine_cls(stat_lookup=stat_lookup, roller=DiceRoller(source=ScriptedDice(*faces)))


def table_lookup(table: dict[str, dict[str, int]]):
    """Stat lookup backed by a nested dict {actor_id: {stat: modifier}}."""

    def _lookup(actor_id: str, stat: str | None) -> int | None:
        return table.get(actor_id, {}).get(stat or "")

    return _lookup


@pytest_asyncio.fixture
async def client():
    mechanics = Mechanics(make_engine("dnd5e", seed=1234))
    app.dependency_overrides[get_mechanics] = lambda: mechanics
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
