"""Maps a rule system identifier to its engine class."""

from __future__ import annotations

import logging

from taleweaver.domain.rules.base import RulesEngine, StatLookup
from taleweaver.domain.rules.dnd5e import Dnd5eEngine
from taleweaver.domain.rules.pbta import PbtaEngine

logger = logging.getLogger("taleweaver.rules")

_ENGINES: dict[str, type[RulesEngine]] = {
    "dnd5e": Dnd5eEngine,
    "pbta": PbtaEngine,
}


class UnknownRulesSystemError(ValueError):
    """Raised when configuration names a rule system that is not registered."""

    def __init__(self, system_id: str) -> None:
        self.system_id = system_id
        known = ", ".join(available_systems())
        super().__init__(f"Unknown rules system {system_id!r} (known systems: {known})")


def _normalise(system_id: str) -> str:
    return system_id.strip().lower()


def register_engine(system_id: str, engine_cls: type[RulesEngine]) -> None:
    """Add a rule system. Registering an existing identifier is an error."""
    key = _normalise(system_id)
    if key in _ENGINES:
        raise ValueError(f"Rules system {key!r} is already registered")
    _ENGINES[key] = engine_cls


def available_systems() -> list[str]:
    return sorted(_ENGINES)


def make_engine(
    system_id: str,
    *,
    seed: int | None = None,
    stat_lookup: StatLookup | None = None,
) -> RulesEngine:
    """Construct the engine for ``system_id``.

    Raises:
        UnknownRulesSystemError: If the identifier is not registered.
    """
    engine_cls = _ENGINES.get(_normalise(system_id)) if isinstance(system_id, str) else None
    if engine_cls is None:
        raise UnknownRulesSystemError(str(system_id))
    engine = engine_cls(seed=seed, stat_lookup=stat_lookup)
    logger.info("Rules engine ready: system=%s seeded=%s", engine.name(), seed is not None)
    return engine
