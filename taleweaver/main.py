"""taleweaver — FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from importlib.metadata import version, PackageNotFoundError

from fastapi import FastAPI

from taleweaver.api import mechanics as mechanics_api
from taleweaver.domain.mechanics import Mechanics
from taleweaver.domain.rules.registry import make_engine
from taleweaver.infra.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("taleweaver")

try:
    __version__ = version("taleweaver")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[no-untyped-def]
    # Unknown GAME_SYSTEM values raise here and abort startup.
    engine = make_engine(settings.game_system, seed=settings.rules_seed)
    app.state.mechanics = Mechanics(engine)
    logger.info("Active rules system: %s", engine.name())
    yield


app = FastAPI(
    title="taleweaver",
    description="AI-narrated tabletop adventures: rules engine service",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(mechanics_api.router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "engine": "taleweaver", "version": __version__}
