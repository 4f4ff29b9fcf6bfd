"""Mechanics API endpoints: dice checks, damage, initiative and roll narration."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from taleweaver.domain import narration
from taleweaver.domain.mechanics import Mechanics, get_mechanics
from taleweaver.models.rules import CheckOutcome
from taleweaver.modules.llm.prompts import ROLL_FALLBACK

logger = logging.getLogger("taleweaver.api")

router = APIRouter(prefix="/api/mechanics", tags=["mechanics"])


# --- Request schemas ---


class CheckRequest(BaseModel):
    actor_id: str
    skill: str | None = None
    difficulty: int | None = None
    tags: list[str] = Field(default_factory=list)
    state: dict[str, Any] | None = None  # when given, the outcome is applied to it


class DamageRequest(BaseModel):
    expression: str


class TurnOrderRequest(BaseModel):
    actor_ids: list[str]


class NarrateRequest(BaseModel):
    actor_id: str
    actor_name: str | None = None
    text: str


# --- Endpoints ---


@router.get("/system")
async def get_system(mechanics: Annotated[Mechanics, Depends(get_mechanics)]) -> dict:
    return {"system": mechanics.system}


@router.post("/check")
async def ability_check(
    req: CheckRequest,
    mechanics: Annotated[Mechanics, Depends(get_mechanics)],
) -> dict:
    try:
        outcome: CheckOutcome = mechanics.ability_check(
            req.actor_id, skill=req.skill, difficulty=req.difficulty, tags=req.tags
        )
        data = outcome.model_dump(mode="json")
        if req.state is not None:
            data["state"] = mechanics.apply_outcome(outcome, req.state)
    except (TypeError, ValueError):
        logger.warning("Ability check failed for %s", req.actor_id, exc_info=True)
        raise HTTPException(status_code=422, detail=ROLL_FALLBACK)
    data["description"] = narration.describe_check(req.actor_id, outcome, skill=req.skill)
    return data


@router.post("/damage")
async def damage_roll(
    req: DamageRequest,
    mechanics: Annotated[Mechanics, Depends(get_mechanics)],
) -> dict:
    return mechanics.damage_roll(req.expression).model_dump()


@router.post("/turn-order")
async def turn_order(
    req: TurnOrderRequest,
    mechanics: Annotated[Mechanics, Depends(get_mechanics)],
) -> dict:
    return {"order": mechanics.turn_order(req.actor_ids)}


@router.post("/narrate")
async def narrate(
    req: NarrateRequest,
    mechanics: Annotated[Mechanics, Depends(get_mechanics)],
) -> dict:
    """Resolve ``[[roll ...]]`` / ``[[check ...]]`` markers in narrative text."""
    requests = narration.extract_roll_requests(req.text)
    text = narration.resolve_roll_requests(
        mechanics, req.actor_id, req.text, actor_name=req.actor_name
    )
    return {"text": text, "resolved": len(requests)}
