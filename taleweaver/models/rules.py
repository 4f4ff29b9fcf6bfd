"""Value types exchanged between rules engines and the mechanics facade."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Tier(str, Enum):
    """Degree of success for 2d6-style systems."""

    MISS = "miss"
    PARTIAL = "partial"
    FULL = "full"


class CheckInput(BaseModel):
    actor_id: str
    skill: str | None = None
    # Target number, meaning depends on the system. Whole numbers only: 12.0 is
    # accepted as 12, 12.5 fails validation.
    difficulty: int | None = None
    tags: list[str] = Field(default_factory=list)  # narrative hints only, never affect the math


class CheckResult(BaseModel):
    success: bool
    roll_total: int
    detail: str
    margin: int | None = None
    tier: Tier | None = None
    rolls: list[int] = Field(default_factory=list)


class DamageResult(BaseModel):
    total: int
    breakdown: list[int] = Field(default_factory=list)


class CheckOutcome(BaseModel):
    """Ability check as handed to request handlers and the narrative layer."""

    success: bool
    result: int
    detail: str
    margin: int | None = None
    tier: Tier | None = None


class DamageOutcome(BaseModel):
    expression: str
    total: int
    breakdown: list[int] = Field(default_factory=list)
