"""Request/response schemas for a full screening run."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from screener.schemas.conditions import FactValue
from screener.schemas.eligibility import ProgramMatch
from screener.schemas.interactions import BenefitInteraction


class ScreeningRequest(BaseModel):
    """Flat answers collected by the intake flow."""

    answers: dict[str, FactValue | None]
    as_of: date | None = None


class ScreeningResult(BaseModel):
    """Ranked matches plus interaction warnings for one screening."""

    jurisdiction: str
    screened_on: date
    matches: list[ProgramMatch] = Field(default_factory=list)
    interactions: list[BenefitInteraction] = Field(default_factory=list)
    failed_rule_ids: list[str] = Field(default_factory=list)
