"""Pydantic schemas for benefit interaction detection.

An interaction rule states that a set of programs, when all matched at once,
warrant a warning: qualifying for one may reduce or eliminate another.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from screener.schemas.conditions import Condition, normalize_condition


class InteractionSeverity(StrEnum):
    """How badly one program affects another."""

    BLOCKING = "blocking"            # may cost a benefit entirely (eligibility cliff)
    REDUCING = "reducing"            # reduces benefit amounts
    INFORMATIONAL = "informational"  # threshold monitoring only


class InteractionRule(BaseModel):
    """Fires when every id in ``program_ids`` is among the matched programs."""

    model_config = ConfigDict(frozen=True)

    id: str
    program_ids: list[str]
    severity: InteractionSeverity
    description: str
    affected_programs: list[str] = Field(default_factory=list)

    title: str = ""
    recommendation: str = ""
    learn_more_url: str | None = None
    # Optional gate on the screening answers (e.g. household income band)
    conditions: Condition | None = None

    @field_validator("program_ids")
    @classmethod
    def require_two_programs(cls, v: list[str]) -> list[str]:
        """An interaction needs at least two distinct programs."""
        if len(set(v)) < 2:
            msg = f"Interaction rule needs at least 2 distinct program ids, got {v}"
            raise ValueError(msg)
        return v

    @field_validator("conditions", mode="before")
    @classmethod
    def normalize_conditions(cls, v: Any) -> Any:
        return normalize_condition(v)


class BenefitInteraction(BaseModel):
    """A warning produced by a fired interaction rule."""

    interaction_rule_id: str
    severity: InteractionSeverity
    description: str
    program_names: list[str]
    program_ids: list[str] = Field(default_factory=list)
    affected_programs: list[str] = Field(default_factory=list)
    title: str = ""
    recommendation: str = ""
    learn_more_url: str | None = None
