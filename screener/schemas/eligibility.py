"""Pydantic schemas for the eligibility engine and confidence scorer.

Pure data classes: no store access, no I/O.
Used as inputs/outputs for the deterministic screening pipeline.
"""

from __future__ import annotations

import math
from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from screener.schemas.conditions import Condition, normalize_condition

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ConfidenceLevel(StrEnum):
    """Coarse display bucket for a program's confidence score."""

    HIGH = "high"        # score >= 0.75
    MEDIUM = "medium"    # 0.4 <= score < 0.75
    LOW = "low"          # score < 0.4


# User-facing labels per confidence level
CONFIDENCE_LABELS: dict[ConfidenceLevel, str] = {
    ConfidenceLevel.HIGH: "Likely Eligible",
    ConfidenceLevel.MEDIUM: "Possibly Eligible",
    ConfidenceLevel.LOW: "Worth Exploring",
}

# Base certainty assigned to rule records that still carry a coarse level
LEGACY_LEVEL_CERTAINTY: dict[ConfidenceLevel, float] = {
    ConfidenceLevel.HIGH: 0.9,
    ConfidenceLevel.MEDIUM: 0.6,
    ConfidenceLevel.LOW: 0.3,
}


def clamp_certainty(value: float) -> float:
    """Clamp a certainty into [0, 1]; NaN counts as 0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class EligibilityRule(BaseModel):
    """One declarative rule: if ``conditions`` hold, the person may qualify.

    ``base_certainty`` is intentionally not range-validated here; a corrupt
    value is clamped when the hit is produced instead of rejecting the rule.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    program_id: str
    program_name: str
    jurisdiction: str
    conditions: Condition
    base_certainty: float
    effective_from: date
    effective_until: date | None = None
    active: bool = True

    # Display data carried alongside the rule
    description: str = ""
    next_steps: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def convert_legacy_confidence(cls, data: Any) -> Any:
        """Accept records written with ``confidence_level`` instead of a certainty."""
        if isinstance(data, dict) and "base_certainty" not in data and "confidence_level" in data:
            data = dict(data)
            level = ConfidenceLevel(data.pop("confidence_level"))
            data["base_certainty"] = LEGACY_LEVEL_CERTAINTY[level]
        return data

    @field_validator("conditions", mode="before")
    @classmethod
    def normalize_conditions(cls, v: Any) -> Any:
        return normalize_condition(v)

    def is_in_effect(self, as_of: date) -> bool:
        """Active and ``effective_from <= as_of <= effective_until`` (open-ended if unset)."""
        if not self.active:
            return False
        if self.effective_from > as_of:
            return False
        return self.effective_until is None or as_of <= self.effective_until


class RawHit(BaseModel):
    """A rule whose condition tree evaluated to true."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    program_id: str
    program_name: str
    certainty: float

    # Display data copied from the rule
    description: str = ""
    next_steps: list[str] = Field(default_factory=list)

    @field_validator("certainty")
    @classmethod
    def clamp(cls, v: float) -> float:
        return clamp_certainty(v)


class RuleFailure(BaseModel):
    """A rule skipped because evaluating it raised."""

    rule_id: str
    reason: str


class EligibilityEvaluation(BaseModel):
    """Output of the rule engine for one fact map."""

    matches: list[RawHit] = Field(default_factory=list)
    failed_rule_ids: list[str] = Field(default_factory=list)
    failures: list[RuleFailure] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Documentation checklists
# ---------------------------------------------------------------------------


class ChecklistDocument(BaseModel):
    """A single document to gather before applying."""

    name: str
    description: str = ""
    required: bool = True                # False = recommended
    how_to_obtain: str = ""


class DocumentationChecklist(BaseModel):
    """Everything a person should prepare for one program."""

    program_id: str
    program_name: str
    description: str = ""
    documents: list[ChecklistDocument] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Program matches
# ---------------------------------------------------------------------------


class ProgramMatch(BaseModel):
    """One deduplicated, ranked program the person may qualify for."""

    program_id: str
    program_name: str
    confidence_score: float
    confidence_level: ConfidenceLevel
    confidence_label: str
    matched_rule_ids: list[str] = Field(default_factory=list)
    description: str = ""
    next_steps: list[str] = Field(default_factory=list)
    required_documents: list[str] = Field(default_factory=list)
    recommended_documents: list[str] = Field(default_factory=list)
