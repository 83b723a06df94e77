"""Pydantic schemas for eligibility condition trees and fact values.

A condition tree is a closed set of four node kinds discriminated on ``kind``.
Rule records coming out of the rule store may also use the json-rules-engine
shorthand (``{"all": [...]}``, ``{"fact": ..., "operator": ..., "value": ...}``);
``normalize_condition`` rewrites that shorthand into the tagged form before
validation.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

# ---------------------------------------------------------------------------
# Facts
# ---------------------------------------------------------------------------

FactValue = str | int | float | bool | list[str]
FactMap = Mapping[str, FactValue]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    """Comparison operators understood by the condition evaluator."""

    EQUAL = "equal"
    NOT_EQUAL = "notEqual"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    IN = "in"
    NOT_IN = "notIn"
    CONTAINS = "contains"


# ---------------------------------------------------------------------------
# Condition nodes
# ---------------------------------------------------------------------------


class ComparisonCondition(BaseModel):
    """Compare one fact against a literal value.

    ``operator`` is kept as a plain string: an unsupported operator must
    survive loading so the engine can isolate the rule instead of rejecting
    the whole rule set.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["comparison"] = "comparison"
    fact: str = Field(min_length=1)
    operator: str
    value: Any = None


class AllCondition(BaseModel):
    """True iff every child is true (empty = true)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"
    conditions: list[Condition] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def normalize_children(cls, v: Any) -> Any:
        return _normalize_list(v)


class AnyCondition(BaseModel):
    """True iff at least one child is true (empty = false)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["any"] = "any"
    conditions: list[Condition] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def normalize_children(cls, v: Any) -> Any:
        return _normalize_list(v)


class NotCondition(BaseModel):
    """Negation of a single child."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["not"] = "not"
    condition: Condition

    @field_validator("condition", mode="before")
    @classmethod
    def normalize_child(cls, v: Any) -> Any:
        return normalize_condition(v)


Condition = Annotated[
    ComparisonCondition | AllCondition | AnyCondition | NotCondition,
    Field(discriminator="kind"),
]

ConditionNode = ComparisonCondition | AllCondition | AnyCondition | NotCondition

AllCondition.model_rebuild()
AnyCondition.model_rebuild()
NotCondition.model_rebuild()


# ---------------------------------------------------------------------------
# Shorthand normalization
# ---------------------------------------------------------------------------

_GROUP_KEYS = ("all", "any")


def normalize_condition(raw: Any) -> Any:
    """Rewrite json-rules-engine shorthand into the tagged ``kind`` form.

    Already-built nodes and tagged dicts pass through untouched. Anything that
    is neither is left for pydantic to reject, except dicts that are clearly
    ambiguous (both ``all`` and ``any`` at one level), which raise ValueError.
    """
    if isinstance(raw, BaseModel) or not isinstance(raw, dict):
        return raw
    if "kind" in raw:
        return raw

    groups = [key for key in _GROUP_KEYS if key in raw]
    if len(groups) > 1:
        msg = "A condition group must use exactly one of 'all' or 'any'"
        raise ValueError(msg)
    if groups:
        key = groups[0]
        return {"kind": key, "conditions": _normalize_list(raw[key])}
    if "not" in raw:
        return {"kind": "not", "condition": normalize_condition(raw["not"])}
    if "fact" in raw:
        return {
            "kind": "comparison",
            "fact": raw["fact"],
            "operator": raw.get("operator"),
            "value": raw.get("value"),
        }
    return raw


def _normalize_list(raw: Any) -> Any:
    if isinstance(raw, list):
        return [normalize_condition(item) for item in raw]
    return raw


_CONDITION_ADAPTER: TypeAdapter[ConditionNode] = TypeAdapter(Condition)


def parse_condition(raw: Any) -> ConditionNode:
    """Validate a tagged or shorthand condition into a node."""
    return _CONDITION_ADAPTER.validate_python(normalize_condition(raw))
