"""Condition evaluator — one condition tree against one fact map.

Pure predicate logic with no knowledge of programs or rules.

Coercion rules:
  - A missing fact (absent key or None) never matches, whatever the operator.
  - equal / notEqual: values of the same kind compare natively (int and float
    are both "number"); values of different kinds compare by string form,
    so "70" equals 70 and "true" equals True. Arrays only equal arrays.
  - in / notIn: the rule value must be a list; membership uses equality above.
  - contains: the fact must be a list; otherwise no match.
  - Ordering operators: both sides must be finite numbers (numeric strings
    are parsed, booleans are not numbers); otherwise no match.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

from screener.eligibility.errors import MalformedRuleError
from screener.schemas.conditions import (
    AllCondition,
    AnyCondition,
    ComparisonCondition,
    ConditionNode,
    FactMap,
    NotCondition,
    Operator,
)

Comparator = Callable[[Any, Any], bool]

# Plain decimal or scientific notation only (no "1_000", "inf", "0x10")
_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


# ── Coercion helpers ──────────────────────────────────────────────────────


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, list | tuple):
        return "array"
    return "string"


def _as_text(value: Any) -> str:
    """String form used when comparing values of different kinds."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_number(value: Any) -> float | None:
    """Finite float for numbers and numeric strings, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_PATTERN.match(text):
            return None
        number = float(text)
    else:
        return None
    return number if math.isfinite(number) else None


def values_equal(left: Any, right: Any) -> bool:
    """Equality with the cross-kind string coercion described above."""
    left_kind, right_kind = _kind(left), _kind(right)
    if left_kind == right_kind:
        if left_kind == "array":
            return list(left) == list(right)
        return left == right
    if "array" in (left_kind, right_kind):
        return False
    return _as_text(left) == _as_text(right)


# ── Operators ─────────────────────────────────────────────────────────────


def _ordering(check: Callable[[float, float], bool]) -> Comparator:
    def compare(fact_value: Any, rule_value: Any) -> bool:
        left, right = _as_number(fact_value), _as_number(rule_value)
        if left is None or right is None:
            return False
        return check(left, right)

    return compare


def _member_of(fact_value: Any, rule_value: Any) -> bool:
    if not isinstance(rule_value, list | tuple):
        msg = f"'in'/'notIn' needs a list value, got {type(rule_value).__name__}"
        raise MalformedRuleError(msg)
    return any(values_equal(fact_value, item) for item in rule_value)


def _contains(fact_value: Any, rule_value: Any) -> bool:
    if not isinstance(fact_value, list | tuple):
        return False
    return any(values_equal(item, rule_value) for item in fact_value)


COMPARATORS: dict[Operator, Comparator] = {
    Operator.EQUAL: values_equal,
    Operator.NOT_EQUAL: lambda f, v: not values_equal(f, v),
    Operator.GREATER_THAN: _ordering(lambda a, b: a > b),
    Operator.GREATER_THAN_OR_EQUAL: _ordering(lambda a, b: a >= b),
    Operator.LESS_THAN: _ordering(lambda a, b: a < b),
    Operator.LESS_THAN_OR_EQUAL: _ordering(lambda a, b: a <= b),
    Operator.IN: _member_of,
    Operator.NOT_IN: lambda f, v: not _member_of(f, v),
    Operator.CONTAINS: _contains,
}


# ── Evaluation ────────────────────────────────────────────────────────────


def _compare(node: ComparisonCondition, facts: FactMap) -> bool:
    try:
        operator = Operator(node.operator)
    except ValueError as exc:
        raise MalformedRuleError(f"Unsupported operator: {node.operator!r}") from exc

    comparator = COMPARATORS[operator]
    fact_value = facts.get(node.fact)
    if fact_value is None:
        # Closed world. in/notIn still validate their rule value.
        if operator in (Operator.IN, Operator.NOT_IN):
            _member_of(None, node.value)
        return False
    return comparator(fact_value, node.value)


def evaluate_condition(
    condition: ConditionNode,
    facts: FactMap,
    *,
    rule_id: str | None = None,
) -> bool:
    """Evaluate a condition tree against a fact map.

    Args:
        condition: Root node of the tree.
        facts: Flat fact name → value mapping. Never mutated.
        rule_id: Owning rule, attached to any MalformedRuleError raised.

    Returns:
        True iff the tree holds. ``any``/``all`` short-circuit.

    Raises:
        MalformedRuleError: Unsupported operator, unknown node type, or an
            in/notIn rule value that is not a list.
    """
    try:
        return _evaluate(condition, facts)
    except MalformedRuleError as exc:
        if exc.rule_id is None:
            exc.rule_id = rule_id
        raise


def _evaluate(node: ConditionNode, facts: FactMap) -> bool:
    if isinstance(node, ComparisonCondition):
        return _compare(node, facts)
    if isinstance(node, AllCondition):
        return all(_evaluate(child, facts) for child in node.conditions)
    if isinstance(node, AnyCondition):
        return any(_evaluate(child, facts) for child in node.conditions)
    if isinstance(node, NotCondition):
        return not _evaluate(node.condition, facts)
    raise MalformedRuleError(f"Unknown condition node: {type(node).__name__}")
