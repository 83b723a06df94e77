"""Exceptions raised while evaluating eligibility rules."""

from __future__ import annotations


class MalformedRuleError(Exception):
    """Raised when a rule's condition tree cannot be evaluated.

    Covers unsupported operators, unknown node types and rule-side values of
    the wrong shape. The rule engine isolates the offending rule; this never
    reaches the caller of ``evaluate_eligibility``.
    """

    def __init__(self, message: str, rule_id: str | None = None) -> None:
        super().__init__(message)
        self.rule_id = rule_id
