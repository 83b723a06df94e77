"""Eligibility engine — runs every active rule against one fact map.

Pure Python orchestrator. No store access, no I/O.
The rule store hands in an immutable rule snapshot; the scorer consumes
the raw hits.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from screener.eligibility.conditions import evaluate_condition
from screener.eligibility.errors import MalformedRuleError
from screener.schemas.conditions import FactMap
from screener.schemas.eligibility import (
    EligibilityEvaluation,
    EligibilityRule,
    RawHit,
    RuleFailure,
    clamp_certainty,
)

logger = logging.getLogger(__name__)


def _hit_for(rule: EligibilityRule) -> RawHit:
    """Build the raw hit for a fired rule, clamping a corrupt certainty."""
    certainty = clamp_certainty(rule.base_certainty)
    if certainty != rule.base_certainty:
        logger.warning(
            "Rule %s certainty %s out of range, clamped to %s",
            rule.id,
            rule.base_certainty,
            certainty,
        )
    return RawHit(
        rule_id=rule.id,
        program_id=rule.program_id,
        program_name=rule.program_name,
        certainty=certainty,
        description=rule.description,
        next_steps=list(rule.next_steps),
    )


def evaluate_eligibility(
    facts: FactMap,
    rules: Iterable[EligibilityRule],
    *,
    as_of: date | None = None,
) -> EligibilityEvaluation:
    """Evaluate all in-effect rules against a fact map.

    Rules are re-checked for ``active`` and their effective window even if the
    store already filtered them. Rules are visited in the order given, so the
    hit order is stable for a fixed rule list.

    A rule whose condition tree raises is skipped and listed in
    ``failed_rule_ids``; it never counts as a match and never aborts the run.
    """
    as_of = as_of or date.today()
    result = EligibilityEvaluation()

    for rule in rules:
        if not rule.is_in_effect(as_of):
            continue
        try:
            fired = evaluate_condition(rule.conditions, facts, rule_id=rule.id)
        except (MalformedRuleError, TypeError, ValueError) as exc:
            logger.warning("Skipping rule %s (%s): %s", rule.id, rule.program_id, exc)
            result.failed_rule_ids.append(rule.id)
            result.failures.append(RuleFailure(rule_id=rule.id, reason=str(exc)))
            continue
        if fired:
            result.matches.append(_hit_for(rule))

    logger.debug(
        "Eligibility evaluated: %d hits, %d failed rules",
        len(result.matches),
        len(result.failed_rule_ids),
    )
    return result
