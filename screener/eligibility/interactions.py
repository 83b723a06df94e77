"""Benefit interaction detector.

Cross-checks the final, deduplicated program matches against known
interaction rules and returns warnings for combinations where one program
may reduce or eliminate another.

Runs strictly after scoring: it must see one entry per program, never raw
hits. Results keep the input rule order; ordering them by severity for
display is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from screener.content.interaction_rules import BENEFIT_INTERACTION_RULES
from screener.eligibility.conditions import evaluate_condition
from screener.eligibility.errors import MalformedRuleError
from screener.schemas.conditions import FactMap
from screener.schemas.eligibility import ProgramMatch
from screener.schemas.interactions import BenefitInteraction, InteractionRule

logger = logging.getLogger(__name__)


def _answers_allow(rule: InteractionRule, facts: FactMap | None) -> bool:
    """Check a rule's optional answer-level gate (closed world when no facts)."""
    if rule.conditions is None:
        return True
    try:
        return evaluate_condition(rule.conditions, facts or {}, rule_id=rule.id)
    except MalformedRuleError as exc:
        logger.warning("Skipping interaction rule %s: %s", rule.id, exc)
        return False


def detect_interactions(
    matches: Iterable[ProgramMatch],
    interaction_rules: Sequence[InteractionRule] | None = None,
    *,
    facts: FactMap | None = None,
) -> list[BenefitInteraction]:
    """Return one BenefitInteraction per rule whose programs were all matched.

    Args:
        matches: Ranked, deduplicated matches. Read only.
        interaction_rules: Rules to check; defaults to the bundled set.
        facts: Screening facts for rules gated on answers.

    Returns:
        Fired interactions in ``interaction_rules`` order.
    """
    if interaction_rules is None:
        interaction_rules = BENEFIT_INTERACTION_RULES

    names_by_id: dict[str, str] = {}
    for match in matches:
        names_by_id.setdefault(match.program_id, match.program_name)
    matched_ids = set(names_by_id)

    interactions: list[BenefitInteraction] = []
    for rule in interaction_rules:
        if not set(rule.program_ids) <= matched_ids:
            continue
        if not _answers_allow(rule, facts):
            continue

        program_ids = list(dict.fromkeys(rule.program_ids))
        interactions.append(BenefitInteraction(
            interaction_rule_id=rule.id,
            severity=rule.severity,
            description=rule.description,
            program_names=[names_by_id[pid] for pid in program_ids],
            program_ids=program_ids,
            affected_programs=list(rule.affected_programs),
            title=rule.title,
            recommendation=rule.recommendation,
            learn_more_url=rule.learn_more_url,
        ))

    return interactions
