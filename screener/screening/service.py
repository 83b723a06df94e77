"""Screening service — answers in, ranked matches and warnings out.

Orchestrates: validate answers -> load rules -> evaluate eligibility ->
rank/deduplicate/enrich -> detect benefit interactions.
Persisting the result is the caller's concern.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from screener.config import settings
from screener.content.documentation import default_catalog
from screener.eligibility.engine import evaluate_eligibility
from screener.eligibility.facts import build_fact_map
from screener.eligibility.interactions import detect_interactions
from screener.eligibility.rules_loader import RulesCache
from screener.eligibility.scoring import DocumentationSource, score_and_rank
from screener.schemas.interactions import InteractionRule
from screener.schemas.screening import ScreeningResult

logger = logging.getLogger(__name__)

# State code → jurisdiction with its own rule set
STATE_JURISDICTIONS: dict[str, str] = {
    "KY": "kentucky",
}


class ScreeningInputError(ValueError):
    """Raised when required answers are missing."""


def jurisdiction_for_state(state: str) -> str:
    """Map a state code to a rule jurisdiction, falling back to the default."""
    jurisdiction = STATE_JURISDICTIONS.get(state.upper())
    if jurisdiction is None:
        jurisdiction = settings.rules.default_jurisdiction
        logger.info("No rule set for state %s, using %s", state, jurisdiction)
    return jurisdiction


def _validate_answers(answers: Mapping[str, Any]) -> None:
    if not answers.get("role"):
        raise ScreeningInputError("Please select whether you are a veteran or caregiver.")
    if not answers.get("state"):
        raise ScreeningInputError("Please select your state.")


def run_screening(
    answers: Mapping[str, Any],
    *,
    rules_cache: RulesCache,
    catalog: DocumentationSource | None = None,
    interaction_rules: Sequence[InteractionRule] | None = None,
    as_of: date | None = None,
) -> ScreeningResult:
    """Screen one person's answers against the active rules.

    Args:
        answers: Flat answers from the intake flow.
        rules_cache: Request-scoped rule cache.
        catalog: Documentation lookup; bundled checklists when None.
        interaction_rules: Interaction rules; bundled set when None.
        as_of: Screening date for rule effective windows (default today).

    Raises:
        ScreeningInputError: If ``role`` or ``state`` is missing.
    """
    _validate_answers(answers)
    as_of = as_of or date.today()
    if catalog is None:
        catalog = default_catalog()

    jurisdiction = jurisdiction_for_state(str(answers["state"]))
    rules = rules_cache.load_active_rules(jurisdiction, as_of)
    facts = build_fact_map(answers)

    evaluation = evaluate_eligibility(facts, rules, as_of=as_of)
    # Load-time rejects first, in record order.
    failed_rule_ids = list(dict.fromkeys([
        *rules_cache.rejected_rule_ids(jurisdiction),
        *evaluation.failed_rule_ids,
    ]))
    matches = score_and_rank(evaluation.matches, catalog)
    interactions = detect_interactions(matches, interaction_rules, facts=facts)

    logger.info(
        "Screening done: jurisdiction=%s rules=%d matches=%d interactions=%d failed=%d",
        jurisdiction,
        len(rules),
        len(matches),
        len(interactions),
        len(failed_rule_ids),
    )

    return ScreeningResult(
        jurisdiction=jurisdiction,
        screened_on=as_of,
        matches=matches,
        interactions=interactions,
        failed_rule_ids=failed_rule_ids,
    )
