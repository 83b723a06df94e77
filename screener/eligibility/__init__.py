"""Eligibility core — rule engine, confidence scorer, interaction detector."""

from screener.eligibility.conditions import evaluate_condition
from screener.eligibility.engine import evaluate_eligibility
from screener.eligibility.errors import MalformedRuleError
from screener.eligibility.facts import build_fact_map
from screener.eligibility.interactions import detect_interactions
from screener.eligibility.scoring import confidence_level_for, score_and_rank
from screener.schemas.eligibility import (
    EligibilityEvaluation,
    EligibilityRule,
    ProgramMatch,
    RawHit,
)
from screener.schemas.interactions import BenefitInteraction, InteractionRule

__all__ = [
    "evaluate_condition",
    "evaluate_eligibility",
    "score_and_rank",
    "confidence_level_for",
    "detect_interactions",
    "build_fact_map",
    "MalformedRuleError",
    "EligibilityRule",
    "EligibilityEvaluation",
    "RawHit",
    "ProgramMatch",
    "InteractionRule",
    "BenefitInteraction",
]
