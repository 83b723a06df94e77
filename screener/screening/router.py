"""Screening API — FastAPI router.

``POST /screenings`` runs one screening; ``GET /screenings/rules`` lists the
rules currently in effect. Each request gets its own rule cache.
"""
# ruff: noqa: B008

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query

from screener.config import settings
from screener.eligibility.rules_loader import InMemoryRuleStore, RulesCache, default_rule_store
from screener.schemas.eligibility import EligibilityRule
from screener.schemas.screening import ScreeningRequest, ScreeningResult
from screener.screening.service import ScreeningInputError, run_screening

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/screenings", tags=["screenings"])


@lru_cache(maxsize=1)
def get_rule_store() -> InMemoryRuleStore:
    """Process-wide rule store, loaded once."""
    return default_rule_store()


def get_rules_cache(store: InMemoryRuleStore = Depends(get_rule_store)) -> RulesCache:
    """Fresh request-scoped cache over the shared store."""
    return RulesCache(store)


@router.post("", response_model=ScreeningResult)
def create_screening(
    request: ScreeningRequest,
    rules_cache: RulesCache = Depends(get_rules_cache),
) -> ScreeningResult:
    """Screen the submitted answers and return ranked matches."""
    try:
        return run_screening(request.answers, rules_cache=rules_cache, as_of=request.as_of)
    except ScreeningInputError as exc:
        logger.info("Rejected screening request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/rules", response_model=list[EligibilityRule])
def list_active_rules(
    jurisdiction: str | None = Query(default=None),
    as_of: date | None = Query(default=None),
    rules_cache: RulesCache = Depends(get_rules_cache),
) -> list[EligibilityRule]:
    """Rules in effect for a jurisdiction (default jurisdiction when omitted)."""
    return list(rules_cache.load_active_rules(jurisdiction or settings.rules.default_jurisdiction, as_of))
