"""Confidence scorer — post-processing for raw eligibility hits.

Deduplicates hits per program, maps scores to confidence levels, ranks
deterministically and enriches each match with its documentation checklist.

Levels:
  score >= 0.75       → HIGH
  0.4 <= score < 0.75 → MEDIUM
  score < 0.4         → LOW
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from screener.schemas.eligibility import (
    CONFIDENCE_LABELS,
    ConfidenceLevel,
    DocumentationChecklist,
    ProgramMatch,
    RawHit,
    clamp_certainty,
)

HIGH_CONFIDENCE_MIN = 0.75
MEDIUM_CONFIDENCE_MIN = 0.4


class DocumentationSource(ABC):
    """Looks up the documentation checklist for a program."""

    @abstractmethod
    def get_documentation(self, program_id: str) -> DocumentationChecklist | None:
        """Return the checklist for a program, or None if it has none."""


def confidence_level_for(score: float) -> ConfidenceLevel:
    """Classify a confidence score into a display level."""
    if score >= HIGH_CONFIDENCE_MIN:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE_MIN:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def _group_by_program(hits: Iterable[RawHit]) -> dict[str, list[RawHit]]:
    groups: dict[str, list[RawHit]] = {}
    for hit in hits:
        if not isinstance(hit, RawHit):
            msg = f"score_and_rank expects RawHit items, got {type(hit).__name__}"
            raise TypeError(msg)
        groups.setdefault(hit.program_id, []).append(hit)
    return groups


def _documents(
    program_id: str,
    documentation: DocumentationSource | None,
) -> tuple[list[str], list[str]]:
    """Split a program's checklist into (required, recommended) names."""
    if documentation is None:
        return [], []
    checklist = documentation.get_documentation(program_id)
    if checklist is None:
        return [], []
    required = [doc.name for doc in checklist.documents if doc.required]
    recommended = [doc.name for doc in checklist.documents if not doc.required]
    return required, recommended


def _build_match(
    program_id: str,
    hits: list[RawHit],
    documentation: DocumentationSource | None,
) -> ProgramMatch:
    # Best-supporting hit decides score and display data; ties by name, then rule id.
    best = min(hits, key=lambda h: (-h.certainty, h.program_name.casefold(), h.program_name, h.rule_id))
    score = clamp_certainty(best.certainty)
    level = confidence_level_for(score)
    required, recommended = _documents(program_id, documentation)

    return ProgramMatch(
        program_id=program_id,
        program_name=best.program_name,
        confidence_score=score,
        confidence_level=level,
        confidence_label=CONFIDENCE_LABELS[level],
        matched_rule_ids=sorted({h.rule_id for h in hits}),
        description=best.description,
        next_steps=list(best.next_steps),
        required_documents=required,
        recommended_documents=recommended,
    )


def rank_matches(matches: Iterable[ProgramMatch]) -> list[ProgramMatch]:
    """Sort by score descending, then program name (case-insensitive), then id.

    Returns a new list; the input is not mutated.
    """
    return sorted(
        matches,
        key=lambda m: (-m.confidence_score, m.program_name.casefold(), m.program_id),
    )


def score_and_rank(
    hits: Iterable[RawHit],
    documentation: DocumentationSource | None = None,
) -> list[ProgramMatch]:
    """Turn raw hits into one ranked ProgramMatch per program.

    Args:
        hits: Raw hits from the rule engine, possibly several per program.
        documentation: Checklist lookup; a program without an entry gets
            empty document lists.

    Returns:
        Full ranked list. Callers decide how many to display.

    Raises:
        TypeError: If ``hits`` contains anything other than RawHit.
    """
    groups = _group_by_program(hits)
    matches = [
        _build_match(program_id, program_hits, documentation)
        for program_id, program_hits in groups.items()
    ]
    return rank_matches(matches)
