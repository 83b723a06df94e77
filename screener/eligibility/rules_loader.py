"""Rule store adapters and the request-scoped rule cache.

A store hands the engine an immutable snapshot of the rules in effect for one
jurisdiction on one date. ``RulesCache`` memoizes those snapshots for the
lifetime of a single request so repeated evaluations don't reload; create a
new cache per request instead of sharing one across requests.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from screener.config import settings
from screener.content.kentucky_rules import KENTUCKY_RULE_RECORDS
from screener.schemas.eligibility import EligibilityRule

logger = logging.getLogger(__name__)


class RuleStore(ABC):
    """Source of active eligibility rules."""

    @abstractmethod
    def load_active_rules(self, jurisdiction: str, as_of: date) -> tuple[EligibilityRule, ...]:
        """Rules in effect for ``jurisdiction`` on ``as_of``, as an immutable snapshot."""

    def rejected_rule_ids_for(self, jurisdiction: str) -> tuple[str, ...]:
        """Ids of records for ``jurisdiction`` that failed validation at load."""
        return ()


class InMemoryRuleStore(RuleStore):
    """Rule store over already-loaded rule records.

    Records are validated one by one: a record that fails validation is
    rejected and logged without affecting the rest of the set. Rejected ids
    are kept per jurisdiction so screenings can report them as failed rules.
    """

    def __init__(self, records: Iterable[dict[str, Any] | EligibilityRule]) -> None:
        self._rules: list[EligibilityRule] = []
        self.rejected_rule_ids: list[str] = []
        # (rule id, jurisdiction or None when the record doesn't say)
        self._rejected: list[tuple[str, str | None]] = []

        for index, record in enumerate(records):
            if isinstance(record, EligibilityRule):
                self._rules.append(record)
                continue
            try:
                self._rules.append(EligibilityRule.model_validate(record))
            except ValidationError as exc:
                rule_id, jurisdiction = _record_identity(record, index)
                logger.warning("Rejected rule record %s: %s", rule_id, exc.errors()[0]["msg"])
                self.rejected_rule_ids.append(rule_id)
                self._rejected.append((rule_id, jurisdiction))

        logger.info(
            "Rule store loaded %d rules (%d rejected)",
            len(self._rules),
            len(self.rejected_rule_ids),
        )

    @classmethod
    def bundled(cls) -> InMemoryRuleStore:
        """Store over the bundled Kentucky rule records."""
        return cls(KENTUCKY_RULE_RECORDS)

    def all_rules(self) -> tuple[EligibilityRule, ...]:
        return tuple(self._rules)

    def load_active_rules(self, jurisdiction: str, as_of: date) -> tuple[EligibilityRule, ...]:
        """Active, in-effect rules for a jurisdiction.

        Ordered by program id, then certainty (highest first), then rule id.
        """
        active = [
            rule for rule in self._rules
            if rule.jurisdiction == jurisdiction and rule.is_in_effect(as_of)
        ]
        active.sort(key=lambda r: (r.program_id, -r.base_certainty, r.id))
        return tuple(active)

    def rejected_rule_ids_for(self, jurisdiction: str) -> tuple[str, ...]:
        """Rejected record ids for a jurisdiction, in record order.

        Records with no readable jurisdiction count against every jurisdiction.
        """
        return tuple(dict.fromkeys(
            rule_id for rule_id, owner in self._rejected
            if owner is None or owner == jurisdiction
        ))


def _record_identity(record: Any, index: int) -> tuple[str, str | None]:
    """Best-effort (id, jurisdiction) of a record that failed validation."""
    if not isinstance(record, dict):
        return f"#{index}", None
    rule_id = str(record.get("id", f"#{index}"))
    jurisdiction = record.get("jurisdiction")
    return rule_id, (jurisdiction if isinstance(jurisdiction, str) else None)


class JsonRuleStore(InMemoryRuleStore):
    """Rule store backed by a JSON file holding an array of rule records."""

    @classmethod
    def from_path(cls, path: Path) -> JsonRuleStore:
        """Read and validate rule records from ``path``.

        Raises:
            ValueError: If the file does not contain a JSON array.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, list):
            msg = f"Rule file {path} must contain a JSON array, got {type(data).__name__}"
            raise ValueError(msg)
        logger.info("Loading rule records from %s", path)
        return cls(data)


class RulesCache:
    """Request-scoped memoization of rule snapshots."""

    def __init__(self, store: RuleStore) -> None:
        self._store = store
        self._snapshots: dict[tuple[str, date], tuple[EligibilityRule, ...]] = {}

    def load_active_rules(self, jurisdiction: str, as_of: date | None = None) -> tuple[EligibilityRule, ...]:
        as_of = as_of or date.today()
        key = (jurisdiction, as_of)
        cached = self._snapshots.get(key)
        if cached is not None:
            logger.debug("Rule cache hit: %s @ %s", jurisdiction, as_of)
            return cached

        snapshot = tuple(self._store.load_active_rules(jurisdiction, as_of))
        self._snapshots[key] = snapshot
        return snapshot

    def rejected_rule_ids(self, jurisdiction: str) -> tuple[str, ...]:
        """Rule ids the store rejected at load for ``jurisdiction``."""
        return tuple(self._store.rejected_rule_ids_for(jurisdiction))

    def clear(self) -> None:
        """Drop all cached snapshots."""
        self._snapshots.clear()


def default_rule_store() -> InMemoryRuleStore:
    """Build the rule store selected by settings."""
    if settings.rules.rules_path is not None:
        return JsonRuleStore.from_path(settings.rules.rules_path)
    return InMemoryRuleStore.bundled()
