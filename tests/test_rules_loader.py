"""Tests for rule stores and the request-scoped rule cache."""

from __future__ import annotations

import json
from datetime import date

import pytest

from screener.eligibility.rules_loader import InMemoryRuleStore, JsonRuleStore, RuleStore, RulesCache

AS_OF = date(2025, 6, 1)


def _record(rule_id: str, program_id: str = "snap-ky", **overrides) -> dict:
    record = {
        "id": rule_id,
        "program_id": program_id,
        "program_name": program_id.upper(),
        "jurisdiction": "kentucky",
        "conditions": {"all": [{"fact": "state", "operator": "equal", "value": "KY"}]},
        "base_certainty": 0.5,
        "effective_from": "2024-01-01",
    }
    record.update(overrides)
    return record


class CountingStore(RuleStore):
    """Store stub that counts loads."""

    def __init__(self) -> None:
        self.calls = 0

    def load_active_rules(self, jurisdiction, as_of):
        self.calls += 1
        return ()


class TestInMemoryRuleStore:
    def test_invalid_records_rejected(self):
        store = InMemoryRuleStore([
            _record("good"),
            _record("no-conditions", conditions=None),
            _record("bad-date", effective_from="not a date"),
        ])
        assert [r.id for r in store.all_rules()] == ["good"]
        assert store.rejected_rule_ids == ["no-conditions", "bad-date"]

    def test_rejected_ids_per_jurisdiction(self):
        store = InMemoryRuleStore([
            _record("ky-bad", conditions={"all": "not-a-list"}),
            _record("oh-bad", jurisdiction="ohio", conditions={"all": "not-a-list"}),
            _record("nowhere-bad", jurisdiction=None, conditions={"all": "not-a-list"}),
            _record("ky-good"),
        ])
        assert store.rejected_rule_ids_for("kentucky") == ("ky-bad", "nowhere-bad")
        assert store.rejected_rule_ids_for("ohio") == ("oh-bad", "nowhere-bad")

    def test_record_without_id(self):
        record = _record("x")
        del record["id"]
        store = InMemoryRuleStore([record])
        assert store.rejected_rule_ids == ["#0"]

    def test_filters_jurisdiction(self):
        store = InMemoryRuleStore([_record("ky"), _record("oh", jurisdiction="ohio")])
        assert [r.id for r in store.load_active_rules("kentucky", AS_OF)] == ["ky"]

    def test_filters_inactive_and_window(self):
        store = InMemoryRuleStore([
            _record("current"),
            _record("inactive", active=False),
            _record("future", effective_from="2030-01-01"),
            _record("expired", effective_until="2024-12-31"),
        ])
        assert [r.id for r in store.load_active_rules("kentucky", AS_OF)] == ["current"]

    def test_ordering(self):
        store = InMemoryRuleStore([
            _record("snap-b", "snap-ky", base_certainty=0.6),
            _record("medicaid", "medicaid-ky", base_certainty=0.3),
            _record("snap-a", "snap-ky", base_certainty=0.6),
            _record("snap-top", "snap-ky", base_certainty=0.9),
        ])
        ids = [r.id for r in store.load_active_rules("kentucky", AS_OF)]
        assert ids == ["medicaid", "snap-top", "snap-a", "snap-b"]

    def test_snapshot_is_tuple(self):
        store = InMemoryRuleStore([_record("a")])
        assert isinstance(store.load_active_rules("kentucky", AS_OF), tuple)

    def test_bundled_rules_all_valid(self):
        store = InMemoryRuleStore.bundled()
        assert store.rejected_rule_ids == []
        assert len(store.load_active_rules("kentucky", AS_OF)) == 15


class TestJsonRuleStore:
    def test_from_path(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps([_record("a"), _record("b", active="maybe")]), encoding="utf-8")
        store = JsonRuleStore.from_path(path)
        assert [r.id for r in store.all_rules()] == ["a"]
        assert store.rejected_rule_ids == ["b"]

    def test_non_array_rejected(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"rules": []}), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON array"):
            JsonRuleStore.from_path(path)


class TestRulesCache:
    def test_memoizes_per_jurisdiction_and_date(self):
        store = CountingStore()
        cache = RulesCache(store)
        cache.load_active_rules("kentucky", AS_OF)
        cache.load_active_rules("kentucky", AS_OF)
        assert store.calls == 1

        cache.load_active_rules("ohio", AS_OF)
        cache.load_active_rules("kentucky", date(2025, 6, 2))
        assert store.calls == 3

    def test_clear(self):
        store = CountingStore()
        cache = RulesCache(store)
        cache.load_active_rules("kentucky", AS_OF)
        cache.clear()
        cache.load_active_rules("kentucky", AS_OF)
        assert store.calls == 2

    def test_rejected_ids_passed_through(self):
        store = InMemoryRuleStore([_record("bad", conditions={"all": "not-a-list"})])
        cache = RulesCache(store)
        assert cache.rejected_rule_ids("kentucky") == ("bad",)
        assert cache.rejected_rule_ids("ohio") == ()

    def test_store_without_rejects(self):
        assert RulesCache(CountingStore()).rejected_rule_ids("kentucky") == ()

    def test_separate_caches_do_not_share(self):
        store = CountingStore()
        RulesCache(store).load_active_rules("kentucky", AS_OF)
        RulesCache(store).load_active_rules("kentucky", AS_OF)
        assert store.calls == 2
