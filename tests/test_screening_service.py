"""Tests for the screening service (end-to-end over the bundled Kentucky rules)."""

from __future__ import annotations

from datetime import date

import pytest

from screener.content.documentation import DocumentationCatalog
from screener.eligibility.rules_loader import InMemoryRuleStore, RulesCache
from screener.schemas.eligibility import ConfidenceLevel
from screener.schemas.interactions import InteractionSeverity
from screener.screening.service import ScreeningInputError, jurisdiction_for_state, run_screening

AS_OF = date(2025, 6, 1)


@pytest.fixture()
def rules_cache():
    return RulesCache(InMemoryRuleStore.bundled())


def _answers(**overrides):
    answers = {
        "role": "veteran",
        "state": "KY",
        "ageRange": "65+",
        "householdIncome": "under-15k",
        "hasServiceConnectedDisability": "yes",
        "employmentStatus": "retired",
        "areasOfNeed": ["healthcare"],
    }
    answers.update(overrides)
    return answers


def _store_record(rule_id: str, conditions, **overrides) -> dict:
    record = {
        "id": rule_id,
        "program_id": "va-healthcare",
        "program_name": "VA Healthcare",
        "jurisdiction": "kentucky",
        "conditions": conditions,
        "base_certainty": 0.9,
        "effective_from": "2024-01-01",
    }
    record.update(overrides)
    return record


class TestInputValidation:
    def test_missing_role(self, rules_cache):
        with pytest.raises(ScreeningInputError, match="veteran or caregiver"):
            run_screening(_answers(role=None), rules_cache=rules_cache, as_of=AS_OF)

    def test_missing_state(self, rules_cache):
        with pytest.raises(ScreeningInputError, match="state"):
            run_screening(_answers(state=""), rules_cache=rules_cache, as_of=AS_OF)

    def test_input_error_is_value_error(self):
        assert issubclass(ScreeningInputError, ValueError)


class TestJurisdiction:
    def test_kentucky(self):
        assert jurisdiction_for_state("ky") == "kentucky"

    def test_unknown_state_falls_back(self):
        assert jurisdiction_for_state("OH") == "kentucky"


class TestLowIncomeVeteran:
    """65+ retired veteran, service-connected disability, income under $15k."""

    @pytest.fixture()
    def result(self, rules_cache):
        return run_screening(_answers(), rules_cache=rules_cache, as_of=AS_OF)

    def test_all_programs_matched_once(self, result):
        ids = [m.program_id for m in result.matches]
        assert sorted(ids) == sorted({
            "va-disability-compensation",
            "va-healthcare",
            "medicaid-ky",
            "snap-ky",
            "ssi",
            "ssdi",
            "ky-hcb-waiver",
            "va-pension",
        })
        assert len(ids) == len(set(ids))

    def test_all_high_and_name_ordered(self, result):
        assert {m.confidence_level for m in result.matches} == {ConfidenceLevel.HIGH}
        names = [m.program_name.casefold() for m in result.matches]
        assert names == sorted(names)

    def test_best_rule_kept_with_supporting_ids(self, result):
        ssi = next(m for m in result.matches if m.program_id == "ssi")
        assert ssi.confidence_score == 0.9
        assert ssi.matched_rule_ids == ["ky-ssi-high", "ky-ssi-medium"]

    def test_description_and_next_steps_from_best_rule(self, result):
        comp = next(m for m in result.matches if m.program_id == "va-disability-compensation")
        assert comp.matched_rule_ids == ["ky-va-disability-compensation-high"]
        assert comp.description.startswith("Monthly tax-free payment")
        assert comp.next_steps[0] == "File VA Form 21-526EZ online at VA.gov"

        ssi = next(m for m in result.matches if m.program_id == "ssi")
        assert ssi.next_steps == [
            "Call Social Security at 1-800-772-1213",
            "Schedule an appointment at your local SSA office",
        ]

    def test_documents_attached(self, result):
        snap = next(m for m in result.matches if m.program_id == "snap-ky")
        assert "Bank statements" in snap.required_documents

    def test_interactions(self, result):
        assert [i.interaction_rule_id for i in result.interactions] == [
            "ssi-medicaid-eligibility-cliff",
            "va-disability-ssi-offset",
            "va-pension-ssi-interaction",
        ]
        assert result.interactions[0].severity == InteractionSeverity.BLOCKING

    def test_result_metadata(self, result):
        assert result.jurisdiction == "kentucky"
        assert result.screened_on == AS_OF
        assert result.failed_rule_ids == []


class TestMidIncomeCaregiver:
    @pytest.fixture()
    def result(self, rules_cache):
        answers = _answers(
            role="caregiver",
            ageRange="35-54",
            householdIncome="25k-40k",
            hasServiceConnectedDisability="no",
            employmentStatus="employed-full",
            areasOfNeed=[],
        )
        return run_screening(answers, rules_cache=rules_cache, as_of=AS_OF)

    def test_medium_matches(self, result):
        assert [m.program_id for m in result.matches] == ["medicaid-ky", "snap-ky"]
        assert all(m.confidence_level == ConfidenceLevel.MEDIUM for m in result.matches)
        assert all(m.confidence_label == "Possibly Eligible" for m in result.matches)

    def test_income_cliff_warning(self, result):
        assert [i.interaction_rule_id for i in result.interactions] == ["snap-medicaid-income-cliff"]


class TestEdgeCases:
    def test_before_rules_take_effect(self, rules_cache):
        result = run_screening(_answers(), rules_cache=rules_cache, as_of=date(2023, 12, 31))
        assert result.matches == []
        assert result.interactions == []

    def test_other_state_uses_default_rules(self, rules_cache):
        result = run_screening(_answers(state="OH"), rules_cache=rules_cache, as_of=AS_OF)
        ids = {m.program_id for m in result.matches}
        assert "va-healthcare" in ids
        assert "medicaid-ky" not in ids

    def test_empty_catalog_is_respected(self, rules_cache):
        result = run_screening(_answers(), rules_cache=rules_cache, catalog=DocumentationCatalog([]), as_of=AS_OF)
        assert all(m.required_documents == [] for m in result.matches)

    def test_broken_rule_reported(self):
        store = InMemoryRuleStore([
            _store_record("broken", {"all": [{"fact": "role", "operator": "like", "value": "vet%"}]}),
        ])
        result = run_screening(_answers(), rules_cache=RulesCache(store), as_of=AS_OF)
        assert result.failed_rule_ids == ["broken"]
        assert result.matches == []

    def test_structurally_broken_rule_reported(self):
        """A record rejected at load still shows up as a failed rule."""
        store = InMemoryRuleStore([
            _store_record("good", {"all": [{"fact": "role", "operator": "equal", "value": "veteran"}]}),
            _store_record("broken", {"all": "not-a-list"}),
            _store_record("other-state", {"all": "not-a-list"}, jurisdiction="ohio"),
            _store_record("bad-operator", {"all": [{"fact": "role", "operator": "like", "value": "vet%"}]}),
        ])
        result = run_screening(
            {"role": "veteran", "state": "KY"},
            rules_cache=RulesCache(store),
            as_of=AS_OF,
        )
        assert result.failed_rule_ids == ["broken", "bad-operator"]
        assert [m.program_id for m in result.matches] == ["va-healthcare"]