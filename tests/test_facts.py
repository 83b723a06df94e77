"""Tests for the fact map builder."""

from __future__ import annotations

import pytest

from screener.eligibility.facts import build_fact_map, derive_facts


class TestDeriveFacts:
    def test_veteran_role(self):
        facts = derive_facts({"role": "veteran"})
        assert facts["isVeteran"] is True
        assert facts["isCaregiver"] is False

    def test_caregiver_role(self):
        facts = derive_facts({"role": "caregiver"})
        assert facts["isVeteran"] is False
        assert facts["isCaregiver"] is True

    def test_disability(self):
        assert derive_facts({"hasServiceConnectedDisability": "yes"})["hasDisability"] is True
        assert derive_facts({"hasServiceConnectedDisability": "not-sure"})["hasDisability"] is False

    @pytest.mark.parametrize(
        ("income", "below15", "below25", "below40"),
        [
            ("under-15k", True, True, True),
            ("15k-25k", False, True, True),
            ("25k-40k", False, False, True),
            ("over-40k", False, False, False),
            (None, False, False, False),
        ],
    )
    def test_income_bands(self, income, below15, below25, below40):
        facts = derive_facts({"householdIncome": income})
        assert facts["incomeBelow15K"] is below15
        assert facts["incomeBelow25K"] is below25
        assert facts["incomeBelow40K"] is below40

    def test_list_income_is_ignored(self):
        facts = derive_facts({"householdIncome": ["under-15k"]})
        assert facts["incomeBelow15K"] is False

    def test_age(self):
        assert derive_facts({"ageRange": "65+"})["isOver65"] is True
        assert derive_facts({"ageRange": "55-64"})["isOver65"] is False

    def test_employment(self):
        assert derive_facts({"employmentStatus": "employed-part"})["isEmployed"] is True
        assert derive_facts({"employmentStatus": "retired"})["isEmployed"] is False
        assert derive_facts({})["isEmployed"] is False

    def test_areas_of_need(self):
        facts = derive_facts({"areasOfNeed": ["healthcare", "housing", ""]})
        assert facts["needsHealthcare"] is True
        assert facts["needsHousing"] is True
        assert "needs" not in facts


class TestBuildFactMap:
    def test_blank_answers_dropped(self):
        facts = build_fact_map({"role": "veteran", "state": None})
        assert "state" not in facts
        assert facts["role"] == "veteran"

    def test_lists_are_stringified(self):
        facts = build_fact_map({"areasOfNeed": ["healthcare", 3]})
        assert facts["areasOfNeed"] == ["healthcare", "3"]

    def test_derived_facts_win(self):
        facts = build_fact_map({"role": "veteran", "isVeteran": "no"})
        assert facts["isVeteran"] is True

    def test_answers_not_mutated(self):
        answers = {"role": "veteran", "state": None}
        build_fact_map(answers)
        assert answers == {"role": "veteran", "state": None}
