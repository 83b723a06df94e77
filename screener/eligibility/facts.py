"""Fact map builder — flattens screening answers into engine facts.

Adds derived boolean facts so rule conditions can say ``isVeteran`` instead of
``role == "veteran"``. Answers left blank (None) are dropped: an absent fact
never matches.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from screener.schemas.conditions import FactValue

_BELOW_15K = {"under-15k"}
_BELOW_25K = _BELOW_15K | {"15k-25k"}
_BELOW_40K = _BELOW_25K | {"25k-40k"}


def derive_facts(answers: Mapping[str, Any]) -> dict[str, FactValue]:
    """Compute derived boolean facts from raw screening answers."""
    derived: dict[str, FactValue] = {}

    # Role
    derived["isVeteran"] = answers.get("role") == "veteran"
    derived["isCaregiver"] = answers.get("role") == "caregiver"

    # Disability
    derived["hasDisability"] = answers.get("hasServiceConnectedDisability") == "yes"

    # Income bands
    income = answers.get("householdIncome")
    if not isinstance(income, str):
        income = None
    derived["incomeBelow15K"] = income in _BELOW_15K
    derived["incomeBelow25K"] = income in _BELOW_25K
    derived["incomeBelow40K"] = income in _BELOW_40K

    # Age
    derived["isOver65"] = answers.get("ageRange") == "65+"

    # Employment
    employment = answers.get("employmentStatus")
    derived["isEmployed"] = isinstance(employment, str) and employment.startswith("employed")

    # Areas of need → needsHealthcare, needsHousing, ...
    areas = answers.get("areasOfNeed")
    if isinstance(areas, list | tuple):
        for area in areas:
            if isinstance(area, str) and area:
                derived[f"needs{area[0].upper()}{area[1:]}"] = True

    return derived


def build_fact_map(answers: Mapping[str, Any]) -> dict[str, FactValue]:
    """Raw answers (minus blanks) merged with derived facts.

    Derived facts win over raw answers with the same name.
    """
    facts: dict[str, FactValue] = {}
    for name, value in answers.items():
        if value is None:
            continue
        facts[name] = [str(item) for item in value] if isinstance(value, list | tuple) else value
    facts.update(derive_facts(answers))
    return facts
