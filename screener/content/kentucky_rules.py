"""Eligibility rule records for Kentucky programs.

Stored in the same shape the rule store persists: json-rules-engine style
conditions and a coarse ``confidence_level`` that the schema converts into a
base certainty. Several programs have a stronger and a weaker rule; the
scorer keeps the best one.
"""

from __future__ import annotations

from typing import Any

_JURISDICTION = "kentucky"
_EFFECTIVE_FROM = "2024-01-01"

_LOW_INCOME = ["under-15k", "15k-25k"]
_NOT_WORKING = ["no-seeking", "no-not-seeking", "retired"]


def _rule(
    rule_id: str,
    program_id: str,
    program_name: str,
    confidence_level: str,
    conditions: dict[str, Any],
    *,
    description: str,
    next_steps: list[str],
) -> dict[str, Any]:
    return {
        "id": rule_id,
        "program_id": program_id,
        "program_name": program_name,
        "jurisdiction": _JURISDICTION,
        "confidence_level": confidence_level,
        "conditions": conditions,
        "effective_from": _EFFECTIVE_FROM,
        "effective_until": None,
        "active": True,
        "description": description,
        "next_steps": next_steps,
    }


def _eq(fact: str, value: Any) -> dict[str, Any]:
    return {"fact": fact, "operator": "equal", "value": value}


def _in(fact: str, values: list[str]) -> dict[str, Any]:
    return {"fact": fact, "operator": "in", "value": values}


_VA_DISABILITY = "VA Disability Compensation"
_VA_DISABILITY_DESC = (
    "Monthly tax-free payment for injuries or illnesses caused or made worse by your military service."
)
_MEDICAID = "Medicaid (Kentucky)"
_MEDICAID_DESC = (
    "Health coverage for people with low income in Kentucky. "
    "Covers doctor visits, hospital stays, and prescriptions."
)
_SNAP = "SNAP (Food Stamps, Kentucky)"
_SNAP_DESC = "Monthly money on an EBT card to buy groceries."
_SSI = "SSI (Supplemental Security Income)"
_SSI_DESC = "Monthly payments for people with disabilities and very limited income and resources."
_SSDI = "SSDI (Social Security Disability Insurance)"
_SSDI_DESC = "Monthly payments for people who can no longer work because of a disability."
_HCB = "Kentucky HCB Waiver (Home and Community Based Services)"
_HCB_DESC = "In-home services that help older adults and people with disabilities stay at home."
_VA_PENSION = "Veterans Pension (Aid and Attendance)"
_VA_PENSION_DESC = "Monthly payments for wartime veterans with limited income who are 65+ or disabled."


KENTUCKY_RULE_RECORDS: list[dict[str, Any]] = [
    _rule(
        "ky-va-disability-compensation-high",
        "va-disability-compensation",
        _VA_DISABILITY,
        "high",
        {"all": [_eq("role", "veteran"), _eq("hasServiceConnectedDisability", "yes")]},
        description=_VA_DISABILITY_DESC,
        next_steps=[
            "File VA Form 21-526EZ online at VA.gov",
            "Gather your medical records",
            "Contact a VSO for free help with your claim",
        ],
    ),
    _rule(
        "ky-va-disability-compensation-medium",
        "va-disability-compensation",
        _VA_DISABILITY,
        "medium",
        {"all": [_eq("role", "veteran"), _eq("hasServiceConnectedDisability", "not-sure")]},
        description=_VA_DISABILITY_DESC,
        next_steps=[
            "Talk to your doctor about possible service-connected conditions",
            "Contact a VSO to see if your conditions may qualify",
        ],
    ),
    _rule(
        "ky-va-healthcare-high",
        "va-healthcare",
        "VA Healthcare",
        "high",
        {"all": [_eq("role", "veteran")]},
        description=(
            "Full healthcare coverage through the VA system, including doctor visits, "
            "prescriptions, and mental health care."
        ),
        next_steps=["Apply online at VA.gov/health-care", "Find your nearest VA medical center"],
    ),
    _rule(
        "ky-medicaid-high",
        "medicaid-ky",
        _MEDICAID,
        "high",
        {"all": [_eq("state", "KY"), _in("householdIncome", _LOW_INCOME)]},
        description=_MEDICAID_DESC,
        next_steps=["Apply at kynect.ky.gov", "Call 1-855-459-6328 for help"],
    ),
    _rule(
        "ky-medicaid-medium",
        "medicaid-ky",
        _MEDICAID,
        "medium",
        {"all": [_eq("state", "KY"), _eq("householdIncome", "25k-40k")]},
        description=_MEDICAID_DESC,
        next_steps=["Check your household income against the current limits at kynect.ky.gov"],
    ),
    _rule(
        "ky-snap-high",
        "snap-ky",
        _SNAP,
        "high",
        {"all": [_eq("state", "KY"), _in("householdIncome", _LOW_INCOME)]},
        description=_SNAP_DESC,
        next_steps=["Apply at kynect.ky.gov", "Visit your local DCBS office"],
    ),
    _rule(
        "ky-snap-medium",
        "snap-ky",
        _SNAP,
        "medium",
        {"all": [_eq("state", "KY"), _eq("householdIncome", "25k-40k")]},
        description=_SNAP_DESC,
        next_steps=["Check the SNAP income limits for your household size"],
    ),
    _rule(
        "ky-ssi-high",
        "ssi",
        _SSI,
        "high",
        {
            "all": [
                _in("hasServiceConnectedDisability", ["yes", "not-sure"]),
                _eq("householdIncome", "under-15k"),
                _in("employmentStatus", _NOT_WORKING),
            ],
        },
        description=_SSI_DESC,
        next_steps=["Call Social Security at 1-800-772-1213", "Schedule an appointment at your local SSA office"],
    ),
    _rule(
        "ky-ssi-medium",
        "ssi",
        _SSI,
        "medium",
        {
            "all": [
                _in("hasServiceConnectedDisability", ["yes", "not-sure"]),
                _in("householdIncome", _LOW_INCOME),
            ],
        },
        description=_SSI_DESC,
        next_steps=["Ask Social Security whether your income and resources are under the SSI limits"],
    ),
    _rule(
        "ky-ssdi-high",
        "ssdi",
        _SSDI,
        "high",
        {"all": [_eq("hasServiceConnectedDisability", "yes"), _in("employmentStatus", _NOT_WORKING)]},
        description=_SSDI_DESC,
        next_steps=["Apply online at ssa.gov/disability", "Gather your medical records and work history"],
    ),
    _rule(
        "ky-ssdi-medium",
        "ssdi",
        _SSDI,
        "medium",
        {"all": [_eq("hasServiceConnectedDisability", "not-sure")]},
        description=_SSDI_DESC,
        next_steps=["Talk to your doctor about whether your condition prevents you from working"],
    ),
    _rule(
        "ky-hcb-waiver-high",
        "ky-hcb-waiver",
        _HCB,
        "high",
        {
            "all": [
                _eq("state", "KY"),
                _eq("ageRange", "65+"),
                {"fact": "areasOfNeed", "operator": "contains", "value": "healthcare"},
            ],
        },
        description=_HCB_DESC,
        next_steps=["Contact your local Area Agency on Aging", "Request a Level of Care assessment"],
    ),
    _rule(
        "ky-hcb-waiver-medium",
        "ky-hcb-waiver",
        _HCB,
        "medium",
        {"all": [_eq("state", "KY"), _in("hasServiceConnectedDisability", ["yes", "not-sure"])]},
        description=_HCB_DESC,
        next_steps=["Ask your doctor whether you need help with daily activities at home"],
    ),
    _rule(
        "ky-va-pension-high",
        "va-pension",
        _VA_PENSION,
        "high",
        {"all": [_eq("role", "veteran"), _eq("ageRange", "65+"), _in("householdIncome", _LOW_INCOME)]},
        description=_VA_PENSION_DESC,
        next_steps=["File VA Form 21P-527EZ", "Contact a VSO for help with the net worth worksheet"],
    ),
    _rule(
        "ky-va-pension-medium",
        "va-pension",
        _VA_PENSION,
        "medium",
        {"all": [_eq("role", "veteran"), _in("householdIncome", [*_LOW_INCOME, "25k-40k"])]},
        description=_VA_PENSION_DESC,
        next_steps=["Check whether you served during a wartime period"],
    ),
]
