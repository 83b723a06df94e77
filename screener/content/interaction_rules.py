"""Known interactions between Kentucky veteran benefit programs.

Checked after eligibility screening completes, to warn people before they
start applying. Rules are listed in the order warnings are returned.
"""

from __future__ import annotations

from screener.schemas.interactions import InteractionRule, InteractionSeverity

BENEFIT_INTERACTION_RULES: list[InteractionRule] = [
    # SSI counts as income for SNAP; at mid-range incomes SSI can push the
    # household over 130% FPL.
    InteractionRule(
        id="ssi-snap-income-interaction",
        program_ids=["ssi", "snap-ky"],
        severity=InteractionSeverity.REDUCING,
        affected_programs=["snap-ky"],
        title="SSI May Affect Your SNAP Benefits",
        description=(
            "SSI payments count as income for SNAP (food stamps) eligibility. If SSI pushes your "
            "total income above 130% of the federal poverty line, your SNAP benefits may decrease "
            "or end. SNAP typically decreases by about $1 for every $3 in additional income."
        ),
        recommendation=(
            "Before applying for SSI, contact your local DCBS office at 1-855-459-6328 or speak "
            "with a benefits counselor to understand the total impact on your household."
        ),
        learn_more_url="https://www.ssa.gov/ssi/text-other-ussi.htm",
        conditions={"all": [{"fact": "householdIncome", "operator": "in", "value": ["15k-25k", "25k-40k"]}]},
    ),
    # SSI recipients in Kentucky qualify for Medicaid automatically; losing
    # SSI can end Medicaid at the same time.
    InteractionRule(
        id="ssi-medicaid-eligibility-cliff",
        program_ids=["ssi", "medicaid-ky"],
        severity=InteractionSeverity.BLOCKING,
        affected_programs=["medicaid-ky"],
        title="SSI and Medicaid Are Linked in Kentucky",
        description=(
            "In Kentucky, SSI recipients automatically qualify for Medicaid. However, if your income "
            "increases and you lose SSI eligibility, you may also lose Medicaid coverage. A small "
            "income increase can result in losing healthcare coverage."
        ),
        recommendation=(
            "Talk to a benefits counselor about Section 1619(b) protections, which may let you keep "
            "Medicaid even if SSI payments stop due to earnings."
        ),
        learn_more_url="https://www.ssa.gov/disabilityresearch/wi/1619b.htm",
    ),
    # VA compensation is unearned income for SSI after the $20/month exclusion.
    InteractionRule(
        id="va-disability-ssi-offset",
        program_ids=["va-disability-compensation", "ssi"],
        severity=InteractionSeverity.REDUCING,
        affected_programs=["ssi"],
        title="VA Disability Compensation Reduces SSI Payments",
        description=(
            "VA disability compensation is counted as unearned income for SSI. Each dollar of VA "
            "compensation reduces your SSI payment dollar-for-dollar after the first $20/month "
            "exclusion. If your VA compensation is high enough, you may not qualify for SSI at all."
        ),
        recommendation=(
            "Calculate your expected SSI amount after the VA offset. A Veterans Service Organization "
            "can help you understand the combined benefit amount."
        ),
        learn_more_url="https://www.ssa.gov/ssi/text-income-ussi.htm",
    ),
    InteractionRule(
        id="va-pension-ssi-interaction",
        program_ids=["va-pension", "ssi"],
        severity=InteractionSeverity.REDUCING,
        affected_programs=["ssi", "va-pension"],
        title="You Generally Cannot Receive Both VA Pension and SSI",
        description=(
            "VA pension payments count as income for SSI purposes. In most cases, VA pension and SSI "
            "combined cannot exceed the SSI federal benefit rate. Receiving one typically reduces or "
            "eliminates the other."
        ),
        recommendation=(
            "Contact your local VA regional office or a Veterans Service Organization to calculate "
            "which program provides a higher benefit for your situation."
        ),
        learn_more_url="https://www.va.gov/pension/",
    ),
    # SNAP (130% FPL) and Medicaid (138% FPL) limits differ.
    InteractionRule(
        id="snap-medicaid-income-cliff",
        program_ids=["snap-ky", "medicaid-ky"],
        severity=InteractionSeverity.INFORMATIONAL,
        affected_programs=["snap-ky", "medicaid-ky"],
        title="Monitor Income Thresholds for SNAP and Medicaid",
        description=(
            "SNAP and Medicaid have different income limits. SNAP gross income limit is 130% of the "
            "federal poverty line, while Medicaid in Kentucky covers up to 138% FPL. A small income "
            "increase could push you over the SNAP limit first, then potentially the Medicaid limit."
        ),
        recommendation=(
            "Keep track of your total household income. If your income changes, contact your local "
            "DCBS office to understand how it affects both programs."
        ),
        conditions={"all": [{"fact": "householdIncome", "operator": "in", "value": ["25k-40k"]}]},
    ),
]


def load_interaction_rules() -> list[InteractionRule]:
    """Return the bundled interaction rules (a fresh list per call)."""
    return list(BENEFIT_INTERACTION_RULES)
