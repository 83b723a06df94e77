"""Documentation checklists for benefit program applications.

Kentucky-focused programs matching the bundled screening rules. Each document
is flagged required or recommended; the confidence scorer splits on that flag.
"""

from __future__ import annotations

from collections.abc import Iterable

from screener.eligibility.scoring import DocumentationSource
from screener.schemas.eligibility import ChecklistDocument, DocumentationChecklist

_DD214 = ChecklistDocument(
    name="DD Form 214",
    description="Certificate of Release or Discharge from Active Duty",
    how_to_obtain="Request from the National Archives: https://www.archives.gov/veterans/military-service-records",
)
_PROOF_OF_IDENTITY = ChecklistDocument(
    name="Proof of identity",
    description="Driver's license, state ID, or passport",
    how_to_obtain="Kentucky DMV for driver's license/ID: https://drive.ky.gov/",
)
_PROOF_OF_INCOME = ChecklistDocument(
    name="Proof of income",
    description="Recent pay stubs, tax returns, Social Security award letter, or unemployment documents",
    how_to_obtain="From employer, IRS, Social Security, or state unemployment.",
)
_KY_RESIDENCY = ChecklistDocument(
    name="Proof of Kentucky residency",
    description="Utility bill, lease agreement, or mortgage statement",
    how_to_obtain="From utility company, landlord, or mortgage lender.",
)


DOCUMENTATION_CHECKLISTS: list[DocumentationChecklist] = [
    DocumentationChecklist(
        program_id="va-disability-compensation",
        program_name="VA Disability Compensation",
        description="Monthly tax-free payment for disabilities connected to your military service.",
        documents=[
            _DD214,
            ChecklistDocument(
                name="VA Form 21-526EZ",
                description="Application for Disability Compensation",
                how_to_obtain="File online at https://www.va.gov/disability/how-to-file-claim/",
            ),
            ChecklistDocument(
                name="Medical records",
                description="Records documenting your condition and its connection to service",
                how_to_obtain="Request from your healthcare providers (VA or private).",
            ),
            ChecklistDocument(
                name="Buddy statements",
                description="Statements from fellow service members who witnessed your injury or condition",
                required=False,
                how_to_obtain="Ask fellow veterans to write a statement describing what they witnessed.",
            ),
            ChecklistDocument(
                name="Service treatment records",
                description="Medical records from your time in service",
                required=False,
                how_to_obtain="Request from the National Archives if not already in your possession.",
            ),
        ],
        tips=[
            "File your claim as soon as possible. Benefits are effective from the date you file.",
            "You can file for multiple conditions in one claim.",
            "Consider working with an accredited VA representative or VSO.",
        ],
    ),
    DocumentationChecklist(
        program_id="va-healthcare",
        program_name="VA Healthcare (VA Medical Benefits)",
        description="Comprehensive healthcare coverage through the VA healthcare system.",
        documents=[
            _DD214,
            ChecklistDocument(
                name="VA Form 10-10EZ",
                description="Application for Health Benefits",
                how_to_obtain="Apply online at https://www.va.gov/health-care/apply/application/",
            ),
            ChecklistDocument(
                name="Proof of income",
                description="Tax returns, W-2s, or Social Security statements for household income",
                how_to_obtain="From IRS (tax returns), employer (W-2s), or Social Security Administration.",
            ),
            ChecklistDocument(
                name="Insurance information",
                description="Details of any current health insurance coverage (Medicare, Medicaid, private)",
                required=False,
                how_to_obtain="Insurance card or policy documents from your insurer.",
            ),
        ],
        tips=[
            "VA healthcare is free for service-connected disabilities.",
            "Enroll even if you have other insurance - VA can serve as secondary coverage.",
        ],
    ),
    DocumentationChecklist(
        program_id="medicaid-ky",
        program_name="Medicaid (Kentucky)",
        description="Health coverage for low-income individuals and families in Kentucky.",
        documents=[
            _PROOF_OF_IDENTITY,
            _PROOF_OF_INCOME,
            _KY_RESIDENCY,
            ChecklistDocument(name="Social Security card", description="For every household member applying"),
            ChecklistDocument(
                name="Immigration documents",
                description="Only for household members who are not U.S. citizens",
                required=False,
            ),
        ],
        tips=["Apply online at kynect.ky.gov or call 1-855-459-6328."],
    ),
    DocumentationChecklist(
        program_id="snap-ky",
        program_name="SNAP (Food Stamps, Kentucky)",
        description="Monthly food assistance for low-income households.",
        documents=[
            _PROOF_OF_IDENTITY,
            _PROOF_OF_INCOME,
            _KY_RESIDENCY,
            ChecklistDocument(name="Social Security numbers", description="For everyone in the household"),
            ChecklistDocument(name="Bank statements", description="Recent statements for all accounts"),
            ChecklistDocument(name="Rent/mortgage statement", required=False),
            ChecklistDocument(name="Utility bills", required=False),
        ],
        tips=["Recertification required every 6-12 months depending on circumstances."],
    ),
    DocumentationChecklist(
        program_id="ssi",
        program_name="SSI (Supplemental Security Income)",
        description="Monthly payments for people with limited income who are disabled or 65 and older.",
        documents=[
            ChecklistDocument(name="Social Security card"),
            ChecklistDocument(name="Birth certificate or proof of age"),
            ChecklistDocument(name="Medical records", description="Records documenting your disability"),
            ChecklistDocument(name="Work history"),
            ChecklistDocument(name="Bank account information"),
            ChecklistDocument(name="Proof of living arrangements", required=False),
        ],
    ),
    DocumentationChecklist(
        program_id="ssdi",
        program_name="SSDI (Social Security Disability Insurance)",
        description="Monthly payments for people who worked and paid Social Security taxes and became disabled.",
        documents=[
            ChecklistDocument(name="Social Security card"),
            ChecklistDocument(name="Medical records", description="Records documenting your disability"),
            ChecklistDocument(name="Work history and earnings"),
            _DD214.model_copy(update={"required": False}),
            ChecklistDocument(name="Tax returns", required=False),
            ChecklistDocument(name="Workers compensation documentation", required=False),
        ],
    ),
    DocumentationChecklist(
        program_id="ky-hcb-waiver",
        program_name="Kentucky HCB Waiver (Home and Community Based Services)",
        description="Services that help older adults and people with disabilities stay at home.",
        documents=[
            ChecklistDocument(name="Medicaid eligibility documentation"),
            ChecklistDocument(name="Level of Care assessment"),
            ChecklistDocument(name="Physician documentation"),
            _KY_RESIDENCY,
            ChecklistDocument(name="Functional assessment", required=False),
        ],
    ),
    DocumentationChecklist(
        program_id="va-pension",
        program_name="Veterans Pension (Aid and Attendance)",
        description="Monthly payments for wartime veterans with limited income.",
        documents=[
            _DD214,
            ChecklistDocument(name="VA Form 21P-527EZ", description="Application for Veterans Pension"),
            ChecklistDocument(name="Income documentation"),
            ChecklistDocument(name="Net worth statement"),
            ChecklistDocument(name="Medical records", required=False),
            ChecklistDocument(name="Marriage certificate", required=False),
        ],
    ),
]


class DocumentationCatalog(DocumentationSource):
    """Program id → checklist lookup used to enrich program matches."""

    def __init__(self, checklists: Iterable[DocumentationChecklist] = ()) -> None:
        self._by_program: dict[str, DocumentationChecklist] = {}
        for checklist in checklists:
            self._by_program[checklist.program_id] = checklist

    def get_documentation(self, program_id: str) -> DocumentationChecklist | None:
        """Return the checklist for a program, or None if it has none yet."""
        return self._by_program.get(program_id)


def default_catalog() -> DocumentationCatalog:
    """Catalog built from the bundled Kentucky checklists."""
    return DocumentationCatalog(DOCUMENTATION_CHECKLISTS)
