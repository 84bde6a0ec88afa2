"""Canonical per-document-type field schemas.

Every provider result is reported in one of these shapes. The same tables drive
the normalizer, the LLM prompt and the empty records handed out on no-match.
"""

from dataclasses import dataclass
from typing import Any

from taxdocs.documents.models import DocumentType


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str


RELEVANT_BOXES = "relevantBoxes"

_PAYER_RECIPIENT = (
    FieldSpec("payerName", "Payer name"),
    FieldSpec("payerTIN", "Payer TIN"),
    FieldSpec("payerAddress", "Payer address"),
    FieldSpec("recipientName", "Recipient name"),
    FieldSpec("recipientTIN", "Recipient TIN"),
    FieldSpec("recipientAddress", "Recipient address"),
)

W2_FIELDS = (
    FieldSpec("employerName", "Employer name"),
    FieldSpec("employerEIN", "Employer EIN (XX-XXXXXXX format)"),
    FieldSpec("employerAddress", "Employer address"),
    FieldSpec("employeeName", "Employee name"),
    FieldSpec("employeeSSN", "Employee SSN"),
    FieldSpec("employeeAddress", "Employee address"),
    FieldSpec("wages", "Box 1 - Wages, tips, other compensation"),
    FieldSpec("federalTaxWithheld", "Box 2 - Federal income tax withheld"),
    FieldSpec("socialSecurityWages", "Box 3 - Social security wages"),
    FieldSpec("socialSecurityTaxWithheld", "Box 4 - Social security tax withheld"),
    FieldSpec("medicareWages", "Box 5 - Medicare wages and tips"),
    FieldSpec("medicareTaxWithheld", "Box 6 - Medicare tax withheld"),
    FieldSpec("socialSecurityTips", "Box 7 - Social security tips"),
    FieldSpec("allocatedTips", "Box 8 - Allocated tips"),
    FieldSpec("stateWages", "Box 16 - State wages, tips, etc."),
    FieldSpec("stateTaxWithheld", "Box 17 - State income tax"),
    FieldSpec("localWages", "Box 18 - Local wages, tips, etc."),
    FieldSpec("localTaxWithheld", "Box 19 - Local income tax"),
)

FORM_1099_INT_FIELDS = _PAYER_RECIPIENT + (
    FieldSpec("interestIncome", "Box 1 - Interest income"),
    FieldSpec("earlyWithdrawalPenalty", "Box 2 - Early withdrawal penalty"),
    FieldSpec("interestOnUSavingsBonds", "Box 3 - Interest on U.S. Savings Bonds"),
    FieldSpec("federalTaxWithheld", "Box 4 - Federal income tax withheld"),
    FieldSpec("investmentExpenses", "Box 5 - Investment expenses"),
    FieldSpec("foreignTaxPaid", "Box 6 - Foreign tax paid"),
    FieldSpec("foreignCountry", "Box 7 - Foreign country"),
    FieldSpec("taxExemptInterest", "Box 8 - Tax-exempt interest"),
    FieldSpec("privateActivityBondInterest", "Box 9 - Specified private activity bond interest"),
    FieldSpec("marketDiscount", "Box 10 - Market discount"),
    FieldSpec("bondPremium", "Box 11 - Bond premium"),
    FieldSpec("bondPremiumOnTaxExemptBond", "Box 12 - Bond premium on tax-exempt bond"),
    FieldSpec("stateCode", "Box 13 - State code"),
    FieldSpec("stateTaxWithheld", "Box 14 - State income tax withheld"),
    FieldSpec("stateIdNumber", "Box 15 - State/Payer's state no."),
)

FORM_1099_DIV_FIELDS = _PAYER_RECIPIENT + (
    FieldSpec("ordinaryDividends", "Box 1a - Ordinary dividends"),
    FieldSpec("qualifiedDividends", "Box 1b - Qualified dividends"),
    FieldSpec("totalCapitalGain", "Box 2a - Total capital gain distributions"),
    FieldSpec("unrecaptured1250Gain", "Box 2b - Unrecap. Sec. 1250 gain"),
    FieldSpec("section1202Gain", "Box 2c - Section 1202 gain"),
    FieldSpec("collectiblesGain", "Box 2d - Collectibles (28%) gain"),
    FieldSpec("nondividendDistributions", "Box 3 - Nondividend distributions"),
    FieldSpec("federalTaxWithheld", "Box 4 - Federal income tax withheld"),
    FieldSpec("section199ADividends", "Box 5 - Section 199A dividends"),
    FieldSpec("investmentExpenses", "Box 6 - Investment expenses"),
    FieldSpec("foreignTaxPaid", "Box 7 - Foreign tax paid"),
    FieldSpec("foreignCountry", "Box 8 - Foreign country"),
    FieldSpec("cashLiquidation", "Box 9 - Cash liquidation distributions"),
    FieldSpec("noncashLiquidation", "Box 10 - Noncash liquidation distributions"),
    FieldSpec("stateCode", "Box 11 - State code"),
    FieldSpec("stateTaxWithheld", "Box 12 - State income tax withheld"),
    FieldSpec("stateIdNumber", "Box 13 - State/Payer's state no."),
)

FORM_1099_MISC_FIELDS = _PAYER_RECIPIENT + (
    FieldSpec("rents", "Box 1 - Rents"),
    FieldSpec("royalties", "Box 2 - Royalties"),
    FieldSpec("otherIncome", "Box 3 - Other income"),
    FieldSpec("federalTaxWithheld", "Box 4 - Federal income tax withheld"),
    FieldSpec("fishingBoatProceeds", "Box 5 - Fishing boat proceeds"),
    FieldSpec("medicalHealthPayments", "Box 6 - Medical and health care payments"),
    FieldSpec("nonemployeeCompensation", "Box 7 - Nonemployee compensation"),
    FieldSpec("substitutePayments", "Box 8 - Substitute payments in lieu of dividends"),
    FieldSpec("cropInsuranceProceeds", "Box 9 - Crop insurance proceeds"),
    FieldSpec("grossProceeds", "Box 10 - Gross proceeds paid to an attorney"),
    FieldSpec("section409ADeferrals", "Box 11 - Section 409A deferrals"),
    FieldSpec("section409AIncome", "Box 12 - Section 409A income"),
    FieldSpec("excessGoldenParachute", "Box 13 - Excess golden parachute payments"),
    FieldSpec("nonqualifiedDeferredCompensation", "Box 14 - Nonqualified deferred compensation"),
    FieldSpec("stateCode", "Box 15 - State code"),
    FieldSpec("stateTaxWithheld", "Box 16 - State income tax withheld"),
    FieldSpec("stateIdNumber", "Box 17 - State/Payer's state no."),
)

FORM_1099_NEC_FIELDS = _PAYER_RECIPIENT + (
    FieldSpec("nonemployeeCompensation", "Box 1 - Nonemployee compensation"),
    FieldSpec("federalTaxWithheld", "Box 4 - Federal income tax withheld"),
    FieldSpec("stateCode", "Box 5 - State code"),
    FieldSpec("stateTaxWithheld", "Box 6 - State income tax withheld"),
    FieldSpec("stateIdNumber", "Box 7 - State/Payer's state no."),
)

FORM_1099_R_FIELDS = _PAYER_RECIPIENT + (
    FieldSpec("grossDistribution", "Box 1 - Gross distribution"),
    FieldSpec("taxableAmount", "Box 2a - Taxable amount"),
    FieldSpec("taxableAmountNotDetermined", "Box 2b - Taxable amount not determined"),
    FieldSpec("capitalGain", "Box 3 - Capital gain (included in box 2a)"),
    FieldSpec("federalTaxWithheld", "Box 4 - Federal income tax withheld"),
    FieldSpec("employeeContributions", "Box 5 - Employee contributions/Designated Roth contributions"),
    FieldSpec("netUnrealizedAppreciation", "Box 6 - Net unrealized appreciation in employer's securities"),
    FieldSpec("distributionCode", "Box 7 - Distribution code(s)"),
    FieldSpec("otherAmount", "Box 8 - Other"),
    FieldSpec("totalEmployeeContributions", "Box 9b - Total employee contributions"),
    FieldSpec("stateTaxWithheld", "Box 14 - State tax withheld"),
    FieldSpec("stateIdNumber", "Box 15 - State/Payer's state no."),
    FieldSpec("stateDistribution", "Box 16 - State distribution"),
)

FORM_1099_G_FIELDS = _PAYER_RECIPIENT + (
    FieldSpec("unemploymentCompensation", "Box 1 - Unemployment compensation"),
    FieldSpec("stateLocalTaxRefunds", "Box 2 - State or local income tax refunds, credits, or offsets"),
    FieldSpec("refundTaxYear", "Box 3 - Box 2 amount is for tax year"),
    FieldSpec("federalTaxWithheld", "Box 4 - Federal income tax withheld"),
    FieldSpec("rtaaPayments", "Box 5 - RTAA payments"),
    FieldSpec("taxableGrants", "Box 6 - Taxable grants"),
    FieldSpec("agricultureSubsidies", "Box 7 - Agriculture payments"),
    FieldSpec("marketGain", "Box 9 - Market gain"),
    FieldSpec("stateCode", "Box 10a - State"),
    FieldSpec("stateIdNumber", "Box 10b - State identification no."),
    FieldSpec("stateTaxWithheld", "Box 11 - State income tax withheld"),
)

GENERIC_FIELDS = (
    FieldSpec("payerName", "Payer/Employer name if applicable"),
    FieldSpec("payerTIN", "Payer/Employer TIN if applicable"),
    FieldSpec("recipientName", "Recipient/Employee name if applicable"),
    FieldSpec("recipientTIN", "Recipient/Employee TIN if applicable"),
    FieldSpec("incomeAmount", "Any income amounts"),
    FieldSpec("taxWithheld", "Any tax withheld amounts"),
    FieldSpec(RELEVANT_BOXES, "Any other relevant tax information"),
)

FIELD_SCHEMAS: dict[DocumentType, tuple[FieldSpec, ...]] = {
    DocumentType.W2: W2_FIELDS,
    DocumentType.FORM_1099_INT: FORM_1099_INT_FIELDS,
    DocumentType.FORM_1099_DIV: FORM_1099_DIV_FIELDS,
    DocumentType.FORM_1099_MISC: FORM_1099_MISC_FIELDS,
    DocumentType.FORM_1099_NEC: FORM_1099_NEC_FIELDS,
    DocumentType.FORM_1099_R: FORM_1099_R_FIELDS,
    DocumentType.FORM_1099_G: FORM_1099_G_FIELDS,
    DocumentType.OTHER_TAX_DOCUMENT: GENERIC_FIELDS,
    DocumentType.UNKNOWN: GENERIC_FIELDS,
}

# Entity type codes emitted by the specialised W-2 processor.
ENTITY_FIELD_MAPS: dict[DocumentType, dict[str, str]] = {
    DocumentType.W2: {
        "employee_name": "employeeName",
        "employee_ssn": "employeeSSN",
        "employer_name": "employerName",
        "employer_ein": "employerEIN",
        "wages_tips_other_compensation": "wages",
        "federal_income_tax_withheld": "federalTaxWithheld",
        "social_security_wages": "socialSecurityWages",
        "social_security_tax_withheld": "socialSecurityTaxWithheld",
        "medicare_wages_and_tips": "medicareWages",
        "medicare_tax_withheld": "medicareTaxWithheld",
    },
}

# Ordered (keywords, field) rules tried on normalized free-form labels before
# substring matching. Keywords are in normalized form too. More specific rules
# come first: "Medicare wages and tips" must not land on wages.
LABEL_KEYWORD_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("medicare", "wages"), "medicareWages"),
    (("medicare", "tax"), "medicareTaxWithheld"),
    (("socialsecurity", "wages"), "socialSecurityWages"),
    (("socialsecurity", "tips"), "socialSecurityTips"),
    (("socialsecurity", "tax"), "socialSecurityTaxWithheld"),
    (("allocated", "tips"), "allocatedTips"),
    (("state", "wages"), "stateWages"),
    (("local", "wages"), "localWages"),
    (("wages", "tips"), "wages"),
    (("federal", "tax"), "federalTaxWithheld"),
    (("state", "tax"), "stateTaxWithheld"),
    (("local", "tax"), "localTaxWithheld"),
)


def schema_for(document_type: DocumentType) -> tuple[FieldSpec, ...]:
    return FIELD_SCHEMAS.get(document_type, GENERIC_FIELDS)


def field_names(document_type: DocumentType) -> tuple[str, ...]:
    return tuple(spec.name for spec in schema_for(document_type))


def empty_value(field_name: str) -> Any:
    return {} if field_name == RELEVANT_BOXES else ""


def empty_record(document_type: DocumentType) -> dict[str, Any]:
    """All schema fields for the type, in declaration order, with empty values."""
    return {name: empty_value(name) for name in field_names(document_type)}
