from dataclasses import dataclass, field
from enum import Enum


class FilingStatus(str, Enum):
    SINGLE = "SINGLE"
    MARRIED_FILING_JOINTLY = "MARRIED_FILING_JOINTLY"
    MARRIED_FILING_SEPARATELY = "MARRIED_FILING_SEPARATELY"
    HEAD_OF_HOUSEHOLD = "HEAD_OF_HOUSEHOLD"
    QUALIFYING_SURVIVING_SPOUSE = "QUALIFYING_SURVIVING_SPOUSE"


class DeductionType(str, Enum):
    CHARITABLE_CONTRIBUTIONS = "CHARITABLE_CONTRIBUTIONS"
    MORTGAGE_INTEREST = "MORTGAGE_INTEREST"
    STATE_LOCAL_TAXES = "STATE_LOCAL_TAXES"
    MEDICAL_EXPENSES = "MEDICAL_EXPENSES"
    BUSINESS_EXPENSES = "BUSINESS_EXPENSES"
    STUDENT_LOAN_INTEREST = "STUDENT_LOAN_INTEREST"
    IRA_CONTRIBUTIONS = "IRA_CONTRIBUTIONS"
    OTHER_DEDUCTIONS = "OTHER_DEDUCTIONS"

    @property
    def label(self) -> str:
        return DEDUCTION_TYPE_LABELS[self]


DEDUCTION_TYPE_LABELS: dict[DeductionType, str] = {
    DeductionType.CHARITABLE_CONTRIBUTIONS: "Charitable Donations",
    DeductionType.MORTGAGE_INTEREST: "Mortgage Interest",
    DeductionType.STATE_LOCAL_TAXES: "State & Local Taxes",
    DeductionType.MEDICAL_EXPENSES: "Medical Expenses",
    DeductionType.BUSINESS_EXPENSES: "Business Expenses",
    DeductionType.STUDENT_LOAN_INTEREST: "Student Loan Interest",
    DeductionType.IRA_CONTRIBUTIONS: "Retirement Contributions",
    DeductionType.OTHER_DEDUCTIONS: "Other Deductions",
}


class DeductionMethod(str, Enum):
    STANDARD = "STANDARD"
    ITEMIZED = "ITEMIZED"


@dataclass(frozen=True)
class Dependent:
    name: str
    age: int | None = None
    relationship: str | None = None

    @property
    def is_qualifying_child(self) -> bool:
        return self.age is not None and 0 <= self.age < 17


@dataclass(frozen=True)
class DeductionScenario:
    """A named incremental deduction to test against the baseline."""

    name: str
    additional_amount: float
    deduction_type: DeductionType = DeductionType.OTHER_DEDUCTIONS

    @property
    def description(self) -> str:
        return f"{self.deduction_type.label}: +${self.additional_amount:,.2f}"


@dataclass(frozen=True)
class DeductionComparison:
    """Standard vs. itemized deduction for one income and filing status."""

    adjusted_gross_income: float
    filing_status: FilingStatus
    standard_deduction: float
    itemized_deduction: float
    standard_tax: float
    itemized_tax: float
    credits: float
    recommended: DeductionMethod
    taxable_income: float
    tax_liability: float
    effective_rate: float
    marginal_rate: float

    @property
    def deduction_used(self) -> float:
        if self.recommended is DeductionMethod.ITEMIZED:
            return self.itemized_deduction
        return self.standard_deduction


@dataclass(frozen=True)
class ScenarioResult:
    scenario: DeductionScenario
    comparison: DeductionComparison
    savings: float


@dataclass(frozen=True)
class ScenarioReport:
    baseline: DeductionComparison
    results: list[ScenarioResult] = field(default_factory=list)

    @property
    def best(self) -> ScenarioResult | None:
        """The scenario with the largest savings, or None when there are none."""
        if not self.results:
            return None
        return max(self.results, key=lambda r: r.savings)
