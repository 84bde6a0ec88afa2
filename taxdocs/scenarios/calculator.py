"""What-if deduction scenarios over the federal tax tables.

All functions are pure. Negative or non-finite monetary inputs count as zero
and outputs are rounded to cents.
"""

import math
from collections.abc import Iterable

from taxdocs.scenarios.models import (
    DeductionComparison,
    DeductionMethod,
    DeductionScenario,
    DeductionType,
    Dependent,
    FilingStatus,
    ScenarioReport,
    ScenarioResult,
)
from taxdocs.scenarios.tax_tables import (
    CHILD_TAX_CREDIT,
    CREDIT_PHASEOUT_PER_STEP,
    CREDIT_PHASEOUT_STEP,
    CREDIT_PHASEOUT_THRESHOLDS,
    OTHER_DEPENDENT_CREDIT,
    STANDARD_DEDUCTIONS,
    brackets_for,
)


def _non_negative(amount: float | None) -> float:
    if amount is None:
        return 0.0
    value = float(amount)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _cents(amount: float) -> float:
    return round(amount, 2)


def compute_tax(taxable_income: float, filing_status: FilingStatus) -> float:
    """Progressive tax on taxable income before credits."""
    income = _non_negative(taxable_income)
    tax = 0.0
    lower = 0.0
    for upper, rate in brackets_for(filing_status):
        if income <= lower:
            break
        tax += (min(income, upper) - lower) * rate
        lower = upper
    return _cents(tax)


def marginal_rate(taxable_income: float, filing_status: FilingStatus) -> float:
    income = _non_negative(taxable_income)
    for upper, rate in brackets_for(filing_status):
        if income <= upper:
            return rate
    return brackets_for(filing_status)[-1][1]


def dependent_credits(
    adjusted_gross_income: float,
    filing_status: FilingStatus,
    dependents: Iterable[Dependent],
) -> float:
    """Child tax credit plus credit for other dependents, after the income phase-out."""
    total = 0.0
    for dependent in dependents:
        total += CHILD_TAX_CREDIT if dependent.is_qualifying_child else OTHER_DEPENDENT_CREDIT
    if total == 0:
        return 0.0

    excess = _non_negative(adjusted_gross_income) - CREDIT_PHASEOUT_THRESHOLDS[filing_status]
    if excess > 0:
        steps = math.ceil(excess / CREDIT_PHASEOUT_STEP)
        total -= steps * CREDIT_PHASEOUT_PER_STEP
    return _cents(max(0.0, total))


def _liability(
    agi: float,
    deduction: float,
    filing_status: FilingStatus,
    credits: float,
) -> tuple[float, float]:
    taxable = max(0.0, agi - deduction)
    return taxable, max(0.0, compute_tax(taxable, filing_status) - credits)


def compare_deductions(
    adjusted_gross_income: float,
    filing_status: FilingStatus,
    itemized_deductions: float,
    dependents: Iterable[Dependent] = (),
) -> DeductionComparison:
    """Tax under the standard and the itemized deduction; the lower liability wins, ties go to standard."""
    agi = _non_negative(adjusted_gross_income)
    itemized = _non_negative(itemized_deductions)
    standard = STANDARD_DEDUCTIONS[filing_status]
    credits = dependent_credits(agi, filing_status, list(dependents))

    standard_taxable, standard_tax = _liability(agi, standard, filing_status, credits)
    itemized_taxable, itemized_tax = _liability(agi, itemized, filing_status, credits)

    if itemized_tax < standard_tax:
        recommended = DeductionMethod.ITEMIZED
        taxable, liability = itemized_taxable, itemized_tax
    else:
        recommended = DeductionMethod.STANDARD
        taxable, liability = standard_taxable, standard_tax

    return DeductionComparison(
        adjusted_gross_income=_cents(agi),
        filing_status=filing_status,
        standard_deduction=_cents(standard),
        itemized_deduction=_cents(itemized),
        standard_tax=_cents(standard_tax),
        itemized_tax=_cents(itemized_tax),
        credits=credits,
        recommended=recommended,
        taxable_income=_cents(taxable),
        tax_liability=_cents(liability),
        effective_rate=round(liability / agi, 4) if agi > 0 else 0.0,
        marginal_rate=marginal_rate(taxable, filing_status),
    )


def calculate_scenarios(
    adjusted_gross_income: float,
    filing_status: FilingStatus,
    itemized_deductions: float,
    dependents: Iterable[Dependent] = (),
    scenarios: Iterable[DeductionScenario] = (),
) -> ScenarioReport:
    """Baseline comparison plus one recomputation per scenario.

    Each scenario's amount is added to the current itemized total. Savings are
    baseline liability minus scenario liability, so a negative value is a cost.
    """
    dependents = list(dependents)
    baseline = compare_deductions(
        adjusted_gross_income, filing_status, itemized_deductions, dependents
    )
    results = []
    for scenario in scenarios:
        comparison = compare_deductions(
            adjusted_gross_income,
            filing_status,
            _non_negative(itemized_deductions) + _non_negative(scenario.additional_amount),
            dependents,
        )
        results.append(
            ScenarioResult(
                scenario=scenario,
                comparison=comparison,
                savings=_cents(baseline.tax_liability - comparison.tax_liability),
            )
        )
    return ScenarioReport(baseline=baseline, results=results)


def quick_scenario(amount: float) -> DeductionScenario:
    """A one-off "other deductions" scenario for a single amount."""
    value = _non_negative(amount)
    return DeductionScenario(
        name=f"Quick Test: ${value:,.0f}",
        additional_amount=value,
        deduction_type=DeductionType.OTHER_DEDUCTIONS,
    )
