"""2024 federal income tax tables."""

from taxdocs.scenarios.models import FilingStatus

# Upper bound of each bracket; the last rate applies above the final bound.
BRACKET_RATES: tuple[float, ...] = (0.10, 0.12, 0.22, 0.24, 0.32, 0.35, 0.37)

_JOINT_BOUNDS = (23_200, 94_300, 201_050, 383_900, 487_450, 731_200)

BRACKET_BOUNDS: dict[FilingStatus, tuple[float, ...]] = {
    FilingStatus.SINGLE: (11_600, 47_150, 100_525, 191_950, 243_725, 609_350),
    FilingStatus.MARRIED_FILING_JOINTLY: _JOINT_BOUNDS,
    FilingStatus.MARRIED_FILING_SEPARATELY: (11_600, 47_150, 100_525, 191_950, 243_725, 365_600),
    FilingStatus.HEAD_OF_HOUSEHOLD: (16_550, 63_100, 100_500, 191_950, 243_700, 609_350),
    FilingStatus.QUALIFYING_SURVIVING_SPOUSE: _JOINT_BOUNDS,
}

STANDARD_DEDUCTIONS: dict[FilingStatus, float] = {
    FilingStatus.SINGLE: 14_600,
    FilingStatus.MARRIED_FILING_JOINTLY: 29_200,
    FilingStatus.MARRIED_FILING_SEPARATELY: 14_600,
    FilingStatus.HEAD_OF_HOUSEHOLD: 21_900,
    FilingStatus.QUALIFYING_SURVIVING_SPOUSE: 29_200,
}

CHILD_TAX_CREDIT = 2_000
OTHER_DEPENDENT_CREDIT = 500
CREDIT_PHASEOUT_STEP = 1_000
CREDIT_PHASEOUT_PER_STEP = 50

CREDIT_PHASEOUT_THRESHOLDS: dict[FilingStatus, float] = {
    FilingStatus.SINGLE: 200_000,
    FilingStatus.MARRIED_FILING_JOINTLY: 400_000,
    FilingStatus.MARRIED_FILING_SEPARATELY: 200_000,
    FilingStatus.HEAD_OF_HOUSEHOLD: 200_000,
    FilingStatus.QUALIFYING_SURVIVING_SPOUSE: 400_000,
}


def brackets_for(filing_status: FilingStatus) -> list[tuple[float, float]]:
    """(upper bound, rate) pairs; the top bracket is unbounded."""
    bounds = BRACKET_BOUNDS[filing_status]
    return list(zip((*bounds, float("inf")), BRACKET_RATES))
