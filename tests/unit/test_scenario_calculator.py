import math

import pytest

from taxdocs.scenarios.calculator import (
    calculate_scenarios,
    compare_deductions,
    compute_tax,
    dependent_credits,
    marginal_rate,
    quick_scenario,
)
from taxdocs.scenarios.models import (
    DeductionMethod,
    DeductionScenario,
    DeductionType,
    Dependent,
    FilingStatus,
)


class TestComputeTax:
    @pytest.mark.parametrize(
        ("taxable", "status", "expected"),
        [
            (0, FilingStatus.SINGLE, 0.0),
            (11_600, FilingStatus.SINGLE, 1_160.0),
            (35_400, FilingStatus.SINGLE, 4_016.0),
            (50_000, FilingStatus.SINGLE, 6_053.0),
            (94_300, FilingStatus.MARRIED_FILING_JOINTLY, 10_852.0),
            (16_550, FilingStatus.HEAD_OF_HOUSEHOLD, 1_655.0),
        ],
    )
    def test_progressive_brackets(
        self, taxable: float, status: FilingStatus, expected: float
    ) -> None:
        assert compute_tax(taxable, status) == pytest.approx(expected)

    def test_negative_income_is_clamped(self) -> None:
        assert compute_tax(-5_000, FilingStatus.SINGLE) == 0.0

    def test_top_bracket(self) -> None:
        below = compute_tax(609_350, FilingStatus.SINGLE)
        assert compute_tax(609_450, FilingStatus.SINGLE) == pytest.approx(below + 37.0)

    def test_qualifying_surviving_spouse_matches_joint(self) -> None:
        assert compute_tax(150_000, FilingStatus.QUALIFYING_SURVIVING_SPOUSE) == compute_tax(
            150_000, FilingStatus.MARRIED_FILING_JOINTLY
        )


class TestMarginalRate:
    def test_rates(self) -> None:
        assert marginal_rate(0, FilingStatus.SINGLE) == 0.10
        assert marginal_rate(35_400, FilingStatus.SINGLE) == 0.12
        assert marginal_rate(1_000_000, FilingStatus.SINGLE) == 0.37


class TestDependentCredits:
    def test_child_and_other_dependent(self) -> None:
        dependents = [Dependent("Kid", age=8), Dependent("Parent", age=70)]
        assert dependent_credits(80_000, FilingStatus.SINGLE, dependents) == 2_500.0

    def test_unknown_age_counts_as_other_dependent(self) -> None:
        assert dependent_credits(80_000, FilingStatus.SINGLE, [Dependent("X")]) == 500.0

    def test_phase_out_rounds_up_per_thousand(self) -> None:
        dependents = [Dependent("Kid", age=3)]
        assert dependent_credits(201_001, FilingStatus.SINGLE, dependents) == 1_900.0

    def test_joint_threshold(self) -> None:
        dependents = [Dependent("Kid", age=3)]
        assert dependent_credits(300_000, FilingStatus.MARRIED_FILING_JOINTLY, dependents) == 2_000.0

    def test_never_negative(self) -> None:
        assert dependent_credits(900_000, FilingStatus.SINGLE, [Dependent("Kid", age=3)]) == 0.0


class TestCompareDeductions:
    def test_standard_wins_for_small_itemized(self) -> None:
        comparison = compare_deductions(50_000, FilingStatus.SINGLE, 0)

        assert comparison.recommended is DeductionMethod.STANDARD
        assert comparison.deduction_used == 14_600
        assert comparison.taxable_income == 35_400
        assert comparison.tax_liability == pytest.approx(4_016.0)
        assert comparison.effective_rate == pytest.approx(0.0803)
        assert comparison.marginal_rate == 0.12

    def test_itemized_wins_when_larger(self) -> None:
        comparison = compare_deductions(100_000, FilingStatus.SINGLE, 30_000)

        assert comparison.recommended is DeductionMethod.ITEMIZED
        assert comparison.taxable_income == 70_000
        assert comparison.tax_liability == comparison.itemized_tax

    def test_tie_goes_to_standard(self) -> None:
        comparison = compare_deductions(60_000, FilingStatus.SINGLE, 14_600)
        assert comparison.recommended is DeductionMethod.STANDARD

    def test_zero_income(self) -> None:
        comparison = compare_deductions(0, FilingStatus.SINGLE, 0)
        assert comparison.tax_liability == 0.0
        assert comparison.effective_rate == 0.0

    def test_negative_inputs_are_clamped(self) -> None:
        comparison = compare_deductions(-10, FilingStatus.SINGLE, -500)
        assert comparison.adjusted_gross_income == 0.0
        assert comparison.itemized_deduction == 0.0

    def test_credits_do_not_make_liability_negative(self) -> None:
        dependents = [Dependent(f"Kid {i}", age=5) for i in range(4)]
        comparison = compare_deductions(30_000, FilingStatus.HEAD_OF_HOUSEHOLD, 0, dependents)
        assert comparison.credits == 8_000.0
        assert comparison.tax_liability == 0.0


class TestCalculateScenarios:
    def test_charitable_scenario_below_standard_saves_nothing(self) -> None:
        scenario = DeductionScenario(
            "Give more", 5_000, DeductionType.CHARITABLE_CONTRIBUTIONS
        )

        report = calculate_scenarios(50_000, FilingStatus.SINGLE, 0, [], [scenario])

        assert report.baseline.tax_liability == pytest.approx(4_016.0)
        [result] = report.results
        assert result.comparison.itemized_deduction == 5_000
        assert result.comparison.recommended is DeductionMethod.STANDARD
        assert result.savings == 0.0

    def test_savings_when_itemizing_pays_off(self) -> None:
        scenario = DeductionScenario("Mortgage", 10_000, DeductionType.MORTGAGE_INTEREST)

        report = calculate_scenarios(100_000, FilingStatus.SINGLE, 10_000, [], [scenario])

        [result] = report.results
        assert result.comparison.itemized_deduction == 20_000
        assert result.comparison.recommended is DeductionMethod.ITEMIZED
        # 5,400 extra deduction in the 22% bracket
        assert result.savings == pytest.approx(1_188.0)
        assert report.best is result

    def test_no_scenarios(self) -> None:
        report = calculate_scenarios(50_000, FilingStatus.SINGLE, 0)
        assert report.results == []
        assert report.best is None

    @pytest.mark.parametrize("income", [math.inf, -math.inf, math.nan])
    def test_non_finite_income_counts_as_zero(self, income: float) -> None:
        dependents = [Dependent("Kid", age=5)]

        report = calculate_scenarios(income, FilingStatus.SINGLE, 0, dependents)

        assert report.baseline.adjusted_gross_income == 0.0
        assert report.baseline.tax_liability == 0.0
        assert report.baseline.effective_rate == 0.0

    def test_non_finite_scenario_amount_counts_as_zero(self) -> None:
        scenario = DeductionScenario("Huge", math.inf)
        report = calculate_scenarios(50_000, FilingStatus.SINGLE, 0, [], [scenario])
        assert report.results[0].comparison.itemized_deduction == 0.0
        assert report.results[0].savings == 0.0

    def test_negative_scenario_amount_is_clamped(self) -> None:
        scenario = DeductionScenario("Oops", -1_000)
        report = calculate_scenarios(50_000, FilingStatus.SINGLE, 0, [], [scenario])
        assert report.results[0].savings == 0.0


class TestQuickScenario:
    def test_name_and_type(self) -> None:
        scenario = quick_scenario(2_500)
        assert scenario.name == "Quick Test: $2,500"
        assert scenario.deduction_type is DeductionType.OTHER_DEDUCTIONS
        assert scenario.additional_amount == 2_500

    def test_description_uses_label(self) -> None:
        scenario = DeductionScenario("Gift", 1_000, DeductionType.IRA_CONTRIBUTIONS)
        assert scenario.description == "Retirement Contributions: +$1,000.00"
