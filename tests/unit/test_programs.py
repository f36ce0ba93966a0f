"""
Unit tests for programs.py module.

Tests aggregation of all spend categories into the annual spend (S) and
new allocation (Y) totals, the central staffing allowance and the
closed-form steady-state spend.
"""

import pytest

from fundmodel.config import configure
from fundmodel.programs import ProgramAggregator, central_allowance_for
from fundmodel.versions import MODEL_V1, MODEL_V2


@pytest.fixture
def agg_v1():
    return ProgramAggregator(MODEL_V1)


@pytest.fixture
def agg_v2():
    return ProgramAggregator(MODEL_V2)


# ============================================================================
# CENTRAL ALLOWANCE
# ============================================================================

class TestCentralAllowance:
    """Tests for the headcount-based central allowance."""

    def test_zero_employees(self):
        assert central_allowance_for(0) == 0.0

    def test_below_premium_threshold(self):
        """Fewer than ten employees are all billed at the regular rate."""
        assert central_allowance_for(6) == pytest.approx(6 * 0.008)

    def test_one_premium_in_ten(self):
        assert central_allowance_for(10) == pytest.approx(9 * 0.008 + 1 * 0.030)

    def test_fractional_headcount(self):
        """Half-time incubator staff give fractional headcounts; premium is floored."""
        assert central_allowance_for(25.5) == pytest.approx(23.5 * 0.008 + 2 * 0.030)

    def test_monotone(self):
        values = [central_allowance_for(e / 2) for e in range(0, 200)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_v1_has_no_allowance(self, agg_v1, v1_params):
        for year in MODEL_V1.calendar_years:
            assert agg_v1.central_allowance(year, v1_params) == 0.0

    def test_v2_employees(self, agg_v2, v2_params):
        # 2026: one accelerator cohort; 2029: four accelerator and three incubator cohorts
        assert agg_v2.employees(2026, v2_params) == pytest.approx(4 * 1.5)
        assert agg_v2.employees(2029, v2_params) == pytest.approx(4 * 4 * 1.5 + 3 * 12 * 0.5)

    def test_steady_state_employees(self, agg_v2, v2_params):
        assert agg_v2.steady_state_employees(v2_params) == pytest.approx(42.0)


# ============================================================================
# SPEND BREAKDOWN
# ============================================================================

class TestSpendBreakdown:
    """Tests for per-category spend."""

    def test_v1_first_year(self, agg_v1, v1_params):
        spend = agg_v1.breakdown(2026, v1_params)
        assert spend.seed == 1.0
        assert spend.capital == 0.5
        assert spend.accelerator == pytest.approx(0.375)
        assert spend.incubator == 0.0
        assert spend.ug_research == 0.0
        assert spend.startup == 0.0
        assert spend.central == 0.0
        assert spend.total == pytest.approx(1.875)

    def test_v2_first_year(self, agg_v2, v2_params):
        spend = agg_v2.breakdown(2026, v2_params)
        assert spend.seed == pytest.approx(1.188)
        assert spend.capital == 0.35
        assert spend.ug_research == pytest.approx(0.05)  # half year
        assert spend.accelerator == pytest.approx(0.3)
        assert spend.startup == pytest.approx(0.075)
        assert spend.central == pytest.approx(0.048)
        assert spend.total == pytest.approx(2.011)

    def test_v2_ug_research_full_after_first_year(self, agg_v2, v2_params):
        assert agg_v2.ug_research_spend(2027, v2_params) == pytest.approx(0.1)

    def test_total_matches_sum(self, agg_v2, v2_params):
        for year in MODEL_V2.calendar_years:
            spend = agg_v2.breakdown(year, v2_params)
            parts = sum(v for k, v in spend.to_dict().items() if k != "year")
            assert spend.total == pytest.approx(parts, abs=1e-12)
            assert agg_v2.total_spend(year, v2_params) == spend.total

    @pytest.mark.parametrize("accel,incub", [(0, 0), (5, 5), (3, 21), (12, 30)])
    def test_v1_closed_forms(self, agg_v1, accel, incub):
        """Year-by-year spend of the first version in closed form."""
        params = configure(accel, incub)
        expected = {
            2026: 1.5 + 0.075 * accel,
            2027: 1.5 + 0.225 * accel + 0.05 * incub,
            2028: 0.5 + 0.375 * accel + 0.10 * incub,
        }
        for year in range(2029, 2033):
            expected[year] = 0.5 + 0.45 * accel + 0.15 * incub
        for year, s in expected.items():
            assert agg_v1.total_spend(year, params) == pytest.approx(s, abs=1e-9)


class TestMonotonicity:
    """Spend never decreases when more cohorts are issued."""

    @pytest.mark.parametrize("model", [MODEL_V1, MODEL_V2], ids=["v1", "v2"])
    def test_spend_non_decreasing_in_counts(self, model):
        agg = ProgramAggregator(model)
        for year in model.calendar_years:
            for a in range(0, 12):
                for b in (0, 10, 29):
                    base = agg.total_spend(year, configure(a, b, version=model.version))
                    more_a = agg.total_spend(year, configure(a + 1, b, version=model.version))
                    more_b = agg.total_spend(year, configure(a, b + 1, version=model.version))
                    assert more_a >= base - 1e-12
                    assert more_b >= base - 1e-12


# ============================================================================
# ALLOCATIONS
# ============================================================================

class TestAllocations:
    """Tests for new allocations (Y)."""

    def test_v1_first_year(self, agg_v1, v1_params):
        alloc = agg_v1.allocations(2026, v1_params)
        assert alloc.accelerator == pytest.approx(2.25)
        assert alloc.incubator == 0.0
        assert alloc.capital == 0.5
        assert alloc.total == pytest.approx(2.75)

    def test_v1_later_year(self, agg_v1, v1_params):
        assert agg_v1.total_new_allocation(2027, v1_params) == pytest.approx(3.5)

    def test_v2_first_year(self, agg_v2, v2_params):
        alloc = agg_v2.allocations(2026, v2_params)
        assert alloc.startup == pytest.approx(0.15)
        assert alloc.ug_research == pytest.approx(0.05)
        assert alloc.central == pytest.approx(0.048)
        assert alloc.total == pytest.approx(1.8 + 0.35 + 0.05 + 0.15 + 0.048)


# ============================================================================
# STEADY STATE
# ============================================================================

class TestSteadyState:
    """Tests for the closed-form steady-state spend."""

    def test_v1_formula(self, agg_v1):
        for a, b in [(0, 0), (5, 5), (3, 21), (7, 3)]:
            expected = 0.5 + 0.45 * a + 0.15 * b
            assert agg_v1.steady_state_spend(configure(a, b)) == pytest.approx(expected)

    def test_v2_formula(self, agg_v2, v2_params):
        employees = 4 * 4 * 1.5 + 3 * 12 * 0.5
        expected = 0.35 + 0.1 + 4 * 0.45 + 12 * 0.15 + 3 * 0.05 + central_allowance_for(employees)
        assert agg_v2.steady_state_spend(v2_params) == pytest.approx(expected)

    @pytest.mark.parametrize("model", [MODEL_V1, MODEL_V2], ids=["v1", "v2"])
    def test_matches_terminal_year_spend(self, model):
        """By the terminal year every program has reached its steady overlap."""
        agg = ProgramAggregator(model)
        for a, b in [(0, 0), (1, 1), (4, 12), (12, 30)]:
            params = configure(a, b, version=model.version)
            assert agg.total_spend(model.terminal_year, params) == pytest.approx(
                agg.steady_state_spend(params), abs=1e-9
            )
