"""
Unit tests for cohorts.py module.

Tests cohort spend curves, overlap of recurring cohorts, new allocations and
both seed program variants.
"""

import pytest

from fundmodel.cohorts import (
    ACCELERATOR,
    INCUBATOR,
    STARTUP_GRANTS,
    CohortProgram,
    FlatSeedProgram,
    MonthlySeedProgram,
)
from fundmodel.exceptions import ValidationError


# ============================================================================
# CURVE VALIDATION
# ============================================================================

class TestCohortProgramValidation:
    """Tests for CohortProgram construction."""

    def test_empty_curve_rejected(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            CohortProgram("empty", 2026, ())

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            CohortProgram("bad", 2026, ((-1, 0.1), (0, 0.1)))

    def test_duplicate_offset_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            CohortProgram("bad", 2026, ((0, 0.1), (0, 0.2)))

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="offset 1"):
            CohortProgram("bad", 2026, ((0, 0.1), (1, -0.1)))

    def test_curve_coerced_to_tuple(self):
        """Lists are accepted and stored as tuples of (int, float)."""
        program = CohortProgram("listy", 2026, [[0, 1], [1, 2]])
        assert program.spend_curve == ((0, 1.0), (1, 2.0))

    def test_frozen(self):
        with pytest.raises(Exception):
            ACCELERATOR.start_year = 2030


# ============================================================================
# CURVE PROPERTIES
# ============================================================================

class TestCurveProperties:
    """Tests for per-cohort award value, lifespan and overlap."""

    def test_total_values(self):
        assert ACCELERATOR.total_value == pytest.approx(0.45)
        assert INCUBATOR.total_value == pytest.approx(0.15)
        assert STARTUP_GRANTS.total_value == pytest.approx(0.05)

    def test_lifespans(self):
        assert ACCELERATOR.lifespan == 4
        assert INCUBATOR.lifespan == 3
        assert STARTUP_GRANTS.lifespan == 2

    def test_steady_state_overlap(self):
        assert ACCELERATOR.steady_state_overlap == 4
        assert INCUBATOR.steady_state_overlap == 3

    def test_curve_amount_outside_curve(self):
        assert ACCELERATOR.curve_amount(4) == 0.0
        assert ACCELERATOR.curve_amount(1) == 0.15

    def test_sparse_curve(self):
        """Offsets need not be contiguous; gaps count as zero spend."""
        program = CohortProgram("gap", 2026, ((0, 1.0), (2, 1.0)))
        assert program.lifespan == 3
        assert program.spend(2027, 1) == pytest.approx(1.0)  # only the 2027 cohort
        assert program.spend(2028, 1) == pytest.approx(2.0)  # 2026 at offset 2, 2028 at 0


# ============================================================================
# ANNUAL SPEND
# ============================================================================

class TestCohortSpend:
    """Tests for overlapping annual spend."""

    @pytest.mark.parametrize("year,expected", [
        (2025, 0.0),
        (2026, 0.075),
        (2027, 0.225),
        (2028, 0.375),
        (2029, 0.45),
        (2032, 0.45),
    ])
    def test_accelerator_ramp(self, year, expected):
        assert ACCELERATOR.spend(year, 1) == pytest.approx(expected)

    @pytest.mark.parametrize("year,expected", [
        (2026, 0.0),
        (2027, 0.05),
        (2028, 0.10),
        (2029, 0.15),
        (2032, 0.15),
    ])
    def test_incubator_ramp(self, year, expected):
        assert INCUBATOR.spend(year, 1) == pytest.approx(expected)

    def test_startup_ramp(self):
        assert STARTUP_GRANTS.spend(2026, 3) == pytest.approx(0.075)
        assert STARTUP_GRANTS.spend(2027, 3) == pytest.approx(0.15)
        assert STARTUP_GRANTS.spend(2031, 3) == pytest.approx(0.15)

    def test_linear_in_cohort_count(self):
        for year in range(2026, 2033):
            assert ACCELERATOR.spend(year, 7) == pytest.approx(7 * ACCELERATOR.spend(year, 1))

    def test_zero_cohorts_is_exactly_zero(self):
        """No cohorts issued means no spend in any year, not merely a small one."""
        for program in (ACCELERATOR, INCUBATOR, STARTUP_GRANTS):
            for year in range(2020, 2040):
                assert program.spend(year, 0) == 0.0

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            ACCELERATOR.spend(2027, -1)

    def test_steady_state_matches_late_year(self):
        """After the ramp-up the annual spend equals the closed form."""
        for n in (1, 5, 12):
            assert ACCELERATOR.spend(2032, n) == pytest.approx(ACCELERATOR.steady_state_spend(n))
            assert INCUBATOR.spend(2032, n) == pytest.approx(INCUBATOR.steady_state_spend(n))


class TestActiveCohorts:
    """Tests for the number of overlapping cohorts."""

    @pytest.mark.parametrize("year,expected", [
        (2025, 0), (2026, 1), (2027, 2), (2028, 3), (2029, 4), (2032, 4),
    ])
    def test_accelerator(self, year, expected):
        assert ACCELERATOR.active_cohorts(year) == expected

    @pytest.mark.parametrize("year,expected", [
        (2026, 0), (2027, 1), (2028, 2), (2029, 3), (2032, 3),
    ])
    def test_incubator(self, year, expected):
        assert INCUBATOR.active_cohorts(year) == expected


class TestNewAllocation:
    """Tests for award value committed when cohorts start."""

    def test_before_start_year(self):
        assert ACCELERATOR.new_allocation(2025, 5) == 0.0
        assert INCUBATOR.new_allocation(2026, 5) == 0.0

    def test_full_award_value_committed(self):
        assert ACCELERATOR.new_allocation(2026, 5) == pytest.approx(2.25)
        assert INCUBATOR.new_allocation(2030, 10) == pytest.approx(1.5)

    def test_zero_cohorts(self):
        assert ACCELERATOR.new_allocation(2028, 0) == 0.0


# ============================================================================
# SEED PROGRAMS
# ============================================================================

class TestFlatSeedProgram:
    """Tests for the first-version seed program."""

    def test_defaults(self):
        seed = FlatSeedProgram()
        assert seed.total == 2.0
        assert seed.spend(2026) == 1.0
        assert seed.spend(2027) == 1.0
        assert seed.spend(2028) == 0.0

    def test_negative_annual_rejected(self):
        with pytest.raises(ValueError):
            FlatSeedProgram(annual=-1.0)


class TestMonthlySeedProgram:
    """Tests for the second-version seed program."""

    def test_defaults(self):
        seed = MonthlySeedProgram()
        assert seed.total == pytest.approx(2.97)
        assert seed.monthly_rate == pytest.approx(0.099)

    def test_spend_by_year(self):
        seed = MonthlySeedProgram()
        assert seed.spend(2026) == pytest.approx(1.188)
        assert seed.spend(2027) == pytest.approx(1.188)
        assert seed.spend(2028) == pytest.approx(0.594)
        assert seed.spend(2029) == 0.0

    def test_spend_sums_to_total(self):
        seed = MonthlySeedProgram()
        total = sum(seed.spend(y) for y in range(2026, 2033))
        assert total == pytest.approx(seed.total)

    def test_too_many_months_rejected(self):
        with pytest.raises(ValidationError, match="more than duration_months"):
            MonthlySeedProgram(months_by_year=((2026, 12), (2027, 12), (2028, 12)))

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValidationError):
            MonthlySeedProgram(duration_months=0)
