"""
Cohort spend schedules for FundModel.

Purpose
-------
Models how recurring grant programs disburse their awards. A program issues
one cohort per calendar year from its start year onward; each cohort spends
its award along a fixed curve indexed by years since the cohort started.
Because cohorts recur annually, several of them are active at once and the
spend in a year is the overlap of all active cohorts:

    spend(y) = n * Σ_{c = start}^{y} curve[y - c]

where n is the number of cohorts issued per year and curve[k] is 0 outside
the curve's offsets.

Also provides the two seed program variants, which are not cohort based:

- FlatSeedProgram: fixed annual amount up to a last year
- MonthlySeedProgram: fixed monthly rate spread over a set number of months

Design principles
-----------------
- Frozen dataclasses for immutability
- Pure functions of (year, cohorts_per_year); no cached state
- Zero cohorts per year always yields exactly 0.0

Example
-------
>>> from fundmodel.cohorts import ACCELERATOR
>>> round(ACCELERATOR.spend(2027, cohorts_per_year=5), 3)
1.125
>>> ACCELERATOR.active_cohorts(2030)
4
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .constants import (
    ACCELERATOR_CURVE,
    ACCELERATOR_START_YEAR,
    INCUBATOR_CURVE,
    INCUBATOR_START_YEAR,
    STARTUP_AWARD_CURVE,
    STARTUP_START_YEAR,
    SEED_FLAT_ANNUAL,
    SEED_FLAT_LAST_YEAR,
    SEED_V1_ALLOCATED,
    SEED_ALLOCATED,
    SEED_ADDITIONAL,
    SEED_DURATION_MONTHS,
    SEED_MONTHS_BY_YEAR,
)
from .exceptions import ValidationError
from .utils import check_non_negative

__all__ = [
    "CohortProgram",
    "FlatSeedProgram",
    "MonthlySeedProgram",
    "SeedProgram",
    "ACCELERATOR",
    "INCUBATOR",
    "STARTUP_GRANTS",
]


# ---------------------------------------------------------------------------
# Cohort programs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CohortProgram:
    """
    Recurring grant program with a multi-year spend curve per cohort.

    Parameters
    ----------
    name : str
        Identifier used in breakdowns and reports (e.g., "accelerator").
    start_year : int
        Calendar year of the first cohort. One cohort starts every year after.
    spend_curve : tuple of (offset, amount)
        Spend of a single cohort by years since the cohort started.
        Offsets must be unique non-negative integers, amounts non-negative.
        The amounts sum to the per-cohort award value.

    Notes
    -----
    A cohort started in year c is active in year y iff ``y - c`` is one of
    the curve offsets. Once the first cohort has run its full course, the
    number of simultaneously active cohorts equals the number of offsets
    (``steady_state_overlap``).

    Examples
    --------
    >>> incub = CohortProgram("incubator", 2027, ((0, 0.05), (1, 0.05), (2, 0.05)))
    >>> incub.total_value
    0.15000000000000002
    >>> incub.spend(2026, cohorts_per_year=4)
    0.0
    >>> incub.spend(2028, cohorts_per_year=4)
    0.4
    """
    name: str
    start_year: int
    spend_curve: Tuple[Tuple[int, float], ...]

    def __post_init__(self) -> None:
        curve = tuple((int(k), float(v)) for k, v in self.spend_curve)
        if not curve:
            raise ValidationError(f"{self.name}: spend_curve must not be empty.")
        offsets = [k for k, _ in curve]
        if any(k < 0 for k in offsets):
            raise ValidationError(
                f"{self.name}: spend_curve offsets must be non-negative, got {offsets}."
            )
        if len(set(offsets)) != len(offsets):
            raise ValidationError(
                f"{self.name}: spend_curve offsets must be unique, got {offsets}."
            )
        for k, v in curve:
            if v < 0:
                raise ValidationError(
                    f"{self.name}: spend_curve amount at offset {k} must be "
                    f"non-negative, got {v}."
                )
        object.__setattr__(self, "spend_curve", curve)

    # -------------------- Curve properties --------------------
    @property
    def total_value(self) -> float:
        """Award value of a single cohort (sum of the curve)."""
        return float(sum(v for _, v in self.spend_curve))

    @property
    def lifespan(self) -> int:
        """Number of calendar years a single cohort spans."""
        return max(k for k, _ in self.spend_curve) + 1

    @property
    def steady_state_overlap(self) -> int:
        """Number of cohorts active at once after the ramp-up."""
        return len(self.spend_curve)

    def curve_amount(self, offset: int) -> float:
        """Spend of one cohort ``offset`` years after it started (0 outside the curve)."""
        for k, v in self.spend_curve:
            if k == offset:
                return v
        return 0.0

    # -------------------- Year queries --------------------
    def per_cohort_spend(self, year: int) -> float:
        """Overlapping spend of one cohort issued in every year up to *year*."""
        s = 0.0
        for c in range(self.start_year, year + 1):
            s += self.curve_amount(year - c)
        return s

    def spend(self, year: int, cohorts_per_year: int) -> float:
        """Total program spend in *year* with *cohorts_per_year* cohorts issued annually."""
        check_non_negative("cohorts_per_year", cohorts_per_year)
        if cohorts_per_year == 0:
            return 0.0
        return self.per_cohort_spend(year) * cohorts_per_year

    def active_cohorts(self, year: int) -> int:
        """Number of cohort years with spend falling in *year*."""
        offsets = {k for k, _ in self.spend_curve}
        return sum(1 for c in range(self.start_year, year + 1) if (year - c) in offsets)

    def new_allocation(self, year: int, cohorts_per_year: int) -> float:
        """Full award value committed to the cohorts that start in *year*."""
        check_non_negative("cohorts_per_year", cohorts_per_year)
        if year < self.start_year:
            return 0.0
        return cohorts_per_year * self.total_value

    def steady_state_spend(self, cohorts_per_year: int) -> float:
        """
        Closed-form annual spend once ``steady_state_overlap`` cohorts overlap.

        Every offset of the curve is covered by exactly one active cohort,
        so the year's spend is the full award value per cohort issued.
        """
        return cohorts_per_year * self.total_value


# ---------------------------------------------------------------------------
# Seed programs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlatSeedProgram:
    """
    Seed program spending a flat annual amount through ``last_year``.

    Parameters
    ----------
    annual : float
        Spend per year while the program runs.
    last_year : int
        Last calendar year with spend.
    allocated : float
        Seed funds already allocated when the simulation starts.
    """
    annual: float = SEED_FLAT_ANNUAL
    last_year: int = SEED_FLAT_LAST_YEAR
    allocated: float = SEED_V1_ALLOCATED
    name: str = "seed"

    def __post_init__(self) -> None:
        check_non_negative("annual", self.annual)
        check_non_negative("allocated", self.allocated)

    @property
    def total(self) -> float:
        return self.allocated

    def spend(self, year: int) -> float:
        return self.annual if year <= self.last_year else 0.0


@dataclass(frozen=True)
class MonthlySeedProgram:
    """
    Seed program spending ``(allocated + additional) / duration_months`` per month.

    Parameters
    ----------
    allocated : float
        Seed amount already allocated.
    additional : float
        Additional seed amount committed on top.
    duration_months : int
        Number of months the total is spread over.
    months_by_year : tuple of (year, months)
        Months of spend falling in each calendar year. Years not listed
        have no seed spend. Must not exceed ``duration_months`` in total.

    Examples
    --------
    >>> seed = MonthlySeedProgram()
    >>> round(seed.spend(2028), 3)
    0.594
    >>> seed.spend(2029)
    0.0
    """
    allocated: float = SEED_ALLOCATED
    additional: float = SEED_ADDITIONAL
    duration_months: int = SEED_DURATION_MONTHS
    months_by_year: Tuple[Tuple[int, int], ...] = tuple(SEED_MONTHS_BY_YEAR.items())
    name: str = "seed"

    def __post_init__(self) -> None:
        check_non_negative("allocated", self.allocated)
        check_non_negative("additional", self.additional)
        if self.duration_months <= 0:
            raise ValidationError(
                f"duration_months must be positive, got {self.duration_months}."
            )
        months = tuple((int(y), int(m)) for y, m in self.months_by_year)
        if any(m < 0 for _, m in months):
            raise ValidationError("months_by_year entries must be non-negative.")
        if sum(m for _, m in months) > self.duration_months:
            raise ValidationError(
                f"months_by_year covers {sum(m for _, m in months)} months, "
                f"more than duration_months={self.duration_months}."
            )
        object.__setattr__(self, "months_by_year", months)

    @property
    def total(self) -> float:
        return self.allocated + self.additional

    @property
    def monthly_rate(self) -> float:
        return self.total / self.duration_months

    def spend(self, year: int) -> float:
        months = dict(self.months_by_year).get(year, 0)
        if months == 0:
            return 0.0
        return months * self.monthly_rate


SeedProgram = Union[FlatSeedProgram, MonthlySeedProgram]


# ---------------------------------------------------------------------------
# Program definitions
# ---------------------------------------------------------------------------

ACCELERATOR = CohortProgram("accelerator", ACCELERATOR_START_YEAR, ACCELERATOR_CURVE)
"""$450K over three years, new cohort every July 1 from 2026."""

INCUBATOR = CohortProgram("incubator", INCUBATOR_START_YEAR, INCUBATOR_CURVE)
"""$150K over three years, new cohort every January 1 from 2027."""

STARTUP_GRANTS = CohortProgram("startup", STARTUP_START_YEAR, STARTUP_AWARD_CURVE)
"""$50K over two years per award; the count per year is the number of awards."""
