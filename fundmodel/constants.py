"""
Global constants for FundModel.

Purpose
-------
Centralizes the funding assumptions and magic numbers used throughout the
FundModel codebase. All monetary amounts are expressed in millions of
currency units and kept at full floating-point precision; rounding happens
only in presentation helpers.

Usage
-----
>>> from fundmodel.constants import STARTING_ACCRUAL, FEASIBILITY_EPSILON
>>> available = STARTING_ACCRUAL + budget

Categories
----------
- Calendar: simulated years and annual budget tables
- Balances: starting accrual and allocated-unspent commitments
- Programs: cohort spend curves and fixed annual items
- Central allowance: headcount and billing rates
- Search: parameter bounds and steady-state ceiling
- Plotting: figure sizes and colors
"""

from typing import Dict, Tuple

__all__ = [
    # Calendar
    "CALENDAR_YEARS",
    "BUDGETS_V1",
    "BUDGETS_V2",
    # Balances
    "STARTING_ACCRUAL",
    "FEASIBILITY_EPSILON",
    # Programs
    "ACCELERATOR_CURVE",
    "ACCELERATOR_START_YEAR",
    "INCUBATOR_CURVE",
    "INCUBATOR_START_YEAR",
    "STARTUP_AWARD_CURVE",
    "STARTUP_START_YEAR",
    "DEFAULT_STARTUP_AWARDS",
    "SEED_FLAT_ANNUAL",
    "SEED_FLAT_LAST_YEAR",
    "SEED_V1_ALLOCATED",
    "SEED_ALLOCATED",
    "SEED_ADDITIONAL",
    "SEED_DURATION_MONTHS",
    "SEED_MONTHS_BY_YEAR",
    "DEFAULT_CAPITAL_V1",
    "DEFAULT_CAPITAL_V2",
    "DEFAULT_UG_RESEARCH_V2",
    "UG_FIRST_YEAR_FRACTION",
    # Central allowance
    "ACCEL_EMPLOYEES_PER_AWARD",
    "INCUB_EMPLOYEES_PER_AWARD",
    "PREMIUM_EMPLOYEE_RATIO",
    "REGULAR_EMPLOYEE_RATE",
    "PREMIUM_EMPLOYEE_RATE",
    # Search
    "MAX_ACCEL_COUNT",
    "MAX_INCUB_COUNT",
    "STEADY_STATE_CEILING",
    "DEFAULT_ACCEL_COUNT_V1",
    "DEFAULT_INCUB_COUNT_V1",
    "DEFAULT_ACCEL_COUNT_V2",
    "DEFAULT_INCUB_COUNT_V2",
    # Plotting
    "DEFAULT_FIGSIZE",
    "DEFAULT_FIGSIZE_WIDE",
]


# =============================================================================
# Calendar
# =============================================================================

CALENDAR_YEARS: Tuple[int, ...] = (2026, 2027, 2028, 2029, 2030, 2031, 2032)
"""Calendar years simulated by both model versions."""

BUDGETS_V1: Dict[int, float] = {
    2026: 0.0, 2027: 1.0, 2028: 3.0, 2029: 5.0, 2030: 5.0, 2031: 5.0, 2032: 5.0,
}
"""Annual new budget tranche (millions) for the first model version."""

BUDGETS_V2: Dict[int, float] = {
    2026: 0.0, 2027: 1.0, 2028: 4.0, 2029: 5.0, 2030: 5.0, 2031: 5.0, 2032: 5.0,
}
"""Annual new budget tranche (millions) for the second model version."""


# =============================================================================
# Balances
# =============================================================================

STARTING_ACCRUAL: float = 4.70
"""Accrual carried into the first simulated year.

Also the commitment checked by the first-year clawback rule.
"""

FEASIBILITY_EPSILON: float = 0.001
"""Tolerance used for every feasibility and clawback comparison."""


# =============================================================================
# Programs
# =============================================================================

ACCELERATOR_CURVE: Tuple[Tuple[int, float], ...] = (
    (0, 0.075), (1, 0.15), (2, 0.15), (3, 0.075),
)
"""Accelerator spend per cohort by year since start (0.45 total).

Cohorts start July 1, so the first and last years are half years.
"""

ACCELERATOR_START_YEAR: int = 2026

INCUBATOR_CURVE: Tuple[Tuple[int, float], ...] = ((0, 0.05), (1, 0.05), (2, 0.05))
"""Incubator spend per cohort by year since start (0.15 total)."""

INCUBATOR_START_YEAR: int = 2027

STARTUP_AWARD_CURVE: Tuple[Tuple[int, float], ...] = ((0, 0.025), (1, 0.025))
"""Start-up grant spend per award by year since start (0.05 total)."""

STARTUP_START_YEAR: int = 2026

DEFAULT_STARTUP_AWARDS: int = 3
"""Start-up grants awarded per year."""

SEED_FLAT_ANNUAL: float = 1.0
"""First-version seed program spend per year."""

SEED_FLAT_LAST_YEAR: int = 2027
"""Last year the first-version seed program spends."""

SEED_V1_ALLOCATED: float = 2.0
"""Existing seed allocation at the start of the first model version."""

SEED_ALLOCATED: float = 1.12
"""Second-version seed amount already allocated."""

SEED_ADDITIONAL: float = 1.85
"""Second-version additional seed amount."""

SEED_DURATION_MONTHS: int = 30
"""Months over which the second-version seed total is spent (Jan 2026 - Jun 2028)."""

SEED_MONTHS_BY_YEAR: Dict[int, int] = {2026: 12, 2027: 12, 2028: 6}
"""Months of seed spend falling in each calendar year."""

DEFAULT_CAPITAL_V1: float = 0.5
"""Capital/infrastructure spend per year, first version."""

DEFAULT_CAPITAL_V2: float = 0.35
"""Default capital/infrastructure spend per year, second version."""

DEFAULT_UG_RESEARCH_V2: float = 0.10
"""Default undergraduate research spend per year, second version."""

UG_FIRST_YEAR_FRACTION: float = 0.5
"""Undergraduate research starts mid-year, so the first year is half rate."""


# =============================================================================
# Central allowance
# =============================================================================

ACCEL_EMPLOYEES_PER_AWARD: float = 1.5
INCUB_EMPLOYEES_PER_AWARD: float = 0.5

PREMIUM_EMPLOYEE_RATIO: int = 10
"""One in every ten employees is billed at the premium rate."""

REGULAR_EMPLOYEE_RATE: float = 0.008
"""Central allowance per regular employee per year ($8K)."""

PREMIUM_EMPLOYEE_RATE: float = 0.030
"""Central allowance per premium employee per year ($30K)."""


# =============================================================================
# Search
# =============================================================================

MAX_ACCEL_COUNT: int = 12
"""Upper bound on accelerator cohorts per year."""

MAX_INCUB_COUNT: int = 30
"""Upper bound on incubator cohorts per year."""

STEADY_STATE_CEILING: float = 5.0
"""Annual budget the steady-state spend must fit under."""

DEFAULT_ACCEL_COUNT_V1: int = 5
DEFAULT_INCUB_COUNT_V1: int = 5
DEFAULT_ACCEL_COUNT_V2: int = 4
DEFAULT_INCUB_COUNT_V2: int = 12


# =============================================================================
# Plotting Defaults
# =============================================================================

DEFAULT_FIGSIZE: Tuple[int, int] = (12, 7)
"""Default figure size (width, height) in inches for timeline plots."""

DEFAULT_FIGSIZE_WIDE: Tuple[int, int] = (14, 6)
"""Figure size for the feasible region plot."""
