"""Program aggregation for FundModel

Combines every spend category of a FundingModel into the two annual totals
the year-transition engine needs:

    S_y = seed + capital + ug_research + accelerator + incubator + startup + central
    Y_y = new accelerator awards + new incubator awards + capital
          + ug_research + new start-up awards + central

Capital, undergraduate research and the central allowance are allocated and
spent in the same year, so they appear in both totals. Cohort programs enter
``S`` through their spend curves and ``Y`` at full award value in the year a
cohort starts.

Central staffing allowance
--------------------------
    employees = active_accel * accel_count * 1.5 + active_incub * incub_count * 0.5
    premium   = floor(employees / 10)
    regular   = employees - premium
    allowance = regular * 0.008 + premium * 0.030
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict

from .cohorts import ACCELERATOR, INCUBATOR, STARTUP_GRANTS, CohortProgram
from .config import ModelParameters
from .constants import (
    ACCEL_EMPLOYEES_PER_AWARD,
    INCUB_EMPLOYEES_PER_AWARD,
    PREMIUM_EMPLOYEE_RATIO,
    REGULAR_EMPLOYEE_RATE,
    PREMIUM_EMPLOYEE_RATE,
)
from .versions import FundingModel

__all__ = [
    "ActiveCohorts",
    "SpendBreakdown",
    "AllocationBreakdown",
    "ProgramAggregator",
    "central_allowance_for",
]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ActiveCohorts:
    accelerator: int
    incubator: int
    startup: int


@dataclass(frozen=True)
class SpendBreakdown:
    """Spend per category in one year (millions)."""
    year: int
    seed: float
    capital: float
    ug_research: float
    accelerator: float
    incubator: float
    startup: float
    central: float

    @property
    def total(self) -> float:
        return (
            self.seed + self.capital + self.ug_research + self.accelerator
            + self.incubator + self.startup + self.central
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class AllocationBreakdown:
    """New allocations per category in one year (millions)."""
    year: int
    accelerator: float
    incubator: float
    capital: float
    ug_research: float
    startup: float
    central: float

    @property
    def total(self) -> float:
        return (
            self.accelerator + self.incubator + self.capital + self.ug_research
            + self.startup + self.central
        )


def central_allowance_for(employees: float) -> float:
    """Central allowance for a headcount; one in ten employees is premium."""
    premium = math.floor(employees / PREMIUM_EMPLOYEE_RATIO)
    regular = employees - premium
    return regular * REGULAR_EMPLOYEE_RATE + premium * PREMIUM_EMPLOYEE_RATE


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------

class ProgramAggregator:
    """Sums all program schedules of a FundingModel for a given year and parameters."""

    def __init__(self, model: FundingModel):
        self.model = model

    # -------------------- Counts --------------------
    @staticmethod
    def cohorts_per_year(program: CohortProgram, params: ModelParameters) -> int:
        """Number of cohorts *program* issues per year under *params*."""
        counts = {
            ACCELERATOR.name: params.accel_count,
            INCUBATOR.name: params.incub_count,
            STARTUP_GRANTS.name: params.startup_awards,
        }
        return counts[program.name]

    def active_cohorts(self, year: int) -> ActiveCohorts:
        startup = STARTUP_GRANTS.active_cohorts(year) if self.model.include_startup_grants else 0
        return ActiveCohorts(
            accelerator=ACCELERATOR.active_cohorts(year),
            incubator=INCUBATOR.active_cohorts(year),
            startup=startup,
        )

    # -------------------- Central allowance --------------------
    def employees(self, year: int, params: ModelParameters) -> float:
        active = self.active_cohorts(year)
        return (
            active.accelerator * params.accel_count * ACCEL_EMPLOYEES_PER_AWARD
            + active.incubator * params.incub_count * INCUB_EMPLOYEES_PER_AWARD
        )

    def central_allowance(self, year: int, params: ModelParameters) -> float:
        if not self.model.include_central_allowance:
            return 0.0
        return central_allowance_for(self.employees(year, params))

    def steady_state_employees(self, params: ModelParameters) -> float:
        return (
            ACCELERATOR.steady_state_overlap * params.accel_count * ACCEL_EMPLOYEES_PER_AWARD
            + INCUBATOR.steady_state_overlap * params.incub_count * INCUB_EMPLOYEES_PER_AWARD
        )

    # -------------------- Fixed annual items --------------------
    def ug_research_spend(self, year: int, params: ModelParameters) -> float:
        if not self.model.include_ug_research:
            return 0.0
        if year == self.model.first_year:
            return params.ug_research * self.model.ug_first_year_fraction
        return params.ug_research

    # -------------------- Totals --------------------
    def breakdown(self, year: int, params: ModelParameters) -> SpendBreakdown:
        """Spend per category in *year*."""
        spend = {
            p.name: p.spend(year, self.cohorts_per_year(p, params))
            for p in self.model.cohort_programs
        }
        return SpendBreakdown(
            year=year,
            seed=self.model.seed.spend(year),
            capital=params.capital,
            ug_research=self.ug_research_spend(year, params),
            accelerator=spend.get(ACCELERATOR.name, 0.0),
            incubator=spend.get(INCUBATOR.name, 0.0),
            startup=spend.get(STARTUP_GRANTS.name, 0.0),
            central=self.central_allowance(year, params),
        )

    def allocations(self, year: int, params: ModelParameters) -> AllocationBreakdown:
        """New allocations per category in *year*."""
        new = {
            p.name: p.new_allocation(year, self.cohorts_per_year(p, params))
            for p in self.model.cohort_programs
        }
        return AllocationBreakdown(
            year=year,
            accelerator=new.get(ACCELERATOR.name, 0.0),
            incubator=new.get(INCUBATOR.name, 0.0),
            capital=params.capital,
            ug_research=self.ug_research_spend(year, params),
            startup=new.get(STARTUP_GRANTS.name, 0.0),
            central=self.central_allowance(year, params),
        )

    def total_spend(self, year: int, params: ModelParameters) -> float:
        """S: total spend in *year*."""
        return self.breakdown(year, params).total

    def total_new_allocation(self, year: int, params: ModelParameters) -> float:
        """Y: total new allocation in *year*."""
        return self.allocations(year, params).total

    def steady_state_spend(self, params: ModelParameters) -> float:
        """
        Closed-form annual spend once every program has reached its steady overlap.

        Seed programs have ended by then. For v1 this reduces to
        ``capital + 0.45 * accel_count + 0.15 * incub_count``.
        """
        total = params.capital
        if self.model.include_ug_research:
            total += params.ug_research
        for p in self.model.cohort_programs:
            total += p.steady_state_spend(self.cohorts_per_year(p, params))
        if self.model.include_central_allowance:
            total += central_allowance_for(self.steady_state_employees(params))
        return total
