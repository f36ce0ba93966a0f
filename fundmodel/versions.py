"""
Funding model versions.

Purpose
-------
Bundles everything that differs between the two model versions into one
immutable FundingModel: the calendar, the budget table, the starting
balances, the programs that are simulated and the two policies on which
the versions disagree.

Differences (v1 → v2)
---------------------
- Seed program: flat $1M/yr through 2027 → $2.97M spread over 30 months
- Start-up grants, undergraduate research, central allowance: added in v2
- Budget 2028: $3M → $4M
- Accrual carried forward: may go negative → floored at zero
- Clawback: budget-matching rule only → plus a first-year commitment rule

Example
-------
>>> from fundmodel.versions import get_model
>>> model = get_model("v2")
>>> model.budget(2028)
4.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .cohorts import (
    ACCELERATOR,
    INCUBATOR,
    STARTUP_GRANTS,
    CohortProgram,
    FlatSeedProgram,
    MonthlySeedProgram,
    SeedProgram,
)
from .config import MODEL_VERSIONS
from .constants import (
    BUDGETS_V1,
    BUDGETS_V2,
    CALENDAR_YEARS,
    STARTING_ACCRUAL,
    STEADY_STATE_CEILING,
    UG_FIRST_YEAR_FRACTION,
)
from .exceptions import ConfigurationError, TimeIndexError
from .utils import check_strictly_increasing

__all__ = ["FundingModel", "MODEL_V1", "MODEL_V2", "get_model"]


@dataclass(frozen=True)
class FundingModel:
    """
    Version-specific definition of the funding model.

    Attributes
    ----------
    version : str
        Version label ("v1" or "v2").
    calendar_years : tuple of int
        Simulated years, strictly increasing.
    budget_table : tuple of (year, budget)
        New budget tranche per calendar year (millions).
    starting_accrual : float
        Accrual carried into the first year (A0).
    seed : FlatSeedProgram or MonthlySeedProgram
        Seed program; its total is the starting allocated-unspent balance (X0).
    include_startup_grants : bool
        Simulate the start-up grant program.
    include_ug_research : bool
        Spend undergraduate research (half rate in the first calendar year).
    include_central_allowance : bool
        Spend the headcount-based central staffing allowance.
    floor_accrual : bool
        Carry ``max(0, A')`` into the next year instead of ``A'``.
    first_year_clawback : bool
        Also flag clawback in the first year when ``X + Y`` falls short of
        ``starting_accrual``.
    steady_state_ceiling : float
        Annual budget the analytic steady-state spend must fit under.
    """
    version: str
    calendar_years: Tuple[int, ...]
    budget_table: Tuple[Tuple[int, float], ...]
    seed: SeedProgram
    starting_accrual: float = STARTING_ACCRUAL
    include_startup_grants: bool = False
    include_ug_research: bool = False
    include_central_allowance: bool = False
    floor_accrual: bool = False
    first_year_clawback: bool = False
    steady_state_ceiling: float = STEADY_STATE_CEILING
    ug_first_year_fraction: float = UG_FIRST_YEAR_FRACTION

    def __post_init__(self) -> None:
        years = tuple(int(y) for y in self.calendar_years)
        check_strictly_increasing(years)
        table = tuple((int(y), float(b)) for y, b in self.budget_table)
        missing = [y for y in years if y not in dict(table)]
        if missing:
            raise TimeIndexError(
                f"No budget defined for year(s) {missing} in model {self.version}."
            )
        object.__setattr__(self, "calendar_years", years)
        object.__setattr__(self, "budget_table", table)

    # -------------------- Lookups --------------------
    @property
    def budgets(self) -> Dict[int, float]:
        return dict(self.budget_table)

    @property
    def first_year(self) -> int:
        return self.calendar_years[0]

    @property
    def terminal_year(self) -> int:
        return self.calendar_years[-1]

    @property
    def starting_allocated(self) -> float:
        """Allocated-unspent balance entering the first year (the seed total)."""
        return self.seed.total

    @property
    def cohort_programs(self) -> Tuple[CohortProgram, ...]:
        programs = [ACCELERATOR, INCUBATOR]
        if self.include_startup_grants:
            programs.append(STARTUP_GRANTS)
        return tuple(programs)

    def budget(self, year: int) -> float:
        budgets = self.budgets
        if year not in budgets:
            raise TimeIndexError(
                f"No budget defined for year {year}. "
                f"Budget table covers {min(budgets)}-{max(budgets)}."
            )
        return budgets[year]


MODEL_V1 = FundingModel(
    version="v1",
    calendar_years=CALENDAR_YEARS,
    budget_table=tuple(BUDGETS_V1.items()),
    seed=FlatSeedProgram(),
)

MODEL_V2 = FundingModel(
    version="v2",
    calendar_years=CALENDAR_YEARS,
    budget_table=tuple(BUDGETS_V2.items()),
    seed=MonthlySeedProgram(),
    include_startup_grants=True,
    include_ug_research=True,
    include_central_allowance=True,
    floor_accrual=True,
    first_year_clawback=True,
)

_MODELS = {"v1": MODEL_V1, "v2": MODEL_V2}


def get_model(version: str) -> FundingModel:
    """Return the FundingModel for *version*."""
    try:
        return _MODELS[version]
    except KeyError:
        raise ConfigurationError(
            f"Unknown model version '{version}'. "
            f"Available versions: {', '.join(MODEL_VERSIONS)}."
        ) from None
