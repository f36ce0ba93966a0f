"""Timeline simulator for FundModel

Folds the year-transition engine over a list of calendar years, threading
the carried accrual and allocated-unspent balances from each YearRecord
into the next. The result is an immutable Timeline with exactly one record
per input year, in input order.

Typical usage
-------------
>>> from fundmodel.config import configure
>>> from fundmodel.timeline import run_timeline
>>> tl = run_timeline(configure(5, 5))
>>> tl.years
(2026, 2027, 2028, 2029, 2030, 2031, 2032)
>>> tl.all_feasible
True
>>> round(tl[0].total_spend, 3), round(tl[0].accrual_out, 3)
(1.875, 2.825)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .config import ModelParameters
from .constants import FEASIBILITY_EPSILON
from .engine import YearRecord, step
from .exceptions import TimeIndexError
from .programs import ProgramAggregator
from .utils import check_strictly_increasing, leq_with_tolerance
from .versions import FundingModel, get_model

__all__ = [
    "Timeline",
    "simulate",
    "run_timeline",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Timeline:
    """Year-ordered, immutable sequence of YearRecord for one parameter set."""
    params: ModelParameters
    model: FundingModel
    records: Tuple[YearRecord, ...]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[YearRecord]:
        return iter(self.records)

    def __getitem__(self, i: int) -> YearRecord:
        return self.records[i]

    # -------------------- Lookups --------------------
    @property
    def years(self) -> Tuple[int, ...]:
        return tuple(r.year for r in self.records)

    def by_year(self, year: int) -> YearRecord:
        for r in self.records:
            if r.year == year:
                return r
        raise TimeIndexError(f"Year {year} is not part of this timeline {self.years}.")

    # -------------------- Feasibility summary --------------------
    @property
    def all_feasible(self) -> bool:
        return all(r.feasible for r in self.records)

    @property
    def no_clawback(self) -> bool:
        return not any(r.clawback_risk for r in self.records)

    @property
    def binding_year(self) -> Optional[int]:
        """First year whose spend exceeds the available funds, if any."""
        return next((r.year for r in self.records if not r.feasible), None)

    @property
    def clawback_years(self) -> List[int]:
        return [r.year for r in self.records if r.clawback_risk]

    @property
    def steady_state_spend(self) -> float:
        return ProgramAggregator(self.model).steady_state_spend(self.params)

    @property
    def steady_state_employees(self) -> float:
        return ProgramAggregator(self.model).steady_state_employees(self.params)

    @property
    def steady_state_ok(self) -> bool:
        return leq_with_tolerance(
            self.steady_state_spend, self.model.steady_state_ceiling, eps=FEASIBILITY_EPSILON
        )

    @property
    def status(self) -> str:
        """
        Overall verdict, most severe first:
        "steady_state_exceeded", "infeasible", "clawback_risk" or "sustainable".
        """
        if not self.steady_state_ok:
            return "steady_state_exceeded"
        if not self.all_feasible:
            return "infeasible"
        if not self.no_clawback:
            return "clawback_risk"
        return "sustainable"

    # -------------------- Tabular view --------------------
    def to_records(self) -> List[dict]:
        return [r.to_dict() for r in self.records]

    def to_frame(self) -> pd.DataFrame:
        """One row per year, indexed by year."""
        if not self.records:
            return pd.DataFrame()
        return pd.DataFrame(self.to_records()).set_index("year")


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def simulate(
    params: ModelParameters,
    calendar_years: Optional[Sequence[int]] = None,
    budget_table: Optional[Mapping[int, float]] = None,
    *,
    model: Optional[FundingModel] = None,
) -> Timeline:
    """
    Run the year-transition engine over *calendar_years*.

    Parameters
    ----------
    params : ModelParameters
        Cohort counts and fixed annual amounts.
    calendar_years : sequence of int, optional
        Strictly increasing years. Defaults to the model's calendar.
    budget_table : mapping year -> budget, optional
        New budget per year. Defaults to the model's budget table.
    model : FundingModel, optional
        Defaults to the model of ``params.version``.

    Returns
    -------
    Timeline

    Raises
    ------
    TimeIndexError
        If the years are not strictly increasing or a year has no budget.
    """
    model = model if model is not None else get_model(params.version)
    years = tuple(calendar_years) if calendar_years is not None else model.calendar_years
    check_strictly_increasing(years)
    budgets = dict(budget_table) if budget_table is not None else model.budgets
    missing = [y for y in years if y not in budgets]
    if missing:
        raise TimeIndexError(f"No budget defined for year(s) {missing}.")

    aggregator = ProgramAggregator(model)

    def advance(records: Tuple[YearRecord, ...], year: int) -> Tuple[YearRecord, ...]:
        if records:
            A, X = records[-1].accrual_carried, records[-1].allocated_out
        else:
            A, X = model.starting_accrual, model.starting_allocated
        rec = step(A, X, year, budgets[year], params, model=model, aggregator=aggregator)
        return records + (rec,)

    records = reduce(advance, years, ())
    logger.debug(
        "Simulated %s a=%d b=%d over %d years: feasible=%s",
        model.version, params.accel_count, params.incub_count,
        len(records), all(r.feasible for r in records),
    )
    return Timeline(params=params, model=model, records=records)


def run_timeline(params: ModelParameters) -> Timeline:
    """Timeline over the fixed calendar and budget table of ``params.version``."""
    return simulate(params)
