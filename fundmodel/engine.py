"""
Year-transition engine for FundModel.

Purpose
-------
Computes one simulated year from the balances carried in from the previous
year. The transition is deterministic and pure:

    available = A + B
    feasible  = S <= available + eps
    A'        = A + B - S
    X'        = X + Y - S

where A is the accrual carried in, B the year's new budget tranche, S the
total spend, X the allocated-but-unspent balance and Y the year's new
allocations. Versions that floor accrual carry ``max(0, A')`` into the next
year; the record always keeps the unfloored ``A'``.

Clawback risk
-------------
The funder may reclaim allocated funds when they do not cover the budget
tranche they are meant to match:

    X + Y < B - eps                  → amount B - X - Y

Models with a first-year rule also flag the first calendar year when

    X' + S < A0 - eps                → amount A0 - X' - S

Infeasible years and clawback risk are recorded, never raised or corrected.

Example
-------
>>> from fundmodel.config import configure
>>> from fundmodel.versions import MODEL_V1
>>> rec = step(4.70, 2.0, 2026, 0.0, configure(5, 5), model=MODEL_V1)
>>> round(rec.accrual_out, 3), rec.feasible
(2.825, True)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import ModelParameters
from .constants import FEASIBILITY_EPSILON
from .programs import ActiveCohorts, ProgramAggregator, SpendBreakdown
from .utils import leq_with_tolerance, lt_with_tolerance
from .versions import FundingModel

__all__ = ["YearRecord", "step"]


@dataclass(frozen=True)
class YearRecord:
    """
    One simulated year.

    Attributes
    ----------
    year : int
        Calendar year.
    accrual_in : float
        A: accrual carried in from the previous year.
    budget_in : float
        B: new budget tranche for the year.
    available : float
        A + B.
    spend : SpendBreakdown
        Spend per category.
    total_spend : float
        S: total spend.
    allocated_in : float
        X: allocated-unspent balance carried in.
    new_allocations : float
        Y: new allocations made during the year.
    accrual_out : float
        A' = A + B - S (never floored).
    allocated_out : float
        X' = X + Y - S.
    accrual_carried : float
        Accrual threaded into the next year (A', or max(0, A') when floored).
    feasible : bool
        S <= A + B within tolerance.
    clawback_risk : bool
        Funder clawback warning.
    clawback_amount : float
        Shortfall behind the clawback warning (0 when not at risk).
    active : ActiveCohorts
        Cohorts with spend in the year, per program.
    """
    year: int
    accrual_in: float
    budget_in: float
    available: float
    spend: SpendBreakdown
    total_spend: float
    allocated_in: float
    new_allocations: float
    accrual_out: float
    allocated_out: float
    accrual_carried: float
    feasible: bool
    clawback_risk: bool
    clawback_amount: float
    active: ActiveCohorts

    @property
    def headroom(self) -> float:
        """A + B - S; negative when the year is infeasible."""
        return self.available - self.total_spend

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary view (spend categories prefixed with ``spend_``)."""
        return {
            "year": self.year,
            "accrual_in": self.accrual_in,
            "budget_in": self.budget_in,
            "available": self.available,
            "spend_seed": self.spend.seed,
            "spend_capital": self.spend.capital,
            "spend_ug_research": self.spend.ug_research,
            "spend_accelerator": self.spend.accelerator,
            "spend_incubator": self.spend.incubator,
            "spend_startup": self.spend.startup,
            "spend_central": self.spend.central,
            "total_spend": self.total_spend,
            "headroom": self.headroom,
            "allocated_in": self.allocated_in,
            "new_allocations": self.new_allocations,
            "accrual_out": self.accrual_out,
            "allocated_out": self.allocated_out,
            "accrual_carried": self.accrual_carried,
            "feasible": self.feasible,
            "clawback_risk": self.clawback_risk,
            "clawback_amount": self.clawback_amount,
            "active_accelerator": self.active.accelerator,
            "active_incubator": self.active.incubator,
            "active_startup": self.active.startup,
        }


def step(
    prev_accrual: float,
    prev_allocated: float,
    year: int,
    budget: float,
    params: ModelParameters,
    *,
    model: FundingModel,
    aggregator: Optional[ProgramAggregator] = None,
    eps: float = FEASIBILITY_EPSILON,
) -> YearRecord:
    """
    Advance the balances by one year.

    Parameters
    ----------
    prev_accrual : float
        A: accrual carried into *year*.
    prev_allocated : float
        X: allocated-unspent balance carried into *year*.
    year : int
        Calendar year being simulated.
    budget : float
        B: new budget tranche for *year*.
    params : ModelParameters
        Cohort counts and fixed annual amounts.
    model : FundingModel
        Version definition (programs and policies).
    aggregator : ProgramAggregator, optional
        Reused across years by the timeline simulator; built from *model*
        when omitted.
    eps : float
        Tolerance for the feasibility and clawback comparisons.

    Returns
    -------
    YearRecord
    """
    agg = aggregator if aggregator is not None else ProgramAggregator(model)

    spend = agg.breakdown(year, params)
    S = spend.total
    Y = agg.total_new_allocation(year, params)

    A, B, X = prev_accrual, budget, prev_allocated
    available = A + B
    feasible = leq_with_tolerance(S, available, eps=eps)
    Ap = A + B - S
    Xp = X + Y - S

    normal_clawback = lt_with_tolerance(X + Y, B, eps=eps)
    first_year_clawback = (
        model.first_year_clawback
        and year == model.first_year
        and lt_with_tolerance(Xp + S, model.starting_accrual, eps=eps)
    )
    if normal_clawback:
        claw_amount = max(0.0, B - X - Y)
    elif first_year_clawback:
        claw_amount = max(0.0, model.starting_accrual - Xp - S)
    else:
        claw_amount = 0.0

    carried = max(0.0, Ap) if model.floor_accrual else Ap

    return YearRecord(
        year=year,
        accrual_in=A,
        budget_in=B,
        available=available,
        spend=spend,
        total_spend=S,
        allocated_in=X,
        new_allocations=Y,
        accrual_out=Ap,
        allocated_out=Xp,
        accrual_carried=carried,
        feasible=feasible,
        clawback_risk=bool(normal_clawback or first_year_clawback),
        clawback_amount=claw_amount,
        active=agg.active_cohorts(year),
    )
