"""
Type definitions for FundModel.

Purpose
-------
Provides TypedDict definitions for the dictionary shapes FundModel reads and
writes: flattened year records and the JSON documents produced by the
serialization module.

Type Definitions
----------------
YearRecordDict
    Flat view of one YearRecord (``YearRecord.to_dict()``).

TimelineDict
    Saved timeline document: parameters plus year records.

SearchResultDict
    Saved feasibility search document.
"""

from typing import List
from typing_extensions import TypedDict, NotRequired

__all__ = [
    "YearRecordDict",
    "TimelineDict",
    "SearchResultDict",
]


class YearRecordDict(TypedDict):
    """
    Flat representation of a YearRecord.

    Monetary values are in millions at full precision. Spend categories that
    a model version does not include are present and equal to 0.0.

    Examples
    --------
    >>> row: YearRecordDict = timeline[0].to_dict()
    >>> row["total_spend"] <= row["available"] + 0.001
    True
    """

    year: int
    accrual_in: float
    budget_in: float
    available: float
    spend_seed: float
    spend_capital: float
    spend_ug_research: float
    spend_accelerator: float
    spend_incubator: float
    spend_startup: float
    spend_central: float
    total_spend: float
    headroom: float
    allocated_in: float
    new_allocations: float
    accrual_out: float
    allocated_out: float
    accrual_carried: float
    feasible: bool
    clawback_risk: bool
    clawback_amount: float
    active_accelerator: int
    active_incubator: int
    active_startup: int


class TimelineDict(TypedDict):
    """
    Timeline document written by ``save_timeline``.

    Attributes
    ----------
    schema_version : str
        Serialization schema version.
    parameters : dict
        ``ModelParameters.model_dump()``.
    status : str
        ``Timeline.status``.
    steady_state_spend : float
        Closed-form steady-state spend.
    records : list of YearRecordDict
        One entry per simulated year.
    """

    schema_version: str
    parameters: dict
    status: str
    steady_state_spend: float
    records: List[YearRecordDict]


class SearchResultDict(TypedDict):
    """
    Feasibility search document written by ``save_search_result``.

    Pairs are stored as two-element lists ``[accel, incub]``.
    """

    schema_version: str
    version: str
    accel_bounds: List[int]
    incub_bounds: List[int]
    n_evaluated: int
    pareto: List[List[int]]
    all: List[List[int]]
    description: NotRequired[str]
