"""
Feasibility search over cohort counts.

Purpose
-------
Enumerates (accelerator count, incubator count) pairs, simulates each with
the timeline simulator and keeps the pairs that are

1. feasible in every simulated year (spend never exceeds accrual + budget), and
2. sustainable in steady state: the closed-form steady-state spend does not
   exceed the model's steady-state ceiling.

The Pareto frontier keeps, for every accelerator count present, the pair
with the largest incubator count.

Every candidate is independent and the simulator is pure, so the
enumeration order only matters for tie-breaking (first encountered wins).

Example
-------
>>> from fundmodel.search import run_feasibility_search
>>> result = run_feasibility_search("v1")
>>> result.pareto[:3]
[(0, 30), (1, 27), (2, 24)]
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import pandas as pd

from .config import ModelParameters, SearchConfig, configure
from .constants import FEASIBILITY_EPSILON
from .exceptions import ValidationError
from .programs import ProgramAggregator
from .timeline import simulate
from .utils import leq_with_tolerance
from .versions import FundingModel, get_model

__all__ = [
    "SearchResult",
    "FeasibilitySearch",
    "pareto_frontier",
    "run_feasibility_search",
]

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchResult:
    """
    Output of a feasibility search.

    Attributes
    ----------
    version : str
        Model version searched.
    all : frozenset of (accel, incub)
        Every feasible combination.
    pareto : list of (accel, incub)
        Maximum incubator count per accelerator count, ascending by accel.
    accel_bounds, incub_bounds : (int, int)
        Inclusive bounds that were searched.
    n_evaluated : int
        Number of candidate pairs simulated.
    """
    version: str
    all: FrozenSet[Pair]
    pareto: List[Pair]
    accel_bounds: Pair
    incub_bounds: Pair
    n_evaluated: int

    def is_feasible(self, accel: int, incub: int) -> bool:
        return (accel, incub) in self.all

    def max_incub_for(self, accel: int) -> Optional[int]:
        """Largest feasible incubator count for *accel*, or None."""
        for a, b in self.pareto:
            if a == accel:
                return b
        return None

    def summary(self) -> str:
        lines = [
            "SearchResult(",
            f"  Version: {self.version}",
            f"  Searched: accel {self.accel_bounds[0]}-{self.accel_bounds[1]}, "
            f"incub {self.incub_bounds[0]}-{self.incub_bounds[1]} "
            f"({self.n_evaluated} pairs)",
            f"  Feasible: {len(self.all)}",
            f"  Pareto: {', '.join(f'{a}+{b}' for a, b in self.pareto) or 'none'}",
            ")",
        ]
        return "\n".join(lines)

    def to_frame(self) -> pd.DataFrame:
        """Feasible pairs sorted by (accel, incub) with a Pareto flag."""
        pareto = set(self.pareto)
        rows = [
            {"accel": a, "incub": b, "pareto": (a, b) in pareto}
            for a, b in sorted(self.all)
        ]
        return pd.DataFrame(rows, columns=["accel", "incub", "pareto"])


def pareto_frontier(pairs: Iterable[Pair]) -> List[Pair]:
    """
    Maximum ``b`` for every ``a``, ascending by ``a``.

    When several pairs share the maximal ``b`` for an ``a``, the first one
    encountered in *pairs* is kept.
    """
    best: Dict[int, Pair] = {}
    for a, b in pairs:
        current = best.get(a)
        if current is None or b > current[1]:
            best[a] = (a, b)
    return [best[a] for a in sorted(best)]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

class FeasibilitySearch:
    """
    Enumerate cohort-count pairs and keep those feasible in every year and
    in steady state.

    Parameters
    ----------
    version : str, default "v1"
        Model version to simulate.
    capital, ug_research : float, optional
        Fixed annual amounts held constant across candidates.
        Omitted values take the version defaults.
    model : FundingModel, optional
        Overrides the version's model definition.

    Examples
    --------
    >>> search = FeasibilitySearch("v1")
    >>> search.is_feasible(5, 12)
    True
    >>> search.is_feasible(5, 13)
    False
    """

    def __init__(
        self,
        version: str = "v1",
        *,
        capital: Optional[float] = None,
        ug_research: Optional[float] = None,
        model: Optional[FundingModel] = None,
    ):
        self.version = version
        self.model = model if model is not None else get_model(version)
        self.capital = capital
        self.ug_research = ug_research
        self._aggregator = ProgramAggregator(self.model)

    def params_for(self, accel: int, incub: int) -> ModelParameters:
        return configure(
            accel, incub,
            version=self.version,
            capital=self.capital,
            ug_research=self.ug_research,
        )

    def steady_state_spend(self, accel: int, incub: int) -> float:
        return self._aggregator.steady_state_spend(self.params_for(accel, incub))

    def is_feasible(self, accel: int, incub: int) -> bool:
        """Feasible in every simulated year and in steady state."""
        params = self.params_for(accel, incub)
        steady = self._aggregator.steady_state_spend(params)
        if not leq_with_tolerance(steady, self.model.steady_state_ceiling, eps=FEASIBILITY_EPSILON):
            return False
        return simulate(params, model=self.model).all_feasible

    def search(self, accel_range: Iterable[int], incub_range: Iterable[int]) -> SearchResult:
        """
        Evaluate every pair in ``accel_range × incub_range``.

        Raises
        ------
        ValidationError
            If either range is empty.
        ConfigurationError
            If a range leaves the allowed cohort-count bounds.
        """
        accels = list(accel_range)
        incubs = list(incub_range)
        if not accels or not incubs:
            raise ValidationError("accel_range and incub_range must be non-empty.")

        logger.info(
            "Searching %s: accel %d-%d × incub %d-%d",
            self.version, min(accels), max(accels), min(incubs), max(incubs),
        )
        feasible: List[Pair] = []
        n = 0
        for a, b in itertools.product(accels, incubs):
            n += 1
            if self.is_feasible(a, b):
                feasible.append((a, b))

        pareto = pareto_frontier(feasible)
        logger.info("Found %d feasible pairs, %d on the frontier", len(feasible), len(pareto))
        return SearchResult(
            version=self.version,
            all=frozenset(feasible),
            pareto=pareto,
            accel_bounds=(min(accels), max(accels)),
            incub_bounds=(min(incubs), max(incubs)),
            n_evaluated=n,
        )


def run_feasibility_search(
    version: str = "v1",
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """
    Search the configured bounds (default 0..12 × 0..30) for *version*.

    When *config* is given its version and bounds take precedence.
    """
    config = config if config is not None else SearchConfig(version=version)
    search = FeasibilitySearch(
        config.version,
        capital=config.capital,
        ug_research=config.ug_research,
    )
    return search.search(config.accel_range, config.incub_range)
