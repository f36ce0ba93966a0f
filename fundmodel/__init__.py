"""
FundModel — Rolling Research Funding Model

Year-by-year feasibility model for a research funding program that runs
overlapping multi-year grant cohorts against a fixed annual budget.

Modules
-------
- cohorts       : Cohort spend curves and seed programs
- versions      : v1 / v2 model definitions (budgets, programs, policies)
- programs      : Annual spend and new-allocation totals across programs
- engine        : Single-year transition (accrual, allocated, clawback)
- timeline      : Fold of the engine over the calendar
- search        : Feasibility search and Pareto frontier over cohort counts
- config        : Pydantic parameters and settings
- serialization : JSON / CSV persistence
- plotting      : Timeline and feasible-region charts
- cli           : ``fundmodel`` command-line interface

"""

from .config import ModelParameters, SearchConfig, AppSettings, configure
from .versions import FundingModel, MODEL_V1, MODEL_V2, get_model
from .engine import YearRecord, step
from .timeline import Timeline, simulate, run_timeline
from .search import FeasibilitySearch, SearchResult, pareto_frontier, run_feasibility_search
from .exceptions import FundModelError, ConfigurationError, ValidationError, TimeIndexError
from . import utils

__version__ = "0.1.0"

__all__ = [
    "ModelParameters",
    "SearchConfig",
    "AppSettings",
    "configure",
    "FundingModel",
    "MODEL_V1",
    "MODEL_V2",
    "get_model",
    "YearRecord",
    "step",
    "Timeline",
    "simulate",
    "run_timeline",
    "FeasibilitySearch",
    "SearchResult",
    "pareto_frontier",
    "run_feasibility_search",
    "FundModelError",
    "ConfigurationError",
    "ValidationError",
    "TimeIndexError",
    "utils",
]
