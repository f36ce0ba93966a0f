"""
Custom exceptions for FundModel.

Purpose
-------
Provides a unified exception hierarchy for invalid inputs to the funding
model. The simulation core itself never raises during normal operation:
infeasible years and clawback risk are reported as data on each
YearRecord. Exceptions are reserved for parameters, curves and calendars
that cannot describe a valid model.

Exception Hierarchy
-------------------
FundModelError (base)
├── ConfigurationError - Invalid parameters or unknown model version
└── ValidationError - Data validation failures
    └── TimeIndexError - Calendar year / budget table mismatches

Usage
-----
>>> from fundmodel.exceptions import ConfigurationError, FundModelError
>>>
>>> raise ConfigurationError("accel_count must be in [0, 12], got 15")
>>>
>>> # Catch all FundModel exceptions
>>> try:
...     timeline = run_timeline(params)
>>> except FundModelError as e:
...     logger.error(f"Timeline failed: {e}")
"""

__all__ = [
    "FundModelError",
    "ConfigurationError",
    "ValidationError",
    "TimeIndexError",
]


class FundModelError(Exception):
    """
    Base exception for all FundModel errors.

    Examples
    --------
    >>> try:
    ...     search.search(range(0, 13), range(0, 31))
    ... except FundModelError as e:
    ...     logger.error(f"Search failed: {e}")
    """
    pass


class ConfigurationError(FundModelError):
    """
    Invalid configuration or parameters.

    Raised when model configuration is invalid, such as:
    - Cohort counts outside the allowed bounds
    - Negative capital or undergraduate research amounts
    - Unknown model version

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Unknown model version 'v3'. Available versions: v1, v2."
    ... )
    """
    pass


class ValidationError(FundModelError):
    """
    Data validation failures.

    Raised when input data fails validation checks, such as:
    - Negative spend curve amounts
    - Duplicate or negative curve offsets
    - Empty search ranges

    Examples
    --------
    >>> raise ValidationError(
    ...     "spend_curve offsets must be unique, got [0, 1, 1]"
    ... )
    """
    pass


class TimeIndexError(ValidationError):
    """
    Calendar year indexing errors.

    Raised when calendar years and budgets disagree:
    - A simulated year has no entry in the budget table
    - Calendar years are not strictly increasing

    Examples
    --------
    >>> raise TimeIndexError(
    ...     f"No budget defined for year 2033. "
    ...     f"Budget table covers 2026-2032."
    ... )
    """
    pass
