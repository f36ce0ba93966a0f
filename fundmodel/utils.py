"""General utilities for FundModel

Contents
--------
- Validation helpers
- Tolerance comparisons (fixed epsilon)
- Range helpers for the parameter search
- Formatting helpers (format_millions, format_thousands, millions_formatter)
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .constants import FEASIBILITY_EPSILON
from .exceptions import TimeIndexError, ValidationError

__all__ = [
    # Validation
    "check_non_negative",
    "check_strictly_increasing",
    # Tolerance
    "leq_with_tolerance",
    "lt_with_tolerance",
    # Ranges
    "inclusive_range",
    # Formatting
    "format_millions",
    "format_thousands",
    "millions_formatter",
]

# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def check_non_negative(name: str, value: float) -> None:
    """Raise if *value* is negative (strict)."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative (got {value}).")


def check_strictly_increasing(years: Sequence[int], *, name: str = "calendar_years") -> None:
    """Raise TimeIndexError unless *years* is a non-empty, strictly increasing sequence."""
    if len(years) == 0:
        raise TimeIndexError(f"{name} must contain at least one year.")
    arr = np.asarray(years)
    if arr.ndim != 1:
        raise TimeIndexError(f"{name} must be 1-D, got shape {arr.shape}.")
    if np.any(np.diff(arr) <= 0):
        raise TimeIndexError(f"{name} must be strictly increasing, got {list(years)}.")


# ---------------------------------------------------------------------------
# Tolerance comparisons
# ---------------------------------------------------------------------------

def leq_with_tolerance(lhs: float, rhs: float, *, eps: float = FEASIBILITY_EPSILON) -> bool:
    """Return True when ``lhs <= rhs + eps``."""
    return lhs <= rhs + eps


def lt_with_tolerance(lhs: float, rhs: float, *, eps: float = FEASIBILITY_EPSILON) -> bool:
    """Return True when ``lhs < rhs - eps`` (strictly below, beyond tolerance)."""
    return lhs < rhs - eps


# ---------------------------------------------------------------------------
# Range helpers
# ---------------------------------------------------------------------------

def inclusive_range(lo: int, hi: int, *, name: str = "range") -> range:
    """Return ``range(lo, hi + 1)`` after checking bounds."""
    if lo < 0:
        raise ValidationError(f"{name} lower bound must be non-negative, got {lo}.")
    if hi < lo:
        raise ValidationError(f"{name} upper bound ({hi}) must be >= lower bound ({lo}).")
    return range(int(lo), int(hi) + 1)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_millions(value: float, decimals: int = 2, symbol: str = "$") -> str:
    """
    Format an amount already expressed in millions.

    Examples
    --------
    >>> format_millions(4.7)
    '$4.70M'
    >>> format_millions(-0.125, decimals=1)
    '-$0.1M'
    """
    sign = "-" if value < 0 and round(abs(value), decimals) != 0 else ""
    return f"{sign}{symbol}{abs(value):.{decimals}f}M"


def format_thousands(value: float, symbol: str = "$") -> str:
    """Format an amount in millions as whole thousands, e.g. 0.35 -> '$350K'."""
    return f"{symbol}{value * 1000:,.0f}K"


def millions_formatter(x, pos):
    """
    Format axis values (already in millions) for matplotlib FuncFormatter.

    - 5.0 → "$5M"
    - 2.5 → "$2.5M"
    - 0 → "0"
    """
    if x == 0:
        return '0'
    return f'${x:.0f}M' if x == int(x) else f'${x:.1f}M'
