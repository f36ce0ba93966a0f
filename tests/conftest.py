"""
Pytest configuration and fixtures for FundModel test suite.

This module provides reusable fixtures for testing all FundModel components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

import pytest

from fundmodel.config import ModelParameters, configure
from fundmodel.search import FeasibilitySearch, SearchResult
from fundmodel.timeline import Timeline, run_timeline
from fundmodel.versions import MODEL_V1, MODEL_V2


# ---------------------------------------------------------------------------
# Parameter Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def v1_params() -> ModelParameters:
    """First-version defaults: 5 accelerators + 5 incubators per year."""
    return configure(5, 5, version="v1")


@pytest.fixture
def v2_params() -> ModelParameters:
    """Second-version defaults: 4 accelerators + 12 incubators per year."""
    return configure(4, 12, version="v2")


@pytest.fixture
def zero_params() -> ModelParameters:
    """No cohorts at all; only seed and capital spend."""
    return configure(0, 0, version="v1")


@pytest.fixture
def overloaded_params() -> ModelParameters:
    """Maximum counts; infeasible and over the steady-state ceiling."""
    return configure(12, 30, version="v1")


# ---------------------------------------------------------------------------
# Model Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def model_v1():
    return MODEL_V1


@pytest.fixture
def model_v2():
    return MODEL_V2


# ---------------------------------------------------------------------------
# Timeline Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def v1_timeline(v1_params) -> Timeline:
    return run_timeline(v1_params)


@pytest.fixture
def v2_timeline(v2_params) -> Timeline:
    return run_timeline(v2_params)


# ---------------------------------------------------------------------------
# Search Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def v1_search() -> SearchResult:
    """Full v1 search over 0..12 x 0..30 (403 simulations)."""
    return FeasibilitySearch("v1").search(range(0, 13), range(0, 31))


@pytest.fixture(scope="session")
def v2_search() -> SearchResult:
    """Full v2 search over 0..12 x 0..30."""
    return FeasibilitySearch("v2").search(range(0, 13), range(0, 31))


@pytest.fixture
def v1_frontier():
    """Pareto frontier of the first version, derived by hand from the binding years."""
    return [(0, 30), (1, 27), (2, 24), (3, 21), (4, 16), (5, 12), (6, 7), (7, 3)]
