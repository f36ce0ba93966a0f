"""
Serialization module for FundModel persistence.

Purpose
-------
Provides JSON serialization for model parameters, simulated timelines and
feasibility search results, plus CSV export of timelines. Files carry a
schema version; loading a file written under another schema emits a
UserWarning.

Supports serialization of:
- ModelParameters (round trip)
- Timeline (export; timelines are recomputed, never loaded back)
- SearchResult (round trip)

Example
-------
>>> from pathlib import Path
>>> from fundmodel.config import configure
>>> from fundmodel.serialization import save_parameters, load_parameters
>>> save_parameters(configure(4, 12, version="v2"), Path("params.json"))
>>> params = load_parameters(Path("params.json"))
"""

from __future__ import annotations
from typing import Any, Dict, TYPE_CHECKING
from pathlib import Path
import json
import logging
import warnings

from .config import ModelParameters
from .exceptions import ValidationError

if TYPE_CHECKING:
    from .timeline import Timeline
    from .search import SearchResult
    from .types import SearchResultDict, TimelineDict

__all__ = [
    "SCHEMA_VERSION",
    "save_parameters",
    "load_parameters",
    "timeline_to_dict",
    "save_timeline",
    "save_timeline_csv",
    "search_result_to_dict",
    "search_result_from_dict",
    "save_search_result",
    "load_search_result",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema(data: Any, path: Path) -> None:
    if not isinstance(data, dict):
        raise ValidationError(
            f"{path}: expected a JSON object, got {type(data).__name__}."
        )
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"{path}: schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _write_json(data: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.info("Wrote %s", path)


# ---------------------------------------------------------------------------
# ModelParameters
# ---------------------------------------------------------------------------

def save_parameters(params: ModelParameters, path: Path) -> None:
    """
    Save ModelParameters to a JSON file.

    Parameters
    ----------
    params : ModelParameters
        Parameters to save
    path : Path
        Output file path (should have .json extension)
    """
    data = {"schema_version": SCHEMA_VERSION, **params.model_dump()}
    _write_json(data, path)


def load_parameters(path: Path) -> ModelParameters:
    """
    Load ModelParameters from a JSON file.

    Raises
    ------
    ValidationError
        If the file does not hold a JSON object.
    pydantic.ValidationError
        If the file content does not describe valid parameters.
    """
    with open(path, "r") as f:
        data = json.load(f)
    _check_schema(data, path)
    data.pop("schema_version", None)
    return ModelParameters.model_validate(data)


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

def timeline_to_dict(timeline: Timeline) -> TimelineDict:
    """Convert a Timeline to its JSON document."""
    return {
        "schema_version": SCHEMA_VERSION,
        "parameters": timeline.params.model_dump(),
        "status": timeline.status,
        "steady_state_spend": timeline.steady_state_spend,
        "records": timeline.to_records(),
    }


def save_timeline(timeline: Timeline, path: Path) -> None:
    """Save a Timeline as JSON."""
    _write_json(timeline_to_dict(timeline), path)


def save_timeline_csv(timeline: Timeline, path: Path) -> None:
    """Save a Timeline as CSV, one row per year."""
    path.parent.mkdir(parents=True, exist_ok=True)
    timeline.to_frame().to_csv(path)
    logger.info("Wrote %s", path)


# ---------------------------------------------------------------------------
# SearchResult
# ---------------------------------------------------------------------------

def search_result_to_dict(result: SearchResult) -> SearchResultDict:
    return {
        "schema_version": SCHEMA_VERSION,
        "version": result.version,
        "accel_bounds": list(result.accel_bounds),
        "incub_bounds": list(result.incub_bounds),
        "n_evaluated": result.n_evaluated,
        "pareto": [list(p) for p in result.pareto],
        "all": [list(p) for p in sorted(result.all)],
    }


def search_result_from_dict(data: Dict[str, Any]) -> SearchResult:
    from .search import SearchResult

    return SearchResult(
        version=data["version"],
        all=frozenset((int(a), int(b)) for a, b in data["all"]),
        pareto=[(int(a), int(b)) for a, b in data["pareto"]],
        accel_bounds=tuple(data["accel_bounds"]),
        incub_bounds=tuple(data["incub_bounds"]),
        n_evaluated=int(data["n_evaluated"]),
    )


def save_search_result(result: SearchResult, path: Path) -> None:
    """
    Save a SearchResult to JSON.

    Examples
    --------
    >>> save_search_result(result, Path("results/search_v1.json"))
    """
    _write_json(search_result_to_dict(result), path)


def load_search_result(path: Path) -> SearchResult:
    """Load a SearchResult saved by ``save_search_result``."""
    with open(path, "r") as f:
        data = json.load(f)
    _check_schema(data, path)
    return search_result_from_dict(data)
