"""
Configuration management module for FundModel.

Purpose
-------
Centralized configuration using Pydantic models for type-safe parameter
management, validation, and serialization. Supports environment variables
for application settings and programmatic defaults per model version.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for config files
- Version-aware: Omitted values take the defaults of the chosen model version

Example
-------
>>> from fundmodel.config import ModelParameters, SearchConfig, configure
>>> params = configure(5, 5)
>>> params.capital
0.5
>>> v2 = ModelParameters(version="v2")
>>> (v2.accel_count, v2.incub_count, v2.capital, v2.ug_research)
(4, 12, 0.35, 0.1)
>>>
>>> # Serialize to dict/JSON
>>> json_str = params.model_dump_json()
>>> loaded = ModelParameters.model_validate_json(json_str)
"""

from __future__ import annotations
from typing import Optional, Literal
from pathlib import Path

import pydantic
from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    MAX_ACCEL_COUNT,
    MAX_INCUB_COUNT,
    DEFAULT_ACCEL_COUNT_V1,
    DEFAULT_INCUB_COUNT_V1,
    DEFAULT_ACCEL_COUNT_V2,
    DEFAULT_INCUB_COUNT_V2,
    DEFAULT_CAPITAL_V1,
    DEFAULT_CAPITAL_V2,
    DEFAULT_UG_RESEARCH_V2,
    DEFAULT_STARTUP_AWARDS,
)
from .exceptions import ConfigurationError
from .utils import inclusive_range

__all__ = [
    "ModelVersion",
    "MODEL_VERSIONS",
    "VERSION_DEFAULTS",
    "ModelParameters",
    "SearchConfig",
    "AppSettings",
    "configure",
]


ModelVersion = Literal["v1", "v2"]
MODEL_VERSIONS = ("v1", "v2")

VERSION_DEFAULTS = {
    "v1": {
        "accel_count": DEFAULT_ACCEL_COUNT_V1,
        "incub_count": DEFAULT_INCUB_COUNT_V1,
        "capital": DEFAULT_CAPITAL_V1,
        "ug_research": 0.0,
    },
    "v2": {
        "accel_count": DEFAULT_ACCEL_COUNT_V2,
        "incub_count": DEFAULT_INCUB_COUNT_V2,
        "capital": DEFAULT_CAPITAL_V2,
        "ug_research": DEFAULT_UG_RESEARCH_V2,
    },
}


def _version_default(field: str, v, info):
    if v is not None:
        return v
    version = info.data.get("version", "v1")
    return VERSION_DEFAULTS[version][field]


# ---------------------------------------------------------------------------
# Model Parameters
# ---------------------------------------------------------------------------

class ModelParameters(BaseModel):
    """
    Tunable inputs of one funding model run.

    Attributes
    ----------
    version : {"v1", "v2"}
        Model version. Selects the spend categories and policies.
    accel_count : int
        Accelerator cohorts issued per year (0-12).
    incub_count : int
        Incubator cohorts issued per year (0-30).
    capital : float
        Capital/infrastructure spend per year, millions.
    ug_research : float
        Undergraduate research spend per year, millions. Ignored by v1.
    startup_awards : int
        Start-up grants awarded per year. Ignored by v1.

    Omitted counts and amounts take the defaults of ``version``.

    Examples
    --------
    >>> params = ModelParameters(accel_count=3, incub_count=20)
    >>> params.version
    'v1'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: ModelVersion = Field(
        default="v1",
        description="Funding model version"
    )
    accel_count: Optional[int] = Field(
        default=None,
        ge=0,
        le=MAX_ACCEL_COUNT,
        validate_default=True,
        description="Accelerator cohorts per year"
    )
    incub_count: Optional[int] = Field(
        default=None,
        ge=0,
        le=MAX_INCUB_COUNT,
        validate_default=True,
        description="Incubator cohorts per year"
    )
    capital: Optional[float] = Field(
        default=None,
        ge=0,
        validate_default=True,
        description="Capital/infrastructure spend per year (millions)"
    )
    ug_research: Optional[float] = Field(
        default=None,
        ge=0,
        validate_default=True,
        description="Undergraduate research spend per year (millions)"
    )
    startup_awards: int = Field(
        default=DEFAULT_STARTUP_AWARDS,
        ge=0,
        description="Start-up grants awarded per year"
    )

    @field_validator("accel_count", "incub_count", "capital", "ug_research")
    @classmethod
    def fill_version_defaults(cls, v, info):
        """Fill omitted values from the version defaults."""
        return _version_default(info.field_name, v, info)


# ---------------------------------------------------------------------------
# Search Configuration
# ---------------------------------------------------------------------------

class SearchConfig(BaseModel):
    """
    Bounds of the (accelerator, incubator) feasibility search.

    Attributes
    ----------
    version : {"v1", "v2"}
        Model version to simulate.
    accel_min, accel_max : int
        Inclusive accelerator count bounds.
    incub_min, incub_max : int
        Inclusive incubator count bounds.
    capital, ug_research : float, optional
        Fixed annual amounts held constant across the search.
        Omitted values take the version defaults.

    Examples
    --------
    >>> config = SearchConfig(accel_max=8, incub_max=20)
    >>> list(config.accel_range)[-1]
    8
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: ModelVersion = Field(default="v1", description="Funding model version")
    accel_min: int = Field(default=0, ge=0, le=MAX_ACCEL_COUNT)
    accel_max: int = Field(default=MAX_ACCEL_COUNT, ge=0, le=MAX_ACCEL_COUNT)
    incub_min: int = Field(default=0, ge=0, le=MAX_INCUB_COUNT)
    incub_max: int = Field(default=MAX_INCUB_COUNT, ge=0, le=MAX_INCUB_COUNT)
    capital: Optional[float] = Field(default=None, ge=0)
    ug_research: Optional[float] = Field(default=None, ge=0)

    @field_validator("accel_max")
    @classmethod
    def validate_accel_max(cls, v, info):
        """Ensure accel_min <= accel_max."""
        lo = info.data.get("accel_min", 0)
        if v < lo:
            raise ValueError(f"accel_max ({v}) must be >= accel_min ({lo})")
        return v

    @field_validator("incub_max")
    @classmethod
    def validate_incub_max(cls, v, info):
        """Ensure incub_min <= incub_max."""
        lo = info.data.get("incub_min", 0)
        if v < lo:
            raise ValueError(f"incub_max ({v}) must be >= incub_min ({lo})")
        return v

    @property
    def accel_range(self) -> range:
        return inclusive_range(self.accel_min, self.accel_max, name="accel")

    @property
    def incub_range(self) -> range:
        return inclusive_range(self.incub_min, self.incub_max, name="incub")


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    should be prefixed with FUNDMODEL_ (e.g., FUNDMODEL_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    default_version : str
        Model version used by the CLI when none is given.
    output_dir : Path
        Base directory for relative CLI output paths (timelines, search
        results and charts).

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="FUNDMODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    default_version: ModelVersion = Field(
        default="v1",
        description="Default funding model version"
    )
    output_dir: Path = Field(
        default=Path("results"),
        description="Output directory for exported results"
    )


# ---------------------------------------------------------------------------
# Public constructor
# ---------------------------------------------------------------------------

def configure(
    accel_count: int,
    incub_count: int,
    *,
    version: str = "v1",
    capital: Optional[float] = None,
    ug_research: Optional[float] = None,
) -> ModelParameters:
    """
    Build validated ModelParameters.

    Raises
    ------
    ConfigurationError
        If the version is unknown or a value is out of bounds.

    Examples
    --------
    >>> configure(4, 12, version="v2", capital=0.5).capital
    0.5
    """
    if version not in MODEL_VERSIONS:
        raise ConfigurationError(
            f"Unknown model version '{version}'. "
            f"Available versions: {', '.join(MODEL_VERSIONS)}."
        )
    try:
        return ModelParameters(
            version=version,
            accel_count=accel_count,
            incub_count=incub_count,
            capital=capital,
            ug_research=ug_research,
        )
    except pydantic.ValidationError as e:
        raise ConfigurationError(f"Invalid model parameters: {e}") from e
