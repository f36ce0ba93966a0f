"""
Unit tests for config.py Pydantic models.

Tests validation, version defaults, and serialization of configuration classes.
"""

import pydantic
import pytest
from pathlib import Path

from fundmodel.config import (
    AppSettings,
    ModelParameters,
    SearchConfig,
    VERSION_DEFAULTS,
    configure,
)
from fundmodel.exceptions import ConfigurationError


class TestModelParameters:
    """Tests for ModelParameters validation."""

    def test_v1_defaults(self):
        """Test default values."""
        params = ModelParameters()

        assert params.version == "v1"
        assert params.accel_count == 5
        assert params.incub_count == 5
        assert params.capital == 0.5
        assert params.ug_research == 0.0
        assert params.startup_awards == 3

    def test_v2_defaults(self):
        params = ModelParameters(version="v2")

        assert params.accel_count == 4
        assert params.incub_count == 12
        assert params.capital == 0.35
        assert params.ug_research == 0.1

    def test_explicit_values_kept(self):
        params = ModelParameters(version="v2", accel_count=0, capital=0.0)
        assert params.accel_count == 0
        assert params.capital == 0.0
        assert params.incub_count == VERSION_DEFAULTS["v2"]["incub_count"]

    @pytest.mark.parametrize("field,value", [
        ("accel_count", 13),
        ("accel_count", -1),
        ("incub_count", 31),
        ("capital", -0.1),
        ("ug_research", -0.1),
        ("startup_awards", -1),
    ])
    def test_bounds(self, field, value):
        with pytest.raises(ValueError):
            ModelParameters(**{field: value})

    def test_unknown_version(self):
        with pytest.raises(ValueError):
            ModelParameters(version="v3")

    def test_extra_fields_forbidden(self):
        with pytest.raises(pydantic.ValidationError):
            ModelParameters(seed_amount=1.0)

    def test_immutable(self):
        """Test that parameters are frozen (immutable)."""
        params = ModelParameters()

        with pytest.raises(Exception):  # Pydantic raises ValidationError
            params.accel_count = 7

    def test_serialization(self):
        """Test JSON round trip."""
        params = ModelParameters(version="v2", accel_count=6, incub_count=9)

        data = params.model_dump()
        assert data["accel_count"] == 6
        assert data["version"] == "v2"

        restored = ModelParameters.model_validate_json(params.model_dump_json())
        assert restored == params


class TestConfigure:
    """Tests for the configure() constructor."""

    def test_basic(self):
        params = configure(3, 20)
        assert (params.version, params.accel_count, params.incub_count) == ("v1", 3, 20)

    def test_overrides(self):
        params = configure(4, 12, version="v2", capital=0.5, ug_research=0.0)
        assert params.capital == 0.5
        assert params.ug_research == 0.0

    def test_unknown_version(self):
        with pytest.raises(ConfigurationError, match="Available versions: v1, v2"):
            configure(1, 1, version="v3")

    def test_out_of_bounds_wrapped(self):
        with pytest.raises(ConfigurationError, match="Invalid model parameters"):
            configure(13, 0)


class TestSearchConfig:
    """Tests for SearchConfig validation."""

    def test_defaults(self):
        config = SearchConfig()
        assert config.version == "v1"
        assert config.accel_range == range(0, 13)
        assert config.incub_range == range(0, 31)
        assert config.capital is None

    def test_accel_bounds_order(self):
        """accel_max must be >= accel_min."""
        config = SearchConfig(accel_min=3, accel_max=3)
        assert list(config.accel_range) == [3]

        with pytest.raises(ValueError, match="accel_max.*must be.*accel_min"):
            SearchConfig(accel_min=5, accel_max=2)

    def test_incub_bounds_order(self):
        with pytest.raises(ValueError, match="incub_max.*must be.*incub_min"):
            SearchConfig(incub_min=10, incub_max=9)

    def test_upper_limits(self):
        with pytest.raises(ValueError):
            SearchConfig(accel_max=13)
        with pytest.raises(ValueError):
            SearchConfig(incub_max=31)


class TestAppSettings:
    """Tests for AppSettings environment variable loading."""

    def test_defaults(self, monkeypatch):
        """Test default settings."""
        monkeypatch.delenv("FUNDMODEL_LOG_LEVEL", raising=False)
        monkeypatch.delenv("FUNDMODEL_DEFAULT_VERSION", raising=False)
        monkeypatch.delenv("FUNDMODEL_OUTPUT_DIR", raising=False)
        settings = AppSettings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.default_version == "v1"
        assert settings.output_dir == Path("results")

    def test_env_override(self, monkeypatch):
        """Test environment variable override."""
        monkeypatch.setenv("FUNDMODEL_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FUNDMODEL_DEFAULT_VERSION", "v2")

        settings = AppSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.default_version == "v2"

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("FUNDMODEL_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError):
            AppSettings(_env_file=None)
