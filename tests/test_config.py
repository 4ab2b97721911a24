# -*- coding: utf-8 -*-
"""Tests for configuration loading and validation."""

import warnings
from pathlib import Path

import pytest

from gpx_merger.config import MergeConfig
from gpx_merger.config import load_config
from gpx_merger.errors import ConfigError
from gpx_merger.errors import ConfigurationMismatchWarning

VALID_CONFIG = """\
minimumDistance: 50
gridSizeInDegree: 0.01
master: master.gpx
inputFolder: ./sources
elevationLookup: true
renderElevation: false
files:
  default: '^(?P<Name>.*?)\\s+(?P<Ele>\\d+)m$'
  alps.gpx: '^(?P<Countries>[A-Z/]+)\\s+(?P<Name>.+)$'
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "gpx-merger.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config function."""

    def test_valid_config(self, tmp_path):
        """Test that all YAML keys are mapped."""
        config = load_config(_write(tmp_path, VALID_CONFIG))
        assert config.minimum_distance == 50.0
        assert config.grid_size_in_degree == 0.01
        assert config.master == Path("master.gpx")
        assert config.input_folder == Path("./sources")
        assert config.elevation_lookup is True
        assert config.render_elevation is False
        assert set(config.files) == {"default", "alps.gpx"}

    def test_defaults(self, tmp_path):
        """Test optional keys and their defaults."""
        config = load_config(
            _write(tmp_path, "minimumDistance: 10\ngridSizeInDegree: 0.1\nmaster: m.gpx\n")
        )
        assert config.input_folder == Path(".")
        assert config.files == {}
        assert config.elevation_lookup is False
        assert config.render_elevation is False
        assert config.elevation_workers == 1

    def test_patterns_compiled(self, tmp_path):
        """Test that name patterns are available compiled."""
        config = load_config(_write(tmp_path, VALID_CONFIG))
        match = config.name_patterns["default"].search("Matterhorn 4478m")
        assert match is not None
        assert match.group("Ele") == "4478"

    def test_missing_file(self, tmp_path):
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test that a YAML syntax error is a configuration error."""
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(_write(tmp_path, "minimumDistance: [50\n"))

    def test_not_a_mapping(self, tmp_path):
        """Test that a YAML list is rejected."""
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(_write(tmp_path, "- 50\n- 0.01\n"))

    def test_invalid_regex(self, tmp_path):
        """Test that an invalid name pattern aborts loading."""
        content = "minimumDistance: 50\ngridSizeInDegree: 0.01\nmaster: m.gpx\nfiles:\n  default: '(?P<Name>'\n"
        with pytest.raises(ConfigError, match="invalid regex for default"):
            load_config(_write(tmp_path, content))

    @pytest.mark.parametrize(
        "content",
        [
            "minimumDistance: 0\ngridSizeInDegree: 0.01\nmaster: m.gpx\n",
            "minimumDistance: 50\ngridSizeInDegree: -0.01\nmaster: m.gpx\n",
            "gridSizeInDegree: 0.01\nmaster: m.gpx\n",
            "minimumDistance: 50\ngridSizeInDegree: 0.01\n",
        ],
    )
    def test_schema_violations(self, tmp_path, content):
        """Test that missing or non-positive values are rejected."""
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(_write(tmp_path, content))


class TestCheckGridSize:
    """Tests for MergeConfig.check_grid_size."""

    @staticmethod
    def _config(minimum_distance: float, grid_size: float) -> MergeConfig:
        return MergeConfig(
            minimum_distance=minimum_distance,
            grid_size_in_degree=grid_size,
            master=Path("m.gpx"),
        )

    def test_consistent(self):
        """Test that a distance within one cell passes silently."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert self._config(50.0, 0.01).check_grid_size() is True

    def test_mismatch_warns(self):
        """Test that a distance beyond one cell is surfaced."""
        with pytest.warns(ConfigurationMismatchWarning, match="exceeds one grid cell"):
            assert self._config(5000.0, 0.01).check_grid_size() is False

    def test_grid_size_in_meters(self):
        assert self._config(50.0, 0.01).grid_size_in_meters == pytest.approx(1110.0)
