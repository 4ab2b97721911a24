# -*- coding: utf-8 -*-
"""Configuration for a merge run.

The configuration is read from a YAML file (``gpx-merger.yaml`` by default)
and validated into a :class:`MergeConfig`. The waypoint name patterns are
compiled at validation time so that an invalid regex fails before any
spatial processing starts.

Example file::

    minimumDistance: 50
    gridSizeInDegree: 0.01
    master: master.gpx
    inputFolder: ./sources
    elevationLookup: true
    renderElevation: false
    files:
      default: '^(?P<Name>.*?)\\s+(?P<Ele>\\d+)m$'
"""

from __future__ import annotations

import logging
import re
import warnings
from pathlib import Path
from re import Pattern
from typing import Annotated

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from gpx_merger.constants import CONFIG_ENCODING
from gpx_merger.constants import ELEVATION_API_URL
from gpx_merger.constants import METERS_PER_DEGREE
from gpx_merger.errors import ConfigError
from gpx_merger.errors import ConfigurationMismatchWarning

logger = logging.getLogger(__name__)


class MergeConfig(BaseModel):
    """Settings of a merge run, keyed by their YAML names."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    minimum_distance: Annotated[
        float,
        Field(gt=0, alias="minimumDistance", description="Meters between kept points"),
    ]
    grid_size_in_degree: Annotated[
        float,
        Field(gt=0, alias="gridSizeInDegree", description="Grid cell edge in degrees"),
    ]
    master: Path
    input_folder: Path = Field(default=Path("."), alias="inputFolder")
    output_folder: Path | None = Field(default=None, alias="outputFolder")
    files: dict[str, str] = Field(default_factory=dict)
    elevation_lookup: bool = Field(default=False, alias="elevationLookup")
    render_elevation: bool = Field(default=False, alias="renderElevation")
    elevation_workers: int = Field(default=1, ge=1, alias="elevationWorkers")
    elevation_url: str = Field(default=ELEVATION_API_URL, alias="elevationUrl")

    @field_validator("files")
    @classmethod
    def validate_patterns(cls, v: dict[str, str]) -> dict[str, str]:
        """Make sure every name pattern is a valid regular expression.

        Raises:
            ValueError: If a pattern does not compile
        """
        for key, pattern in v.items():
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid regex for {key}: {e}") from e
        return v

    @property
    def name_patterns(self) -> dict[str, Pattern[str]]:
        return {key: re.compile(pattern) for key, pattern in self.files.items()}

    @property
    def grid_size_in_meters(self) -> float:
        return self.grid_size_in_degree * METERS_PER_DEGREE

    def check_grid_size(self) -> bool:
        """Check that the minimum distance fits within one grid cell.

        Merge-in only compares a candidate with the points of its own cell.
        With a search distance larger than a cell, most near duplicates get
        past merge-in and are only caught by the elimination pass, which
        then removes both members of each pair.

        Returns:
            True if the configuration is consistent, False otherwise
            (a ConfigurationMismatchWarning is emitted)
        """
        if self.minimum_distance <= self.grid_size_in_meters:
            return True

        msg = (
            f"minimumDistance ({self.minimum_distance} m) exceeds one grid cell "
            f"({self.grid_size_in_meters:.1f} m); merge-in will admit near "
            "duplicates from neighboring cells"
        )
        logger.warning(msg)
        warnings.warn(msg, ConfigurationMismatchWarning, stacklevel=2)
        return False


def load_config(path: Path) -> MergeConfig:
    """Load and validate a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated MergeConfig

    Raises:
        ConfigError: If the file is missing, not valid YAML, or does not
            satisfy the configuration schema
    """
    try:
        content = path.read_text(encoding=CONFIG_ENCODING)
    except OSError as e:
        raise ConfigError(f"Cannot read config file `{path}`: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in `{path}`: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file `{path}` must contain a mapping")

    try:
        return MergeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in `{path}`:\n{e}") from e
