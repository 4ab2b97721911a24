# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides shared fixtures for building waypoints, GPX documents
and merge configurations, plus stub elevation services so that no test
needs network access.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gpx_merger.config import MergeConfig
from gpx_merger.errors import ElevationLookupError
from gpx_merger.models import Waypoint

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Constants
# =============================================================================

#: Cell size that is exact in binary floating point (~13.9 km)
CELL_SIZE = 0.125

#: Minimum distance used by most scenarios
MIN_DISTANCE = 50.0


# =============================================================================
# Builders
# =============================================================================


def make_waypoint(
    latitude: float,
    longitude: float,
    name: str = "",
    elevation: float | None = None,
) -> Waypoint:
    return Waypoint(latitude=latitude, longitude=longitude, name=name, elevation=elevation)


def gpx_document(
    waypoints: list[tuple[float, float, str, float | None]],
    *,
    name: str | None = None,
) -> str:
    """Build a GPX 1.1 document from (lat, lon, name, elevation) tuples."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">',
    ]
    if name is not None:
        lines.append(f"  <metadata><name>{name}</name></metadata>")
    for lat, lon, wpt_name, ele in waypoints:
        lines.append(f'  <wpt lat="{lat}" lon="{lon}">')
        if ele is not None:
            lines.append(f"    <ele>{ele}</ele>")
        lines.append(f"    <name>{wpt_name}</name>")
        lines.append("  </wpt>")
    lines.append("</gpx>")
    return "\n".join(lines) + "\n"


def write_gpx(
    path: Path,
    waypoints: list[tuple[float, float, str, float | None]],
    **kwargs,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(gpx_document(waypoints, **kwargs), encoding="utf-8")
    return path


# =============================================================================
# Elevation Stubs
# =============================================================================


class StubElevationService:
    """Answers every lookup with a fixed elevation and records the calls."""

    def __init__(self, elevation: float | None = 1500.0) -> None:
        self.elevation = elevation
        self.calls: list[tuple[float, float]] = []

    def lookup_elevation(self, latitude: float, longitude: float) -> float | None:
        self.calls.append((latitude, longitude))
        return self.elevation


class FailingElevationService:
    """Fails every lookup like an unreachable service."""

    def __init__(self) -> None:
        self.calls = 0

    def lookup_elevation(self, latitude: float, longitude: float) -> float | None:
        self.calls += 1
        raise ElevationLookupError("service unreachable")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def stub_elevation() -> StubElevationService:
    return StubElevationService()


@pytest.fixture
def failing_elevation() -> FailingElevationService:
    return FailingElevationService()


@pytest.fixture
def merge_workspace(tmp_path: Path) -> Path:
    """Master file at the root and two addon files in ``sources/``.

    - master.gpx: Hut (45.0, 7.0, 1200 m)
    - sources/a.gpx: Near (~8 m from Hut), Far (~786 m from Hut, no elevation)
    - sources/b.gpx: an exact copy of Hut and a point 0.5 degrees away
    """
    write_gpx(tmp_path / "master.gpx", [(45.0, 7.0, "Hut", 1200.0)], name="Master")
    write_gpx(
        tmp_path / "sources" / "a.gpx",
        [(45.0, 7.0001, "Near", None), (45.0, 7.01, "Far", None)],
    )
    write_gpx(
        tmp_path / "sources" / "b.gpx",
        [(45.0, 7.0, "Hut", 1200.0), (45.5, 7.5, "Summit", 3000.0)],
    )
    return tmp_path


@pytest.fixture
def merge_config(merge_workspace: Path) -> MergeConfig:
    return MergeConfig.model_validate(
        {
            "minimumDistance": MIN_DISTANCE,
            "gridSizeInDegree": CELL_SIZE,
            "master": str(merge_workspace / "master.gpx"),
            "inputFolder": str(merge_workspace / "sources"),
            "elevationLookup": False,
            "renderElevation": False,
        }
    )
