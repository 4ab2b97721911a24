# -*- coding: utf-8 -*-
"""GPX Waypoint Merger.

Merges several GPX waypoint files into a single master set, dropping points
that lie too close to an already kept point, and optionally fills missing
elevations through an online lookup.

Usage:
    from pathlib import Path
    from gpx_merger import load_config, run_merge

    config = load_config(Path("gpx-merger.yaml"))
    result = run_merge(config, Path("merged.gpx"))
    print(f"{len(result.waypoints)} waypoints, {len(result.removed)} removed")

    # Or work on waypoint lists directly
    from gpx_merger import merge_waypoints
    result = merge_waypoints(
        master_points,
        [("addon.gpx", addon_points)],
        min_distance=50.0,
        cell_size_degrees=0.01,
    )
"""

__version__ = "0.1.0"

# Config
from gpx_merger.config import MergeConfig
from gpx_merger.config import load_config

# Constants
from gpx_merger.constants import METERS_PER_DEGREE
from gpx_merger.elevation import ElevationService
from gpx_merger.elevation import OpenMeteoElevationService
from gpx_merger.elevation import enrich_elevations
from gpx_merger.elevation import render_elevation_names
from gpx_merger.errors import ConfigError
from gpx_merger.errors import ConfigurationMismatchWarning
from gpx_merger.errors import ElevationLookupError
from gpx_merger.errors import GpxMergerError
from gpx_merger.errors import GpxParseError
from gpx_merger.errors import RemovalRecord
from gpx_merger.geo_utils import distance_2d
from gpx_merger.gpx.format import serialize_waypoints
from gpx_merger.gpx.parser import parse_gpx_bytes
from gpx_merger.interface import GpxMergerInterface
from gpx_merger.merger import MergeResult
from gpx_merger.merger import merge_waypoints
from gpx_merger.merger import run_merge
from gpx_merger.models import GpxFile
from gpx_merger.models import Waypoint
from gpx_merger.naming import NameParts
from gpx_merger.naming import WaypointNameParser
from gpx_merger.spatial import EliminationResult
from gpx_merger.spatial import SpatialGrid
from gpx_merger.spatial import cell_key
from gpx_merger.spatial import eliminate_closeby
from gpx_merger.spatial import neighbor_keys

__all__ = [
    # Constants
    "METERS_PER_DEGREE",
    # Errors
    "ConfigError",
    "ConfigurationMismatchWarning",
    "ElevationLookupError",
    # Elevation
    "ElevationService",
    # Spatial
    "EliminationResult",
    # Models
    "GpxFile",
    "GpxMergerError",
    # I/O
    "GpxMergerInterface",
    "GpxParseError",
    # Config
    "MergeConfig",
    "MergeResult",
    "NameParts",
    "OpenMeteoElevationService",
    "RemovalRecord",
    "SpatialGrid",
    "Waypoint",
    "WaypointNameParser",
    "cell_key",
    "distance_2d",
    "eliminate_closeby",
    "enrich_elevations",
    "load_config",
    "merge_waypoints",
    "neighbor_keys",
    "parse_gpx_bytes",
    "render_elevation_names",
    "run_merge",
    "serialize_waypoints",
]
