# -*- coding: utf-8 -*-
"""Merge pipeline.

    load master -> build grid -> merge in every addon file -> flatten
    -> eliminate close points -> elevation lookup -> render elevation -> write

Everything runs on the calling thread except the optional elevation worker
pool. Parse errors in any file abort the whole run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from gpx_merger.config import MergeConfig  # noqa: TC001
from gpx_merger.elevation import ElevationService
from gpx_merger.elevation import OpenMeteoElevationService
from gpx_merger.elevation import enrich_elevations
from gpx_merger.elevation import render_elevation_names
from gpx_merger.errors import RemovalRecord  # noqa: TC001
from gpx_merger.interface import GpxMergerInterface
from gpx_merger.models import Waypoint  # noqa: TC001
from gpx_merger.naming import WaypointNameParser
from gpx_merger.spatial import EliminationResult
from gpx_merger.spatial import SpatialGrid
from gpx_merger.spatial import eliminate_closeby

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Summary of a complete merge run."""

    waypoints: list[Waypoint]
    removed: list[RemovalRecord] = field(default_factory=list)
    master_count: int = 0
    admitted: dict[str, int] = field(default_factory=dict)
    enriched: int = 0
    min_kept_distance: float | None = None


def merge_waypoints(
    master: Iterable[Waypoint],
    sources: Iterable[tuple[str, Iterable[Waypoint]]],
    *,
    min_distance: float,
    cell_size_degrees: float,
    admitted: dict[str, int] | None = None,
) -> EliminationResult:
    """Merge addon waypoint sets into a master set and drop close points.

    Args:
        master: The master waypoints, always loaded into the grid
        sources: (label, waypoints) pairs merged in the given order
        min_distance: Minimum distance between kept points in meters
        cell_size_degrees: Grid cell size in degrees
        admitted: Optional mapping filled with the points admitted per label

    Returns:
        EliminationResult with the final waypoints
    """
    grid = SpatialGrid.build(master, cell_size_degrees)
    logger.info("Master spatial grid count : %d", len(grid))

    for label, points in sources:
        points = list(points)
        logger.info("GPX Addon from %s: %d waypoints.", label, len(points))
        added = grid.merge_in(points, min_distance)
        if admitted is not None:
            admitted[label] = added
        logger.info("+Addon spatial grid count : %d (%d admitted)", len(grid), added)

    # The grid is consumed here and only kept alive for neighbor lookups
    result = eliminate_closeby(grid.flatten(), grid, min_distance)
    if result.min_kept_distance is not None:
        logger.info(
            "Smallest distance between kept waypoints : %.1f m.",
            result.min_kept_distance,
        )
    return result


def run_merge(
    config: MergeConfig,
    output_path: Path,
    *,
    elevation_service: ElevationService | None = None,
) -> MergeResult:
    """Run the complete merge described by a configuration.

    Args:
        config: The merge configuration
        output_path: Where to write the merged GPX file
        elevation_service: Lookup used when ``elevationLookup`` is enabled
            (defaults to Open-Meteo)

    Returns:
        MergeResult summary

    Raises:
        FileNotFoundError: If the master file or input folder is missing
        GpxParseError: If any GPX file is malformed
    """
    config.check_grid_size()
    name_parser = WaypointNameParser(config.name_patterns)

    master = GpxMergerInterface.load_gpx(config.master, name_parser=name_parser)
    logger.info("GPX Master: %d waypoints.", master.waypoint_count)
    logger.info(
        "Spatial grid width : %f km, using Euclidean distance calculation!",
        config.grid_size_in_meters / 1000,
    )
    logger.info("Minimum distance between points : %f m.", config.minimum_distance)

    source_paths = GpxMergerInterface.discover_gpx_files(
        config.input_folder,
        exclude=[config.master, output_path],
    )
    sources = (
        (path.name, GpxMergerInterface.load_gpx(path, name_parser=name_parser).waypoints)
        for path in source_paths
    )

    admitted: dict[str, int] = {}
    elimination = merge_waypoints(
        master.waypoints,
        sources,
        min_distance=config.minimum_distance,
        cell_size_degrees=config.grid_size_in_degree,
        admitted=admitted,
    )
    waypoints = elimination.kept

    enriched = 0
    if config.elevation_lookup:
        service = elevation_service or OpenMeteoElevationService(config.elevation_url)
        enriched = enrich_elevations(
            waypoints, service, max_workers=config.elevation_workers
        )
        logger.info("Elevation added to %d waypoints.", enriched)

    if config.render_elevation:
        render_elevation_names(waypoints)

    logger.info("GPX Output: %d waypoints.", len(waypoints))
    GpxMergerInterface.save_gpx(
        master.model_copy(update={"waypoints": waypoints}), output_path
    )

    return MergeResult(
        waypoints=waypoints,
        removed=elimination.removed,
        master_count=master.waypoint_count,
        admitted=admitted,
        enriched=enriched,
        min_kept_distance=elimination.min_kept_distance,
    )
