# -*- coding: utf-8 -*-
"""Spatial grid deduplication of waypoints.

Waypoints are bucketed into coarse lat/lon cells so that distance checks are
only made against points that can possibly be close:

1. The master waypoints are loaded into a grid without any checks.
2. Each addon file is merged in: a candidate is compared against the points
   of its own cell only and dropped if one of them is too close.
3. The grid is flattened and a closeness elimination pass compares every
   point against the block of cells around it, catching near pairs that
   straddle a cell boundary.

Distances are planar (see :func:`gpx_merger.geo_utils.distance_2d`), which is
accurate enough at grid scale.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field

from gpx_merger.constants import CELL_KEY_PRECISION
from gpx_merger.errors import RemovalRecord
from gpx_merger.geo_utils import distance_2d
from gpx_merger.geo_utils import meters_to_degrees
from gpx_merger.geo_utils import meters_to_longitude_degrees
from gpx_merger.models import Waypoint

logger = logging.getLogger(__name__)

#: "<floored lat index>,<floored lon index>" with fixed decimals
CellKey = str


def _index_key(lat_index: int, lon_index: int) -> CellKey:
    return f"{lat_index:.{CELL_KEY_PRECISION}f},{lon_index:.{CELL_KEY_PRECISION}f}"


def _format_key(latitude: float, longitude: float, cell_size_degrees: float) -> CellKey:
    return _index_key(
        math.floor(latitude / cell_size_degrees),
        math.floor(longitude / cell_size_degrees),
    )


def _check_cell_size(cell_size_degrees: float) -> None:
    if not cell_size_degrees > 0:
        raise ValueError(f"Cell size must be positive, got {cell_size_degrees}")


def cell_key(point: Waypoint, cell_size_degrees: float) -> CellKey:
    """Compute the grid cell key of a waypoint.

    Args:
        point: The waypoint to index
        cell_size_degrees: Edge length of a cell in degrees (> 0)

    Returns:
        Key of the cell containing the point

    Raises:
        ValueError: If cell_size_degrees is not positive
    """
    _check_cell_size(cell_size_degrees)
    return _format_key(point.latitude, point.longitude, cell_size_degrees)


def _index_range(coordinate: float, offset: float, cell_size_degrees: float) -> range:
    return range(
        math.floor((coordinate - offset) / cell_size_degrees),
        math.floor((coordinate + offset) / cell_size_degrees) + 1,
    )


def neighbor_keys(
    point: Waypoint,
    cell_size_degrees: float,
    search_distance_meters: float,
) -> list[CellKey]:
    """Compute the keys of all cells that may hold points near ``point``.

    The point is shifted by -offset and +offset degrees along each axis and
    every cell between the shifted edges is returned. The latitude offset is
    the search distance converted with a fixed meters per degree factor. The
    longitude offset is widened by 1/cos(latitude) so it still spans the
    search distance away from the equator. When both offsets are below one
    cell this is the (up to) 3x3 block around the point's own cell; larger
    offsets, such as a small cell at high latitude, span more cells.

    Keys are ordered by latitude index, then longitude index.

    Args:
        point: The query waypoint
        cell_size_degrees: Edge length of a cell in degrees (> 0)
        search_distance_meters: Search radius in meters

    Returns:
        Ordered list of distinct cell keys, the point's own cell included
    """
    _check_cell_size(cell_size_degrees)
    lat_offset = meters_to_degrees(search_distance_meters)
    lon_offset = meters_to_longitude_degrees(search_distance_meters, point.latitude)
    lon_indices = _index_range(point.longitude, lon_offset, cell_size_degrees)
    return [
        _index_key(lat_index, lon_index)
        for lat_index in _index_range(point.latitude, lat_offset, cell_size_degrees)
        for lon_index in lon_indices
    ]


class SpatialGrid:
    """Mapping of cell keys to the waypoints accepted in that cell.

    Cells keep their points in insertion order and are themselves iterated
    in creation order.
    """

    def __init__(self, cell_size_degrees: float) -> None:
        _check_cell_size(cell_size_degrees)
        self.cell_size_degrees = cell_size_degrees
        self._cells: dict[CellKey, list[Waypoint]] = {}

    @classmethod
    def build(cls, points: Iterable[Waypoint], cell_size_degrees: float) -> SpatialGrid:
        """Load points into a new grid without any distance checks."""
        grid = cls(cell_size_degrees)
        for point in points:
            grid.add(point)
        return grid

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[CellKey]:
        return iter(self._cells)

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    @property
    def point_count(self) -> int:
        return sum(len(cell) for cell in self._cells.values())

    def key_of(self, point: Waypoint) -> CellKey:
        return _format_key(point.latitude, point.longitude, self.cell_size_degrees)

    def cell(self, key: CellKey) -> list[Waypoint]:
        """Return the points of a cell (empty list for unknown keys)."""
        return self._cells.get(key, [])

    def add(self, point: Waypoint) -> CellKey:
        key = self.key_of(point)
        self._cells.setdefault(key, []).append(point)
        return key

    def merge_in(self, candidates: Iterable[Waypoint], min_distance: float) -> int:
        """Add candidates that are not too close to a point of their own cell.

        Candidates are processed in order, so among near duplicates the one
        arriving first wins. Neighboring cells are not looked at; a candidate
        whose nearest point lies across a cell boundary is accepted here and
        left to :func:`eliminate_closeby`.

        Args:
            candidates: Waypoints of an addon source
            min_distance: Minimum distance in meters

        Returns:
            Number of candidates added to the grid
        """
        added = 0
        for candidate in candidates:
            key = self.key_of(candidate)
            cell = self._cells.get(key, [])
            if any(distance_2d(candidate, existing) < min_distance for existing in cell):
                continue
            self._cells.setdefault(key, []).append(candidate)
            added += 1
        return added

    def flatten(self) -> list[Waypoint]:
        """Concatenate all cells into one list."""
        return [point for cell in self._cells.values() for point in cell]


@dataclass
class EliminationResult:
    """Outcome of :func:`eliminate_closeby`.

    Attributes:
        kept: Retained waypoints, in input order
        removed: One record per removed waypoint
        min_kept_distance: Smallest distance seen between a retained point
            and any other compared point, None if nothing was compared
    """

    kept: list[Waypoint] = field(default_factory=list)
    removed: list[RemovalRecord] = field(default_factory=list)
    min_kept_distance: float | None = None


def _first_conflict(
    point: Waypoint,
    grid: SpatialGrid,
    min_distance: float,
) -> tuple[Waypoint | None, float | None]:
    """Scan the neighborhood of ``point`` for a distinct point too close to it.

    Returns:
        (conflicting point, distance) on the first hit, otherwise
        (None, smallest distance seen or None)
    """
    closest: float | None = None
    for key in neighbor_keys(point, grid.cell_size_degrees, min_distance):
        for other in grid.cell(key):
            if point.is_same_point(other):
                continue
            dist = distance_2d(point, other)
            if dist < min_distance:
                return other, dist
            if closest is None or dist < closest:
                closest = dist
    return None, closest


def eliminate_closeby(
    points: list[Waypoint],
    grid: SpatialGrid,
    min_distance: float,
) -> EliminationResult:
    """Remove points that are too close to another distinct point.

    Every point is checked against the grid it was flattened from, i.e.
    against the full accepted set. Removals do not shrink that set, so both
    members of a near pair that ended up in different cells are removed, and
    chains of close points may lose more members than strictly needed. The
    first conflict found decides; no search for the closest conflict is made.

    Args:
        points: The flattened grid
        grid: The grid ``points`` was flattened from
        min_distance: Minimum distance in meters

    Returns:
        EliminationResult with kept points and removal records
    """
    result = EliminationResult()
    for point in points:
        conflict, dist = _first_conflict(point, grid, min_distance)
        if conflict is not None:
            record = RemovalRecord(
                removed=point.name,
                conflict=conflict.name,
                distance=dist,
            )
            logger.info("%s", record)
            result.removed.append(record)
            continue

        result.kept.append(point)
        if dist is not None and (
            result.min_kept_distance is None or dist < result.min_kept_distance
        ):
            result.min_kept_distance = dist

    return result
