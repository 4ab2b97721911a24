from __future__ import annotations

import math

import gpxpy.geo

from gpx_merger.constants import METERS_PER_DEGREE
from gpx_merger.constants import MIN_LONGITUDE_SCALE
from gpx_merger.models import Waypoint  # noqa: TC001


def distance_2d(point: Waypoint, other: Waypoint) -> float:
    """Return the planar distance between two waypoints in meters.

    Uses the Euclidean approximation of gpxpy (longitude scaled by the cosine
    of the first point's latitude). Elevation is ignored.
    """
    return gpxpy.geo.distance(
        point.latitude,
        point.longitude,
        None,
        other.latitude,
        other.longitude,
        None,
    )


def meters_to_degrees(meters: float) -> float:
    return meters / METERS_PER_DEGREE


def meters_to_longitude_degrees(meters: float, latitude: float) -> float:
    """Convert meters to degrees of longitude at the given latitude.

    A degree of longitude shrinks with the cosine of the latitude. The
    cosine is clamped so the result stays finite at the poles.
    """
    scale = max(math.cos(math.radians(latitude)), MIN_LONGITUDE_SCALE)
    return meters_to_degrees(meters) / scale
