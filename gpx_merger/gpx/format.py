# -*- coding: utf-8 -*-
"""Formatting (serialization) of waypoints back to GPX.

The output is a GPX 1.1 document holding the waypoints only. An absent
elevation is omitted rather than written as zero.
"""

from collections.abc import Iterable

import gpxpy.gpx

from gpx_merger.constants import GPX_CREATOR
from gpx_merger.constants import GPX_ENCODING
from gpx_merger.constants import GPX_VERSION
from gpx_merger.models import GpxFile
from gpx_merger.models import Waypoint


def _to_gpx_waypoint(waypoint: Waypoint) -> gpxpy.gpx.GPXWaypoint:
    return gpxpy.gpx.GPXWaypoint(
        latitude=waypoint.latitude,
        longitude=waypoint.longitude,
        elevation=waypoint.elevation,
        name=waypoint.name or None,
        description=waypoint.description,
        comment=waypoint.comment,
        symbol=waypoint.symbol,
    )


def format_gpx_file(gpx_file: GpxFile) -> str:
    """Format a GpxFile as GPX XML text.

    Args:
        gpx_file: The file model to format

    Returns:
        Indented GPX 1.1 document
    """
    gpx = gpxpy.gpx.GPX()
    gpx.creator = gpx_file.creator or GPX_CREATOR
    gpx.name = gpx_file.name
    gpx.description = gpx_file.description
    gpx.waypoints = [_to_gpx_waypoint(wp) for wp in gpx_file.waypoints]
    return gpx.to_xml(version=GPX_VERSION)


def serialize_waypoints(
    points: Iterable[Waypoint],
    *,
    name: str | None = None,
    description: str | None = None,
) -> bytes:
    """Serialize waypoints to GPX bytes.

    Args:
        points: Waypoints in output order
        name: Optional document name
        description: Optional document description

    Returns:
        UTF-8 encoded GPX document
    """
    gpx_file = GpxFile(name=name, description=description, waypoints=list(points))
    return format_gpx_file(gpx_file).encode(GPX_ENCODING)
