# -*- coding: utf-8 -*-
"""GPX file parsing and formatting."""

from gpx_merger.gpx.format import format_gpx_file
from gpx_merger.gpx.format import serialize_waypoints
from gpx_merger.gpx.parser import GpxParser
from gpx_merger.gpx.parser import parse_gpx_bytes

__all__ = [
    "GpxParser",
    "format_gpx_file",
    "parse_gpx_bytes",
    "serialize_waypoints",
]
