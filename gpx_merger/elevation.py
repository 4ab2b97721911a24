# -*- coding: utf-8 -*-
"""Elevation lookup for waypoints without elevation data.

The lookup service is an injectable capability (:class:`ElevationService`)
so tests and offline runs can substitute a stub. The default implementation
queries the Open-Meteo elevation API, which answers with a JSON body like::

    {"elevation": [1234.0]}

Failures are never fatal for a merge run: the waypoint simply keeps no
elevation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

import orjson
import requests

from gpx_merger.constants import ELEVATION_API_URL
from gpx_merger.constants import ELEVATION_TIMEOUT
from gpx_merger.errors import ElevationLookupError
from gpx_merger.models import Waypoint  # noqa: TC001

logger = logging.getLogger(__name__)


class ElevationService(Protocol):
    """Protocol for elevation lookups."""

    def lookup_elevation(self, latitude: float, longitude: float) -> float | None:
        """Return the elevation in meters, None if the service has none.

        Raises:
            ElevationLookupError: On network or payload failure
        """
        ...


class OpenMeteoElevationService:
    """Elevation lookups against the Open-Meteo REST API.

    Resolution is roughly 90m. The number of calls is rate limited by the
    provider, check its website for the current limits.
    """

    def __init__(
        self,
        url: str = ELEVATION_API_URL,
        *,
        timeout: float = ELEVATION_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def lookup_elevation(self, latitude: float, longitude: float) -> float | None:
        params = {"latitude": f"{latitude:f}", "longitude": f"{longitude:f}"}
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ElevationLookupError(
                f"Elevation request failed for ({latitude}, {longitude}): {e}"
            ) from e

        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise ElevationLookupError(f"Invalid elevation payload: {e}") from e

        if not isinstance(payload, dict):
            raise ElevationLookupError(f"Unexpected elevation payload: {payload!r}")

        elevations = payload.get("elevation")
        if elevations is None:
            return None
        if not isinstance(elevations, list):
            raise ElevationLookupError(f"Unexpected elevation array: {elevations!r}")
        if not elevations:
            return None

        value = elevations[0]
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ElevationLookupError(f"Invalid elevation value: {value!r}") from e


def _safe_lookup(service: ElevationService, waypoint: Waypoint) -> float | None:
    try:
        return service.lookup_elevation(waypoint.latitude, waypoint.longitude)
    except ElevationLookupError as e:
        logger.warning("No elevation for waypoint %s: %s", waypoint.name, e)
        return None


def enrich_elevations(
    points: Iterable[Waypoint],
    service: ElevationService,
    *,
    max_workers: int = 1,
) -> int:
    """Fill in the elevation of waypoints that have none.

    Waypoints that already carry an elevation are never looked up nor
    overwritten. Failed lookups leave the elevation absent.

    Args:
        points: Waypoints to enrich (modified in place)
        service: Elevation lookup capability
        max_workers: Number of concurrent lookups (1 = sequential)

    Returns:
        Number of waypoints that received an elevation
    """
    missing = [wp for wp in points if wp.elevation is None]
    if not missing:
        return 0

    logger.info("Looking up elevation for %d waypoints", len(missing))

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda wp: _safe_lookup(service, wp), missing))
    else:
        results = [_safe_lookup(service, wp) for wp in missing]

    enriched = 0
    for waypoint, elevation in zip(missing, results, strict=True):
        if elevation is not None:
            waypoint.elevation = elevation
            enriched += 1
    return enriched


def render_elevation_names(points: Iterable[Waypoint]) -> None:
    """Append the elevation to the name, e.g. ``"Matterhorn (4478 m)"``."""
    for waypoint in points:
        if waypoint.elevation is not None:
            waypoint.name += f" ({waypoint.elevation:.0f} m)"
