# -*- coding: utf-8 -*-
"""Core data models for gpx_merger.

This module contains the Pydantic models used across parsing,
merging and formatting:
- Waypoint: A named geographic location with optional elevation
- GpxFile: The waypoints of a GPX file plus its document metadata
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic_extra_types.coordinate import Latitude  # noqa: TC002
from pydantic_extra_types.coordinate import Longitude  # noqa: TC002


class Waypoint(BaseModel):
    """A single GPX waypoint.

    An absent elevation (``None``) is distinct from an elevation of zero.

    Two waypoints are the same point when name, latitude and longitude match
    exactly. Elevation is not part of that identity.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    latitude: Latitude
    longitude: Longitude
    elevation: float | None = None
    name: str = ""
    description: str | None = None
    comment: str | None = None
    symbol: str | None = None

    @property
    def identity(self) -> tuple[str, float, float]:
        return (self.name, self.latitude, self.longitude)

    def is_same_point(self, other: Waypoint) -> bool:
        """Check value identity (name + latitude + longitude)."""
        return self.identity == other.identity

    def __str__(self) -> str:
        return f"{self.name} ({self.latitude}, {self.longitude})"


class GpxFile(BaseModel):
    """The waypoints of a GPX file and its document level metadata.

    Tracks and routes are not modelled.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    description: str | None = None
    creator: str | None = None
    waypoints: list[Waypoint] = Field(default_factory=list)

    @property
    def waypoint_count(self) -> int:
        return len(self.waypoints)
