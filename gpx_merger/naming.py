# -*- coding: utf-8 -*-
"""Waypoint name decomposition.

Waypoint names from different sources follow different conventions, e.g.
``"CH Matterhorn 4478m"`` or ``"Hörnlihütte (3260)"``. A regular expression
per source file (keyed by file name, with a ``"default"`` fallback) splits a
name into named groups:

- ``Prenom``: leading part of the name
- ``Name``: main part of the name
- ``Countries``: country codes
- ``Ele``: elevation in meters

The decomposition normalizes the name to ``"<Prenom> <Name>"`` and recovers
an elevation for waypoints that carry none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from re import Pattern

from gpx_merger.constants import DEFAULT_PATTERN_KEY
from gpx_merger.models import Waypoint  # noqa: TC001

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NameParts:
    """Named groups extracted from a waypoint name."""

    name: str = ""
    prenom: str = ""
    countries: str = ""
    elevation: float | None = None

    @property
    def display_name(self) -> str:
        return f"{self.prenom} {self.name}".strip(" ")


def _parse_elevation(text: str | None) -> float | None:
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


class WaypointNameParser:
    """Applies the configured name patterns to waypoints.

    Attributes:
        patterns: Compiled patterns keyed by source file name
    """

    def __init__(self, patterns: dict[str, Pattern[str]] | None = None) -> None:
        self.patterns = dict(patterns or {})

    def pattern_for(self, filename: str) -> Pattern[str] | None:
        return self.patterns.get(filename) or self.patterns.get(DEFAULT_PATTERN_KEY)

    def parse_name(self, filename: str, text: str) -> NameParts | None:
        """Decompose a waypoint name with the pattern of its source file.

        Args:
            filename: Name of the source file (selects the pattern)
            text: The waypoint name

        Returns:
            NameParts, or None if no pattern applies or it does not match
        """
        pattern = self.pattern_for(filename)
        if pattern is None:
            return None

        match = pattern.search(text)
        if match is None:
            return None

        groups = {key: value for key, value in match.groupdict().items() if value}
        return NameParts(
            name=groups.get("Name", ""),
            prenom=groups.get("Prenom", ""),
            countries=groups.get("Countries", ""),
            elevation=_parse_elevation(groups.get("Ele")),
        )

    def apply(self, filename: str, waypoint: Waypoint) -> bool:
        """Normalize a waypoint's name and fill a missing elevation in place.

        Returns:
            True if the name matched a pattern
        """
        parts = self.parse_name(filename, waypoint.name)
        if parts is None:
            logger.debug("No name pattern matched `%s` from %s", waypoint.name, filename)
            return False

        waypoint.name = parts.display_name
        if (
            waypoint.elevation is None
            and parts.elevation is not None
            and parts.elevation > 0
        ):
            waypoint.elevation = parts.elevation
        return True
