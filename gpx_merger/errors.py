# -*- coding: utf-8 -*-
"""Error handling for gpx_merger.

This module provides the exception taxonomy of the merger and the
diagnostic record emitted by the closeness elimination pass.
"""

from dataclasses import dataclass

from gpx_merger.enums import Severity


class GpxMergerError(Exception):
    """Base class for all gpx_merger errors."""


class ConfigError(GpxMergerError):
    """Raised for malformed configuration or invalid name patterns."""


class GpxParseError(GpxMergerError):
    """Raised when a GPX source cannot be parsed.

    Attributes:
        message: Error message
        source: The file name or identifier that failed
    """

    def __init__(self, message: str, source: str | None = None):
        self.message = message
        self.source = source
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        if self.source:
            return f"{self.message} (in {self.source})"
        return self.message


class ElevationLookupError(GpxMergerError, LookupError):
    """Raised when the elevation service is unreachable or returns garbage."""


class ConfigurationMismatchWarning(UserWarning):
    """Search distance exceeds one grid cell; neighbor search may miss points."""


@dataclass(frozen=True)
class RemovalRecord:
    """A waypoint dropped by the closeness elimination pass.

    This is a data record, not an exception.

    Attributes:
        removed: Name of the waypoint marked for deletion
        conflict: Name of the waypoint it was too close to
        distance: Planar distance between both, in meters
        severity: Always WARNING
    """

    removed: str
    conflict: str
    distance: float
    severity: Severity = Severity.WARNING

    def __str__(self) -> str:
        """Format as human-readable diagnostic line."""
        return (
            f"Waypoint {self.removed} is marked for deletion, "
            f"as it is too close to {self.conflict} ({self.distance:.1f} m)"
        )
