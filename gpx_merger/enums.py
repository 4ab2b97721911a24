# -*- coding: utf-8 -*-
"""Enumerations for gpx_merger."""

from enum import Enum


class FileExtension(str, Enum):
    """File extensions handled by the merger (with dot).

    Attributes:
        GPX: GPS exchange format waypoint file
    """

    GPX = ".gpx"


class Severity(str, Enum):
    """Severity level for diagnostic records.

    Attributes:
        ERROR: Critical error
        WARNING: Non-fatal warning
    """

    ERROR = "error"
    WARNING = "warning"
