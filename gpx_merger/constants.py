# -*- coding: utf-8 -*-
"""Constants used throughout the gpx_merger library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers/strings scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# File Encodings
# -----------------------------------------------------------------------------

#: Encoding used for GPX files
GPX_ENCODING = "utf-8"

#: Encoding used for the YAML configuration file
CONFIG_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Spatial Grid
# -----------------------------------------------------------------------------

#: Rough length of one degree (latitude) in meters. Used for grid sizing and
#: neighbor search offsets; valid away from the poles.
METERS_PER_DEGREE: float = 111_000.0

#: Decimal precision used when formatting the floored cell indices of a key
CELL_KEY_PRECISION: int = 2

#: Lower bound of cos(latitude) when converting meters to longitude degrees
MIN_LONGITUDE_SCALE: float = 1e-3

# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

#: Configuration file looked up when none is given on the command line
DEFAULT_CONFIG_FILENAME = "gpx-merger.yaml"

#: Key of the name pattern used when no file-specific pattern exists
DEFAULT_PATTERN_KEY = "default"

# -----------------------------------------------------------------------------
# Elevation Service
# -----------------------------------------------------------------------------

#: Open-Meteo elevation endpoint (~90m resolution, rate limited)
ELEVATION_API_URL = "https://api.open-meteo.com/v1/elevation"

#: Seconds before an elevation request is abandoned
ELEVATION_TIMEOUT: float = 30.0

# -----------------------------------------------------------------------------
# GPX Output
# -----------------------------------------------------------------------------

#: GPX schema version written to output files
GPX_VERSION = "1.1"

#: Creator attribute written to output files
GPX_CREATOR = "gpx_merger"
