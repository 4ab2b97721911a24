# -*- coding: utf-8 -*-
"""Parser for GPX waypoint files.

Architecture: the parser produces dictionaries (like loading JSON) which are
then fed to Pydantic models via a single `model_validate()` call. This keeps
the XML handling (done by gpxpy) separate from model construction.

Only waypoints (``<wpt>``) and the document metadata are extracted; tracks
and routes are ignored.
"""

import logging
from typing import Any

import gpxpy
import gpxpy.gpx
from pydantic import ValidationError

from gpx_merger.constants import GPX_ENCODING
from gpx_merger.errors import GpxParseError
from gpx_merger.models import GpxFile

logger = logging.getLogger(__name__)


class GpxParser:
    """Parser for GPX files.

    Errors are raised, not collected: a malformed source is fatal.
    """

    def __init__(self, encoding: str = GPX_ENCODING) -> None:
        self.encoding = encoding

    def parse_bytes_to_dict(self, payload: bytes, source: str = "<bytes>") -> dict[str, Any]:
        """Parse GPX content to a dictionary.

        Args:
            payload: Raw file content
            source: File name used in error messages

        Returns:
            Dictionary with ``name``, ``description``, ``creator`` and a
            ``waypoints`` list

        Raises:
            GpxParseError: If the content is not valid GPX
        """
        try:
            text = payload.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise GpxParseError(f"Cannot decode GPX as {self.encoding}: {e}", source) from e

        try:
            gpx = gpxpy.parse(text)
        except (gpxpy.gpx.GPXException, ValueError) as e:
            raise GpxParseError(f"Malformed GPX: {e}", source) from e

        if gpx.tracks or gpx.routes:
            logger.debug(
                "%s: ignoring %d track(s) and %d route(s)",
                source,
                len(gpx.tracks),
                len(gpx.routes),
            )

        return {
            "name": gpx.name,
            "description": gpx.description,
            "creator": gpx.creator,
            "waypoints": [
                {
                    "latitude": wpt.latitude,
                    "longitude": wpt.longitude,
                    "elevation": wpt.elevation,
                    "name": wpt.name or "",
                    "description": wpt.description,
                    "comment": wpt.comment,
                    "symbol": wpt.symbol,
                }
                for wpt in gpx.waypoints
            ],
        }


def parse_gpx_bytes(
    payload: bytes,
    source: str = "<bytes>",
    *,
    encoding: str = GPX_ENCODING,
) -> GpxFile:
    """Parse GPX content into a GpxFile model.

    Args:
        payload: Raw file content
        source: File name used in error messages
        encoding: Character encoding of the payload

    Returns:
        GpxFile with all waypoints in document order

    Raises:
        GpxParseError: On malformed XML or out of range coordinates
    """
    data = GpxParser(encoding=encoding).parse_bytes_to_dict(payload, source)
    try:
        # Single model_validate() call
        return GpxFile.model_validate(data)
    except ValidationError as e:
        raise GpxParseError(f"Invalid waypoint data: {e}", source) from e
