# -*- coding: utf-8 -*-
"""Unified interface for GPX file I/O.

1. Files are read as bytes and parsed to dictionaries
2. Dictionaries feed directly to Pydantic models via `model_validate()`
3. Models are formatted back to GPX text for writing

Waypoint names are decomposed on load when a name parser is given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from gpx_merger.constants import GPX_ENCODING
from gpx_merger.enums import FileExtension
from gpx_merger.gpx.format import format_gpx_file
from gpx_merger.gpx.parser import parse_gpx_bytes
from gpx_merger.models import GpxFile
from gpx_merger.naming import WaypointNameParser  # noqa: TC001

logger = logging.getLogger(__name__)


class GpxMergerInterface:
    """File system access for the merger.

    Example:
        master = GpxMergerInterface.load_gpx(Path("master.gpx"))
        for path in GpxMergerInterface.discover_gpx_files(
            Path("sources"), exclude=[Path("master.gpx")]
        ):
            addon = GpxMergerInterface.load_gpx(path)
    """

    @classmethod
    def load_gpx(
        cls,
        path: Path,
        *,
        name_parser: WaypointNameParser | None = None,
    ) -> GpxFile:
        """Load a GPX file.

        Args:
            path: Path to the .gpx file
            name_parser: Optional name decomposition, keyed by ``path.name``

        Returns:
            GpxFile with all waypoints

        Raises:
            FileNotFoundError: If the file doesn't exist
            GpxParseError: If the file is not valid GPX
        """
        if not path.exists():
            raise FileNotFoundError(f"GPX file not found: {path}")

        gpx_file = parse_gpx_bytes(path.read_bytes(), str(path))

        if name_parser is not None:
            matched = sum(
                name_parser.apply(path.name, waypoint) for waypoint in gpx_file.waypoints
            )
            logger.debug("%s: %d waypoint names decomposed", path.name, matched)

        return gpx_file

    @classmethod
    def save_gpx(cls, gpx_file: GpxFile, path: Path) -> None:
        """Write a GpxFile as GPX 1.1.

        Args:
            gpx_file: The file model to write
            path: Path to write to
        """
        content = format_gpx_file(gpx_file)
        with path.open(mode="w", encoding=GPX_ENCODING, newline="") as f:
            f.write(content)

    @classmethod
    def discover_gpx_files(
        cls,
        input_folder: Path,
        *,
        exclude: Iterable[Path] = (),
    ) -> list[Path]:
        """List the GPX files below a folder.

        The folder is walked recursively. The excluded paths (typically the
        master and the output file, which may live in the same folder) are
        compared after resolving.

        Args:
            input_folder: Folder to search
            exclude: Paths to leave out

        Returns:
            Sorted list of GPX file paths

        Raises:
            FileNotFoundError: If the folder doesn't exist
        """
        if not input_folder.is_dir():
            raise FileNotFoundError(f"Input folder not found: {input_folder}")

        excluded = {path.resolve() for path in exclude}
        return sorted(
            path
            for path in input_folder.rglob("*")
            if path.is_file()
            and path.suffix.lower() == FileExtension.GPX.value
            and path.resolve() not in excluded
        )
