# -*- coding: utf-8 -*-
"""Merge command.

Merges GPX files into one, starting off from a master GPX file. Points are
added only when they are not close to others. Waypoints missing elevation
data may be augmented by an online lookup. Settings are read from a YAML
config file.
"""

import argparse
import logging
from pathlib import Path

from gpx_merger.config import load_config
from gpx_merger.constants import DEFAULT_CONFIG_FILENAME
from gpx_merger.errors import ConfigError
from gpx_merger.errors import GpxParseError
from gpx_merger.merger import run_merge

logger = logging.getLogger(__name__)


def merge(args: list[str]) -> int:
    """Entry point for the merge command."""
    parser = argparse.ArgumentParser(
        prog="gpx_merger merge",
        description="Merge GPX waypoint files into a master file, skipping close points",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  gpx_merger merge merged.gpx                       # Uses ./{DEFAULT_CONFIG_FILENAME}
  gpx_merger merge merged.gpx -c alps.yaml          # Custom config file
  gpx_merger merge merged.gpx --no-elevation        # Skip online elevation lookup
  gpx_merger merge merged.gpx --workers 4           # Parallel elevation lookup

Notes:
  - The master file and all .gpx files below the input folder are merged
  - The output file is excluded from the input files
  - Distances are planar approximations, valid at grid scale
""",
    )

    parser.add_argument(
        "output_file",
        type=Path,
        help="Output GPX file path",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILENAME),
        help=f"YAML config file (default: {DEFAULT_CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--no-elevation",
        action="store_true",
        help="Disable the elevation lookup even if enabled in the config",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of concurrent elevation lookups (overrides the config)",
    )

    parsed_args = parser.parse_args(args)

    try:
        config = load_config(parsed_args.config)
        overrides = {}
        if parsed_args.no_elevation:
            overrides["elevation_lookup"] = False
        if parsed_args.workers is not None:
            overrides["elevation_workers"] = max(1, parsed_args.workers)
        if overrides:
            config = config.model_copy(update=overrides)

        result = run_merge(config, parsed_args.output_file)

    except ConfigError:
        logger.exception("Configuration error")
        return 1

    except GpxParseError:
        logger.exception("GPX parse error")
        return 1

    except FileNotFoundError:
        logger.exception("FileNotFoundError")
        return 1

    except OSError:
        logger.exception("OSError")
        return 1

    logger.info(
        "Merged %d waypoints into %s (%d removed as too close)",
        len(result.waypoints),
        parsed_args.output_file,
        len(result.removed),
    )
    return 0
