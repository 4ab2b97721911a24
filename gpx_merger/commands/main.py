from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import entry_points

import gpx_merger


def main():
    registered_commands = entry_points(group="gpx_merger.actions")

    parser = argparse.ArgumentParser(prog="gpx_merger")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s version: {gpx_merger.__version__}",
    )
    parser.add_argument(
        "command",
        choices=registered_commands.names,
    )
    parser.add_argument(
        "args",
        help=argparse.SUPPRESS,
        nargs=argparse.REMAINDER,
    )

    args = argparse.Namespace()
    parser.parse_args(namespace=args)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    main_fn = registered_commands[args.command].load()
    return main_fn(args.args)
