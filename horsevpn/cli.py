#!/usr/bin/env python3
"""HorseVPN launcher - connects the pre-configured HorseVPN profile."""

import argparse
import sys
from typing import List, Optional

from horsevpn.app import Launcher
from horsevpn.config import ConfigManager
from horsevpn.connection import get_connector
from horsevpn.exceptions import HorseVPNError, UsageError
from horsevpn.privilege import ELEVATED_FLAG, get_privilege_guard
from horsevpn.reporter import EXIT_FAILURE, report_failure
from horsevpn.utils import print_error

USAGE = "Usage: horsevpn <route>"


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports usage problems as UsageError."""

    def error(self, message):
        raise UsageError(USAGE)


def build_parser() -> ArgumentParser:
    """Build the command-line parser for the launcher."""
    parser = ArgumentParser(
        prog="horsevpn",
        description="Connect this machine to the pre-configured HorseVPN profile."
    )
    parser.add_argument("route", help="Route to the VPN endpoint, e.g. wss://host:port/path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output.")
    parser.add_argument(ELEVATED_FLAG, action="store_true", help=argparse.SUPPRESS)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the HorseVPN launcher.

    Returns:
        int: Exit code (0 for success or deferral to an elevated copy, 1 for error).
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = build_parser().parse_args(argv)
    except HorseVPNError as e:
        return report_failure(e)

    config = ConfigManager().load_config()
    config.verbose = config.verbose or args.verbose

    try:
        guard = get_privilege_guard(verbose=config.verbose)
        connector = get_connector(config)
        launcher = Launcher(config, guard, connector)
        return launcher.run(args.route, argv, elevated=args.elevated)
    except HorseVPNError as e:
        return report_failure(e)
    except KeyboardInterrupt:
        print_error("Interrupted.")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
