#!/usr/bin/env python3
"""Launcher Application Class - Orchestrates the connect flow for one route."""

import traceback
from typing import Sequence

from horsevpn.config import LauncherConfig
from horsevpn.connection import ConnectionResult
from horsevpn.exceptions import ConnectError, HorseVPNError
from horsevpn.reporter import EXIT_SUCCESS, report_failure, report_success
from horsevpn.route import Route
from horsevpn.utils import print_info, print_warning, with_spinner


class Launcher:
    """
    Launcher coordinates the privilege guard, the platform connector and the
    reporter for a single connection attempt.
    """

    def __init__(self, config: LauncherConfig, guard, connector):
        """Initialize the Launcher with the platform services."""
        self.config = config
        self.guard = guard
        self.connector = connector
        self.verbose = config.verbose

    def run(self, raw_route: str, argv: Sequence[str], elevated: bool = False) -> int:
        """
        Connect for the given route.

        Returns:
            int: Exit code (0 for success or deferral, 1 for error).
        """
        try:
            if not self.guard.ensure(argv, already_relaunched=elevated):
                if self.verbose:
                    print_info("Continuing in the elevated instance.")
                return EXIT_SUCCESS

            route = self._parse_route(raw_route)
            result = self._connect(route)
        except HorseVPNError as e:
            return report_failure(e)

        return report_success(result)

    def _parse_route(self, raw_route: str) -> Route:
        """Parse the route; the host is informational only."""
        route = Route.parse(raw_route)
        if self.verbose:
            if route.scheme is None:
                print_warning(f"Route '{raw_route}' has no scheme, reading host from the start.")
            if not route.host:
                print_warning("Could not determine a host from the route.")
            print_info(f"Route host: {route.host or '<none>'}")
        return route

    def _connect(self, route: Route) -> ConnectionResult:
        """Make the single connection attempt, raising ConnectError on failure."""
        profile = self.connector.profile_name
        if self.verbose:
            print_info(f"Connecting VPN profile '{profile}' for {route.host or route.raw}...")

        spinner_enabled = self.config.spinner and not self.connector.may_prompt
        try:
            with with_spinner(f"Connecting {profile}...", enabled=spinner_enabled):
                result = self.connector.connect()
                if not result.success:
                    raise ConnectError(result.code, result.detail)
        except HorseVPNError:
            raise
        except OSError as e:
            if self.verbose:
                traceback.print_exc()
            raise ConnectError(None, str(e)) from e
        return result
