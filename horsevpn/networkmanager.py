"""
NetworkManager service for the HorseVPN launcher.
Brings up a pre-configured VPN connection through the local nmcli client.
"""

import os
from typing import List

from horsevpn.connection import ConnectionResult
from horsevpn.utils import run_command


class NetworkManagerService:
    """Handles the interaction with NetworkManager through nmcli."""

    def __init__(
        self,
        profile_name: str,
        nmcli_path: str = "nmcli",
        sudo_path: str = "sudo",
        use_sudo: bool = True,
        verbose: bool = False
    ):
        """Initialize the NetworkManager service."""
        self.profile_name = profile_name
        self.nmcli_path = nmcli_path
        self.sudo_path = sudo_path
        self.use_sudo = use_sudo
        self.verbose = verbose

    @property
    def needs_sudo(self) -> bool:
        """Whether the command has to be prefixed with sudo."""
        return self.use_sudo and os.geteuid() != 0

    @property
    def may_prompt(self) -> bool:
        """sudo may ask for a password on the terminal."""
        return self.needs_sudo

    def build_command(self) -> List[str]:
        """Build the argument list that activates the profile."""
        command = [self.nmcli_path, "connection", "up", "id", self.profile_name]
        if self.needs_sudo:
            command.insert(0, self.sudo_path)
        return command

    def connect(self) -> ConnectionResult:
        """Activate the VPN profile once and return the command outcome."""
        success, result = run_command(self.build_command(), verbose=self.verbose)
        if success:
            return ConnectionResult.ok()
        return ConnectionResult.failed(result.returncode, result.last_error_line())
