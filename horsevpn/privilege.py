"""
Privilege handling for the HorseVPN launcher.

On Windows dialing requires an elevated process, so a non-elevated launcher
re-runs itself through the UAC "runas" verb and exits; the elevated copy is
marked with ELEVATED_FLAG and does the work. Elsewhere the connect command
runs through sudo and this module does nothing.
"""

import ctypes
import os
import subprocess
import sys
from typing import List, Optional, Sequence

from horsevpn.exceptions import ElevationError
from horsevpn.utils import print_info

ELEVATED_FLAG = "--elevated"

# ShellExecute returns a value greater than 32 on success.
SHELL_EXECUTE_SUCCESS_THRESHOLD = 32
SW_SHOWNORMAL = 1


class PosixPrivilegeGuard:
    """Defers privilege handling to the sudo prefix of the connect command."""

    def is_elevated(self) -> bool:
        return os.geteuid() == 0

    def ensure(self, argv: Sequence[str], already_relaunched: bool = False) -> bool:
        return True


class WindowsPrivilegeGuard:
    """Checks Administrators membership and relaunches through UAC."""

    def __init__(self, shell32=None, executable: Optional[str] = None,
                 frozen: Optional[bool] = None, verbose: bool = False):
        self._shell32 = shell32
        self.executable = executable or sys.executable
        self.frozen = getattr(sys, "frozen", False) if frozen is None else frozen
        self.verbose = verbose

    @property
    def shell32(self):
        if self._shell32 is None:
            self._shell32 = ctypes.windll.shell32
        return self._shell32

    def is_elevated(self) -> bool:
        """Whether the process token is a member of the Administrators group."""
        try:
            return bool(self.shell32.IsUserAnAdmin())
        except (AttributeError, OSError) as e:
            raise ElevationError(f"Failed to query administrator rights: {e}") from e

    def relaunch_arguments(self, argv: Sequence[str]) -> List[str]:
        """Arguments for the elevated copy: the originals plus the marker."""
        arguments = list(argv)
        if not self.frozen:
            arguments = ["-m", "horsevpn"] + arguments
        if ELEVATED_FLAG not in arguments:
            arguments.append(ELEVATED_FLAG)
        return arguments

    def relaunch_elevated(self, argv: Sequence[str]) -> None:
        """Ask UAC to start an elevated copy of this program."""
        parameters = subprocess.list2cmdline(self.relaunch_arguments(argv))
        if self.verbose:
            print_info(f"Requesting elevated privileges: {self.executable} {parameters}")

        result = self.shell32.ShellExecuteW(
            None, "runas", self.executable, parameters, os.getcwd(), SW_SHOWNORMAL
        )
        if int(result) <= SHELL_EXECUTE_SUCCESS_THRESHOLD:
            raise ElevationError(f"Failed to elevate privileges (code {int(result)})")

    def ensure(self, argv: Sequence[str], already_relaunched: bool = False) -> bool:
        """
        Make sure the rest of the run happens with administrator rights.

        Args:
            argv: Command-line arguments without the program name
            already_relaunched: Whether this process is the elevated copy

        Returns:
            bool: True to continue in this process, False when an elevated
            copy has taken over and this process should exit with 0
        """
        if self.is_elevated():
            return True
        if already_relaunched:
            raise ElevationError("Elevated instance is still running without administrator rights")
        self.relaunch_elevated(argv)
        return False


def get_privilege_guard(platform: str = sys.platform, verbose: bool = False):
    """Return the privilege guard for the running platform."""
    if platform == "win32":
        return WindowsPrivilegeGuard(verbose=verbose)
    return PosixPrivilegeGuard()
