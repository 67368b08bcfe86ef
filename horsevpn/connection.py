"""Connection results and platform connector selection."""

import sys
from dataclasses import dataclass

from horsevpn.config import LauncherConfig

# Profiles are provisioned ahead of time; the launcher only dials them.
LINUX_PROFILE_NAME = "horsevpn"
WINDOWS_PROFILE_NAME = "HorseVPN"


@dataclass(frozen=True)
class ConnectionResult:
    """Outcome of a single connection attempt."""
    success: bool
    code: int = 0
    detail: str = ""

    @classmethod
    def ok(cls) -> "ConnectionResult":
        return cls(success=True)

    @classmethod
    def failed(cls, code: int, detail: str = "") -> "ConnectionResult":
        return cls(success=False, code=code, detail=detail)


def get_connector(config: LauncherConfig, platform: str = sys.platform):
    """Return the connector for the running platform."""
    if platform == "win32":
        from horsevpn.ras import RasDialer
        return RasDialer(WINDOWS_PROFILE_NAME, verbose=config.verbose)

    from horsevpn.networkmanager import NetworkManagerService
    return NetworkManagerService(
        LINUX_PROFILE_NAME,
        nmcli_path=config.nmcli_path,
        sudo_path=config.sudo_path,
        use_sudo=config.use_sudo,
        verbose=config.verbose
    )
