"""Result reporting for the HorseVPN launcher."""

from horsevpn.connection import ConnectionResult
from horsevpn.exceptions import HorseVPNError
from horsevpn.utils import print_error, print_success

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def report_success(result: ConnectionResult) -> int:
    """Print the success line and return the success exit code."""
    print_success("VPN connected")
    return EXIT_SUCCESS


def report_failure(error: HorseVPNError) -> int:
    """Print a single diagnostic line and return the failure exit code."""
    print_error(str(error))
    return EXIT_FAILURE
