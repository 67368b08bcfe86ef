"""Custom exceptions for the HorseVPN launcher."""

from typing import Optional


class HorseVPNError(Exception):
    """Base exception for launcher errors."""
    pass


class UsageError(HorseVPNError):
    """Raised when the command line is malformed"""
    pass


class ElevationError(HorseVPNError):
    """Raised when administrative rights cannot be confirmed or obtained"""
    pass


class ProfileNotFoundError(HorseVPNError):
    """Raised when the named VPN profile is missing, unreadable or invalid"""

    def __init__(self, profile_name: str, reason: str = "not found or invalid"):
        super().__init__(f"VPN connection '{profile_name}' {reason}")
        self.profile_name = profile_name


class ConnectError(HorseVPNError):
    """Raised when the platform connect primitive reports a failure"""

    def __init__(self, code: Optional[int], detail: str = ""):
        message = "Failed to connect VPN"
        if code is not None:
            message += f": {code}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.code = code
        self.detail = detail
