"""
Windows Remote Access Service (RAS) dialer for the HorseVPN launcher.
Dials a phonebook entry that already exists in the user's RAS phonebook.
"""

import ctypes

from horsevpn.connection import ConnectionResult
from horsevpn.exceptions import ProfileNotFoundError
from horsevpn.utils import print_info

DWORD = ctypes.c_uint32
ULONG_PTR = ctypes.c_size_t
HRASCONN = ctypes.c_void_p

# Field lengths from ras.h / lmcons.h, without the terminating NUL.
RAS_MAX_ENTRY_NAME = 256
RAS_MAX_PHONE_NUMBER = 128
RAS_MAX_CALLBACK_NUMBER = RAS_MAX_PHONE_NUMBER
UNLEN = 256
PWLEN = 256
DNLEN = 15

ERROR_BUFFER_TOO_SMALL = 603
ERROR_STRING_LENGTH = 512


class RASDIALPARAMSW(ctypes.Structure):
    """Wide-character RASDIALPARAMS, up to dwCallbackId."""
    # ras.h declares its structures under pshpack4.h.
    _pack_ = 4
    _fields_ = [
        ("dwSize", DWORD),
        ("szEntryName", ctypes.c_wchar * (RAS_MAX_ENTRY_NAME + 1)),
        ("szPhoneNumber", ctypes.c_wchar * (RAS_MAX_PHONE_NUMBER + 1)),
        ("szCallbackNumber", ctypes.c_wchar * (RAS_MAX_CALLBACK_NUMBER + 1)),
        ("szUserName", ctypes.c_wchar * (UNLEN + 1)),
        ("szPassword", ctypes.c_wchar * (PWLEN + 1)),
        ("szDomain", ctypes.c_wchar * (DNLEN + 1)),
        ("dwSubEntry", DWORD),
        ("dwCallbackId", ULONG_PTR),
    ]


def load_rasapi():
    """Load rasapi32.dll and declare the signatures used here."""
    rasapi = ctypes.WinDLL("rasapi32")

    rasapi.RasGetEntryPropertiesW.argtypes = [
        ctypes.c_wchar_p, ctypes.c_wchar_p, ctypes.c_void_p,
        ctypes.POINTER(DWORD), ctypes.c_void_p, ctypes.POINTER(DWORD),
    ]
    rasapi.RasGetEntryPropertiesW.restype = DWORD

    rasapi.RasDialW.argtypes = [
        ctypes.c_void_p, ctypes.c_wchar_p, ctypes.POINTER(RASDIALPARAMSW),
        DWORD, ctypes.c_void_p, ctypes.POINTER(HRASCONN),
    ]
    rasapi.RasDialW.restype = DWORD

    rasapi.RasHangUpW.argtypes = [HRASCONN]
    rasapi.RasHangUpW.restype = DWORD

    rasapi.RasGetErrorStringW.argtypes = [ctypes.c_uint, ctypes.c_wchar_p, DWORD]
    rasapi.RasGetErrorStringW.restype = DWORD
    return rasapi


def validate_entry_name(profile_name: str) -> None:
    """Check that the name fits the szEntryName field of RASDIALPARAMSW."""
    if not profile_name:
        raise ProfileNotFoundError(profile_name, "has an empty name")
    if "\x00" in profile_name:
        raise ProfileNotFoundError(profile_name, "has an invalid name")
    if len(profile_name) > RAS_MAX_ENTRY_NAME:
        raise ProfileNotFoundError(
            profile_name[:32] + "...",
            f"name exceeds {RAS_MAX_ENTRY_NAME} characters"
        )


class RasDialer:
    """Dials a named RAS phonebook entry with its saved credentials."""

    may_prompt = False

    def __init__(self, profile_name: str, rasapi=None, verbose: bool = False):
        """Initialize the dialer; rasapi32 is loaded on first use."""
        validate_entry_name(profile_name)
        self.profile_name = profile_name
        self.verbose = verbose
        self._rasapi = rasapi

    @property
    def rasapi(self):
        if self._rasapi is None:
            self._rasapi = load_rasapi()
        return self._rasapi

    def ensure_profile_exists(self) -> None:
        """
        Look up the entry properties without reading them.

        A NULL entry buffer with a zero size asks RAS only for the size it
        would need, which succeeds with ERROR_BUFFER_TOO_SMALL when the entry
        exists in the default phonebook.
        """
        size = DWORD(0)
        status = self.rasapi.RasGetEntryPropertiesW(
            None, self.profile_name, None, ctypes.byref(size), None, None
        )
        if status not in (0, ERROR_BUFFER_TOO_SMALL):
            if self.verbose:
                print_info(f"RasGetEntryProperties returned {status}")
            raise ProfileNotFoundError(self.profile_name)

    def error_text(self, code: int) -> str:
        """Return the system description of a RAS error code."""
        buffer = ctypes.create_unicode_buffer(ERROR_STRING_LENGTH)
        if self.rasapi.RasGetErrorStringW(code, buffer, ERROR_STRING_LENGTH) != 0:
            return ""
        return buffer.value.strip()

    def build_dial_params(self) -> RASDIALPARAMSW:
        """Zeroed dial parameters naming the entry; credentials stay empty."""
        validate_entry_name(self.profile_name)
        params = RASDIALPARAMSW()
        params.dwSize = ctypes.sizeof(RASDIALPARAMSW)
        params.szEntryName = self.profile_name
        return params

    def connect(self) -> ConnectionResult:
        """Dial the entry synchronously, once."""
        self.ensure_profile_exists()

        params = self.build_dial_params()
        handle = HRASCONN()
        status = self.rasapi.RasDialW(
            None, None, ctypes.byref(params), 0, None, ctypes.byref(handle)
        )
        if status == 0:
            return ConnectionResult.ok()

        # A failed RasDial can still leave an open handle behind.
        if handle.value:
            self.rasapi.RasHangUpW(handle)
        return ConnectionResult.failed(status, self.error_text(status))
