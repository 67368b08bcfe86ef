"""Route string parsing."""

from dataclasses import dataclass
from typing import Optional

SCHEME_SEPARATOR = "://"


def parse_host(route: str) -> str:
    """
    Extract the host from a route such as ``wss://host:port/path``.

    Without a scheme separator the host is taken from the start of the
    string. The host ends at the first ``:`` or ``/`` after its start, or at
    the end of the string. Never raises for any string input.
    """
    separator = route.find(SCHEME_SEPARATOR)
    start = 0 if separator == -1 else separator + len(SCHEME_SEPARATOR)

    end = len(route)
    for delimiter in (":", "/"):
        position = route.find(delimiter, start)
        if position != -1 and position < end:
            end = position
    return route[start:end]


@dataclass(frozen=True)
class Route:
    """A route received on the command line."""
    raw: str
    scheme: Optional[str]
    host: str

    @classmethod
    def parse(cls, raw: str) -> "Route":
        separator = raw.find(SCHEME_SEPARATOR)
        scheme = raw[:separator] if separator != -1 else None
        return cls(raw=raw, scheme=scheme, host=parse_host(raw))
