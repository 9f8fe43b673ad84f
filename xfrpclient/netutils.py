"""Small network helpers: sleeping, IPv4 validation and domain normalising."""

from __future__ import annotations

import socket
import string
import time

__all__ = ["s_sleep", "is_valid_ip_address", "dns_unified"]

_USEC_PER_SEC = 1_000_000
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def s_sleep(seconds: int, microseconds: int = 0) -> None:
    """Sleep for ``seconds`` plus ``microseconds``."""
    if seconds < 0 or microseconds < 0:
        raise ValueError("sleep time must not be negative")
    if microseconds >= _USEC_PER_SEC:
        raise ValueError("microseconds must be below one second")
    time.sleep(seconds + microseconds / _USEC_PER_SEC)


def is_valid_ip_address(address: str) -> bool:
    """Return True if ``address`` is a dotted-quad IPv4 address."""
    try:
        socket.inet_pton(socket.AF_INET, address)
    except (OSError, ValueError):
        return False
    return True


def dns_unified(dname: str) -> str:
    """Lower-case a domain name and drop everything from the first ``/``.

    Raises ``ValueError`` if the name has no dot other than a final one.
    """
    host, slash, _ = dname.partition("/")
    checked = host if slash else dname[:-1]
    if "." not in checked:
        raise ValueError(f"invalid domain name: {dname!r}")
    return host.translate(_ASCII_LOWER)