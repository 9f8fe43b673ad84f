"""Login state of the client and checking of the server's login reply."""

from __future__ import annotations

import logging
import platform
import string
import uuid
from dataclasses import dataclass
from pathlib import Path

__all__ = ["Login", "LoginResponse", "new_login", "PROTOCOL_VERSION", "CLIENT_VERSION"]

CLIENT_VERSION = "1.0.1"
PROTOCOL_VERSION = "0.10.0"

_log = logging.getLogger(__name__)

_SYS_NET = Path("/sys/class/net")
_ROUTER_INTERFACE = "br-lan"
_LOOPBACK = "lo"


@dataclass
class LoginResponse:
    """The server's reply to a login request."""

    version: str | None = None
    run_id: str | None = None
    error: str | None = None


@dataclass
class Login:
    """What the client sends when it logs in, plus whether it is logged in."""

    version: str = PROTOCOL_VERSION
    hostname: str | None = None
    os: str = ""
    arch: str = ""
    user: str | None = None
    privilege_key: str | None = None
    timestamp: int = 0
    run_id: str | None = None
    pool_count: int = 1
    logged: bool = False

    def check_response(self, response: LoginResponse) -> bool:
        """Record the outcome of a login reply and return whether it succeeded.

        On success the run id given by the server replaces the local one.
        """
        if response.run_id is None or len(response.run_id) <= 1:
            if response.error:
                _log.error("login response error: %s", response.error)
            _log.error("login failed")
            self.logged = False
        else:
            self.logged = True
            _log.debug(
                "login response: run_id: [%s], version: [%s]",
                response.run_id,
                response.version,
            )
            self.run_id = response.run_id
        return self.logged


def _read_mac(path: Path) -> str | None:
    try:
        text = path.read_text(encoding="ascii").strip()
    except (OSError, UnicodeDecodeError):
        return None
    parts = text.split(":")
    if len(parts) != 6:
        return None
    if not all(len(p) == 2 and all(c in string.hexdigits for c in p) for p in parts):
        return None
    return "".join(parts).upper()


def _hardware_address() -> str:
    """The MAC of the router bridge, else of the last non-loopback interface."""
    try:
        names = sorted(entry.name for entry in _SYS_NET.iterdir())
    except OSError:
        names = []
    if _ROUTER_INTERFACE in names:
        _log.debug("working in router")
        candidates = [_ROUTER_INTERFACE]
    else:
        candidates = [name for name in reversed(names) if name != _LOOPBACK]
    for name in candidates:
        mac = _read_mac(_SYS_NET / name / "address")
        if mac:
            return mac
    return f"{uuid.getnode():012X}"


def new_login(user: str | None = None) -> Login:
    """Build the login state for this host, with the host's MAC as run id."""
    info = platform.uname()
    return Login(
        version=PROTOCOL_VERSION,
        os=info.system,
        arch=info.machine,
        user=user,
        run_id=_hardware_address(),
    )