"""Proxy services, and rewriting of FTP passive-mode replies."""

from __future__ import annotations

import logging
from dataclasses import dataclass

__all__ = [
    "FtpPasv",
    "ProxyService",
    "Proxy",
    "pasv_unpack",
    "pasv_pack",
    "rewrite_ftp_control",
]

_log = logging.getLogger(__name__)

IP_LEN = 16
_PORT_BLOCK = 256
_PASV_CODE = 227
_PASV_CODES = (227, 211, 229)


@dataclass
class FtpPasv:
    """The address carried in an FTP passive-mode reply."""

    code: int = -1
    ftp_server_ip: str = ""
    ftp_server_port: int = -1


@dataclass
class ProxyService:
    """A service published through the server."""

    proxy_name: str
    proxy_type: str = "tcp"
    local_ip: str | None = None
    local_port: int = 0
    remote_port: int = -1
    remote_data_port: int = -1
    use_encryption: bool = False
    use_compression: bool = False
    custom_domains: str | None = None
    subdomain: str | None = None
    locations: str | None = None
    host_header_rewrite: str | None = None
    http_user: str | None = None
    http_pwd: str | None = None

    def is_ftp(self) -> bool:
        """Return True for an FTP proxy."""
        return self.proxy_type == "ftp"


@dataclass
class Proxy:
    """One proxied connection.

    ``data_service`` is the FTP data service that passive replies retarget.
    """

    proxy_name: str | None = None
    remote_data_port: int = -1
    data_service: ProxyService | None = None


def _atoi(text: str) -> int:
    text = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for char in text:
        if not char.isdigit() or not char.isascii():
            break
        digits += char
    return sign * int(digits) if digits else 0


def _as_text(data: bytes | bytearray | memoryview | str) -> str:
    if isinstance(data, str):
        return data
    return bytes(data).decode("latin-1")


def pasv_unpack(data: bytes | bytearray | memoryview | str) -> FtpPasv | None:
    """Parse a ``227 ... (h1,h2,h3,h4,p1,p2)`` reply; None for anything else."""
    text = _as_text(data).split("\0", 1)[0]
    code = _atoi(text[:3])
    if code not in _PASV_CODES or code != _PASV_CODE:
        return None

    ip = ""
    ports = ["", ""]
    started = False
    commas = 0
    port_pos = 0
    for char in text:
        if len(ip) >= IP_LEN:
            break
        if char == "(":
            started = True
            continue
        if not started:
            continue
        if char == ")":
            break
        if char == ",":
            commas += 1
            port_pos = 0
            if commas < 4:
                ip += "."
            continue
        if commas >= 4 and port_pos < 4:
            if commas - 4 < len(ports):
                ports[commas - 4] += char
            port_pos += 1
            continue
        ip += char

    port = _atoi(ports[0]) * _PORT_BLOCK + _atoi(ports[1])
    _log.debug("ftp pasv unpack: [%s:%d]", ip, port)
    return FtpPasv(code=code, ftp_server_ip=ip, ftp_server_port=port)


def pasv_pack(pasv: FtpPasv) -> bytes:
    """Render a passive-mode reply; only code 227 is supported."""
    if pasv.code != _PASV_CODE:
        raise ValueError(f"unsupported ftp pasv code: {pasv.code}")
    ip = pasv.ftp_server_ip[:IP_LEN].replace(".", ",")
    high, low = divmod(pasv.ftp_server_port, _PORT_BLOCK)
    return f"227 Entering Passive Mode ({ip},{high},{low}).\n".encode("latin-1")


def rewrite_ftp_control(
    data: bytes | bytearray | memoryview, proxy: Proxy, server_ip: str | None
) -> bytes:
    """Rewrite FTP control data going from the local server to the remote side.

    A passive-mode reply is changed to point at ``server_ip`` and the proxy's
    remote data port, and the data service is aimed at the address the local
    server announced. Other data is returned unchanged.
    """
    raw = bytes(data)
    local = pasv_unpack(raw)
    if local is None:
        return raw
    if not server_ip:
        raise ValueError("ftp proxy without server ip")
    if proxy.remote_data_port <= 0:
        raise ValueError("remote ftp data port is not initialised")

    remote = FtpPasv(
        code=local.code,
        ftp_server_ip=server_ip[:IP_LEN],
        ftp_server_port=proxy.remote_data_port,
    )
    packed = pasv_pack(remote)

    service = proxy.data_service
    if service is None:
        _log.error("ftp data proxy of %s is not registered", proxy.proxy_name)
    else:
        service.local_port = local.ftp_server_port
        service.local_ip = local.ftp_server_ip
        service.remote_port = remote.ftp_server_port
        _log.debug(
            "set ftp proxy data port [local:remote] = [%d:%d]",
            service.local_port,
            service.remote_port,
        )
    return packed