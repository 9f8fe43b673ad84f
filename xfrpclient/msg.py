"""Control messages: wire packing and the JSON bodies they carry."""

from __future__ import annotations

import enum
import hashlib
import json
import struct
import time
from dataclasses import dataclass
from typing import Any

from xfrpclient.login import Login, LoginResponse
from xfrpclient.netutils import dns_unified
from xfrpclient.proxy import ProxyService

__all__ = [
    "MsgType",
    "Message",
    "WorkConn",
    "ControlResponse",
    "StartWorkConnResponse",
    "calc_md5",
    "get_auth_key",
    "msg_type_valid_check",
    "pack",
    "unpack",
    "login_request_marshal",
    "new_proxy_service_marshal",
    "new_work_conn_marshal",
    "login_resp_unmarshal",
    "start_work_conn_resp_unmarshal",
    "control_response_unmarshal",
]

_TYPE_LEN = 1
_LEN_FORMAT = ">I"
_HEADER_LEN = _TYPE_LEN + struct.calcsize(_LEN_FORMAT)
_SEED_LIMIT = 127


class MsgType(str, enum.Enum):
    """Message type bytes."""

    LOGIN = "o"
    LOGIN_RESP = "1"
    NEW_PROXY = "p"
    NEW_PROXY_RESP = "2"
    NEW_WORK_CONN = "w"
    REQ_WORK_CONN = "r"
    START_WORK_CONN = "s"
    PING = "h"
    PONG = "4"
    UDP_PACKET = "u"


_VALID_TYPES = frozenset(ord(t.value) for t in MsgType)


@dataclass
class Message:
    """A typed message with its raw body."""

    type: MsgType | str | int
    data: bytes = b""


@dataclass
class WorkConn:
    """Body of a new work connection message."""

    run_id: str | None = None


@dataclass
class ControlResponse:
    """A generic control reply."""

    type: int = 0
    code: int = 0
    msg: str | None = None


@dataclass
class StartWorkConnResponse:
    """Reply telling which proxy a work connection serves."""

    proxy_name: str | None = None


def _type_byte(msg_type: MsgType | str | int) -> int:
    if isinstance(msg_type, MsgType):
        return ord(msg_type.value)
    if isinstance(msg_type, str):
        if len(msg_type) != 1:
            raise ValueError(f"message type must be one character: {msg_type!r}")
        return ord(msg_type)
    if isinstance(msg_type, int):
        return msg_type
    raise TypeError(f"invalid message type: {msg_type!r}")


def calc_md5(data: bytes | bytearray | memoryview | str) -> str:
    """Return the lower-case hex MD5 digest of ``data``."""
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    return hashlib.md5(raw).hexdigest()


def get_auth_key(token: str | None, timestamp: int | None = None) -> tuple[str, int]:
    """Return the privilege key for ``token`` and the timestamp it was made with.

    The timestamp defaults to the current time in whole seconds.
    """
    if timestamp is None:
        timestamp = int(time.time())
    seed = f"{token}{timestamp}" if token else f"{timestamp}"
    return calc_md5(seed.encode("utf-8")[:_SEED_LIMIT]), timestamp


def msg_type_valid_check(msg_type: MsgType | str | int) -> bool:
    """Return True if ``msg_type`` is a known message type."""
    try:
        return _type_byte(msg_type) in _VALID_TYPES
    except (TypeError, ValueError):
        return False


def pack(message: Message) -> bytes:
    """Encode a message: type byte, 4-byte big-endian length, body."""
    body = bytes(message.data)
    type_byte = _type_byte(message.type)
    if not 0 <= type_byte <= 0xFF:
        raise ValueError(f"message type out of range: {type_byte}")
    return bytes([type_byte]) + struct.pack(_LEN_FORMAT, len(body)) + body


def unpack(data: bytes | bytearray | memoryview) -> Message:
    """Decode a packed message.

    Raises ``ValueError`` for an unknown type or a truncated buffer.
    """
    raw = bytes(data)
    if len(raw) < _HEADER_LEN:
        raise ValueError("message is shorter than its header")
    if raw[0] not in _VALID_TYPES:
        raise ValueError("message received with an invalid type")
    (length,) = struct.unpack_from(_LEN_FORMAT, raw, _TYPE_LEN)
    body = raw[_HEADER_LEN:_HEADER_LEN + length]
    if len(body) < length:
        raise ValueError("message body is truncated")
    return Message(MsgType(chr(raw[0])), body)


def _to_json(value: Any) -> str:
    """Serialise in the spaced object style used on the wire."""
    if isinstance(value, dict):
        if not value:
            return "{ }"
        items = ", ".join(
            f"{json.dumps(key, ensure_ascii=False)}: {_to_json(item)}"
            for key, item in value.items()
        )
        return "{ " + items + " }"
    if isinstance(value, list):
        if not value:
            return "[ ]"
        return "[ " + ", ".join(_to_json(item) for item in value) + " ]"
    return json.dumps(value, ensure_ascii=False)


def login_request_marshal(login: Login, token: str | None) -> str:
    """Build the login request body; refreshes the login's key and timestamp."""
    login.privilege_key, login.timestamp = get_auth_key(token)
    body = {
        "version": login.version,
        "hostname": login.hostname or "",
        "os": login.os,
        "arch": login.arch,
        "user": login.user or "",
        "privilege_key": login.privilege_key or "",
        "timestamp": login.timestamp,
        "run_id": login.run_id or "",
        "pool_count": login.pool_count,
    }
    return _to_json(body)


def _unified_domains(custom_domains: str) -> list[str]:
    try:
        unified = dns_unified(custom_domains)
    except ValueError:
        unified = custom_domains.partition("/")[0].lower()
    return unified.split(",")


def new_proxy_service_marshal(service: ProxyService) -> str:
    """Build the new-proxy request body for ``service``."""
    body: dict[str, Any] = {
        "proxy_name": service.proxy_name,
        "proxy_type": service.proxy_type,
        "use_encryption": bool(service.use_encryption),
        "use_compression": bool(service.use_compression),
    }
    if service.is_ftp():
        body["remote_data_port"] = service.remote_data_port

    if service.custom_domains:
        body["custom_domains"] = _unified_domains(service.custom_domains)
        body["remote_port"] = None
    else:
        body["custom_domains"] = None
        body["remote_port"] = service.remote_port if service.remote_port != -1 else None

    body["subdomain"] = service.subdomain or ""
    body["locations"] = [] if service.locations else None
    body["host_header_rewrite"] = service.host_header_rewrite or ""
    body["http_user"] = service.http_user or ""
    body["http_pwd"] = service.http_pwd or ""
    return _to_json(body)


def new_work_conn_marshal(work_conn: WorkConn) -> str:
    """Build the new-work-connection body."""
    return _to_json({"run_id": work_conn.run_id or ""})


def _parse(text: str | bytes) -> dict[str, Any]:
    try:
        parsed = json.loads(text)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    return parsed if isinstance(parsed, dict) else {}


def _as_string(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        digits = ""
        for index, char in enumerate(text):
            if char.isdigit() and char.isascii() or (index == 0 and char in "+-"):
                digits += char
            else:
                break
        try:
            return int(digits)
        except ValueError:
            return 0
    return 0


def login_resp_unmarshal(text: str | bytes) -> LoginResponse:
    """Parse a login reply; fields after the first missing one stay None."""
    obj = _parse(text)
    response = LoginResponse()
    for field in ("version", "run_id", "error"):
        if field not in obj:
            break
        setattr(response, field, _as_string(obj[field]))
    return response


def start_work_conn_resp_unmarshal(text: str | bytes) -> StartWorkConnResponse:
    """Parse a start-work-connection reply."""
    obj = _parse(text)
    return StartWorkConnResponse(proxy_name=_as_string(obj.get("proxy_name")))


def control_response_unmarshal(text: str | bytes) -> ControlResponse:
    """Parse a control reply; ``code`` and ``msg`` are read only after ``type``."""
    obj = _parse(text)
    response = ControlResponse()
    if "type" not in obj:
        return response
    response.type = _as_int(obj["type"])
    if "code" not in obj:
        return response
    response.code = _as_int(obj["code"])
    if "msg" in obj:
        response.msg = _as_string(obj["msg"])
    return response