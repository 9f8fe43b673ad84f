"""Multiplexing frames: an 8-byte header followed by an optional payload."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

__all__ = ["Command", "Frame", "header_size"]

FRAME_VERSION = 1

_SIZE_OF_VER = 1
_SIZE_OF_CMD = 1
_SIZE_OF_LENGTH = 2
_SIZE_OF_SID = 4

_VER_INDEX = 0
_CMD_INDEX = 1
_LEN_INDEX = 2
_SID_INDEX = 4


class Command(enum.IntEnum):
    """Frame commands."""

    SYN = 0  # stream open
    FIN = 1  # stream close, the EOF mark
    PSH = 2  # data push
    NOP = 3  # no operation


def header_size() -> int:
    """Return the size in bytes of a frame header."""
    return _SIZE_OF_VER + _SIZE_OF_CMD + _SIZE_OF_LENGTH + _SIZE_OF_SID


@dataclass
class Frame:
    """One frame: version, command, payload length, stream id and payload."""

    cmd: int = Command.SYN
    sid: int = 0
    ver: int = FRAME_VERSION
    length: int = 0
    data: bytes | None = None

    @classmethod
    def from_bytes(cls, buf: bytes | bytearray | memoryview) -> Frame:
        """Read a frame from raw bytes.

        The length field is taken as received; the payload is everything
        after the header, or None if there is nothing after it.
        Raises ``ValueError`` if ``buf`` is shorter than a header.
        """
        raw = bytes(buf)
        size = header_size()
        if len(raw) < size:
            raise ValueError(f"frame needs at least {size} bytes, got {len(raw)}")
        (length,) = struct.unpack_from("<H", raw, _LEN_INDEX)
        (sid,) = struct.unpack_from(">I", raw, _SID_INDEX)
        return cls(
            cmd=raw[_CMD_INDEX],
            sid=sid,
            ver=raw[_VER_INDEX],
            length=length,
            data=raw[size:] if len(raw) > size else None,
        )

    @classmethod
    def from_message(cls, data: bytes | bytearray | memoryview) -> Frame:
        """Wrap a bare message payload in a frame with command 0 and stream 0."""
        payload = bytes(data)
        return cls(
            cmd=Command.SYN,
            sid=0,
            ver=FRAME_VERSION,
            length=len(payload) & 0xFFFF,
            data=payload,
        )