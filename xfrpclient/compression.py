"""zlib, gzip and raw-deflate helpers for whole buffers."""

from __future__ import annotations

import zlib

__all__ = ["CompressionError", "deflate_write", "inflate_read"]

_GZIP_ENCODING = 16
_MEM_LEVEL = 8


class CompressionError(Exception):
    """Raised when data cannot be compressed or decompressed."""


def deflate_write(data: bytes | bytearray | memoryview, gzip: bool = False) -> bytes:
    """Compress ``data`` as a zlib stream, or a gzip stream if ``gzip``."""
    wbits = zlib.MAX_WBITS | _GZIP_ENCODING if gzip else zlib.MAX_WBITS
    try:
        compressor = zlib.compressobj(
            zlib.Z_DEFAULT_COMPRESSION,
            zlib.DEFLATED,
            wbits,
            _MEM_LEVEL,
            zlib.Z_DEFAULT_STRATEGY,
        )
        return compressor.compress(bytes(data)) + compressor.flush(zlib.Z_FINISH)
    except zlib.error as exc:
        raise CompressionError(str(exc)) from exc


def inflate_read(data: bytes | bytearray | memoryview, gzip: bool = False) -> bytes:
    """Decompress a zlib stream, or a raw deflate stream if ``gzip``.

    Raises :class:`CompressionError` if the data is corrupt or the stream
    does not reach its end.
    """
    wbits = -zlib.MAX_WBITS if gzip else zlib.MAX_WBITS
    decompressor = zlib.decompressobj(wbits)
    try:
        output = decompressor.decompress(bytes(data))
    except zlib.error as exc:
        raise CompressionError(str(exc)) from exc
    if not decompressor.eof:
        raise CompressionError("compressed stream is incomplete")
    return output