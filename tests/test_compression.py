import gzip as gzip_module
import zlib

import pytest

from xfrpclient.compression import CompressionError, deflate_write, inflate_read


SAMPLE = b"xfrp tunnel payload " * 50


def test_zlib_round_trip():
    assert inflate_read(deflate_write(SAMPLE)) == SAMPLE


def test_zlib_header_byte():
    assert deflate_write(SAMPLE)[0] == 0x78


def test_large_round_trip_spans_chunks():
    data = bytes(range(256)) * 400
    assert inflate_read(deflate_write(data)) == data


def test_empty_round_trip():
    assert inflate_read(deflate_write(b"")) == b""


def test_gzip_output_has_gzip_magic():
    out = deflate_write(SAMPLE, gzip=True)
    assert out[:2] == b"\x1f\x8b"
    assert gzip_module.decompress(out) == SAMPLE


def test_gzip_inflate_reads_raw_deflate():
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    raw = compressor.compress(SAMPLE) + compressor.flush()
    assert inflate_read(raw, gzip=True) == SAMPLE


def test_gzip_inflate_rejects_gzip_header():
    with pytest.raises(CompressionError):
        inflate_read(deflate_write(SAMPLE, gzip=True), gzip=True)


def test_truncated_stream_is_error():
    data = deflate_write(SAMPLE)
    with pytest.raises(CompressionError):
        inflate_read(data[: len(data) // 2])


def test_empty_input_is_error():
    with pytest.raises(CompressionError):
        inflate_read(b"")


def test_garbage_is_error():
    with pytest.raises(CompressionError):
        inflate_read(b"not compressed at all")


def test_trailing_data_ignored():
    assert inflate_read(deflate_write(SAMPLE) + b"tail") == SAMPLE