"""PBKDF2-HMAC key derivation over SHA-1, SHA-256 and SHA-512."""

from __future__ import annotations

import hashlib

__all__ = ["pbkdf2_hmac_sha1", "pbkdf2_hmac_sha256", "pbkdf2_hmac_sha512"]

_UINT32_MAX = 0xFFFFFFFF

_DIGEST_SIZES = {
    "sha1": hashlib.sha1().digest_size,
    "sha256": hashlib.sha256().digest_size,
    "sha512": hashlib.sha512().digest_size,
}


def _as_bytes(value: bytes | bytearray | memoryview | str, what: str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{what} must be bytes-like or str, not {type(value).__name__}")


def _derive(
    hash_name: str,
    password: bytes | bytearray | memoryview | str,
    salt: bytes | bytearray | memoryview | str,
    iterations: int,
    length: int,
) -> bytes:
    if not isinstance(iterations, int) or isinstance(iterations, bool):
        raise TypeError("iterations must be an integer")
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError("length must be an integer")
    if not 0 < iterations <= _UINT32_MAX:
        raise ValueError("iterations must be between 1 and 2**32 - 1")
    if length <= 0:
        raise ValueError("length must be positive")
    blocks = -(-length // _DIGEST_SIZES[hash_name])
    if blocks > _UINT32_MAX:
        raise ValueError("requested length is too large")
    return hashlib.pbkdf2_hmac(
        hash_name,
        _as_bytes(password, "password"),
        _as_bytes(salt, "salt"),
        iterations,
        length,
    )


def pbkdf2_hmac_sha1(password, salt, iterations, length) -> bytes:
    """Derive ``length`` bytes with PBKDF2-HMAC-SHA1."""
    return _derive("sha1", password, salt, iterations, length)


def pbkdf2_hmac_sha256(password, salt, iterations, length) -> bytes:
    """Derive ``length`` bytes with PBKDF2-HMAC-SHA256."""
    return _derive("sha256", password, salt, iterations, length)


def pbkdf2_hmac_sha512(password, salt, iterations, length) -> bytes:
    """Derive ``length`` bytes with PBKDF2-HMAC-SHA512."""
    return _derive("sha512", password, salt, iterations, length)