"""SHA-256 and Bitcoin HASH160 over hashlib."""

from __future__ import annotations

import hashlib


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def ripemd160(data: bytes) -> bytes:
    h = hashlib.new("ripemd160")
    h.update(data)
    return h.digest()


def hash160(data: bytes) -> bytes:
    """HASH160: SHA-256 followed by RIPEMD-160 (20 bytes)."""
    return ripemd160(sha256(data))


__all__: tuple[str, ...] = ("hash160", "ripemd160", "sha256")
