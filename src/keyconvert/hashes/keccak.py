"""
Keccak-256 (original Keccak padding, as used by Ethereum; not NIST SHA3-256). Pure Python.
"""

from __future__ import annotations

from functools import reduce
from operator import xor

_RATE = 136  # 1088-bit rate for 256-bit capacity
_MASK = 0xFFFFFFFFFFFFFFFF

_ROUND_CONSTANTS = (
    0x0000000000000001,
    0x0000000000008082,
    0x800000000000808A,
    0x8000000080008000,
    0x000000000000808B,
    0x0000000080000001,
    0x8000000080008081,
    0x8000000000008009,
    0x000000000000008A,
    0x0000000000000088,
    0x0000000080008009,
    0x000000008000000A,
    0x000000008000808B,
    0x800000000000008B,
    0x8000000000008089,
    0x8000000000008003,
    0x8000000000008002,
    0x8000000000000080,
    0x000000000000800A,
    0x800000008000000A,
    0x8000000080008081,
    0x8000000000008080,
    0x0000000080000001,
    0x8000000080008008,
)

# Rotation offset of lane (x, y), flattened as x + 5 * y
_ROTATIONS = (
    0, 1, 62, 28, 27,
    36, 44, 6, 55, 20,
    3, 10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2, 61, 56, 14,
)  # fmt: skip

# rho/pi destination of lane (x, y): (y, 2x + 3y)
_PI = tuple(y + 5 * ((2 * x + 3 * y) % 5) for y in range(5) for x in range(5))


def _rol64(v: int, n: int) -> int:
    if n == 0:
        return v
    return ((v << n) | (v >> (64 - n))) & _MASK


def _keccak_f(a: list[int]) -> None:
    """Keccak-f[1600] on a flat 25-lane state, in place."""
    b = [0] * 25
    for rc in _ROUND_CONSTANTS:
        # theta
        c = [reduce(xor, a[x::5]) for x in range(5)]
        d = [c[(x - 1) % 5] ^ _rol64(c[(x + 1) % 5], 1) for x in range(5)]
        for i in range(25):
            a[i] ^= d[i % 5]
        # rho and pi
        for i in range(25):
            b[_PI[i]] = _rol64(a[i], _ROTATIONS[i])
        # chi
        for y in range(0, 25, 5):
            row = b[y : y + 5]
            for x in range(5):
                a[y + x] = row[x] ^ (~row[(x + 1) % 5] & row[(x + 2) % 5])
        # iota
        a[0] ^= rc


def keccak256(data: bytes) -> bytes:
    """
    Keccak-256 digest.

    Args:
        data: Input bytes (any length).

    Returns:
        32-byte digest.
    """
    padded = bytearray(data)
    padded.append(0x01)
    padded.extend(bytes(-len(padded) % _RATE))
    padded[-1] |= 0x80
    state = [0] * 25
    for off in range(0, len(padded), _RATE):
        for i in range(_RATE // 8):
            start = off + 8 * i
            state[i] ^= int.from_bytes(padded[start : start + 8], "little")
        _keccak_f(state)
    return b"".join(lane.to_bytes(8, "little") for lane in state[:4])


__all__: tuple[str, ...] = ("keccak256",)
