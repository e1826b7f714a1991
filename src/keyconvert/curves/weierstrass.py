"""
Short-Weierstrass curves y^2 = x^3 + ax + b (secp256k1, P-256): key derivation,
SEC1 point decoding, RFC 6979 deterministic ECDSA. Pure Python, affine coordinates.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Iterator, NamedTuple


class Params(NamedTuple):
    name: str
    p: int
    a: int
    b: int
    n: int
    gx: int
    gy: int


SECP256K1 = Params(
    name="secp256k1",
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

P256 = Params(
    name="P-256",
    p=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    a=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    b=0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    n=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    gx=0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
    gy=0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
)

# (0, 0) is not on either curve (b != 0), so it stands in for the point at infinity.
_INFINITY = (0, 0)


def _mod_inv(a: int, n: int) -> int:
    """Modular inverse via extended gcd."""
    a %= n
    t, r = 0, n
    new_t, new_r = 1, a
    while new_r:
        q = r // new_r
        t, new_t = new_t, t - q * new_t
        r, new_r = new_r, r - q * new_r
    if r != 1:
        raise ValueError("no inverse")
    return t % n


def _point_add(c: Params, P: tuple[int, int], Q: tuple[int, int]) -> tuple[int, int]:
    """Add two affine points on curve c."""
    if P == _INFINITY:
        return Q
    if Q == _INFINITY:
        return P
    (px, py), (qx, qy) = P, Q
    if px == qx:
        if py != qy or py == 0:
            return _INFINITY
        lam = (3 * px * px + c.a) * _mod_inv(2 * py, c.p) % c.p
    else:
        lam = (qy - py) * _mod_inv(qx - px, c.p) % c.p
    rx = (lam * lam - px - qx) % c.p
    ry = (lam * (px - rx) - py) % c.p
    return (rx, ry)


def _point_mul(c: Params, d: int, P: tuple[int, int]) -> tuple[int, int]:
    """Scalar multiplication d * P (double-and-add)."""
    d %= c.n
    R = _INFINITY
    while d:
        if d & 1:
            R = _point_add(c, R, P)
        P = _point_add(c, P, P)
        d >>= 1
    return R


def _is_on_curve(c: Params, x: int, y: int) -> bool:
    return (y * y - (x * x * x + c.a * x + c.b)) % c.p == 0


def _encode(x: int, y: int) -> bytes:
    return b"\x04" + x.to_bytes(32, "big") + y.to_bytes(32, "big")


def decode_point(c: Params, data: bytes) -> tuple[int, int]:
    """
    Parse a SEC1 point (33-byte compressed or 65-byte uncompressed) and check it is on the curve.

    Args:
        c: Curve parameters.
        data: Encoded point.

    Returns:
        Affine (x, y).
    """
    if len(data) == 65 and data[0] == 0x04:
        x = int.from_bytes(data[1:33], "big")
        y = int.from_bytes(data[33:], "big")
    elif len(data) == 33 and data[0] in (0x02, 0x03):
        x = int.from_bytes(data[1:], "big")
        if x >= c.p:
            raise ValueError("x coordinate out of range")
        rhs = (x * x * x + c.a * x + c.b) % c.p
        # both field primes are 3 mod 4
        y = pow(rhs, (c.p + 1) // 4, c.p)
        if (y * y) % c.p != rhs:
            raise ValueError("x coordinate has no point on the curve")
        if (y & 1) != (data[0] & 1):
            y = c.p - y
    else:
        raise ValueError("invalid SEC1 point encoding")
    if x >= c.p or y >= c.p or not _is_on_curve(c, x, y):
        raise ValueError("point is not on the curve")
    return (x, y)


def normalize_point(c: Params, data: bytes) -> bytes:
    """Validate a SEC1 point and return its 65-byte uncompressed encoding."""
    return _encode(*decode_point(c, data))


def public_key(c: Params, privkey: bytes) -> bytes:
    """
    Derive the uncompressed public key (65 bytes: 0x04 || x || y) from a 32-byte scalar.

    Args:
        c: Curve parameters.
        privkey: 32-byte big-endian private scalar.

    Returns:
        65-byte uncompressed public key.
    """
    if len(privkey) != 32:
        raise ValueError("privkey must be 32 bytes")
    d = int.from_bytes(privkey, "big")
    if d == 0 or d >= c.n:
        raise ValueError("private scalar out of range")
    return _encode(*_point_mul(c, d, (c.gx, c.gy)))


def _rfc6979_nonces(c: Params, d: int, digest: bytes) -> Iterator[int]:
    """Deterministic nonce candidates (RFC 6979 3.2) with HMAC-SHA256, 256-bit order."""
    x = d.to_bytes(32, "big")
    h = (int.from_bytes(digest, "big") % c.n).to_bytes(32, "big")
    k = bytes(32)
    v = b"\x01" * 32
    k = hmac.new(k, v + b"\x00" + x + h, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    k = hmac.new(k, v + b"\x01" + x + h, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    while True:
        v = hmac.new(k, v, hashlib.sha256).digest()
        candidate = int.from_bytes(v, "big")
        if 0 < candidate < c.n:
            yield candidate
        k = hmac.new(k, v + b"\x00", hashlib.sha256).digest()
        v = hmac.new(k, v, hashlib.sha256).digest()


def sign(c: Params, privkey: bytes, digest: bytes) -> bytes:
    """
    ECDSA signature of a 32-byte digest; returns r || s (64 bytes).

    Args:
        c: Curve parameters.
        privkey: 32-byte private scalar.
        digest: 32-byte message digest.

    Returns:
        64-byte fixed-width signature.
    """
    if len(privkey) != 32 or len(digest) != 32:
        raise ValueError("privkey and digest must be 32 bytes")
    d = int.from_bytes(privkey, "big")
    if d == 0 or d >= c.n:
        raise ValueError("private scalar out of range")
    z = int.from_bytes(digest, "big") % c.n
    for k in _rfc6979_nonces(c, d, digest):
        kx, _ = _point_mul(c, k, (c.gx, c.gy))
        r = kx % c.n
        if r == 0:
            continue
        s = _mod_inv(k, c.n) * (z + r * d) % c.n
        if s == 0:
            continue
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")
    raise AssertionError("unreachable")


def verify(c: Params, pubkey: bytes, digest: bytes, signature: bytes) -> bool:
    """Check an r || s signature over a 32-byte digest; False on any malformed input."""
    if len(signature) != 64 or len(digest) != 32:
        return False
    try:
        Q = decode_point(c, pubkey)
    except ValueError:
        return False
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:], "big")
    if not (0 < r < c.n and 0 < s < c.n):
        return False
    z = int.from_bytes(digest, "big") % c.n
    w = _mod_inv(s, c.n)
    X = _point_add(
        c,
        _point_mul(c, z * w % c.n, (c.gx, c.gy)),
        _point_mul(c, r * w % c.n, Q),
    )
    if X == _INFINITY:
        return False
    return X[0] % c.n == r


__all__: tuple[str, ...] = (
    "P256",
    "SECP256K1",
    "Params",
    "decode_point",
    "normalize_point",
    "public_key",
    "sign",
    "verify",
)
