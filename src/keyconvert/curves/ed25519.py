"""
Ed25519 (RFC 8032): public key from seed, sign, verify, point validation.
Pure Python on stdlib hashlib.sha512, extended homogeneous coordinates.
"""

from __future__ import annotations

import hashlib

# Field prime p = 2^255 - 19
_P = 2**255 - 19
# Group order L (order of base point)
_L = 2**252 + 27742317777372353535851937790883648493
# Curve constant d = -121665/121666 (mod p)
_D = (-121665 * pow(121666, _P - 2, _P)) % _P
# sqrt(-1) mod p
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)

_Point = tuple[int, int, int, int]


def _inv(x: int) -> int:
    return pow(x, _P - 2, _P)


def _recover_x(y: int, sign: int) -> int | None:
    """Recover x from y and the sign bit (RFC 8032 5.1.3); None if no square root."""
    if y >= _P:
        return None
    x2 = (y * y - 1) * _inv(_D * y * y + 1) % _P
    if x2 == 0:
        return None if sign else 0
    x = pow(x2, (_P + 3) // 8, _P)
    if (x * x - x2) % _P != 0:
        x = x * _SQRT_M1 % _P
    if (x * x - x2) % _P != 0:
        return None
    if (x & 1) != sign:
        x = _P - x
    return x


_Gy = 4 * _inv(5) % _P
_Gx = _recover_x(_Gy, 0)
assert _Gx is not None
_G: _Point = (_Gx, _Gy, 1, _Gx * _Gy % _P)
_IDENTITY: _Point = (0, 1, 1, 0)


def _add(P: _Point, Q: _Point) -> _Point:
    """Point addition in extended coordinates (RFC 8032 5.1.4)."""
    A = (P[1] - P[0]) * (Q[1] - Q[0]) % _P
    B = (P[1] + P[0]) * (Q[1] + Q[0]) % _P
    C = 2 * P[3] * Q[3] * _D % _P
    D = 2 * P[2] * Q[2] % _P
    E, F, G, H = B - A, D - C, D + C, B + A
    return (E * F % _P, G * H % _P, F * G % _P, E * H % _P)


def _mul(s: int, P: _Point) -> _Point:
    Q = _IDENTITY
    while s > 0:
        if s & 1:
            Q = _add(Q, P)
        P = _add(P, P)
        s >>= 1
    return Q


def _equal(P: _Point, Q: _Point) -> bool:
    return (P[0] * Q[2] - Q[0] * P[2]) % _P == 0 and (P[1] * Q[2] - Q[1] * P[2]) % _P == 0


def _compress(P: _Point) -> bytes:
    zinv = _inv(P[2])
    x = P[0] * zinv % _P
    y = P[1] * zinv % _P
    return (y | ((x & 1) << 255)).to_bytes(32, "little")


def _decompress(data: bytes) -> _Point | None:
    if len(data) != 32:
        return None
    y = int.from_bytes(data, "little")
    sign = y >> 255
    y &= (1 << 255) - 1
    x = _recover_x(y, sign)
    if x is None:
        return None
    return (x, y, 1, x * y % _P)


def _expand(seed: bytes) -> tuple[int, bytes]:
    """Clamped scalar and nonce prefix from a 32-byte seed (RFC 8032 5.1.5)."""
    if len(seed) != 32:
        raise ValueError("Ed25519 seed must be 32 bytes")
    h = hashlib.sha512(seed).digest()
    a = int.from_bytes(h[:32], "little")
    a &= (1 << 254) - 8
    a |= 1 << 254
    return a, h[32:]


def _hash_mod_l(*parts: bytes) -> int:
    return int.from_bytes(hashlib.sha512(b"".join(parts)).digest(), "little") % _L


def public_key(seed: bytes) -> bytes:
    """32-byte compressed public key for a 32-byte seed."""
    a, _ = _expand(seed)
    return _compress(_mul(a, _G))


def normalize_point(data: bytes) -> bytes:
    """
    Validate an encoded Ed25519 point.

    Args:
        data: 32-byte point encoding.

    Returns:
        The canonical 32-byte encoding.

    Raises:
        ValueError: If the bytes do not decode to a curve point.
    """
    P = _decompress(data)
    if P is None:
        raise ValueError("not a valid Ed25519 point")
    return _compress(P)


def sign(message: bytes, seed: bytes) -> bytes:
    """
    Ed25519 signature (RFC 8032 5.1.6).

    Args:
        message: Arbitrary bytes to sign.
        seed: 32-byte secret seed.

    Returns:
        64-byte signature (R || S).
    """
    a, prefix = _expand(seed)
    A = _compress(_mul(a, _G))
    r = _hash_mod_l(prefix, message)
    R = _compress(_mul(r, _G))
    s = (r + _hash_mod_l(R, A, message) * a) % _L
    return R + s.to_bytes(32, "little")


def verify(message: bytes, signature: bytes, pubkey: bytes) -> bool:
    """Check an RFC 8032 signature; False on any malformed input."""
    if len(signature) != 64:
        return False
    A = _decompress(pubkey)
    R = _decompress(signature[:32])
    if A is None or R is None:
        return False
    s = int.from_bytes(signature[32:], "little")
    if s >= _L:
        return False
    h = _hash_mod_l(signature[:32], pubkey, message)
    return _equal(_mul(s, _G), _add(R, _mul(h, A)))


__all__: tuple[str, ...] = (
    "normalize_point",
    "public_key",
    "sign",
    "verify",
)
