"""
Provider on the package's own pure-Python curve code. Deterministic signatures
(RFC 6979 ECDSA, RFC 8032 EdDSA); no native dependencies.
"""

from __future__ import annotations

from ..curves import Curve, ed25519, weierstrass
from .base import CryptoProvider

_PARAMS = {
    Curve.SECP256K1: weierstrass.SECP256K1,
    Curve.P256: weierstrass.P256,
}


class PurePythonProvider(CryptoProvider):
    name = "pure-python"

    def derive_public_key(self, curve: Curve, scalar: bytes) -> bytes:
        if curve is Curve.ED25519:
            return ed25519.public_key(scalar)
        return weierstrass.public_key(_PARAMS[curve], scalar)

    def load_public_key(self, curve: Curve, point: bytes) -> bytes:
        if curve is Curve.ED25519:
            return ed25519.normalize_point(point)
        return weierstrass.normalize_point(_PARAMS[curve], point)

    def sign(self, curve: Curve, scalar: bytes, message: bytes) -> bytes:
        if curve is Curve.ED25519:
            return ed25519.sign(message, scalar)
        return weierstrass.sign(_PARAMS[curve], scalar, self.digest(curve, message))

    def verify(
        self, curve: Curve, point: bytes, message: bytes, signature: bytes
    ) -> bool:
        if curve is Curve.ED25519:
            return ed25519.verify(message, signature, point)
        return weierstrass.verify(
            _PARAMS[curve], point, self.digest(curve, message), signature
        )


__all__: tuple[str, ...] = ("PurePythonProvider",)
