"""
Provider backed by pyca/cryptography (OpenSSL). Also maps between KeyMaterial and
cryptography key objects for the PKCS#8, SSH and libp2p code paths.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ..curves import Curve, describe
from ..curves import ed25519 as edwards25519
from ..errors import UnsupportedCurve
from .base import CryptoProvider

if TYPE_CHECKING:
    from ..material import KeyMaterial

PrivateKey = Union[ec.EllipticCurvePrivateKey, ed25519.Ed25519PrivateKey]
PublicKey = Union[ec.EllipticCurvePublicKey, ed25519.Ed25519PublicKey]

_EC_CURVES: dict[Curve, type[ec.EllipticCurve]] = {
    Curve.SECP256K1: ec.SECP256K1,
    Curve.P256: ec.SECP256R1,
}
_EC_NAMES = {cls.name: curve for curve, cls in _EC_CURVES.items()}


def private_key_object(curve: Curve, scalar: bytes) -> PrivateKey:
    if curve is Curve.ED25519:
        return ed25519.Ed25519PrivateKey.from_private_bytes(scalar)
    return ec.derive_private_key(int.from_bytes(scalar, "big"), _EC_CURVES[curve]())


def public_key_object(curve: Curve, point: bytes) -> PublicKey:
    if curve is Curve.ED25519:
        return ed25519.Ed25519PublicKey.from_public_bytes(point)
    return ec.EllipticCurvePublicKey.from_encoded_point(_EC_CURVES[curve](), point)


def _public_bytes(key: PublicKey) -> bytes:
    if isinstance(key, ed25519.Ed25519PublicKey):
        return key.public_bytes(serialization.Encoding.Raw, serialization.PublicFormat.Raw)
    return key.public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint
    )


def curve_of(key: PrivateKey | PublicKey) -> Curve:
    """Registered curve of a cryptography key object; UnsupportedCurve for RSA, X25519 etc."""
    if isinstance(key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)):
        return Curve.ED25519
    if isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        curve = _EC_NAMES.get(key.curve.name)
        if curve is not None:
            return curve
        raise UnsupportedCurve(f"unsupported EC curve: {key.curve.name}")
    raise UnsupportedCurve(f"unsupported key algorithm: {type(key).__name__}")


def material_from_key(key: PrivateKey | PublicKey, provider: CryptoProvider) -> KeyMaterial:
    """KeyMaterial for a parsed cryptography key; private keys get their public half recomputed."""
    from ..material import KeyMaterial

    curve = curve_of(key)
    if isinstance(key, ed25519.Ed25519PrivateKey):
        scalar = key.private_bytes(
            serialization.Encoding.Raw,
            serialization.PrivateFormat.Raw,
            serialization.NoEncryption(),
        )
        return KeyMaterial.from_private(curve, scalar, provider)
    if isinstance(key, ec.EllipticCurvePrivateKey):
        scalar = key.private_numbers().private_value.to_bytes(32, "big")
        return KeyMaterial.from_private(curve, scalar, provider)
    return KeyMaterial.from_public(curve, _public_bytes(key), provider, compressed=True)


def key_object(material: KeyMaterial, private: bool) -> PrivateKey | PublicKey:
    if private:
        assert material.private_scalar is not None
        return private_key_object(material.curve, material.private_scalar)
    return public_key_object(material.curve, material.public_point)


class PycaProvider(CryptoProvider):
    """Default provider: secp256k1, P-256 and Ed25519 through OpenSSL."""

    name = "cryptography"

    def derive_public_key(self, curve: Curve, scalar: bytes) -> bytes:
        order = describe(curve).order
        if order is not None and not 0 < int.from_bytes(scalar, "big") < order:
            raise ValueError("private scalar out of range")
        return _public_bytes(private_key_object(curve, scalar).public_key())

    def load_public_key(self, curve: Curve, point: bytes) -> bytes:
        if curve is Curve.ED25519:
            if len(point) != 32:
                raise ValueError("Ed25519 public key must be 32 bytes")
            # from_public_bytes accepts any 32 bytes
            point = edwards25519.normalize_point(point)
        return _public_bytes(public_key_object(curve, point))

    def sign(self, curve: Curve, scalar: bytes, message: bytes) -> bytes:
        key = private_key_object(curve, scalar)
        if isinstance(key, ed25519.Ed25519PrivateKey):
            return key.sign(message)
        r, s = decode_dss_signature(key.sign(message, ec.ECDSA(hashes.SHA256())))
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")

    def verify(
        self, curve: Curve, point: bytes, message: bytes, signature: bytes
    ) -> bool:
        if len(signature) != 64:
            return False
        try:
            key = public_key_object(curve, point)
            if isinstance(key, ed25519.Ed25519PublicKey):
                key.verify(signature, message)
            else:
                der = encode_dss_signature(
                    int.from_bytes(signature[:32], "big"),
                    int.from_bytes(signature[32:], "big"),
                )
                key.verify(der, message, ec.ECDSA(hashes.SHA256()))
        except (InvalidSignature, ValueError):
            return False
        return True


__all__: tuple[str, ...] = (
    "PycaProvider",
    "curve_of",
    "key_object",
    "material_from_key",
    "private_key_object",
    "public_key_object",
)
