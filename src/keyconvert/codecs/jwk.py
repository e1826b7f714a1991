"""
JSON Web Keys (RFC 7517/7518, RFC 8037 for OKP, RFC 8812 for secp256k1).

EC keys are ``{kty: "EC", crv, x, y, d?}``, Ed25519 keys are
``{kty: "OKP", crv: "Ed25519", x, d?}``; members are unpadded base64url.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any, Mapping

from ..curves import Curve, describe, resolve
from ..errors import CurveMismatch, MalformedInput, UnsupportedCurve
from ..material import KeyMaterial
from ..providers import CryptoProvider
from .base import Codec, Format, FormatDescriptor, KeyKind, as_text

_B64URL_RE = re.compile(r"\A[A-Za-z0-9_-]*\Z")

_JWK_CRV = {
    Curve.SECP256K1: "secp256k1",
    Curve.P256: "P-256",
    Curve.ED25519: "Ed25519",
}
_KTY = {
    Curve.SECP256K1: "EC",
    Curve.P256: "EC",
    Curve.ED25519: "OKP",
}


def b64url_encode(data: bytes) -> str:
    """Base64url encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Strict base64url decode; padding is optional."""
    text = text.rstrip("=")
    if not _B64URL_RE.match(text):
        raise MalformedInput("JWK member is not base64url")
    try:
        return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except binascii.Error as exc:
        raise MalformedInput(f"JWK member is not base64url: {exc}") from exc


def _load(data: Any) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        return data
    try:
        obj = json.loads(as_text(data, "JWK"))
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"JWK is not valid JSON: {exc}") from exc
    if not isinstance(obj, Mapping):
        raise MalformedInput("JWK must be a JSON object")
    return obj


def _member(jwk: Mapping[str, Any], name: str, length: int) -> bytes:
    value = jwk.get(name)
    if not isinstance(value, str):
        raise MalformedInput(f"JWK member {name!r} is missing or not a string")
    raw = b64url_decode(value)
    if len(raw) != length:
        raise MalformedInput(f"JWK member {name!r} must be {length} bytes, got {len(raw)}")
    return raw


def jwk_curve(jwk: Mapping[str, Any]) -> Curve:
    """Curve named by a JWK's ``kty``/``crv`` pair."""
    kty, crv = jwk.get("kty"), jwk.get("crv")
    if not isinstance(kty, str) or not isinstance(crv, str):
        raise MalformedInput("JWK needs string 'kty' and 'crv' members")
    if kty not in ("EC", "OKP"):
        raise UnsupportedCurve(f"unsupported JWK key type: {kty!r}")
    curve = resolve(crv)
    if _KTY[curve] != kty:
        raise UnsupportedCurve(f"JWK crv {crv!r} is not valid for kty {kty!r}")
    return curve


class JwkCodec(Codec):
    descriptor = FormatDescriptor(
        Format.JWK, requires_curve=False, private=True, public=True
    )

    def _decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | None,
        key_kind: KeyKind | None,
    ) -> KeyMaterial:
        jwk = _load(data)
        actual = jwk_curve(jwk)
        if curve is not None and actual is not curve:
            raise CurveMismatch(curve, actual)
        spec = describe(actual)
        if spec.is_weierstrass:
            point = b"\x04" + _member(jwk, "x", 32) + _member(jwk, "y", 32)
        else:
            point = _member(jwk, "x", spec.public_length)
        if "d" not in jwk:
            return KeyMaterial.from_public(actual, point, provider, compressed=True)
        material = KeyMaterial.from_private(
            actual, _member(jwk, "d", spec.scalar_length), provider
        )
        if material.public_point != point:
            raise MalformedInput("JWK public members do not match the private key")
        return material

    def _encode(self, material: KeyMaterial, key_kind: KeyKind) -> dict[str, str]:
        jwk = {"kty": _KTY[material.curve], "crv": _JWK_CRV[material.curve]}
        if material.spec.is_weierstrass:
            x, y = material.coordinates()
            jwk["x"] = b64url_encode(x)
            jwk["y"] = b64url_encode(y)
        else:
            jwk["x"] = b64url_encode(material.public_point)
        if key_kind is KeyKind.PRIVATE:
            assert material.private_scalar is not None
            jwk["d"] = b64url_encode(material.private_scalar)
        return jwk


__all__: tuple[str, ...] = (
    "JwkCodec",
    "b64url_decode",
    "b64url_encode",
    "jwk_curve",
)
