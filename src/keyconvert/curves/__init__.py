"""Curve registry: secp256k1 (Bitcoin/Ethereum), P-256 (NIST), Ed25519 (RFC 8032)."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..errors import UnsupportedCurve


class Curve(str, enum.Enum):
    SECP256K1 = "secp256k1"
    P256 = "P-256"
    ED25519 = "Ed25519"

    def __str__(self) -> str:
        return self.value


class PointEncoding(str, enum.Enum):
    # 0x04 || x || y, or 0x02/0x03 || x when compressed
    SEC1 = "sec1"
    # 32-byte little-endian y with the sign of x in the top bit
    EDWARDS = "edwards"


@dataclass(frozen=True)
class CurveSpec:
    curve: Curve
    scalar_length: int
    public_length: int
    compressed_length: int
    point_encoding: PointEncoding
    hash_algorithm: str
    order: int | None
    aliases: tuple[str, ...]

    @property
    def is_weierstrass(self) -> bool:
        return self.point_encoding is PointEncoding.SEC1


_REGISTRY: Mapping[Curve, CurveSpec] = MappingProxyType(
    {
        Curve.SECP256K1: CurveSpec(
            curve=Curve.SECP256K1,
            scalar_length=32,
            public_length=65,
            compressed_length=33,
            point_encoding=PointEncoding.SEC1,
            hash_algorithm="sha256",
            order=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
            aliases=("secp256k1", "k-256", "k256"),
        ),
        Curve.P256: CurveSpec(
            curve=Curve.P256,
            scalar_length=32,
            public_length=65,
            compressed_length=33,
            point_encoding=PointEncoding.SEC1,
            hash_algorithm="sha256",
            order=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
            aliases=("p-256", "p256", "secp256r1", "prime256v1", "nistp256"),
        ),
        Curve.ED25519: CurveSpec(
            curve=Curve.ED25519,
            scalar_length=32,
            public_length=32,
            compressed_length=32,
            point_encoding=PointEncoding.EDWARDS,
            hash_algorithm="sha512",
            order=None,
            aliases=("ed25519",),
        ),
    }
)

_ALIASES: Mapping[str, Curve] = MappingProxyType(
    {alias: spec.curve for spec in _REGISTRY.values() for alias in spec.aliases}
)


def resolve(name: Curve | str) -> Curve:
    """
    Map a curve identifier or alias to a registered Curve.

    Args:
        name: Curve member or name such as "K-256", "secp256r1", "ed25519".

    Returns:
        The registered Curve.

    Raises:
        UnsupportedCurve: If the name is not registered.
    """
    if isinstance(name, Curve):
        return name
    if isinstance(name, str):
        curve = _ALIASES.get(name.strip().lower())
        if curve is not None:
            return curve
    raise UnsupportedCurve(f"unsupported curve: {name!r}")


def describe(curve: Curve | str) -> CurveSpec:
    """Byte lengths, point encoding and hash algorithm of a registered curve."""
    return _REGISTRY[resolve(curve)]


def supported_curves() -> tuple[Curve, ...]:
    return tuple(_REGISTRY)


__all__: tuple[str, ...] = (
    "Curve",
    "CurveSpec",
    "PointEncoding",
    "describe",
    "resolve",
    "supported_curves",
)
