"""
Curve-tagged key material: the normalized form every codec decodes into and encodes from.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .curves import Curve, CurveSpec, describe, resolve
from .errors import MalformedInput, UnsupportedCurve

if TYPE_CHECKING:
    from .providers import CryptoProvider


@dataclass(frozen=True)
class KeyMaterial:
    """
    An immutable private/public key pair (or public key alone) on one curve.

    ``public_point`` is always canonical: 65-byte uncompressed SEC1 for secp256k1
    and P-256, the 32-byte RFC 8032 encoding for Ed25519. ``compressed`` is only
    a serialization preference (WIF flag, raw/hex public form) and does not take
    part in equality.

    Build instances with ``from_private`` or ``from_public``. The field
    constructor only checks lengths and does not tie a scalar to its point.
    """

    curve: Curve
    public_point: bytes
    private_scalar: bytes | None = field(default=None, repr=False)
    compressed: bool = field(default=True, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "curve", resolve(self.curve))
        spec = self.spec
        if len(self.public_point) != spec.public_length:
            raise MalformedInput(
                f"{self.curve} public point must be {spec.public_length} bytes"
            )
        if self.private_scalar is not None and len(self.private_scalar) != spec.scalar_length:
            raise MalformedInput(
                f"{self.curve} private key must be {spec.scalar_length} bytes"
            )

    @classmethod
    def from_private(
        cls,
        curve: Curve | str,
        scalar: bytes,
        provider: CryptoProvider,
        *,
        compressed: bool = True,
    ) -> KeyMaterial:
        """
        Build material from a private scalar; the public point is always recomputed.

        Args:
            curve: Curve of the key.
            scalar: Big-endian private scalar (Ed25519: the 32-byte seed).
            provider: Provider used to derive the public point.
            compressed: Serialization preference carried by the source format.

        Raises:
            MalformedInput: If the scalar has the wrong length or is out of range.
        """
        curve = resolve(curve)
        scalar = bytes(scalar)
        spec = describe(curve)
        if len(scalar) != spec.scalar_length:
            raise MalformedInput(f"{curve} private key must be {spec.scalar_length} bytes")
        try:
            point = provider.derive_public_key(curve, scalar)
        except ValueError as exc:
            raise MalformedInput(f"invalid {curve} private key: {exc}") from exc
        return cls(curve, point, scalar, compressed)

    @classmethod
    def from_public(
        cls,
        curve: Curve | str,
        point: bytes,
        provider: CryptoProvider,
        *,
        compressed: bool | None = None,
    ) -> KeyMaterial:
        """
        Build public-only material; the point is validated and normalized by the provider.

        A 33-byte compressed SEC1 point is accepted and stored uncompressed. When
        ``compressed`` is None it records the form the point arrived in.
        """
        curve = resolve(curve)
        point = bytes(point)
        try:
            canonical = provider.load_public_key(curve, point)
        except ValueError as exc:
            raise MalformedInput(f"invalid {curve} public key: {exc}") from exc
        if compressed is None:
            compressed = len(point) == describe(curve).compressed_length
        return cls(curve, canonical, None, compressed)

    @property
    def spec(self) -> CurveSpec:
        return describe(self.curve)

    @property
    def has_private(self) -> bool:
        return self.private_scalar is not None

    def compressed_point(self) -> bytes:
        """33-byte SEC1 compressed point; Ed25519 points are already 32-byte compressed."""
        if not self.spec.is_weierstrass:
            return self.public_point
        prefix = 0x03 if self.public_point[-1] & 1 else 0x02
        return bytes([prefix]) + self.public_point[1:33]

    def uncompressed_point(self) -> bytes:
        if not self.spec.is_weierstrass:
            raise UnsupportedCurve(f"{self.curve} has no uncompressed SEC1 form")
        return self.public_point

    def coordinates(self) -> tuple[bytes, bytes]:
        """Affine (x, y) as 32-byte big-endian values."""
        point = self.uncompressed_point()
        return point[1:33], point[33:65]

    def public_only(self) -> KeyMaterial:
        return replace(self, private_scalar=None)

    def with_compression(self, compressed: bool) -> KeyMaterial:
        return replace(self, compressed=compressed)


__all__: tuple[str, ...] = ("KeyMaterial",)
