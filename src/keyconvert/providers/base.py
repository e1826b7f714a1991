"""
Cryptographic provider capability: the only place curve arithmetic happens.
Key material, codecs and the facade depend on this interface, never on a backend.
"""

from __future__ import annotations

import abc
import hashlib
from typing import Callable

from ..curves import Curve, describe

RandomBytes = Callable[[int], bytes]


class CryptoProvider(abc.ABC):
    """Public-key derivation, point validation, signing and verification per curve."""

    name = "abstract"

    @abc.abstractmethod
    def derive_public_key(self, curve: Curve, scalar: bytes) -> bytes:
        """
        Canonical public point for a private scalar.

        Returns:
            65-byte uncompressed SEC1 point, or the 32-byte Ed25519 point.

        Raises:
            ValueError: If the scalar is not a valid private key on the curve.
        """

    @abc.abstractmethod
    def load_public_key(self, curve: Curve, point: bytes) -> bytes:
        """
        Validate an encoded public point and return its canonical form.

        Raises:
            ValueError: If the bytes are not a point on the curve.
        """

    @abc.abstractmethod
    def sign(self, curve: Curve, scalar: bytes, message: bytes) -> bytes:
        """64-byte signature: ECDSA-SHA256 as r || s, or pure Ed25519."""

    @abc.abstractmethod
    def verify(
        self, curve: Curve, point: bytes, message: bytes, signature: bytes
    ) -> bool:
        """True iff the signature is valid; never raises for a bad signature."""

    def digest(self, curve: Curve, message: bytes) -> bytes:
        """Hash of message under the curve's registered hash algorithm."""
        return hashlib.new(describe(curve).hash_algorithm, message).digest()

    def generate_private_key(self, curve: Curve, random_bytes: RandomBytes) -> bytes:
        """
        Draw a private scalar from an injected randomness source.

        Weierstrass scalars are rejection-sampled into [1, n); Ed25519 seeds are
        used as drawn.

        Args:
            curve: Target curve.
            random_bytes: Callable returning n random bytes (e.g. os.urandom).

        Returns:
            Private scalar of the curve's scalar length.
        """
        spec = describe(curve)
        while True:
            candidate = bytes(random_bytes(spec.scalar_length))
            if len(candidate) != spec.scalar_length:
                raise ValueError("random source returned the wrong number of bytes")
            if spec.order is None or 0 < int.from_bytes(candidate, "big") < spec.order:
                return candidate


__all__: tuple[str, ...] = ("CryptoProvider", "RandomBytes")
