"""
BIP-39 mnemonics.

Two policies, chosen per converter:

* ``entropy``: the phrase encodes the 32-byte private key itself (24 words),
  so import and export are exact inverses on every curve.
* ``seed``: the phrase and passphrase are stretched to a 64-byte seed
  (PBKDF2-HMAC-SHA512) which becomes the SLIP-0010 master key of the curve.
  The phrase cannot be recovered from the key, so export is refused.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Any

from mnemonic import Mnemonic

from ..curves import Curve, describe
from ..errors import MalformedInput
from ..material import KeyMaterial
from ..providers import CryptoProvider
from .base import Codec, Format, FormatDescriptor, KeyKind, as_text

# SLIP-0010 master key HMAC keys; "Bitcoin seed" makes secp256k1 identical to BIP-32.
_SLIP10_KEYS = {
    Curve.SECP256K1: b"Bitcoin seed",
    Curve.P256: b"Nist256p1 seed",
    Curve.ED25519: b"ed25519 seed",
}


def slip10_master_key(curve: Curve, seed: bytes) -> bytes:
    """
    SLIP-0010 master private key for a BIP-39 seed.

    Args:
        curve: Target curve.
        seed: 16 to 64 byte seed.

    Returns:
        32-byte private key (the left half of the master HMAC output).
    """
    order = describe(curve).order
    data = seed
    while True:
        digest = hmac.new(_SLIP10_KEYS[curve], data, hashlib.sha512).digest()
        key = digest[:32]
        # Weierstrass curves retry on an out-of-range key; Ed25519 accepts any.
        if order is None or 0 < int.from_bytes(key, "big") < order:
            return key
        data = digest


class Bip39Codec(Codec):
    def __init__(
        self, mode: str = "entropy", passphrase: str = "", language: str = "english"
    ) -> None:
        self.mode = mode
        self.passphrase = passphrase
        self.mnemonic = Mnemonic(language)
        self.descriptor = FormatDescriptor(
            Format.BIP39,
            requires_curve=True,
            private=True,
            public=False,
            bidirectional=mode == "entropy",
        )

    def _phrase(self, data: Any) -> str:
        text = as_text(data, "bip39")
        words = text.strip().lower().split()
        if not words:
            raise MalformedInput("empty mnemonic")
        return " ".join(words)

    def _decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | None,
        key_kind: KeyKind | None,
    ) -> KeyMaterial:
        assert curve is not None
        phrase = self._phrase(data)
        if self.mode == "seed":
            if not self.mnemonic.check(phrase):
                raise MalformedInput("mnemonic has unknown words or a bad checksum")
            seed = Mnemonic.to_seed(phrase, self.passphrase)
            return KeyMaterial.from_private(curve, slip10_master_key(curve, seed), provider)
        try:
            entropy = bytes(self.mnemonic.to_entropy(phrase))
        except (ValueError, LookupError) as exc:
            raise MalformedInput(f"invalid mnemonic: {exc}") from exc
        if len(entropy) != describe(curve).scalar_length:
            raise MalformedInput(
                f"mnemonic carries {len(entropy)} bytes of entropy, a {curve} key needs "
                f"{describe(curve).scalar_length} (24 words)"
            )
        return KeyMaterial.from_private(curve, entropy, provider)

    def _encode(self, material: KeyMaterial, key_kind: KeyKind) -> str:
        assert material.private_scalar is not None
        return self.mnemonic.to_mnemonic(material.private_scalar)


__all__: tuple[str, ...] = ("Bip39Codec", "slip10_master_key")
