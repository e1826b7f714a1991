"""
Wallet Import Format: Base58Check(version || scalar || [0x01]).

The trailing 0x01 marks a key whose public point is used compressed. The
version byte comes from the configured network (0x80 mainnet, 0xEF testnet).
"""

from __future__ import annotations

from typing import Any

import base58

from ..config import MAINNET, Network
from ..curves import Curve
from ..errors import MalformedInput
from ..material import KeyMaterial
from ..providers import CryptoProvider
from .base import Codec, Format, FormatDescriptor, KeyKind, as_text

_COMPRESSED_FLAG = 0x01


class WifCodec(Codec):
    """WIF private keys. Without an explicit curve the scalar is read as secp256k1."""

    descriptor = FormatDescriptor(
        Format.WIF, requires_curve=False, private=True, public=False
    )

    def __init__(self, network: Network = MAINNET) -> None:
        self.network = network

    def _decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | None,
        key_kind: KeyKind | None,
    ) -> KeyMaterial:
        text = as_text(data, "WIF").strip()
        try:
            payload = base58.b58decode_check(text)
        except ValueError as exc:
            raise MalformedInput(f"invalid WIF: {exc}") from exc
        if not payload or payload[0] != self.network.wif_version:
            raise MalformedInput(
                f"WIF version byte is not {self.network.wif_version:#04x} ({self.network.name})"
            )
        body = payload[1:]
        if len(body) == 33 and body[32] == _COMPRESSED_FLAG:
            scalar, compressed = body[:32], True
        elif len(body) == 32:
            scalar, compressed = body, False
        else:
            raise MalformedInput(f"WIF payload has unexpected length {len(body)}")
        return KeyMaterial.from_private(
            curve or Curve.SECP256K1, scalar, provider, compressed=compressed
        )

    def _encode(self, material: KeyMaterial, key_kind: KeyKind) -> str:
        assert material.private_scalar is not None
        payload = bytes([self.network.wif_version]) + material.private_scalar
        if material.compressed:
            payload += bytes([_COMPRESSED_FLAG])
        return base58.b58encode_check(payload).decode("ascii")


__all__: tuple[str, ...] = ("WifCodec",)
