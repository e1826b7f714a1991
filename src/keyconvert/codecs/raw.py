"""Raw big-endian bytes and their hex text form. Neither carries a curve tag."""

from __future__ import annotations

import re
from typing import Any

from ..curves import Curve, describe
from ..errors import MalformedInput
from ..material import KeyMaterial
from ..providers import CryptoProvider
from .base import Codec, Format, FormatDescriptor, KeyKind, as_text

_HEX_RE = re.compile(r"\A(?:[0-9a-fA-F]{2})+\Z")


def material_from_bytes(
    data: bytes, provider: CryptoProvider, curve: Curve, key_kind: KeyKind | None
) -> KeyMaterial:
    """
    Interpret raw bytes as a scalar or a point.

    Without an explicit kind, a scalar-length input is private. On Ed25519 a
    32-byte input is therefore always read as a seed; pass PUBLIC for a point.
    """
    spec = describe(curve)
    if key_kind is None:
        key_kind = KeyKind.PRIVATE if len(data) == spec.scalar_length else KeyKind.PUBLIC
    if key_kind is KeyKind.PRIVATE:
        return KeyMaterial.from_private(curve, data, provider)
    return KeyMaterial.from_public(curve, data, provider)


def material_to_bytes(material: KeyMaterial, key_kind: KeyKind) -> bytes:
    if key_kind is KeyKind.PRIVATE:
        assert material.private_scalar is not None
        return material.private_scalar
    if material.compressed:
        return material.compressed_point()
    return material.public_point


class RawCodec(Codec):
    descriptor = FormatDescriptor(
        Format.RAW, requires_curve=True, private=True, public=True
    )

    def _decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | None,
        key_kind: KeyKind | None,
    ) -> KeyMaterial:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise MalformedInput(f"raw input must be bytes, got {type(data).__name__}")
        assert curve is not None
        return material_from_bytes(bytes(data), provider, curve, key_kind)

    def _encode(self, material: KeyMaterial, key_kind: KeyKind) -> bytes:
        return material_to_bytes(material, key_kind)


class HexCodec(RawCodec):
    descriptor = FormatDescriptor(
        Format.HEX, requires_curve=True, private=True, public=True
    )

    def _decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | None,
        key_kind: KeyKind | None,
    ) -> KeyMaterial:
        text = as_text(data, "hex").strip()
        if text[:2] in ("0x", "0X"):
            text = text[2:]
        if len(text) % 2:
            raise MalformedInput("hex input has odd length")
        if not _HEX_RE.match(text):
            raise MalformedInput("hex input contains non-hex characters or is empty")
        return super()._decode(bytes.fromhex(text), provider, curve, key_kind)

    def _encode(self, material: KeyMaterial, key_kind: KeyKind) -> str:
        return material_to_bytes(material, key_kind).hex()


__all__: tuple[str, ...] = (
    "HexCodec",
    "RawCodec",
    "material_from_bytes",
    "material_to_bytes",
)
