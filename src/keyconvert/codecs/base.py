"""
Codec contract shared by every format: a template ``decode``/``encode`` that
enforces curve and key-kind constraints around a per-format arm.
"""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Any, Dict, Union

from ..curves import Curve, resolve
from ..errors import CurveMismatch, MalformedInput, UnsupportedCurve, UnsupportedKeyKind
from ..material import KeyMaterial
from ..providers import CryptoProvider

Encoded = Union[str, bytes, Dict[str, str]]


class Format(str, enum.Enum):
    RAW = "raw"
    HEX = "hex"
    WIF = "wif"
    BIP39 = "bip39"
    JWK = "jwk"
    PKCS8 = "pkcs8"
    SSH = "ssh"

    def __str__(self) -> str:
        return self.value


class KeyKind(str, enum.Enum):
    PRIVATE = "private"
    PUBLIC = "public"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FormatDescriptor:
    """What a format carries: curve tag, private and/or public material, and an encoder."""

    format: Format
    requires_curve: bool
    private: bool
    public: bool
    bidirectional: bool = True


def parse_key_kind(kind: KeyKind | str | None) -> KeyKind | None:
    if kind is None or isinstance(kind, KeyKind):
        return kind
    try:
        return KeyKind(kind.strip().lower())
    except (AttributeError, ValueError):
        raise UnsupportedKeyKind(f"unknown key kind: {kind!r}") from None


def as_text(data: Any, what: str) -> str:
    """Accept str or ASCII bytes for text formats."""
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            return bytes(data).decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedInput(f"{what} input is not ASCII text") from exc
    raise MalformedInput(f"{what} input must be text, got {type(data).__name__}")


class Codec(abc.ABC):
    descriptor: FormatDescriptor

    @property
    def format(self) -> Format:
        return self.descriptor.format

    def decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | str | None = None,
        key_kind: KeyKind | str | None = None,
    ) -> KeyMaterial:
        """
        Parse external data into key material.

        Args:
            data: Encoded key (text, bytes or, for JWK, a mapping).
            provider: Provider used to derive and validate points.
            curve: Expected curve; required by formats with no curve tag.
            key_kind: PUBLIC strips the private half; PRIVATE demands one.
                None keeps whatever the input holds.

        Returns:
            Decoded KeyMaterial.

        Raises:
            MalformedInput: If the data cannot be parsed.
            CurveMismatch: If the decoded curve differs from ``curve``.
            UnsupportedCurve: If the key's curve is not registered, or the
                format needs a curve and none was given.
            UnsupportedKeyKind: If PRIVATE was requested from a public key.
        """
        expected = resolve(curve) if curve is not None else None
        kind = parse_key_kind(key_kind)
        if self.descriptor.requires_curve and expected is None:
            raise UnsupportedCurve(f"{self.format} input carries no curve; pass one explicitly")
        material = self._decode(data, provider, expected, kind)
        if expected is not None and material.curve is not expected:
            raise CurveMismatch(expected, material.curve)
        if kind is KeyKind.PUBLIC:
            return material.public_only()
        if kind is KeyKind.PRIVATE and not material.has_private:
            raise UnsupportedKeyKind(f"{self.format} input holds no private key")
        return material

    def encode(self, material: KeyMaterial, key_kind: KeyKind | str = KeyKind.PRIVATE) -> Encoded:
        """
        Serialize key material.

        Raises:
            UnsupportedKeyKind: If the format is import-only, cannot carry the
                requested kind, or a private export has no private half.
        """
        kind = parse_key_kind(key_kind) or KeyKind.PRIVATE
        desc = self.descriptor
        if not desc.bidirectional:
            raise UnsupportedKeyKind(f"{self.format} is import-only in this configuration")
        if (kind is KeyKind.PRIVATE and not desc.private) or (
            kind is KeyKind.PUBLIC and not desc.public
        ):
            raise UnsupportedKeyKind(f"{self.format} cannot carry a {kind} key")
        if kind is KeyKind.PRIVATE and not material.has_private:
            raise UnsupportedKeyKind("no private key to export")
        return self._encode(material, kind)

    @abc.abstractmethod
    def _decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | None,
        key_kind: KeyKind | None,
    ) -> KeyMaterial:
        ...

    @abc.abstractmethod
    def _encode(self, material: KeyMaterial, key_kind: KeyKind) -> Encoded:
        ...


__all__: tuple[str, ...] = (
    "Codec",
    "Encoded",
    "Format",
    "FormatDescriptor",
    "KeyKind",
    "as_text",
    "parse_key_kind",
)
