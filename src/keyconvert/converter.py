"""
KeyConverter: import a key in one format, export it in another, derive identifiers.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping

from .codecs import (
    Codec,
    Encoded,
    Format,
    KeyKind,
    build_codecs,
    parse_format,
    sniff_format,
)
from .codecs.raw import material_to_bytes
from .config import Settings
from .curves import Curve, resolve
from .errors import (
    ExportFailed,
    ImportFailed,
    KeyconvertError,
    MalformedInput,
    NoKeyLoaded,
    UnsupportedCurve,
    UnsupportedKeyKind,
)
from .identifiers import (
    DerivedIdentifier,
    IdentifierKind,
    bitcoin_address,
    derive,
    ethereum_address,
    ipfs_peer_id,
)
from .material import KeyMaterial
from .providers import CryptoProvider, RandomBytes, default_provider

logger = logging.getLogger(__name__)


class KeyConverter:
    """
    Holds at most one key and converts it between formats.

    Each successful import replaces the held key; a failed import leaves the
    previous key in place. Instances share nothing and need no locking.

    Args:
        curve: Expected curve. Every import must match it, and formats that
            carry none (raw, hex, bip39) are read on it. When None, imports
            may switch curves and curve-less formats use the held key's curve.
        provider: Crypto provider; defaults to the cryptography backend.
        settings: Network, BIP-39 and output options; defaults to Settings().
        random_bytes: Randomness for ``generate``; defaults to os.urandom.
    """

    def __init__(
        self,
        curve: Curve | str | None = None,
        *,
        provider: CryptoProvider | None = None,
        settings: Settings | None = None,
        random_bytes: RandomBytes | None = None,
    ) -> None:
        self._curve = resolve(curve) if curve is not None else None
        self._provider = provider or default_provider()
        self._settings = settings or Settings()
        self._random_bytes = random_bytes or os.urandom
        self._codecs: Mapping[Format, Codec] = build_codecs(self._settings)
        self._material: KeyMaterial | None = None

    @property
    def curve(self) -> Curve | None:
        """The configured curve, else the curve of the held key."""
        if self._curve is None and self._material is not None:
            return self._material.curve
        return self._curve

    @property
    def material(self) -> KeyMaterial | None:
        return self._material

    @property
    def provider(self) -> CryptoProvider:
        return self._provider

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def loaded(self) -> bool:
        return self._material is not None

    def _require(self) -> KeyMaterial:
        if self._material is None:
            raise NoKeyLoaded("no key has been imported")
        return self._material

    def _load(self, material: KeyMaterial) -> KeyMaterial:
        self._material = material
        return material

    def import_key(
        self, data: Any, fmt: Format | str, key_kind: KeyKind | str | None = None
    ) -> KeyMaterial:
        """
        Decode a key and make it the held key.

        Args:
            data: Encoded key.
            fmt: Format selector ("wif", "raw:private", "auto", ...).
            key_kind: Overrides a kind given in the selector.

        Returns:
            The new KeyMaterial.

        Raises:
            ImportFailed: Wrapping the codec error as ``cause``; the previously
                held key is unchanged.
        """
        label: object = fmt
        try:
            resolved, selector_kind = parse_format(fmt)
            if resolved is None:
                resolved = sniff_format(data)
                logger.debug("detected %s input", resolved)
            label = resolved
            kind = key_kind if key_kind is not None else selector_kind
            codec = self._codecs[resolved]
            curve = self._curve
            if curve is None and codec.descriptor.requires_curve:
                curve = self.curve
            material = codec.decode(data, self._provider, curve, kind)
        except KeyconvertError as exc:
            logger.debug("import from %s failed: %s", label, type(exc).__name__)
            raise ImportFailed(label, exc) from exc
        logger.debug(
            "imported %s key from %s",
            "private" if material.has_private else "public",
            resolved,
        )
        return self._load(material)

    def export_key(
        self, fmt: Format | str, key_kind: KeyKind | str | None = None
    ) -> Encoded:
        """
        Encode the held key.

        Args:
            fmt: Format name, optionally with ":private" / ":public".
            key_kind: Kind to export; defaults to the selector's kind, then private.

        Raises:
            NoKeyLoaded: If nothing has been imported.
            ExportFailed: Wrapping the codec error as ``cause``.
        """
        material = self._require()
        label: object = fmt
        try:
            resolved, selector_kind = parse_format(fmt)
            if resolved is None:
                raise MalformedInput("export needs an explicit format")
            label = resolved
            kind = key_kind or selector_kind or KeyKind.PRIVATE
            result = self._codecs[resolved].encode(material, kind)
        except KeyconvertError as exc:
            logger.debug("export to %s failed: %s", label, type(exc).__name__)
            raise ExportFailed(label, exc) from exc
        logger.debug("exported %s key to %s", kind, resolved)
        return result

    def generate(self) -> KeyMaterial:
        """Create a fresh private key on the configured curve and hold it."""
        curve = self.curve
        if curve is None:
            raise UnsupportedCurve("generate needs a curve; pass one to KeyConverter")
        scalar = self._provider.generate_private_key(curve, self._random_bytes)
        logger.debug("generated %s key", curve)
        return self._load(KeyMaterial.from_private(curve, scalar, self._provider))

    def private_key_hex(self) -> str:
        material = self._require()
        if not material.has_private:
            raise UnsupportedKeyKind("the held key has no private half")
        return material_to_bytes(material, KeyKind.PRIVATE).hex()

    def public_key_hex(self, compressed: bool | None = None) -> str:
        """Hex public point; compressed unless the key was imported uncompressed."""
        material = self._require()
        if compressed is not None:
            material = material.with_compression(compressed)
        return material_to_bytes(material, KeyKind.PUBLIC).hex()

    def bitcoin_address(self) -> str:
        return bitcoin_address(self._require(), self._settings.network)

    def ethereum_address(self) -> str:
        return ethereum_address(self._require())

    def ipfs_peer_id(self) -> str:
        return ipfs_peer_id(self._require(), self._settings.peer_id_encoding)

    def identifier(self, kind: IdentifierKind | str) -> DerivedIdentifier:
        return derive(kind, self._require(), self._settings)

    def sign(self, message: bytes) -> bytes:
        """Sign with the held private key: 64-byte r || s for ECDSA, RFC 8032 for Ed25519."""
        material = self._require()
        if material.private_scalar is None:
            raise UnsupportedKeyKind("the held key has no private half")
        return self._provider.sign(material.curve, material.private_scalar, message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        material = self._require()
        return self._provider.verify(material.curve, material.public_point, message, signature)


__all__: tuple[str, ...] = ("KeyConverter",)
