"""
PKCS#8 private keys and SPKI public keys, PEM armored or DER.
ASN.1 handling is left to pyca/cryptography; the algorithm identifier decides the curve.
"""

from __future__ import annotations

from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from ..curves import Curve
from ..errors import MalformedInput, UnsupportedCurve
from ..material import KeyMaterial
from ..providers import CryptoProvider
from ..providers.pyca import key_object, material_from_key
from .base import Codec, Format, FormatDescriptor, KeyKind

_PEM_BEGIN = b"-----BEGIN "

_PLAIN, _ENCRYPTED, _PUBLIC = "plain", "encrypted", "public"


def _der_header(der: bytes, pos: int) -> tuple[int, int, int]:
    """Tag, content offset and content length of the TLV starting at ``pos``."""
    if pos + 2 > len(der):
        raise MalformedInput("DER input is truncated")
    tag, first = der[pos], der[pos + 1]
    if first < 0x80:
        return tag, pos + 2, first
    count = first & 0x7F
    if not 0 < count <= 4 or pos + 2 + count > len(der):
        raise MalformedInput("invalid DER length")
    return tag, pos + 2 + count, int.from_bytes(der[pos + 2 : pos + 2 + count], "big")


def _der_structure(der: bytes) -> str:
    """
    Tell the three top-level key structures apart.

    PrivateKeyInfo opens with an INTEGER version. EncryptedPrivateKeyInfo and
    SubjectPublicKeyInfo both open with an AlgorithmIdentifier SEQUENCE, followed
    by an OCTET STRING and a BIT STRING respectively.
    """
    tag, body, _ = _der_header(der, 0)
    if tag != 0x30:
        raise MalformedInput("DER input is not an ASN.1 SEQUENCE")
    tag, start, length = _der_header(der, body)
    if tag == 0x02:
        return _PLAIN
    if tag == 0x30:
        tag, _, _ = _der_header(der, start + length)
        if tag == 0x04:
            return _ENCRYPTED
        if tag == 0x03:
            return _PUBLIC
    raise MalformedInput("DER input is neither PKCS#8 nor SPKI")


def _pem_label(pem: bytes) -> bytes:
    start = pem.find(_PEM_BEGIN)
    if start < 0:
        raise MalformedInput("missing PEM armor")
    end = pem.find(b"-----", start + len(_PEM_BEGIN))
    if end < 0:
        raise MalformedInput("unterminated PEM armor")
    return pem[start + len(_PEM_BEGIN) : end]


class Pkcs8Codec(Codec):
    descriptor = FormatDescriptor(
        Format.PKCS8, requires_curve=False, private=True, public=True
    )

    def __init__(self, password: bytes | None = None) -> None:
        self.password = password

    def _load(self, data: bytes) -> Any:
        if data.lstrip().startswith(_PEM_BEGIN):
            label = _pem_label(data)
            if label.endswith(b"PUBLIC KEY"):
                return serialization.load_pem_public_key(data)
            password = self.password if label.startswith(b"ENCRYPTED") else None
            return serialization.load_pem_private_key(data, password)
        structure = _der_structure(data)
        if structure == _PUBLIC:
            return serialization.load_der_public_key(data)
        password = self.password if structure == _ENCRYPTED else None
        return serialization.load_der_private_key(data, password)

    def _decode(
        self,
        data: Any,
        provider: CryptoProvider,
        curve: Curve | None,
        key_kind: KeyKind | None,
    ) -> KeyMaterial:
        if isinstance(data, str):
            data = data.encode("ascii", "replace")
        elif isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        elif not isinstance(data, bytes):
            raise MalformedInput(f"pkcs8 input must be PEM text or DER bytes, got {type(data).__name__}")
        try:
            key = self._load(data)
        except UnsupportedAlgorithm as exc:
            raise UnsupportedCurve(f"unsupported key algorithm: {exc}") from exc
        except (ValueError, TypeError) as exc:
            raise MalformedInput(f"invalid PKCS#8/SPKI key: {exc}") from exc
        return material_from_key(key, provider)

    def _encode(self, material: KeyMaterial, key_kind: KeyKind) -> str:
        if key_kind is KeyKind.PUBLIC:
            pem = key_object(material, private=False).public_bytes(
                serialization.Encoding.PEM,
                serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        else:
            if self.password:
                encryption: serialization.KeySerializationEncryption = (
                    serialization.BestAvailableEncryption(self.password)
                )
            else:
                encryption = serialization.NoEncryption()
            pem = key_object(material, private=True).private_bytes(
                serialization.Encoding.PEM,
                serialization.PrivateFormat.PKCS8,
                encryption,
            )
        return pem.decode("ascii")


__all__: tuple[str, ...] = ("Pkcs8Codec",)
