"""
libp2p peer IDs.

The public key is wrapped in the libp2p ``PublicKey`` protobuf
(field 1 ``Type`` varint, field 2 ``Data`` bytes), multihashed (identity when the
message is at most 42 bytes, sha2-256 otherwise) and printed either as a CIDv1
with the libp2p-key codec in base32, or as the legacy base58btc multihash.
"""

from __future__ import annotations

import enum
import hashlib

import base58
import multihash
import varint
from cid import make_cid
from cryptography.hazmat.primitives import serialization

from ..curves import Curve
from ..material import KeyMaterial
from ..providers.pyca import public_key_object

_MAX_INLINE_KEY_LENGTH = 42
_IDENTITY = 0x00
_SHA2_256 = 0x12

# protobuf wire tags: (field << 3) | wire type
_TYPE_TAG = b"\x08"
_DATA_TAG = b"\x12"


class KeyType(enum.IntEnum):
    RSA = 0
    ED25519 = 1
    SECP256K1 = 2
    ECDSA = 3


_KEY_TYPES = {
    Curve.ED25519: KeyType.ED25519,
    Curve.SECP256K1: KeyType.SECP256K1,
    Curve.P256: KeyType.ECDSA,
}


def _key_data(material: KeyMaterial) -> bytes:
    if material.curve is Curve.P256:
        # libp2p ECDSA keys are PKIX (SubjectPublicKeyInfo) DER
        return public_key_object(material.curve, material.public_point).public_bytes(
            serialization.Encoding.DER,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    return material.compressed_point()


def public_key_proto(material: KeyMaterial) -> bytes:
    """Deterministic protobuf encoding of the libp2p PublicKey message."""
    data = _key_data(material)
    return (
        _TYPE_TAG
        + varint.encode(int(_KEY_TYPES[material.curve]))
        + _DATA_TAG
        + varint.encode(len(data))
        + data
    )


def peer_id_multihash(material: KeyMaterial) -> bytes:
    proto = public_key_proto(material)
    if len(proto) <= _MAX_INLINE_KEY_LENGTH:
        return multihash.encode(proto, _IDENTITY)
    return multihash.encode(hashlib.sha256(proto).digest(), _SHA2_256)


def ipfs_peer_id(material: KeyMaterial, encoding: str = "cid") -> str:
    """
    Textual peer ID.

    Args:
        material: Key material; only the public point is read.
        encoding: "cid" for CIDv1 base32 ("bafz..."), "base58" for the legacy
            multihash ("12D3Koo...", "16Uiu2...", "Qm...").

    Returns:
        Peer ID string.
    """
    mh = peer_id_multihash(material)
    if encoding == "base58":
        return base58.b58encode(mh).decode("ascii")
    return make_cid(1, "libp2p-key", mh).encode("base32").decode("ascii")


__all__: tuple[str, ...] = (
    "KeyType",
    "ipfs_peer_id",
    "peer_id_multihash",
    "public_key_proto",
)
