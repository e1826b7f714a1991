"""Identifiers derived from a public key: Bitcoin, Ethereum and libp2p peer IDs."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ..config import Settings
from ..errors import MalformedInput
from ..material import KeyMaterial
from .bitcoin import bitcoin_address
from .ethereum import ethereum_address, is_checksum_address, to_checksum_address
from .libp2p import KeyType, ipfs_peer_id, peer_id_multihash, public_key_proto


class IdentifierKind(str, enum.Enum):
    BITCOIN = "bitcoin"
    ETHEREUM = "ethereum"
    IPFS = "ipfs"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DerivedIdentifier:
    kind: IdentifierKind
    value: str

    def __str__(self) -> str:
        return self.value


def derive(
    kind: IdentifierKind | str, material: KeyMaterial, settings: Settings | None = None
) -> DerivedIdentifier:
    """Compute one identifier from the public point; nothing is cached."""
    try:
        kind = IdentifierKind(kind)
    except ValueError:
        raise MalformedInput(f"unknown identifier kind: {kind!r}") from None
    settings = settings or Settings()
    if kind is IdentifierKind.BITCOIN:
        value = bitcoin_address(material, settings.network)
    elif kind is IdentifierKind.ETHEREUM:
        value = ethereum_address(material)
    else:
        value = ipfs_peer_id(material, settings.peer_id_encoding)
    return DerivedIdentifier(kind, value)


__all__: tuple[str, ...] = (
    "DerivedIdentifier",
    "IdentifierKind",
    "KeyType",
    "bitcoin_address",
    "derive",
    "ethereum_address",
    "ipfs_peer_id",
    "is_checksum_address",
    "peer_id_multihash",
    "public_key_proto",
    "to_checksum_address",
)
