"""Bitcoin P2PKH addresses: Base58Check(version || hash160(compressed point))."""

from __future__ import annotations

import base58

from ..config import MAINNET, Network
from ..hashes import hash160
from ..material import KeyMaterial


def bitcoin_address(material: KeyMaterial, network: Network = MAINNET) -> str:
    """
    Legacy P2PKH address of a public key.

    Args:
        material: Key material; only the public point is read.
        network: Selects the version byte (0x00 mainnet, 0x6F testnet).

    Returns:
        Base58Check address ("1..." on mainnet, "m..."/"n..." on testnet).
    """
    payload = bytes([network.p2pkh_version]) + hash160(material.compressed_point())
    return base58.b58encode_check(payload).decode("ascii")


__all__: tuple[str, ...] = ("bitcoin_address",)
