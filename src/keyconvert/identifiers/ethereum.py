"""Ethereum addresses with the EIP-55 mixed-case checksum."""

from __future__ import annotations

import re

from ..errors import MalformedInput, UnsupportedCurve
from ..hashes import keccak256
from ..material import KeyMaterial

_ADDRESS_RE = re.compile(r"\A(?:0x)?([0-9a-fA-F]{40})\Z")


def to_checksum_address(address: str | bytes) -> str:
    """
    EIP-55 checksum form of an address.

    Args:
        address: 20 raw bytes, or 40 hex chars with optional 0x.

    Returns:
        "0x" plus 40 hex chars; a letter is upper case when the matching
        nibble of keccak256(lowercase hex) is 8 or more.
    """
    if isinstance(address, (bytes, bytearray)):
        if len(address) != 20:
            raise MalformedInput("address must be 20 bytes")
        hex_addr = bytes(address).hex()
    else:
        m = _ADDRESS_RE.match(address)
        if m is None:
            raise MalformedInput(f"not an Ethereum address: {address!r}")
        hex_addr = m.group(1).lower()
    digest = keccak256(hex_addr.encode("ascii")).hex()
    return "0x" + "".join(
        c.upper() if int(h, 16) >= 8 else c for c, h in zip(hex_addr, digest)
    )


def is_checksum_address(address: str) -> bool:
    """True iff the address is 0x-prefixed and its letter case matches EIP-55."""
    if not address.startswith("0x") or _ADDRESS_RE.match(address) is None:
        return False
    return to_checksum_address(address) == address


def ethereum_address(material: KeyMaterial) -> str:
    """Last 20 bytes of keccak256(x || y), EIP-55 formatted. secp256k1 and P-256 only."""
    if not material.spec.is_weierstrass:
        raise UnsupportedCurve(f"Ethereum addresses need an ECDSA key, not {material.curve}")
    x, y = material.coordinates()
    return to_checksum_address(keccak256(x + y)[12:])


__all__: tuple[str, ...] = (
    "ethereum_address",
    "is_checksum_address",
    "to_checksum_address",
)
