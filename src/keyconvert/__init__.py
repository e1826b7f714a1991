"""
keyconvert: convert secp256k1, P-256 and Ed25519 keys between raw, hex, WIF,
BIP-39, JWK, PKCS#8 and OpenSSH, and derive Bitcoin, Ethereum and libp2p identifiers.
"""

import logging

from .__about__ import __version__
from .codecs import Format, FormatDescriptor, KeyKind, parse_format, sniff_format
from .config import MAINNET, TESTNET, Network, Settings
from .converter import KeyConverter
from .curves import Curve, CurveSpec, describe, resolve
from .errors import (
    ConfigurationError,
    CurveMismatch,
    ExportFailed,
    ImportFailed,
    KeyconvertError,
    MalformedInput,
    NoKeyLoaded,
    UnsupportedCurve,
    UnsupportedKeyKind,
)
from .hashes import hash160, keccak256
from .identifiers import (
    DerivedIdentifier,
    IdentifierKind,
    bitcoin_address,
    ethereum_address,
    ipfs_peer_id,
    to_checksum_address,
)
from .material import KeyMaterial
from .providers import CryptoProvider, PurePythonProvider, PycaProvider, default_provider

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Facade
    "KeyConverter",
    # Curves
    "Curve",
    "CurveSpec",
    "describe",
    "resolve",
    # Key material and providers
    "KeyMaterial",
    "CryptoProvider",
    "PurePythonProvider",
    "PycaProvider",
    "default_provider",
    # Formats
    "Format",
    "FormatDescriptor",
    "KeyKind",
    "parse_format",
    "sniff_format",
    # Identifiers
    "DerivedIdentifier",
    "IdentifierKind",
    "bitcoin_address",
    "ethereum_address",
    "ipfs_peer_id",
    "to_checksum_address",
    # Hashes
    "hash160",
    "keccak256",
    # Configuration
    "MAINNET",
    "TESTNET",
    "Network",
    "Settings",
    # Errors
    "ConfigurationError",
    "CurveMismatch",
    "ExportFailed",
    "ImportFailed",
    "KeyconvertError",
    "MalformedInput",
    "NoKeyLoaded",
    "UnsupportedCurve",
    "UnsupportedKeyKind",
)
