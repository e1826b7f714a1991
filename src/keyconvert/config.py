"""
Runtime settings: Bitcoin network version bytes, BIP-39 policy, PKCS#8 password,
SSH comment and peer ID encoding. Loadable from KEYCONVERT_* environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, NamedTuple

from mnemonic import Mnemonic

from .errors import ConfigurationError

BIP39_MODES = ("entropy", "seed")
PEER_ID_ENCODINGS = ("cid", "base58")

_ENV_PREFIX = "KEYCONVERT_"


class Network(NamedTuple):
    name: str
    wif_version: int
    p2pkh_version: int


MAINNET = Network("mainnet", 0x80, 0x00)
TESTNET = Network("testnet", 0xEF, 0x6F)

_NETWORKS = {net.name: net for net in (MAINNET, TESTNET)}


def get_network(name: Network | str) -> Network:
    if isinstance(name, Network):
        return name
    try:
        return _NETWORKS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"unknown network: {name!r}") from None


@dataclass(frozen=True)
class Settings:
    """
    Converter configuration shared by codecs and identifier derivation.

    Attributes:
        network: WIF and P2PKH version bytes.
        bip39_mode: "entropy" (phrase carries the key, reversible) or "seed"
            (PBKDF2 seed then SLIP-0010 master key, import only).
        bip39_passphrase: BIP-39 passphrase, only used in seed mode.
        bip39_language: Wordlist name understood by ``mnemonic``.
        pkcs8_password: Encrypts exported PKCS#8 and decrypts imported PKCS#8.
        ssh_comment: Appended to exported OpenSSH public keys.
        peer_id_encoding: "cid" (CIDv1 base32) or "base58" (legacy multihash).
    """

    network: Network = MAINNET
    bip39_mode: str = "entropy"
    bip39_passphrase: str = field(default="", repr=False)
    bip39_language: str = "english"
    pkcs8_password: bytes | None = field(default=None, repr=False)
    ssh_comment: str | None = None
    peer_id_encoding: str = "cid"

    def __post_init__(self) -> None:
        object.__setattr__(self, "network", get_network(self.network))
        if self.bip39_mode not in BIP39_MODES:
            raise ConfigurationError(f"bip39_mode must be one of {BIP39_MODES}")
        if self.peer_id_encoding not in PEER_ID_ENCODINGS:
            raise ConfigurationError(
                f"peer_id_encoding must be one of {PEER_ID_ENCODINGS}"
            )
        if self.bip39_language not in Mnemonic.list_languages():
            raise ConfigurationError(f"no BIP-39 wordlist for {self.bip39_language!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Settings from KEYCONVERT_* variables; unset variables keep their defaults."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        for key, attr in (
            ("NETWORK", "network"),
            ("BIP39_MODE", "bip39_mode"),
            ("BIP39_PASSPHRASE", "bip39_passphrase"),
            ("BIP39_LANGUAGE", "bip39_language"),
            ("PEER_ID_ENCODING", "peer_id_encoding"),
        ):
            value = env.get(_ENV_PREFIX + key)
            if value is not None:
                kwargs[attr] = value if attr == "bip39_passphrase" else value.strip().lower()
        return cls(**kwargs)  # type: ignore[arg-type]


__all__: tuple[str, ...] = (
    "BIP39_MODES",
    "MAINNET",
    "Network",
    "PEER_ID_ENCODINGS",
    "Settings",
    "TESTNET",
    "get_network",
)
