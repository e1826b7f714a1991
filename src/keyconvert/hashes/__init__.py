"""Hash functions: Keccak-256, SHA-256, HASH160."""

from .digests import hash160, ripemd160, sha256
from .keccak import keccak256

__all__: tuple[str, ...] = ("hash160", "keccak256", "ripemd160", "sha256")
