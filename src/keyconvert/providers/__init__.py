"""Cryptographic providers: pyca/cryptography (default) and pure Python."""

from .base import CryptoProvider, RandomBytes
from .pure import PurePythonProvider
from .pyca import PycaProvider


def default_provider() -> CryptoProvider:
    return PycaProvider()


__all__: tuple[str, ...] = (
    "CryptoProvider",
    "PurePythonProvider",
    "PycaProvider",
    "RandomBytes",
    "default_provider",
)
