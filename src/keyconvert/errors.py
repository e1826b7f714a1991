"""
Error hierarchy. Validation failures subclass ValueError; the facade wraps codec
errors in ImportFailed / ExportFailed with the original error as ``cause``.
"""

from __future__ import annotations


class KeyconvertError(Exception):
    """Base class for every error raised by keyconvert."""


class UnsupportedCurve(KeyconvertError, ValueError):
    """Curve identifier is not registered, or the operation has no meaning on it."""


class CurveMismatch(KeyconvertError, ValueError):
    """Decoded key is on a different curve than the one the caller expected."""

    def __init__(self, expected: object, actual: object) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected a {expected} key, got {actual}")


class MalformedInput(KeyconvertError, ValueError):
    """Input could not be parsed: bad checksum, alphabet, armor, length or structure."""


class UnsupportedKeyKind(KeyconvertError, ValueError):
    """Requested private/public kind is not held by the key or not carried by the format."""


class ConfigurationError(KeyconvertError, ValueError):
    """Invalid settings value."""


class NoKeyLoaded(KeyconvertError):
    """Operation needs key material but nothing has been imported yet."""


class _WrappedError(KeyconvertError):
    action = ""

    def __init__(self, fmt: object, cause: BaseException) -> None:
        self.format = fmt
        self.cause = cause
        super().__init__(f"{self.action} {fmt} failed: {cause}")


class ImportFailed(_WrappedError):
    """Decoding through a codec failed; ``cause`` holds the codec error."""

    action = "import from"


class ExportFailed(_WrappedError):
    """Encoding through a codec failed; ``cause`` holds the codec error."""

    action = "export to"


__all__: tuple[str, ...] = (
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
