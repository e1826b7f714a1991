"""KeyConverter: six-format equivalence, atomic imports, export policy and logging."""

from __future__ import annotations

import logging

import pytest

from keyconvert import (
    Curve,
    ExportFailed,
    ImportFailed,
    KeyConverter,
    NoKeyLoaded,
    PurePythonProvider,
    Settings,
)
from keyconvert.config import TESTNET
from keyconvert.errors import (
    CurveMismatch,
    MalformedInput,
    UnsupportedCurve,
    UnsupportedKeyKind,
)

from .vectors import (
    JWK_D,
    MNEMONIC,
    PRIVATE_KEY_HEX,
    VECTORS,
    WIF_COMPRESSED,
    WIF_TESTNET,
)

SCALAR = bytes.fromhex(PRIVATE_KEY_HEX)

SEED_MODE_SECP256K1_BITCOIN = "1F6kvM4kXSYKcnnPZiakqPib4hoSX5ydoY"


def _inputs(vector) -> list[tuple[object, str]]:
    return [
        (SCALAR, "raw:private"),
        (MNEMONIC, "bip39"),
        (WIF_COMPRESSED, "wif"),
        (PRIVATE_KEY_HEX, "hex"),
        ({**vector["jwk"], "d": JWK_D}, "jwk"),
        (vector["pkcs8"], "pkcs8"),
    ]


def _snapshot(kc: KeyConverter) -> tuple:
    return (
        kc.private_key_hex(),
        kc.public_key_hex(),
        kc.export_key("bip39", "private"),
        kc.export_key("wif", "private"),
        kc.export_key("jwk", "private"),
        kc.export_key("pkcs8", "public"),
        kc.bitcoin_address(),
        kc.ethereum_address() if kc.curve is not Curve.ED25519 else None,
        kc.ipfs_peer_id(),
    )


def test_fixed_secp256k1_vector() -> None:
    vector = VECTORS[Curve.SECP256K1]
    kc = KeyConverter(Curve.SECP256K1)
    kc.import_key(SCALAR, "raw:private")
    assert kc.private_key_hex() == PRIVATE_KEY_HEX
    assert kc.export_key("hex") == PRIVATE_KEY_HEX
    assert kc.export_key("wif") == WIF_COMPRESSED
    assert kc.export_key("jwk") == {**vector["jwk"], "d": JWK_D}
    assert kc.export_key("bip39") == MNEMONIC
    assert kc.public_key_hex() == vector["public_compressed"]
    assert kc.public_key_hex(compressed=False) == vector["public_uncompressed"]
    assert kc.bitcoin_address() == vector["bitcoin"]
    assert kc.ethereum_address() == vector["ethereum"]
    assert kc.ipfs_peer_id() == vector["peer_id"]


def test_six_imports_agree(curve, vector) -> None:
    snapshots = []
    for data, fmt in _inputs(vector):
        kc = KeyConverter(curve)
        kc.import_key(data, fmt)
        snapshots.append(_snapshot(kc))
    first = snapshots[0]
    assert all(s == first for s in snapshots[1:])
    assert first[0] == PRIVATE_KEY_HEX
    assert first[2] == MNEMONIC
    assert first[5] == vector["spki"]
    assert first[6] == vector["bitcoin"]
    assert first[7] == vector["ethereum"]
    assert first[8] == vector["peer_id"]


def test_pure_provider_matches(curve, vector) -> None:
    kc = KeyConverter(curve, provider=PurePythonProvider())
    kc.import_key(PRIVATE_KEY_HEX, "hex")
    assert kc.public_key_hex() == vector["public_compressed"]
    assert kc.ipfs_peer_id() == vector["peer_id"]


PRIVATE_FORMATS = ["raw", "hex", "wif", "bip39", "jwk", "pkcs8"]


@pytest.mark.parametrize("target", PRIVATE_FORMATS + ["ssh"])
@pytest.mark.parametrize("source", PRIVATE_FORMATS)
def test_round_trip_between_formats(curve, source, target) -> None:
    if target == "ssh" and curve is Curve.SECP256K1:
        pytest.skip("OpenSSH has no secp256k1 key type")
    origin = KeyConverter(curve)
    origin.import_key(SCALAR, "raw")
    first = KeyConverter(curve)
    first.import_key(origin.export_key(source), source)
    second = KeyConverter(curve)
    second.import_key(first.export_key(target), target)
    assert second.material == first.material == origin.material


def test_public_round_trip(curve) -> None:
    kc = KeyConverter(curve)
    kc.import_key(SCALAR, "raw")
    for fmt in ("raw", "hex", "jwk", "pkcs8") + (("ssh",) if curve is not Curve.SECP256K1 else ()):
        public = KeyConverter(curve)
        public.import_key(kc.export_key(fmt, "public"), fmt, "public")
        assert not public.material.has_private
        assert public.material == kc.material.public_only()
        assert public.ipfs_peer_id() == kc.ipfs_peer_id()


def test_failed_import_keeps_previous_key() -> None:
    kc = KeyConverter(Curve.SECP256K1)
    kc.import_key(WIF_COMPRESSED, "wif")
    before = kc.material
    corrupted = WIF_COMPRESSED[:-1] + ("T" if WIF_COMPRESSED[-1] != "T" else "U")
    with pytest.raises(ImportFailed) as exc_info:
        kc.import_key(corrupted, "wif")
    assert isinstance(exc_info.value.cause, MalformedInput)
    assert exc_info.value.__cause__ is exc_info.value.cause
    assert exc_info.value.format == "wif"
    assert kc.material is before
    assert kc.bitcoin_address() == VECTORS[Curve.SECP256K1]["bitcoin"]


def test_import_replaces_key() -> None:
    kc = KeyConverter(Curve.P256)
    kc.import_key(SCALAR, "raw")
    kc.import_key("00" * 31 + "02", "hex")
    assert kc.private_key_hex() == "00" * 31 + "02"


def test_import_curve_mismatch_is_wrapped() -> None:
    kc = KeyConverter(Curve.SECP256K1)
    with pytest.raises(ImportFailed) as exc_info:
        kc.import_key(VECTORS[Curve.P256]["pkcs8"], "pkcs8")
    assert isinstance(exc_info.value.cause, CurveMismatch)
    assert not kc.loaded


def test_unknown_format() -> None:
    with pytest.raises(ImportFailed) as exc_info:
        KeyConverter(Curve.P256).import_key(SCALAR, "der")
    assert isinstance(exc_info.value.cause, MalformedInput)


def test_curve_follows_held_key_when_unconfigured() -> None:
    kc = KeyConverter()
    assert kc.curve is None and not kc.loaded
    kc.import_key(VECTORS[Curve.ED25519]["pkcs8"], "pkcs8")
    assert kc.curve is Curve.ED25519
    kc.import_key(PRIVATE_KEY_HEX, "hex")
    assert kc.material.curve is Curve.ED25519


def test_unconfigured_converter_switches_curves() -> None:
    kc = KeyConverter()
    kc.import_key(VECTORS[Curve.SECP256K1]["pkcs8"], "pkcs8")
    kc.import_key(VECTORS[Curve.P256]["pkcs8"], "pkcs8")
    assert kc.curve is Curve.P256
    assert kc.public_key_hex() == VECTORS[Curve.P256]["public_compressed"]
    kc.import_key(VECTORS[Curve.ED25519]["jwk"], "jwk")
    assert kc.curve is Curve.ED25519 and not kc.material.has_private
    kc.import_key(PRIVATE_KEY_HEX, "hex")
    assert kc.material.curve is Curve.ED25519


def test_raw_import_without_curve_fails() -> None:
    with pytest.raises(ImportFailed) as exc_info:
        KeyConverter().import_key(SCALAR, "raw")
    assert isinstance(exc_info.value.cause, UnsupportedCurve)


@pytest.mark.parametrize(
    "data",
    [
        SCALAR,
        PRIVATE_KEY_HEX,
        WIF_COMPRESSED,
        MNEMONIC,
        {**VECTORS[Curve.P256]["jwk"], "d": JWK_D},
        VECTORS[Curve.P256]["pkcs8"],
    ],
)
def test_auto_detection(data) -> None:
    kc = KeyConverter(Curve.P256)
    kc.import_key(data, "auto")
    assert kc.private_key_hex() == PRIVATE_KEY_HEX


def test_auto_detection_failure() -> None:
    with pytest.raises(ImportFailed):
        KeyConverter(Curve.P256).import_key("???", "auto")


def test_empty_converter() -> None:
    kc = KeyConverter(Curve.SECP256K1)
    for call in (
        kc.private_key_hex,
        kc.public_key_hex,
        kc.bitcoin_address,
        kc.ethereum_address,
        kc.ipfs_peer_id,
        lambda: kc.export_key("hex"),
        lambda: kc.identifier("bitcoin"),
        lambda: kc.sign(b"x"),
        lambda: kc.verify(b"x", bytes(64)),
    ):
        with pytest.raises(NoKeyLoaded):
            call()


def test_public_only_key() -> None:
    kc = KeyConverter(Curve.SECP256K1)
    kc.import_key(VECTORS[Curve.SECP256K1]["spki"], "pkcs8")
    assert kc.bitcoin_address() == VECTORS[Curve.SECP256K1]["bitcoin"]
    with pytest.raises(UnsupportedKeyKind):
        kc.private_key_hex()
    with pytest.raises(ExportFailed) as exc_info:
        kc.export_key("wif")
    assert isinstance(exc_info.value.cause, UnsupportedKeyKind)
    assert kc.export_key("hex:public") == VECTORS[Curve.SECP256K1]["public_compressed"]


def test_bip39_export_entropy_mode_returns_original_phrase(curve) -> None:
    kc = KeyConverter(curve)
    kc.import_key(SCALAR, "raw")
    assert kc.export_key("bip39", "private") == MNEMONIC


def test_bip39_export_seed_mode_fails(curve) -> None:
    kc = KeyConverter(curve, settings=Settings(bip39_mode="seed"))
    kc.import_key(SCALAR, "raw")
    with pytest.raises(ExportFailed) as exc_info:
        kc.export_key("bip39", "private")
    assert isinstance(exc_info.value.cause, UnsupportedKeyKind)
    # deterministic: same failure again
    with pytest.raises(ExportFailed):
        kc.export_key("bip39", "private")


def test_bip39_seed_mode_import() -> None:
    kc = KeyConverter(Curve.SECP256K1, settings=Settings(bip39_mode="seed"))
    kc.import_key(MNEMONIC, "bip39")
    assert kc.bitcoin_address() == SEED_MODE_SECP256K1_BITCOIN


def test_testnet_settings() -> None:
    kc = KeyConverter(Curve.SECP256K1, settings=Settings(network=TESTNET))
    kc.import_key(WIF_TESTNET, "wif")
    assert kc.export_key("wif") == WIF_TESTNET
    assert kc.bitcoin_address() == VECTORS[Curve.SECP256K1]["bitcoin_testnet"]


def test_identifier(curve, vector) -> None:
    kc = KeyConverter(curve)
    kc.import_key(SCALAR, "raw")
    assert kc.identifier("ipfs").value == vector["peer_id"]
    assert kc.identifier("bitcoin").value == vector["bitcoin"]
    with pytest.raises(MalformedInput):
        kc.identifier("solana")


def test_ethereum_on_ed25519() -> None:
    kc = KeyConverter(Curve.ED25519)
    kc.import_key(SCALAR, "raw")
    with pytest.raises(UnsupportedCurve):
        kc.ethereum_address()


def test_generate_with_injected_randomness(curve) -> None:
    kc = KeyConverter(curve, random_bytes=lambda n: SCALAR[:n])
    material = kc.generate()
    assert material.private_scalar == SCALAR
    assert kc.material is material


def test_generate_needs_curve() -> None:
    with pytest.raises(UnsupportedCurve):
        KeyConverter().generate()


def test_sign_and_verify(curve) -> None:
    kc = KeyConverter(curve)
    kc.import_key(SCALAR, "raw")
    sig = kc.sign(b"certificate request")
    assert kc.verify(b"certificate request", sig)
    assert not kc.verify(b"other", sig)
    public = KeyConverter(curve)
    public.import_key(kc.export_key("pkcs8", "public"), "pkcs8")
    assert public.verify(b"certificate request", sig)
    with pytest.raises(UnsupportedKeyKind):
        public.sign(b"x")


def test_properties() -> None:
    settings = Settings(peer_id_encoding="base58")
    provider = PurePythonProvider()
    kc = KeyConverter("secp256r1", provider=provider, settings=settings)
    assert kc.curve is Curve.P256
    assert kc.provider is provider
    assert kc.settings is settings


def test_logging_never_leaks_secrets(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="keyconvert")
    kc = KeyConverter(Curve.SECP256K1)
    kc.import_key(MNEMONIC, "bip39")
    kc.export_key("wif")
    kc.export_key("pkcs8")
    with pytest.raises(ImportFailed):
        kc.import_key("0x123", "hex")
    assert "bip39" in caplog.text and "MalformedInput" in caplog.text
    for secret in (PRIVATE_KEY_HEX, WIF_COMPRESSED, "jacket", "PRIVATE KEY"):
        assert secret not in caplog.text
