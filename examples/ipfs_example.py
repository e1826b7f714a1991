#!/usr/bin/env python3
"""Example: libp2p peer IDs for the same scalar on each curve, CID and legacy base58 forms."""

from keyconvert import KeyConverter, Settings

private_key_hex = "77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a"

for curve in ("secp256k1", "P-256", "Ed25519"):
    kc = KeyConverter(curve)
    kc.import_key(private_key_hex, "hex")
    legacy = KeyConverter(curve, settings=Settings(peer_id_encoding="base58"))
    legacy.import_key(kc.export_key("pkcs8"), "pkcs8")
    print(f"{curve}:")
    print("  peer ID (CIDv1):", kc.ipfs_peer_id())
    print("  peer ID (base58):", legacy.ipfs_peer_id())
    if curve != "secp256k1":
        print("  OpenSSH:", kc.export_key("ssh", "public")[:48] + "...")
