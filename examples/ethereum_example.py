#!/usr/bin/env python3
"""Example: JWK in, EIP-55 address and PKCS#8 out; sign and verify through the provider."""

import json

from keyconvert import KeyConverter
from keyconvert.identifiers import is_checksum_address

jwk = {
    "kty": "EC",
    "crv": "secp256k1",
    "x": "W3Ay2bOVXlnf38HVaGDclxSVJGrAJ-qxSGmSEOZmB6w",
    "y": "ao2dR9MTaYSA5WXuHxjploPW7XpvvR6d5o9N6gU4mMA",
    "d": "dwdtCnMYpX08FsFyUbJmRd9ML4frwJkqsXf7pR25LCo",
}

kc = KeyConverter()
kc.import_key(json.dumps(jwk), "jwk")
print("Curve (from JWK):", kc.curve)

address = kc.ethereum_address()
print("Address:", address, "checksum ok:", is_checksum_address(address))
print(kc.export_key("pkcs8", "public"))

sig = kc.sign(b"Hello, Ethereum")
print("Signature (r || s):", sig.hex()[:32] + "...")
print("Verify:", kc.verify(b"Hello, Ethereum", sig))
