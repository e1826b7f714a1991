#!/usr/bin/env python3
"""Example: one secp256k1 key as WIF, hex and BIP-39, with its mainnet and testnet addresses."""

from keyconvert import TESTNET, KeyConverter, Settings

wif = "L1D63LVDFte6QfC4SHt1igs6hPFGWtKhd1pJX9EyFvisvGngKvSS"

kc = KeyConverter("secp256k1")
kc.import_key(wif, "wif")
print("Private key (hex):", kc.private_key_hex()[:16] + "...")
print("Public key (compressed):", kc.public_key_hex())
print("Mnemonic:", " ".join(kc.export_key("bip39").split()[:3]) + " ...")
print("Address (mainnet):", kc.bitcoin_address())

testnet = KeyConverter("secp256k1", settings=Settings(network=TESTNET))
testnet.import_key(kc.private_key_hex(), "hex")
print("WIF (testnet):", testnet.export_key("wif"))
print("Address (testnet):", testnet.bitcoin_address())
